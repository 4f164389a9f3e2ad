"""
Row and column touch summaries.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from celldiff.engine.address import split_address
from celldiff.engine.compare import CellDiff, group_by_sheet

DEFAULT_TOP_N = 10


@dataclass
class TouchSummary:
    """
    How many diffs fall on each row and column of one sheet.

    Rows are keyed by their displayed (1-based) number, columns by letters.
    Both dicts keep first-occurrence order.
    """
    sheet: str
    rows: Dict[int, int] = field(default_factory=dict)
    columns: Dict[str, int] = field(default_factory=dict)

    def add(self, address: str) -> None:
        col, row = split_address(address)
        self.rows[row] = self.rows.get(row, 0) + 1
        self.columns[col] = self.columns.get(col, 0) + 1

    @property
    def total(self) -> int:
        return sum(self.rows.values())

    def top_rows(self, n: int = DEFAULT_TOP_N) -> List[Tuple[int, int]]:
        """Most-touched rows, highest count first; ties keep first occurrence."""
        return _top(self.rows, n)

    def top_columns(self, n: int = DEFAULT_TOP_N) -> List[Tuple[str, int]]:
        """Most-touched columns, highest count first; ties keep first occurrence."""
        return _top(self.columns, n)


def _top(counts: Dict, n: int) -> List[Tuple]:
    # sorted() is stable, so equal counts stay in insertion order
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)[:max(n, 0)]


def summarize(diffs: Iterable[CellDiff], sheet: str) -> TouchSummary:
    """
    Summarize the diffs of one sheet.

    Args:
        diffs: Any DiffSet; diffs on other sheets are ignored
        sheet: Sheet to summarize

    Returns:
        TouchSummary for the sheet
    """
    summary = TouchSummary(sheet)
    for d in diffs:
        if d.sheet == sheet:
            summary.add(d.address)
    return summary


def summarize_all(diffs: Iterable[CellDiff]) -> Dict[str, TouchSummary]:
    """TouchSummary for every sheet that has diffs."""
    return {
        sheet: summarize(sheet_diffs, sheet)
        for sheet, sheet_diffs in group_by_sheet(diffs).items()
    }
