"""
Cell-level comparison of two snapshots.
Detects added, removed, and changed cells per sheet.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional
import logging

from celldiff.engine.snapshot import CellMap, Snapshot

logger = logging.getLogger(__name__)


class ChangeKind(str, Enum):
    """Kind of cell change."""
    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"


@dataclass(frozen=True)
class CellDiff:
    """
    One cell-level difference.

    ADDED carries only `after`, REMOVED only `before`, CHANGED both.
    """
    sheet: str
    address: str
    kind: ChangeKind
    before: Optional[str] = None
    after: Optional[str] = None

    @property
    def ref(self) -> str:
        """Sheet-qualified reference, e.g. Sheet1!A1."""
        return f"{self.sheet}!{self.address}"

    def to_dict(self) -> Dict[str, str]:
        data = {
            "sheet": self.sheet,
            "address": self.address,
            "kind": self.kind.value,
        }
        if self.before is not None:
            data["before"] = self.before
        if self.after is not None:
            data["after"] = self.after
        return data


DiffSet = List[CellDiff]


def _ordered_union(first: Iterable[str], second: Iterable[str]) -> List[str]:
    """Keys of first, then keys of second not already seen."""
    return list(dict.fromkeys([*first, *second]))


def diff_cell_maps(sheet: str, before: CellMap, after: CellMap) -> DiffSet:
    """
    Compare the cell maps of one sheet.

    Args:
        sheet: Sheet name recorded on each diff
        before: Cells on the before side
        after: Cells on the after side

    Returns:
        Diffs in before-map order, followed by cells only present after
    """
    diffs: DiffSet = []

    for address in _ordered_union(before, after):
        old = before.get(address)
        new = after.get(address)

        if old is None and new is not None:
            diffs.append(CellDiff(sheet, address, ChangeKind.ADDED, after=new))
        elif old is not None and new is None:
            diffs.append(CellDiff(sheet, address, ChangeKind.REMOVED, before=old))
        elif old != new:
            diffs.append(CellDiff(sheet, address, ChangeKind.CHANGED, before=old, after=new))

    return diffs


def diff_snapshots(before: Snapshot, after: Snapshot) -> DiffSet:
    """
    Compare two snapshots cell by cell.

    A sheet present on one side only is not special-cased: each of its
    cells shows up as added or removed.

    Args:
        before: Snapshot of the earlier version
        after: Snapshot of the later version

    Returns:
        DiffSet ordered by sheet (before's sheets first), then by address
    """
    diffs: DiffSet = []

    for sheet in _ordered_union(before, after):
        sheet_diffs = diff_cell_maps(sheet, before.get(sheet, {}), after.get(sheet, {}))
        if sheet_diffs:
            logger.debug(f"Sheet {sheet!r}: {len(sheet_diffs)} changed cell(s)")
        diffs.extend(sheet_diffs)

    return diffs


def group_by_sheet(diffs: Iterable[CellDiff]) -> Dict[str, DiffSet]:
    """Group diffs by sheet, keeping first-seen sheet order and diff order."""
    grouped: Dict[str, DiffSet] = {}
    for d in diffs:
        grouped.setdefault(d.sheet, []).append(d)
    return grouped


def count_by_kind(diffs: Iterable[CellDiff]) -> Dict[str, int]:
    """Number of diffs per change kind."""
    counts = {kind.value: 0 for kind in ChangeKind}
    for d in diffs:
        counts[d.kind.value] += 1
    return counts
