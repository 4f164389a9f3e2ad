"""
Snapshot construction.

A snapshot maps each sheet name to a sparse CellMap of address -> normalized
text. Only cells holding a value are present.
"""
from enum import Enum
from typing import Dict, Optional
import logging

from celldiff.engine.address import decode_cell, encode_cell, parse_range, sort_key
from celldiff.engine.values import normalize_cell_value
from celldiff.engine.workbook import WorkbookInterface

logger = logging.getLogger(__name__)

CellMap = Dict[str, str]
Snapshot = Dict[str, CellMap]


class SnapshotState(str, Enum):
    """What one side of a comparison holds."""
    MISSING = "missing"
    EMPTY = "empty"
    POPULATED = "populated"


def build_snapshot(workbook: Optional[WorkbookInterface]) -> Snapshot:
    """
    Build a snapshot from a parsed workbook.

    Each sheet is scanned within its declared range. A sheet without a
    declared range falls back to the workbook's defined-cell iteration when
    available, and to the single cell A1 otherwise.

    Args:
        workbook: Parsed workbook, or None for an absent workbook

    Returns:
        Snapshot (empty dict when workbook is None)
    """
    if workbook is None:
        return {}

    snapshot: Snapshot = {}
    for sheet in workbook.sheet_names:
        snapshot[sheet] = _build_cell_map(workbook, sheet)
        logger.debug(f"Sheet {sheet!r}: {len(snapshot[sheet])} populated cell(s)")

    return snapshot


def _build_cell_map(workbook: WorkbookInterface, sheet: str) -> CellMap:
    cells: CellMap = {}
    ref = workbook.declared_range(sheet)

    if not ref:
        defined = workbook.iter_defined_cells(sheet)
        if defined is not None:
            # Canonical addresses in row-major order, as a range scan yields them
            canonical = {}
            for address, raw in defined:
                canonical[encode_cell(*decode_cell(address))] = raw
            for address in sorted(canonical, key=sort_key):
                text = normalize_cell_value(canonical[address])
                if text is not None:
                    cells[address] = text
            return cells

    bounds = parse_range(ref)
    logger.debug(f"Sheet {sheet!r}: scanning {bounds.row_count}x{bounds.col_count} range")
    for row in range(bounds.row_start, bounds.row_end + 1):
        for col in range(bounds.col_start, bounds.col_end + 1):
            address = encode_cell(row, col)
            text = normalize_cell_value(workbook.cell_value(sheet, address))
            if text is not None:
                cells[address] = text

    return cells


def snapshot_state(snapshot: Snapshot) -> SnapshotState:
    """EMPTY when no sheet has a populated cell, POPULATED otherwise."""
    if any(snapshot.values()):
        return SnapshotState.POPULATED
    return SnapshotState.EMPTY


def count_cells(snapshot: Snapshot) -> int:
    """Total populated cells across all sheets."""
    return sum(len(cells) for cells in snapshot.values())
