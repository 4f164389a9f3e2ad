"""Cell diff engine - addresses, snapshots, comparison and summaries"""

from .address import RangeBounds, encode_cell, decode_cell, parse_range, column_letter, column_index
from .values import CellValue, ValueKind, normalize_cell_value
from .workbook import WorkbookInterface, OpenpyxlWorkbook, load_workbook_bytes
from .snapshot import Snapshot, CellMap, SnapshotState, build_snapshot, snapshot_state
from .compare import CellDiff, ChangeKind, DiffSet, diff_snapshots, group_by_sheet
from .summary import TouchSummary, summarize, summarize_all

__all__ = [
    'RangeBounds', 'encode_cell', 'decode_cell', 'parse_range', 'column_letter', 'column_index',
    'CellValue', 'ValueKind', 'normalize_cell_value',
    'WorkbookInterface', 'OpenpyxlWorkbook', 'load_workbook_bytes',
    'Snapshot', 'CellMap', 'SnapshotState', 'build_snapshot', 'snapshot_state',
    'CellDiff', 'ChangeKind', 'DiffSet', 'diff_snapshots', 'group_by_sheet',
    'TouchSummary', 'summarize', 'summarize_all',
]
