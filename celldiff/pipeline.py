"""
Pipeline - compare files between two snapshot sources

For each file:
1. Read both sides from their sources (a missing side is recorded, not guessed)
2. Parse present sides into workbooks
3. Build snapshots and classify each side as MISSING, EMPTY or POPULATED
4. Decide whole-file status, then diff cells when both sides exist
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from celldiff.engine.compare import DiffSet, diff_snapshots, group_by_sheet
from celldiff.engine.snapshot import Snapshot, SnapshotState, build_snapshot, count_cells, snapshot_state
from celldiff.engine.workbook import WorkbookInterface, load_workbook_bytes
from celldiff.exceptions import SnapshotUnavailable
from celldiff.sources.base import SnapshotSource

logger = logging.getLogger(__name__)

WorkbookParser = Callable[[bytes, str], WorkbookInterface]


class FileStatus(str, Enum):
    """Outcome of comparing one file."""
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    UNCHANGED = "unchanged"
    NOT_FOUND = "not_found"


@dataclass
class FileComparison:
    """
    Result of comparing one file.

    `diffs` is empty for whole-file outcomes (ADDED, REMOVED, NOT_FOUND).
    """
    path: str
    before_state: SnapshotState
    after_state: SnapshotState
    before: Snapshot = field(default_factory=dict)
    after: Snapshot = field(default_factory=dict)
    diffs: DiffSet = field(default_factory=list)

    @property
    def status(self) -> FileStatus:
        before_missing = self.before_state is SnapshotState.MISSING
        after_missing = self.after_state is SnapshotState.MISSING

        if before_missing and after_missing:
            return FileStatus.NOT_FOUND
        if before_missing:
            return FileStatus.ADDED
        if after_missing:
            return FileStatus.REMOVED
        if self.diffs:
            return FileStatus.MODIFIED
        return FileStatus.UNCHANGED

    @property
    def diffs_by_sheet(self) -> Dict[str, DiffSet]:
        return group_by_sheet(self.diffs)


def _load_side(
    path: str,
    source: SnapshotSource,
    parser: WorkbookParser,
) -> Tuple[SnapshotState, Snapshot]:
    try:
        data = source.read(path)
    except SnapshotUnavailable:
        logger.info(f"{path}: not present in {source.describe()}")
        return SnapshotState.MISSING, {}

    # MalformedWorkbook propagates: a parse failure is not an empty sheet
    snapshot = build_snapshot(parser(data, path))
    logger.debug(f"{path}: {count_cells(snapshot)} cell(s) in {source.describe()}")
    return snapshot_state(snapshot), snapshot


def compare_file(
    path: str,
    before_source: SnapshotSource,
    after_source: SnapshotSource,
    parser: Optional[WorkbookParser] = None,
) -> FileComparison:
    """
    Compare one file between two sources.

    Args:
        path: File path, passed to both sources
        before_source: Source of the earlier version
        after_source: Source of the later version
        parser: Bytes -> workbook parser (defaults to openpyxl)

    Returns:
        FileComparison

    Raises:
        MalformedWorkbook: If either present side cannot be parsed
        SnapshotSourceError: If a source fails for reasons other than absence
    """
    parser = parser or load_workbook_bytes

    before_state, before = _load_side(path, before_source, parser)
    after_state, after = _load_side(path, after_source, parser)

    comparison = FileComparison(
        path=path,
        before_state=before_state,
        after_state=after_state,
        before=before,
        after=after,
    )

    if SnapshotState.MISSING in (before_state, after_state):
        logger.info(f"{path}: {comparison.status.value} (whole file)")
        return comparison

    comparison.diffs = diff_snapshots(before, after)
    logger.info(f"{path}: {len(comparison.diffs)} cell change(s)")
    return comparison


def compare_files(
    paths: Sequence[str],
    before_source: SnapshotSource,
    after_source: SnapshotSource,
    parser: Optional[WorkbookParser] = None,
) -> List[FileComparison]:
    """Compare each file in order. Errors stop the run."""
    logger.info(f"Comparing {len(paths)} file(s): {before_source.describe()} -> {after_source.describe()}")
    return [compare_file(path, before_source, after_source, parser) for path in paths]
