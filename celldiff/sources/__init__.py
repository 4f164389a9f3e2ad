"""Snapshot sources - where the bytes of each side come from"""

from .base import SnapshotSource
from .local_source import LocalFileSource, FixedFileSource
from .git_source import GitRevisionSource, list_changed_workbooks

__all__ = ['SnapshotSource', 'LocalFileSource', 'FixedFileSource', 'GitRevisionSource', 'list_changed_workbooks']
