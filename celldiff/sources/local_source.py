"""
LocalFileSource - read workbooks from the local filesystem
"""

import logging
from pathlib import Path
from typing import Optional, Union

from celldiff.exceptions import SnapshotSourceError, SnapshotUnavailable
from celldiff.sources.base import SnapshotSource

logger = logging.getLogger(__name__)


class LocalFileSource(SnapshotSource):
    """
    Local filesystem source.

    Paths are resolved against root when one is given, otherwise used as-is.
    """

    def __init__(self, root: Optional[Union[str, Path]] = None):
        self.root = Path(root) if root is not None else None

        if self.root is not None and not self.root.is_dir():
            raise SnapshotSourceError(f"Source folder does not exist: {self.root}")

    def _resolve(self, path: str) -> Path:
        if self.root is None:
            return Path(path)
        return self.root / path

    def read(self, path: str) -> bytes:
        file_path = self._resolve(path)

        if not file_path.is_file():
            raise SnapshotUnavailable(str(path), self.describe())

        logger.debug(f"Reading {file_path}")
        try:
            return file_path.read_bytes()
        except OSError as e:
            raise SnapshotSourceError(f"Failed to read {file_path}: {e}")

    def describe(self) -> str:
        return str(self.root) if self.root is not None else 'local'


class FixedFileSource(SnapshotSource):
    """
    Serves one specific file whatever path is requested.

    Used when the two sides of a comparison live at different paths, such as
    `celldiff diff old.xlsx new.xlsx`.
    """

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = Path(file_path)

    def read(self, path: str) -> bytes:
        if not self.file_path.is_file():
            raise SnapshotUnavailable(str(path), self.describe())

        logger.debug(f"Reading {self.file_path} for {path}")
        try:
            return self.file_path.read_bytes()
        except OSError as e:
            raise SnapshotSourceError(f"Failed to read {self.file_path}: {e}")

    def describe(self) -> str:
        return str(self.file_path)
