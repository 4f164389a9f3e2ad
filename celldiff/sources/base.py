"""
SnapshotSource - contract for supplying one side of a comparison.
"""

from abc import ABC, abstractmethod


class SnapshotSource(ABC):
    """
    Supplies raw workbook bytes for one side of a comparison.

    Example:
        class InMemorySource(SnapshotSource):
            def __init__(self, files):
                self.files = files

            def read(self, path):
                if path not in self.files:
                    raise SnapshotUnavailable(path, self.describe())
                return self.files[path]

            def describe(self):
                return 'memory'
    """

    @abstractmethod
    def read(self, path: str) -> bytes:
        """
        Read the bytes of a file.

        Args:
            path: File path as listed in the report

        Returns:
            Raw file bytes

        Raises:
            SnapshotUnavailable: If this side has no such file
            SnapshotSourceError: If the source itself cannot be read
        """
        pass

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable name of this side (folder, revision)."""
        pass
