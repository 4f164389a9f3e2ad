"""
Exceptions raised by Excel Cell Differ.

Everything derives from CellDiffError so callers can catch the whole family
at the CLI boundary.
"""


class CellDiffError(Exception):
    """Base exception for all Excel Cell Differ errors."""
    pass


class InvalidAddress(CellDiffError, ValueError):
    """A cell address or range reference could not be parsed."""

    def __init__(self, address, reason: str = "expected letters followed by a row number"):
        self.address = address
        super().__init__(f"Invalid cell address {address!r}: {reason}")


class SnapshotUnavailable(CellDiffError):
    """A snapshot source has no bytes for the requested file."""

    def __init__(self, path: str, side: str = ""):
        self.path = path
        self.side = side
        where = f" in {side}" if side else ""
        super().__init__(f"No snapshot of {path}{where}")


class SnapshotSourceError(CellDiffError):
    """The snapshot source itself failed (bad repository, unknown revision)."""
    pass


class MalformedWorkbook(CellDiffError):
    """Workbook bytes could not be parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot read workbook {path}: {reason}")


class ConfigError(CellDiffError, ValueError):
    """Report configuration is invalid."""
    pass
