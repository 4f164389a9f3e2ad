"""Shared fixtures and helpers for the test suite."""

import io
import zipfile
from typing import Any, Dict, Optional

import pytest
from openpyxl import Workbook

from celldiff.core.config import get_settings
from celldiff.engine.workbook import WorkbookInterface
from celldiff.exceptions import SnapshotUnavailable
from celldiff.sources.base import SnapshotSource


def make_xlsx(sheets: Dict[str, Dict[str, Any]]) -> bytes:
    """Build .xlsx bytes with the given {sheet: {address: value}} content."""
    wb = Workbook()
    wb.remove(wb.active)
    for name, cells in sheets.items():
        ws = wb.create_sheet(name)
        for address, value in cells.items():
            ws[address] = value

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def replace_member(data: bytes, member: str, content: bytes) -> bytes:
    """Copy of a zip archive with one member's content replaced."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(io.BytesIO(data)) as source, zipfile.ZipFile(buffer, "w") as target:
        for info in source.infolist():
            body = content if info.filename == member else source.read(info.filename)
            target.writestr(info, body)
    return buffer.getvalue()


class FakeWorkbook(WorkbookInterface):
    """In-memory workbook with explicit declared ranges."""

    def __init__(
        self,
        sheets: Dict[str, Dict[str, Any]],
        ranges: Optional[Dict[str, Optional[str]]] = None,
        enumerable: bool = False,
    ):
        self.sheets = sheets
        self.ranges = ranges or {}
        self.enumerable = enumerable
        self.lookups = 0

    @property
    def sheet_names(self):
        return list(self.sheets)

    def declared_range(self, sheet):
        return self.ranges.get(sheet)

    def cell_value(self, sheet, address):
        self.lookups += 1
        return self.sheets[sheet].get(address)

    def iter_defined_cells(self, sheet):
        if not self.enumerable:
            return None
        return iter(self.sheets[sheet].items())


class MemorySource(SnapshotSource):
    """Snapshot source backed by a dict of path -> bytes."""

    def __init__(self, files: Dict[str, bytes], name: str = 'memory'):
        self.files = files
        self.name = name

    def read(self, path):
        if path not in self.files:
            raise SnapshotUnavailable(path, self.name)
        return self.files[path]

    def describe(self):
        return self.name


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate tests from the caller's environment and cached settings."""
    for name in ('LOG_LEVEL', 'LOG_DIR', 'MAX_TABLE_ROWS', 'TOP_N', 'REPORT_MODE', 'OUTPUT_PATH',
                 'REPO_PATH', 'BASE_SHA', 'HEAD_SHA', 'XLSX_LIST'):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
