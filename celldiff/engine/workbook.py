"""
Workbook abstraction and the openpyxl-backed parser.

The snapshot builder only needs sheet names, a declared range per sheet and
a way to fetch a cell's raw value. WorkbookInterface is that contract;
OpenpyxlWorkbook implements it over a loaded openpyxl workbook.
"""
import io
import logging
import warnings
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional, Tuple

from openpyxl import load_workbook
from openpyxl.workbook import Workbook

from celldiff.engine.address import encode_cell
from celldiff.exceptions import MalformedWorkbook

logger = logging.getLogger(__name__)


class WorkbookInterface(ABC):
    """
    Parsed workbook as seen by the snapshot builder.

    Implementations may also override iter_defined_cells to expose the
    populated cells of a sheet directly.
    """

    @property
    @abstractmethod
    def sheet_names(self) -> List[str]:
        """Sheet names in workbook order."""
        pass

    @abstractmethod
    def declared_range(self, sheet: str) -> Optional[str]:
        """Range reference covering the sheet's data ("A1:D20"), or None."""
        pass

    @abstractmethod
    def cell_value(self, sheet: str, address: str) -> Any:
        """Raw value at address, or None when the cell holds nothing."""
        pass

    def iter_defined_cells(self, sheet: str) -> Optional[Iterator[Tuple[str, Any]]]:
        """
        Iterate (address, raw value) for populated cells.

        Returns None when the implementation cannot enumerate cells.
        """
        return None


class OpenpyxlWorkbook(WorkbookInterface):
    """
    WorkbookInterface over an openpyxl Workbook.

    Values are read once per sheet into a sparse dict, so only populated
    cells are kept. With a read-only workbook (as opened by
    load_workbook_bytes) rows are streamed and empty positions are never
    materialized.
    """

    def __init__(self, workbook: Workbook):
        self._sheet_names = [ws.title for ws in workbook.worksheets]
        self._cells: Dict[str, Dict[str, Any]] = {}
        self._ranges: Dict[str, Optional[str]] = {}

        # Chartsheets carry no cells
        for ws in workbook.worksheets:
            self._read_sheet(ws)

    def _read_sheet(self, ws) -> None:
        if hasattr(ws, 'reset_dimensions'):
            # Stored dimensions of read-only sheets can be stale
            ws.reset_dimensions()

        cells = {}
        min_row = min_col = max_row = max_col = None
        for row in ws.iter_rows():
            for cell in row:
                if cell.value is None:
                    continue
                cells[cell.coordinate] = cell.value
                if min_row is None:
                    min_row = max_row = cell.row
                    min_col = max_col = cell.column
                else:
                    min_row = min(min_row, cell.row)
                    max_row = max(max_row, cell.row)
                    min_col = min(min_col, cell.column)
                    max_col = max(max_col, cell.column)

        self._cells[ws.title] = cells
        if cells:
            self._ranges[ws.title] = (
                f"{encode_cell(min_row - 1, min_col - 1)}:{encode_cell(max_row - 1, max_col - 1)}"
            )
        else:
            self._ranges[ws.title] = None

    @property
    def sheet_names(self) -> List[str]:
        return list(self._sheet_names)

    def declared_range(self, sheet: str) -> Optional[str]:
        return self._ranges[sheet]

    def cell_value(self, sheet: str, address: str) -> Any:
        return self._cells[sheet].get(address)

    def iter_defined_cells(self, sheet: str) -> Iterator[Tuple[str, Any]]:
        return iter(self._cells[sheet].items())


def load_workbook_bytes(data: bytes, name: str = "<workbook>") -> OpenpyxlWorkbook:
    """
    Parse workbook bytes with openpyxl.

    The workbook is opened read-only and streamed sheet by sheet. Cached
    formula results are read (data_only), formulas are not evaluated.

    Args:
        data: Raw .xlsx/.xlsm bytes
        name: File name used in error messages

    Returns:
        OpenpyxlWorkbook

    Raises:
        MalformedWorkbook: If the bytes are not a readable workbook
    """
    logger.debug(f"Parsing workbook {name} ({len(data)} bytes)")

    wb = None
    try:
        with warnings.catch_warnings():
            # openpyxl warns about unsupported extensions (data validation, etc.)
            warnings.simplefilter("ignore", UserWarning)
            wb = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
            # Read-only sheets parse lazily, so XML errors surface here
            return OpenpyxlWorkbook(wb)
    except Exception as e:
        logger.debug(f"Failed to parse workbook {name}", exc_info=True)
        raise MalformedWorkbook(name, str(e) or type(e).__name__) from e
    finally:
        if wb is not None:
            wb.close()
