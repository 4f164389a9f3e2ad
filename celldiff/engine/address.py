"""
Cell address codec.

Converts between zero-based (row, column) pairs and spreadsheet addresses
such as "A1" or "AB12", and parses range references like "A1:C20".
"""
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from celldiff.exceptions import InvalidAddress

_ADDRESS_RE = re.compile(r'^([A-Za-z]+)([0-9]+)$')


@dataclass(frozen=True)
class RangeBounds:
    """Inclusive zero-based bounds of a rectangular range."""
    row_start: int
    row_end: int
    col_start: int
    col_end: int

    @property
    def row_count(self) -> int:
        return self.row_end - self.row_start + 1

    @property
    def col_count(self) -> int:
        return self.col_end - self.col_start + 1


def column_letter(col: int) -> str:
    """
    Convert a zero-based column index to letters (0 -> A, 25 -> Z, 26 -> AA).

    Args:
        col: Zero-based column index

    Returns:
        Column letters

    Raises:
        InvalidAddress: If the index is negative
    """
    if col < 0:
        raise InvalidAddress(col, "column index must be non-negative")

    letters = []
    n = col + 1
    while n > 0:
        n, rem = divmod(n - 1, 26)
        letters.append(chr(ord('A') + rem))

    return ''.join(reversed(letters))


def column_index(letters: str) -> int:
    """Convert column letters to a zero-based index (A -> 0, AA -> 26)."""
    if not letters or not letters.isalpha() or not letters.isascii():
        raise InvalidAddress(letters, "column must be letters A-Z")

    n = 0
    for char in letters.upper():
        n = n * 26 + (ord(char) - ord('A') + 1)

    return n - 1


def encode_cell(row: int, col: int) -> str:
    """
    Encode a zero-based (row, col) pair as an address.

    Args:
        row: Zero-based row index
        col: Zero-based column index

    Returns:
        Canonical address, e.g. encode_cell(0, 0) == "A1"
    """
    if row < 0:
        raise InvalidAddress(row, "row index must be non-negative")

    return f"{column_letter(col)}{row + 1}"


def decode_cell(address: str) -> Tuple[int, int]:
    """
    Decode an address into a zero-based (row, col) pair.

    Letters are case-insensitive. Absolute markers ($A$1) and sheet
    qualifiers are not accepted.

    Raises:
        InvalidAddress: If the text is not letters followed by a row number >= 1
    """
    if not isinstance(address, str):
        raise InvalidAddress(address, "address must be text")

    match = _ADDRESS_RE.match(address.strip())
    if not match:
        raise InvalidAddress(address)

    letters, digits = match.groups()
    row = int(digits)
    if row < 1:
        raise InvalidAddress(address, "row numbers start at 1")

    return row - 1, column_index(letters)


def split_address(address: str) -> Tuple[str, int]:
    """Split an address into its column letters and 1-based row number."""
    row, col = decode_cell(address)
    return column_letter(col), row + 1


def parse_range(ref: Optional[str]) -> RangeBounds:
    """
    Parse a range reference into numeric bounds.

    An absent or empty reference yields the single-cell bound at A1. That
    default carries no guarantee about where data actually lives; see
    build_snapshot for how sheets without a declared range are scanned.

    Args:
        ref: Range reference ("A1:C20"), single cell ("B2"), or None

    Returns:
        RangeBounds with start <= end on both axes
    """
    if not ref:
        return RangeBounds(0, 0, 0, 0)

    parts = ref.split(':')
    if len(parts) > 2:
        raise InvalidAddress(ref, "range must have at most one ':'")

    start_row, start_col = decode_cell(parts[0])
    end_row, end_col = decode_cell(parts[-1])

    return RangeBounds(
        row_start=min(start_row, end_row),
        row_end=max(start_row, end_row),
        col_start=min(start_col, end_col),
        col_end=max(start_col, end_col),
    )


def sort_key(address: str) -> Tuple[int, int]:
    """Row-major sort key for an address."""
    return decode_cell(address)
