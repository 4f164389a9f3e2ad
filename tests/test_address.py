"""Tests for the cell address codec."""

import pytest

from celldiff.engine.address import (
    RangeBounds,
    column_index,
    column_letter,
    decode_cell,
    encode_cell,
    parse_range,
    sort_key,
    split_address,
)
from celldiff.exceptions import InvalidAddress


class TestColumnLetters:
    @pytest.mark.parametrize("index, letters", [
        (0, "A"),
        (25, "Z"),
        (26, "AA"),
        (51, "AZ"),
        (52, "BA"),
        (701, "ZZ"),
        (702, "AAA"),
        (16383, "XFD"),
    ])
    def test_known_columns(self, index, letters):
        assert column_letter(index) == letters
        assert column_index(letters) == index

    def test_lowercase_letters(self):
        assert column_index("ab") == 27

    def test_negative_index_rejected(self):
        with pytest.raises(InvalidAddress):
            column_letter(-1)

    def test_non_letters_rejected(self):
        with pytest.raises(InvalidAddress):
            column_index("A1")


class TestEncodeDecode:
    def test_encode(self):
        assert encode_cell(0, 0) == "A1"
        assert encode_cell(11, 27) == "AB12"

    def test_decode(self):
        assert decode_cell("A1") == (0, 0)
        assert decode_cell("AB12") == (11, 27)

    def test_decode_is_case_insensitive(self):
        assert decode_cell("ab12") == (11, 27)

    def test_round_trip(self):
        for row in (0, 1, 9, 99, 1048575):
            for col in (0, 1, 25, 26, 701, 702, 16383):
                assert decode_cell(encode_cell(row, col)) == (row, col)

    @pytest.mark.parametrize("bad", ["", "A", "1", "1A", "A0", "$A$1", "A-1", "Sheet1!A1", "A1:B2", "Ä1"])
    def test_invalid_addresses(self, bad):
        with pytest.raises(InvalidAddress):
            decode_cell(bad)

    def test_non_text_rejected(self):
        with pytest.raises(InvalidAddress):
            decode_cell(12)

    def test_negative_row_rejected(self):
        with pytest.raises(InvalidAddress):
            encode_cell(-1, 0)

    def test_invalid_address_is_value_error(self):
        with pytest.raises(ValueError):
            decode_cell("nope")

    def test_split_address(self):
        assert split_address("AB12") == ("AB", 12)

    def test_sort_key_is_row_major(self):
        addresses = ["B2", "AA1", "A2", "B1", "A10"]
        assert sorted(addresses, key=sort_key) == ["B1", "AA1", "A2", "B2", "A10"]


class TestParseRange:
    def test_absent_range_defaults_to_a1(self):
        assert parse_range(None) == RangeBounds(0, 0, 0, 0)
        assert parse_range("") == RangeBounds(0, 0, 0, 0)

    def test_full_range(self):
        bounds = parse_range("B2:D10")
        assert bounds == RangeBounds(row_start=1, row_end=9, col_start=1, col_end=3)
        assert bounds.row_count == 9
        assert bounds.col_count == 3

    def test_single_cell(self):
        assert parse_range("C3") == RangeBounds(2, 2, 2, 2)

    def test_reversed_range_is_normalized(self):
        assert parse_range("D10:B2") == parse_range("B2:D10")

    def test_bad_range(self):
        with pytest.raises(InvalidAddress):
            parse_range("A1:B2:C3")
        with pytest.raises(InvalidAddress):
            parse_range("A1:nope")
