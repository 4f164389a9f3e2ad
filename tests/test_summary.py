"""Tests for row/column touch summaries."""

from celldiff.engine.compare import CellDiff, ChangeKind, diff_snapshots
from celldiff.engine.summary import TouchSummary, summarize, summarize_all


def _diffs(sheet, addresses):
    return [CellDiff(sheet, a, ChangeKind.ADDED, after="x") for a in addresses]


class TestSummarize:
    def test_counts(self):
        summary = summarize(_diffs("S", ["A1", "B1", "B2", "AA10"]), "S")

        assert summary.rows == {1: 2, 2: 1, 10: 1}
        assert summary.columns == {"A": 1, "B": 2, "AA": 1}
        assert summary.total == 4

    def test_other_sheets_ignored(self):
        diffs = _diffs("S", ["A1"]) + _diffs("T", ["A1", "A2"])
        assert summarize(diffs, "S").total == 1
        assert summarize(diffs, "missing").total == 0

    def test_conservation(self):
        before = {"S": {f"{c}{r}": "1" for c in "ABC" for r in range(1, 6)}}
        after = {"S": {f"{c}{r}": "2" for c in "BCD" for r in range(3, 8)}}
        diffs = diff_snapshots(before, after)
        summary = summarize(diffs, "S")

        assert sum(summary.rows.values()) == len(diffs)
        assert sum(summary.columns.values()) == len(diffs)

    def test_summarize_all(self):
        diffs = _diffs("S", ["A1"]) + _diffs("T", ["B2", "B3"])
        summaries = summarize_all(diffs)
        assert list(summaries) == ["S", "T"]
        assert summaries["T"].columns == {"B": 2}


class TestTopN:
    def test_sorted_by_count(self):
        summary = summarize(_diffs("S", ["A1", "A2", "B2", "C2", "C3", "C4"]), "S")
        assert summary.top_rows() == [(2, 3), (1, 1), (3, 1), (4, 1)]
        assert summary.top_columns() == [("C", 3), ("A", 2), ("B", 1)]

    def test_ties_keep_first_occurrence(self):
        summary = summarize(_diffs("S", ["C5", "A9", "B1", "A1", "C9"]), "S")
        assert summary.top_rows() == [(9, 2), (1, 2), (5, 1)]
        assert summary.top_columns() == [("C", 2), ("A", 2), ("B", 1)]

    def test_limit(self):
        summary = summarize(_diffs("S", [f"A{r}" for r in range(1, 21)]), "S")
        assert len(summary.top_rows()) == 10
        assert [r for r, _ in summary.top_rows(3)] == [1, 2, 3]
        assert summary.top_rows(0) == []

    def test_empty(self):
        summary = TouchSummary("S")
        assert summary.top_rows() == []
        assert summary.top_columns() == []
        assert summary.total == 0
