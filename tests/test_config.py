"""Tests for settings and report option loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from celldiff.core.config import Settings, get_settings
from celldiff.core.report_config import LegendEntry, ReportOptions, load_report_options
from celldiff.exceptions import ConfigError


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.MAX_TABLE_ROWS == 200
        assert settings.TOP_N == 10
        assert settings.REPORT_MODE == "compact"
        assert settings.OUTPUT_PATH == Path("custom-diff.md")
        assert settings.LOG_DIR is None
        assert settings.xlsx_files == []

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("REPORT_MODE", "Visual")
        monkeypatch.setenv("MAX_TABLE_ROWS", "50")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("BASE_SHA", "abc")
        monkeypatch.setenv("XLSX_LIST", "a.xlsx\n\n  data/b.xlsx \n")

        settings = get_settings()
        assert settings.REPORT_MODE == "visual"
        assert settings.MAX_TABLE_ROWS == 50
        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.BASE_SHA == "abc"
        assert settings.xlsx_files == ["a.xlsx", "data/b.xlsx"]

    def test_invalid_mode(self, monkeypatch):
        monkeypatch.setenv("REPORT_MODE", "fancy")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_invalid_table_rows(self, monkeypatch):
        monkeypatch.setenv("MAX_TABLE_ROWS", "0")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestReportOptions:
    def test_validation(self):
        with pytest.raises(ConfigError):
            ReportOptions(max_table_rows=0)
        with pytest.raises(ConfigError):
            ReportOptions(top_n=-1)
        with pytest.raises(ConfigError):
            ReportOptions(mode="fancy")

    def test_override_ignores_none(self):
        options = ReportOptions().override(top_n=3, mode=None, max_table_rows=None)
        assert options.top_n == 3
        assert options.mode == "compact"
        assert options.max_table_rows == 200

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("TOP_N", "4")
        monkeypatch.setenv("REPORT_MODE", "visual")
        options = load_report_options()
        assert options.top_n == 4
        assert options.mode == "visual"


class TestYamlConfig:
    def _write(self, tmp_path, text):
        path = tmp_path / "report.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_full_file(self, tmp_path):
        path = self._write(tmp_path, """
report:
  max_table_rows: 25
  include_summary: false
  mode: visual
legend:
  added:
    label: New
    background: lightgreen
""")
        options = load_report_options(path, settings=Settings(_env_file=None))

        assert options.max_table_rows == 25
        assert options.include_summary is False
        assert options.mode == "visual"
        assert options.top_n == 10
        assert options.legend.added == LegendEntry("New", "lightgreen", "green")
        assert options.legend.modified.label == "Modified"

    def test_yaml_over_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TOP_N", "4")
        monkeypatch.setenv("MAX_TABLE_ROWS", "99")
        path = self._write(tmp_path, "report:\n  top_n: 2\n")

        options = load_report_options(path)
        assert options.top_n == 2
        assert options.max_table_rows == 99

    def test_empty_file(self, tmp_path):
        path = self._write(tmp_path, "")
        assert load_report_options(path, settings=Settings(_env_file=None)) == ReportOptions()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_report_options(tmp_path / "nope.yaml")

    @pytest.mark.parametrize("text", [
        "- just\n- a list\n",
        "report: [1, 2]\n",
        "extra:\n  a: 1\n",
        "report:\n  colour: red\n",
        "report:\n  top_n: three\n",
        "report:\n  max_table_rows: true\n",
        "report:\n  max_table_rows: 0\n",
        "report:\n  mode: fancy\n",
        "legend:\n  renamed:\n    label: x\n",
        "legend:\n  added:\n    size: 3\n",
        "report: [unclosed\n",
    ])
    def test_invalid(self, tmp_path, text):
        path = self._write(tmp_path, text)
        with pytest.raises(ConfigError):
            load_report_options(path, settings=Settings(_env_file=None))
