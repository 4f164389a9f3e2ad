"""
Excel Cell Differ - Report Configuration

WHAT THIS FILE DOES:
    Defines the options that shape a rendered report (table size, summary
    size, legend labels and colours) and loads them from an optional YAML
    file layered over environment settings.

PRECEDENCE:
    CLI flags > YAML file > environment settings (.env) > defaults

YAML STRUCTURE:
    report:
      max_table_rows: 200
      top_n: 10
      include_summary: true
      mode: compact

    legend:
      modified:
        label: Modified
        background: yellow
        color: orange
      added:
        label: Added
        background: green
        color: green
      removed:
        label: Deleted
        background: red
        color: red

    Every key is optional.
"""

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from celldiff.core.config import REPORT_MODES, Settings, get_settings
from celldiff.exceptions import ConfigError


@dataclass(frozen=True)
class LegendEntry:
    """Label and colours for one change kind in visual mode."""
    label: str
    background: str
    color: str


@dataclass(frozen=True)
class LegendSpec:
    """Legend for visual mode, one entry per change kind."""
    modified: LegendEntry = LegendEntry('Modified', 'yellow', 'orange')
    added: LegendEntry = LegendEntry('Added', 'green', 'green')
    removed: LegendEntry = LegendEntry('Deleted', 'red', 'red')


@dataclass(frozen=True)
class ReportOptions:
    """
    Rendering options.

    Attributes:
        max_table_rows: Rows per compact table before truncation
        top_n: Rows/columns listed in touch summaries
        include_summary: Whether compact tables are prefixed by touch summaries
        mode: 'compact' or 'visual'
        legend: Visual-mode legend
    """
    max_table_rows: int = 200
    top_n: int = 10
    include_summary: bool = True
    mode: str = 'compact'
    legend: LegendSpec = field(default_factory=LegendSpec)

    def __post_init__(self):
        if self.max_table_rows < 1:
            raise ConfigError("max_table_rows must be at least 1")
        if self.top_n < 0:
            raise ConfigError("top_n must not be negative")
        if self.mode not in REPORT_MODES:
            raise ConfigError(f"mode must be one of {', '.join(REPORT_MODES)}")

    @classmethod
    def from_settings(cls, settings: Settings) -> 'ReportOptions':
        return cls(
            max_table_rows=settings.MAX_TABLE_ROWS,
            top_n=settings.TOP_N,
            mode=settings.REPORT_MODE,
        )

    def override(self, **changes: Any) -> 'ReportOptions':
        """Copy with the given options replaced; None values are ignored."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def load_report_options(
    yaml_path: Optional[Path] = None,
    settings: Optional[Settings] = None,
) -> ReportOptions:
    """
    Load report options.

    Args:
        yaml_path: Optional YAML file (see module docstring for structure)
        settings: Environment settings (defaults to the global instance)

    Returns:
        ReportOptions

    Raises:
        FileNotFoundError: If yaml_path is given but does not exist
        ConfigError: If the YAML content is invalid
    """
    # Load .env file if it exists (populates os.environ)
    load_dotenv()

    if settings is None:
        settings = get_settings()
    options = ReportOptions.from_settings(settings)

    if yaml_path is None:
        return options

    yaml_path = Path(yaml_path)
    if not yaml_path.exists():
        raise FileNotFoundError(f"Report config not found: {yaml_path}")

    with open(yaml_path, encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {yaml_path}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Report config {yaml_path} must be a mapping")

    unknown = set(data) - {'report', 'legend'}
    if unknown:
        raise ConfigError(f"Unknown section(s) in {yaml_path}: {', '.join(sorted(unknown))}")

    report = _section(data, 'report', yaml_path)
    legend = _parse_legend(_section(data, 'legend', yaml_path), options.legend, yaml_path)

    allowed = {'max_table_rows': int, 'top_n': int, 'include_summary': bool, 'mode': str}
    changes: Dict[str, Any] = {}
    for key, value in report.items():
        if key not in allowed:
            raise ConfigError(f"Unknown report option '{key}' in {yaml_path}")
        expected = allowed[key]
        # bool is an int subclass
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ConfigError(f"Report option '{key}' must be {expected.__name__}")
        changes[key] = value

    return replace(options, legend=legend, **changes)


def _section(data: Dict[str, Any], name: str, yaml_path: Path) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{name}' in {yaml_path} must be a mapping")
    return section


def _parse_legend(data: Dict[str, Any], default: LegendSpec, yaml_path: Path) -> LegendSpec:
    entries = {}
    for f in fields(LegendSpec):
        base = getattr(default, f.name)
        entry_data = data.get(f.name) or {}
        if not isinstance(entry_data, dict):
            raise ConfigError(f"Legend entry '{f.name}' in {yaml_path} must be a mapping")
        unknown = set(entry_data) - {'label', 'background', 'color'}
        if unknown:
            raise ConfigError(f"Unknown legend key(s) for '{f.name}': {', '.join(sorted(unknown))}")
        entries[f.name] = LegendEntry(
            label=str(entry_data.get('label', base.label)),
            background=str(entry_data.get('background', base.background)),
            color=str(entry_data.get('color', base.color)),
        )

    unknown = set(data) - set(entries)
    if unknown:
        raise ConfigError(f"Unknown legend kind(s) in {yaml_path}: {', '.join(sorted(unknown))}")

    return LegendSpec(**entries)
