"""
Options and output handling shared by the CLI commands.
"""

from pathlib import Path
from typing import Optional, Sequence

import click

from celldiff.core.config import REPORT_MODES, get_settings
from celldiff.core.report_config import ReportOptions, load_report_options
from celldiff.pipeline import FileComparison
from celldiff.report import JSONFormatter, MarkdownRenderer
from celldiff.utils.logging_setup import setup_logging


_REPORT_OPTIONS = [
    click.option(
        '--mode',
        type=click.Choice(REPORT_MODES, case_sensitive=False),
        default=None,
        help='Report mode (default: REPORT_MODE setting, compact)'
    ),
    click.option(
        '--format', 'output_format',
        type=click.Choice(['markdown', 'json'], case_sensitive=False),
        default='markdown',
        help='Output format (default: markdown)'
    ),
    click.option(
        '--config', 'config_file',
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help='Report config YAML (table size, summary size, legend)'
    ),
    click.option('--max-rows', type=click.IntRange(min=1), help='Rows per compact table'),
    click.option('--top-n', type=click.IntRange(min=0), help='Rows/columns in touch summaries'),
    click.option('--no-summary', is_flag=True, help='Omit row/column touch summaries'),
    click.option(
        '--log-level',
        type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
        default=None,
        help='Console log level (default: LOG_LEVEL setting)'
    ),
]


def report_options(func):
    """Attach the rendering options common to every command."""
    for option in reversed(_REPORT_OPTIONS):
        func = option(func)
    return func


def init_logging(log_level: Optional[str], component: str) -> None:
    settings = get_settings()
    setup_logging(
        log_level=(log_level or settings.LOG_LEVEL).upper(),
        log_dir=settings.LOG_DIR,
        component=component,
    )


def build_report_options(
    config_file: Optional[Path],
    mode: Optional[str],
    max_rows: Optional[int],
    top_n: Optional[int],
    no_summary: bool,
) -> ReportOptions:
    """CLI flags over YAML over environment settings."""
    options = load_report_options(config_file)
    return options.override(
        mode=mode.lower() if mode else None,
        max_table_rows=max_rows,
        top_n=top_n,
        include_summary=False if no_summary else None,
    )


def emit_report(
    comparisons: Sequence[FileComparison],
    options: ReportOptions,
    output_format: str,
    output: Optional[Path],
    base: Optional[str] = None,
    head: Optional[str] = None,
) -> None:
    """Render comparisons and write them to output, or stdout when output is None."""
    if output_format.lower() == 'json':
        text = JSONFormatter().format(comparisons, pretty=True) + "\n"
    else:
        text = MarkdownRenderer(options).render(comparisons, base=base, head=head)

    if output is None:
        click.echo(text, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding='utf-8')
    click.echo(f"✓ Wrote {output}", err=True)
