"""
Diff Command - Compare two local Excel files

Reads both files, diffs them cell by cell and prints a report.
"""

import logging
import sys
from pathlib import Path

import click

from celldiff.cli.options import build_report_options, emit_report, init_logging, report_options
from celldiff.exceptions import CellDiffError
from celldiff.pipeline import compare_file
from celldiff.sources import FixedFileSource

logger = logging.getLogger(__name__)


@click.command('diff')
@click.argument('before', type=click.Path(dir_okay=False, path_type=Path))
@click.argument('after', type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    '--output', '-o',
    type=click.Path(dir_okay=False, path_type=Path),
    help='Output file for the report (default: print to console)'
)
@report_options
def diff_command(before, after, output, mode, output_format, config_file, max_rows, top_n, no_summary, log_level):
    """
    Compare two Excel files.

    BEFORE: Path to the earlier version
    AFTER: Path to the later version

    A path that does not exist is treated as an absent file, so the
    report shows the other one as added or removed.

    \b
    Examples:
      # Compact change table on the console
      celldiff diff old.xlsx new.xlsx

      # Visual grid saved to a file
      celldiff diff old.xlsx new.xlsx --mode visual -o diff.md

      # JSON for scripts
      celldiff diff old.xlsx new.xlsx --format json
    """
    init_logging(log_level, component='celldiff-diff')

    if not before.exists() and not after.exists():
        click.echo(f"\n✗ Neither {before} nor {after} exists", err=True)
        sys.exit(1)

    label = str(after) if after.exists() else str(before)

    try:
        options = build_report_options(config_file, mode, max_rows, top_n, no_summary)
        comparison = compare_file(label, FixedFileSource(before), FixedFileSource(after))
        emit_report([comparison], options, output_format, output)
    except (CellDiffError, FileNotFoundError) as e:
        logger.debug("Diff failed", exc_info=True)
        click.echo(f"\n✗ Diff failed: {e}", err=True)
        sys.exit(1)

    sys.exit(0)
