"""
Report Command - Diff spreadsheets between two git revisions

Reads every listed spreadsheet at the base and head revisions and writes
one Markdown (or JSON) report covering all of them.
"""

import logging
import sys
from pathlib import Path

import click

from celldiff.cli.options import build_report_options, emit_report, init_logging, report_options
from celldiff.core.config import get_settings
from celldiff.exceptions import CellDiffError
from celldiff.pipeline import compare_files
from celldiff.sources import GitRevisionSource, list_changed_workbooks
from celldiff.sources.git_source import open_repo

logger = logging.getLogger(__name__)


@click.command('report')
@click.argument('files', nargs=-1)
@click.option('--base', help='Base revision (default: BASE_SHA setting)')
@click.option('--head', help='Head revision (default: HEAD_SHA setting)')
@click.option(
    '--repo',
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Git repository (default: REPO_PATH setting, current directory)'
)
@click.option(
    '--output', '-o',
    type=click.Path(dir_okay=False, path_type=Path),
    help='Output file (default: OUTPUT_PATH setting, custom-diff.md); "-" prints to console'
)
@report_options
def report_command(files, base, head, repo, output, mode, output_format, config_file,
                   max_rows, top_n, no_summary, log_level):
    """
    Report cell changes in spreadsheets between two git revisions.

    FILES: Repository-relative spreadsheet paths (optional)

    When no files are given, the XLSX_LIST setting is used; when that is
    empty too, every .xlsx/.xlsm file changed between the revisions is
    reported.

    \b
    Examples:
      # Typical CI use: BASE_SHA, HEAD_SHA and XLSX_LIST set in the environment
      celldiff report

      # Explicit revisions and files
      celldiff report --base main --head feature data/budget.xlsx

      # Visual grids printed to the console
      celldiff report --base HEAD~1 --head HEAD --mode visual -o -
    """
    init_logging(log_level, component='celldiff-report')
    settings = get_settings()

    base = base or settings.BASE_SHA
    head = head or settings.HEAD_SHA
    repo_path = repo or settings.REPO_PATH

    if not base or not head:
        click.echo("\n✗ Both --base and --head (or BASE_SHA and HEAD_SHA) are required", err=True)
        sys.exit(1)

    if output is None:
        output = settings.OUTPUT_PATH
    elif str(output) == '-':
        output = None

    try:
        options = build_report_options(config_file, mode, max_rows, top_n, no_summary)

        paths = list(files) or settings.xlsx_files
        if not paths:
            paths = list_changed_workbooks(repo_path, base, head)

        git_repo = open_repo(repo_path)
        before_source = GitRevisionSource(repo_path, base, repo=git_repo)
        after_source = GitRevisionSource(repo_path, head, repo=git_repo)

        comparisons = compare_files(paths, before_source, after_source)
        emit_report(comparisons, options, output_format, output, base=base, head=head)
    except (CellDiffError, FileNotFoundError) as e:
        logger.debug("Report failed", exc_info=True)
        click.echo(f"\n✗ Report failed: {e}", err=True)
        sys.exit(1)

    sys.exit(0)
