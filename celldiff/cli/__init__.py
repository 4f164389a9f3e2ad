"""
Excel Cell Differ - command line interface

Commands:
  diff   - Compare two local Excel files
  report - Compare spreadsheets between two git revisions
"""

import click

from celldiff import __version__
from celldiff.cli.diff_command import diff_command
from celldiff.cli.report_command import report_command


@click.group()
@click.version_option(version=__version__, prog_name='Excel Cell Differ')
def cli():
    """
    Excel Cell Differ - cell-level change reports for spreadsheets

    Compares two versions of a workbook cell by cell and writes a Markdown
    report: a compact change table per sheet, or a visual grid with
    changed cells highlighted.

    \b
    Two commands:
      diff   - Compare two local files
      report - Compare files between two git revisions

    \b
    Examples:
      celldiff diff old.xlsx new.xlsx
      celldiff report --base main --head HEAD
    """
    pass


cli.add_command(diff_command)
cli.add_command(report_command)
