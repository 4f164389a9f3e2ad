#!/usr/bin/env python3
"""
Excel Cell Differ - Main Entry Point

Compare spreadsheet snapshots cell by cell and produce Markdown reports.

Usage:
  python main.py diff old.xlsx new.xlsx
  python main.py report --base main --head HEAD
"""

from celldiff.cli import cli


if __name__ == '__main__':
    cli()
