"""Excel Cell Differ - cell-level diff reports for spreadsheet snapshots"""

__version__ = '0.3.0'
