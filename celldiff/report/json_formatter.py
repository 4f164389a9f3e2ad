"""
JSON Formatter for comparison results

Formats file comparisons as JSON for programmatic consumption.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from celldiff.engine.compare import count_by_kind
from celldiff.engine.snapshot import count_cells
from celldiff.engine.summary import summarize_all
from celldiff.pipeline import FileComparison


class JSONFormatter:
    """Format comparison results as JSON"""

    def to_dict(self, comparison: FileComparison) -> Dict[str, Any]:
        """
        Plain-data view of one comparison.

        Summaries list rows and columns in first-touched order.
        """
        summaries = {
            sheet: {
                'rows': {str(row): count for row, count in summary.rows.items()},
                'columns': dict(summary.columns),
            }
            for sheet, summary in summarize_all(comparison.diffs).items()
        }

        return {
            'path': comparison.path,
            'status': comparison.status.value,
            'before_state': comparison.before_state.value,
            'after_state': comparison.after_state.value,
            'total_changes': len(comparison.diffs),
            'counts': count_by_kind(comparison.diffs),
            'before_cells': count_cells(comparison.before),
            'after_cells': count_cells(comparison.after),
            'diffs': [d.to_dict() for d in comparison.diffs],
            'summaries': summaries,
        }

    def format(self, comparisons: Sequence[FileComparison], pretty: bool = True) -> str:
        """
        Format comparisons as a JSON string.

        Args:
            comparisons: Comparisons to format
            pretty: If True, format with indentation for readability

        Returns:
            JSON string
        """
        data: List[Dict[str, Any]] = [self.to_dict(c) for c in comparisons]
        if pretty:
            return json.dumps({'files': data}, indent=2, ensure_ascii=False)
        return json.dumps({'files': data}, ensure_ascii=False)

    def save(self, comparisons: Sequence[FileComparison], output_path: Union[str, Path], pretty: bool = True):
        """
        Save comparisons to a JSON file.

        Args:
            comparisons: Comparisons to save
            output_path: Path where to save JSON file
            pretty: If True, format with indentation
        """
        Path(output_path).write_text(self.format(comparisons, pretty) + "\n", encoding='utf-8')
