"""
Markdown report renderer.

Two modes share the same input:
- compact: a Cell/Change table per sheet, optionally prefixed by the most
  touched rows and columns, truncated after max_table_rows rows
- visual: the sheet rebuilt as an HTML grid over every observed row and
  column, each changed cell highlighted by a fixed colour per change kind
"""

import html
import logging
from typing import Dict, Iterable, List, Optional, Sequence

from celldiff.core.report_config import LegendEntry, LegendSpec, ReportOptions
from celldiff.engine.address import column_index, split_address
from celldiff.engine.compare import CellDiff, ChangeKind, DiffSet
from celldiff.engine.snapshot import Snapshot
from celldiff.engine.summary import summarize
from celldiff.pipeline import FileComparison, FileStatus

logger = logging.getLogger(__name__)

REPORT_TITLE = "# Excel Diff Report"

_FILE_NOTICES = {
    FileStatus.ADDED: "_Added file_",
    FileStatus.REMOVED: "_Removed file_",
    FileStatus.NOT_FOUND: "_File not found in either snapshot_",
    FileStatus.UNCHANGED: "No cell changes.",
}


class MarkdownRenderer:
    """Render file comparisons as a Markdown report."""

    def __init__(self, options: Optional[ReportOptions] = None):
        self.options = options or ReportOptions()

    def render(
        self,
        comparisons: Sequence[FileComparison],
        base: Optional[str] = None,
        head: Optional[str] = None,
    ) -> str:
        """
        Render a full report.

        Args:
            comparisons: One FileComparison per file, in report order
            base: Base revision label (shown when both base and head are given)
            head: Head revision label

        Returns:
            Markdown text ending with a newline
        """
        lines = [REPORT_TITLE, f"Changed Excel files: **{len(comparisons)}**"]
        if base and head:
            lines.append(f"Base: `{base}` → Head: `{head}`")
        lines.append("")

        if self.options.mode == 'visual':
            lines.extend(self.legend_lines())
            lines.append("")

        for comparison in comparisons:
            lines.extend(self.render_file(comparison))

        logger.debug(f"Rendered {len(comparisons)} file(s) in {self.options.mode} mode")
        return "\n".join(lines) + "\n"

    def legend_lines(self) -> List[str]:
        """Legend describing the visual-mode colours."""
        legend = self.options.legend
        return [
            "**Legend:**  ",
            f"- {_title(legend.modified.background)} = {legend.modified.label} "
            f"(~~old~~ → {_coloured('new', legend.modified)})  ",
            f"- {_title(legend.removed.background)} = {legend.removed.label} "
            f"(~~{_coloured('old', legend.removed)}~~)  ",
            f"- {_title(legend.added.background)} = {legend.added.label} "
            f"({_coloured('new', legend.added)})",
        ]

    def render_file(self, comparison: FileComparison) -> List[str]:
        """Section for one file."""
        lines = [f"## {comparison.path}"]

        status = comparison.status
        if status in _FILE_NOTICES:
            lines.extend([_FILE_NOTICES[status], ""])
            return lines

        lines.append(f"**Total cell changes:** {len(comparison.diffs)}")
        lines.append("")

        for sheet, diffs in comparison.diffs_by_sheet.items():
            lines.append(f"### Sheet: {_code(sheet)}")
            if self.options.mode == 'visual':
                lines.append(render_visual_grid(
                    sheet, diffs, comparison.before, comparison.after, self.options.legend
                ))
            else:
                lines.extend(self.render_compact_sheet(sheet, diffs))
            lines.append("")

        return lines

    def render_compact_sheet(self, sheet: str, diffs: DiffSet) -> List[str]:
        """Touch summary (optional) and change table for one sheet."""
        lines = []
        top_n = self.options.top_n

        if self.options.include_summary:
            summary = summarize(diffs, sheet)
            rows = ", ".join(f"{r}({c})" for r, c in summary.top_rows(top_n)) or "—"
            cols = ", ".join(f"{col}({c})" for col, c in summary.top_columns(top_n)) or "—"
            lines.append(f"**Rows touched (top {top_n}):** {rows}  ")
            lines.append(f"**Cols touched (top {top_n}):** {cols}")
            lines.append("")

        limit = self.options.max_table_rows
        lines.append("| Cell | Change |")
        lines.append("|---|---|")
        for d in diffs[:limit]:
            lines.append(f"| {_table_text(d.ref)} | {_change_text(d)} |")

        if len(diffs) > limit:
            lines.append("")
            lines.append(f"_…and {len(diffs) - limit} more cells._")

        return lines


def _change_text(d: CellDiff) -> str:
    if d.kind is ChangeKind.CHANGED:
        return f"{_code(d.before)} → {_code(d.after)}"
    if d.kind is ChangeKind.ADDED:
        return f"⊕ {_code(d.after)}"
    return f"⊖ {_code(d.before)}"


def render_visual_grid(
    sheet: str,
    diffs: Iterable[CellDiff],
    before: Snapshot,
    after: Snapshot,
    legend: LegendSpec,
) -> str:
    """
    HTML grid of one sheet with changed cells highlighted.

    The grid spans every row number and column letter observed in either
    snapshot of the sheet, not the sheet's declared range.
    """
    before_cells = before.get(sheet, {})
    after_cells = after.get(sheet, {})
    addresses = list(dict.fromkeys([*before_cells, *after_cells]))
    if not addresses:
        return "<p>No data</p>"

    rows = set()
    cols = set()
    for address in addresses:
        col, row = split_address(address)
        rows.add(row)
        cols.add(col)

    ordered_rows = sorted(rows)
    ordered_cols = sorted(cols, key=column_index)
    diff_map: Dict[str, CellDiff] = {d.address: d for d in diffs if d.sheet == sheet}

    parts = ['<table border="1" cellspacing="0" cellpadding="4" style="border-collapse:collapse;">']
    parts.append("<tr><th></th>" + "".join(f"<th>{c}</th>" for c in ordered_cols) + "</tr>")

    for row in ordered_rows:
        cells = [f"<tr><th>{row}</th>"]
        for col in ordered_cols:
            address = f"{col}{row}"
            d = diff_map.get(address)
            if d is not None:
                cells.append(_grid_cell(d, legend))
            else:
                value = after_cells.get(address)
                if value is None:
                    value = before_cells.get(address, "")
                cells.append(f"<td>{_html(value)}</td>")
        cells.append("</tr>")
        parts.append("".join(cells))

    parts.append("</table>")
    return "".join(parts)


def _grid_cell(d: CellDiff, legend: LegendSpec) -> str:
    if d.kind is ChangeKind.CHANGED:
        entry = legend.modified
        body = f"<del>{_html(d.before)}</del> → {_html(_coloured(d.after, entry))}"
    elif d.kind is ChangeKind.ADDED:
        entry = legend.added
        body = _html(_coloured(d.after, entry))
    else:
        entry = legend.removed
        body = f"<del>{_html(_coloured(d.before, entry))}</del>"
    return f'<td style="background-color:{entry.background}">{body}</td>'


def _coloured(text: str, entry: LegendEntry) -> str:
    """Colour text with a math-mode colour command, which GitHub keeps."""
    return f"$$\\color{{{entry.color}}}{{\\text{{{_math_text(text)}}}}}$$"


_MATH_ESCAPES = {
    "\\": "\\textbackslash{}",
    "{": "\\{",
    "}": "\\}",
    "$": "\\$",
    "\n": " ",
}


def _math_text(text: str) -> str:
    return "".join(_MATH_ESCAPES.get(char, char) for char in text)


def _html(text: str) -> str:
    return html.escape(text, quote=False).replace("\n", "<br>")


def _code(text: str) -> str:
    """Inline code span that survives backticks and pipes inside a table."""
    if text == "":
        return "_(empty)_"
    text = _table_text(text)
    if "`" in text:
        return f"`` {text} ``"
    return f"`{text}`"


def _table_text(text: str) -> str:
    return text.replace("|", "\\|").replace("\r", "").replace("\n", "<br>")


def _title(name: str) -> str:
    return name[:1].upper() + name[1:]
