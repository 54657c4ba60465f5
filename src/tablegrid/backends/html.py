from __future__ import annotations

from html import escape as html_escape
from typing import Any

from ..model import BorderSide, RangeRef, StyleConfig
from ..utils import iter_cells_in_range, rowcol_to_coord
from .memory import MemoryBackend

_BORDER_CSS = {
    "thin": "1px solid",
    "medium": "2px solid",
    "dashed": "1px dashed",
    "dotted": "1px dotted",
    "thick": "3px solid",
    "double": "3px double",
}


class HtmlBackend(MemoryBackend):
    def __init__(self, *, list_separator: str = "", column_width_px: float = 7.0) -> None:
        super().__init__(list_separator=list_separator)
        self.column_width_px = column_width_px

    def to_html(
        self,
        title: str = "Table",
        header_rows: int = 0,
        *,
        min_rows: int = 0,
        min_cols: int = 0,
    ) -> str:
        parts: list[str] = []

        parts.append("<!doctype html>")
        parts.append('<html lang="en">')
        parts.append("<head>")
        parts.append('<meta charset="utf-8">')
        parts.append(f"<title>{html_escape(title)}</title>")
        parts.append(_html_css())
        parts.append("</head>")
        parts.append("<body>")
        parts.append('<main class="page">')
        parts.append(self.table_html(header_rows, min_rows=min_rows, min_cols=min_cols))
        parts.append("</main>")
        parts.append("</body>")
        parts.append("</html>")

        return "\n".join(parts) + "\n"

    def table_html(self, header_rows: int = 0, *, min_rows: int = 0, min_cols: int = 0) -> str:
        max_row = max(self.max_row, min_rows)
        max_col = max(self.max_col, min_cols)
        if not max_row or not max_col:
            return '<p class="empty">No renderable cells.</p>'

        merge_anchor: dict[tuple[int, int], tuple[int, int, str]] = {}
        merge_covered: set[tuple[int, int]] = set()
        merge_borders: dict[tuple[int, int], dict[str, BorderSide]] = {}
        for m in self.merges:
            merge_anchor[(m.start_col, m.start_row)] = (
                m.end_row - m.start_row + 1,
                m.end_col - m.start_col + 1,
                m.ref,
            )
            merge_borders[(m.start_col, m.start_row)] = self._edge_borders(m)
            for row, col in iter_cells_in_range(m):
                if (col, row) != (m.start_col, m.start_row):
                    merge_covered.add((col, row))

        out: list[str] = []
        out.append('<table class="tg-grid">')
        if self.column_widths:
            out.append("<colgroup>")
            for col in range(1, max_col + 1):
                width = self.column_widths.get(self.get_column_letter(col))
                if width is None:
                    out.append("<col>")
                else:
                    out.append(f'<col style="width:{width * self.column_width_px:.1f}px">')
            out.append("</colgroup>")

        for row in range(1, max_row + 1):
            if row == 1 and header_rows:
                out.append("<thead>")
            if row == header_rows + 1:
                out.append("<tbody>")

            out.append("<tr>")
            tag = "th" if row <= header_rows else "td"
            for col in range(1, max_col + 1):
                if (col, row) in merge_covered:
                    continue
                borders = merge_borders.get((col, row), self.borders.get((col, row), {}))
                out.append(self._cell_html(tag, col, row, merge_anchor.get((col, row)), borders))
            out.append("</tr>")

            if row == header_rows:
                out.append("</thead>")
        if max_row > header_rows:
            out.append("</tbody>")
        out.append("</table>")
        return "\n".join(out)

    def _cell_html(
        self,
        tag: str,
        col: int,
        row: int,
        anchor: tuple[int, int, str] | None,
        borders: dict[str, BorderSide],
    ) -> str:
        coord = rowcol_to_coord(row, col)
        attrs: list[str] = []
        if anchor is not None:
            rowspan, colspan, merge_ref = anchor
            if rowspan > 1:
                attrs.append(f'rowspan="{rowspan}"')
            if colspan > 1:
                attrs.append(f'colspan="{colspan}"')
            attrs.append(f'data-merge="{html_escape(merge_ref)}"')

        text_html = _value_html(self.values.get((col, row)))
        classes = ["tg-cell"]
        if not text_html.strip():
            classes.append("tg-empty")
        attrs.append(f'class="{" ".join(classes)}"')
        attrs.append(f'data-coord="{coord}"')

        css = self._cell_css(col, row, borders)
        if css:
            attrs.append(f'style="{html_escape(css)}"')
        return f"<{tag} {' '.join(attrs)}>{text_html}</{tag}>"

    def _cell_css(self, col: int, row: int, borders: dict[str, BorderSide]) -> str:
        pieces: list[str] = []
        style = self.styles.get((col, row))
        if style is not None:
            pieces.extend(style_css(style))
        for side, border in sorted(borders.items()):
            pieces.append(border_css(side, border))
        return ";".join(pieces) + (";" if pieces else "")

    def _edge_borders(self, rng: RangeRef) -> dict[str, BorderSide]:
        """Outer sides of a merged range, taken from whichever covered cell carries them."""
        edges: dict[str, BorderSide] = {}
        for row, col in iter_cells_in_range(rng):
            for side, border in self.borders.get((col, row), {}).items():
                on_edge = (
                    (side == "left" and col == rng.start_col)
                    or (side == "right" and col == rng.end_col)
                    or (side == "top" and row == rng.start_row)
                    or (side == "bottom" and row == rng.end_row)
                )
                if on_edge:
                    edges.setdefault(side, border)
        return edges


def style_css(style: StyleConfig) -> list[str]:
    pieces: list[str] = []
    if style.bold:
        pieces.append("font-weight:bold")
    if style.italic:
        pieces.append("font-style:italic")
    if style.underline:
        pieces.append("text-decoration:underline")
    if style.text_color:
        pieces.append(f"color:{_css_color(style.text_color)}")
    if style.background_color:
        pieces.append(f"background:{_css_color(style.background_color)}")
    if style.font_size:
        pieces.append(f"font-size:{style.font_size:g}pt")
    if style.font_family:
        pieces.append(f"font-family:{style.font_family}")
    alignment = style.alignment_values()
    if alignment is not None:
        horizontal, vertical = alignment
        pieces.append(f"text-align:{horizontal}")
        pieces.append(f"vertical-align:{'middle' if vertical == 'center' else vertical}")
    return pieces


def border_css(side: str, border: BorderSide) -> str:
    return f"border-{side}:{_BORDER_CSS.get(border.style, '1px solid')} {_css_color(border.color)}"


def _css_color(value: str) -> str:
    return value if value.startswith("#") else f"#{value}"


def _value_html(value: Any) -> str:
    if value is None:
        return ""
    return html_escape(str(value))


def _html_css() -> str:
    return """<style>
:root {
  --bg-head: #edf2f7;
  --text: #111827;
}
* { box-sizing: border-box; }
body { margin: 0; background: #fff; color: var(--text); font: 14px/1.5 -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; }
.page { max-width: 99vw; margin: 0 auto; padding: 18px 14px 80px; }
.empty { color: #6b7280; font-style: italic; }
.tg-grid { border-collapse: collapse; font: 12px/1.3 sans-serif; table-layout: fixed; background: #fff; }
.tg-grid th, .tg-grid td { padding: 2px 6px; vertical-align: top; white-space: pre-wrap; }
.tg-grid th { background: var(--bg-head); }
.tg-grid .tg-empty { color: transparent; }
</style>"""
