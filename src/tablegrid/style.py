from __future__ import annotations

import logging

from .backends.base import TableBackend
from .errors import BackendError, RenderPhaseError
from .log import RenderLog
from .model import BorderConfig, BorderSide, Column, StyleConfig, Table

HEADER_STYLE = StyleConfig(bold=True, background_color="#E0E0E0", alignment="center")
HEADER_BOTTOM_BORDER = BorderSide(style="thin")


def resolve_style(table: Table, column: Column, col_index: int, row_index: int) -> StyleConfig | None:
    cell_config = table.cell_config(col_index, row_index)
    if cell_config is not None and cell_config.style is not None:
        return cell_config.style
    row_config = table.row_config(row_index)
    if row_config is not None and row_config.style is not None:
        return row_config.style
    return column.style


def column_cell_borders(border: BorderConfig, row: int, first_row: int, last_row: int) -> BorderConfig:
    if border.inner is not None:
        return border
    return BorderConfig(
        left=border.left,
        right=border.right,
        top=border.top if row == first_row else None,
        bottom=border.bottom if row == last_row else None,
    )


def row_cell_borders(border: BorderConfig, col: int, first_col: int, last_col: int) -> BorderConfig:
    if border.inner is not None:
        return border
    return BorderConfig(
        left=border.left if col == first_col else None,
        right=border.right if col == last_col else None,
        top=border.top,
        bottom=border.bottom,
    )


class StyleResolver:
    def __init__(
        self,
        table: Table,
        backend: TableBackend,
        *,
        logger: logging.Logger | None = None,
        warnings: list[str] | None = None,
    ) -> None:
        self.table = table
        self.backend = backend
        self.log = RenderLog(logger, warnings)

    def render(self) -> None:
        rows = self.table.visible_rows()
        first_row = self.table.data_start_row
        last_row = first_row + len(rows) - 1
        try:
            if self.table.header_rows:
                self.apply_header_styles()
            self.apply_cell_styles(first_row, len(rows))
            self.apply_column_borders(first_row, last_row)
            for row_index in range(len(rows)):
                self.apply_row_borders(row_index, row_index + first_row)
            self.apply_cell_borders(first_row, len(rows))
        except (TypeError, ValueError, AttributeError) as exc:
            raise RenderPhaseError("styling", str(exc)) from exc

    def apply_header_styles(self) -> None:
        depth = self.table.header_rows
        total = self.table.columns.leaf_count()

        for col in range(1, total + 1):
            try:
                self.backend.apply_cell_border(col, depth, "bottom", HEADER_BOTTOM_BORDER)
            except BackendError as exc:
                self.log.warn("Failed to apply header bottom border at column %d: %s", col, exc)

        try:
            self.backend.apply_range_style(1, 1, total, depth, HEADER_STYLE)
        except BackendError as exc:
            self.log.warn("Failed to apply header range style: %s", exc)
            for row in range(1, depth + 1):
                for col in range(1, total + 1):
                    self._style_cell(col, row, HEADER_STYLE, "header")

    def apply_cell_styles(self, first_row: int, row_count: int) -> None:
        for row_index in range(row_count):
            for col_index, column in self.table.columns.indexed_leaves():
                style = resolve_style(self.table, column, col_index, row_index)
                if style is not None:
                    self._style_cell(col_index, row_index + first_row, style, "cell")

    def apply_column_borders(self, first_row: int, last_row: int) -> None:
        for col_index, column in self.table.columns.indexed_leaves():
            if column.border is None or not column.border.has_borders():
                continue
            for row in range(first_row, last_row + 1):
                borders = column_cell_borders(column.border, row, first_row, last_row)
                self._border_cell(col_index, row, borders, "column")

    def apply_row_borders(self, row_index: int, row: int) -> None:
        row_config = self.table.row_config(row_index)
        if row_config is None or row_config.border is None or not row_config.border.has_borders():
            return
        total = self.table.columns.leaf_count()
        for col in range(1, total + 1):
            borders = row_cell_borders(row_config.border, col, 1, total)
            self._border_cell(col, row, borders, "row")

    def apply_cell_borders(self, first_row: int, row_count: int) -> None:
        total = self.table.columns.leaf_count()
        for col_index in sorted(self.table.cell_configs):
            by_row = self.table.cell_configs[col_index]
            for row_index in sorted(by_row):
                border = by_row[row_index].border
                if border is None or not border.has_borders():
                    continue
                if not (1 <= col_index <= total and 0 <= row_index < row_count):
                    self.log.debug("cell border outside the grid: col=%d row=%d", col_index, row_index)
                    continue
                self._border_cell(col_index, row_index + first_row, border, "cell-specific")

    def _style_cell(self, col: int, row: int, style: StyleConfig, scope: str) -> None:
        try:
            self.backend.apply_cell_style(col, row, style)
        except BackendError as exc:
            self.log.warn("Failed to apply %s style at (%d,%d): %s", scope, col, row, exc)

    def _border_cell(self, col: int, row: int, borders: BorderConfig, scope: str) -> None:
        try:
            for side, border in borders.sides():
                self.backend.apply_cell_border(col, row, side, border)
        except BackendError as exc:
            self.log.warn("Failed to apply %s border at (%d,%d): %s", scope, col, row, exc)
