from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from .backends.base import TableBackend
from .data import lookup
from .errors import BackendError, FieldLookupError, RenderPhaseError, ValueProcessingError
from .log import RenderLog
from .merge import MergeEngine
from .model import Column, RenderOptions, RenderResult, Table
from .style import StyleResolver


class TableRenderer:
    def __init__(self, options: RenderOptions | None = None, *, logger: logging.Logger | None = None) -> None:
        self.options = options or RenderOptions()
        self.logger = logger

    def render(self, table: Table, backend: TableBackend) -> RenderResult:
        rows = table.visible_rows()
        result = RenderResult(
            header_rows=table.header_rows,
            data_start_row=table.data_start_row,
            row_count=len(rows),
            column_count=table.columns.leaf_count(),
        )
        log = RenderLog(self.logger, result.warnings)

        if table.header_rows:
            self._write_header_level(table.columns.roots, 1, table.header_rows, 1, backend, log)
        self._write_rows(table, rows, backend, log)

        engine = MergeEngine(table, backend, logger=self.logger, warnings=result.warnings)
        result.merges = engine.process()
        StyleResolver(table, backend, logger=self.logger, warnings=result.warnings).render()

        if self.options.column_width is not None:
            self._fit_columns(result.column_count, backend, log)
        return result

    def _write_header_level(
        self,
        columns: Sequence[Column],
        row: int,
        depth: int,
        start_col: int,
        backend: TableBackend,
        log: RenderLog,
    ) -> int:
        col = start_col
        for column in columns:
            try:
                backend.set_cell_value(col, row, column.header_label)
            except BackendError as exc:
                log.warn("Failed to set header cell value at (%d,%d): %s", col, row, exc)

            if column.is_leaf:
                col += 1
                continue
            if row < depth:
                self._write_header_level(column.children, row + 1, depth, col, backend, log)
            col += column.leaf_count()
        return col

    def _write_rows(
        self,
        table: Table,
        rows: list[Mapping[str, Any]],
        backend: TableBackend,
        log: RenderLog,
    ) -> None:
        for row_index, item in enumerate(rows):
            row = row_index + table.data_start_row
            for col, column in table.columns.indexed_leaves():
                try:
                    value = lookup(item, column.name)
                except FieldLookupError:
                    continue
                try:
                    processed = backend.process_value(value, column.format)
                except ValueProcessingError as exc:
                    raise RenderPhaseError("writing values", f"column {column.header_label!r}: {exc}") from exc
                try:
                    backend.set_cell_value(col, row, processed)
                except BackendError as exc:
                    log.warn("Failed to set cell value at (%d,%d): %s", col, row, exc)

    def _fit_columns(self, column_count: int, backend: TableBackend, log: RenderLog) -> None:
        width = self.options.column_width
        for col in range(1, column_count + 1):
            letter = backend.get_column_letter(col)
            try:
                backend.set_column_width(letter, width)
            except BackendError as exc:
                log.warn("Failed to set width of column %s: %s", letter, exc)
