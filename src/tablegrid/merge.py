from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

from .backends.base import TableBackend
from .data import lookup
from .errors import BackendError, FieldLookupError, RenderPhaseError, ValueProcessingError
from .log import RenderLog
from .model import Column, RangeRef, Table
from .utils import make_range
from .values import comparable_text, is_empty


def values_should_merge(conditions: Iterable[str], first: Any, second: Any) -> bool:
    empty_first = is_empty(first)
    empty_second = is_empty(second)
    for condition in conditions:
        if condition == "identical":
            if not empty_first and not empty_second and comparable_text(first) == comparable_text(second):
                return True
        elif condition == "empty":
            if empty_first and empty_second:
                return True
    return False


def conditions_compatible(first: Iterable[str], second: Iterable[str]) -> bool:
    return bool(set(first) & set(second))


@dataclass(slots=True)
class RangeFinder:
    conditions: frozenset[str]
    ranges: list[list[int]] = field(default_factory=list)
    current: list[int] = field(default_factory=list)
    last_value: Any = None

    def interrupt(self) -> None:
        self._close()
        self.current = []
        self.last_value = None

    def accept(self, index: int, value: Any) -> None:
        if not self.current:
            self.current = [index]
        elif values_should_merge(self.conditions, self.last_value, value):
            self.current.append(index)
        else:
            self._close()
            self.current = [index]
        self.last_value = value

    def finish(self) -> list[list[int]]:
        self._close()
        self.current = []
        return self.ranges

    def _close(self) -> None:
        if len(self.current) > 1:
            self.ranges.append(self.current)


class MergeEngine:
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
        self.merged: list[RangeRef] = []

    def process(self) -> list[RangeRef]:
        if self.table.write_header and self.table.columns:
            try:
                self.merge_headers()
            except (TypeError, ValueError, AttributeError, RecursionError) as exc:
                raise RenderPhaseError("header merging", str(exc)) from exc

        data_start = self.table.data_start_row
        for col_index, column in self.table.columns.indexed_leaves():
            self.merge_column(column, col_index, data_start)

        rows = self.table.visible_rows()
        for row_index, item in enumerate(rows):
            self.merge_row(row_index, item, data_start)

        return self.merged

    def merge_headers(self) -> None:
        depth = self.table.columns.max_depth()
        if depth <= 1:
            return
        self._merge_header_level(self.table.columns.roots, 1, depth, 1)

    def _merge_header_level(self, columns: Sequence[Column], row: int, depth: int, start_col: int) -> None:
        col = start_col
        for column in columns:
            if column.is_leaf:
                if row < depth:
                    self._merge(col, row, col, depth, "header cells vertically")
                col += 1
                continue

            span = column.leaf_count()
            end_col = col + span - 1
            if end_col > col:
                self._merge(col, row, end_col, row, "header cells horizontally")
            if row < depth:
                self._merge_header_level(column.children, row + 1, depth, col)
            col += span

    def merge_column(self, column: Column, col_index: int, data_start: int) -> None:
        if column.merge is None or not column.merge.vertical:
            return
        for indices in self.find_vertical_ranges(column, col_index):
            start_row = indices[0] + data_start
            end_row = indices[-1] + data_start
            self._merge(col_index, start_row, col_index, end_row, "cells vertically")

    def find_vertical_ranges(self, column: Column, col_index: int) -> list[list[int]]:
        conditions = column.merge.vertical if column.merge is not None else frozenset()
        finder = RangeFinder(conditions)
        for row_index, item in enumerate(self.table.visible_rows()):
            row_config = self.table.row_config(row_index)
            if row_config is not None and (row_config.merge is not None or not row_config.mergeable):
                finder.interrupt()
                continue
            if not self._cell_mergeable(col_index, row_index):
                finder.interrupt()
                continue
            self._feed(finder, row_index, item, column)
        return finder.finish()

    def merge_row(self, row_index: int, item: Mapping[str, Any], data_start: int) -> None:
        row_num = row_index + data_start
        row_config = self.table.row_config(row_index)
        leaves = self.table.columns.indexed_leaves()

        if row_config is not None and row_config.merge is not None and row_config.merge.horizontal:
            ranges = self.find_horizontal_ranges(row_index, item, leaves, row_config.merge.horizontal)
            self._apply_horizontal(ranges, row_num)
            return

        if row_config is not None and not row_config.mergeable:
            return

        for group, conditions in self.horizontal_groups():
            ranges = self.find_horizontal_ranges(row_index, item, group, conditions)
            self._apply_horizontal(ranges, row_num)

    def horizontal_groups(self) -> list[tuple[list[tuple[int, Column]], frozenset[str]]]:
        groups: list[tuple[list[tuple[int, Column]], frozenset[str]]] = []
        current: list[tuple[int, Column]] = []
        current_conditions: frozenset[str] = frozenset()

        for col_index, column in self.table.columns.indexed_leaves():
            conditions = column.merge.horizontal if column.merge is not None else frozenset()
            if current and conditions_compatible(current_conditions, conditions):
                current.append((col_index, column))
                continue
            if len(current) > 1 and current_conditions:
                groups.append((current, current_conditions))
            current = [(col_index, column)]
            current_conditions = conditions

        if len(current) > 1 and current_conditions:
            groups.append((current, current_conditions))
        return groups

    def find_horizontal_ranges(
        self,
        row_index: int,
        item: Mapping[str, Any],
        columns: Sequence[tuple[int, Column]],
        conditions: frozenset[str],
    ) -> list[list[int]]:
        finder = RangeFinder(conditions)
        for col_index, column in columns:
            if not self._cell_mergeable(col_index, row_index):
                finder.interrupt()
                continue
            self._feed(finder, col_index, item, column)
        return finder.finish()

    def _feed(self, finder: RangeFinder, index: int, item: Mapping[str, Any], column: Column) -> None:
        try:
            value = lookup(item, column.name)
        except FieldLookupError:
            finder.interrupt()
            return
        try:
            processed = self.backend.process_value(value, column.format)
        except ValueProcessingError as exc:
            self.log.debug("skipping unformattable value in %s: %s", column.header_label, exc)
            return
        finder.accept(index, processed)

    def _cell_mergeable(self, col_index: int, row_index: int) -> bool:
        cell_config = self.table.cell_config(col_index, row_index)
        return cell_config is None or cell_config.mergeable

    def _apply_horizontal(self, ranges: list[list[int]], row_num: int) -> None:
        for indices in ranges:
            self._merge(indices[0], row_num, indices[-1], row_num, "cells horizontally")

    def _merge(self, start_col: int, start_row: int, end_col: int, end_row: int, what: str) -> bool:
        try:
            self.backend.merge_cells(start_col, start_row, end_col, end_row)
        except BackendError as exc:
            ref = make_range(start_col, start_row, end_col, end_row).ref
            self.log.warn("Failed to merge %s %s: %s", what, ref, exc)
            return False
        self.merged.append(make_range(start_col, start_row, end_col, end_row))
        return True
