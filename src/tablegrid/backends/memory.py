from __future__ import annotations

from typing import Any

from ..errors import BackendError
from ..model import BorderSide, RangeRef, StyleConfig
from ..utils import make_range, range_contains, ranges_overlap
from .base import BaseBackend, check_coordinates, check_side


class MemoryBackend(BaseBackend):
    """Grid kept in plain dicts; records every primitive call in order."""

    def __init__(self, *, list_separator: str = "") -> None:
        super().__init__(list_separator=list_separator)
        self.values: dict[tuple[int, int], Any] = {}
        self.merges: list[RangeRef] = []
        self.borders: dict[tuple[int, int], dict[str, BorderSide]] = {}
        self.styles: dict[tuple[int, int], StyleConfig] = {}
        self.column_widths: dict[str, float] = {}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    @property
    def max_row(self) -> int:
        rows = [row for _, row in self.values]
        rows.extend(row for _, row in self.styles)
        rows.extend(row for _, row in self.borders)
        rows.extend(rng.end_row for rng in self.merges)
        return max(rows, default=0)

    @property
    def max_col(self) -> int:
        cols = [col for col, _ in self.values]
        cols.extend(col for col, _ in self.styles)
        cols.extend(col for col, _ in self.borders)
        cols.extend(rng.end_col for rng in self.merges)
        return max(cols, default=0)

    def get_cell_value(self, col: int, row: int) -> str:
        check_coordinates(col, row)
        value = self.values.get((col, row))
        return "" if value is None else str(value)

    def set_cell_value(self, col: int, row: int, value: Any) -> None:
        check_coordinates(col, row)
        self.calls.append(("set_cell_value", (col, row, value)))
        self.values[(col, row)] = value

    def merge_cells(self, start_col: int, start_row: int, end_col: int, end_row: int) -> None:
        check_coordinates(start_col, start_row)
        check_coordinates(end_col, end_row)
        self.calls.append(("merge_cells", (start_col, start_row, end_col, end_row)))
        rng = make_range(start_col, start_row, end_col, end_row)
        for existing in self.merges:
            if ranges_overlap(existing, rng):
                raise BackendError(f"Merge {rng.ref} overlaps existing merge {existing.ref}")
        self.merges.append(rng)

    def merge_at(self, col: int, row: int) -> RangeRef | None:
        for rng in self.merges:
            if range_contains(rng, row, col):
                return rng
        return None

    def is_cell_merged(self, col: int, row: int) -> bool:
        return self.merge_at(col, row) is not None

    def is_cell_merged_horizontally(self, col: int, row: int) -> bool:
        rng = self.merge_at(col, row)
        return rng is not None and rng.start_row == rng.end_row and rng.start_col != rng.end_col

    def apply_cell_border(self, col: int, row: int, side: str, border: BorderSide) -> None:
        check_coordinates(col, row)
        check_side(side)
        if not border.visible:
            return
        self.calls.append(("apply_cell_border", (col, row, side, border.style)))
        self.borders.setdefault((col, row), {})[side] = border

    def has_existing_border(self, col: int, row: int, side: str) -> bool:
        return side in self.borders.get((col, row), {})

    def apply_cell_style(self, col: int, row: int, style: StyleConfig) -> None:
        check_coordinates(col, row)
        self.calls.append(("apply_cell_style", (col, row)))
        self.styles[(col, row)] = style

    def apply_range_style(
        self, start_col: int, start_row: int, end_col: int, end_row: int, style: StyleConfig
    ) -> None:
        check_coordinates(start_col, start_row)
        check_coordinates(end_col, end_row)
        self.calls.append(("apply_range_style", (start_col, start_row, end_col, end_row)))
        for row in range(start_row, end_row + 1):
            for col in range(start_col, end_col + 1):
                self.styles[(col, row)] = style

    def set_column_width(self, col_letter: str, width: float) -> None:
        self.column_widths[col_letter] = width

    def border_style(self, col: int, row: int, side: str) -> str | None:
        border = self.borders.get((col, row), {}).get(side)
        return None if border is None else border.style

    def grid(self) -> list[list[Any]]:
        return [
            [self.values.get((col, row)) for col in range(1, self.max_col + 1)]
            for row in range(1, self.max_row + 1)
        ]
