from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..errors import BackendError
from ..model import BORDER_SIDES, BorderConfig, BorderSide, StyleConfig
from ..utils import index_to_col
from ..values import process_value


@runtime_checkable
class TableBackend(Protocol):
    def get_cell_value(self, col: int, row: int) -> str: ...

    def set_cell_value(self, col: int, row: int, value: Any) -> None: ...

    def merge_cells(self, start_col: int, start_row: int, end_col: int, end_row: int) -> None: ...

    def is_cell_merged(self, col: int, row: int) -> bool: ...

    def is_cell_merged_horizontally(self, col: int, row: int) -> bool: ...

    def apply_cell_border(self, col: int, row: int, side: str, border: BorderSide) -> None: ...

    def apply_range_border(
        self, start_col: int, start_row: int, end_col: int, end_row: int, border: BorderConfig
    ) -> None: ...

    def has_existing_border(self, col: int, row: int, side: str) -> bool: ...

    def apply_cell_style(self, col: int, row: int, style: StyleConfig) -> None: ...

    def apply_range_style(
        self, start_col: int, start_row: int, end_col: int, end_row: int, style: StyleConfig
    ) -> None: ...

    def get_column_letter(self, col: int) -> str: ...

    def set_column_width(self, col_letter: str, width: float) -> None: ...

    def process_value(self, value: Any, fmt: str) -> Any: ...


class BaseBackend:
    def __init__(self, *, list_separator: str = "") -> None:
        self.list_separator = list_separator

    def process_value(self, value: Any, fmt: str) -> Any:
        return process_value(value, fmt, self.list_separator)

    def get_column_letter(self, col: int) -> str:
        return index_to_col(col)

    def apply_range_border(
        self, start_col: int, start_row: int, end_col: int, end_row: int, border: BorderConfig
    ) -> None:
        for row in range(start_row, end_row + 1):
            for col in range(start_col, end_col + 1):
                if col == start_col and border.left is not None:
                    self.apply_cell_border(col, row, "left", border.left)
                if col == end_col and border.right is not None:
                    self.apply_cell_border(col, row, "right", border.right)
                if row == start_row and border.top is not None:
                    self.apply_cell_border(col, row, "top", border.top)
                if row == end_row and border.bottom is not None:
                    self.apply_cell_border(col, row, "bottom", border.bottom)

    def apply_range_style(
        self, start_col: int, start_row: int, end_col: int, end_row: int, style: StyleConfig
    ) -> None:
        for row in range(start_row, end_row + 1):
            for col in range(start_col, end_col + 1):
                self.apply_cell_style(col, row, style)

    def apply_cell_border(self, col: int, row: int, side: str, border: BorderSide) -> None:
        raise NotImplementedError

    def apply_cell_style(self, col: int, row: int, style: StyleConfig) -> None:
        raise NotImplementedError


def check_coordinates(col: int, row: int) -> None:
    if col < 1 or row < 1:
        raise BackendError(f"Invalid cell coordinates: col={col}, row={row}")


def check_side(side: str) -> None:
    if side not in BORDER_SIDES:
        raise BackendError(f"Unsupported border side: {side}")
