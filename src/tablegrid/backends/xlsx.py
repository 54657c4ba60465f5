from __future__ import annotations

from pathlib import Path
from typing import IO, Any

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.cell_range import CellRange
from openpyxl.worksheet.worksheet import Worksheet

from ..errors import BackendError
from ..model import BORDER_SIDES, BorderSide, StyleConfig
from .base import BaseBackend, check_coordinates, check_side


def _color(value: str) -> str:
    return value.lstrip("#").upper()


def convert_style(style: StyleConfig) -> dict[str, Any]:
    converted: dict[str, Any] = {}
    if style.has_font():
        converted["font"] = Font(
            bold=style.bold or None,
            italic=style.italic or None,
            underline=style.underline or None,
            color=_color(style.text_color) if style.text_color else None,
            size=style.font_size if style.font_size else None,
            name=style.font_family or None,
        )
    if style.background_color:
        color = _color(style.background_color)
        converted["fill"] = PatternFill(fill_type="solid", start_color=color, end_color=color)
    alignment = style.alignment_values()
    if alignment is not None:
        horizontal, vertical = alignment
        converted["alignment"] = Alignment(horizontal=horizontal, vertical=vertical)
    return converted


class XlsxBackend(BaseBackend):
    def __init__(
        self,
        workbook: Workbook | None = None,
        sheet_name: str = "Sheet1",
        *,
        list_separator: str = "",
    ) -> None:
        super().__init__(list_separator=list_separator)
        if workbook is None:
            workbook = Workbook()
            workbook.active.title = sheet_name
        self.workbook = workbook
        self.sheet_name = sheet_name
        self.sheet: Worksheet = (
            workbook[sheet_name] if sheet_name in workbook.sheetnames else workbook.create_sheet(sheet_name)
        )
        self.workbook.active = self.workbook.sheetnames.index(sheet_name)

    def get_cell_value(self, col: int, row: int) -> str:
        check_coordinates(col, row)
        value = self.sheet.cell(row=row, column=col).value
        return "" if value is None else str(value)

    def set_cell_value(self, col: int, row: int, value: Any) -> None:
        check_coordinates(col, row)
        try:
            self.sheet.cell(row=row, column=col, value=value)
        except (ValueError, TypeError, AttributeError) as exc:
            raise BackendError(f"Cannot write {value!r} to {get_column_letter(col)}{row}: {exc}") from exc

    def merge_cells(self, start_col: int, start_row: int, end_col: int, end_row: int) -> None:
        check_coordinates(start_col, start_row)
        check_coordinates(end_col, end_row)
        for existing in self.sheet.merged_cells.ranges:
            if (
                existing.min_row <= end_row
                and start_row <= existing.max_row
                and existing.min_col <= end_col
                and start_col <= existing.max_col
            ):
                raise BackendError(f"Merge overlaps existing merge {existing.coord}")
        try:
            self.sheet.merge_cells(
                start_row=start_row,
                start_column=start_col,
                end_row=end_row,
                end_column=end_col,
            )
        except ValueError as exc:
            raise BackendError(str(exc)) from exc

    def is_cell_merged(self, col: int, row: int) -> bool:
        return self._merge_at(col, row) is not None

    def is_cell_merged_horizontally(self, col: int, row: int) -> bool:
        rng = self._merge_at(col, row)
        return rng is not None and rng.min_row == rng.max_row and rng.min_col != rng.max_col

    def _merge_at(self, col: int, row: int) -> CellRange | None:
        for rng in self.sheet.merged_cells.ranges:
            if rng.min_row <= row <= rng.max_row and rng.min_col <= col <= rng.max_col:
                return rng
        return None

    def apply_cell_border(self, col: int, row: int, side: str, border: BorderSide) -> None:
        check_coordinates(col, row)
        check_side(side)
        if not border.visible:
            return
        cell = self.sheet.cell(row=row, column=col)
        current = cell.border
        sides = {name: getattr(current, name) for name in BORDER_SIDES}
        try:
            sides[side] = Side(style=border.style, color=_color(border.color))
            cell.border = Border(**sides)
        except (ValueError, TypeError) as exc:
            raise BackendError(f"Cannot apply {side} border to {cell.coordinate}: {exc}") from exc

    def has_existing_border(self, col: int, row: int, side: str) -> bool:
        check_side(side)
        current = getattr(self.sheet.cell(row=row, column=col).border, side)
        return current is not None and current.style is not None

    def apply_cell_style(self, col: int, row: int, style: StyleConfig) -> None:
        check_coordinates(col, row)
        cell = self.sheet.cell(row=row, column=col)
        try:
            for attr, value in convert_style(style).items():
                setattr(cell, attr, value)
        except (ValueError, TypeError) as exc:
            raise BackendError(f"Cannot style {cell.coordinate}: {exc}") from exc

    def get_column_letter(self, col: int) -> str:
        return get_column_letter(col)

    def set_column_width(self, col_letter: str, width: float) -> None:
        self.sheet.column_dimensions[col_letter].width = width

    def save(self, target: str | Path | IO[bytes]) -> None:
        self.workbook.save(target)
