from __future__ import annotations

from typing import Iterable

from .model import RangeRef


def index_to_col(index: int) -> str:
    if index < 1:
        raise ValueError("Column index must be >= 1")
    result: list[str] = []
    value = index
    while value > 0:
        value, rem = divmod(value - 1, 26)
        result.append(chr(65 + rem))
    return "".join(reversed(result))


def rowcol_to_coord(row: int, col: int) -> str:
    if row < 1 or col < 1:
        raise ValueError("row/col must be >= 1")
    return f"{index_to_col(col)}{row}"


def make_range(start_col: int, start_row: int, end_col: int, end_row: int) -> RangeRef:
    sc, ec = min(start_col, end_col), max(start_col, end_col)
    sr, er = min(start_row, end_row), max(start_row, end_row)
    start = rowcol_to_coord(sr, sc)
    end = rowcol_to_coord(er, ec)
    ref = start if start == end else f"{start}:{end}"
    return RangeRef(ref=ref, start_row=sr, start_col=sc, end_row=er, end_col=ec)


def ranges_overlap(a: RangeRef, b: RangeRef) -> bool:
    return not (
        a.end_row < b.start_row
        or b.end_row < a.start_row
        or a.end_col < b.start_col
        or b.end_col < a.start_col
    )


def range_contains(rng: RangeRef, row: int, col: int) -> bool:
    return rng.start_row <= row <= rng.end_row and rng.start_col <= col <= rng.end_col


def iter_cells_in_range(rng: RangeRef) -> Iterable[tuple[int, int]]:
    for row in range(rng.start_row, rng.end_row + 1):
        for col in range(rng.start_col, rng.end_col + 1):
            yield row, col
