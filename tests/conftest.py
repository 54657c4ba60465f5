from __future__ import annotations

import pytest

from tablegrid.backends.memory import MemoryBackend
from tablegrid.model import Column

from tests.helpers import group, leaf


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def two_level_columns() -> list[Column]:
    return [
        group("Period", leaf("year"), leaf("quarter")),
        leaf("region"),
    ]


@pytest.fixture
def three_level_columns() -> list[Column]:
    return [
        leaf("id"),
        group(
            "Sales",
            group("Online", leaf("web"), leaf("app")),
            leaf("store"),
        ),
        group("Notes", leaf("comment")),
    ]
