from __future__ import annotations

import pytest

from tablegrid.model import Column, ColumnTree, Table

from tests.helpers import group, leaf


def test_empty_tree_has_depth_one_and_no_leaves() -> None:
    tree = ColumnTree([])
    assert tree.max_depth() == 1
    assert tree.leaf_count() == 0
    assert tree.leaves() == []
    assert not tree


def test_flat_columns() -> None:
    tree = ColumnTree([leaf("a"), leaf("b"), leaf("c")])
    assert tree.max_depth() == 1
    assert tree.leaf_count() == 3
    assert [c.name for c in tree.leaves()] == ["a", "b", "c"]


def test_hierarchy_depth_and_leaf_order(three_level_columns) -> None:
    tree = ColumnTree(three_level_columns)
    assert tree.max_depth() == 3
    assert tree.leaf_count() == 5
    assert [c.name for c in tree.leaves()] == ["id", "web", "app", "store", "comment"]


def test_per_node_leaf_count(three_level_columns) -> None:
    sales = three_level_columns[1]
    assert sales.leaf_count() == 3
    assert sales.children[0].leaf_count() == 2
    assert three_level_columns[0].leaf_count() == 1
    assert sales.depth() == 3


def test_physical_index_uses_column_ids(three_level_columns) -> None:
    tree = ColumnTree(three_level_columns)
    app = three_level_columns[1].children[0].children[1]
    assert tree.physical_index(app) == 3
    assert tree.leaf_at(3) is app
    assert [idx for idx, _ in tree.indexed_leaves()] == [1, 2, 3, 4, 5]


def test_equal_looking_columns_keep_distinct_ids() -> None:
    first = leaf("x")
    second = leaf("x")
    tree = ColumnTree([first, second])
    assert first.column_id != second.column_id
    assert tree.physical_index(first) == 1
    assert tree.physical_index(second) == 2


def test_physical_index_of_foreign_column_raises() -> None:
    tree = ColumnTree([leaf("a")])
    with pytest.raises(KeyError):
        tree.physical_index(Column(name="a"))
    with pytest.raises(IndexError):
        tree.leaf_at(2)


def test_data_start_row_follows_header_depth(two_level_columns) -> None:
    table = Table(rows=[], columns=two_level_columns, write_header=True)
    assert table.header_rows == 2
    assert table.data_start_row == 3

    table = Table(rows=[], columns=two_level_columns, write_header=False)
    assert table.header_rows == 0
    assert table.data_start_row == 1

    table = Table(rows=[], columns=[], write_header=True)
    assert table.header_rows == 0
    assert table.data_start_row == 1


def test_row_limit() -> None:
    table = Table(rows=[{"a": i} for i in range(5)], columns=[leaf("a")], limit=2)
    assert table.visible_rows() == [{"a": 0}, {"a": 1}]
    table.limit = 0
    assert len(table.visible_rows()) == 5


def test_group_label_falls_back_to_name() -> None:
    assert leaf("amount", label="Amount").header_label == "Amount"
    assert Column(name="amount").header_label == "amount"
    assert group("G", leaf("a")).header_label == "G"


def test_negative_row_limit_rejected() -> None:
    with pytest.raises(ValueError):
        Table(rows=[{"a": 1}], columns=[leaf("a")], limit=-1)
