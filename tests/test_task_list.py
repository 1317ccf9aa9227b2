"""Tests for the task collection."""

from datetime import datetime

import pytest

from bao_cli.domain import Deadline, TaskIndexError, TaskList, ToDo


@pytest.fixture
def filled() -> TaskList:
    return TaskList([
        ToDo("read book"),
        Deadline("return book", datetime(2024, 8, 28, 18, 0)),
        ToDo("Buy milk"),
    ])


class TestTaskList:
    """Test add/get/delete/size."""

    def test_empty_list(self):
        tasks = TaskList()
        assert tasks.size() == 0
        assert tasks.is_empty()
        assert len(tasks) == 0

    def test_add_appends_in_order(self):
        tasks = TaskList()
        first, second = ToDo("a"), ToDo("a")
        tasks.add(first)
        tasks.add(second)
        assert tasks.size() == 2
        assert tasks.get(0) is first
        assert tasks.get(1) is second

    def test_get_out_of_range(self, filled):
        with pytest.raises(TaskIndexError):
            filled.get(3)

    def test_get_negative_index_rejected(self, filled):
        with pytest.raises(TaskIndexError):
            filled.get(-1)

    def test_index_error_is_index_error(self, filled):
        with pytest.raises(IndexError):
            filled.delete(10)

    def test_delete_returns_removed_task(self, filled):
        expected = filled.get(1)
        removed = filled.delete(1)
        assert removed is expected
        assert filled.size() == 2
        assert filled.get(1).description == "Buy milk"

    def test_tasks_snapshot_is_a_copy(self, filled):
        snapshot = filled.tasks
        snapshot.clear()
        assert filled.size() == 3


class TestFindByKeyword:
    """Test substring search."""

    def test_matches_in_original_order(self, filled):
        found = filled.find_by_keyword("book")
        assert [t.description for t in found] == ["read book", "return book"]

    def test_case_sensitive(self, filled):
        assert filled.find_by_keyword("buy") == []
        assert len(filled.find_by_keyword("Buy")) == 1

    def test_no_match(self, filled):
        assert filled.find_by_keyword("zzz") == []

    def test_search_does_not_reorder(self, filled):
        before = filled.tasks
        filled.find_by_keyword("book")
        assert filled.tasks == before
