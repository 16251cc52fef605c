# tests/test_store.py

from __future__ import annotations

import pytest

from todo_store import StoreError, TodoListView


def test_create_then_list_adds_one_unchecked_entry(store) -> None:
    assert store.list() == []

    todo = store.create("Buy eggs")
    assert todo.id > 0

    items = store.list()
    assert len(items) == 1
    assert items[0].text == "Buy eggs"
    assert items[0].completed is False


def test_list_keeps_insertion_order_and_allows_duplicates(store) -> None:
    for text in ["b", "a", "b", ""]:
        store.create(text)

    assert [t.text for t in store.list()] == ["b", "a", "b", ""]


def test_toggle_flips_and_double_toggle_restores(store) -> None:
    todo = store.create("Walk dog")

    store.toggle(todo.id)
    assert store.get(todo.id).completed is True

    store.toggle(todo.id)
    assert store.get(todo.id).completed is False


def test_toggle_missing_returns_none(store) -> None:
    other = store.create("keep me")
    assert store.toggle(other.id + 100) is None
    assert store.get(other.id).completed is False


def test_set_completed_is_last_write_wins(store) -> None:
    todo = store.create("Pay rent")

    store.set_completed(todo.id, True)
    store.set_completed(todo.id, True)
    assert store.get(todo.id).completed is True

    store.set_completed(todo.id, False)
    assert store.get(todo.id).completed is False


def test_delete_removes_only_that_row(store) -> None:
    a = store.create("a")
    b = store.create("b")

    assert store.delete(a.id) is True
    assert [t.text for t in store.list()] == ["b"]

    assert store.delete(a.id) is False
    assert store.delete(b.id + 999) is False
    assert [t.id for t in store.list()] == [b.id]


def test_to_dict_shape(store) -> None:
    data = store.create("Buy milk").to_dict()
    assert set(data) == {"id", "text", "completed", "created_at"}
    assert data["text"] == "Buy milk"
    assert data["completed"] is False


def test_datastore_failure_is_store_error(store, broken_db) -> None:
    with pytest.raises(StoreError) as exc_info:
        store.list()
    assert exc_info.value.message == "Failed to list todo"

    with pytest.raises(StoreError):
        store.create("nope")


def test_list_view_states(store, broken_db) -> None:
    assert TodoListView.loading().status == "loading"

    view = TodoListView.load(store)
    assert view.status == "error"
    assert view.todos is None


def test_list_view_ready_and_empty(store) -> None:
    view = TodoListView.load(store)
    assert view.status == "ready"
    assert view.is_empty

    store.create("x")
    view = TodoListView.load(store)
    assert not view.is_empty
    assert view.todos[0]["text"] == "x"
