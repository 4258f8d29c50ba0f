"""Tests for the in-memory task store."""

import threading

import pytest

from mytodos.errors import NotFoundError, ValidationError
from mytodos.store import TaskStore, get_task_store, reset_task_store


class TestTaskStore:
    """Test TaskStore CRUD behavior."""

    def test_create_assigns_id_and_trims(self, store):
        """Created tasks get a non-empty id and a trimmed description."""
        task = store.create("  Buy milk  ")

        assert task.id
        assert task.description == "Buy milk"
        assert task.is_completed is False

    def test_created_ids_are_unique(self, store):
        """Created ids are unique."""
        ids = {store.create(f"Task {i}").id for i in range(50)}
        assert len(ids) == 50

    @pytest.mark.parametrize("description", ["", "   ", "\t\n", None])
    def test_create_rejects_blank_description(self, store, description):
        with pytest.raises(ValidationError):
            store.create(description)
        assert store.list() == []

    def test_list_preserves_insertion_order(self, store):
        first = store.create("First")
        second = store.create("Second")
        third = store.create("Third")

        assert [t.id for t in store.list()] == [first.id, second.id, third.id]

    def test_created_task_listed_exactly_once(self, store):
        store.create("Other")
        task = store.create("Mine")

        matches = [t for t in store.list() if t == task]
        assert len(matches) == 1
        assert store.list()[-1] == task

    def test_list_returns_copies(self, store):
        task = store.create("Original")

        listed = store.list()
        listed[0].description = "Changed"
        listed.clear()

        assert store.get(task.id).description == "Original"
        assert len(store.list()) == 1

    def test_update_replaces_state(self, store):
        task = store.create("Buy milk")

        store.update(task.id, "Buy oat milk", True)

        updated = store.list()[0]
        assert updated.id == task.id
        assert updated.description == "Buy oat milk"
        assert updated.is_completed is True

    def test_update_keeps_description_as_given(self, store):
        """Only create trims; update stores exactly what it was given."""
        task = store.create("Buy milk")

        store.update(task.id, "  Buy bread  ", True)

        assert store.get(task.id).description == "  Buy bread  "

    def test_update_unknown_id(self, store):
        with pytest.raises(NotFoundError):
            store.update("missing", "Anything", True)

    def test_update_rejects_blank_description(self, store):
        task = store.create("Keep me")

        with pytest.raises(ValidationError):
            store.update(task.id, "  ", True)

        assert store.get(task.id).description == "Keep me"
        assert store.get(task.id).is_completed is False

    def test_delete_removes_task(self, store):
        keep = store.create("Keep")
        drop = store.create("Drop")

        store.delete(drop.id)

        assert [t.id for t in store.list()] == [keep.id]

    def test_delete_twice(self, store):
        """First delete succeeds, the second reports the task as missing."""
        task = store.create("Once")

        store.delete(task.id)
        with pytest.raises(NotFoundError):
            store.delete(task.id)

    def test_order_after_delete(self, store):
        a = store.create("A")
        b = store.create("B")
        store.delete(a.id)
        c = store.create("C")

        assert [t.id for t in store.list()] == [b.id, c.id]

    def test_concurrent_creates(self, store):
        """Parallel creates all land in the registry."""
        def worker():
            for i in range(100):
                store.create(f"Task {i}")

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert store.count() == 400
        assert len({t.id for t in store.list()}) == 400

    def test_global_store_singleton(self):
        reset_task_store()
        try:
            assert get_task_store() is get_task_store()
            assert isinstance(get_task_store(), TaskStore)
        finally:
            reset_task_store()
