"""Tests for HistoryManager undo/redo semantics."""

from __future__ import annotations

import pytest

from chisel.models.overlay import DeleteOperation, OverlaySnapshot
from chisel.overlay import store
from chisel.overlay.history import HistoryManager
from tests.conftest import make_message


def _delete(snapshot: OverlaySnapshot, msg_id: str) -> OverlaySnapshot:
    return store.set_operation(snapshot, msg_id, DeleteOperation(original=make_message(msg_id)))


class TestHistoryManager:
    def test_initial_state(self) -> None:
        history = HistoryManager()
        assert history.current.is_empty
        assert history.can_undo is False
        assert history.can_redo is False

    def test_commit_pushes_past(self) -> None:
        history = HistoryManager()
        assert history.commit(_delete(history.current, "m1")) is True
        assert history.can_undo is True
        assert history.undo_depth == 1

    def test_commit_current_is_noop(self) -> None:
        history = HistoryManager()
        assert history.commit(history.current) is False
        assert history.commit(store.remove_operation(history.current, "m1")) is False
        assert history.can_undo is False

    def test_commit_equal_but_distinct_snapshot_is_a_step(self) -> None:
        history = HistoryManager()
        assert history.commit(OverlaySnapshot.empty()) is True
        assert history.undo_depth == 1

    def test_undo_redo_swap(self) -> None:
        history = HistoryManager()
        first = _delete(history.current, "m1")
        history.commit(first)
        second = _delete(history.current, "m2")
        history.commit(second)

        assert history.undo() is True
        assert history.current is first
        assert history.can_redo is True

        assert history.redo() is True
        assert history.current is second
        assert history.can_redo is False

    def test_undo_at_bottom_is_noop(self) -> None:
        history = HistoryManager()
        assert history.undo() is False
        assert history.current.is_empty

    def test_redo_at_top_is_noop(self) -> None:
        history = HistoryManager()
        history.commit(_delete(history.current, "m1"))
        assert history.redo() is False
        assert history.undo_depth == 1

    def test_commit_clears_future(self) -> None:
        history = HistoryManager()
        history.commit(_delete(history.current, "m1"))
        history.undo()
        assert history.can_redo is True
        history.commit(_delete(history.current, "m2"))
        assert history.can_redo is False

    def test_noop_commit_keeps_future(self) -> None:
        history = HistoryManager()
        history.commit(_delete(history.current, "m1"))
        history.undo()
        history.commit(store.remove_operation(history.current, "missing"))
        assert history.can_redo is True

    def test_round_trip(self) -> None:
        history = HistoryManager(max_depth=None)
        for i in range(10):
            history.commit(_delete(history.current, f"m{i}"))
        final = history.current

        while history.can_undo:
            history.undo()
        assert history.current.is_empty

        while history.can_redo:
            history.redo()
        assert history.current == final

    def test_max_depth_evicts_oldest(self) -> None:
        history = HistoryManager(max_depth=3)
        for i in range(5):
            history.commit(_delete(history.current, f"m{i}"))
        assert history.undo_depth == 3

        while history.can_undo:
            history.undo()
        # Two oldest steps were dropped, so the bottom still holds m0 and m1.
        assert set(history.current.operations) == {"m0", "m1"}
        assert history.redo_depth == 3

    def test_unbounded(self) -> None:
        history = HistoryManager(max_depth=None)
        for i in range(120):
            history.commit(_delete(history.current, f"m{i}"))
        assert history.undo_depth == 120

    def test_invalid_max_depth(self) -> None:
        with pytest.raises(ValueError):
            HistoryManager(max_depth=0)

    def test_clear(self) -> None:
        history = HistoryManager()
        history.commit(_delete(history.current, "m1"))
        history.undo()
        history.clear()
        assert history.current.is_empty
        assert not history.can_undo
        assert not history.can_redo
