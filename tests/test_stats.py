"""Tests for the token statistics aggregator."""

from __future__ import annotations

import pytest

from chisel.models.overlay import DeleteOperation, ModifyOperation, OverlaySnapshot
from chisel.overlay import store
from chisel.preview.stats import compute_stats, count_changes
from tests.conftest import char_count, make_message


def _stats(messages, snapshot):
    return compute_stats(messages, snapshot.operations, snapshot.insertions, char_count)


class TestComputeStats:
    def test_no_changes(self, messages) -> None:
        stats = _stats(messages, OverlaySnapshot.empty())
        assert stats.original_total == 15
        assert stats.compressed_total == 15
        assert stats.saved_tokens == 0
        assert stats.saved_percentage == 0.0
        assert stats.change_stats.total == 0

    def test_delete_middle_message(self, messages) -> None:
        snap = store.set_operation(
            OverlaySnapshot.empty(), "msg_b", DeleteOperation(original=messages[1])
        )
        stats = _stats(messages, snap)
        assert stats.original_total == 15
        assert stats.compressed_total == 8
        assert stats.saved_tokens == 7
        assert stats.saved_percentage == pytest.approx(46.666, abs=0.01)
        assert stats.change_stats.deleted == 1

    def test_deletions_conserve_tokens(self, messages) -> None:
        snap = store.set_operation(
            OverlaySnapshot.empty(), "msg_a", DeleteOperation(original=messages[0])
        )
        snap = store.set_operation(snap, "msg_c", DeleteOperation(original=messages[2]))
        stats = _stats(messages, snap)
        assert stats.compressed_total == stats.original_total - (5 + 3)

    def test_modify_counts_replacement(self, messages) -> None:
        snap = store.set_operation(
            OverlaySnapshot.empty(), "msg_a", ModifyOperation(original=messages[0], content="xy")
        )
        stats = _stats(messages, snap)
        assert stats.compressed_total == 2 + 7 + 3
        assert stats.change_stats.modified == 1

    def test_modify_to_empty_counts_zero(self, messages) -> None:
        snap = store.set_operation(
            OverlaySnapshot.empty(), "msg_b", ModifyOperation(original=messages[1], content="")
        )
        assert _stats(messages, snap).compressed_total == 5 + 3

    def test_insertions_add_tokens_and_savings_go_negative(self, messages) -> None:
        snap = store.add_insertion(OverlaySnapshot.empty(), -1, make_message("ins", "x" * 30))
        stats = _stats(messages, snap)
        assert stats.compressed_total == 45
        assert stats.saved_tokens == -30
        assert stats.saved_percentage == pytest.approx(-200.0)
        assert stats.change_stats.inserted == 1

    def test_out_of_range_insertion_still_counted(self, messages) -> None:
        snap = store.add_insertion(OverlaySnapshot.empty(), 42, make_message("ins", "zz"))
        assert _stats(messages, snap).compressed_total == 17

    def test_zero_original_total(self) -> None:
        snap = store.add_insertion(OverlaySnapshot.empty(), -1, make_message("ins", "hello"))
        stats = _stats([], snap)
        assert stats.original_total == 0
        assert stats.compressed_total == 5
        assert stats.saved_tokens == -5
        assert stats.saved_percentage == 0.0

    def test_empty_messages_empty_overlay(self) -> None:
        stats = _stats([], OverlaySnapshot.empty())
        assert stats.original_total == 0
        assert stats.saved_percentage == 0.0

    def test_uses_injected_extractor(self, messages) -> None:
        stats = compute_stats(
            messages, {}, {}, char_count, content_extractor=lambda blocks: "1234567890"
        )
        assert stats.original_total == 30

    def test_default_estimator(self, messages, estimator) -> None:
        stats = compute_stats(messages, {}, {}, estimator.estimate)
        # heuristic: max(1, len // 4) -> 1 + 1 + 1
        assert stats.original_total == 3


class TestCountChanges:
    def test_counts_from_overlay_not_messages(self) -> None:
        ghost = make_message("ghost")
        snap = store.set_operation(OverlaySnapshot.empty(), "ghost", DeleteOperation(original=ghost))
        snap = store.set_operation(snap, "other", ModifyOperation(original=ghost, content="x"))
        snap = store.add_insertion(snap, 7, make_message("ins"))
        changes = count_changes(snap.operations, snap.insertions)
        assert (changes.deleted, changes.modified, changes.inserted) == (1, 1, 1)
        assert changes.total == 3
