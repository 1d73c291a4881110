"""Tests for the bounded undo/redo history."""

import pytest

from splicer.history import DEFAULT_MAX_DEPTH, EditHistory
from splicer.segments import SegmentSet


def _state(n: int) -> SegmentSet:
    """A distinguishable snapshot: one interval of length n + 1."""
    return SegmentSet.from_pairs([(0, n + 1)])


class TestEmptyHistory:
    def test_nothing_to_undo_or_redo(self):
        h = EditHistory()
        assert not h.can_undo
        assert not h.can_redo

    def test_undo_is_noop(self):
        h = EditHistory()
        current = _state(0)
        assert h.undo(current) is current
        assert not h.can_redo

    def test_redo_is_noop(self):
        h = EditHistory()
        current = _state(0)
        assert h.redo(current) is current
        assert not h.can_undo

    def test_default_depth(self):
        assert EditHistory().max_depth == DEFAULT_MAX_DEPTH == 50

    def test_negative_depth_rejected(self):
        with pytest.raises(ValueError):
            EditHistory(max_depth=-1)


class TestUndoRedo:
    def test_undo_returns_pushed_snapshot(self):
        h = EditHistory()
        before, after = _state(0), _state(1)
        h.push(before)
        assert h.undo(after) is before
        assert not h.can_undo
        assert h.can_redo

    def test_redo_returns_undone_state(self):
        h = EditHistory()
        before, after = _state(0), _state(1)
        h.push(before)
        restored = h.undo(after)
        assert h.redo(restored) is after
        assert h.can_undo
        assert not h.can_redo

    def test_push_clears_redo(self):
        h = EditHistory()
        h.push(_state(0))
        h.undo(_state(1))
        assert h.can_redo
        h.push(_state(2))
        assert not h.can_redo
        assert h.redo_depth == 0

    def test_clear(self):
        h = EditHistory()
        h.push(_state(0))
        h.push(_state(1))
        h.undo(_state(2))
        h.clear()
        assert not h.can_undo
        assert not h.can_redo


class TestDepthBound:
    def test_oldest_dropped(self):
        h = EditHistory(max_depth=3)
        states = [_state(i) for i in range(5)]
        for s in states:
            h.push(s)
        assert h.undo_depth == 3

        current = _state(99)
        restored = []
        for _ in range(4):
            current = h.undo(current)
            restored.append(current)

        assert restored[:3] == [states[4], states[3], states[2]]
        # Fourth undo is a no-op: the two oldest states are gone.
        assert restored[3] is restored[2]

    def test_default_bound_after_overflow(self):
        h = EditHistory()
        for i in range(DEFAULT_MAX_DEPTH + 5):
            h.push(_state(i))

        current = _state(1000)
        distinct = 0
        while h.can_undo:
            current = h.undo(current)
            distinct += 1
        assert distinct == DEFAULT_MAX_DEPTH
        assert current == _state(5)
