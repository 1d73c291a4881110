"""Bounded undo/redo history of SegmentSet snapshots."""

from collections import deque

from splicer.segments import SegmentSet

DEFAULT_MAX_DEPTH = 50


class EditHistory:
    """Two stacks of snapshots with a depth bound.

    Pushing a new edit always discards the redo stack, so history never
    branches. When the undo stack is full the oldest entry is dropped.
    Undo and redo on an empty stack hand back ``current`` unchanged.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        if max_depth < 0:
            raise ValueError(f"max_depth must not be negative (got {max_depth})")
        self.max_depth = max_depth
        # Right end is the top of each stack.
        self._undo: deque[SegmentSet] = deque(maxlen=max_depth)
        self._redo: deque[SegmentSet] = deque(maxlen=max_depth)

    @property
    def can_undo(self) -> bool:
        return len(self._undo) > 0

    @property
    def can_redo(self) -> bool:
        return len(self._redo) > 0

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def push(self, snapshot: SegmentSet) -> None:
        """Record the state before an edit. The caller passes a clone."""
        self._undo.append(snapshot)
        self._redo.clear()

    def undo(self, current: SegmentSet) -> SegmentSet:
        if not self._undo:
            return current
        self._redo.append(current)
        return self._undo.pop()

    def redo(self, current: SegmentSet) -> SegmentSet:
        if not self._redo:
            return current
        self._undo.append(current)
        return self._redo.pop()

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
