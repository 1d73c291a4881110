"""TimelineManager — the editing session façade.

Owns the live SegmentSet and its EditHistory. Edits (delete, undo, redo,
load) and the high-frequency reads issued by playback and rendering code go
through the same lock, so a reader never sees a set mid-mutation.
"""

import logging
import threading
from fractions import Fraction
from typing import Iterable

from splicer.history import DEFAULT_MAX_DEPTH, EditHistory
from splicer.models import Interval, as_time, seconds
from splicer.segments import InvalidRange, SegmentSet

logger = logging.getLogger(__name__)


class TimelineManager:
    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self._lock = threading.RLock()
        self._current = SegmentSet()
        self._history = EditHistory(max_depth=max_depth)
        self._source_duration = Fraction(0)

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def initialize(self, source_duration: float | Fraction) -> None:
        """Start over with one interval spanning the whole source."""
        source_duration = as_time(source_duration)
        if source_duration < 0:
            raise InvalidRange(f"Source duration must not be negative (got {seconds(source_duration)})")

        intervals = [Interval(start=0, end=source_duration)] if source_duration > 0 else []
        with self._lock:
            self._current = SegmentSet(intervals)
            self._source_duration = source_duration
            self._history.clear()
        logger.debug("Initialized timeline: source duration %ss", seconds(source_duration))

    def load(self, source_duration: float | Fraction, pairs: Iterable[Iterable[float | Fraction]]) -> None:
        """Restore a saved project's kept segments. History starts empty."""
        source_duration = as_time(source_duration)
        segments = SegmentSet.from_pairs(pairs)
        for iv in segments:
            if iv.start < 0 or iv.end > source_duration:
                raise ValueError(
                    f"Segment [{seconds(iv.start)}, {seconds(iv.end)}] lies outside "
                    f"the source (0-{seconds(source_duration)}s)"
                )

        with self._lock:
            self._current = segments
            self._source_duration = source_duration
            self._history.clear()
        logger.debug(
            "Loaded %d segments (%ss of %ss)",
            len(segments), seconds(segments.total_duration), seconds(source_duration),
        )

    def snapshot(self) -> dict:
        """The serializable shape of the session: source duration + kept pairs."""
        with self._lock:
            return {
                "source_duration": self._source_duration,
                "segments": [list(pair) for pair in self._current.to_pairs()],
            }

    def state(self) -> dict:
        """Snapshot plus derived fields, all read under one lock acquisition."""
        with self._lock:
            state = self.snapshot()
            state["total_duration"] = self._current.total_duration
            state["can_undo"] = self._history.can_undo
            state["can_redo"] = self._history.can_redo
            return state

    # ------------------------------------------------------------------
    # Editing commands
    # ------------------------------------------------------------------

    def delete_segment(self, virtual_start: float | Fraction, virtual_end: float | Fraction) -> None:
        """Cut ``[virtual_start, virtual_end)`` out of the virtual timeline.

        Raises InvalidRange without touching the segments or the history.
        """
        with self._lock:
            self._current.validate_range(virtual_start, virtual_end)
            self._history.push(self._current.clone())
            self._current.delete(virtual_start, virtual_end)
            logger.debug(
                "Deleted virtual %s-%s: %d segments, %ss remaining",
                virtual_start, virtual_end, len(self._current), seconds(self._current.total_duration),
            )

    def undo(self) -> bool:
        """Restore the previous state. Returns False if there was nothing to undo."""
        with self._lock:
            if not self._history.can_undo:
                logger.info("Undo requested with empty history")
                return False
            self._current = self._history.undo(self._current)
            logger.debug("Undo: %d segments", len(self._current))
            return True

    def redo(self) -> bool:
        """Reapply an undone edit. Returns False if there was nothing to redo."""
        with self._lock:
            if not self._history.can_redo:
                logger.info("Redo requested with nothing undone")
                return False
            self._current = self._history.redo(self._current)
            logger.debug("Redo: %d segments", len(self._current))
            return True

    @property
    def can_undo(self) -> bool:
        with self._lock:
            return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        with self._lock:
            return self._history.can_redo

    @property
    def max_depth(self) -> int:
        return self._history.max_depth

    @property
    def undo_depth(self) -> int:
        with self._lock:
            return self._history.undo_depth

    @property
    def redo_depth(self) -> int:
        with self._lock:
            return self._history.redo_depth

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def current_segments(self) -> tuple[Interval, ...]:
        with self._lock:
            return self._current.intervals

    @property
    def source_duration(self) -> Fraction:
        with self._lock:
            return self._source_duration

    @property
    def total_duration(self) -> Fraction:
        with self._lock:
            return self._current.total_duration

    def virtual_to_source(self, virtual_time: float | Fraction) -> Fraction:
        with self._lock:
            return self._current.virtual_to_source(virtual_time)

    def source_to_virtual(self, source_time: float | Fraction) -> Fraction | None:
        with self._lock:
            return self._current.source_to_virtual(source_time)

    def segment_at_virtual(self, virtual_time: float | Fraction) -> Interval | None:
        with self._lock:
            return self._current.interval_at_virtual(virtual_time)

    def segment_at_source(self, source_time: float | Fraction) -> Interval | None:
        with self._lock:
            return self._current.interval_at_source(source_time)

    def next_segment_after(self, source_time: float | Fraction) -> Interval | None:
        with self._lock:
            return self._current.next_interval_after(source_time)
