"""The kept-segment set: virtual/source time mapping and range deletion.

The virtual timeline is the source timeline with every deleted region cut
out, so the kept intervals read left to right play back-to-back. A point on
the virtual timeline is found by walking the intervals and accumulating
their lengths.
"""

from typing import Iterable, Iterator

from fractions import Fraction

from splicer.models import Interval, as_time, seconds


class InvalidRange(ValueError):
    """Raised when a deletion range is empty, reversed, negative or too long."""

    def __init__(self, message: str, start: float | None = None, end: float | None = None):
        super().__init__(message)
        self.start = start
        self.end = end


class SegmentSet:
    """Ordered, non-overlapping kept intervals of one source recording.

    Intervals are sorted by start, never overlap and never have zero length.
    """

    def __init__(self, intervals: Iterable[Interval] = ()):
        self._intervals: list[Interval] = list(intervals)
        _check_ordered(self._intervals)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Iterable[float | Fraction]]) -> "SegmentSet":
        """Build a set from ``(start, end)`` pairs, e.g. a saved project."""
        intervals = []
        for pair in pairs:
            start, end = pair
            intervals.append(Interval(start=start, end=end))
        return cls(intervals)

    def to_pairs(self) -> list[tuple[Fraction, Fraction]]:
        return [iv.as_pair() for iv in self._intervals]

    @property
    def intervals(self) -> tuple[Interval, ...]:
        return tuple(self._intervals)

    @property
    def total_duration(self) -> Fraction:
        """Length of the virtual timeline."""
        return sum((iv.length for iv in self._intervals), Fraction(0))

    def __len__(self) -> int:
        return len(self._intervals)

    def __iter__(self) -> Iterator[Interval]:
        return iter(tuple(self._intervals))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SegmentSet):
            return NotImplemented
        return self._intervals == other._intervals

    def __repr__(self) -> str:
        return f"SegmentSet({self.to_pairs()!r})"

    def clone(self) -> "SegmentSet":
        # Intervals are frozen, so a fresh list is an independent copy.
        return SegmentSet(self._intervals)

    # ------------------------------------------------------------------
    # Time conversion
    # ------------------------------------------------------------------

    def virtual_to_source(self, virtual_time: float | Fraction) -> Fraction:
        """Map a virtual time to the source timeline.

        Times at or past the end clamp to the end of the last interval, and
        a boundary between two intervals maps to the start of the later one.
        An empty set maps everything to zero.
        """
        if not self._intervals:
            return Fraction(0)
        virtual_time = as_time(virtual_time)
        if virtual_time < 0:
            return self._intervals[0].start

        acc = Fraction(0)
        for iv in self._intervals:
            if acc <= virtual_time < acc + iv.length:
                return iv.start + (virtual_time - acc)
            acc += iv.length

        return self._intervals[-1].end

    def source_to_virtual(self, source_time: float | Fraction) -> Fraction | None:
        """Map a source time to the virtual timeline.

        Returns None when ``source_time`` lies in a deleted region (or outside
        the kept range entirely). Interval edges are inclusive.
        """
        source_time = as_time(source_time)
        acc = Fraction(0)
        for iv in self._intervals:
            if iv.contains(source_time):
                return acc + (source_time - iv.start)
            acc += iv.length
        return None

    def interval_at_virtual(self, virtual_time: float | Fraction) -> Interval | None:
        virtual_time = as_time(virtual_time)
        if virtual_time < 0:
            return None

        acc = Fraction(0)
        for iv in self._intervals:
            if acc <= virtual_time < acc + iv.length:
                return iv
            acc += iv.length

        # The very end of the timeline belongs to the last interval.
        if self._intervals and virtual_time == acc:
            return self._intervals[-1]
        return None

    def interval_at_source(self, source_time: float | Fraction) -> Interval | None:
        if source_time < 0:
            return None
        for iv in self._intervals:
            if iv.contains(source_time):
                return iv
        return None

    def next_interval_after(self, source_time: float | Fraction) -> Interval | None:
        """First interval starting at or after ``source_time``.

        A playback loop that finds itself inside a deleted region seeks to the
        start of this interval.
        """
        for iv in self._intervals:
            if iv.start >= source_time:
                return iv
        return None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def validate_range(self, virtual_start: float | Fraction, virtual_end: float | Fraction) -> None:
        """Raise InvalidRange unless ``[virtual_start, virtual_end)`` can be deleted."""
        if virtual_start < 0 or virtual_end < 0:
            raise InvalidRange(
                f"Range times must not be negative (got {seconds(virtual_start)}, {seconds(virtual_end)})",
                virtual_start, virtual_end,
            )
        if virtual_start >= virtual_end:
            raise InvalidRange(
                f"Range start ({seconds(virtual_start)}) must be before end ({seconds(virtual_end)})",
                virtual_start, virtual_end,
            )
        total = self.total_duration
        if virtual_end > total:
            raise InvalidRange(
                f"Range end ({seconds(virtual_end)}) is beyond the timeline duration ({seconds(total)})",
                virtual_start, virtual_end,
            )

    def delete(self, virtual_start: float | Fraction, virtual_end: float | Fraction) -> None:
        """Remove ``[virtual_start, virtual_end)`` of the virtual timeline.

        Each interval is judged on its own overlap with the matching source
        range: kept, split around it, trimmed at the tail or head, or dropped.
        Raises InvalidRange, leaving the set untouched, for a bad range.
        """
        self.validate_range(virtual_start, virtual_end)

        source_start = self.virtual_to_source(virtual_start)
        source_end = self.virtual_to_source(virtual_end)

        kept: list[Interval] = []
        for iv in self._intervals:
            if iv.end <= source_start or iv.start >= source_end:
                kept.append(iv)
            elif iv.start < source_start and iv.end > source_end:
                # Split
                _append_piece(kept, iv.start, source_start)
                _append_piece(kept, source_end, iv.end)
            elif iv.start < source_start:
                # Tail trim
                _append_piece(kept, iv.start, source_start)
            elif iv.end > source_end:
                # Head trim
                _append_piece(kept, source_end, iv.end)
            # Otherwise the interval lies wholly inside the deletion.

        self._intervals = kept


def _append_piece(out: list[Interval], start: Fraction, end: Fraction) -> None:
    if end > start:
        out.append(Interval(start=start, end=end))


def _check_ordered(intervals: list[Interval]) -> None:
    prev = None
    for iv in intervals:
        if not isinstance(iv, Interval):
            raise ValueError(f"Expected Interval, got {type(iv).__name__}")
        if iv.length <= 0:
            raise ValueError(f"Zero-length interval at {iv.start}")
        if prev is not None and iv.start < prev.end:
            raise ValueError(
                f"Intervals must be sorted and non-overlapping: "
                f"[{prev.start}, {prev.end}] then [{iv.start}, {iv.end}]"
            )
        prev = iv
