"""Shared value types used across Splicer.

Times are seconds held as exact fractions so that mapping between the
virtual and source timelines round-trips without drift. Floats are accepted
on the way in and produced again only for display and JSON.
"""

from dataclasses import dataclass
from fractions import Fraction

# Drags shorter than this (seconds) are treated as clicks, not selections.
MIN_SELECTION = 0.01


def as_time(value) -> Fraction:
    """Exact time value; floats convert without rounding."""
    if isinstance(value, Fraction):
        return value
    return Fraction(value)


def seconds(value) -> float | None:
    """Display form of a time value."""
    return None if value is None else float(value)


@dataclass(frozen=True)
class Interval:
    """A contiguous kept range of the source timeline, in seconds."""

    start: Fraction
    end: Fraction

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", as_time(self.start))
        object.__setattr__(self, "end", as_time(self.end))
        if self.start > self.end:
            raise ValueError(
                f"Interval start ({self.start}) must not be after end ({self.end})"
            )

    @property
    def length(self) -> Fraction:
        return self.end - self.start

    def contains(self, t: float | Fraction) -> bool:
        return self.start <= as_time(t) <= self.end

    def as_pair(self) -> tuple[Fraction, Fraction]:
        return (self.start, self.end)


@dataclass
class Selection:
    """A drag on the virtual timeline; ``cursor`` may lie before ``anchor``."""

    anchor: float
    cursor: float

    @property
    def normalized_start(self) -> float:
        return min(self.anchor, self.cursor)

    @property
    def normalized_end(self) -> float:
        return max(self.anchor, self.cursor)

    @property
    def length(self) -> float:
        return abs(self.cursor - self.anchor)

    @property
    def is_valid(self) -> bool:
        return self.length > MIN_SELECTION

    def as_range(self) -> tuple[float, float]:
        return (self.normalized_start, self.normalized_end)
