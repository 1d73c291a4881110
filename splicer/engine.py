"""Orchestrator — replays the edits of a Manifest on a fresh timeline."""

import logging
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Callable

from splicer.manifest import Manifest
from splicer.models import Interval, seconds
from splicer.timeline import TimelineManager

logger = logging.getLogger(__name__)


@dataclass
class EngineResult:
    segments: list[Interval] = field(default_factory=list)
    duration_original: Fraction = Fraction(0)
    duration_final: Fraction = Fraction(0)
    deletions_applied: int = 0
    can_undo: bool = False
    can_redo: bool = False
    snapshot: dict = field(default_factory=dict)


def build_timeline(manifest: Manifest) -> TimelineManager:
    """Create a TimelineManager seeded from the manifest's source/segments."""
    timeline = TimelineManager(max_depth=manifest.history.max_depth)
    if manifest.segments is not None:
        timeline.load(manifest.source_duration, manifest.segments)
    else:
        timeline.initialize(manifest.source_duration)
    return timeline


def apply_manifest(
    manifest: Manifest,
    on_progress: Callable[[str, float], None] | None = None,
) -> EngineResult:
    """Run every operation of the manifest in order.

    Args:
        manifest: Validated edit manifest.
        on_progress: Optional callback(stage_name, fraction_complete).

    Raises InvalidRange from the first delete that does not fit the timeline
    as it stands at that point.
    """

    def _progress(stage: str, frac: float) -> None:
        if on_progress:
            on_progress(stage, frac)

    _progress("Loading timeline", 0.0)
    timeline = build_timeline(manifest)
    duration_original = timeline.total_duration

    deletions = 0
    total = len(manifest.operations)
    for i, op in enumerate(manifest.operations):
        if op.op == "delete":
            _progress(f"Deleting {seconds(op.start)}-{seconds(op.end)}", i / max(total, 1))
            timeline.delete_segment(op.start, op.end)
            deletions += 1
        elif op.op == "undo":
            _progress("Undo", i / max(total, 1))
            if timeline.undo():
                deletions -= 1
        elif op.op == "redo":
            _progress("Redo", i / max(total, 1))
            if timeline.redo():
                deletions += 1
        logger.debug("Applied %s: %ss remaining", op.op, seconds(timeline.total_duration))

    _progress("Done", 1.0)
    return EngineResult(
        segments=list(timeline.current_segments()),
        duration_original=duration_original,
        duration_final=timeline.total_duration,
        deletions_applied=deletions,
        can_undo=timeline.can_undo,
        can_redo=timeline.can_redo,
        snapshot=timeline.snapshot(),
    )
