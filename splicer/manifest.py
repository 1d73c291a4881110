"""JSON edit manifest — the contract between CLI/API and the engine."""

import json
from dataclasses import dataclass, field
from fractions import Fraction
from pathlib import Path

from splicer.history import DEFAULT_MAX_DEPTH
from splicer.models import as_time

OPERATIONS = ("delete", "undo", "redo")


@dataclass
class HistoryConfig:
    """Configuration for the undo/redo history."""

    max_depth: int = DEFAULT_MAX_DEPTH


@dataclass
class EditOperation:
    """One user command, in virtual-timeline seconds for deletes."""

    op: str
    start: Fraction | None = None
    end: Fraction | None = None

    def __post_init__(self) -> None:
        if self.op not in OPERATIONS:
            raise ValueError(f"Unknown operation {self.op!r}; expected one of {', '.join(OPERATIONS)}")
        if self.op == "delete" and (self.start is None or self.end is None):
            raise ValueError("A delete operation needs both 'start' and 'end'")
        if self.start is not None:
            self.start = as_time(self.start)
        if self.end is not None:
            self.end = as_time(self.end)


@dataclass
class Manifest:
    """Top-level edit manifest.

    ``segments`` restores a saved project's kept ranges before the
    operations run; when omitted the whole source is kept.
    """

    source_duration: Fraction
    operations: list[EditOperation] = field(default_factory=list)
    segments: list[tuple[Fraction, Fraction]] | None = None
    version: str = "1"
    history: HistoryConfig = field(default_factory=HistoryConfig)


def parse_manifest(data: dict) -> Manifest:
    """Validate a decoded manifest dict."""
    if "source_duration" not in data:
        raise ValueError("Manifest must contain a 'source_duration' field")

    operations = [EditOperation(**op) for op in data.get("operations", [])]
    history = HistoryConfig(**data["history"]) if "history" in data else HistoryConfig()

    segments = None
    if data.get("segments") is not None:
        segments = [(as_time(start), as_time(end)) for start, end in data["segments"]]

    return Manifest(
        version=data.get("version", "1"),
        source_duration=as_time(data["source_duration"]),
        operations=operations,
        segments=segments,
        history=history,
    )


def load_manifest(path: str | Path) -> Manifest:
    """Load and validate a manifest from a JSON file.

    Decimal literals are read as exact fractions, so ``0.1`` means one tenth.
    """
    path = Path(path)
    data = json.loads(path.read_text(), parse_float=Fraction)
    return parse_manifest(data)
