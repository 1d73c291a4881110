"""Shared test fixtures."""

from pathlib import Path

import pytest

from splicer.segments import SegmentSet
from splicer.timeline import TimelineManager

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_manifest_path() -> Path:
    return FIXTURES_DIR / "sample_manifest.json"


@pytest.fixture
def project_manifest_path() -> Path:
    return FIXTURES_DIR / "project_manifest.json"


@pytest.fixture
def gapped() -> SegmentSet:
    """Three 10s kept intervals with 10s gaps: virtual length 30s."""
    return SegmentSet.from_pairs([(0, 10), (20, 30), (40, 50)])


@pytest.fixture
def timeline() -> TimelineManager:
    tm = TimelineManager()
    tm.initialize(60.0)
    return tm
