"""Tests for the Interval and Selection value types."""

import dataclasses

import pytest

from splicer.models import Interval, Selection


class TestInterval:
    def test_length(self):
        assert Interval(start=5.0, end=12.5).length == 7.5

    def test_zero_length_allowed(self):
        assert Interval(start=3.0, end=3.0).length == 0

    def test_start_after_end_fails_fast(self):
        with pytest.raises(ValueError, match="must not be after"):
            Interval(start=5.0, end=3.0)

    def test_contains_is_inclusive(self):
        iv = Interval(start=10.0, end=20.0)
        assert iv.contains(10.0)
        assert iv.contains(15.0)
        assert iv.contains(20.0)
        assert not iv.contains(9.99)
        assert not iv.contains(20.01)

    def test_immutable(self):
        iv = Interval(start=0.0, end=1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            iv.start = 0.5

    def test_equality_and_pair(self):
        assert Interval(0, 10) == Interval(start=0.0, end=10.0)
        assert Interval(2.5, 4.0).as_pair() == (2.5, 4.0)


class TestSelection:
    def test_forward_drag(self):
        sel = Selection(anchor=4.0, cursor=12.0)
        assert sel.as_range() == (4.0, 12.0)
        assert sel.length == 8.0
        assert sel.is_valid

    def test_backward_drag_is_normalized(self):
        sel = Selection(anchor=12.0, cursor=4.0)
        assert sel.normalized_start == 4.0
        assert sel.normalized_end == 12.0
        assert sel.length == 8.0

    def test_click_is_not_a_selection(self):
        assert not Selection(anchor=3.0, cursor=3.0).is_valid
        assert not Selection(anchor=3.0, cursor=3.005).is_valid
