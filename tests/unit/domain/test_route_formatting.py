"""Tests for route distance / duration formatting."""

from landscaper.domain.policies.route_formatting import format_distance, format_duration


def test_distance_in_kilometres():
    assert format_distance(1000) == "1.0 km"
    assert format_distance(12345) == "12.3 km"


def test_distance_in_metres():
    assert format_distance(0) == "0 m"
    assert format_distance(999) == "999 m"
    assert format_distance(412.4) == "412 m"


def test_duration_minutes_only():
    assert format_duration(0) == "0 min"
    assert format_duration(59) == "0 min"
    assert format_duration(25 * 60) == "25 min"


def test_duration_hours_and_minutes():
    assert format_duration(3600) == "1 hr 0 min"
    assert format_duration(2 * 3600 + 15 * 60 + 40) == "2 hr 15 min"
