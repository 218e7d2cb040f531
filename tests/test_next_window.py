"""
Tests for resolve_next_window: the single-day window state machine.

Uses a hand-built SunEventSet so every boundary is known exactly:

    morning blue    04:00 - 04:30
    morning golden  04:30 - 05:30
    evening golden  19:00 - 20:00
    evening blue    20:00 - 20:30
"""

import pytest
import sys
from datetime import date, datetime
from pathlib import Path

import pytz

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from goldenhour.physics import (
    SolarTimeEngine,
    GeoCoordinate,
    SunEventSet,
    TimeWindow,
    WindowKind,
    WindowPhase,
)

DAY = date(2024, 6, 21)


def at(hour, minute=0, second=0, microsecond=0):
    return datetime(2024, 6, 21, hour, minute, second, microsecond, tzinfo=pytz.UTC)


def make_events(**overrides):
    fields = dict(
        date=DAY,
        coordinate=GeoCoordinate(latitude=45.0, longitude=0.0),
        timezone="UTC",
        solar_noon=at(12),
        solar_noon_altitude=68.0,
        horizon_altitude=-0.833,
        sunrise=at(5),
        sunset=at(19, 30),
        blue_hour_morning=TimeWindow(at(4), at(4, 30)),
        golden_hour_morning=TimeWindow(at(4, 30), at(5, 30)),
        golden_hour_evening=TimeWindow(at(19), at(20)),
        blue_hour_evening=TimeWindow(at(20), at(20, 30)),
    )
    fields.update(overrides)
    return SunEventSet(**fields)


@pytest.fixture(scope="module")
def engine():
    return SolarTimeEngine()


@pytest.fixture
def events():
    return make_events()


class TestUpcoming:
    def test_before_first_window(self, engine, events):
        result = engine.resolve_next_window(events, at(3))
        assert result.kind == WindowKind.MORNING_BLUE
        assert result.phase == WindowPhase.UPCOMING
        assert result.boundary_time == at(4)
        assert result.seconds_until_boundary == 3600
        assert not result.exhausted

    def test_midday_points_to_evening_golden(self, engine, events):
        result = engine.resolve_next_window(events, at(12))
        assert result.kind == WindowKind.EVENING_GOLDEN
        assert result.phase == WindowPhase.UPCOMING
        assert result.seconds_until_boundary == 7 * 3600

    def test_seconds_round_up(self, engine, events):
        result = engine.resolve_next_window(events, at(3, 59, 59, 500000))
        assert result.seconds_until_boundary == 1


class TestCurrent:
    def test_inside_window_counts_to_end(self, engine, events):
        result = engine.resolve_next_window(events, at(4, 10))
        assert result.kind == WindowKind.MORNING_BLUE
        assert result.phase == WindowPhase.CURRENT
        assert result.is_current
        assert result.boundary_time == at(4, 30)
        assert result.seconds_until_boundary == 1200

    def test_window_bounds_are_inclusive(self, engine, events):
        result = engine.resolve_next_window(events, at(5, 30))
        assert result.kind == WindowKind.MORNING_GOLDEN
        assert result.phase == WindowPhase.CURRENT
        assert result.seconds_until_boundary == 0

    def test_shared_boundary_prefers_golden_morning(self, engine, events):
        """04:30 is inside both morning windows; golden wins."""
        result = engine.resolve_next_window(events, at(4, 30))
        assert result.kind == WindowKind.MORNING_GOLDEN
        assert result.boundary_time == at(5, 30)

    def test_shared_boundary_prefers_golden_evening(self, engine, events):
        result = engine.resolve_next_window(events, at(20))
        assert result.kind == WindowKind.EVENING_GOLDEN
        assert result.seconds_until_boundary == 0

    def test_precedence_with_overlapping_windows(self, engine):
        """Guard for malformed input: evening golden beats everything."""
        overlapping = make_events(
            golden_hour_evening=TimeWindow(at(4), at(6)),
            blue_hour_evening=TimeWindow(at(4), at(6)),
        )
        result = engine.resolve_next_window(overlapping, at(4, 15))
        assert result.kind == WindowKind.EVENING_GOLDEN


class TestExhausted:
    def test_after_last_window(self, engine, events):
        result = engine.resolve_next_window(events, at(21))
        assert result.exhausted
        assert result.phase == WindowPhase.PAST
        assert result.kind == WindowKind.EVENING_BLUE
        assert result.seconds_until_boundary == -1800

    def test_day_without_windows(self, engine):
        polar = make_events(
            sunrise=None,
            sunset=None,
            blue_hour_morning=None,
            golden_hour_morning=None,
            golden_hour_evening=None,
            blue_hour_evening=None,
        )
        result = engine.resolve_next_window(polar, at(12))
        assert result.exhausted
        assert result.kind is None
        assert result.phase == WindowPhase.PAST
        assert result.boundary_time is None
        assert result.seconds_until_boundary is None

    def test_absent_windows_are_skipped(self, engine):
        events = make_events(golden_hour_evening=None)
        result = engine.resolve_next_window(events, at(12))
        assert result.kind == WindowKind.EVENING_BLUE


class TestKindsFilter:
    def test_golden_only(self, engine, events):
        result = engine.resolve_next_window(
            events, at(3), kinds=[WindowKind.MORNING_GOLDEN, WindowKind.EVENING_GOLDEN]
        )
        assert result.kind == WindowKind.MORNING_GOLDEN
        assert result.seconds_until_boundary == 5400

    def test_golden_only_exhausted_during_blue_hour(self, engine, events):
        result = engine.resolve_next_window(events, at(20, 10), kinds=["morning_golden", "evening_golden"])
        assert result.exhausted
        assert result.kind == WindowKind.EVENING_GOLDEN


class TestCountdown:
    def test_monotonic(self, engine, events):
        first = engine.resolve_next_window(events, at(3, 0, 0))
        second = engine.resolve_next_window(events, at(3, 0, 1))
        assert first.boundary_time == second.boundary_time
        assert second.seconds_until_boundary < first.seconds_until_boundary

    def test_naive_now_is_utc(self, engine, events):
        aware = engine.resolve_next_window(events, at(3))
        naive = engine.resolve_next_window(events, datetime(2024, 6, 21, 3, 0))
        assert aware == naive

    def test_other_zone_now(self, engine, events):
        now = pytz.timezone("Europe/Paris").localize(datetime(2024, 6, 21, 5, 0))
        result = engine.resolve_next_window(events, now)
        assert result.kind == WindowKind.MORNING_BLUE
        assert result.seconds_until_boundary == 3600

    def test_real_day_countdown(self, engine):
        nyc = GeoCoordinate(latitude=40.7128, longitude=-74.0060)
        events = engine.compute_sun_events(DAY, nyc, "America/New_York")
        result = engine.resolve_next_window(events, at(14))
        assert result.kind == WindowKind.EVENING_GOLDEN
        assert result.boundary_time == events.golden_hour_evening.start
        assert result.to_dict()["phase"] == "upcoming"
