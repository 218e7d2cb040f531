"""
Golden Hour Planner: Day Reports, Lookahead and Lighting Assessment.

This module is the consumer side of the SolarTimeEngine. The engine only ever
looks at one civil day; the planner walks forward across days to find the
next lighting window, and derives the photography helpers (sun path, shadow
figures, lighting quality) from engine output.

Lighting Classification (sun altitude):
    - Harsh: above 20° (strong shadows, avoid for portraits)
    - Good: 6° to 20° (directional, still usable light)
    - Golden: -4° to 6° (warm, soft light)
    - Blue: -6° to -4° (deep blue sky, city lights)
    - Dark: below -6°
"""

import math
import logging
from datetime import datetime, date, timedelta
from typing import Dict, Iterable, List, Optional, Any
from dataclasses import dataclass

from ..config import settings
from ..physics import (
    SolarTimeEngine,
    GeoCoordinate,
    SunEventSet,
    SunPosition,
    TimeWindow,
    NextWindowResult,
    WindowKind,
    civil_date_of,
    civil_day_bounds,
    get_timezone,
    to_utc,
    get_solar_time_engine,
)
from .countdown import format_local_time

logger = logging.getLogger(__name__)

GOLDEN_KINDS = (WindowKind.MORNING_GOLDEN, WindowKind.EVENING_GOLDEN)

# Sun path keeps samples above this altitude (degrees)
SUN_PATH_MIN_ALTITUDE = -10.0

HARSH_LIGHT_ALTITUDE = 20.0

# Window grades by midpoint altitude (degrees), best first
GOLDEN_QUALITY_BANDS = (
    ("excellent", (4.0, 6.0)),
    ("good", (3.0, 8.0)),
    ("fair", (2.0, 10.0)),
)
BLUE_QUALITY_BANDS = (
    ("excellent", (-6.0, -4.0)),
    ("good", (-8.0, -2.0)),
    ("fair", (-12.0, 0.0)),
)

# Altitude of full intensity at a window's start
GOLDEN_INTENSITY_PEAK = 5.0
BLUE_INTENSITY_PEAK = -5.0


@dataclass(frozen=True)
class NextWindowLookup:
    """
    Result of a multi-day search for the next lighting window.

    Attributes:
        date: Civil date whose events produced the result
        events: That day's SunEventSet
        result: The resolved window; exhausted only if the lookahead ran out
        days_searched: Number of civil days computed, the previous day included
    """
    date: date
    events: SunEventSet
    result: NextWindowResult
    days_searched: int

    @property
    def found(self) -> bool:
        return not self.result.exhausted


def shadow_length(object_height: float, altitude: float) -> float:
    """Shadow length cast by an object; infinite with the sun at or below the horizon."""
    if altitude <= 0:
        return math.inf
    return object_height / math.tan(math.radians(altitude))


def shadow_direction(azimuth: float) -> float:
    """Shadows point directly away from the sun."""
    return (azimuth + 180.0) % 360.0


def describe_shadow(altitude: float) -> str:
    if altitude <= 0:
        return "No shadow"
    length = shadow_length(1.0, altitude)
    if length > 10:
        return "Very long"
    if length > 5:
        return "Long"
    if length > 2:
        return "Medium"
    return "Short"


def classify_light(altitude: float, engine: Optional[SolarTimeEngine] = None) -> str:
    """Classify lighting conditions from the sun's altitude."""
    thresholds = (engine or get_solar_time_engine()).thresholds

    if altitude > HARSH_LIGHT_ALTITUDE:
        return "harsh"
    if altitude >= thresholds.golden_high:
        return "good"
    if altitude >= thresholds.golden_low:
        return "golden"
    if altitude >= thresholds.blue_low:
        return "blue"
    return "dark"


def window_quality(kind: WindowKind, altitude: float) -> str:
    """
    Rate a window from the sun's altitude at its midpoint.

    Golden hours rate best with the sun 4-6° up and blue hours with it 4-6°
    down; each wider band drops one grade.
    """
    bands = GOLDEN_QUALITY_BANDS if WindowKind(kind) in GOLDEN_KINDS else BLUE_QUALITY_BANDS
    for grade, (low, high) in bands:
        if low <= altitude <= high:
            return grade
    return "poor"


def window_intensity(kind: WindowKind, altitude: float) -> int:
    """Intensity score 0-100 from the altitude at the window's start."""
    if WindowKind(kind) in GOLDEN_KINDS:
        peak, falloff = GOLDEN_INTENSITY_PEAK, 10.0
    else:
        peak, falloff = BLUE_INTENSITY_PEAK, 8.0
    return round(max(0.0, 100.0 - abs(altitude - peak) * falloff))


class GoldenHourPlanner:
    """
    Multi-day planner built on the SolarTimeEngine.

    Attributes:
        engine: The single-day solar engine
        max_lookahead_days: How far find_next_window may walk forward

    Research Note:
        Above the polar circles a window can be absent for months. The
        lookahead limit keeps the search bounded; a lookup that runs out is
        returned exhausted rather than raised.
    """

    def __init__(
        self,
        engine: Optional[SolarTimeEngine] = None,
        max_lookahead_days: Optional[int] = None
    ):
        """Initialize the planner."""
        self.engine = engine or get_solar_time_engine()
        self.max_lookahead_days = max_lookahead_days or settings.MAX_LOOKAHEAD_DAYS

        logger.info(f"GoldenHourPlanner initialized (lookahead {self.max_lookahead_days} days)")

    def find_next_window(
        self,
        coord: GeoCoordinate,
        timezone: str,
        now: datetime,
        kinds: Optional[Iterable[WindowKind]] = None,
        max_days: Optional[int] = None
    ) -> NextWindowLookup:
        """
        Find the current or next lighting window, crossing days as needed.

        Args:
            coord: Observer location
            timezone: IANA zone defining civil days
            now: Reference instant
            kinds: Restrict to these windows (default: all four)
            max_days: Override the lookahead limit (days from today)

        Returns:
            NextWindowLookup for the first day that is not exhausted

        Example:
            >>> planner = GoldenHourPlanner()
            >>> lookup = planner.find_next_window(
            ...     GeoCoordinate(51.5074, -0.1278), "Europe/London",
            ...     datetime(2024, 6, 21, 22, 59, tzinfo=pytz.UTC)
            ... )
            >>> lookup.result.kind
            <WindowKind.MORNING_BLUE: 'morning_blue'>
        """
        now = to_utc(now)
        kinds = tuple(kinds) if kinds is not None else None
        limit = max_days or self.max_lookahead_days

        # Yesterday's evening windows may still be running after midnight
        day = civil_date_of(now, timezone) - timedelta(days=1)

        events = None
        result = None
        for offset in range(limit + 1):
            events = self.engine.compute_sun_events(day, coord, timezone)
            result = self.engine.resolve_next_window(events, now, kinds=kinds)
            if not result.exhausted:
                return NextWindowLookup(date=day, events=events, result=result, days_searched=offset + 1)
            logger.debug(f"No remaining window on {day}, advancing one day")
            day += timedelta(days=1)

        logger.warning(
            f"No lighting window within {limit} days at "
            f"({coord.latitude}, {coord.longitude})"
        )
        return NextWindowLookup(date=day - timedelta(days=1), events=events, result=result, days_searched=limit + 1)

    def find_next_golden_hour(
        self,
        coord: GeoCoordinate,
        timezone: str,
        now: datetime
    ) -> NextWindowLookup:
        """Same as find_next_window, golden hours only."""
        return self.find_next_window(coord, timezone, now, kinds=GOLDEN_KINDS)

    def get_day_report(
        self,
        coord: GeoCoordinate,
        target_date: date,
        timezone: str
    ) -> Dict[str, Any]:
        """
        Full set of solar events for a civil day.

        Returns:
            Dict with all sun timing information plus day condition; each
            window carries local times, quality and intensity
        """
        events = self.engine.compute_sun_events(target_date, coord, timezone)
        report = events.to_dict()

        for name, kind in (
            ("golden_hour_morning", WindowKind.MORNING_GOLDEN),
            ("golden_hour_evening", WindowKind.EVENING_GOLDEN),
            ("blue_hour_morning", WindowKind.MORNING_BLUE),
            ("blue_hour_evening", WindowKind.EVENING_BLUE),
        ):
            report[name] = self.describe_window(coord, kind, events.window(kind), timezone)

        report["sunrise_local"] = format_local_time(events.sunrise, timezone)
        report["sunset_local"] = format_local_time(events.sunset, timezone)
        report["solar_noon_local"] = format_local_time(events.solar_noon, timezone)
        report["solar_noon_light"] = classify_light(events.solar_noon_altitude, self.engine)
        return report

    def describe_window(
        self,
        coord: GeoCoordinate,
        kind: WindowKind,
        window: Optional[TimeWindow],
        timezone: str
    ) -> Optional[Dict[str, Any]]:
        """Serialize a window with its local times and photographic rating."""
        if window is None:
            return None

        midpoint = self.engine.compute_sun_position(window.midpoint, coord, with_refraction=False)
        start = self.engine.compute_sun_position(window.start, coord, with_refraction=False)

        report = window.to_dict()
        report.update({
            "start_local": format_local_time(window.start, timezone),
            "end_local": format_local_time(window.end, timezone),
            "quality": window_quality(kind, midpoint.altitude),
            "intensity": window_intensity(kind, start.altitude),
        })
        return report

    def get_sun_path(
        self,
        coord: GeoCoordinate,
        target_date: date,
        timezone: str,
        interval_minutes: int = 15
    ) -> List[SunPosition]:
        """
        Sun positions through the civil day.

        Samples are kept while the sun is above -10° or within one hour of
        sunrise/sunset.
        """
        if interval_minutes <= 0:
            raise ValueError(f"interval_minutes must be positive, got {interval_minutes}")

        events = self.engine.compute_sun_events(target_date, coord, timezone)
        anchors = [t for t in (events.sunrise, events.sunset) if t is not None]

        day_start, _ = civil_day_bounds(target_date, get_timezone(timezone))
        step = timedelta(minutes=interval_minutes)
        path = []
        instant = day_start
        while civil_date_of(instant, timezone) == target_date:
            position = self.engine.compute_sun_position(instant, coord)
            near_horizon = any(abs(instant - anchor) < timedelta(hours=1) for anchor in anchors)
            if position.altitude > SUN_PATH_MIN_ALTITUDE or near_horizon:
                path.append(position)
            instant += step
        return path

    def get_lighting_quality(
        self,
        coord: GeoCoordinate,
        instant: datetime,
        object_height: float = 1.0
    ) -> Dict[str, Any]:
        """
        Assess lighting quality at a specific instant.

        Args:
            coord: Observer location
            instant: Instant to assess
            object_height: Height used for the shadow length figure

        Returns:
            Dict with lighting assessment
        """
        position = self.engine.compute_sun_position(instant, coord)
        quality = classify_light(position.altitude, self.engine)

        return {
            "timestamp": position.instant.isoformat(),
            "azimuth_deg": round(position.azimuth, 2),
            "altitude_deg": round(position.altitude, 2),
            "is_daylight": position.is_daylight,
            "quality": quality,
            "is_golden_hour": quality == "golden",
            "shadow": {
                "length": shadow_length(object_height, position.altitude),
                "direction_deg": round(shadow_direction(position.azimuth), 2),
                "description": describe_shadow(position.altitude),
            },
            "recommendation": self._get_lighting_recommendation(quality),
        }

    def _get_lighting_recommendation(self, quality: str) -> str:
        """Generate lighting-based recommendation."""
        if quality == "golden":
            return "Excellent time for photography! Bring your camera."
        elif quality == "blue":
            return "Blue hour: ideal for cityscapes and long exposures."
        elif quality == "good":
            return "Good directional light for outdoor photos."
        elif quality == "harsh":
            return "Harsh light. Seek shade or use a polarizing filter."
        else:
            return "Limited visibility. Best for stargazing or night photography."


# Singleton instance
_golden_hour_planner: Optional[GoldenHourPlanner] = None


def get_golden_hour_planner() -> GoldenHourPlanner:
    """
    Get or create the GoldenHourPlanner singleton.

    Returns:
        GoldenHourPlanner: Singleton instance
    """
    global _golden_hour_planner
    if _golden_hour_planner is None:
        _golden_hour_planner = GoldenHourPlanner()
    return _golden_hour_planner
