"""
Golden Hour Physics Package.

This package contains the solar calculations behind every lighting window:
- Solar position (azimuth/altitude) via the astral NOAA equations
- Sunrise, sunset and solar noon for a civil day in an IANA time zone
- Golden hour and blue hour windows from altitude thresholds
- Resolution of the current or next window relative to "now"
"""

from .golden_hour_engine import (
    SolarTimeEngine,
    SolarThresholds,
    GeoCoordinate,
    SunPosition,
    TimeWindow,
    SunEventSet,
    NextWindowResult,
    WindowKind,
    WindowPhase,
    DayCondition,
    InvalidCoordinate,
    InvalidTimezone,
    civil_date_of,
    civil_day_bounds,
    get_timezone,
    to_utc,
    get_solar_time_engine,
)

__all__ = [
    "SolarTimeEngine",
    "SolarThresholds",
    "GeoCoordinate",
    "SunPosition",
    "TimeWindow",
    "SunEventSet",
    "NextWindowResult",
    "WindowKind",
    "WindowPhase",
    "DayCondition",
    "InvalidCoordinate",
    "InvalidTimezone",
    "civil_date_of",
    "civil_day_bounds",
    "get_timezone",
    "to_utc",
    "get_solar_time_engine",
]
