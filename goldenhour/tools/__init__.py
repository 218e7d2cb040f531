"""
Golden Hour Tools Package.

Callers of the solar engine that add no astronomy of their own:

- golden_hour: multi-day lookahead, day reports, window ratings, sun path, shadows
- countdown: countdown and local-time formatting
"""

from .golden_hour import (
    GoldenHourPlanner,
    NextWindowLookup,
    classify_light,
    describe_shadow,
    shadow_direction,
    shadow_length,
    window_intensity,
    window_quality,
    get_golden_hour_planner,
)
from .countdown import (
    format_clock,
    format_countdown,
    format_local_time,
    window_label,
)

__all__ = [
    "GoldenHourPlanner",
    "NextWindowLookup",
    "classify_light",
    "describe_shadow",
    "shadow_direction",
    "shadow_length",
    "window_intensity",
    "window_quality",
    "get_golden_hour_planner",
    "format_clock",
    "format_countdown",
    "format_local_time",
    "window_label",
]
