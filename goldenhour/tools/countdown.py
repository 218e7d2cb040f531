"""
Countdown and time formatting for lighting windows.

Everything here is presentation: it consumes NextWindowResult values and
instants, and has no astronomical knowledge of its own.
"""

import math
from datetime import datetime
from typing import Optional

from ..physics import NextWindowResult, WindowKind, get_timezone, to_utc

WINDOW_LABELS = {
    WindowKind.MORNING_GOLDEN: "Morning Golden Hour",
    WindowKind.EVENING_GOLDEN: "Evening Golden Hour",
    WindowKind.MORNING_BLUE: "Morning Blue Hour",
    WindowKind.EVENING_BLUE: "Evening Blue Hour",
}

MINUTES_PER_DAY = 1440


def window_label(kind: Optional[WindowKind]) -> str:
    if kind is None:
        return "No window"
    return WINDOW_LABELS[WindowKind(kind)]


def minutes_until(result: NextWindowResult) -> int:
    """Whole minutes to the boundary, rounded up and never negative."""
    if result.seconds_until_boundary is None:
        return 0
    return max(0, math.ceil(result.seconds_until_boundary / 60))


def format_countdown(result: NextWindowResult) -> str:
    """
    Human readable countdown for a resolved window.

    Examples:
        "NOW! Ends in 12 min", "In 45 minutes", "In 3h 5m", "In 2 days"
    """
    if result.exhausted or result.kind is None:
        return "No upcoming window"

    minutes = minutes_until(result)
    if result.is_current:
        return f"NOW! Ends in {minutes} min"
    if minutes <= 60:
        return f"In {minutes} minutes"
    if minutes <= MINUTES_PER_DAY:
        return f"In {minutes // 60}h {minutes % 60}m"

    days = minutes // MINUTES_PER_DAY
    return f"In {days} day{'s' if days > 1 else ''}"


def format_clock(seconds: int) -> str:
    """Live countdown text: '1h 2m 3s', '2m 3s' or '3s'."""
    seconds = max(0, int(seconds))
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_local_time(instant: Optional[datetime], timezone: str, with_seconds: bool = False) -> Optional[str]:
    """Local wall-clock string (HH:MM or HH:MM:SS) for an instant."""
    if instant is None:
        return None
    local = to_utc(instant).astimezone(get_timezone(timezone))
    return local.strftime("%H:%M:%S" if with_seconds else "%H:%M")
