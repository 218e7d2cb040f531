"""
Response Schemas for the Golden Hour API.

This module defines Pydantic models for API responses.
Instants are ISO 8601 strings in UTC; *_local fields are wall-clock strings
in the requested timezone.
"""

from pydantic import BaseModel, Field
from typing import List, Optional


class TimeWindowResponse(BaseModel):
    """
    Response model for a time window (golden hour, blue hour).

    Attributes:
        start: Start time (ISO format)
        end: End time (ISO format)
        start_local: Local start time (HH:MM)
        end_local: Local end time (HH:MM)
        duration_minutes: Window duration in minutes
        quality: excellent, good, fair or poor (altitude at the midpoint)
        intensity: 0-100 score (altitude at the start)
    """
    start: str = Field(..., description="Start time in ISO format")
    end: str = Field(..., description="End time in ISO format")
    start_local: str = Field(..., description="Local start time (HH:MM)")
    end_local: str = Field(..., description="Local end time (HH:MM)")
    duration_minutes: float = Field(..., description="Duration in minutes")
    quality: str = Field(..., description="excellent, good, fair or poor")
    intensity: int = Field(..., ge=0, le=100, description="Light intensity score")


class LocationInfo(BaseModel):
    """Location the calculation was made for."""
    latitude: float
    longitude: float
    elevation_m: float


class GoldenHourResponse(BaseModel):
    """
    Response model for a day's solar events.

    Absent windows (polar day or night) are null and listed in
    missing_events.
    """
    location: LocationInfo
    date: str = Field(..., description="Civil date (YYYY-MM-DD)")
    timezone: str = Field(..., description="Timezone defining the civil day")

    sunrise: Optional[str] = Field(None, description="Sunrise (ISO format)")
    sunset: Optional[str] = Field(None, description="Sunset (ISO format)")
    solar_noon: str = Field(..., description="Solar noon (ISO format)")
    sunrise_local: Optional[str] = None
    sunset_local: Optional[str] = None
    solar_noon_local: str
    solar_noon_altitude_deg: float = Field(..., description="Sun altitude at solar noon")
    solar_noon_light: str = Field(..., description="Light class at solar noon")

    golden_hour_morning: Optional[TimeWindowResponse] = Field(
        None,
        description="Morning golden hour: sun altitude -4° to +6° (ascending)"
    )
    golden_hour_evening: Optional[TimeWindowResponse] = Field(
        None,
        description="Evening golden hour: sun altitude +6° to -4° (descending)"
    )
    blue_hour_morning: Optional[TimeWindowResponse] = Field(
        None,
        description="Morning blue hour: sun altitude -6° to -4° (ascending)"
    )
    blue_hour_evening: Optional[TimeWindowResponse] = Field(
        None,
        description="Evening blue hour: sun altitude -4° to -6° (descending)"
    )

    day_length_minutes: Optional[float] = Field(None, description="Sunrise to sunset")
    day_condition: str = Field(..., description="normal, polar_day, polar_night or transitional")
    missing_events: List[str] = Field(default_factory=list)


class NextWindowResponse(BaseModel):
    """
    Response model for the next lighting window.

    Attributes:
        date: Civil date of the selected window
        kind: morning_golden, evening_golden, morning_blue or evening_blue
        label: Display name of the window
        phase: upcoming, current or past
        window: The selected window
        boundary_time: Instant the countdown runs toward (ISO format)
        seconds_until_boundary: Signed seconds until boundary_time
        countdown: Human readable countdown
        exhausted: True when no window was found within the lookahead
        days_searched: Civil days examined
    """
    date: str
    kind: Optional[str] = None
    label: str
    phase: str
    window: Optional[TimeWindowResponse] = None
    boundary_time: Optional[str] = None
    seconds_until_boundary: Optional[int] = None
    countdown: str
    exhausted: bool = False
    days_searched: int = 1


class ShadowInfo(BaseModel):
    """Shadow cast by an object of the requested height."""
    length: Optional[float] = Field(None, description="Null when the sun is down")
    direction_deg: float
    description: str


class SunPositionResponse(BaseModel):
    """
    Response model for the sun's position.

    Attributes:
        timestamp: UTC timestamp
        local_time: Local time string (HH:MM:SS)
        azimuth_deg: Sun compass bearing (0=N, 90=E, 180=S, 270=W)
        altitude_deg: Sun altitude above horizon (degrees)
        is_daylight: Whether sun is above the horizon
        light_quality: harsh, good, golden, blue or dark
        shadow: Shadow figures
    """
    timestamp: str = Field(..., description="UTC timestamp (ISO format)")
    local_time: str = Field(..., description="Local time (HH:MM:SS)")
    azimuth_deg: float
    altitude_deg: float
    is_daylight: bool
    light_quality: str
    shadow: ShadowInfo


class HealthResponse(BaseModel):
    """Service health check response."""
    status: str
    version: str
    timestamp: str


class ErrorResponse(BaseModel):
    """Error payload."""
    error: str
    detail: Optional[str] = None
