"""
Request Schemas for the Golden Hour API.

This module defines Pydantic models for API request validation.
Coordinates are range-checked here before they reach the engine.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class GoldenHourRequest(BaseModel):
    """
    Request model for a day's golden hour calculation.

    Attributes:
        latitude: GPS latitude (-90 to 90)
        longitude: GPS longitude (-180 to 180)
        date: Target date (YYYY-MM-DD), defaults to today in the timezone
        timezone: IANA timezone defining the civil day
        elevation_m: Observer elevation in meters (affects horizon dip)
    """
    latitude: float = Field(
        ...,
        ge=-90.0,
        le=90.0,
        description="GPS latitude in decimal degrees",
        examples=[40.7128, 51.5074]
    )
    longitude: float = Field(
        ...,
        ge=-180.0,
        le=180.0,
        description="GPS longitude in decimal degrees",
        examples=[-74.0060, -0.1278]
    )
    date: Optional[str] = Field(
        None,
        pattern=r"^\d{4}-\d{2}-\d{2}$",
        description="Target date in YYYY-MM-DD format",
        examples=["2024-06-21", "2024-03-20"]
    )
    timezone: Optional[str] = Field(
        None,
        max_length=64,
        description="IANA timezone name",
        examples=["America/New_York", "Europe/London"]
    )
    elevation_m: float = Field(
        default=0.0,
        ge=0.0,
        le=9000.0,
        description="Observer elevation in meters"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "latitude": 40.7128,
                "longitude": -74.0060,
                "date": "2024-06-21",
                "timezone": "America/New_York",
                "elevation_m": 10.0
            }
        }


class NextWindowRequest(BaseModel):
    """
    Request model for the next lighting window.

    Attributes:
        latitude: GPS latitude (-90 to 90)
        longitude: GPS longitude (-180 to 180)
        timezone: IANA timezone defining civil days
        now: Reference instant (defaults to the current time)
        golden_only: Only consider golden hour windows
    """
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    timezone: Optional[str] = Field(None, max_length=64, description="IANA timezone name")
    now: Optional[datetime] = Field(
        None,
        description="Reference instant (ISO 8601); naive values are taken as UTC"
    )
    elevation_m: float = Field(default=0.0, ge=0.0, le=9000.0)
    golden_only: bool = Field(
        False,
        description="Restrict the search to golden hour windows"
    )


class SunPositionRequest(BaseModel):
    """Request model for the sun's position at an instant."""
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    timestamp: Optional[datetime] = Field(
        None,
        description="Instant to evaluate (ISO 8601); defaults to now"
    )
    timezone: Optional[str] = Field(None, max_length=64, description="Timezone for local_time")
    object_height: float = Field(
        1.0,
        gt=0.0,
        description="Object height used for the shadow length"
    )
