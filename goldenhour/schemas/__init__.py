"""
Pydantic Schemas Package for the Golden Hour API.

This package contains all request and response models for the API.
"""

from .requests import (
    GoldenHourRequest,
    NextWindowRequest,
    SunPositionRequest,
)
from .responses import (
    TimeWindowResponse,
    LocationInfo,
    GoldenHourResponse,
    NextWindowResponse,
    ShadowInfo,
    SunPositionResponse,
    HealthResponse,
    ErrorResponse,
)

__all__ = [
    # Requests
    "GoldenHourRequest",
    "NextWindowRequest",
    "SunPositionRequest",
    # Responses
    "TimeWindowResponse",
    "LocationInfo",
    "GoldenHourResponse",
    "NextWindowResponse",
    "ShadowInfo",
    "SunPositionResponse",
    "HealthResponse",
    "ErrorResponse",
]
