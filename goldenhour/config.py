"""
Configuration settings for the Golden Hour Engine.

This module defines all configuration parameters using Pydantic Settings,
enabling environment variable overrides for production deployment.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Attributes:
        APP_NAME: Application identifier
        APP_VERSION: Semantic version
        DEBUG: Enable debug mode

        # Solar thresholds (degrees of geometric sun altitude)
        SUNRISE_ALTITUDE: Refraction-corrected horizon for sunrise/sunset
        GOLDEN_HOUR_MIN_ELEVATION: Lower bound of the golden hour band
        GOLDEN_HOUR_MAX_ELEVATION: Upper bound of the golden hour band
        BLUE_HOUR_MIN_ELEVATION: Lower bound of the blue hour band
        BLUE_HOUR_MAX_ELEVATION: Upper bound of the blue hour band

        # Crossing search
        SCAN_STEP_MINUTES: Coarse sampling step before bisection
        MAX_BISECTION_STEPS: Hard cap on bisection iterations per crossing
        MAX_LOOKAHEAD_DAYS: Days the planner may walk forward for a window

        # API Configuration
        API_V1_PREFIX: API version prefix
        HOST: Server host
        PORT: Server port
    """

    # Application
    APP_NAME: str = "Golden Hour Engine"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Timezone used when a request does not name one
    DEFAULT_TIMEZONE: str = "UTC"

    # Solar thresholds
    SUNRISE_ALTITUDE: float = -0.833
    GOLDEN_HOUR_MIN_ELEVATION: float = -4.0
    GOLDEN_HOUR_MAX_ELEVATION: float = 6.0
    BLUE_HOUR_MIN_ELEVATION: float = -6.0
    BLUE_HOUR_MAX_ELEVATION: float = -4.0

    # Crossing search
    SCAN_STEP_MINUTES: int = 10
    MAX_BISECTION_STEPS: int = 64
    MAX_LOOKAHEAD_DAYS: int = 200

    # API Configuration
    API_V1_PREFIX: str = "/api/v1"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Allow extra fields in .env


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings factory.

    Returns:
        Settings: Application configuration singleton
    """
    return Settings()


# Global settings instance
settings = get_settings()
