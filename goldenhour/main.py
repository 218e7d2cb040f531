"""
Golden Hour Engine: FastAPI Application Entry Point.

This module exposes the solar engine and planner over HTTP. Handlers are thin:
they validate input, call the engine/planner and serialize the result.

Endpoints:
    - GET  /api/v1/health: Service health check
    - POST /api/v1/golden-hour: Solar events and lighting windows for a day
    - POST /api/v1/golden-hour/next: Current or next lighting window
    - POST /api/v1/sun-position: Sun position and lighting quality
"""

import logging
import math
from contextlib import asynccontextmanager
from datetime import datetime, date
from typing import Optional

import pytz
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .schemas import (
    GoldenHourRequest,
    NextWindowRequest,
    SunPositionRequest,
    TimeWindowResponse,
    GoldenHourResponse,
    NextWindowResponse,
    ShadowInfo,
    SunPositionResponse,
    HealthResponse,
)
from .physics import (
    GeoCoordinate,
    TimeWindow,
    WindowKind,
    civil_date_of,
    get_solar_time_engine,
    get_timezone,
)
from .tools import (
    get_golden_hour_planner,
    classify_light,
    describe_shadow,
    shadow_direction,
    shadow_length,
    format_countdown,
    format_local_time,
    window_label,
)

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager for startup/shutdown events.

    Startup:
        - Build the solar engine and planner singletons
    """
    logger.info(f"Starting {settings.APP_NAME}...")

    engine = get_solar_time_engine()
    get_golden_hour_planner()
    logger.info(f"Solar engine ready with thresholds {engine.thresholds}")

    logger.info(f"{settings.APP_NAME} ready on port {settings.PORT}")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
    ## Golden Hour Engine

    Physics-based photography timing:

    - **Golden Hour**: Sun altitude between -4° and +6°
    - **Blue Hour**: Sun altitude between -6° and -4°
    - Sunrise/sunset at -0.833° (refraction-corrected horizon)
    - Live countdown to the current or next lighting window
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _resolve_timezone(name: Optional[str]) -> str:
    zone = name or settings.DEFAULT_TIMEZONE
    get_timezone(zone)
    return zone


def _build_time_window(
    coord: GeoCoordinate,
    kind: Optional[WindowKind],
    window: Optional[TimeWindow],
    timezone: str
) -> Optional[TimeWindowResponse]:
    if kind is None or window is None:
        return None
    report = get_golden_hour_planner().describe_window(coord, kind, window, timezone)
    return TimeWindowResponse(**report)


# =============================================================================
# HEALTH
# =============================================================================

@app.get(
    f"{settings.API_V1_PREFIX}/health",
    response_model=HealthResponse,
    tags=["System"],
    summary="Service health check"
)
async def health():
    return HealthResponse(
        status="healthy",
        version=settings.APP_VERSION,
        timestamp=datetime.now(pytz.UTC).isoformat()
    )


# =============================================================================
# GOLDEN HOUR ENDPOINTS
# =============================================================================

@app.post(
    f"{settings.API_V1_PREFIX}/golden-hour",
    response_model=GoldenHourResponse,
    tags=["Golden Hour"],
    summary="Solar events and lighting windows for a civil day",
    description="""
    Calculate sunrise, sunset, solar noon and the golden/blue hour windows
    for one civil day in the requested timezone.

    Windows that do not occur on that day (polar day or night) are returned
    as null and listed in `missing_events`.
    """
)
async def calculate_golden_hour(request: GoldenHourRequest):
    """
    Golden hour calculation endpoint.

    Args:
        request: GoldenHourRequest with coordinates, date and timezone

    Returns:
        GoldenHourResponse with complete solar timing data
    """
    try:
        timezone = _resolve_timezone(request.timezone)

        if request.date:
            try:
                target_date = date.fromisoformat(request.date)
            except ValueError:
                raise HTTPException(
                    status_code=400,
                    detail=f"Invalid date format: {request.date}. Use YYYY-MM-DD."
                )
        else:
            target_date = civil_date_of(datetime.now(pytz.UTC), timezone)

        coord = GeoCoordinate(
            latitude=request.latitude,
            longitude=request.longitude,
            elevation_m=request.elevation_m
        )
        report = get_golden_hour_planner().get_day_report(coord, target_date, timezone)

        return GoldenHourResponse(**report)

    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Golden hour calculation error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post(
    f"{settings.API_V1_PREFIX}/golden-hour/next",
    response_model=NextWindowResponse,
    tags=["Golden Hour"],
    summary="Current or next lighting window with countdown"
)
async def next_golden_hour(request: NextWindowRequest):
    """
    Next window endpoint.

    Starts from the civil day before `now`, whose evening windows may still be
    running, and walks forward until a window is current or still ahead, up
    to the configured lookahead.
    """
    try:
        timezone = _resolve_timezone(request.timezone)
        now = request.now or datetime.now(pytz.UTC)
        coord = GeoCoordinate(
            latitude=request.latitude,
            longitude=request.longitude,
            elevation_m=request.elevation_m
        )
        kinds = (WindowKind.MORNING_GOLDEN, WindowKind.EVENING_GOLDEN) if request.golden_only else None

        lookup = get_golden_hour_planner().find_next_window(coord, timezone, now, kinds=kinds)
        result = lookup.result

        return NextWindowResponse(
            date=lookup.date.isoformat(),
            kind=result.kind.value if result.kind else None,
            label=window_label(result.kind),
            phase=result.phase.value,
            window=_build_time_window(coord, result.kind, result.window, timezone),
            boundary_time=result.boundary_time.isoformat() if result.boundary_time else None,
            seconds_until_boundary=result.seconds_until_boundary,
            countdown=format_countdown(result),
            exhausted=result.exhausted,
            days_searched=lookup.days_searched
        )

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Next window error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post(
    f"{settings.API_V1_PREFIX}/sun-position",
    response_model=SunPositionResponse,
    tags=["Golden Hour"],
    summary="Sun position and lighting quality"
)
async def sun_position(request: SunPositionRequest):
    try:
        timezone = _resolve_timezone(request.timezone)
        instant = request.timestamp or datetime.now(pytz.UTC)
        coord = GeoCoordinate(latitude=request.latitude, longitude=request.longitude)

        engine = get_solar_time_engine()
        position = engine.compute_sun_position(instant, coord)
        length = shadow_length(request.object_height, position.altitude)

        return SunPositionResponse(
            timestamp=position.instant.isoformat(),
            local_time=format_local_time(position.instant, timezone, with_seconds=True),
            azimuth_deg=round(position.azimuth, 2),
            altitude_deg=round(position.altitude, 2),
            is_daylight=position.is_daylight,
            light_quality=classify_light(position.altitude, engine),
            shadow=ShadowInfo(
                length=round(length, 2) if math.isfinite(length) else None,
                direction_deg=round(shadow_direction(position.azimuth), 2),
                description=describe_shadow(position.altitude)
            )
        )

    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Sun position error: {e}")
        raise HTTPException(status_code=500, detail=str(e))
