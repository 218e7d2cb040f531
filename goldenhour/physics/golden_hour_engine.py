"""
Golden Hour Engine: Physics-Based Solar Position and Lighting Windows.

==============================================================================
OVERVIEW
==============================================================================

This module turns (civil date, latitude, longitude) into the standard
photographic lighting windows, and resolves which of those windows is the
most relevant one relative to a reference instant ("now").

Physical Definitions (geometric sun altitude, defaults):
    - Sunrise/Sunset: altitude crosses -0.833°
        (0.567° atmospheric refraction + 0.266° solar semi-diameter)

    - Golden Hour: altitude between -4° and +6°
        - Morning: ascending through the band
        - Evening: descending through the band

    - Blue Hour: altitude between -6° and -4°
        - Morning and evening sides computed separately

    The thresholds are configurable through ``SolarThresholds`` (and the
    matching settings) rather than hard-coded.

Solar Position:
    Position is computed with the `astral` library (NOAA solar equations:
    julian century, solar declination, equation of time, hour angle and the
    horizontal-coordinate conversion). Apparent altitude adds astral's
    refraction model; all event searches use geometric altitude so that the
    -0.833° horizon matches the NOAA convention.

    astral clamps latitude to ±89.8° internally, so the exact poles produce a
    finite result, but azimuth there is not meaningful.

Civil Day:
    Events always belong to the calendar day in the coordinate's IANA time
    zone, never UTC and never the host's local zone. A civil day is
    [local midnight, next local midnight), so DST transition days are 23 or
    25 hours long.

Topographic Correction (Elevation):
    For an observer above sea level the visible horizon is depressed by the
    dip angle θ = arccos(R_e / (R_e + h)), R_e = 6371 km. Every threshold is
    shifted down by θ.

Absent Events:
    Near the poles a threshold may never be crossed on a given day. Such
    events are reported as ``None`` (never as a zero-length window), and
    ``SunEventSet.missing_events`` lists them. Likewise
    ``resolve_next_window`` never reaches into the next day: it flags
    ``exhausted`` and the caller advances the date.

References:
    [1] Meeus, J. (1991). Astronomical Algorithms. Willmann-Bell.
    [2] NOAA Solar Calculator. https://gml.noaa.gov/grad/solcalc/
==============================================================================
"""

import math
import logging
from datetime import datetime, date, time, timedelta
from typing import Dict, Iterable, List, Optional, Tuple, Any
from dataclasses import dataclass
from enum import Enum

import pytz
from astral import Observer
from astral.sun import elevation as astral_elevation, azimuth as astral_azimuth

from ..config import settings

logger = logging.getLogger(__name__)

# Earth's mean radius in kilometers
EARTH_RADIUS_KM = 6371.0

# Evening windows may end (and morning windows start) this far from their anchor
WINDOW_SPILL = timedelta(hours=12)

# Golden-section ratio used to refine solar noon
INV_PHI = (math.sqrt(5) - 1) / 2


class InvalidCoordinate(ValueError):
    """Latitude/longitude out of range, or not a finite number."""


class InvalidTimezone(ValueError):
    """Time zone name is not a known IANA zone."""


class WindowKind(str, Enum):
    """The four photographic lighting windows of a civil day."""
    MORNING_GOLDEN = "morning_golden"
    EVENING_GOLDEN = "evening_golden"
    MORNING_BLUE = "morning_blue"
    EVENING_BLUE = "evening_blue"


class WindowPhase(str, Enum):
    """Position of a window relative to the reference instant."""
    UPCOMING = "upcoming"
    CURRENT = "current"
    PAST = "past"


class DayCondition(str, Enum):
    NORMAL = "normal"
    POLAR_DAY = "polar_day"
    POLAR_NIGHT = "polar_night"
    TRANSITIONAL = "transitional"


# Tie-break when more than one window contains "now", highest first
WINDOW_PRECEDENCE: Tuple[WindowKind, ...] = (
    WindowKind.EVENING_GOLDEN,
    WindowKind.MORNING_GOLDEN,
    WindowKind.EVENING_BLUE,
    WindowKind.MORNING_BLUE,
)

# Chronological order of a normal day
WINDOW_ORDER: Tuple[WindowKind, ...] = (
    WindowKind.MORNING_BLUE,
    WindowKind.MORNING_GOLDEN,
    WindowKind.EVENING_GOLDEN,
    WindowKind.EVENING_BLUE,
)


def to_utc(instant: datetime) -> datetime:
    """Normalize an instant to UTC. Naive datetimes are taken as UTC."""
    if instant.tzinfo is None:
        return pytz.UTC.localize(instant)
    return instant.astimezone(pytz.UTC)


def _from_epoch(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, tz=pytz.UTC)


def get_timezone(name: str):
    """
    Resolve an IANA time zone name.

    Raises:
        InvalidTimezone: If the name is unknown
    """
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        raise InvalidTimezone(f"Unknown timezone: {name!r}") from None


def civil_day_bounds(target_date: date, tz) -> Tuple[datetime, datetime]:
    """UTC instants of local midnight at the start and end of target_date."""
    start = tz.localize(datetime.combine(target_date, time(0, 0)))
    end = tz.localize(datetime.combine(target_date + timedelta(days=1), time(0, 0)))
    return start.astimezone(pytz.UTC), end.astimezone(pytz.UTC)


def civil_date_of(instant: datetime, timezone: str) -> date:
    """Calendar date of an instant as seen in the given zone."""
    return to_utc(instant).astimezone(get_timezone(timezone)).date()


@dataclass(frozen=True)
class GeoCoordinate:
    """
    Observer location.

    Attributes:
        latitude: Decimal degrees, -90 (south) to 90 (north)
        longitude: Decimal degrees, -180 (west) to 180 (east)
        elevation_m: Observer height above sea level in meters

    Out-of-range input is rejected with InvalidCoordinate, never clamped.
    """
    latitude: float
    longitude: float
    elevation_m: float = 0.0

    def __post_init__(self):
        for name in ("latitude", "longitude", "elevation_m"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise InvalidCoordinate(f"{name} must be a finite number, got {value!r}")
        if not -90 <= self.latitude <= 90:
            raise InvalidCoordinate(f"Latitude must be between -90 and 90, got {self.latitude}")
        if not -180 <= self.longitude <= 180:
            raise InvalidCoordinate(f"Longitude must be between -180 and 180, got {self.longitude}")
        if self.elevation_m < 0:
            raise InvalidCoordinate(f"Elevation must not be negative, got {self.elevation_m}")

    @property
    def observer(self) -> Observer:
        return Observer(latitude=float(self.latitude), longitude=float(self.longitude))

    @property
    def horizon_dip(self) -> float:
        """
        Horizon dip angle in degrees for the observer's elevation.

        Formula: θ = arccos(R_e / (R_e + h))
        """
        if self.elevation_m <= 0:
            return 0.0

        h_km = self.elevation_m / 1000.0
        cos_dip = EARTH_RADIUS_KM / (EARTH_RADIUS_KM + h_km)
        return math.degrees(math.acos(min(1.0, cos_dip)))


@dataclass(frozen=True)
class TimeWindow:
    """
    A closed interval of absolute instants (UTC).

    Attributes:
        start: Window start
        end: Window end, never before start
    """
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Window start {self.start} is after end {self.end}")

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def duration_minutes(self) -> float:
        return self.duration.total_seconds() / 60

    @property
    def midpoint(self) -> datetime:
        return self.start + self.duration / 2

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end

    def overlaps(self, other: "TimeWindow") -> bool:
        # Windows sharing only a boundary instant do not overlap
        return self.start < other.end and other.start < self.end

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "duration_minutes": round(self.duration_minutes, 1),
        }


@dataclass(frozen=True)
class SunPosition:
    """
    Sun position at a specific instant.

    Attributes:
        instant: UTC instant of the calculation
        azimuth: Compass bearing in degrees (0=N, 90=E, 180=S, 270=W)
        altitude: Elevation above the horizon in degrees (negative below)
    """
    instant: datetime
    azimuth: float
    altitude: float

    @property
    def is_daylight(self) -> bool:
        return self.altitude > 0


@dataclass(frozen=True)
class SolarThresholds:
    """
    Altitude thresholds, in degrees, that delimit the lighting windows.

    The bands must be ordered blue_low < blue_high <= golden_low < golden_high,
    and the sunrise altitude must sit inside the golden band.
    """
    sunrise: float = -0.833
    golden_low: float = -4.0
    golden_high: float = 6.0
    blue_low: float = -6.0
    blue_high: float = -4.0

    def __post_init__(self):
        if not self.blue_low < self.blue_high <= self.golden_low < self.golden_high:
            raise ValueError(
                "Thresholds must satisfy blue_low < blue_high <= golden_low < golden_high, "
                f"got {self}"
            )
        if not self.golden_low < self.sunrise < self.golden_high:
            raise ValueError(f"Sunrise altitude {self.sunrise} must lie inside the golden band")

    @classmethod
    def from_settings(cls, config=None) -> "SolarThresholds":
        config = config or settings
        return cls(
            sunrise=config.SUNRISE_ALTITUDE,
            golden_low=config.GOLDEN_HOUR_MIN_ELEVATION,
            golden_high=config.GOLDEN_HOUR_MAX_ELEVATION,
            blue_low=config.BLUE_HOUR_MIN_ELEVATION,
            blue_high=config.BLUE_HOUR_MAX_ELEVATION,
        )


@dataclass(frozen=True)
class SunEventSet:
    """
    Solar events for one civil day at one location.

    ``None`` marks an event that does not happen on this day (polar day or
    night); callers must handle it explicitly.

    Attributes:
        date: Civil date the events belong to
        coordinate: Observer location
        timezone: IANA zone that defines the civil day
        solar_noon: Instant of highest sun altitude within the civil day
        solar_noon_altitude: Geometric altitude at solar noon (degrees)
        horizon_altitude: Sunrise threshold used, after horizon dip
        sunrise / sunset: Crossings of the sunrise threshold
        golden_hour_morning / golden_hour_evening: Golden hour windows
        blue_hour_morning / blue_hour_evening: Blue hour windows
    """
    date: date
    coordinate: GeoCoordinate
    timezone: str
    solar_noon: datetime
    solar_noon_altitude: float
    horizon_altitude: float
    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None
    golden_hour_morning: Optional[TimeWindow] = None
    golden_hour_evening: Optional[TimeWindow] = None
    blue_hour_morning: Optional[TimeWindow] = None
    blue_hour_evening: Optional[TimeWindow] = None

    def window(self, kind: WindowKind) -> Optional[TimeWindow]:
        return {
            WindowKind.MORNING_GOLDEN: self.golden_hour_morning,
            WindowKind.EVENING_GOLDEN: self.golden_hour_evening,
            WindowKind.MORNING_BLUE: self.blue_hour_morning,
            WindowKind.EVENING_BLUE: self.blue_hour_evening,
        }[WindowKind(kind)]

    def windows(self) -> Dict[WindowKind, TimeWindow]:
        """Present windows in chronological order, absent ones omitted."""
        return {
            kind: self.window(kind)
            for kind in WINDOW_ORDER
            if self.window(kind) is not None
        }

    @property
    def missing_events(self) -> List[str]:
        missing = [name for name in ("sunrise", "sunset") if getattr(self, name) is None]
        missing.extend(kind.value for kind in WINDOW_ORDER if self.window(kind) is None)
        return missing

    @property
    def day_length(self) -> Optional[timedelta]:
        if self.sunrise is None or self.sunset is None:
            return None
        return self.sunset - self.sunrise

    @property
    def day_condition(self) -> DayCondition:
        if self.sunrise is not None and self.sunset is not None:
            return DayCondition.NORMAL
        if self.sunrise is None and self.sunset is None:
            if self.solar_noon_altitude > self.horizon_altitude:
                return DayCondition.POLAR_DAY
            return DayCondition.POLAR_NIGHT
        return DayCondition.TRANSITIONAL

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        def iso(instant: Optional[datetime]) -> Optional[str]:
            return instant.isoformat() if instant else None

        day_length = self.day_length
        return {
            "date": self.date.isoformat(),
            "timezone": self.timezone,
            "location": {
                "latitude": self.coordinate.latitude,
                "longitude": self.coordinate.longitude,
                "elevation_m": self.coordinate.elevation_m,
            },
            "sunrise": iso(self.sunrise),
            "sunset": iso(self.sunset),
            "solar_noon": iso(self.solar_noon),
            "solar_noon_altitude_deg": round(self.solar_noon_altitude, 2),
            "golden_hour_morning": self.golden_hour_morning.to_dict() if self.golden_hour_morning else None,
            "golden_hour_evening": self.golden_hour_evening.to_dict() if self.golden_hour_evening else None,
            "blue_hour_morning": self.blue_hour_morning.to_dict() if self.blue_hour_morning else None,
            "blue_hour_evening": self.blue_hour_evening.to_dict() if self.blue_hour_evening else None,
            "day_length_minutes": round(day_length.total_seconds() / 60, 1) if day_length else None,
            "day_condition": self.day_condition.value,
            "missing_events": self.missing_events,
        }


@dataclass(frozen=True)
class NextWindowResult:
    """
    The window most relevant to a reference instant.

    Attributes:
        kind: Selected window, or None when the day has no windows at all
        phase: Upcoming, current or past relative to "now"
        window: The selected window itself
        boundary_time: What the countdown counts toward
            (window start when upcoming, window end when current or past)
        seconds_until_boundary: Signed whole seconds from now to boundary_time
        exhausted: True when no window of the day is current or still ahead;
            the caller should advance to the next civil day and retry
    """
    kind: Optional[WindowKind]
    phase: WindowPhase
    window: Optional[TimeWindow]
    boundary_time: Optional[datetime]
    seconds_until_boundary: Optional[int]
    exhausted: bool = False

    @property
    def is_current(self) -> bool:
        return self.phase == WindowPhase.CURRENT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "kind": self.kind.value if self.kind else None,
            "phase": self.phase.value,
            "window": self.window.to_dict() if self.window else None,
            "boundary_time": self.boundary_time.isoformat() if self.boundary_time else None,
            "seconds_until_boundary": self.seconds_until_boundary,
            "exhausted": self.exhausted,
        }


class SolarTimeEngine:
    """
    Solar position and lighting-window calculator.

    The engine is pure: it keeps no state beyond its immutable configuration,
    performs no I/O and can be shared freely between threads.

    Example:
        >>> engine = SolarTimeEngine()
        >>> nyc = GeoCoordinate(latitude=40.7128, longitude=-74.0060)
        >>> events = engine.compute_sun_events(date(2024, 6, 21), nyc, "America/New_York")
        >>> events.sunrise.astimezone(pytz.timezone("America/New_York")).strftime("%H:%M")
        '05:25'
    """

    def __init__(
        self,
        thresholds: Optional[SolarThresholds] = None,
        scan_step_minutes: Optional[int] = None,
        max_bisection_steps: Optional[int] = None
    ):
        """
        Initialize the engine.

        Args:
            thresholds: Altitude thresholds (default: from settings)
            scan_step_minutes: Coarse sampling step before bisection
            max_bisection_steps: Cap on bisection iterations per crossing
        """
        self.thresholds = thresholds or SolarThresholds.from_settings()
        self.scan_step = timedelta(minutes=scan_step_minutes or settings.SCAN_STEP_MINUTES)
        self.max_bisection_steps = max_bisection_steps or settings.MAX_BISECTION_STEPS

        if self.scan_step <= timedelta(0):
            raise ValueError("scan_step_minutes must be positive")

        logger.debug(f"SolarTimeEngine initialized with thresholds {self.thresholds}")

    # ------------------------------------------------------------------
    # Sun position
    # ------------------------------------------------------------------

    def compute_sun_position(
        self,
        instant: datetime,
        coord: GeoCoordinate,
        with_refraction: bool = True
    ) -> SunPosition:
        """
        Compute the sun's horizontal coordinates.

        Args:
            instant: Absolute instant (naive values are taken as UTC)
            coord: Observer location
            with_refraction: Report apparent (refracted) altitude

        Returns:
            SunPosition with azimuth 0-360 (0 = north) and altitude in degrees
        """
        instant = to_utc(instant)
        observer = coord.observer

        altitude = astral_elevation(observer, instant, with_refraction=with_refraction)
        azimuth = astral_azimuth(observer, instant) % 360.0

        return SunPosition(instant=instant, azimuth=azimuth, altitude=altitude)

    def _altitude(self, observer: Observer, instant: datetime) -> float:
        """Geometric altitude, the quantity every event search works on."""
        return astral_elevation(observer, instant, with_refraction=False)

    # ------------------------------------------------------------------
    # Crossing search
    # ------------------------------------------------------------------

    def _sample(
        self,
        observer: Observer,
        start: datetime,
        end: datetime
    ) -> List[Tuple[datetime, float]]:
        """Altitude samples every scan step from start to end, both included."""
        if end <= start:
            return []

        samples = []
        instant = start
        while instant < end:
            samples.append((instant, self._altitude(observer, instant)))
            instant += self.scan_step
        samples.append((end, self._altitude(observer, end)))
        return samples

    def _bisect(
        self,
        observer: Observer,
        lo: datetime,
        hi: datetime,
        threshold: float,
        rising: bool
    ) -> datetime:
        """
        Locate a threshold crossing inside a bracketing interval.

        Works on whole epoch seconds and returns the first second at which the
        crossing has happened. Since astral resolves time to the second, the
        result does not depend on where the bracket came from, so two searches
        for the same crossing agree exactly.
        """
        lo_s = math.floor(lo.timestamp())
        hi_s = math.ceil(hi.timestamp())

        for _ in range(self.max_bisection_steps):
            if hi_s - lo_s <= 1:
                break
            mid = (lo_s + hi_s) // 2
            below = self._altitude(observer, _from_epoch(mid)) < threshold
            if below == rising:
                lo_s = mid
            else:
                hi_s = mid

        return _from_epoch(hi_s)

    def _find_crossings(
        self,
        observer: Observer,
        start: datetime,
        end: datetime,
        threshold: float,
        rising: bool
    ) -> List[datetime]:
        """All crossings of threshold in the given direction, in time order."""
        samples = self._sample(observer, start, end)
        crossings = []

        for (t0, a0), (t1, a1) in zip(samples, samples[1:]):
            if rising:
                crossed = a0 < threshold <= a1
            else:
                crossed = a0 >= threshold > a1
            if crossed:
                crossings.append(self._bisect(observer, t0, t1, threshold, rising))

        return crossings

    def _find_solar_noon(
        self,
        observer: Observer,
        day_start: datetime,
        day_end: datetime
    ) -> datetime:
        """Instant of maximum altitude in the civil day, to the second."""
        samples = self._sample(observer, day_start, day_end)
        peak = max(range(len(samples)), key=lambda i: samples[i][1])

        lo = samples[max(peak - 1, 0)][0]
        hi = samples[min(peak + 1, len(samples) - 1)][0]

        for _ in range(self.max_bisection_steps):
            if (hi - lo).total_seconds() <= 1:
                break
            span = hi - lo
            left = hi - span * INV_PHI
            right = lo + span * INV_PHI
            if self._altitude(observer, left) < self._altitude(observer, right):
                lo = left
            else:
                hi = right

        return _from_epoch(round((lo + (hi - lo) / 2).timestamp()))

    def _morning_window(
        self,
        observer: Observer,
        day_start: datetime,
        noon: datetime,
        low: float,
        high: float
    ) -> Optional[TimeWindow]:
        # Anchored on the end crossing, which must fall in the civil morning
        ends = self._find_crossings(observer, day_start, noon, high, rising=True)
        if not ends:
            return None
        end = ends[-1]

        starts = self._find_crossings(observer, end - WINDOW_SPILL, end, low, rising=True)
        if not starts:
            return None
        return TimeWindow(start=starts[-1], end=end)

    def _evening_window(
        self,
        observer: Observer,
        noon: datetime,
        day_end: datetime,
        low: float,
        high: float
    ) -> Optional[TimeWindow]:
        # Anchored on the start crossing; the end may fall after local midnight
        starts = self._find_crossings(observer, noon, day_end, high, rising=False)
        if not starts:
            return None
        start = starts[0]

        ends = self._find_crossings(observer, start, start + WINDOW_SPILL, low, rising=False)
        if not ends:
            return None
        return TimeWindow(start=start, end=ends[0])

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def compute_sun_events(
        self,
        target_date: date,
        coord: GeoCoordinate,
        timezone: Optional[str] = None
    ) -> SunEventSet:
        """
        Calculate sunrise, sunset, solar noon and the four lighting windows.

        Args:
            target_date: Civil date for calculation
            coord: Observer location
            timezone: IANA zone defining the civil day (default: settings)

        Returns:
            SunEventSet; events that do not occur on this day are None

        Raises:
            InvalidTimezone: If the zone name is unknown
        """
        zone_name = timezone or settings.DEFAULT_TIMEZONE
        tz = get_timezone(zone_name)
        day_start, day_end = civil_day_bounds(target_date, tz)

        observer = coord.observer
        dip = coord.horizon_dip
        th = self.thresholds
        horizon = th.sunrise - dip

        noon = self._find_solar_noon(observer, day_start, day_end)
        noon_altitude = self._altitude(observer, noon)

        sunrises = self._find_crossings(observer, day_start, noon, horizon, rising=True)
        sunsets = self._find_crossings(observer, noon, day_end, horizon, rising=False)

        events = SunEventSet(
            date=target_date,
            coordinate=coord,
            timezone=zone_name,
            solar_noon=noon,
            solar_noon_altitude=noon_altitude,
            horizon_altitude=horizon,
            sunrise=sunrises[-1] if sunrises else None,
            sunset=sunsets[0] if sunsets else None,
            golden_hour_morning=self._morning_window(
                observer, day_start, noon, th.golden_low - dip, th.golden_high - dip
            ),
            golden_hour_evening=self._evening_window(
                observer, noon, day_end, th.golden_low - dip, th.golden_high - dip
            ),
            blue_hour_morning=self._morning_window(
                observer, day_start, noon, th.blue_low - dip, th.blue_high - dip
            ),
            blue_hour_evening=self._evening_window(
                observer, noon, day_end, th.blue_low - dip, th.blue_high - dip
            ),
        )

        if events.missing_events:
            logger.debug(
                f"No {', '.join(events.missing_events)} on {target_date} at "
                f"({coord.latitude}, {coord.longitude}): {events.day_condition.value}"
            )

        return events

    def resolve_next_window(
        self,
        events: SunEventSet,
        now: datetime,
        kinds: Optional[Iterable[WindowKind]] = None
    ) -> NextWindowResult:
        """
        Select the window most relevant to ``now`` within a single day.

        1. A window containing now is current and counts down to its end.
           Ties go to EveningGolden > MorningGolden > EveningBlue > MorningBlue.
        2. Otherwise the window with the earliest future start is upcoming and
           counts down to its start.
        3. Otherwise the day is exhausted: the result is flagged, points at the
           window that ended last (if any) with phase PAST, and the caller
           must compute the next civil day and retry. This method never
           crosses days itself.

        Args:
            events: One day's events
            now: Reference instant (naive values are taken as UTC)
            kinds: Restrict the candidates (default: all four windows)

        Returns:
            NextWindowResult
        """
        now = to_utc(now)
        windows = events.windows()
        if kinds is not None:
            allowed = {WindowKind(kind) for kind in kinds}
            windows = {kind: window for kind, window in windows.items() if kind in allowed}

        for kind in WINDOW_PRECEDENCE:
            window = windows.get(kind)
            if window is not None and window.contains(now):
                return self._result(kind, WindowPhase.CURRENT, window, window.end, now)

        upcoming = [kind for kind, window in windows.items() if window.start > now]
        if upcoming:
            kind = min(upcoming, key=lambda k: (windows[k].start, WINDOW_PRECEDENCE.index(k)))
            return self._result(kind, WindowPhase.UPCOMING, windows[kind], windows[kind].start, now)

        logger.debug(f"All windows of {events.date} have passed at {now.isoformat()}")

        if not windows:
            return NextWindowResult(
                kind=None,
                phase=WindowPhase.PAST,
                window=None,
                boundary_time=None,
                seconds_until_boundary=None,
                exhausted=True,
            )

        kind = max(windows, key=lambda k: (windows[k].end, -WINDOW_PRECEDENCE.index(k)))
        return self._result(kind, WindowPhase.PAST, windows[kind], windows[kind].end, now, exhausted=True)

    @staticmethod
    def _result(
        kind: WindowKind,
        phase: WindowPhase,
        window: TimeWindow,
        boundary: datetime,
        now: datetime,
        exhausted: bool = False
    ) -> NextWindowResult:
        return NextWindowResult(
            kind=kind,
            phase=phase,
            window=window,
            boundary_time=boundary,
            seconds_until_boundary=math.ceil((boundary - now).total_seconds()),
            exhausted=exhausted,
        )


# Singleton instance
_solar_time_engine: Optional[SolarTimeEngine] = None


def get_solar_time_engine() -> SolarTimeEngine:
    """
    Get or create the SolarTimeEngine singleton.

    Returns:
        SolarTimeEngine: Singleton instance
    """
    global _solar_time_engine
    if _solar_time_engine is None:
        _solar_time_engine = SolarTimeEngine()
    return _solar_time_engine
