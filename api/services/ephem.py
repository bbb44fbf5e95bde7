"""Swiss Ephemeris helpers used by the moon-times provider."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Optional, Tuple

import swisseph as swe


# Engine version for API responses
try:
    ENGINE_VERSION = f"swisseph-{swe.version}"
except AttributeError:
    ENGINE_VERSION = "swisseph-2.10"  # Fallback if version not available

AU_METERS = 149_597_870_700.0
UNIX_EPOCH_JD = 2440587.5


class EphemerisError(RuntimeError):
    """Raised when the Swiss Ephemeris cannot compute a requested value."""


def backend_flag() -> int:
    """Return the Swiss Ephemeris backend flag based on environment configuration."""

    raw_backend = os.getenv("EPHEMERIS_BACKEND")
    backend = raw_backend.strip().lower() if raw_backend else "swieph"
    return swe.FLG_MOSEPH if backend == "moseph" else swe.FLG_SWIEPH


def init_paths(ephe_dir: str | os.PathLike[str] | None) -> None:
    """Set the Swiss Ephemeris file search path when available."""

    if not ephe_dir:
        return

    path = os.fspath(ephe_dir)
    if os.path.isdir(path):
        swe.set_ephe_path(path)


def to_jd(moment: datetime) -> float:
    """Convert a timezone-aware datetime into Julian Day (UT)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment_utc = moment.astimezone(timezone.utc)
    return moment_utc.timestamp() / 86400.0 + UNIX_EPOCH_JD


def jd_to_datetime(jd: float) -> datetime:
    seconds = (jd - UNIX_EPOCH_JD) * 86400.0
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def next_event(
    start: datetime,
    body: int,
    rsmi: int,
    lat: float,
    lon: float,
    elevation: float = 0.0,
) -> Optional[datetime]:
    """Return the first rise, set or transit of ``body`` after ``start``.

    ``None`` means the body stays above or below the horizon (circumpolar).
    The result keeps the timezone of ``start``.
    """

    geopos = (lon, lat, elevation)
    try:
        result, times = swe.rise_trans(
            to_jd(start), body, rsmi, geopos, 0.0, 0.0, backend_flag()
        )
    except swe.Error as exc:
        raise EphemerisError(f"Ephemeris calculation failed: {exc}") from exc
    if result < 0 or not times or times[0] <= 0.0:
        return None
    return jd_to_datetime(times[0]).astimezone(start.tzinfo or timezone.utc)


def ecliptic_position(moment: datetime, body: int) -> Tuple[float, float, float]:
    """Return geocentric ecliptic longitude, latitude (degrees) and distance (AU)."""

    try:
        values, _ = swe.calc_ut(to_jd(moment), body, backend_flag())
    except swe.Error as exc:
        raise EphemerisError(f"Ephemeris calculation failed: {exc}") from exc
    lon, lat, dist = values[0], values[1], values[2]
    return lon % 360.0, lat, dist
