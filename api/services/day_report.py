"""Assemble the per-day moon-times record."""

from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Optional

from ..schemas.moon_times import DayReport
from .astro_provider import RawEventSet
from .moon_windows import DerivedWindows, Window, format_clock


def format_civil_day(day: date) -> str:
    return f"{day.year:04d}/{day.month:02d}/{day.day:02d}"


def format_day_length(sunrise: Optional[datetime], sunset: Optional[datetime]) -> Optional[str]:
    """``HH:MM:SS`` between sunrise and sunset, truncated to whole seconds."""

    if sunrise is None or sunset is None:
        return None
    total = (sunset - sunrise) // timedelta(seconds=1)
    hours, rem = divmod(total, 3600)
    minutes, seconds = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_illumination(fraction: float) -> str:
    return f"{fraction * 100.0:.2f}"


def format_distance(meters: float) -> str:
    return f"{meters:.2f} meters"


def _edges(window: Optional[Window], tz: Optional[tzinfo]) -> tuple[Optional[str], Optional[str]]:
    if window is None:
        return None, None
    return format_clock(window.start, tz), format_clock(window.end, tz)


def assemble_day_report(
    day: date,
    events: RawEventSet,
    windows: DerivedWindows,
    score: float,
    tz: Optional[tzinfo] = None,
) -> DayReport:
    before_moonrise, after_moonrise = _edges(windows.moonrise, tz)
    before_moonset, after_moonset = _edges(windows.moonset, tz)
    before_meridian, after_meridian = _edges(windows.meridian, tz)
    before_opposite, after_opposite = _edges(windows.opposite_meridian, tz)

    return DayReport(
        date=format_civil_day(day),
        moonrise=format_clock(events.moonrise, tz),
        moonset=format_clock(events.moonset, tz),
        meridian_passing=format_clock(windows.meridian_passing, tz),
        opposite_meridian_passing=format_clock(windows.opposite_meridian_passing, tz),
        sunrise=format_clock(events.sunrise, tz),
        sunset=format_clock(events.sunset, tz),
        solar_noon=format_clock(events.solar_noon, tz),
        daylength=format_day_length(events.sunrise, events.sunset),
        thirty_minutes_before_moonrise=before_moonrise,
        thirty_minutes_after_moonrise=after_moonrise,
        thirty_minutes_before_moonset=before_moonset,
        thirty_minutes_after_moonset=after_moonset,
        one_hour_before_meridian=before_meridian,
        one_hour_after_meridian=after_meridian,
        one_hour_before_opposite_meridian=before_opposite,
        one_hour_after_opposite_meridian=after_opposite,
        illumination=format_illumination(events.illumination),
        distance=format_distance(events.distance_m),
        hunt_star=score,
        meridian_times_available=before_meridian is not None and after_meridian is not None,
    )
