"""Derived time windows around the raw sun and moon events of a day."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Optional

from .astro_provider import RawEventSet


MOON_HORIZON_OFFSET = timedelta(minutes=30)
MERIDIAN_OFFSET = timedelta(minutes=60)
SUN_HORIZON_OFFSET = timedelta(minutes=60)
ANTIPODE_SHIFT = timedelta(hours=12)


def format_clock(moment: Optional[datetime], tz: Optional[tzinfo] = None) -> Optional[str]:
    """Render ``moment`` as a 24-hour ``HH:MM`` wall-clock string, or ``None``.

    Seconds are truncated. ``tz=None`` renders in the server's local time.
    """

    if moment is None:
        return None
    return moment.astimezone(tz).strftime("%H:%M")


def clock_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def is_between(candidate: str, start: str, end: str) -> bool:
    """Inclusive ``start <= candidate <= end`` on minutes since midnight.

    The comparison does not wrap: a window whose start is later in the day
    than its end never contains anything.
    """

    return clock_minutes(start) <= clock_minutes(candidate) <= clock_minutes(end)


@dataclass(frozen=True)
class ClockWindow:
    start: str
    end: str

    def contains(self, candidate: str) -> bool:
        return is_between(candidate, self.start, self.end)


@dataclass(frozen=True)
class Window:
    start: datetime
    end: datetime

    @classmethod
    def around(cls, moment: Optional[datetime], offset: timedelta) -> Optional["Window"]:
        if moment is None:
            return None
        return cls(start=moment - offset, end=moment + offset)

    def to_clock(self, tz: Optional[tzinfo] = None) -> ClockWindow:
        return ClockWindow(start=format_clock(self.start, tz), end=format_clock(self.end, tz))


def clock_window(window: Optional[Window], tz: Optional[tzinfo] = None) -> Optional[ClockWindow]:
    return window.to_clock(tz) if window is not None else None


def meridian_passing(rise: Optional[datetime], set_: Optional[datetime]) -> Optional[datetime]:
    """Midpoint between moonrise and moonset, the approximate lunar transit."""
    if rise is None or set_ is None:
        return None
    return rise + (set_ - rise) / 2


@dataclass(frozen=True)
class DerivedWindows:
    meridian_passing: Optional[datetime]
    opposite_meridian_passing: Optional[datetime]
    moonrise: Optional[Window]
    moonset: Optional[Window]
    meridian: Optional[Window]
    opposite_meridian: Optional[Window]
    sunrise: Optional[Window]
    sunset: Optional[Window]


def build_windows(events: RawEventSet) -> DerivedWindows:
    meridian = meridian_passing(events.moonrise, events.moonset)
    opposite = meridian + ANTIPODE_SHIFT if meridian is not None else None
    return DerivedWindows(
        meridian_passing=meridian,
        opposite_meridian_passing=opposite,
        moonrise=Window.around(events.moonrise, MOON_HORIZON_OFFSET),
        moonset=Window.around(events.moonset, MOON_HORIZON_OFFSET),
        meridian=Window.around(meridian, MERIDIAN_OFFSET),
        opposite_meridian=Window.around(opposite, MERIDIAN_OFFSET),
        sunrise=Window.around(events.sunrise, SUN_HORIZON_OFFSET),
        sunset=Window.around(events.sunset, SUN_HORIZON_OFFSET),
    )
