"""Astronomical event provider backed by the Swiss Ephemeris.

The moon-times core never talks to ``swisseph`` directly. It asks an
``AstronomyProvider`` for the raw events of one civil day and treats the
answers as opaque timestamps and numbers, which keeps the window and scoring
logic testable with hand-written providers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time as time_cls, timedelta, tzinfo
from typing import Optional, Protocol

import swisseph as swe

from .ephem import AU_METERS, ecliptic_position, next_event


HALF_DAY = timedelta(hours=12)
FULL_DAY = timedelta(hours=24)


@dataclass(frozen=True)
class SunTimes:
    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None
    solar_noon: Optional[datetime] = None


@dataclass(frozen=True)
class MoonTimes:
    rise: Optional[datetime] = None
    set: Optional[datetime] = None


@dataclass(frozen=True)
class RawEventSet:
    """Everything the provider knows about one civil day at one location."""

    sunrise: Optional[datetime]
    sunset: Optional[datetime]
    solar_noon: Optional[datetime]
    moonrise: Optional[datetime]
    moonset: Optional[datetime]
    illumination: float
    distance_m: float


class AstronomyProvider(Protocol):
    def sun_times(self, day_start: datetime, lat: float, lon: float) -> SunTimes:
        ...

    def moon_times(self, day_start: datetime, lat: float, lon: float) -> MoonTimes:
        ...

    def moon_illumination(self, moment: datetime) -> float:
        ...

    def moon_distance(self, moment: datetime, lat: float, lon: float) -> float:
        ...


def start_of_civil_day(day: date, tz: Optional[tzinfo] = None) -> datetime:
    """Local midnight of ``day``; ``tz=None`` means the server's local time."""

    if tz is None:
        return datetime.combine(day, time_cls(0, 0)).astimezone()
    return datetime.combine(day, time_cls(0, 0), tzinfo=tz)


def collect_raw_events(
    provider: AstronomyProvider,
    day: date,
    lat: float,
    lon: float,
    tz: Optional[tzinfo] = None,
) -> RawEventSet:
    day_start = start_of_civil_day(day, tz)
    sun = provider.sun_times(day_start, lat, lon)
    moon = provider.moon_times(day_start, lat, lon)
    return RawEventSet(
        sunrise=sun.sunrise,
        sunset=sun.sunset,
        solar_noon=sun.solar_noon,
        moonrise=moon.rise,
        moonset=moon.set,
        illumination=provider.moon_illumination(day_start),
        distance_m=provider.moon_distance(day_start, lat, lon),
    )


def _within(moment: Optional[datetime], start: datetime, end: datetime) -> Optional[datetime]:
    if moment is None or not (start <= moment <= end):
        return None
    return moment


class SwissEphemerisProvider:
    """``AstronomyProvider`` built on ``swisseph.rise_trans`` and ``calc_ut``.

    Solar events hang off the local transit: sunrise is the rise in the
    twelve hours before solar noon and sunset the set in the twelve hours
    after it. Lunar events are the first rise and set inside the 24 hours
    starting at local midnight, so a moon that skips a rise or set that day
    reports ``None``.
    """

    def __init__(self, elevation: float = 0.0):
        self.elevation = elevation

    def sun_times(self, day_start: datetime, lat: float, lon: float) -> SunTimes:
        noon = _within(
            next_event(day_start, swe.SUN, swe.CALC_MTRANSIT, lat, lon, self.elevation),
            day_start,
            day_start + FULL_DAY,
        )
        if noon is None:
            return SunTimes()
        sunrise = _within(
            next_event(noon - HALF_DAY, swe.SUN, swe.CALC_RISE, lat, lon, self.elevation),
            noon - HALF_DAY,
            noon,
        )
        sunset = _within(
            next_event(noon, swe.SUN, swe.CALC_SET, lat, lon, self.elevation),
            noon,
            noon + HALF_DAY,
        )
        return SunTimes(sunrise=sunrise, sunset=sunset, solar_noon=noon)

    def moon_times(self, day_start: datetime, lat: float, lon: float) -> MoonTimes:
        day_end = day_start + FULL_DAY
        rise = _within(
            next_event(day_start, swe.MOON, swe.CALC_RISE, lat, lon, self.elevation),
            day_start,
            day_end,
        )
        set_ = _within(
            next_event(day_start, swe.MOON, swe.CALC_SET, lat, lon, self.elevation),
            day_start,
            day_end,
        )
        return MoonTimes(rise=rise, set=set_)

    def moon_illumination(self, moment: datetime) -> float:
        sun_lon, sun_lat, _ = ecliptic_position(moment, swe.SUN)
        moon_lon, moon_lat, _ = ecliptic_position(moment, swe.MOON)
        b1, b2 = math.radians(sun_lat), math.radians(moon_lat)
        cos_elong = math.sin(b1) * math.sin(b2) + math.cos(b1) * math.cos(b2) * math.cos(
            math.radians(moon_lon - sun_lon)
        )
        cos_elong = max(-1.0, min(1.0, cos_elong))
        return (1.0 - cos_elong) / 2.0

    def moon_distance(self, moment: datetime, lat: float, lon: float) -> float:
        # Geocentric distance; the observer position does not change it.
        _, _, dist_au = ecliptic_position(moment, swe.MOON)
        return dist_au * AU_METERS
