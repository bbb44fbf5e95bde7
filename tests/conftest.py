from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Optional

import pytest

from api.services.astro_provider import MoonTimes, SunTimes


class ScriptedProvider:
    """Provider returning fixed offsets from each day's start."""

    def __init__(
        self,
        sunrise: Optional[timedelta] = timedelta(hours=5, minutes=30),
        sunset: Optional[timedelta] = timedelta(hours=20, minutes=30),
        solar_noon: Optional[timedelta] = timedelta(hours=13),
        moonrise: Optional[timedelta] = timedelta(hours=4, minutes=45),
        moonset: Optional[timedelta] = timedelta(hours=18, minutes=15),
        illumination: float = 0.05,
        distance_m: float = 384_400_000.0,
    ):
        self.offsets = {
            "sunrise": sunrise,
            "sunset": sunset,
            "solar_noon": solar_noon,
            "moonrise": moonrise,
            "moonset": moonset,
        }
        self.illumination = illumination
        self.distance_m = distance_m
        self.calls: List[datetime] = []

    def _at(self, day_start: datetime, name: str) -> Optional[datetime]:
        offset = self.offsets[name]
        return day_start + offset if offset is not None else None

    def sun_times(self, day_start, lat, lon):
        self.calls.append(day_start)
        return SunTimes(
            sunrise=self._at(day_start, "sunrise"),
            sunset=self._at(day_start, "sunset"),
            solar_noon=self._at(day_start, "solar_noon"),
        )

    def moon_times(self, day_start, lat, lon):
        return MoonTimes(rise=self._at(day_start, "moonrise"), set=self._at(day_start, "moonset"))

    def moon_illumination(self, moment):
        return self.illumination

    def moon_distance(self, moment, lat, lon):
        return self.distance_m


@pytest.fixture
def scripted_provider():
    return ScriptedProvider()


@pytest.fixture
def polar_provider():
    return ScriptedProvider(
        sunrise=None,
        sunset=None,
        solar_noon=None,
        moonrise=None,
        moonset=None,
        illumination=0.5,
    )


@pytest.fixture
def make_provider():
    return ScriptedProvider
