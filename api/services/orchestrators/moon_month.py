"""Build the month of moon-times day reports.

Each civil day of the month is computed on its own: provider events, derived
windows, hunt star score and the assembled report. Nothing carries over from
one day to the next, and any provider failure aborts the whole month.
"""

from __future__ import annotations

import calendar
import logging
import math
import time
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Iterator, List, Optional

from ...schemas.moon_times import DayReport
from ..astro_provider import AstronomyProvider, SwissEphemerisProvider, collect_raw_events
from ..day_report import assemble_day_report
from ..hunt_score import ScoringInputs, score_day
from ..moon_windows import build_windows


logger = logging.getLogger(__name__)


MISSING_PARAMS_MESSAGE = "Latitude, Longitude, Year, and Month are required."
INVALID_MONTH_MESSAGE = "Invalid month. It must be between 1 and 12."
INVALID_NUMBER_MESSAGE = "Latitude and Longitude must be numbers; Year and Month must be integers."
INVALID_RANGE_MESSAGE = "Year must be between 1 and 9999; Latitude and Longitude must be finite."


class MoonTimesRequestError(ValueError):
    """Raised for missing or malformed moon-times query parameters."""


@dataclass(frozen=True)
class MoonTimesQuery:
    latitude: float
    longitude: float
    year: int
    month: int


def parse_moon_times_query(
    latitude: Optional[str],
    longitude: Optional[str],
    year: Optional[str],
    month: Optional[str],
) -> MoonTimesQuery:
    if not latitude or not longitude or not year or not month:
        raise MoonTimesRequestError(MISSING_PARAMS_MESSAGE)

    try:
        month_int = int(month, 10)
    except ValueError as exc:
        raise MoonTimesRequestError(INVALID_NUMBER_MESSAGE) from exc
    _check_month(month_int)

    try:
        query = MoonTimesQuery(
            latitude=float(latitude),
            longitude=float(longitude),
            year=int(year, 10),
            month=month_int,
        )
    except ValueError as exc:
        raise MoonTimesRequestError(INVALID_NUMBER_MESSAGE) from exc

    if not 1 <= query.year <= 9999:
        raise MoonTimesRequestError(INVALID_RANGE_MESSAGE)
    if not math.isfinite(query.latitude) or not math.isfinite(query.longitude):
        raise MoonTimesRequestError(INVALID_RANGE_MESSAGE)
    return query


def _check_month(month: int) -> None:
    if month < 1 or month > 12:
        raise MoonTimesRequestError(INVALID_MONTH_MESSAGE)


def iter_civil_days(year: int, month: int) -> Iterator[date]:
    _check_month(month)
    days_in_month = calendar.monthrange(year, month)[1]
    for day in range(1, days_in_month + 1):
        yield date(year, month, day)


def compute_day(
    day: date,
    latitude: float,
    longitude: float,
    provider: AstronomyProvider,
    tz: Optional[tzinfo] = None,
) -> DayReport:
    events = collect_raw_events(provider, day, latitude, longitude, tz)
    windows = build_windows(events)
    score = score_day(ScoringInputs.from_day(events, windows, tz))
    return assemble_day_report(day, events, windows, score, tz)


def build_month(
    year: int,
    month: int,
    latitude: float,
    longitude: float,
    provider: Optional[AstronomyProvider] = None,
    tz: Optional[tzinfo] = None,
) -> List[DayReport]:
    _check_month(month)
    provider = provider or SwissEphemerisProvider()

    started = time.perf_counter()
    reports = [
        compute_day(day, latitude, longitude, provider, tz)
        for day in iter_civil_days(year, month)
    ]
    logger.debug(
        "moon_month_built",
        extra={
            "year": year,
            "month": month,
            "days": len(reports),
            "elapsed_ms": round((time.perf_counter() - started) * 1000, 2),
        },
    )
    return reports
