"""Moon-times API endpoint."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..schemas.moon_times import DayReport, ErrorResponse
from ..services.astro_provider import AstronomyProvider, SwissEphemerisProvider
from ..services.orchestrators.moon_month import build_month, parse_moon_times_query


router = APIRouter(prefix="/api", tags=["moon-times"])


def get_provider() -> AstronomyProvider:
    return SwissEphemerisProvider()


@router.get(
    "/moon-times",
    response_model=List[DayReport],
    summary="Sun and moon events with hunt star score for every day of a month",
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid query parameters"},
        500: {"model": ErrorResponse, "description": "Ephemeris calculation failed"},
    },
)
def moon_times(
    latitude: Optional[str] = Query(default=None, examples=["40.7128"]),
    longitude: Optional[str] = Query(default=None, examples=["-74.0060"]),
    year: Optional[str] = Query(default=None, examples=["2024"]),
    month: Optional[str] = Query(default=None, examples=["6"]),
    provider: AstronomyProvider = Depends(get_provider),
):
    query = parse_moon_times_query(latitude, longitude, year, month)
    return build_month(
        query.year,
        query.month,
        query.latitude,
        query.longitude,
        provider=provider,
    )
