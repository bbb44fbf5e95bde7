from __future__ import annotations

from datetime import date, timedelta, timezone

import pytest

from api.services.ephem import EphemerisError
from api.services.orchestrators.moon_month import (
    INVALID_MONTH_MESSAGE,
    INVALID_NUMBER_MESSAGE,
    INVALID_RANGE_MESSAGE,
    MISSING_PARAMS_MESSAGE,
    MoonTimesQuery,
    MoonTimesRequestError,
    build_month,
    iter_civil_days,
    parse_moon_times_query,
)


UTC = timezone.utc


@pytest.mark.parametrize(
    "year,month,days",
    [(2024, 2, 29), (2023, 2, 28), (1900, 2, 28), (2000, 2, 29), (2024, 6, 30), (2024, 12, 31)],
)
def test_iter_civil_days_counts(year, month, days):
    assert len(list(iter_civil_days(year, month))) == days


def test_month_length_and_order(scripted_provider):
    reports = build_month(2024, 2, 40.7, -74.0, provider=scripted_provider, tz=UTC)
    assert len(reports) == 29
    assert [r.date for r in reports] == [f"2024/02/{d:02d}" for d in range(1, 30)]


def test_each_day_starts_at_local_midnight(scripted_provider):
    build_month(2023, 2, 0.0, 0.0, provider=scripted_provider, tz=UTC)
    assert [call.date() for call in scripted_provider.calls] == [
        date(2023, 2, 1) + timedelta(days=i) for i in range(28)
    ]
    assert all(call.hour == 0 and call.minute == 0 for call in scripted_provider.calls)


def test_build_month_is_idempotent(make_provider):
    first = build_month(2024, 6, 40.7128, -74.006, provider=make_provider(), tz=UTC)
    second = build_month(2024, 6, 40.7128, -74.006, provider=make_provider(), tz=UTC)
    assert first == second


def test_scripted_day_score(scripted_provider):
    report = build_month(2024, 6, 0.0, 0.0, provider=scripted_provider, tz=UTC)[0]
    # sunrise 05:30, moonrise 04:45, moonset 18:15, meridian 11:30, antipode 23:30
    assert report.moonrise == "04:45"
    assert report.meridian_passing == "11:30"
    assert report.opposite_meridian_passing == "23:30"
    assert report.thirty_minutes_before_moonrise == "04:15"
    assert report.thirty_minutes_after_moonrise == "05:15"
    # 1h before sunrise (04:30) sits in the moonrise window, moonrise and
    # moonset each sit in their own window, and 5% illumination counts
    assert report.hunt_star == pytest.approx(2.0 + 0.5 + 0.5 + 0.5)
    assert report.meridian_times_available is True


def test_polar_month_scores_zero(polar_provider):
    reports = build_month(2024, 12, 78.22, 15.65, provider=polar_provider, tz=UTC)
    assert len(reports) == 31
    for report in reports:
        assert report.hunt_star == 0.0
        assert report.sunrise is None
        assert report.sunset is None
        assert report.solar_noon is None
        assert report.daylength is None
        assert report.moonrise is None
        assert report.meridian_passing is None
        assert report.meridian_times_available is False
        assert report.illumination == "50.00"


def test_missing_moonrise_skips_dependent_rules(make_provider):
    provider = make_provider(moonrise=None)
    report = build_month(2024, 6, 0.0, 0.0, provider=provider, tz=UTC)[0]
    assert report.thirty_minutes_before_moonrise is None
    assert report.thirty_minutes_after_moonrise is None
    assert report.meridian_passing is None
    assert report.opposite_meridian_passing is None
    # moonset in its own window and the illumination rule are all that is left
    assert report.hunt_star == 1.0


def test_invalid_month_rejected_before_provider_call(scripted_provider):
    with pytest.raises(MoonTimesRequestError, match="Invalid month"):
        build_month(2024, 13, 0.0, 0.0, provider=scripted_provider, tz=UTC)
    assert scripted_provider.calls == []


def test_provider_failure_aborts_month(make_provider):
    class BrokenProvider(make_provider):
        def moon_times(self, day_start, lat, lon):
            if day_start.day == 3:
                raise EphemerisError("Ephemeris calculation failed: boom")
            return super().moon_times(day_start, lat, lon)

    with pytest.raises(EphemerisError):
        build_month(2024, 6, 0.0, 0.0, provider=BrokenProvider(), tz=UTC)


def test_parse_query():
    assert parse_moon_times_query("40.7128", "-74.0060", "2024", "06") == MoonTimesQuery(
        latitude=40.7128, longitude=-74.006, year=2024, month=6
    )


@pytest.mark.parametrize(
    "args",
    [
        (None, "1", "2024", "6"),
        ("1", None, "2024", "6"),
        ("1", "1", None, "6"),
        ("1", "1", "2024", None),
        ("", "1", "2024", "6"),
    ],
)
def test_parse_query_missing(args):
    with pytest.raises(MoonTimesRequestError) as exc:
        parse_moon_times_query(*args)
    assert str(exc.value) == MISSING_PARAMS_MESSAGE


@pytest.mark.parametrize("month", ["0", "13", "-1"])
def test_parse_query_month_out_of_range(month):
    with pytest.raises(MoonTimesRequestError) as exc:
        parse_moon_times_query("1", "1", "2024", month)
    assert str(exc.value) == INVALID_MONTH_MESSAGE


@pytest.mark.parametrize(
    "args",
    [("north", "1", "2024", "6"), ("1", "1", "2024.5", "6"), ("1", "1", "2024", "June")],
)
def test_parse_query_not_numeric(args):
    with pytest.raises(MoonTimesRequestError) as exc:
        parse_moon_times_query(*args)
    assert str(exc.value) == INVALID_NUMBER_MESSAGE


@pytest.mark.parametrize(
    "args",
    [
        ("nan", "1", "2024", "6"),
        ("NaN", "1", "2024", "6"),
        ("inf", "1", "2024", "6"),
        ("1", "-inf", "2024", "6"),
        ("Infinity", "1", "2024", "6"),
        ("1", "1", "0", "6"),
        ("1", "1", "-5", "6"),
        ("1", "1", "10000", "6"),
    ],
)
def test_parse_query_out_of_range(args):
    with pytest.raises(MoonTimesRequestError) as exc:
        parse_moon_times_query(*args)
    assert str(exc.value) == INVALID_RANGE_MESSAGE


def test_parse_query_accepts_year_bounds():
    assert parse_moon_times_query("0", "0", "1", "1").year == 1
    assert parse_moon_times_query("0", "0", "9999", "12").year == 9999
