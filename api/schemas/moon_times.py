"""Response schemas for the moon-times endpoint."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DayReport(BaseModel):
    date: str
    moonrise: Optional[str] = None
    moonset: Optional[str] = None
    meridian_passing: Optional[str] = Field(default=None, alias="meridianPassing")
    opposite_meridian_passing: Optional[str] = Field(default=None, alias="oppositeMeridianPassing")
    sunrise: Optional[str] = None
    sunset: Optional[str] = None
    solar_noon: Optional[str] = Field(default=None, alias="solarNoon")
    daylength: Optional[str] = None
    thirty_minutes_before_moonrise: Optional[str] = Field(default=None, alias="thirtyMinutesBeforeMoonrise")
    thirty_minutes_after_moonrise: Optional[str] = Field(default=None, alias="thirtyMinutesAfterMoonrise")
    thirty_minutes_before_moonset: Optional[str] = Field(default=None, alias="thirtyMinutesBeforeMoonset")
    thirty_minutes_after_moonset: Optional[str] = Field(default=None, alias="thirtyMinutesAfterMoonset")
    one_hour_before_meridian: Optional[str] = Field(default=None, alias="oneHourBeforeMeridian")
    one_hour_after_meridian: Optional[str] = Field(default=None, alias="oneHourAfterMeridian")
    one_hour_before_opposite_meridian: Optional[str] = Field(default=None, alias="oneHourBeforeOppositeMeridian")
    one_hour_after_opposite_meridian: Optional[str] = Field(default=None, alias="oneHourAfterOppositeMeridian")
    illumination: str
    distance: str
    hunt_star: float = Field(alias="huntStar")
    meridian_times_available: bool = Field(alias="meridianTimesAvailable")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "date": "2024/06/15",
                "moonrise": "13:41",
                "moonset": "01:12",
                "meridianPassing": "07:26",
                "oppositeMeridianPassing": "19:26",
                "sunrise": "05:25",
                "sunset": "20:29",
                "solarNoon": "12:57",
                "daylength": "15:04:12",
                "thirtyMinutesBeforeMoonrise": "13:11",
                "thirtyMinutesAfterMoonrise": "14:11",
                "thirtyMinutesBeforeMoonset": "00:42",
                "thirtyMinutesAfterMoonset": "01:42",
                "oneHourBeforeMeridian": "06:26",
                "oneHourAfterMeridian": "08:26",
                "oneHourBeforeOppositeMeridian": "18:26",
                "oneHourAfterOppositeMeridian": "20:26",
                "illumination": "62.18",
                "distance": "391020318.45 meters",
                "huntStar": 3.0,
                "meridianTimesAvailable": True,
            }
        },
    )


class ErrorResponse(BaseModel):
    error: str
