"""Result schemas handed to the irrigation scheduler.

These are the stable contract between the aggregation code and whatever
consumes it (the HTTP API, the watering-adjustment methods). Field names are
snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

GeoCoordinates = Tuple[float, float]
"""(latitude, longitude) in decimal degrees."""

# Provider origin tags as published by the adapter.
BRIGHTSKY_TAG = "BS"
BRIGHTSKY_NAME = "BrightSky"


class _ResultModel(BaseModel):
    """Immutable result with camelCase serialization."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class WateringData(_ResultModel):
    """Trailing-day averages consumed by the Zimmerman method."""
    weather_provider: str
    temp: float
    humidity: float
    precip: float
    raining: bool


class ForecastDay(_ResultModel):
    """One forecast day summarized from a 24-hour bucket."""
    temp_min: float
    temp_max: float
    date: int  # local start of day, epoch seconds
    precip: float
    icon: str
    description: str = ""


class WeatherData(_ResultModel):
    """Current conditions plus the daily forecast."""
    weather_provider: str
    temp: int
    humidity: Optional[int] = None
    wind: int
    description: str = ""
    icon: str
    region: str = ""
    city: str = ""
    min_temp: int
    max_temp: int
    precip: float
    forecast: List[ForecastDay] = Field(default_factory=list)


class EToData(_ResultModel):
    """Inputs to the reference evapotranspiration estimate."""
    weather_provider: str
    period_start_time: int  # UTC epoch seconds
    min_temp: Optional[float] = None
    max_temp: Optional[float] = None
    min_humidity: Optional[float] = None
    max_humidity: Optional[float] = None
    solar_radiation: float
    wind_speed: float
    precip: float
