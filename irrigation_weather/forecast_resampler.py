"""Resample an hourly forecast into day buckets and a current-conditions snapshot."""
from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from irrigation_weather.domain import BRIGHTSKY_NAME, ForecastDay, WeatherData
from irrigation_weather.errors import InsufficientWeatherDataError
from irrigation_weather.icons import CLEAR_DAY
from irrigation_weather.records import CanonicalHourlySample
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="forecast_resampler")

HOURS_PER_BUCKET = 24
# Sample used to date a bucket; mid-bucket so a stray boundary hour cannot shift the day.
DATE_SAMPLE_INDEX = 12
DEFAULT_FORECAST_DAYS = 8


@dataclass
class CurrentConditions:
    """Latest elapsed hour of today plus today's totals."""
    temperature: float
    humidity: Optional[int]
    wind: float
    icon: str
    min_temp: float = 0.0
    max_temp: float = 0.0
    precip: float = 0.0


def summarize_icon(icons: Sequence[str]) -> str:
    """
    Pick the icon for a day bucket.

    The first move away from clear-day is kept; once a different icon shows
    up the day collapses to clear-day and later hours cannot bring an icon
    back, so a day with two distinct non-clear icons always reads clear-day.
    """
    icon = icons[0]
    for candidate in icons[1:]:
        if icon == CLEAR_DAY:
            icon = candidate
        elif candidate != icon:
            return CLEAR_DAY
    return icon


def _start_of_day_epoch(timestamp: dt.datetime, tz: dt.tzinfo | None) -> int:
    local = timestamp.astimezone(tz)
    midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)
    return int(midnight.timestamp())


def summarize_bucket(bucket: Sequence[CanonicalHourlySample], tz: dt.tzinfo | None = None) -> ForecastDay:
    """Min/max temperature, total precipitation, icon and date of one day bucket."""
    min_temp = max_temp = bucket[0].temperature
    precip = bucket[0].precipitation
    for sample in bucket[1:]:
        min_temp = min(sample.temperature, min_temp)
        max_temp = max(sample.temperature, max_temp)
        precip += sample.precipitation

    date_sample = bucket[min(DATE_SAMPLE_INDEX, len(bucket) - 1)]
    return ForecastDay(
        temp_min=min_temp,
        temp_max=max_temp,
        date=_start_of_day_epoch(date_sample.timestamp, tz),
        precip=precip,
        icon=summarize_icon([s.icon for s in bucket]),
    )


def current_conditions(
    bucket: Sequence[CanonicalHourlySample],
    day: ForecastDay,
    now: dt.datetime,
) -> CurrentConditions:
    """Snapshot of the most recent hour in ``bucket`` that is not in the future."""
    first = bucket[0]
    current = CurrentConditions(
        temperature=first.temperature,
        humidity=first.humidity,
        wind=first.wind,
        icon=first.icon,
    )
    for sample in bucket[1:]:
        if sample.timestamp <= now:
            current.temperature = sample.temperature
            current.humidity = sample.humidity
            current.wind = sample.wind
            current.icon = sample.icon

    current.min_temp = day.temp_min
    current.max_temp = day.temp_max
    current.precip = day.precip
    return current


def partition_days(
    samples: Sequence[CanonicalHourlySample],
    forecast_days: int = DEFAULT_FORECAST_DAYS,
) -> List[Sequence[CanonicalHourlySample]]:
    """Split into consecutive 24-sample buckets; the last one may be short."""
    buckets = []
    for index in range(forecast_days):
        start = HOURS_PER_BUCKET * index
        bucket = samples[start:start + HOURS_PER_BUCKET]
        if not bucket:
            break
        buckets.append(bucket)
    return buckets


def _floor(value: Optional[float]) -> Optional[int]:
    return None if value is None else math.floor(value)


def resample_forecast(
    samples: Sequence[CanonicalHourlySample],
    *,
    now: dt.datetime,
    forecast_days: int = DEFAULT_FORECAST_DAYS,
    tz: dt.tzinfo | None = None,
    weather_provider: str = BRIGHTSKY_NAME,
) -> WeatherData:
    """
    Build the weather summary from an hourly forecast starting at local midnight.

    ``samples`` must already have the trailing extra hour dropped. Top-level
    temperature, humidity and wind are floored like the daily min/max;
    precipitation is left as is.
    """
    buckets = partition_days(samples, forecast_days)
    if not buckets:
        raise InsufficientWeatherDataError("No hourly forecast samples to summarize")

    days = [summarize_bucket(bucket, tz) for bucket in buckets]
    current = current_conditions(buckets[0], days[0], now)

    if len(days) < forecast_days:
        logger.warning(
            "Forecast shorter than requested",
            extra={"requested_days": forecast_days, "days": len(days), "samples": len(samples)},
        )

    return WeatherData(
        weather_provider=weather_provider,
        temp=math.floor(current.temperature),
        humidity=_floor(current.humidity),
        wind=math.floor(current.wind),
        icon=current.icon,
        min_temp=math.floor(current.min_temp),
        max_temp=math.floor(current.max_temp),
        precip=current.precip,
        forecast=[
            day.model_copy(update={
                "temp_min": math.floor(day.temp_min),
                "temp_max": math.floor(day.temp_max),
            })
            for day in days
        ],
    )
