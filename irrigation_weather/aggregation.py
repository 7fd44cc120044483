"""Reduce a trailing day of canonical samples into watering and ETo inputs."""
from __future__ import annotations

import datetime as dt
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from irrigation_weather.domain import BRIGHTSKY_TAG, EToData, GeoCoordinates, WateringData
from irrigation_weather.errors import BadWeatherDataError, InsufficientWeatherDataError
from irrigation_weather.records import CanonicalHourlySample, CloudCoverInfo
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="aggregation")

# The day daylight saving time begins only has 23 hours.
VALID_WINDOW_SIZES = (23, 24)

SolarRadiationEstimator = Callable[[List[CloudCoverInfo], GeoCoordinates], float]


def require_trailing_window(samples: Sequence[CanonicalHourlySample]) -> None:
    """Fail unless the window holds a full day of hourly samples."""
    if len(samples) not in VALID_WINDOW_SIZES:
        logger.warning("Rejecting trailing window", extra={"sample_count": len(samples)})
        raise InsufficientWeatherDataError(
            f"Expected 23 or 24 hourly samples, got {len(samples)}"
        )


def optional_min_max(values: Iterable[Optional[float]]) -> Tuple[Optional[float], Optional[float]]:
    """Min and max over the defined values; (None, None) when nothing is defined."""
    low: Optional[float] = None
    high: Optional[float] = None
    for value in values:
        if value is None:
            continue
        if low is None or value < low:
            low = value
        if high is None or value > high:
            high = value
    return low, high


def summarize_watering(
    samples: Sequence[CanonicalHourlySample],
    *,
    weather_provider: str = BRIGHTSKY_TAG,
) -> WateringData:
    """Mean temperature and humidity, total precipitation and whether it is raining now."""
    require_trailing_window(samples)
    if any(s.humidity is None for s in samples):
        raise BadWeatherDataError("Humidity is missing for part of the trailing window")

    count = len(samples)
    return WateringData(
        weather_provider=weather_provider,
        temp=sum(s.temperature for s in samples) / count,
        humidity=sum(s.humidity for s in samples) / count,
        precip=sum(s.precipitation for s in samples),
        raining=samples[-1].precipitation > 0,
    )


def cloud_cover_intervals(
    samples: Iterable[CanonicalHourlySample],
    tz: dt.tzinfo | None = None,
) -> List[CloudCoverInfo]:
    """One hour-long cloud-cover interval per sample, in local time."""
    out: List[CloudCoverInfo] = []
    for s in samples:
        # Add the hour in UTC; local wall-clock arithmetic is off by one across DST changes.
        start_utc = s.timestamp.astimezone(dt.timezone.utc)
        out.append(
            CloudCoverInfo(
                start_time=start_utc.astimezone(tz),
                end_time=(start_utc + dt.timedelta(hours=1)).astimezone(tz),
                cloud_cover=s.cloud_cover_fraction,
            )
        )
    return out


def build_eto_inputs(
    samples: Sequence[CanonicalHourlySample],
    coordinates: GeoCoordinates,
    *,
    estimator: SolarRadiationEstimator,
    tz: dt.tzinfo | None = None,
    weather_provider: str = BRIGHTSKY_TAG,
) -> EToData:
    """
    Build ETo inputs from the trailing day.

    Min/max skip hours without a reading so a gap cannot show up as a false
    minimum. Solar radiation comes from ``estimator`` fed with one cloud-cover
    interval per hour.
    """
    require_trailing_window(samples)

    min_temp, max_temp = optional_min_max(s.temperature for s in samples)
    min_humidity, max_humidity = optional_min_max(s.humidity for s in samples)
    intervals = cloud_cover_intervals(samples, tz)

    return EToData(
        weather_provider=weather_provider,
        period_start_time=int(samples[0].timestamp.timestamp()),
        min_temp=min_temp,
        max_temp=max_temp,
        min_humidity=min_humidity,
        max_humidity=max_humidity,
        solar_radiation=estimator(intervals, coordinates),
        # Wind is assumed to be measured at 2 m.
        wind_speed=sum(s.wind or 0 for s in samples) / len(samples),
        precip=sum(s.precipitation or 0 for s in samples),
    )
