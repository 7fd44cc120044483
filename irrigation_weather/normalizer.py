"""Convert raw BrightSky records into canonical, imperial-unit hourly samples."""
from __future__ import annotations

import math
from typing import Iterable, List, Optional

from irrigation_weather.errors import BadWeatherDataError
from irrigation_weather.icons import owm_icon_code
from irrigation_weather.records import CanonicalHourlySample, RawHourlyRecord
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="normalizer")

# Magnus coefficients (Sonntag 1990) for saturation vapour pressure over water.
MAGNUS_K2 = 17.62
MAGNUS_K3 = 243.12

MM_PER_INCH = 25.4
MPH_PER_KMH = 0.62

MANDATORY_FIELDS = ("timestamp", "temperature", "precipitation", "wind_speed", "cloud_cover")


def celsius_to_fahrenheit(value: float) -> float:
    return value * 1.8 + 32


def fahrenheit_to_celsius(value: float) -> float:
    return (value - 32) / 1.8


def mm_to_inches(value: float) -> float:
    return value / MM_PER_INCH


def inches_to_mm(value: float) -> float:
    return value * MM_PER_INCH


def kmh_to_mph(value: float) -> float:
    return value * MPH_PER_KMH


def mph_to_kmh(value: float) -> float:
    return value / MPH_PER_KMH


def humidity_from_dew_point(temperature_c: float, dew_point_c: float) -> int:
    """
    Relative humidity (percent) from air temperature and dew point, both in °C.

    Ratio of saturation vapour pressures at the dew point and at the air
    temperature, using the Magnus approximation.
    """
    numerator = math.exp((MAGNUS_K2 * dew_point_c) / (MAGNUS_K3 + dew_point_c))
    denominator = math.exp((MAGNUS_K2 * temperature_c) / (MAGNUS_K3 + temperature_c))
    return round(100 * numerator / denominator)


def _resolve_humidity(raw: RawHourlyRecord) -> Optional[int]:
    if raw.relative_humidity is not None:
        return round(raw.relative_humidity)
    if raw.dew_point is not None:
        return humidity_from_dew_point(raw.temperature, raw.dew_point)
    logger.debug("No humidity or dew point reported", extra={"timestamp": str(raw.timestamp)})
    return None


def normalize_record(raw: RawHourlyRecord) -> CanonicalHourlySample:
    """Convert one raw record; a missing mandatory measurement is a data fault."""
    for field in MANDATORY_FIELDS:
        if getattr(raw, field) is None:
            raise BadWeatherDataError(
                f"BrightSky record at {raw.timestamp} is missing '{field}'"
            )

    return CanonicalHourlySample(
        timestamp=raw.timestamp,
        temperature=celsius_to_fahrenheit(raw.temperature),
        humidity=_resolve_humidity(raw),
        precipitation=mm_to_inches(raw.precipitation),
        wind=kmh_to_mph(raw.wind_speed),
        cloud_cover=raw.cloud_cover,
        icon=owm_icon_code(raw.icon),
    )


def normalize_records(records: Iterable[RawHourlyRecord]) -> List[CanonicalHourlySample]:
    """Normalize a sequence, one sample per record, order preserved."""
    return [normalize_record(r) for r in records]
