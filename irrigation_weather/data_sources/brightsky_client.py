"""Helpers for fetching hourly weather records from the BrightSky API.

BrightSky serves DWD observations and MOSMIX forecasts for Germany only.
Values arrive in SI-ish units (°C, mm, km/h, percent) and are left that way
here; unit conversion happens in :mod:`irrigation_weather.normalizer`.
"""
from __future__ import annotations

import datetime as dt
import math
from typing import Any, List, Optional

import requests

from irrigation_weather.domain import GeoCoordinates
from irrigation_weather.errors import (
    BadWeatherDataError,
    MissingWeatherFieldError,
    NoWeatherDataError,
    WeatherApiError,
)
from irrigation_weather.records import RawHourlyRecord
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="brightsky_client")

session = requests.Session()

BRIGHTSKY_BASE_URL = "https://api.brightsky.dev"
DEFAULT_TIMEOUT_SECONDS = 10.0


def _to_float(value: Any) -> Optional[float]:
    """Coerce a JSON number or numeric string; anything else is missing."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def _relative_humidity(value: Any) -> Optional[float]:
    """Only a real JSON number counts as a humidity reading; null and strings do not."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return None if math.isnan(value) else float(value)


def _parse_timestamp(value: Any) -> Optional[dt.datetime]:
    if not isinstance(value, str):
        return None
    try:
        parsed = dt.datetime.fromisoformat(value)
    except ValueError:
        logger.warning("Unparseable BrightSky timestamp", extra={"timestamp": value})
        return None
    if parsed.tzinfo is None:
        # BrightSky answers in UTC unless a tz parameter is sent.
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def parse_weather_record(entry: dict) -> RawHourlyRecord:
    """Turn one element of the ``weather`` array into a RawHourlyRecord."""
    return RawHourlyRecord(
        timestamp=_parse_timestamp(entry.get("timestamp")),
        temperature=_to_float(entry.get("temperature")),
        relative_humidity=_relative_humidity(entry.get("relative_humidity")),
        dew_point=_to_float(entry.get("dew_point")),
        precipitation=_to_float(entry.get("precipitation")),
        wind_speed=_to_float(entry.get("wind_speed")),
        cloud_cover=_to_float(entry.get("cloud_cover")),
        icon=entry.get("icon"),
    )


def fetch_brightsky_hours(
    coordinates: GeoCoordinates,
    start: str,
    end: str,
    *,
    base_url: str = BRIGHTSKY_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> List[RawHourlyRecord]:
    """
    Fetch hourly records between ``start`` and ``end`` (ISO 8601, inclusive).

    Raises WeatherApiError when the request itself fails, MissingWeatherFieldError
    when the body has no ``weather`` list, NoWeatherDataError when that list
    is empty and BadWeatherDataError when an entry is not an object. There is
    no retry: one failure fails the request.
    """
    latitude, longitude = coordinates
    params = {
        "lat": latitude,
        "lon": longitude,
        "date": start,
        "last_date": end,
    }

    try:
        resp = session.get(f"{base_url}/weather", params=params, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as exc:
        logger.error(
            "Error retrieving weather information from BrightSky",
            extra={"error": str(exc), "start": start, "end": end},
        )
        raise WeatherApiError(f"BrightSky request failed: {exc}") from exc

    weather = data.get("weather") if isinstance(data, dict) else None
    if not isinstance(weather, list):
        raise MissingWeatherFieldError("BrightSky response has no 'weather' field")
    if not weather:
        raise NoWeatherDataError(f"BrightSky returned no records for {start} .. {end}")

    malformed = [index for index, entry in enumerate(weather) if not isinstance(entry, dict)]
    if malformed:
        raise BadWeatherDataError(f"BrightSky 'weather' entries {malformed} are not records")

    records = [parse_weather_record(entry) for entry in weather]
    logger.debug("Fetched BrightSky hours", extra={"count": len(records), "start": start, "end": end})
    return records
