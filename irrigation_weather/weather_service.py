"""Dispatch weather requests from the scheduler to the configured provider."""
from __future__ import annotations

from enum import Enum
from typing import Union

from irrigation_weather.data_sources import WeatherProvider, build_weather_provider
from irrigation_weather.domain import EToData, GeoCoordinates, WateringData, WeatherData
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="weather_service")

WeatherResult = Union[WateringData, WeatherData, EToData]


class WeatherRequestKind(str, Enum):
    """Which aggregate the caller wants."""
    WATERING = "watering"
    WEATHER = "weather"
    ETO = "eto"


_CAPABILITIES = {
    WeatherRequestKind.WATERING: "get_watering_data",
    WeatherRequestKind.WEATHER: "get_weather_data",
    WeatherRequestKind.ETO: "get_eto_data",
}


def fetch_weather_result(
    kind: WeatherRequestKind | str,
    coordinates: GeoCoordinates,
    *,
    provider: WeatherProvider | None = None,
) -> WeatherResult:
    """
    Run one provider capability for ``coordinates``.

    Provider failures propagate unchanged as CodedError subclasses; the caller
    decides how to present them.
    """
    kind = WeatherRequestKind(kind)
    provider = provider or build_weather_provider()

    logger.info(
        "Fetching weather result",
        extra={"kind": kind.value, "latitude": coordinates[0], "longitude": coordinates[1]},
    )
    result = getattr(provider, _CAPABILITIES[kind])(coordinates)
    logger.info(
        "Computed weather result",
        extra={"kind": kind.value, "weather_provider": result.weather_provider},
    )
    return result
