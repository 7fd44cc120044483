"""Interfaces for weather providers and the hourly fetch they depend on."""

from __future__ import annotations

from typing import List, Protocol

from irrigation_weather.domain import EToData, GeoCoordinates, WateringData, WeatherData
from irrigation_weather.records import RawHourlyRecord


class HourlyFetcher(Protocol):
    """Anything that can return hourly provider records for a time range."""

    def __call__(self, coordinates: GeoCoordinates, start: str, end: str) -> List[RawHourlyRecord]:
        ...


class WeatherProvider(Protocol):
    """Capabilities every weather provider exposes to the irrigation scheduler."""

    def get_watering_data(self, coordinates: GeoCoordinates) -> WateringData:
        """Return the previous day's averages for the Zimmerman method."""
        ...

    def get_weather_data(self, coordinates: GeoCoordinates) -> WeatherData:
        """Return current conditions and the daily forecast."""
        ...

    def get_eto_data(self, coordinates: GeoCoordinates) -> EToData:
        """Return the previous day's inputs for the ETo estimate."""
        ...
