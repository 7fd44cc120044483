"""BrightSky implementation of the weather provider capabilities."""
from __future__ import annotations

import datetime as dt
from typing import Callable, List

from irrigation_weather.aggregation import SolarRadiationEstimator, build_eto_inputs, summarize_watering
from irrigation_weather.data_sources.base import HourlyFetcher, WeatherProvider
from irrigation_weather.data_sources.brightsky_client import fetch_brightsky_hours
from irrigation_weather.domain import EToData, GeoCoordinates, WateringData, WeatherData
from irrigation_weather.forecast_resampler import DEFAULT_FORECAST_DAYS, resample_forecast
from irrigation_weather.normalizer import normalize_records
from irrigation_weather.records import CanonicalHourlySample
from irrigation_weather.solar import approximate_solar_radiation
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="brightsky_provider")

TRAILING_WINDOW_FORMAT = "%Y-%m-%dT%H:%M:%S"


class BrightSkyWeatherProvider(WeatherProvider):
    """
    Weather provider backed by BrightSky (DWD data, Germany only).

    Each call performs exactly one fetch through ``fetch_hours`` and then
    aggregates in memory. ``clock`` and ``tz`` decide what "now" and "local"
    mean, which keeps the windows reproducible in tests.
    """

    def __init__(
        self,
        fetch_hours: HourlyFetcher = fetch_brightsky_hours,
        *,
        clock: Callable[[], dt.datetime] | None = None,
        tz: dt.tzinfo | None = None,
        forecast_days: int = DEFAULT_FORECAST_DAYS,
        solar_radiation_estimator: SolarRadiationEstimator = approximate_solar_radiation,
    ) -> None:
        self.fetch_hours = fetch_hours
        self.tz = tz
        self.clock = clock or (lambda: dt.datetime.now(dt.timezone.utc).astimezone(self.tz))
        self.forecast_days = forecast_days
        self.solar_radiation_estimator = solar_radiation_estimator

    def _trailing_day(self, coordinates: GeoCoordinates) -> List[CanonicalHourlySample]:
        """Hourly samples from 24 hours ago up to one hour ago."""
        now = self.clock().astimezone(dt.timezone.utc)
        start = (now - dt.timedelta(days=1)).strftime(TRAILING_WINDOW_FORMAT)
        end = (now - dt.timedelta(hours=1)).strftime(TRAILING_WINDOW_FORMAT)
        logger.debug("Fetching trailing day", extra={"start": start, "end": end})
        return normalize_records(self.fetch_hours(coordinates, start, end))

    def get_watering_data(self, coordinates: GeoCoordinates) -> WateringData:
        # Zimmerman only looks at the last day.
        return summarize_watering(self._trailing_day(coordinates))

    def get_weather_data(self, coordinates: GeoCoordinates) -> WeatherData:
        now = self.clock().astimezone(self.tz)
        start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        end = start + dt.timedelta(days=self.forecast_days)
        samples = normalize_records(self.fetch_hours(coordinates, start.isoformat(), end.isoformat()))
        # last_date is inclusive, so the first hour of the following day comes back too.
        samples = samples[:-1]
        return resample_forecast(samples, now=now, forecast_days=self.forecast_days, tz=self.tz)

    def get_eto_data(self, coordinates: GeoCoordinates) -> EToData:
        return build_eto_inputs(
            self._trailing_day(coordinates),
            coordinates,
            estimator=self.solar_radiation_estimator,
            tz=self.tz,
        )
