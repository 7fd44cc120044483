"""Factory helpers for choosing a weather provider at startup."""

from __future__ import annotations

from functools import partial

from irrigation_weather import config
from irrigation_weather.data_sources.base import WeatherProvider
from irrigation_weather.data_sources.brightsky_client import fetch_brightsky_hours
from irrigation_weather.data_sources.brightsky_provider import BrightSkyWeatherProvider
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_PROVIDER_NAME = "brightsky"


def build_weather_provider(settings: config.Settings | None = None) -> WeatherProvider:
    """Instantiate the configured weather provider."""
    settings = settings or config.settings
    name = (settings.weather_provider or DEFAULT_PROVIDER_NAME).lower()

    if name == "brightsky":
        logger.info("Using BrightSky weather provider", extra={"base_url": settings.brightsky_base_url})
        return BrightSkyWeatherProvider(
            fetch_hours=partial(
                fetch_brightsky_hours,
                base_url=settings.brightsky_base_url,
                timeout=settings.request_timeout_seconds,
            ),
            tz=config.resolve_timezone(settings.timezone),
            forecast_days=settings.forecast_days,
        )

    raise ValueError(f"Unknown weather provider '{name}'")
