"""Weather providers and the HTTP clients behind them."""

from .base import HourlyFetcher, WeatherProvider
from .brightsky_client import fetch_brightsky_hours
from .brightsky_provider import BrightSkyWeatherProvider
from .factory import build_weather_provider

__all__ = [
    "build_weather_provider",
    "BrightSkyWeatherProvider",
    "HourlyFetcher",
    "WeatherProvider",
    "fetch_brightsky_hours",
]
