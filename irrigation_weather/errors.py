"""Typed failures surfaced by the weather adapter.

Every failure carries an :class:`ErrorCode` so callers (the HTTP API, the
irrigation scheduler) can branch on the kind without parsing messages.
Nothing in this package recovers from these locally.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable failure kinds."""
    WEATHER_API_ERROR = "weather_api_error"
    MISSING_WEATHER_FIELD = "missing_weather_field"
    NO_WEATHER_DATA = "no_weather_data"
    INSUFFICIENT_WEATHER_DATA = "insufficient_weather_data"
    BAD_WEATHER_DATA = "bad_weather_data"


class CodedError(Exception):
    """Base class for adapter failures."""

    code: ErrorCode = ErrorCode.WEATHER_API_ERROR

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.code.value.replace("_", " ")
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"errCode": self.code.value, "message": self.message}


class WeatherApiError(CodedError):
    """The provider request failed: connection, timeout, HTTP status or undecodable body."""
    code = ErrorCode.WEATHER_API_ERROR


class MissingWeatherFieldError(CodedError):
    """The provider answered but the payload has no ``weather`` records field."""
    code = ErrorCode.MISSING_WEATHER_FIELD


class NoWeatherDataError(CodedError):
    """The payload deserialized but contains no hourly records."""
    code = ErrorCode.NO_WEATHER_DATA


class InsufficientWeatherDataError(CodedError):
    """Too few (or too many) hourly samples to aggregate safely."""
    code = ErrorCode.INSUFFICIENT_WEATHER_DATA


class BadWeatherDataError(CodedError):
    """A sample lacks a mandatory measurement."""
    code = ErrorCode.BAD_WEATHER_DATA
