"""Hourly record types passed between the provider client, the normalizer and the aggregators."""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RawHourlyRecord:
    """One hourly provider record in provider units, nothing derived."""
    timestamp: Optional[dt.datetime]  # timezone-aware
    temperature: Optional[float]  # °C
    relative_humidity: Optional[float]  # percent
    dew_point: Optional[float]  # °C
    precipitation: Optional[float]  # mm
    wind_speed: Optional[float]  # km/h
    cloud_cover: Optional[float]  # percent
    icon: Optional[str]


@dataclass(frozen=True)
class CanonicalHourlySample:
    """Provider-independent hourly sample in the units the scheduler expects."""
    timestamp: dt.datetime  # timezone-aware
    temperature: float  # °F
    humidity: Optional[int]  # percent, None when neither humidity nor dew point was reported
    precipitation: float  # inches
    wind: float  # mph
    cloud_cover: float  # percent
    icon: str  # OWM icon code

    @property
    def cloud_cover_fraction(self) -> float:
        return self.cloud_cover / 100


@dataclass(frozen=True)
class CloudCoverInfo:
    """Cloud cover (0.0-1.0) observed over [start_time, end_time)."""
    start_time: dt.datetime
    end_time: dt.datetime
    cloud_cover: float
