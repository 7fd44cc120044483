"""Application configuration pulled from environment variables via pydantic."""
import datetime as dt
from zoneinfo import ZoneInfo

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the irrigation weather service."""
    model_config = SettingsConfigDict(env_prefix="IRRIGATION_", extra="ignore")

    weather_provider: str = "brightsky"  # options: brightsky
    brightsky_base_url: str = "https://api.brightsky.dev"
    request_timeout_seconds: float = 10.0
    forecast_days: int = Field(default=8, ge=1)
    timezone: str | None = None  # IANA name; unset means the host's local zone
    api_key: str | None = None
    log_level: str = "INFO"

    @field_validator("brightsky_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")


def resolve_timezone(name: str | None) -> dt.tzinfo:
    """Return the configured zone, or the host's local zone when unset."""
    if name:
        return ZoneInfo(name)
    return dt.datetime.now().astimezone().tzinfo


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4)}")
