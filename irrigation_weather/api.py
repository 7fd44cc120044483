"""HTTP API exposing watering, weather and ETo data to irrigation controllers."""

import hmac

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from fastapi.responses import JSONResponse

from .config import settings
from .data_sources import build_weather_provider
from .domain import EToData, GeoCoordinates, WateringData, WeatherData
from .errors import CodedError, ErrorCode
from .weather_service import WeatherRequestKind, WeatherResult, fetch_weather_result
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="irrigation_weather/api")

# Upstream problems are the provider's fault; too little data means "try later".
ERROR_STATUS = {
    ErrorCode.WEATHER_API_ERROR: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.MISSING_WEATHER_FIELD: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.NO_WEATHER_DATA: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.BAD_WEATHER_DATA: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.INSUFFICIENT_WEATHER_DATA: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def require_api_key(x_api_key: str | None = Header(default=None)):
    """Validate the X-API-Key header against the configured static key, if any."""
    if not settings.api_key:
        logger.debug("No API key configured; allowing all requests")
        return

    if not x_api_key:
        logger.debug("No API key provided")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing API key")

    if hmac.compare_digest(str(x_api_key), str(settings.api_key)):
        return

    logger.debug("Invalid API key provided")
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


router = APIRouter(dependencies=[Depends(require_api_key)])
PROVIDER = build_weather_provider(settings)


def _coordinates(
    lat: float = Query(..., ge=-90, le=90, description="Latitude in decimal degrees"),
    lon: float = Query(..., ge=-180, le=180, description="Longitude in decimal degrees"),
) -> GeoCoordinates:
    return lat, lon


def _respond(kind: WeatherRequestKind, coordinates: GeoCoordinates) -> WeatherResult | JSONResponse:
    """Run the request and turn adapter failures into error responses."""
    try:
        return fetch_weather_result(kind, coordinates, provider=PROVIDER)
    except CodedError as exc:
        logger.warning(
            "Weather request failed",
            extra={"kind": kind.value, "err_code": exc.code.value, "error": exc.message},
        )
        return JSONResponse(
            status_code=ERROR_STATUS.get(exc.code, status.HTTP_502_BAD_GATEWAY),
            content={"detail": exc.to_dict()},
        )


@router.get("/watering", response_model=WateringData, response_model_by_alias=True)
def get_watering(coordinates: GeoCoordinates = Depends(_coordinates)):
    """Previous day's averages for the Zimmerman adjustment method."""
    return _respond(WeatherRequestKind.WATERING, coordinates)


@router.get("/weather", response_model=WeatherData, response_model_by_alias=True)
def get_weather(coordinates: GeoCoordinates = Depends(_coordinates)):
    """Current conditions and the daily forecast."""
    return _respond(WeatherRequestKind.WEATHER, coordinates)


@router.get("/eto", response_model=EToData, response_model_by_alias=True)
def get_eto(coordinates: GeoCoordinates = Depends(_coordinates)):
    """Previous day's inputs for the ETo adjustment method."""
    return _respond(WeatherRequestKind.ETO, coordinates)
