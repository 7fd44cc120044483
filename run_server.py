import os

import uvicorn

from irrigation_weather.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name="irrigation-weather")
    logger.info("Starting server", extra={"weather_provider": settings.weather_provider})

    uvicorn.run(
        "irrigation_weather.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=False,
    )
