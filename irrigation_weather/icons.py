"""Map BrightSky sky-condition codes onto the OpenWeatherMap icon vocabulary."""

CLEAR_DAY = "01d"

OWM_ICON_CODES = {
    "clear-day": CLEAR_DAY,
    "clear-night": "01n",
    "partly-cloudy-day": "02d",
    "partly-cloudy-night": "02n",
    "cloudy": "03d",
    "fog": "50d",
    "wind": "50d",
    "hail": "13d",
    "sleet": "13d",
    "snow": "13d",
    "rain": "10d",
    "thunderstorm": "11d",
}


def owm_icon_code(icon: str | None) -> str:
    """Return the OWM icon for a BrightSky code; unknown codes read as clear-day."""
    return OWM_ICON_CODES.get(icon, CLEAR_DAY)
