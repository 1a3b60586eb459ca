# ABOUTME: Runtime settings for the weather page scraper, loaded from the environment.
# ABOUTME: Reads an optional .env file via python-dotenv before applying WEATHER_* overrides.

import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel

DEFAULT_BASE_URL = "https://www.wunderground.com"
DEFAULT_USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64) weather-pages/0.1"

# Rendered by the site for coordinates it has no station data for.
SOFT_FAILURE_MARKER = "Location: , undefined"


class Settings(BaseModel):
    """Configuration shared by the HTTP client, resolver and extractors."""

    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    air_quality_query: str = "cm_ven=localwx_modaq"
    soft_failure_marker: str = SOFT_FAILURE_MARKER
    retry_attempts: int = 3
    max_retry_wait: float = 30.0
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from WEATHER_* environment variables, falling back to defaults."""
        load_dotenv(find_dotenv(usecwd=True))
        overrides = {
            "base_url": os.environ.get("WEATHER_BASE_URL"),
            "user_agent": os.environ.get("WEATHER_USER_AGENT"),
            "retry_attempts": os.environ.get("WEATHER_RETRY_ATTEMPTS"),
            "max_retry_wait": os.environ.get("WEATHER_MAX_RETRY_WAIT"),
            "log_level": os.environ.get("WEATHER_LOG_LEVEL"),
        }
        settings = cls(**{k: v for k, v in overrides.items() if v})
        return settings.model_copy(update={"base_url": settings.base_url.rstrip("/")})
