# ABOUTME: Dependency container for one interactive session using Pydantic BaseModel.
# ABOUTME: Holds the httpx.Client and settings used by the resolver and extractors.

import httpx
from pydantic import BaseModel, ConfigDict
from pydantic_ai.retries import RetryConfig, TenacityTransport, wait_retry_after
from tenacity import retry_if_exception_type, stop_after_attempt

from weather_pages.config import Settings

RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})


class WeatherDeps(BaseModel):
    """Dependencies passed into every resolver and extractor call."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.Client
    settings: Settings = Settings()


def raise_for_transient_status(response: httpx.Response) -> None:
    """Raise only for statuses worth retrying; other error codes reach the caller untouched."""
    if response.status_code in RETRYABLE_STATUS:
        response.raise_for_status()


def create_http_client(settings: Settings) -> httpx.Client:
    """Create an httpx client with tenacity retry on transient HTTP errors.

    Retries connection errors, read timeouts, and 429/5xx responses with exponential backoff.
    Redirects are not followed by default; page fetches opt in per request.
    """
    transport = TenacityTransport(
        RetryConfig(
            retry=retry_if_exception_type((httpx.ConnectError, httpx.ReadTimeout, httpx.HTTPStatusError)),
            wait=wait_retry_after(max_wait=settings.max_retry_wait),
            stop=stop_after_attempt(settings.retry_attempts),
            reraise=True,
        ),
        validate_response=raise_for_transient_status,
    )
    return httpx.Client(transport=transport, headers={"User-Agent": settings.user_agent})
