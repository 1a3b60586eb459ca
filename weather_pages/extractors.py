# ABOUTME: Field extractors that read formatted weather values from a resolved page.
# ABOUTME: Each extractor asks the layout table for a role and post-processes its text.

import logging

from weather_pages.conditions import format_conditions, normalize
from weather_pages.deps import WeatherDeps
from weather_pages.errors import AirQualityUnavailable, FieldNotFound
from weather_pages.layout import Role, inline_text, locate, render_text
from weather_pages.models import ResolvedDocument
from weather_pages.weather_service import FETCH_ERRORS, air_quality_url, fetch_document, is_placeholder

logger = logging.getLogger(__name__)


def _text(doc: ResolvedDocument, role: Role) -> str:
    return inline_text(locate(doc.root, role))


def city(doc: ResolvedDocument) -> str:
    """City name from the page header.

    The header reads either "<City> Weather Conditions" or "<City> Conditions".
    """
    text = _text(doc, Role.CITY)
    cut = text.find("Conditions")
    if cut == -1:
        return text.strip()
    head = text[:cut].rstrip()
    if head.endswith("Weather"):
        head = head[: -len("Weather")]
    return head.strip()


def time_and_date(doc: ResolvedDocument) -> str:
    return _text(doc, Role.TIMESTAMP).strip()


def temperature(doc: ResolvedDocument) -> str:
    """Current temperature with the perceived temperature on a second line."""
    temp = _text(doc, Role.TEMPERATURE)
    feels_like = _text(doc, Role.FEELS_LIKE)
    return f"{temp}°F\nFeels {feels_like}"


def forecast(doc: ResolvedDocument) -> str:
    return _text(doc, Role.FORECAST).strip()


def general_forecast(doc: ResolvedDocument) -> str:
    return _text(doc, Role.GENERAL_FORECAST).strip()


def additional_conditions(doc: ResolvedDocument) -> str:
    """Pressure, visibility, dew point and the other published conditions, one per line."""
    block = render_text(locate(doc.root, Role.ADDITIONAL_CONDITIONS))
    return format_conditions(normalize(block))


def air_quality(deps: WeatherDeps, doc: ResolvedDocument) -> str:
    """Air quality summary read from the separate health page for the same coordinate.

    Raises AirQualityUnavailable when the health page can't be fetched, is the
    site's placeholder, or lacks the air quality section.
    """
    url = air_quality_url(deps, doc.coordinate)
    try:
        health = fetch_document(deps, url)
    except FETCH_ERRORS as e:
        logger.warning("Air quality page %s could not be fetched: %s", url, e)
        raise AirQualityUnavailable(f"Could not fetch {url}") from e
    if is_placeholder(deps, health):
        raise AirQualityUnavailable(f"No air quality data for {doc.coordinate.key}")

    try:
        label = inline_text(locate(health, Role.AIR_QUALITY_LABEL))
        index = inline_text(locate(health, Role.AIR_QUALITY_INDEX))
    except FieldNotFound as e:
        raise AirQualityUnavailable(f"Air quality section missing: {e.role}") from e

    return f"The air quality in {city(doc)} is {label}. The air quality index is {index}."
