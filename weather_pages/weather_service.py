# ABOUTME: Service layer that turns coordinates into fetched and parsed weather pages.
# ABOUTME: Handles the connectivity check, soft-failure detection and canonical page retrieval.

import logging

import httpx
from lxml import etree
from lxml.html import HTMLParser, HtmlElement, document_fromstring

from weather_pages.deps import WeatherDeps
from weather_pages.errors import FetchError, NoData, NotReachable
from weather_pages.layout import render_text
from weather_pages.models import Coordinate, ResolvedDocument

logger = logging.getLogger(__name__)

# Raised by fetch_document when a page cannot be retrieved or decoded.
FETCH_ERRORS = (httpx.HTTPError, etree.LxmlError, ValueError, LookupError)


def weather_url(deps: WeatherDeps, coordinate: Coordinate) -> str:
    """Canonical weather page, also used for the connectivity and placeholder checks."""
    return f"{deps.settings.base_url}/weather/{coordinate.key}"


def air_quality_url(deps: WeatherDeps, coordinate: Coordinate) -> str:
    """Health page carrying the air quality section for the coordinate."""
    return f"{deps.settings.base_url}/health/{coordinate.key}?{deps.settings.air_quality_query}"


def is_valid_page(deps: WeatherDeps, coordinate: Coordinate) -> bool:
    """Request the weather page and report whether it answers with 200 OK.

    Redirects, client and server errors, and transport failures all count as
    unreachable. The cause is logged but not raised.
    """
    url = weather_url(deps, coordinate)
    try:
        resp = deps.http_client.get(url)
    except httpx.HTTPError as e:
        logger.warning("Connectivity check for %s failed: %s", coordinate.key, e)
        return False
    if resp.status_code != httpx.codes.OK:
        logger.warning("Connectivity check for %s returned HTTP %s", coordinate.key, resp.status_code)
        return False
    return True


def fetch_document(deps: WeatherDeps, url: str) -> HtmlElement:
    """Fetch a page and parse it into an lxml document root.

    The raw bytes are parsed with the response charset so pages opening with
    an XML declaration are accepted. Raises one of FETCH_ERRORS on transport
    failures, error statuses, or bodies that are not parseable markup.
    """
    resp = deps.http_client.get(url, follow_redirects=True)
    resp.raise_for_status()
    parser = HTMLParser(encoding=resp.encoding or "utf-8")
    return document_fromstring(resp.content, parser=parser)


def is_placeholder(deps: WeatherDeps, root: HtmlElement) -> bool:
    """Whether the page is the site's generic stand-in for a location it has no data for."""
    return deps.settings.soft_failure_marker in render_text(root)


def resolve(deps: WeatherDeps, coordinate: Coordinate) -> ResolvedDocument:
    """Resolve a coordinate to its weather page.

    The site serves a generic page with a 200 status for any coordinate, so
    a passing connectivity check is followed by a check of the page text for
    the placeholder marker before the page used for extraction is fetched.
    """
    key = coordinate.key
    if not is_valid_page(deps, coordinate):
        raise NotReachable(key, "connectivity check failed")

    url = weather_url(deps, coordinate)
    try:
        first_page = fetch_document(deps, url)
    except FETCH_ERRORS as e:
        raise NotReachable(key, f"page unavailable for placeholder check: {e}") from e
    if is_placeholder(deps, first_page):
        raise NoData(key, "site has no page for this location")

    try:
        root = fetch_document(deps, url)
    except FETCH_ERRORS as e:
        raise FetchError(key, str(e)) from e

    logger.info("Resolved %s to %s", key, url)
    return ResolvedDocument(coordinate=coordinate, url=url, root=root)
