# ABOUTME: Exception taxonomy for page resolution, field extraction and text normalization.
# ABOUTME: Callers catch the family base classes; subclasses say which step failed.


class WeatherPageError(Exception):
    """Base exception for everything the scraping pipeline can raise."""


class ResolutionFailure(WeatherPageError):
    """A coordinate could not be turned into a usable weather page."""

    def __init__(self, key: str, detail: str = ""):
        self.key = key
        self.detail = detail
        message = f"Could not resolve location {key}"
        super().__init__(f"{message}: {detail}" if detail else message)


class NotReachable(ResolutionFailure):
    """The connectivity check failed or returned a non-OK status."""


class NoData(ResolutionFailure):
    """The site rendered its placeholder page for the coordinate."""


class FetchError(ResolutionFailure):
    """The canonical page could not be fetched or parsed."""


class ExtractionFailure(WeatherPageError):
    """A field could not be read from a resolved page."""


class FieldNotFound(ExtractionFailure):
    """The element for a logical role is absent from the document."""

    def __init__(self, role: str):
        self.role = role
        super().__init__(f"No element found for {role}")


class AirQualityUnavailable(ExtractionFailure):
    """The air quality page is missing, empty, or unreadable for the coordinate."""


class NormalizationFailure(WeatherPageError):
    """A flattened text block could not be parsed into records."""


class UnpairedToken(NormalizationFailure):
    """A label/value block has an odd number of lines."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Expected label/value pairs but got {count} lines")
