# ABOUTME: Pydantic BaseModels for coordinates, resolved pages and parsed condition records.
# ABOUTME: Defines the structured types passed between the resolver, extractors and session.

from decimal import Decimal

from lxml.html import HtmlElement
from pydantic import BaseModel, ConfigDict, Field

LONGITUDE_LIMIT = 180.0
LATITUDE_LIMIT = 90.0


def _decimal_text(value: float) -> str:
    """Shortest round-trip digits of a float, in positional notation."""
    return format(Decimal(repr(float(value))), "f")


class Coordinate(BaseModel):
    """A longitude/latitude pair with strictly exclusive bounds."""

    model_config = ConfigDict(frozen=True)

    longitude: float = Field(gt=-LONGITUDE_LIMIT, lt=LONGITUDE_LIMIT)
    latitude: float = Field(gt=-LATITUDE_LIMIT, lt=LATITUDE_LIMIT)

    @property
    def key(self) -> str:
        """Path segment the site uses to address this location, longitude first."""
        return f"{_decimal_text(self.longitude)},{_decimal_text(self.latitude)}"


class ResolvedDocument(BaseModel):
    """A fetched and parsed weather page for one coordinate."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    coordinate: Coordinate
    url: str
    root: HtmlElement


class ConditionPair(BaseModel):
    """One label/value line pair from the additional conditions block."""

    label: str
    value: str


class ConditionRecord(BaseModel):
    """Ordered label/value pairs parsed from a single conditions block."""

    pairs: list[ConditionPair] = []

    def __len__(self) -> int:
        return len(self.pairs)
