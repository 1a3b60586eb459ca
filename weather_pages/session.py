# ABOUTME: Interactive session state machine driving coordinate entry, resolution and the field menu.
# ABOUTME: Transitions are plain methods so each state can be exercised without console I/O.

import logging
from enum import Enum
from typing import Callable

from weather_pages import extractors
from weather_pages.deps import WeatherDeps
from weather_pages.errors import AirQualityUnavailable, ExtractionFailure, NormalizationFailure, ResolutionFailure
from weather_pages.models import LATITUDE_LIMIT, LONGITUDE_LIMIT, Coordinate, ResolvedDocument
from weather_pages.weather_service import resolve

logger = logging.getLogger(__name__)

END_COMMAND = "end"

LONGITUDE_PROMPT = 'Welcome to this weather application! Please input a longitude: \n(Type "End" to stop.)'
LATITUDE_PROMPT = "Please input a latitude: "
LOCATION_MISSING = "Sorry! This location doesn't exist on this webpage. Please try again."
INVALID_COMMAND = "Invalid input. Please try again."
FIELD_MISSING = "Sorry! That information isn't available for this location."
CONDITIONS_UNREADABLE = "Sorry! The additional conditions for this location couldn't be read."
AIR_QUALITY_MISSING = "Air quality information is unavailable for this location."
FAREWELL = "Thank you for using this application. See you soon!"

MENU = (
    'Press "T" to get the temperature.\n'
    'Press "F" for the forecast.\n'
    'Press "G" for the general forecast.\n'
    'Press "A" for Air Quality information.\n'
    'Press "X" for Additional Conditions.\n'
    'Type "End" to stop the program.'
)


class State(Enum):
    AWAITING_LONGITUDE = "awaiting longitude"
    AWAITING_LATITUDE = "awaiting latitude"
    RESOLVING = "resolving"
    MENU_LOOP = "menu loop"
    TERMINATED = "terminated"


def parse_bounded(text: str, limit: float) -> float | None:
    """Parse text as a number strictly inside (-limit, limit); None when it isn't one."""
    try:
        value = float(text)
    except ValueError:
        return None
    if not -limit < value < limit:
        return None
    return value


class WeatherSession:
    """One user's walk from coordinate entry through the weather menu.

    `handle` consumes one line of input in the input-reading states and returns
    the messages to show; `resolve_location` performs the RESOLVING step. The
    resolved page and its coordinate live here and nowhere else.
    """

    def __init__(
        self,
        deps: WeatherDeps,
        resolver: Callable[[WeatherDeps, Coordinate], ResolvedDocument] = resolve,
    ):
        self.deps = deps
        self.resolver = resolver
        self.state = State.AWAITING_LONGITUDE
        self.longitude: float | None = None
        self.latitude: float | None = None
        self.document: ResolvedDocument | None = None
        self._handlers: dict[State, Callable[[str], list[str]]] = {
            State.AWAITING_LONGITUDE: self._on_longitude,
            State.AWAITING_LATITUDE: self._on_latitude,
            State.MENU_LOOP: self._on_command,
        }
        self._commands: dict[str, Callable[[], str]] = {
            "t": lambda: extractors.temperature(self.document),
            "f": lambda: extractors.forecast(self.document),
            "g": lambda: extractors.general_forecast(self.document),
            "a": lambda: extractors.air_quality(self.deps, self.document),
            "x": lambda: extractors.additional_conditions(self.document),
        }

    @property
    def coordinate(self) -> Coordinate | None:
        return self.document.coordinate if self.document else None

    def prompt(self) -> str:
        if self.state is State.AWAITING_LONGITUDE:
            return LONGITUDE_PROMPT
        if self.state is State.AWAITING_LATITUDE:
            return LATITUDE_PROMPT
        if self.state is State.MENU_LOOP:
            return f"{self._header()}\n{MENU}"
        return ""

    def handle(self, line: str) -> list[str]:
        """Feed one line of user input to the current state."""
        handler = self._handlers.get(self.state)
        if handler is None:
            return []
        text = line.strip()
        if text.lower() == END_COMMAND:
            return self.end()
        return handler(text)

    def end(self) -> list[str]:
        self.state = State.TERMINATED
        return [FAREWELL]

    def resolve_location(self) -> list[str]:
        """Resolve the entered pair; on failure discard it and ask for a longitude again."""
        if self.state is not State.RESOLVING:
            return []
        coordinate = Coordinate(longitude=self.longitude, latitude=self.latitude)
        self.longitude = self.latitude = None
        try:
            document = self.resolver(self.deps, coordinate)
        except ResolutionFailure as e:
            logger.info("Resolution failed: %s", e)
            self.state = State.AWAITING_LONGITUDE
            return [LOCATION_MISSING]
        self.document = document
        self.state = State.MENU_LOOP
        return []

    def run(self, read_line: Callable[[], str] = input, write: Callable[[str], None] = print) -> None:
        """Drive the session until the user ends it or input runs out."""
        while self.state is not State.TERMINATED:
            if self.state is State.RESOLVING:
                messages = self.resolve_location()
            else:
                write(self.prompt())
                try:
                    line = read_line()
                except EOFError:
                    messages = self.end()
                else:
                    messages = self.handle(line)
            for message in messages:
                write(message)

    def _on_longitude(self, text: str) -> list[str]:
        value = parse_bounded(text, LONGITUDE_LIMIT)
        if value is None:
            return [f"Invalid longitude! Must be a number between -{LONGITUDE_LIMIT:g} and {LONGITUDE_LIMIT:g}"]
        self.longitude = value
        self.state = State.AWAITING_LATITUDE
        return []

    def _on_latitude(self, text: str) -> list[str]:
        value = parse_bounded(text, LATITUDE_LIMIT)
        if value is None:
            return [f"Invalid latitude! Must be a number between -{LATITUDE_LIMIT:g} and {LATITUDE_LIMIT:g}"]
        self.latitude = value
        self.state = State.RESOLVING
        return []

    def _on_command(self, text: str) -> list[str]:
        command = self._commands.get(text.lower())
        if command is None:
            return [INVALID_COMMAND]
        try:
            return [command() + "\n"]
        except AirQualityUnavailable as e:
            logger.warning("%s", e)
            return [AIR_QUALITY_MISSING]
        except NormalizationFailure as e:
            logger.warning("%s", e)
            return [CONDITIONS_UNREADABLE]
        except ExtractionFailure as e:
            logger.warning("%s", e)
            return [FIELD_MISSING]

    def _header(self) -> str:
        try:
            place = extractors.city(self.document)
            when = extractors.time_and_date(self.document)
        except ExtractionFailure as e:
            logger.warning("Page header incomplete: %s", e)
            return "The city you've selected couldn't be read from the page."
        return f"The city you've selected is: {place}. It is currently {when}."
