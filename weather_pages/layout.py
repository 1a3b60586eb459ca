# ABOUTME: Maps logical page roles to structural XPath positions and renders element text.
# ABOUTME: The only module that knows the page layout; extractors ask for roles, not paths.

from enum import Enum

from lxml import etree
from lxml.html import HtmlElement

from weather_pages.errors import FieldNotFound

_CURRENT = (
    '//*[@id="inner-content"]/div[3]/div[1]/div/div[1]/div[1]/lib-city-current-conditions/div'
)
_AIR_QUALITY = '//*[@id="airqualityindex_section"]/div/div/div'


class Role(str, Enum):
    """A piece of information the extractors read from a weather or health page."""

    CITY = "city"
    TIMESTAMP = "timestamp"
    TEMPERATURE = "temperature"
    FEELS_LIKE = "feels like"
    FORECAST = "forecast"
    GENERAL_FORECAST = "general forecast"
    ADDITIONAL_CONDITIONS = "additional conditions"
    AIR_QUALITY_LABEL = "air quality label"
    AIR_QUALITY_INDEX = "air quality index"


LAYOUT: dict[Role, str] = {
    Role.CITY: '//*[@id="inner-content"]/div[2]/lib-city-header/div[1]/div/h1/span[1]',
    Role.TIMESTAMP: f"{_CURRENT}/div[1]/p/span[1]/strong",
    Role.TEMPERATURE: f"{_CURRENT}/div[2]/div/div/div[2]/lib-display-unit/span/span[1]",
    Role.FEELS_LIKE: f"{_CURRENT}/div[2]/div/div/div[3]",
    Role.FORECAST: f"{_CURRENT}/div[3]/div/div[1]/p",
    Role.GENERAL_FORECAST: (
        '//*[@id="inner-content"]/div[3]/div[1]/div/div[3]/div/lib-city-today-forecast'
        "/div/div[1]/div/div/div/a[2]"
    ),
    Role.ADDITIONAL_CONDITIONS: (
        '//*[@id="inner-content"]/div[3]/div[2]/div/div[1]/div[1]/lib-additional-conditions'
        "/lib-item-box/div/div[2]/div"
    ),
    Role.AIR_QUALITY_LABEL: f"{_AIR_QUALITY}/div[1]/div[2]/div[2]",
    Role.AIR_QUALITY_INDEX: f"{_AIR_QUALITY}/div[2]/div[2]/div[1]/div[2]",
}

_QUERIES = {role: etree.XPath(path) for role, path in LAYOUT.items()}

# Elements that start a new line when a subtree is rendered as text.
BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "body", "br", "dd", "div", "dl", "dt",
        "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr", "li", "main",
        "nav", "ol", "p", "section", "table", "td", "th", "tr", "ul",
    }
)
_SKIPPED_TAGS = frozenset({"script", "style", "noscript", "template"})
_LINE_BREAK_TAGS = frozenset({"br", "hr"})


def locate(root: HtmlElement, role: Role) -> HtmlElement:
    """Return the first element filling `role` in the document, or raise FieldNotFound."""
    matches = _QUERIES[role](root)
    if not matches:
        raise FieldNotFound(role.value)
    return matches[0]


def _is_empty_cell(node) -> bool:
    """A block with no nested blocks and no visible text, such as an empty value cell."""
    for child in node.iterdescendants():
        if isinstance(child.tag, str) and child.tag.lower() in BLOCK_TAGS:
            return False
    return not inline_text(node)


def render_text(element: HtmlElement) -> str:
    """Render an element subtree the way a browser lays it out as plain text.

    Block-level elements break lines, inline runs are joined and whitespace
    inside a line is collapsed. Whitespace between blocks is dropped, but an
    empty leaf block still occupies its own empty line so positional
    label/value pairing survives missing values.
    """
    lines: list[list[str] | None] = [[]]

    def walk(node) -> None:
        if not isinstance(node.tag, str):
            # comments and processing instructions contribute only their tail
            return
        tag = node.tag.lower()
        if tag in _SKIPPED_TAGS:
            return
        block = tag in BLOCK_TAGS
        if block:
            if tag not in _LINE_BREAK_TAGS and _is_empty_cell(node):
                lines.extend((None, []))
                return
            lines.append([])
        if node.text:
            lines[-1].append(node.text)
        for child in node:
            walk(child)
            if child.tail:
                lines[-1].append(child.tail)
        if block:
            lines.append([])

    walk(element)
    rendered = []
    for fragments in lines:
        if fragments is None:
            rendered.append("")
            continue
        line = " ".join("".join(fragments).split())
        if line:
            rendered.append(line)
    return "\n".join(rendered)


def inline_text(element: HtmlElement) -> str:
    """Return the element's text on a single line with whitespace collapsed."""
    return " ".join(element.text_content().split())
