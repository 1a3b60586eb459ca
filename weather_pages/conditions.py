# ABOUTME: Parses the flattened additional-conditions text into ordered label/value records.
# ABOUTME: Also repairs letters glued to a degree sign and formats records for display.

import re

from weather_pages.errors import UnpairedToken
from weather_pages.models import ConditionPair, ConditionRecord

TITLE = "Additional Conditions:"

_GLUED_DEGREE = re.compile(r"([^\W\d_])°")


def repair_degree(value: str) -> str:
    """Split a letter that abuts a degree sign away from what precedes it.

    The conditions block renders wind directions as e.g. "NE°"; this yields
    "N E". Values without a letter directly before the sign, such as "25°",
    are returned as-is.
    """
    if "°" not in value:
        return value
    return _GLUED_DEGREE.sub(r" \1", value)


def normalize(raw: str) -> ConditionRecord:
    """Pair alternating label and value lines into a ConditionRecord.

    The number of pairs varies by location. Every line keeps its position, so
    an empty line is an empty value. A trailing line terminator is ignored
    when it would leave a line unpaired; otherwise an odd number of lines
    raises UnpairedToken.
    """
    if not raw:
        return ConditionRecord()
    tokens = [line.strip() for line in raw.replace("\r\n", "\n").split("\n")]
    if len(tokens) % 2 and raw.endswith("\n"):
        tokens.pop()
    if len(tokens) % 2:
        raise UnpairedToken(len(tokens))

    pairs = [
        ConditionPair(label=label, value=repair_degree(value))
        for label, value in zip(tokens[0::2], tokens[1::2])
    ]
    return ConditionRecord(pairs=pairs)


def format_conditions(record: ConditionRecord) -> str:
    """Render a record as "label: value" lines under the Additional Conditions title."""
    lines = [TITLE] + [f"{pair.label}: {pair.value}" for pair in record.pairs]
    return "\n".join(lines)
