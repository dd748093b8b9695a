"""
Array literal parsers for chart configuration text.
Tolerant converters for the categories and series data arrays.
"""

import math
import logging
from typing import List, Optional, Tuple

from gold_price_today.exceptions import ElementParseError

logger = logging.getLogger(__name__)

QUOTE_CHARS = "'\""


# ============================================================================
# STRING LISTS
# ============================================================================

def parse_string_list(raw: Optional[str]) -> List[str]:
    """
    Parse the contents of a quoted string list literal.

    Args:
        raw: Text between the brackets, e.g. ``"01/10", '02/10'``

    Returns:
        List of unquoted, trimmed strings; empty list for empty input
    """
    if not raw or not raw.strip():
        return []

    return [item.strip().strip(QUOTE_CHARS) for item in raw.split(",")]


# ============================================================================
# NUMBER LISTS
# ============================================================================

def parse_float(token: str) -> float:
    """
    Parse one numeric token.

    Args:
        token: Single element of a number list literal

    Returns:
        Parsed float

    Raises:
        ElementParseError: If the token is not a finite number
    """
    cleaned = token.strip()
    try:
        value = float(cleaned)
    except ValueError as e:
        raise ElementParseError(f"Invalid numeric value {cleaned!r}") from e

    if not math.isfinite(value):
        raise ElementParseError(f"Non-finite numeric value {cleaned!r}")

    return value


def parse_number_list(
    raw: Optional[str], errors: Optional[List[Tuple[int, str]]] = None
) -> List[float]:
    """
    Parse the contents of a numeric list literal.

    Unparsable elements are replaced with 0.0 so that positions stay aligned
    with the categories array.

    Args:
        raw: Text between the brackets, e.g. ``1.5, 2, 3``
        errors: Optional list receiving ``(index, token)`` for each zeroed element

    Returns:
        List of floats with the same length as the number of elements
    """
    if not raw or not raw.strip():
        return []

    values = []
    for index, token in enumerate(raw.split(",")):
        try:
            values.append(parse_float(token))
        except ElementParseError as e:
            logger.debug("Coercing element %d to 0.0: %s", index, e)
            if errors is not None:
                errors.append((index, token.strip()))
            values.append(0.0)

    return values
