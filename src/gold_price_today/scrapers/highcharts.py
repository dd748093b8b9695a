#!/usr/bin/env python3
"""
Chart data extraction from inline Highcharts configuration scripts.

The source page builds its chart options as templated script text rather than
serving structured data, so the arrays are pulled out with regex matching
instead of evaluating the script.
"""

import logging
from dataclasses import dataclass, field
from typing import List, NamedTuple, Tuple

from lxml import etree, html

from gold_price_today.constants import CHART_LIBRARY_MARKER, CATEGORIES_MARKER
from gold_price_today.constants import patterns
from gold_price_today.exceptions import CategoriesNotFoundError, ScriptNotFoundError
from gold_price_today.utils.parsing import parse_number_list, parse_string_list

logger = logging.getLogger(__name__)


class SeriesMatch(NamedTuple):
    """Raw series literal as matched in the script text"""

    name: str
    color: str
    data_raw: str


@dataclass
class ExtractedSeries:
    """One named data track of the chart"""

    name: str
    color: str
    data: List[float] = field(default_factory=list)
    coerced_count: int = 0  # data tokens replaced with 0.0


@dataclass
class ChartData:
    """Categories (x axis labels) and series of one chart"""

    categories: List[str] = field(default_factory=list)
    series: List[ExtractedSeries] = field(default_factory=list)


def locate_chart_script(document: str) -> str:
    """
    Find the script element holding the chart configuration.

    Args:
        document: Raw HTML text

    Returns:
        Text of the first script containing both marker tokens

    Raises:
        ScriptNotFoundError: If the document has no such script or cannot be parsed
    """
    if not document or not document.strip():
        raise ScriptNotFoundError("Empty document")

    try:
        tree = html.document_fromstring(document)
    except (etree.ParserError, ValueError) as e:
        raise ScriptNotFoundError(f"Document could not be parsed as HTML: {e}") from e

    for script in tree.xpath(patterns.SCRIPT_ELEMENTS):
        text = script.text_content()
        if CHART_LIBRARY_MARKER in text and CATEGORIES_MARKER in text:
            return text

    raise ScriptNotFoundError(
        f"No script containing '{CHART_LIBRARY_MARKER}' and '{CATEGORIES_MARKER}' found"
    )


def extract_chart_parts(script_text: str) -> Tuple[str, List[SeriesMatch]]:
    """
    Pull the categories literal and all series literals out of script text.

    Args:
        script_text: Text of the chart configuration script

    Returns:
        Tuple of (raw categories contents, series matches in order of appearance)

    Raises:
        CategoriesNotFoundError: If no categories array is present
    """
    categories_match = patterns.CATEGORIES_PATTERN.search(script_text)
    if not categories_match:
        raise CategoriesNotFoundError("No categories array found in chart script")

    series_matches = [
        SeriesMatch(*match.groups()) for match in patterns.SERIES_PATTERN.finditer(script_text)
    ]
    if not series_matches:
        logger.warning("Chart script contains no series literals")

    return categories_match.group(1), series_matches


def parse_series(match: SeriesMatch) -> ExtractedSeries:
    """Convert a raw series match into typed data."""
    errors: List[Tuple[int, str]] = []
    data = parse_number_list(match.data_raw, errors)

    if errors:
        logger.warning(
            "Series '%s': %d of %d values could not be parsed and were set to 0.0: %s",
            match.name, len(errors), len(data), [token for _, token in errors],
        )

    return ExtractedSeries(
        name=match.name,
        color=match.color,
        data=data,
        coerced_count=len(errors),
    )


def extract_chart_data(document: str) -> ChartData:
    """
    Extract chart categories and series from an HTML document.

    Args:
        document: Raw HTML text

    Returns:
        ChartData with parsed categories and series

    Raises:
        ScriptNotFoundError: If no chart script is present
        CategoriesNotFoundError: If the chart script has no categories
    """
    script_text = locate_chart_script(document)
    categories_raw, series_matches = extract_chart_parts(script_text)

    chart = ChartData(
        categories=parse_string_list(categories_raw),
        series=[parse_series(match) for match in series_matches],
    )

    logger.debug(
        "Extracted %d categories and %d series (%s)",
        len(chart.categories), len(chart.series), ", ".join(s.name for s in chart.series),
    )
    return chart
