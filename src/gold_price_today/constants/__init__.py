"""Constants package for gold_price_today."""

from gold_price_today.constants.common import (
    BUY_SERIES_LABEL,
    SELL_SERIES_LABEL,
    CHART_LIBRARY_MARKER,
    CATEGORIES_MARKER,
    DATE_LABEL_FORMAT,
)
from gold_price_today.constants.instruments import (
    Instrument,
    ALL_INSTRUMENTS,
    NOTIFICATION_ORDER,
)

__all__ = [
    'BUY_SERIES_LABEL',
    'SELL_SERIES_LABEL',
    'CHART_LIBRARY_MARKER',
    'CATEGORIES_MARKER',
    'DATE_LABEL_FORMAT',
    'Instrument',
    'ALL_INSTRUMENTS',
    'NOTIFICATION_ORDER',
]
