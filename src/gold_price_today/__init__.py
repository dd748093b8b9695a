"""gold_price_today - Vietnamese gold price chart scraper, cache, API and notifier."""

__version__ = "1.0.0"

from gold_price_today.config import Config
from gold_price_today.exceptions import (
    ScraperError,
    NetworkError,
    ExtractionError,
    ScriptNotFoundError,
    CategoriesNotFoundError,
    ElementParseError,
    ValidationError,
    ConfigurationError,
    CacheError,
    NotificationError,
)

__all__ = [
    "Config",
    "ScraperError",
    "NetworkError",
    "ExtractionError",
    "ScriptNotFoundError",
    "CategoriesNotFoundError",
    "ElementParseError",
    "ValidationError",
    "ConfigurationError",
    "CacheError",
    "NotificationError",
]
