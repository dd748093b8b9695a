"""Custom exception classes for gold_price_today."""


class ScraperError(Exception):
    """Base exception for all gold_price_today errors."""


class NetworkError(ScraperError):
    """Raised when the source page cannot be fetched (timeout, connection failed, non-2xx status)."""


class ExtractionError(ScraperError):
    """Raised when chart data cannot be extracted from a fetched page."""


class ScriptNotFoundError(ExtractionError):
    """Raised when no script block contains the chart configuration."""


class CategoriesNotFoundError(ExtractionError):
    """Raised when the chart script has no categories array."""


class ElementParseError(ScraperError):
    """Raised when a single numeric token in a data array cannot be parsed."""


class ConfigurationError(ScraperError):
    """Raised when configuration is invalid or missing required settings."""


class CacheError(ScraperError):
    """Raised when cache store operations fail."""


class NotificationError(ScraperError):
    """Raised when a chat notification cannot be delivered."""


class ValidationError(ScraperError):
    """Raised when data validation fails (invalid format, missing fields, etc.)."""
