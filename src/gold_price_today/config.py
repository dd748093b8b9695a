"""
Configuration management for gold_price_today.
Centralize all configuration values from environment variables with sensible defaults.
"""

import os
import logging
import re
from pathlib import Path
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

from gold_price_today.exceptions import ConfigurationError

# Default configuration values
DEFAULT_SOURCE_URL_TEMPLATE = (
    "https://24h.24hstatic.com/ajax/box_bieu_do_gia_vang/index/{instrument}/0/0?is_template_page=1"
)
DEFAULT_REDIS_URL = "redis://localhost:6379/0"
DEFAULT_REDIS_KEY_PREFIX = "gold_price"
DEFAULT_NOTIFY_AT = "07:00"
DEFAULT_API_PORT = 8080

# Load .env file if it exists
_env_path: Path = Path(__file__).resolve().parent.parent.parent / '.env'
if _env_path.exists():
    load_dotenv(_env_path)


@dataclass
class Config:
    """Centralized configuration for the crawler, cache, API and notifier."""

    # ========================================================================
    # Source
    # ========================================================================
    SOURCE_URL_TEMPLATE: str = os.getenv('SOURCE_URL_TEMPLATE', DEFAULT_SOURCE_URL_TEMPLATE)

    # ========================================================================
    # Request settings
    # ========================================================================
    REQUEST_TIMEOUT: int = int(os.getenv('REQUEST_TIMEOUT', '10'))

    # ========================================================================
    # Rate limiting / delays (between instruments in a full refresh)
    # ========================================================================
    SCRAPE_DELAY_MIN: float = float(os.getenv('SCRAPE_DELAY_MIN', '0.5'))
    SCRAPE_DELAY_MAX: float = float(os.getenv('SCRAPE_DELAY_MAX', '1.5'))

    # ========================================================================
    # Redis cache
    # ========================================================================
    REDIS_URL: str = os.getenv('REDIS_URL', DEFAULT_REDIS_URL)
    REDIS_KEY_PREFIX: str = os.getenv('REDIS_KEY_PREFIX', DEFAULT_REDIS_KEY_PREFIX)

    # ========================================================================
    # Scheduling
    # ========================================================================
    CRAWL_INTERVAL_HOURS: int = int(os.getenv('CRAWL_INTERVAL_HOURS', '6'))
    NOTIFY_AT: str = os.getenv('NOTIFY_AT', DEFAULT_NOTIFY_AT)
    COMPARE_DAYS: int = int(os.getenv('COMPARE_DAYS', '1'))

    # ========================================================================
    # Telegram notifications
    # ========================================================================
    TELEGRAM_BOT_TOKEN: Optional[str] = os.getenv('TELEGRAM_BOT_TOKEN', None)
    TELEGRAM_CHAT_ID: Optional[str] = os.getenv('TELEGRAM_CHAT_ID', None)
    TELEGRAM_ENABLED: bool = os.getenv('TELEGRAM_ENABLED', 'true').lower() == 'true'

    # ========================================================================
    # HTTP API
    # ========================================================================
    API_HOST: str = os.getenv('API_HOST', '0.0.0.0')
    API_PORT: int = int(os.getenv('API_PORT', str(DEFAULT_API_PORT)))
    ALLOW_ORIGINS: str = os.getenv('ALLOW_ORIGINS', '*')

    # ========================================================================
    # Logging
    # ========================================================================
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    def __post_init__(self) -> None:
        """Validate configuration values after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values."""
        if '{instrument}' not in self.SOURCE_URL_TEMPLATE:
            raise ConfigurationError("SOURCE_URL_TEMPLATE must contain an '{instrument}' placeholder")

        if self.REQUEST_TIMEOUT <= 0:
            raise ConfigurationError(f"REQUEST_TIMEOUT must be positive, got {self.REQUEST_TIMEOUT}")

        if self.SCRAPE_DELAY_MIN < 0 or self.SCRAPE_DELAY_MAX < 0:
            raise ConfigurationError("Delay values cannot be negative")

        if self.SCRAPE_DELAY_MIN > self.SCRAPE_DELAY_MAX:
            raise ConfigurationError(
                f"SCRAPE_DELAY_MIN ({self.SCRAPE_DELAY_MIN}) cannot exceed "
                f"SCRAPE_DELAY_MAX ({self.SCRAPE_DELAY_MAX})"
            )

        if not self.REDIS_KEY_PREFIX:
            raise ConfigurationError("REDIS_KEY_PREFIX cannot be empty")

        if self.CRAWL_INTERVAL_HOURS <= 0:
            raise ConfigurationError(f"CRAWL_INTERVAL_HOURS must be positive, got {self.CRAWL_INTERVAL_HOURS}")

        if not re.fullmatch(r'([01]\d|2[0-3]):[0-5]\d', self.NOTIFY_AT):
            raise ConfigurationError(f"NOTIFY_AT must be HH:MM, got {self.NOTIFY_AT!r}")

        if self.COMPARE_DAYS <= 0:
            raise ConfigurationError(f"COMPARE_DAYS must be positive, got {self.COMPARE_DAYS}")

        if not 0 < self.API_PORT < 65536:
            raise ConfigurationError(f"Invalid API_PORT: {self.API_PORT}")

        if self.LOG_LEVEL not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ConfigurationError(f"Invalid LOG_LEVEL: {self.LOG_LEVEL}")

    @property
    def allowed_origins(self) -> List[str]:
        """CORS origins as a list."""
        return [origin.strip() for origin in self.ALLOW_ORIGINS.split(',') if origin.strip()]


_config_instance: Optional[Config] = None


def get_config() -> Config:
    """
    Get configuration instance (singleton).

    Returns:
        Config dataclass with all settings
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def configure_logging(level: Optional[str] = None):
    """Configure Python logging based on config settings."""
    config = get_config()
    logging.basicConfig(
        level=getattr(logging, level or config.LOG_LEVEL),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        force=True,
    )
