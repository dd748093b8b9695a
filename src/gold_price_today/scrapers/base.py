#!/usr/bin/env python3
"""
Base scraper class for chart-page price scrapers.
Provides the HTTP session, fetching and the persisted price record type.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple
import random
import logging
from dataclasses import dataclass, field
from datetime import datetime
import requests
from requests.adapters import HTTPAdapter

from gold_price_today.constants import Instrument
from gold_price_today.constants.common import (
    RECORD_KEY_TYPE,
    RECORD_KEY_DATES,
    RECORD_KEY_BUY_PRICES,
    RECORD_KEY_SELL_PRICES,
    RECORD_KEY_UPDATED_AT,
)
from gold_price_today.exceptions import NetworkError, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class ScraperConfig:
    """Configuration for scraper behavior"""

    url_template: str
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/137.0.0.0 Safari/537.36"
    )
    request_timeout: int = 10
    delay_min: float = 0.0
    delay_max: float = 0.0

    def get_random_delay(self) -> float:
        """Get random delay between min and max"""
        return random.uniform(self.delay_min, self.delay_max)


@dataclass
class GoldPriceRecord:
    """Price series for one instrument, as produced by one crawl"""

    instrument_type: Instrument
    dates: List[str] = field(default_factory=list)
    buy_prices: List[float] = field(default_factory=list)
    sell_prices: List[float] = field(default_factory=list)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def is_aligned(self) -> bool:
        """Check that dates and both price series have the same length"""
        return len(self.dates) == len(self.buy_prices) == len(self.sell_prices)

    def prices_on(self, date_label: str) -> Optional[Tuple[float, float]]:
        """
        Look up buy and sell prices for an exact date label.

        Series shorter than the dates list yield 0.0 for the missing side.

        Args:
            date_label: Label as it appears in ``dates`` (e.g. "17/10")

        Returns:
            (buy, sell) tuple, or None if the label is not present
        """
        if date_label not in self.dates:
            return None

        index = self.dates.index(date_label)
        buy = self.buy_prices[index] if index < len(self.buy_prices) else 0.0
        sell = self.sell_prices[index] if index < len(self.sell_prices) else 0.0
        return buy, sell

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON export"""
        return {
            RECORD_KEY_TYPE: self.instrument_type.value,
            RECORD_KEY_DATES: list(self.dates),
            RECORD_KEY_BUY_PRICES: list(self.buy_prices),
            RECORD_KEY_SELL_PRICES: list(self.sell_prices),
            RECORD_KEY_UPDATED_AT: self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GoldPriceRecord":
        """
        Build a record from its dictionary form.

        Raises:
            ValidationError: If a field is missing or has the wrong type
        """
        try:
            return cls(
                instrument_type=Instrument(data[RECORD_KEY_TYPE]),
                dates=[str(d) for d in data[RECORD_KEY_DATES] or []],
                buy_prices=[float(p) for p in data[RECORD_KEY_BUY_PRICES] or []],
                sell_prices=[float(p) for p in data[RECORD_KEY_SELL_PRICES] or []],
                updated_at=datetime.fromisoformat(data[RECORD_KEY_UPDATED_AT]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Invalid gold price record: {e}") from e


class BaseScraper(ABC):
    """
    Abstract base class for chart-page scrapers.

    Provides common functionality like HTTP requests and error handling.
    Subclasses implement the page parsing specific to each site.
    """

    def __init__(self, config: ScraperConfig):
        """
        Initialize scraper with configuration.

        Args:
            config: ScraperConfig instance with scraper settings
        """
        self.config = config
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """Create requests session with browser-like headers"""
        session = requests.Session()

        adapter = HTTPAdapter(max_retries=0)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update(
            {
                "User-Agent": self.config.user_agent,
                "Accept": "*/*",
                "Accept-Language": "vi-VN,vi;q=0.9,en-US;q=0.8,en;q=0.7",
                "Origin": "https://www.24h.com.vn",
                "Referer": "https://www.24h.com.vn/",
                "Connection": "keep-alive",
            }
        )

        return session

    def _fetch_page(self, url: str) -> requests.Response:
        """
        Fetch a page with a bounded timeout.

        Args:
            url: URL to fetch

        Returns:
            Response object

        Raises:
            NetworkError: If the request fails or returns an error status
        """
        try:
            logger.debug("Fetching: %s", url)
            response = self.session.get(url, timeout=self.config.request_timeout)
            response.raise_for_status()
        except requests.Timeout as e:
            error = f"Timeout after {self.config.request_timeout}s"
            logger.error("Failed to fetch %s: %s", url, error)
            raise NetworkError(f"Failed to fetch {url}: {error}") from e
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else 0
            error = f"HTTP {status_code}"
            logger.error("Failed to fetch %s: %s", url, error)
            raise NetworkError(f"Failed to fetch {url}: {error}") from e
        except requests.RequestException as e:
            error = f"Request error: {str(e)[:100]}"
            logger.error("Failed to fetch %s: %s", url, error)
            raise NetworkError(f"Failed to fetch {url}: {error}") from e

        # The source omits a charset; requests would fall back to latin-1
        if not response.encoding or response.encoding.lower() == "iso-8859-1":
            response.encoding = "utf-8"

        return response

    @abstractmethod
    def source_url(self, instrument: Instrument) -> str:
        """
        Build the page URL for one instrument.

        Must be implemented by subclasses.
        """

    @abstractmethod
    def parse_page(self, instrument: Instrument, page: str, crawl_time: datetime) -> GoldPriceRecord:
        """
        Turn page text into a price record.

        Must be implemented by subclasses.

        Args:
            instrument: Instrument the page belongs to
            page: Decoded page text
            crawl_time: Timestamp of the crawl

        Returns:
            GoldPriceRecord built from the page
        """

    def crawl(self, instrument: Instrument) -> GoldPriceRecord:
        """
        Fetch and parse the page for one instrument.

        Args:
            instrument: Instrument to crawl

        Returns:
            GoldPriceRecord for the instrument

        Raises:
            NetworkError: If the page could not be fetched
            ExtractionError: If the chart data could not be extracted
        """
        url = self.source_url(instrument)
        logger.info("Crawling %s: %s", instrument.value, url)

        response = self._fetch_page(url)
        logger.debug("Fetched %d bytes for %s", len(response.content), instrument.value)

        return self.parse_page(instrument, response.text, datetime.now())

    def cleanup(self):
        """Clean up resources (close session, etc.)"""
        self.session.close()
        logger.debug("Scraper session closed")

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.cleanup()
