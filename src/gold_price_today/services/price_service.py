#!/usr/bin/env python3
"""
Crawl orchestration for gold price records.
Ties the chart scraper to the cache and serves records to the API and notifier.
"""

import logging
import threading
import time
from typing import Dict, Iterable, Optional, Tuple

from gold_price_today.constants import ALL_INSTRUMENTS, Instrument
from gold_price_today.exceptions import CacheError, ScraperError
from gold_price_today.scrapers.base import BaseScraper, GoldPriceRecord
from gold_price_today.scrapers.gold import GoldChartScraper
from gold_price_today.services.cache_store import PriceCache

logger = logging.getLogger(__name__)


class GoldPriceService:
    """Crawls instruments, persists records and answers lookups with a crawl fallback."""

    def __init__(self, scraper: Optional[BaseScraper] = None, cache: Optional[PriceCache] = None):
        """
        Initialize the service.

        Args:
            scraper: Chart scraper; defaults to GoldChartScraper
            cache: Record cache; defaults to a Redis PriceCache
        """
        self.scraper = scraper if scraper is not None else GoldChartScraper()
        self.cache = cache if cache is not None else PriceCache()
        # One crawl at a time per instrument
        self._locks: Dict[Instrument, threading.Lock] = {i: threading.Lock() for i in ALL_INSTRUMENTS}

    def crawl_and_save(self, instrument: Instrument) -> GoldPriceRecord:
        """
        Crawl one instrument and store the result.

        Raises:
            NetworkError: If the page could not be fetched
            ExtractionError: If the chart data could not be extracted
            CacheError: If the record could not be saved
        """
        with self._locks[instrument]:
            return self._crawl_and_save(instrument)

    def _crawl_and_save(self, instrument: Instrument) -> GoldPriceRecord:
        record = self.scraper.crawl(instrument)
        self.cache.save(record)
        return record

    def _load(self, instrument: Instrument) -> Optional[GoldPriceRecord]:
        """Cache lookup where a failed read counts as a miss."""
        try:
            return self.cache.load(instrument)
        except CacheError as e:
            logger.warning("Cache read failed for %s, treating as miss: %s", instrument.value, e)
            return None

    def get_or_crawl(self, instrument: Instrument) -> GoldPriceRecord:
        """
        Return the cached record, crawling the instrument on a miss.

        Raises:
            ScraperError: If the fallback crawl fails
        """
        record = self._load(instrument)
        if record is not None:
            return record

        logger.info("Gold price for %s not found in cache, crawling new data...", instrument.value)
        with self._locks[instrument]:
            # A concurrent caller may have filled the cache while we waited
            record = self._load(instrument)
            if record is not None:
                return record
            return self._crawl_and_save(instrument)

    def get_all(self, instruments: Iterable[Instrument] = ALL_INSTRUMENTS) -> Dict[Instrument, GoldPriceRecord]:
        """
        Collect records for several instruments, skipping those that fail.

        Returns:
            Mapping of instrument to record for every instrument with data
        """
        results: Dict[Instrument, GoldPriceRecord] = {}

        for instrument in instruments:
            try:
                results[instrument] = self.get_or_crawl(instrument)
            except ScraperError as e:
                logger.error("Failed to get gold price for %s: %s", instrument.value, e)

        return results

    def refresh_all(self, instruments: Iterable[Instrument] = ALL_INSTRUMENTS) -> Tuple[int, int]:
        """
        Crawl and store every instrument independently.

        Returns:
            Tuple of (succeeded, failed)
        """
        instruments = list(instruments)
        succeeded = 0
        failed = 0

        for index, instrument in enumerate(instruments):
            try:
                self.crawl_and_save(instrument)
                succeeded += 1
                logger.info("Successfully updated gold price for %s", instrument.value)
            except ScraperError as e:
                failed += 1
                logger.error("Error crawling gold price for %s: %s", instrument.value, e)

            if index < len(instruments) - 1:
                time.sleep(self.scraper.config.get_random_delay())

        logger.info("Crawl complete. Updated: %d, Failed: %d", succeeded, failed)
        return succeeded, failed

    def close(self) -> None:
        """Release the HTTP session and the cache connection."""
        self.scraper.cleanup()
        self.cache.close()


def log_summary_stats(records: Dict[Instrument, GoldPriceRecord]) -> None:
    """
    Log the latest buy/sell prices per instrument.

    Args:
        records: Mapping of instrument to record
    """
    logger.info("=== Gold Price Summary ===")
    logger.info("Instruments with data: %d/%d", len(records), len(ALL_INSTRUMENTS))

    for instrument, record in records.items():
        if not record.dates:
            logger.info("%s: no dates", instrument.display_name)
            continue
        latest = record.dates[-1]
        buy, sell = record.prices_on(latest)
        logger.info("%s (%s): Buy: %.0f | Sell: %.0f", instrument.display_name, latest, buy, sell)
