#!/usr/bin/env python3
"""
Recurring jobs: periodic crawl of all instruments and the daily Telegram summary.
"""

import logging
import threading
from typing import Optional

import schedule

from gold_price_today.config import get_config
from gold_price_today.exceptions import ScraperError
from gold_price_today.services.notifier import TelegramNotifier
from gold_price_today.services.price_service import GoldPriceService

logger = logging.getLogger(__name__)


class PriceScheduler:
    """Runs crawl and notification jobs on a background thread."""

    def __init__(
        self,
        service: GoldPriceService,
        notifier: Optional[TelegramNotifier] = None,
        crawl_interval_hours: Optional[int] = None,
        notify_at: Optional[str] = None,
        compare_days: Optional[int] = None,
    ):
        """
        Initialize the scheduler and register jobs.

        Args:
            service: Service used for crawling and snapshots
            notifier: Telegram notifier; notification job is skipped when None
            crawl_interval_hours: Hours between crawls (default CRAWL_INTERVAL_HOURS)
            notify_at: Daily notification time "HH:MM" (default NOTIFY_AT)
            compare_days: Comparison distance for the summary (default COMPARE_DAYS)
        """
        config = get_config()
        self.service = service
        self.notifier = notifier
        self.crawl_interval_hours = crawl_interval_hours or config.CRAWL_INTERVAL_HOURS
        self.notify_at = notify_at or config.NOTIFY_AT
        self.compare_days = compare_days or config.COMPARE_DAYS

        self.scheduler = schedule.Scheduler()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

        self.scheduler.every(self.crawl_interval_hours).hours.do(self.crawl_job)
        logger.info("Crawl job scheduled every %d hours", self.crawl_interval_hours)

        if self.notifier is not None:
            self.scheduler.every().day.at(self.notify_at).do(self.notify_job)
            logger.info("Telegram job scheduled daily at %s", self.notify_at)
        else:
            logger.info("Telegram notifications disabled")

    def crawl_job(self) -> None:
        """Crawl every instrument and store the results."""
        logger.info("Running scheduled gold price crawl job...")
        try:
            self.service.refresh_all()
        except Exception as e:
            # An escaping error would end the job loop thread
            logger.exception("Scheduled crawl job failed: %s", e)

    def notify_job(self) -> None:
        """Send the daily price table."""
        logger.info("Running scheduled Telegram notification job...")
        try:
            self.notifier.notify(self.service, compare_days=self.compare_days)
        except ScraperError as e:
            logger.error("Error sending Telegram notification: %s", e)
        except Exception as e:
            logger.exception("Scheduled notification job failed: %s", e)

    def run_pending(self) -> None:
        """Run jobs that are due."""
        self.scheduler.run_pending()

    def _run(self, poll_interval: float) -> None:
        while not self._stop_event.is_set():
            self.run_pending()
            self._stop_event.wait(poll_interval)

    def start(self, poll_interval: float = 30.0) -> None:
        """Start the job loop on a daemon thread."""
        if self._thread is not None and self._thread.is_alive():
            logger.warning("Scheduler already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, args=(poll_interval,), name="price-scheduler", daemon=True)
        self._thread.start()
        logger.info("Scheduler started")

    def stop(self, timeout: float = 5.0) -> None:
        """Stop the job loop and wait for the thread to exit."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        self.scheduler.clear()
        logger.info("Scheduler stopped")
