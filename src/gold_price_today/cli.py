#!/usr/bin/env python3
"""
Command line entry point.

    gold-price-today serve      # initial crawl, scheduler and HTTP API
    gold-price-today crawl      # crawl and cache once
    gold-price-today notify     # send the Telegram summary once
"""

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from gold_price_today.api.app import create_app
from gold_price_today.config import configure_logging, get_config
from gold_price_today.constants import ALL_INSTRUMENTS, Instrument
from gold_price_today.exceptions import ConfigurationError, ScraperError
from gold_price_today.services.notifier import TelegramNotifier
from gold_price_today.services.price_service import GoldPriceService, log_summary_stats
from gold_price_today.services.scheduler import PriceScheduler

logger = logging.getLogger(__name__)


def build_notifier() -> Optional[TelegramNotifier]:
    """Create the Telegram notifier, or None when disabled or not configured."""
    if not get_config().TELEGRAM_ENABLED:
        return None
    try:
        return TelegramNotifier()
    except ConfigurationError as e:
        logger.warning("Telegram notifications disabled: %s", e)
        return None


def serve(args: argparse.Namespace) -> int:
    """Run the initial crawl, start the scheduler and serve the API until interrupted."""
    config = get_config()
    service = GoldPriceService()

    try:
        service.cache.ping()
    except ScraperError as e:
        logger.error("%s", e)
        return 1

    if not args.skip_initial_crawl:
        logger.info("Performing initial gold price crawl...")
        service.refresh_all()

    scheduler = PriceScheduler(service, notifier=build_notifier())
    scheduler.start()

    try:
        logger.info("Starting HTTP server on %s:%d", config.API_HOST, config.API_PORT)
        uvicorn.run(create_app(service), host=config.API_HOST, port=config.API_PORT, log_config=None)
    finally:
        logger.info("Initiating graceful shutdown...")
        scheduler.stop()
        service.close()
        logger.info("Application shutdown complete")

    return 0


def crawl(args: argparse.Namespace) -> int:
    """Crawl and cache the selected instruments once."""
    instruments: List[Instrument] = [Instrument(t) for t in args.type] if args.type else ALL_INSTRUMENTS
    service = GoldPriceService()

    try:
        succeeded, _ = service.refresh_all(instruments)
        if succeeded:
            log_summary_stats(service.get_all(instruments))
    finally:
        service.close()

    if succeeded == 0:
        logger.error("Failed to crawl any gold prices")
        return 1
    return 0


def notify(args: argparse.Namespace) -> int:
    """Send the Telegram summary once."""
    config = get_config()
    service = GoldPriceService()

    try:
        notifier = TelegramNotifier()
        notifier.notify(service, compare_days=args.compare_days or config.COMPARE_DAYS)
    except ScraperError as e:
        logger.error("Error sending Telegram notification: %s", e)
        return 1
    finally:
        service.close()

    return 0


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(description="Vietnamese gold price scraper, API and Telegram notifier")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run scheduler and HTTP API")
    serve_parser.add_argument(
        "--skip-initial-crawl",
        action="store_true",
        help="Do not crawl all instruments at startup",
    )
    serve_parser.set_defaults(func=serve)

    crawl_parser = subparsers.add_parser("crawl", help="Crawl and cache prices once")
    crawl_parser.add_argument(
        "--type",
        choices=[i.value for i in ALL_INSTRUMENTS],
        action="append",
        help="Instrument to crawl (repeatable, default: all)",
    )
    crawl_parser.set_defaults(func=crawl)

    notify_parser = subparsers.add_parser("notify", help="Send the Telegram price table once")
    notify_parser.add_argument(
        "--compare-days",
        type=int,
        default=None,
        help="Compare today with this many days back (default: COMPARE_DAYS)",
    )
    notify_parser.set_defaults(func=notify)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.debug else None)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
