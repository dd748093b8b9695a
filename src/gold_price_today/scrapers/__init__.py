"""Web scrapers for gold price chart pages."""

from gold_price_today.scrapers.base import BaseScraper, ScraperConfig, GoldPriceRecord
from gold_price_today.scrapers.gold import GoldChartScraper, build_record, resolve_series

__all__ = ["BaseScraper", "ScraperConfig", "GoldPriceRecord", "GoldChartScraper", "build_record", "resolve_series"]
