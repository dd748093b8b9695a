#!/usr/bin/env python3
"""
24h.com.vn gold price chart scraper.
Fetches the chart box for each instrument and turns it into a GoldPriceRecord.
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from gold_price_today.scrapers.base import BaseScraper, ScraperConfig, GoldPriceRecord
from gold_price_today.scrapers.highcharts import ChartData, ExtractedSeries, extract_chart_data
from gold_price_today.config import get_config
from gold_price_today.constants import BUY_SERIES_LABEL, SELL_SERIES_LABEL, Instrument

logger = logging.getLogger(__name__)


def resolve_series(series: Sequence[ExtractedSeries]) -> Tuple[List[float], List[float]]:
    """
    Pick the buy and sell price tracks out of the chart series.

    Names are matched exactly against the labels used by the source site.
    Unknown series are ignored; a missing role yields an empty list.

    Args:
        series: Extracted series in order of appearance

    Returns:
        Tuple of (buy prices, sell prices)
    """
    resolved = {}

    for item in series:
        if item.name not in (BUY_SERIES_LABEL, SELL_SERIES_LABEL):
            logger.debug("Ignoring chart series '%s'", item.name)
            continue
        if item.name in resolved:
            logger.warning("Duplicate chart series '%s', keeping the first one", item.name)
            continue
        resolved[item.name] = item.data

    return resolved.get(BUY_SERIES_LABEL, []), resolved.get(SELL_SERIES_LABEL, [])


def build_record(instrument: Instrument, chart: ChartData, crawl_time: datetime) -> GoldPriceRecord:
    """
    Assemble a GoldPriceRecord from extracted chart data.

    Lengths are not truncated or padded; a mismatch is only logged.

    Args:
        instrument: Instrument the chart belongs to
        chart: Extracted chart data
        crawl_time: Timestamp of the crawl

    Returns:
        GoldPriceRecord, possibly with empty price lists
    """
    buy_prices, sell_prices = resolve_series(chart.series)

    record = GoldPriceRecord(
        instrument_type=instrument,
        dates=list(chart.categories),
        buy_prices=list(buy_prices),
        sell_prices=list(sell_prices),
        updated_at=crawl_time,
    )

    if not record.buy_prices or not record.sell_prices:
        logger.warning(
            "%s: missing price series (buy=%d values, sell=%d values)",
            instrument.value, len(record.buy_prices), len(record.sell_prices),
        )
    elif not record.is_aligned:
        logger.warning(
            "%s: series lengths differ (dates=%d, buy=%d, sell=%d)",
            instrument.value, len(record.dates), len(record.buy_prices), len(record.sell_prices),
        )

    return record


class GoldChartScraper(BaseScraper):
    """Gold price chart scraper for 24h.com.vn"""

    def __init__(self, scraper_config: Optional[ScraperConfig] = None) -> None:
        """
        Initialize the chart scraper.

        Args:
            scraper_config: Optional explicit settings; defaults come from app config
        """
        if scraper_config is None:
            config_obj = get_config()
            scraper_config = ScraperConfig(
                url_template=config_obj.SOURCE_URL_TEMPLATE,
                request_timeout=config_obj.REQUEST_TIMEOUT,
                delay_min=config_obj.SCRAPE_DELAY_MIN,
                delay_max=config_obj.SCRAPE_DELAY_MAX,
            )

        super().__init__(scraper_config)

    def source_url(self, instrument: Instrument) -> str:
        """Chart box URL for one instrument."""
        return self.config.url_template.format(instrument=instrument.value)

    def parse_page(self, instrument: Instrument, page: str, crawl_time: datetime) -> GoldPriceRecord:
        """
        Extract chart data from the page and build the record.

        Raises:
            ExtractionError: If the chart script or its categories are missing
        """
        chart = extract_chart_data(page)
        record = build_record(instrument, chart, crawl_time)

        coerced = sum(s.coerced_count for s in chart.series)
        if coerced:
            logger.warning("%s: %d price values were unparsable and set to 0.0", instrument.value, coerced)

        logger.info(
            "Crawled %s: %d dates, %d buy, %d sell",
            instrument.value, len(record.dates), len(record.buy_prices), len(record.sell_prices),
        )
        return record
