"""Unit tests for the gold chart scraper, series resolver and record builder."""
import logging
from datetime import datetime
from unittest.mock import Mock, patch

import pytest
import requests

from gold_price_today.constants import Instrument
from gold_price_today.config import Config
from gold_price_today.exceptions import CategoriesNotFoundError, NetworkError, ScriptNotFoundError
from gold_price_today.scrapers.base import ScraperConfig
from gold_price_today.scrapers.gold import GoldChartScraper, build_record, resolve_series
from gold_price_today.scrapers.highcharts import ChartData, ExtractedSeries


def make_scraper():
    """Scraper with explicit settings, independent of environment."""
    return GoldChartScraper(ScraperConfig(url_template="https://example.com/chart/{instrument}"))


class TestResolveSeries:
    """Tests for resolve_series."""

    def test_buy_and_sell(self):
        """Test that series are mapped by exact label."""
        series = [
            ExtractedSeries(name="Bán ra", color="#111", data=[105.0]),
            ExtractedSeries(name="Mua vào", color="#000", data=[100.0]),
        ]

        assert resolve_series(series) == ([100.0], [105.0])

    def test_unknown_series_ignored(self):
        """Test that extra chart series do not affect the result."""
        series = [
            ExtractedSeries(name="Trung bình", color="#222", data=[1.0]),
            ExtractedSeries(name="Mua vào", color="#000", data=[100.0]),
        ]

        assert resolve_series(series) == ([100.0], [])

    def test_match_is_case_sensitive(self):
        """Test that label matching is exact."""
        series = [ExtractedSeries(name="mua vào", color="#000", data=[100.0])]

        assert resolve_series(series) == ([], [])

    def test_duplicate_label_keeps_first(self):
        """Test that the first occurrence of a label wins."""
        series = [
            ExtractedSeries(name="Mua vào", color="#000", data=[100.0]),
            ExtractedSeries(name="Mua vào", color="#000", data=[999.0]),
        ]

        assert resolve_series(series)[0] == [100.0]


class TestBuildRecord:
    """Tests for build_record."""

    def test_builds_aligned_record(self, crawl_time):
        """Test the record built from well-formed chart data."""
        chart = ChartData(
            categories=["01/01", "02/01"],
            series=[
                ExtractedSeries(name="Mua vào", color="#000", data=[100.0, 110.0]),
                ExtractedSeries(name="Bán ra", color="#111", data=[105.0, 115.0]),
            ],
        )

        record = build_record(Instrument.DOJI_HN, chart, crawl_time)

        assert record.instrument_type == Instrument.DOJI_HN
        assert record.dates == ["01/01", "02/01"]
        assert record.buy_prices == [100.0, 110.0]
        assert record.sell_prices == [105.0, 115.0]
        assert record.updated_at == crawl_time
        assert record.is_aligned

    def test_no_matching_series_is_degraded_success(self, crawl_time):
        """Test that categories without known series give empty price lists."""
        chart = ChartData(
            categories=["01/01", "02/01"],
            series=[ExtractedSeries(name="Other", color="#000", data=[1.0, 2.0])],
        )

        record = build_record(Instrument.SJC, chart, crawl_time)

        assert record.dates == ["01/01", "02/01"]
        assert record.buy_prices == []
        assert record.sell_prices == []

    def test_mismatched_lengths_not_truncated(self, crawl_time):
        """Test that arrays are stored as extracted."""
        chart = ChartData(
            categories=["01/01", "02/01", "03/01"],
            series=[
                ExtractedSeries(name="Mua vào", color="#000", data=[100.0, 110.0]),
                ExtractedSeries(name="Bán ra", color="#111", data=[105.0, 115.0, 125.0]),
            ],
        )

        record = build_record(Instrument.SJC, chart, crawl_time)

        assert len(record.buy_prices) == 2
        assert len(record.sell_prices) == 3
        assert not record.is_aligned


class TestParsePage:
    """Tests for GoldChartScraper.parse_page."""

    def test_buy_and_sell_chart_script(self, mock_scraper_session, crawl_time):  # pylint: disable=unused-argument
        """Test a minimal buy and sell chart script end to end."""
        page = (
            "<html><body><script>$('#c').highcharts({"
            "xAxis: {categories: [\"01/01\",\"02/01\"]},"
            "series: [{name: 'Mua vào', color: '#000', data: [100,110]},"
            "{name: 'Bán ra', color: '#111', data: [105,115]}]"
            "});</script></body></html>"
        )

        record = make_scraper().parse_page(Instrument.PNJ_HN, page, crawl_time)

        assert record.dates == ["01/01", "02/01"]
        assert record.buy_prices == [100.0, 110.0]
        assert record.sell_prices == [105.0, 115.0]

    def test_page_without_chart(self, mock_scraper_session, sample_html_without_chart, crawl_time):  # pylint: disable=unused-argument
        """Test that no record is produced when the chart script is missing."""
        with pytest.raises(ScriptNotFoundError):
            make_scraper().parse_page(Instrument.SJC, sample_html_without_chart, crawl_time)

    def test_chart_without_categories(self, mock_scraper_session, crawl_time):  # pylint: disable=unused-argument
        """Test that no record is produced when the chart has no categories array."""
        page = (
            "<html><body><script>$('#c').highcharts({"
            "categories_label: 'none',"
            "series: [{name: 'Mua vào', color: '#000', data: [100]}]"
            "});</script></body></html>"
        )

        with pytest.raises(CategoriesNotFoundError):
            make_scraper().parse_page(Instrument.SJC, page, crawl_time)

    def test_unparsable_value_logging(self, mock_scraper_session, crawl_time, caplog):  # pylint: disable=unused-argument
        """Test that a zeroed value is reported once per series and once per instrument."""
        page = (
            "<html><body><script>$('#c').highcharts({"
            "xAxis: {categories: [\"01/01\",\"02/01\"]},"
            "series: [{name: 'Mua vào', color: '#000', data: [100,abc]},"
            "{name: 'Bán ra', color: '#111', data: [105,115]}]"
            "});</script></body></html>"
        )
        caplog.set_level(logging.WARNING)

        record = make_scraper().parse_page(Instrument.SJC, page, crawl_time)

        assert record.buy_prices == [100.0, 0.0]
        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 2
        assert "Series 'Mua vào'" in warnings[0]
        assert warnings[1].startswith("sjc: 1 price values")


class TestCrawl:
    """Tests for GoldChartScraper.crawl."""

    def test_source_url(self, mock_scraper_session):  # pylint: disable=unused-argument
        """Test the per-instrument URL."""
        assert make_scraper().source_url(Instrument.PNJ_TP_HCM) == "https://example.com/chart/pnj_tp_hcml"

    def test_default_url_template(self, mock_scraper_session):  # pylint: disable=unused-argument
        """Test the default source URL from app config."""
        url = GoldChartScraper().source_url(Instrument.SJC)

        assert "/box_bieu_do_gia_vang/index/sjc/0/0" in url

    def test_default_settings_from_app_config(self, mock_scraper_session):  # pylint: disable=unused-argument
        """Test that URL template, timeout and delays are taken from app config."""
        app_config = Config(
            SOURCE_URL_TEMPLATE="https://example.org/box/{instrument}",
            REQUEST_TIMEOUT=7,
            SCRAPE_DELAY_MIN=0.2,
            SCRAPE_DELAY_MAX=0.4,
        )

        with patch('gold_price_today.scrapers.gold.get_config', return_value=app_config):
            scraper = GoldChartScraper()

        assert scraper.source_url(Instrument.DOJI_HN) == "https://example.org/box/doji_hn"
        assert scraper.config.request_timeout == 7
        for _ in range(20):
            assert 0.2 <= scraper.config.get_random_delay() <= 0.4

    def test_crawl_success(self, mock_scraper_session, make_response, sample_chart_html):
        """Test crawling a chart page."""
        mock_scraper_session.get = Mock(return_value=make_response(sample_chart_html))

        record = make_scraper().crawl(Instrument.SJC)

        mock_scraper_session.get.assert_called_once_with("https://example.com/chart/sjc", timeout=10)
        assert record.instrument_type == Instrument.SJC
        assert len(record.dates) == 7
        assert record.buy_prices[-1] == 121000000.0
        assert record.sell_prices[-1] == 123000000.0
        assert isinstance(record.updated_at, datetime)

    def test_crawl_is_idempotent(self, mock_scraper_session, make_response, sample_chart_html):
        """Test that crawling an unchanged page twice differs only in updated_at."""
        mock_scraper_session.get = Mock(return_value=make_response(sample_chart_html))
        scraper = make_scraper()

        first = scraper.crawl(Instrument.DOJI_SG)
        second = scraper.crawl(Instrument.DOJI_SG)

        assert first.instrument_type == second.instrument_type
        assert first.dates == second.dates
        assert first.buy_prices == second.buy_prices
        assert first.sell_prices == second.sell_prices

    def test_crawl_http_error(self, mock_scraper_session, make_response):
        """Test that a non-200 status aborts the crawl."""
        mock_scraper_session.get = Mock(return_value=make_response("Not found", status_code=404))

        with pytest.raises(NetworkError):
            make_scraper().crawl(Instrument.SJC)

    def test_crawl_timeout(self, mock_scraper_session):
        """Test that a timeout aborts the crawl."""
        mock_scraper_session.get = Mock(side_effect=requests.Timeout())

        with pytest.raises(NetworkError, match="Timeout"):
            make_scraper().crawl(Instrument.SJC)

    def test_crawl_non_html_body(self, mock_scraper_session, make_response):
        """Test that a body without the chart script aborts the crawl."""
        mock_scraper_session.get = Mock(return_value=make_response('{"status": "error"}'))

        with pytest.raises(ScriptNotFoundError):
            make_scraper().crawl(Instrument.SJC)
