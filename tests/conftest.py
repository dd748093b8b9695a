"""Pytest configuration and shared fixtures for gold_price_today tests."""
from datetime import datetime
from unittest.mock import Mock, patch

import pytest
import requests

from gold_price_today.constants import Instrument
from gold_price_today.scrapers.base import GoldPriceRecord


@pytest.fixture(autouse=True)
def mock_time_sleep():
    """Automatically patch time.sleep to speed up tests."""
    with patch('time.sleep'):
        yield


@pytest.fixture
def mock_scraper_session():
    """Patch requests.Session to return a mock session for all scrapers."""
    with patch('gold_price_today.scrapers.base.requests.Session') as mock_session_class:
        mock_sess = Mock()
        mock_sess.get = Mock()
        mock_sess.close = Mock()
        mock_sess.headers = Mock()
        mock_sess.headers.update = Mock()
        mock_sess.mount = Mock()
        mock_session_class.return_value = mock_sess
        yield mock_sess


@pytest.fixture
def make_response():
    """Factory for mock HTTP responses."""
    def _make(text="", status_code=200):
        response = Mock()
        response.status_code = status_code
        response.text = text
        response.content = text.encode('utf-8')
        response.encoding = 'utf-8'
        if status_code >= 400:
            response.raise_for_status = Mock(side_effect=requests.HTTPError(response=response))
        else:
            response.raise_for_status = Mock()
        return response
    return _make


@pytest.fixture
def mock_redis():
    """Dict-backed stand-in for a redis client (get/set/ping/close)."""
    store = {}
    client = Mock()
    client.store = store
    client.get = Mock(side_effect=store.get)
    client.set = Mock(side_effect=lambda key, value: store.__setitem__(key, value))
    client.ping = Mock(return_value=True)
    client.close = Mock()
    return client


@pytest.fixture
def sample_chart_script():
    """Chart configuration script as rendered by the gold price box."""
    return """
    $(function () {
        $('#container_bieu_do_gia_vang').highcharts({
            chart: { type: 'line' },
            title: { text: '' },
            xAxis: {
                categories: ["11/10", "12/10", "13/10", "14/10", "15/10", "16/10", "17/10"]
            },
            yAxis: { title: { text: 'Triệu đồng/lượng' } },
            tooltip: { shared: true },
            series: [{
                name: 'Mua vào', color: '#f2a900', data: [118500000, 118700000, 119000000, 119200000, 119200000, 120500000, 121000000]
            }, {
                name: 'Bán ra', color: '#8c6d1f', data: [120500000, 120700000, 121000000, 121200000, 121200000, 122500000, 123000000]
            }]
        });
    });
    """


@pytest.fixture
def sample_chart_html(sample_chart_script):
    """Minimal chart box page with unrelated scripts around the chart script."""
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="UTF-8">
        <script src="https://cdn.24h.com.vn/js/jquery.min.js"></script>
        <script>var categories_loaded = false;</script>
    </head>
    <body>
        <div class="box-bieu-do-gia-vang">
            <div id="container_bieu_do_gia_vang"></div>
        </div>
        <script type="text/javascript">{sample_chart_script}</script>
        <script>window.dataLayer = window.dataLayer || [];</script>
    </body>
    </html>
    """


@pytest.fixture
def sample_html_without_chart():
    """Page whose scripts never contain both chart markers."""
    return """
    <html>
    <body>
        <script>var categories = ["a", "b"];</script>
        <script src="/js/highcharts.js"></script>
        <p>Không có dữ liệu</p>
    </body>
    </html>
    """


@pytest.fixture
def crawl_time():
    """Fixed crawl timestamp."""
    return datetime(2025, 10, 17, 8, 30, 0)


@pytest.fixture
def sample_record(crawl_time):
    """A complete SJC record for the last three days."""
    return GoldPriceRecord(
        instrument_type=Instrument.SJC,
        dates=["15/10", "16/10", "17/10"],
        buy_prices=[119200000.0, 120500000.0, 121000000.0],
        sell_prices=[121200000.0, 122500000.0, 123000000.0],
        updated_at=crawl_time,
    )
