"""Unit tests for configuration and the command line parser."""
import pytest

from gold_price_today.cli import build_parser
from gold_price_today.config import Config
from gold_price_today.exceptions import ConfigurationError


class TestConfig:
    """Tests for Config validation and helpers."""

    def test_defaults_are_valid(self):
        """Test that default values pass validation."""
        config = Config()

        assert config.REQUEST_TIMEOUT > 0
        assert '{instrument}' in config.SOURCE_URL_TEMPLATE

    def test_template_without_placeholder(self):
        """Test that a template without the placeholder is rejected."""
        with pytest.raises(ConfigurationError, match="placeholder"):
            Config(SOURCE_URL_TEMPLATE="https://example.org/box/sjc")

    def test_non_positive_timeout(self):
        """Test that a zero timeout is rejected."""
        with pytest.raises(ConfigurationError, match="REQUEST_TIMEOUT"):
            Config(REQUEST_TIMEOUT=0)

    def test_delay_range(self):
        """Test that an inverted delay range is rejected."""
        with pytest.raises(ConfigurationError, match="SCRAPE_DELAY_MIN"):
            Config(SCRAPE_DELAY_MIN=2.0, SCRAPE_DELAY_MAX=1.0)

    @pytest.mark.parametrize("value", ["7:00", "24:00", "07:60", "seven"])
    def test_bad_notify_time(self, value):
        """Test that NOTIFY_AT must be HH:MM."""
        with pytest.raises(ConfigurationError, match="NOTIFY_AT"):
            Config(NOTIFY_AT=value)

    def test_bad_log_level(self):
        """Test that unknown log levels are rejected."""
        with pytest.raises(ConfigurationError, match="LOG_LEVEL"):
            Config(LOG_LEVEL="VERBOSE")

    def test_allowed_origins(self):
        """Test parsing of the comma separated origin list."""
        config = Config(ALLOW_ORIGINS="https://a.example, https://b.example,")

        assert config.allowed_origins == ["https://a.example", "https://b.example"]


class TestParser:
    """Tests for the command line parser."""

    def test_crawl_types(self):
        """Test repeatable --type for crawl."""
        args = build_parser().parse_args(["crawl", "--type", "sjc", "--type", "pnj_hn"])

        assert args.command == "crawl"
        assert args.type == ["sjc", "pnj_hn"]

    def test_unknown_type_rejected(self):
        """Test that unknown instruments are rejected by argparse."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["crawl", "--type", "gold"])

    def test_serve_flags(self):
        """Test serve options."""
        args = build_parser().parse_args(["--debug", "serve", "--skip-initial-crawl"])

        assert args.debug
        assert args.skip_initial_crawl

    def test_command_required(self):
        """Test that a subcommand is required."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])
