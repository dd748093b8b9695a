#!/usr/bin/env python3
"""
Telegram notifications for daily gold prices.
Formats a table comparing today's prices with an earlier day and sends it to a chat.
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, Optional

import requests

from gold_price_today.config import get_config
from gold_price_today.constants import DATE_LABEL_FORMAT, NOTIFICATION_ORDER, Instrument
from gold_price_today.exceptions import ConfigurationError, NotificationError
from gold_price_today.scrapers.base import GoldPriceRecord
from gold_price_today.services.price_service import GoldPriceService

logger = logging.getLogger(__name__)

TELEGRAM_API_BASE = "https://api.telegram.org"

TABLE_HEADER = "| CỬA HÀNG        | MUA VÀO (THAY ĐỔI) | BÁN RA (THAY ĐỔI) |"
TABLE_RULE = "|-----------------|--------------------|--------------------|"


def format_millions(price: float) -> str:
    """Format a VND price in millions with one decimal."""
    return f"{price / 1e6:.1f}"


def format_change(current: float, previous: float) -> str:
    """
    Format the change between two prices as an arrow, amount in millions and percentage.

    Args:
        current: Today's price
        previous: Earlier price (0 when unknown)

    Returns:
        e.g. "↑0.5 (0.6%)", "↓1.0 (1.2%)" or "↔0.0 (0.0%)"
    """
    if previous == 0:
        return "↔0.0 (0.0%)"

    diff = (current - previous) / 1e6
    percent = (current - previous) / previous * 100

    if diff > 0:
        return f"↑{abs(diff):.1f} ({abs(percent):.1f}%)"
    if diff < 0:
        return f"↓{abs(diff):.1f} ({abs(percent):.1f}%)"
    return "↔0.0 (0.0%)"


def format_gold_price_message(
    records: Dict[Instrument, GoldPriceRecord], now: Optional[datetime] = None, compare_days: int = 1
) -> str:
    """
    Build the HTML message for a snapshot of records.

    Prices are looked up by exact date label; a day without a label counts as 0.
    Instruments missing from ``records`` are left out of the table.

    Args:
        records: Mapping of instrument to its latest record
        now: Reference time (defaults to now)
        compare_days: How many days back the comparison day is

    Returns:
        Message text using Telegram's HTML parse mode
    """
    now = now or datetime.now()
    today = now.strftime(DATE_LABEL_FORMAT)
    previous_day = (now - timedelta(days=compare_days)).strftime(DATE_LABEL_FORMAT)

    lines = [
        f"💰 <b>BẢNG GIÁ VÀNG NGÀY {today}</b> 💰",
        "<pre>",
        TABLE_HEADER,
        TABLE_RULE,
    ]

    for instrument in NOTIFICATION_ORDER:
        record = records.get(instrument)
        if record is None:
            continue

        today_buy, today_sell = record.prices_on(today) or (0.0, 0.0)
        previous_buy, previous_sell = record.prices_on(previous_day) or (0.0, 0.0)

        lines.append(
            f"| {instrument.display_name:<15} "
            f"| {format_millions(today_buy):>6} ({format_change(today_buy, previous_buy)}) "
            f"| {format_millions(today_sell):>6} ({format_change(today_sell, previous_sell)}) |"
        )

    lines.append("</pre>")
    lines.append(f"📊 So sánh với ngày {previous_day}")
    lines.append(f"⏰ Cập nhật: {now.strftime('%H:%M %d/%m/%Y')}")

    return "\n".join(lines)


class TelegramNotifier:
    """Sends messages through the Telegram Bot API."""

    def __init__(self, bot_token: Optional[str] = None, chat_id: Optional[str] = None, timeout: int = 10):
        """
        Initialize the notifier.
        Token and chat id default to TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID.
        """
        config = get_config()
        self.bot_token = bot_token or config.TELEGRAM_BOT_TOKEN
        self.chat_id = chat_id or config.TELEGRAM_CHAT_ID
        self.timeout = timeout

        if not self.bot_token or not self.chat_id:
            raise ConfigurationError("TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID must be set")

    def send_message(self, text: str) -> None:
        """
        Send an HTML message to the configured chat.

        Raises:
            NotificationError: If Telegram rejects the message or cannot be reached
        """
        url = f"{TELEGRAM_API_BASE}/bot{self.bot_token}/sendMessage"
        payload = {
            "chat_id": self.chat_id,
            "text": text,
            "parse_mode": "HTML",
        }

        try:
            response = requests.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise NotificationError(f"Failed to reach Telegram: {e}") from e

        if response.status_code != 200:
            raise NotificationError(f"Telegram API error ({response.status_code}): {response.text}")

        logger.info("Gold price notification sent successfully")

    def notify(self, service: GoldPriceService, now: Optional[datetime] = None, compare_days: int = 1) -> str:
        """
        Send the price table for every instrument the service can provide.

        Args:
            service: Source of records (cache with crawl fallback)
            now: Reference time (defaults to now)
            compare_days: How many days back the comparison day is

        Returns:
            The message that was sent

        Raises:
            NotificationError: If sending fails
        """
        records = service.get_all()
        if len(records) < len(NOTIFICATION_ORDER):
            logger.warning("Notification covers %d of %d instruments", len(records), len(NOTIFICATION_ORDER))

        message = format_gold_price_message(records, now=now, compare_days=compare_days)
        self.send_message(message)
        return message
