#!/usr/bin/env python3
"""
Redis-backed cache for gold price records.
Holds the latest successful crawl per instrument under "<prefix>:<instrument>".
"""

import json
import logging
from typing import Optional

import redis

from gold_price_today.config import get_config
from gold_price_today.constants import Instrument
from gold_price_today.exceptions import CacheError, ValidationError
from gold_price_today.scrapers.base import GoldPriceRecord

logger = logging.getLogger(__name__)


class PriceCache:
    """Stores GoldPriceRecords in Redis as JSON, without expiry."""

    def __init__(self, client: Optional[redis.Redis] = None, key_prefix: Optional[str] = None):
        """
        Initialize the cache.

        Args:
            client: Redis client; created from REDIS_URL when omitted
            key_prefix: Key prefix; defaults to REDIS_KEY_PREFIX
        """
        config = get_config()
        self.client = client if client is not None else redis.from_url(config.REDIS_URL, decode_responses=True)
        self.key_prefix = key_prefix or config.REDIS_KEY_PREFIX

    def key_for(self, instrument: Instrument) -> str:
        """Cache key for one instrument."""
        return f"{self.key_prefix}:{instrument.value}"

    def ping(self) -> None:
        """
        Check the connection.

        Raises:
            CacheError: If Redis is unreachable
        """
        try:
            self.client.ping()
        except redis.RedisError as e:
            raise CacheError(f"Failed to connect to Redis: {e}") from e
        logger.info("Connected to Redis")

    def save(self, record: GoldPriceRecord) -> None:
        """
        Store a record, replacing any previous one for the instrument.

        Raises:
            CacheError: If the write fails
        """
        key = self.key_for(record.instrument_type)
        payload = json.dumps(record.to_dict(), ensure_ascii=False)

        try:
            self.client.set(key, payload)
        except redis.RedisError as e:
            raise CacheError(f"Failed to save {key} to Redis: {e}") from e

        logger.debug("Saved %s (%d dates)", key, len(record.dates))

    def load(self, instrument: Instrument) -> Optional[GoldPriceRecord]:
        """
        Read the cached record for an instrument.

        Returns:
            GoldPriceRecord, or None on a miss or an unreadable entry

        Raises:
            CacheError: If the read fails
        """
        key = self.key_for(instrument)

        try:
            raw = self.client.get(key)
        except redis.RedisError as e:
            raise CacheError(f"Failed to read {key} from Redis: {e}") from e

        if raw is None:
            logger.debug("Cache miss for %s", key)
            return None

        try:
            record = GoldPriceRecord.from_dict(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning("Ignoring unreadable cache entry %s: %s", key, e)
            return None

        if record.instrument_type != instrument:
            logger.warning("Cache entry %s holds data for %s, ignoring", key, record.instrument_type.value)
            return None

        return record

    def close(self) -> None:
        """Close the Redis connection."""
        try:
            self.client.close()
        except redis.RedisError as e:
            logger.error("Redis connection close error: %s", e)
            return
        logger.info("Redis connection closed")
