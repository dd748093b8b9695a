"""REST API for cached gold price records."""

from gold_price_today.api.app import create_app

__all__ = ["create_app"]
