#!/usr/bin/env python3
"""
FastAPI application exposing gold price records.
Reads from the cache and falls back to an on-demand crawl on a miss.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gold_price_today import __version__
from gold_price_today.config import get_config
from gold_price_today.constants import ALL_INSTRUMENTS, Instrument
from gold_price_today.exceptions import ScraperError
from gold_price_today.services.price_service import GoldPriceService

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    """JSON error body in the form {"error": message}."""
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(service: Optional[GoldPriceService] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        service: Price service; a default one is created lazily when omitted

    Returns:
        Configured FastAPI app
    """
    config = get_config()
    app = FastAPI(title="Gold Price Today", version=__version__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.state.service = service

    def get_service(request: Request) -> GoldPriceService:
        if request.app.state.service is None:
            request.app.state.service = GoldPriceService()
        return request.app.state.service

    @app.get("/health")
    def health_check() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/gold-price")
    def get_gold_prices(request: Request) -> Any:
        """All instruments that produced data; 500 only if none did."""
        records = get_service(request).get_all()

        if not records:
            return error_response(500, "Could not retrieve any gold prices")

        return {instrument.value: record.to_dict() for instrument, record in records.items()}

    @app.get("/api/gold-price/{gold_type}")
    def get_gold_price_by_type(gold_type: str, request: Request) -> Any:
        """One instrument's record."""
        try:
            instrument = Instrument(gold_type)
        except ValueError:
            known = ", ".join(i.value for i in ALL_INSTRUMENTS)
            return error_response(404, f"Unknown gold type '{gold_type}'. Known types: {known}")

        try:
            record = get_service(request).get_or_crawl(instrument)
        except ScraperError as e:
            logger.error("Failed to get gold price for %s: %s", instrument.value, e)
            return error_response(500, f"Failed to crawl gold price: {e}")

        return record.to_dict()

    return app
