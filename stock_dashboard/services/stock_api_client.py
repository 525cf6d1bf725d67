"""
Stock API Client
================

Fetches paginated historical bars from the remote stock API:

    GET <base_url>/stock?symbol=<symbol>&page=<page>
    -> {"data": [{"t", "o", "h", "l", "c", "v"}, ...], "hasMore": bool}

Symbol and page are forwarded as given; the API is the only validator.
Failures are raised as ``StockApiError`` subclasses and never retried.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Optional

import requests

from stock_dashboard.config import get_settings
from stock_dashboard.models import StockBar, StockPage
from stock_dashboard.services.errors import (
    StockApiDecodeError,
    StockApiStatusError,
    StockApiTransportError,
)

logger = logging.getLogger(__name__)


class StockApiClient:
    """HTTP client for the paginated ``/stock`` resource."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        path: Optional[str] = None,
        timeout_sec: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.stock_api_url).rstrip("/")
        resolved_path = path or settings.stock_api_path
        self.path = resolved_path if resolved_path.startswith("/") else "/" + resolved_path
        self.timeout_sec = timeout_sec if timeout_sec is not None else settings.stock_api_timeout_sec

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{self.path}"

    def fetch_page(self, symbol: str, page: int) -> StockPage:
        """
        Fetch one page of bars for ``symbol``.

        Args:
            symbol: Ticker symbol, forwarded as-is
            page: 1-based page number, forwarded as-is

        Returns:
            StockPage with records in service order and the continuation flag

        Raises:
            StockApiTransportError: Connection/transport failure
            StockApiStatusError: Non-success HTTP status
            StockApiDecodeError: Body is not a valid page payload
        """
        params = {"symbol": symbol, "page": str(page)}
        start = time.perf_counter()

        try:
            resp = requests.get(self.endpoint, params=params, timeout=self.timeout_sec)
        except requests.RequestException as e:
            logger.error(f"❌ Stock API unreachable: symbol={symbol} page={page}: {e}")
            raise StockApiTransportError(
                symbol=symbol, page=page, reason=f"{type(e).__name__}: {e}"
            ) from e

        elapsed_ms = (time.perf_counter() - start) * 1000

        if resp.status_code >= 400:
            logger.error(
                f"❌ Stock API returned HTTP {resp.status_code}: "
                f"symbol={symbol} page={page} ({elapsed_ms:.1f}ms)"
            )
            raise StockApiStatusError(
                symbol=symbol, page=page, status_code=resp.status_code, body=resp.text
            )

        try:
            payload = resp.json()
        except ValueError as e:
            raise StockApiDecodeError(
                symbol=symbol, page=page, reason=f"Response is not JSON: {e}"
            ) from e

        result = parse_page_payload(payload, symbol=symbol, page=page)
        logger.info(
            f"📈 Fetched {len(result)} bars: symbol={symbol} page={page} status={resp.status_code} "
            f"has_more={result.has_more} ({elapsed_ms:.1f}ms)"
        )
        return result


def parse_page_payload(payload: Any, *, symbol: str, page: int) -> StockPage:
    """
    Decode a ``{"data": [...], "hasMore": bool}`` body into a StockPage.

    A missing or null ``hasMore`` reads as ``False``; any other non-boolean value
    is a decode error.
    """
    if not isinstance(payload, dict):
        raise StockApiDecodeError(
            symbol=symbol, page=page,
            reason=f"Expected a JSON object, got {type(payload).__name__}",
        )

    raw_records = payload.get("data")
    if not isinstance(raw_records, list):
        raise StockApiDecodeError(
            symbol=symbol, page=page,
            reason=f"'data' must be a list, got {type(raw_records).__name__}",
        )

    try:
        records = tuple(StockBar.from_dict(item) for item in raw_records)
    except (KeyError, TypeError, ValueError, OverflowError) as e:
        raise StockApiDecodeError(
            symbol=symbol, page=page, reason=f"Malformed bar record: {e!r}"
        ) from e

    has_more = payload.get("hasMore")
    if has_more is None:
        has_more = False
    if not isinstance(has_more, bool):
        raise StockApiDecodeError(
            symbol=symbol, page=page,
            reason=f"'hasMore' must be a boolean, got {type(has_more).__name__}",
        )

    return StockPage(records=records, has_more=has_more)
