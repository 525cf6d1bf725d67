from __future__ import annotations

from typing import Optional

# Single user-facing message for every fetch failure.
FETCH_FAILED_MESSAGE = "Failed to fetch data"


class StockApiError(Exception):
    """Raised when a page of stock data cannot be fetched."""

    def __init__(
        self,
        *,
        symbol: str,
        page: int,
        reason: str,
    ) -> None:
        self.symbol = symbol
        self.page = page
        self.reason = reason
        super().__init__(f"{reason} for symbol={symbol!r} page={page}")


class StockApiTransportError(StockApiError):
    """Network or transport level failure (connection refused, timeout, ...)."""


class StockApiStatusError(StockApiError):
    """The API answered with a non-success HTTP status."""

    def __init__(
        self,
        *,
        symbol: str,
        page: int,
        status_code: int,
        body: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(symbol=symbol, page=page, reason=f"HTTP {status_code}")


class StockApiDecodeError(StockApiError):
    """The API answered, but the payload is not a valid page of bars."""
