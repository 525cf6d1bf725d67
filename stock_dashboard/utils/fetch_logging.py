"""
Fetch Logging Utilities
=======================

Structured, single-line JSON logging for stock page fetches, plus short
error IDs that tie the generic UI message to the detailed log entry.
"""

import json
import logging
import uuid
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def generate_error_id() -> str:
    """
    Generate a short, unique error ID for exception tracking.

    Returns:
        8-character uppercase hex string (e.g., "A1B2C3D4")
    """
    return uuid.uuid4().hex[:8].upper()


def build_fetch_meta(
    symbol: str,
    page: int,
    append: bool,
    generation: int,
    outcome: str,
    rows_received: int = 0,
    rows_total: int = 0,
    has_more: Optional[bool] = None,
    min_t: Optional[int] = None,
    max_t: Optional[int] = None,
    error_id: Optional[str] = None,
    error_type: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the structured metadata for one fetch.

    Args:
        symbol: Requested symbol
        page: Requested page
        append: True for "load more", False for a fresh query
        generation: Request generation tag
        outcome: "ok", "error" or "stale"
        rows_received: Bars in the response
        rows_total: Bars held by the view after the commit
        has_more: Server pagination flag
        min_t, max_t: Timestamp range (ms) of the received bars
        error_id: Error ID when outcome is "error"
        error_type: Exception class name when outcome is "error"
    """
    return {
        "symbol": symbol,
        "page": page,
        "append": append,
        "generation": generation,
        "outcome": outcome,
        "rows_received": rows_received,
        "rows_total": rows_total,
        "has_more": has_more,
        "min_t": min_t,
        "max_t": max_t,
        "error_id": error_id,
        "error_type": error_type,
    }


def log_fetch_meta(meta: Dict[str, Any], level: int = logging.INFO) -> None:
    logger.log(level, "fetch_meta %s", json.dumps(meta, sort_keys=True, default=str))
