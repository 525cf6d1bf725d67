"""
Domain models for historical stock data.

Field names follow the wire format of the stock API: ``t`` is a millisecond
epoch timestamp, ``o/h/l/c`` are prices and ``v`` is volume.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class StockBar:
    """
    One OHLCV record for a time bucket.

    Attributes:
        t: Timestamp in milliseconds since epoch
        o: Opening price
        h: Highest price
        l: Lowest price
        c: Closing price
        v: Trading volume (non-negative)

    The ``l <= min(o, c) <= max(o, c) <= h`` ordering is assumed of upstream
    data and is not checked here.
    """

    t: int
    o: float
    h: float
    l: float
    c: float
    v: float

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "StockBar":
        """
        Build a bar from its wire/store representation.

        Raises:
            KeyError: If a field is missing
            TypeError, ValueError: If a field cannot be coerced to a number
            OverflowError: If ``t`` is an infinite number
        """
        if not isinstance(raw, dict):
            raise TypeError(f"Expected a record object, got {type(raw).__name__}")
        return cls(
            t=int(raw["t"]),
            o=float(raw["o"]),
            h=float(raw["h"]),
            l=float(raw["l"]),
            c=float(raw["c"]),
            v=float(raw["v"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"t": self.t, "o": self.o, "h": self.h, "l": self.l, "c": self.c, "v": self.v}


@dataclass(frozen=True)
class StockPage:
    """A page of records plus the server's "more available" flag."""

    records: Tuple[StockBar, ...] = field(default_factory=tuple)
    has_more: bool = False

    def __len__(self) -> int:
        return len(self.records)
