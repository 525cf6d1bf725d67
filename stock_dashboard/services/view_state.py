"""
View State Machine
==================

State of the stock view and the pure transitions between its states:

    IDLE -> LOADING -> READY
                    -> ERROR   (terminal until remount)

Every transition returns a ``Transition``: the new state plus the effects
the caller must perform (fetch a page, render or destroy the chart).
Nothing in this module touches the network or the chart.

Each fetch is tagged with the state's ``generation``. Starting a new fetch
bumps the generation, so completions of superseded fetches are discarded.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Union

from stock_dashboard.models import StockBar, StockPage
from stock_dashboard.services.errors import FETCH_FAILED_MESSAGE

logger = logging.getLogger(__name__)

DEFAULT_SYMBOL = "AAPL"


class ViewStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class FetchPage:
    """Effect: fetch ``page`` for ``symbol`` and report back under ``generation``."""

    symbol: str
    page: int
    append: bool
    generation: int


@dataclass(frozen=True)
class RenderChart:
    """Effect: rebuild the chart from the full record sequence."""

    records: Tuple[StockBar, ...]


@dataclass(frozen=True)
class DestroyChart:
    """Effect: remove the chart; the error view replaces the normal UI."""


Effect = Union[FetchPage, RenderChart, DestroyChart]


class Transition(NamedTuple):
    state: "ViewState"
    effects: List[Effect]


@dataclass(frozen=True)
class ViewState:
    """
    Immutable UI state of the stock view.

    Attributes:
        symbol: Uppercase ticker symbol
        page: Last successfully fetched page (1-based)
        records: Bars in fetch arrival order
        has_more: Server pagination flag from the most recent response
        loading: True strictly while a fetch is in flight
        error: User-facing error message; suppresses normal rendering
        generation: Tag of the most recently started fetch
    """

    symbol: str = DEFAULT_SYMBOL
    page: int = 1
    records: Tuple[StockBar, ...] = field(default_factory=tuple)
    has_more: bool = True
    loading: bool = True
    error: Optional[str] = None
    generation: int = 0

    @property
    def status(self) -> ViewStatus:
        if self.error is not None:
            return ViewStatus.ERROR
        if self.generation == 0:
            return ViewStatus.IDLE
        if self.loading:
            return ViewStatus.LOADING
        return ViewStatus.READY

    @property
    def can_load_more(self) -> bool:
        return self.error is None and self.has_more and not self.loading

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe form, suitable for a ``dcc.Store``."""
        return {
            "symbol": self.symbol,
            "page": self.page,
            "records": [bar.to_dict() for bar in self.records],
            "hasMore": self.has_more,
            "loading": self.loading,
            "error": self.error,
            "generation": self.generation,
        }

    @classmethod
    def from_dict(cls, raw: Optional[Dict[str, Any]]) -> "ViewState":
        if not raw:
            return initial_state()
        return cls(
            symbol=str(raw.get("symbol", DEFAULT_SYMBOL)),
            page=int(raw.get("page", 1)),
            records=tuple(StockBar.from_dict(r) for r in raw.get("records") or []),
            has_more=bool(raw.get("hasMore", True)),
            loading=bool(raw.get("loading", True)),
            error=raw.get("error"),
            generation=int(raw.get("generation", 0)),
        )


def normalize_symbol(raw: Optional[str]) -> str:
    """Uppercase user input. No other validation is applied."""
    if raw is None:
        return ""
    return str(raw).upper()


def initial_state(symbol: Optional[str] = None) -> ViewState:
    """Defaults at mount: loading, no records, more assumed available."""
    return ViewState(symbol=normalize_symbol(symbol) if symbol else DEFAULT_SYMBOL)


def _begin_fetch(state: ViewState, page: int, append: bool) -> Transition:
    generation = state.generation + 1
    new_state = replace(state, loading=True, generation=generation)
    return Transition(new_state, [FetchPage(state.symbol, page, append, generation)])


def mount(symbol: Optional[str] = None) -> Transition:
    """Create a fresh view and request page 1."""
    return _begin_fetch(initial_state(symbol), page=1, append=False)


def change_symbol(state: ViewState, raw_symbol: Optional[str]) -> Transition:
    """
    Store the uppercased symbol; fetch page 1 only if the value changed.
    """
    if state.error is not None:
        return Transition(state, [])

    symbol = normalize_symbol(raw_symbol)
    if symbol == state.symbol:
        return Transition(state, [])

    return _begin_fetch(replace(state, symbol=symbol), page=1, append=False)


def submit(state: ViewState) -> Transition:
    """Explicit resubmit: always re-fetch page 1, even for an unchanged symbol."""
    if state.error is not None:
        return Transition(state, [])
    return _begin_fetch(state, page=1, append=False)


def load_more(state: ViewState) -> Transition:
    """Fetch the next page. No-op unless ``has_more`` and not ``loading``."""
    if not state.can_load_more:
        return Transition(state, [])
    return _begin_fetch(state, page=state.page + 1, append=True)


def _is_stale(state: ViewState, request: FetchPage) -> bool:
    if request.generation != state.generation:
        logger.debug(
            f"Discarding stale response: symbol={request.symbol} page={request.page} "
            f"generation={request.generation} current={state.generation}"
        )
        return True
    return False


def apply_page(state: ViewState, request: FetchPage, result: StockPage) -> Transition:
    """Commit a successful fetch: replace or append records and advance ``page``."""
    if _is_stale(state, request):
        return Transition(state, [])

    records = state.records + result.records if request.append else tuple(result.records)
    new_state = replace(
        state,
        records=records,
        has_more=result.has_more,
        page=request.page,
        loading=False,
    )
    return Transition(new_state, [RenderChart(records)])


def apply_failure(
    state: ViewState,
    request: FetchPage,
    message: str = FETCH_FAILED_MESSAGE,
) -> Transition:
    """Commit a failed fetch. Records already accumulated are kept."""
    if _is_stale(state, request):
        return Transition(state, [])

    new_state = replace(state, error=message, loading=False)
    return Transition(new_state, [DestroyChart()])


def chart_effect(state: ViewState) -> Effect:
    """The chart effect that brings a chart in line with ``state``."""
    if state.error is not None:
        return DestroyChart()
    return RenderChart(state.records)
