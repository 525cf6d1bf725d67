"""
Stock View Controller
=====================

Runs the view state machine against a stock API client.

Event methods (``mount``, ``change_symbol``, ``submit``, ``load_more``)
apply a transition and perform its fetch synchronously. For overlapping
fetches, use the two halves explicitly:

    request = controller.start_load_more()
    ...
    controller.complete_fetch(request, page)   # or fail_fetch(request, exc)

Every fetch failure ends up as the same user-facing message; the details
go to the log under an error ID.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from stock_dashboard.models import StockPage
from stock_dashboard.services import view_state
from stock_dashboard.services.errors import FETCH_FAILED_MESSAGE, StockApiError
from stock_dashboard.services.view_state import (
    DestroyChart,
    Effect,
    FetchPage,
    RenderChart,
    Transition,
    ViewState,
)
from stock_dashboard.utils.fetch_logging import build_fetch_meta, generate_error_id, log_fetch_meta

logger = logging.getLogger(__name__)


class StockDataSource(Protocol):
    def fetch_page(self, symbol: str, page: int) -> StockPage:
        ...


class StockViewController:
    """
    Owns one view's state and performs its fetches.

    Chart effects are left to whoever renders the committed state; the
    latest one is kept in ``chart_effect``.

    Args:
        client: Anything with ``fetch_page(symbol, page) -> StockPage``
        state: Existing state to resume (e.g. from a ``dcc.Store``);
            None means the view is not mounted yet
    """

    def __init__(self, client: StockDataSource, state: Optional[ViewState] = None) -> None:
        self.client = client
        self.state = state if state is not None else view_state.initial_state()
        self.chart_effect: Optional[Effect] = None

    # ===== Events (fetch performed synchronously) =====

    def mount(self, symbol: Optional[str] = None) -> ViewState:
        return self._run(view_state.mount(symbol))

    def change_symbol(self, raw_symbol: Optional[str]) -> ViewState:
        return self._run(view_state.change_symbol(self.state, raw_symbol))

    def submit(self) -> ViewState:
        return self._run(view_state.submit(self.state))

    def load_more(self) -> ViewState:
        return self._run(view_state.load_more(self.state))

    # ===== Split fetch API =====

    def start_submit(self) -> Optional[FetchPage]:
        return self._start(view_state.submit(self.state))

    def start_change_symbol(self, raw_symbol: Optional[str]) -> Optional[FetchPage]:
        return self._start(view_state.change_symbol(self.state, raw_symbol))

    def start_load_more(self) -> Optional[FetchPage]:
        """Begin a "load more" fetch; None when the guard rejects it."""
        return self._start(view_state.load_more(self.state))

    def complete_fetch(self, request: FetchPage, result: StockPage) -> ViewState:
        transition = view_state.apply_page(self.state, request, result)
        stale = not transition.effects
        log_fetch_meta(build_fetch_meta(
            symbol=request.symbol,
            page=request.page,
            append=request.append,
            generation=request.generation,
            outcome="stale" if stale else "ok",
            rows_received=len(result.records),
            rows_total=len(transition.state.records),
            has_more=result.has_more,
            min_t=min((bar.t for bar in result.records), default=None),
            max_t=max((bar.t for bar in result.records), default=None),
        ))
        self._apply(transition)
        return self.state

    def fail_fetch(self, request: FetchPage, exc: Exception) -> ViewState:
        error_id = generate_error_id()
        logger.error(
            f"❌ [{error_id}] Fetch failed: symbol={request.symbol} page={request.page} "
            f"append={request.append}: {type(exc).__name__}: {exc}"
        )
        transition = view_state.apply_failure(self.state, request, FETCH_FAILED_MESSAGE)
        log_fetch_meta(
            build_fetch_meta(
                symbol=request.symbol,
                page=request.page,
                append=request.append,
                generation=request.generation,
                outcome="error" if transition.effects else "stale",
                rows_total=len(transition.state.records),
                error_id=error_id,
                error_type=type(exc).__name__,
            ),
            level=logging.WARNING,
        )
        self._apply(transition)
        return self.state

    # ===== Internals =====

    def _start(self, transition: Transition) -> Optional[FetchPage]:
        fetches: List[FetchPage] = [e for e in transition.effects if isinstance(e, FetchPage)]
        self._apply(transition)
        return fetches[0] if fetches else None

    def _run(self, transition: Transition) -> ViewState:
        request = self._start(transition)
        if request is not None:
            self._fetch(request)
        return self.state

    def _fetch(self, request: FetchPage) -> None:
        logger.info(
            f"🔄 Fetching page: symbol={request.symbol} page={request.page} "
            f"append={request.append} generation={request.generation}"
        )
        try:
            result = self.client.fetch_page(request.symbol, request.page)
        except StockApiError as e:
            self.fail_fetch(request, e)
        else:
            self.complete_fetch(request, result)

    def _apply(self, transition: Transition) -> None:
        self.state = transition.state
        for effect in transition.effects:
            if isinstance(effect, (RenderChart, DestroyChart)):
                self.chart_effect = effect
