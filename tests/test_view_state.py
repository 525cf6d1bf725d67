"""
Tests for the view state machine (pure transitions, no I/O)
"""
from __future__ import annotations

import pytest

from stock_dashboard.models import StockBar, StockPage
from stock_dashboard.services import view_state
from stock_dashboard.services.errors import FETCH_FAILED_MESSAGE
from stock_dashboard.services.view_state import (
    DestroyChart,
    FetchPage,
    RenderChart,
    ViewState,
    ViewStatus,
)


def _bars(start: int, count: int):
    return tuple(
        StockBar(t=(start + i) * 60_000, o=100.0 + i, h=101.0 + i, l=99.0 + i, c=100.5 + i, v=1000.0)
        for i in range(count)
    )


def _ready(records=(), page=1, has_more=True, symbol="AAPL", generation=1) -> ViewState:
    return ViewState(
        symbol=symbol, page=page, records=tuple(records), has_more=has_more,
        loading=False, error=None, generation=generation,
    )


class TestInitialState:

    def test_defaults(self):
        state = view_state.initial_state()
        assert state.symbol == "AAPL"
        assert state.page == 1
        assert state.records == ()
        assert state.has_more is True
        assert state.loading is True
        assert state.error is None
        assert state.status == ViewStatus.IDLE

    def test_mount_requests_first_page(self):
        state, effects = view_state.mount()
        assert effects == [FetchPage("AAPL", 1, False, state.generation)]
        assert state.status == ViewStatus.LOADING


class TestSymbolChange:

    @pytest.mark.parametrize("raw,expected", [
        ("aapl", "AAPL"),
        ("Tsla", "TSLA"),
        ("brk.b", "BRK.B"),
        ("MSFT", "MSFT"),
    ])
    def test_symbol_is_uppercased(self, raw, expected):
        state, _ = view_state.change_symbol(_ready(symbol="XXX"), raw)
        assert state.symbol == expected

    def test_changed_symbol_fetches_page_one_replacing(self):
        start = _ready(records=_bars(0, 5), page=3)
        state, effects = view_state.change_symbol(start, "msft")
        assert effects == [FetchPage("MSFT", 1, False, start.generation + 1)]
        assert state.loading is True

    def test_unchanged_symbol_fires_nothing(self):
        start = _ready(symbol="AAPL")
        state, effects = view_state.change_symbol(start, "aapl")
        assert effects == []
        assert state == start

    def test_empty_input_is_forwarded(self):
        state, effects = view_state.change_symbol(_ready(), "")
        assert state.symbol == ""
        assert effects[0].symbol == ""


class TestSubmit:

    def test_submit_fetches_page_one_even_if_symbol_unchanged(self):
        start = _ready(records=_bars(0, 5), page=2)
        _, effects = view_state.submit(start)
        assert effects == [FetchPage("AAPL", 1, False, start.generation + 1)]

    def test_submit_ignored_in_error_state(self):
        start = ViewState(error=FETCH_FAILED_MESSAGE, loading=False, generation=1)
        assert view_state.submit(start).effects == []
        assert view_state.change_symbol(start, "msft").effects == []


class TestLoadMore:

    def test_load_more_requests_next_page_appending(self):
        start = _ready(records=_bars(0, 5), page=2)
        state, effects = view_state.load_more(start)
        assert effects == [FetchPage("AAPL", 3, True, start.generation + 1)]
        assert state.loading is True

    def test_noop_without_more(self):
        start = _ready(has_more=False)
        assert view_state.load_more(start) == (start, [])

    def test_noop_while_loading(self):
        start = ViewState(loading=True, generation=1)
        assert view_state.load_more(start) == (start, [])


class TestApplyResults:

    def test_fresh_page_replaces_records(self):
        state, effects = view_state.submit(_ready(records=_bars(0, 5)))
        new_bars = _bars(100, 2)

        state, effects2 = view_state.apply_page(state, effects[0], StockPage(new_bars, has_more=False))

        assert state.records == new_bars
        assert state.has_more is False
        assert state.loading is False
        assert state.page == 1
        assert effects2 == [RenderChart(new_bars)]

    def test_appended_page_concatenates_in_order(self):
        old = _bars(0, 5)
        new = _bars(5, 5)
        state, effects = view_state.load_more(_ready(records=old, page=1))

        state, _ = view_state.apply_page(state, effects[0], StockPage(new, has_more=True))

        assert state.records == old + new
        assert state.page == 2
        assert state.status == ViewStatus.READY

    def test_failure_sets_message_and_keeps_records(self):
        old = _bars(0, 5)
        state, effects = view_state.load_more(_ready(records=old))

        state, effects2 = view_state.apply_failure(state, effects[0])

        assert state.error == "Failed to fetch data"
        assert state.loading is False
        assert state.records == old
        assert state.status == ViewStatus.ERROR
        assert effects2 == [DestroyChart()]

    def test_stale_response_is_discarded(self):
        """A response for a superseded request does not touch the state"""
        state, first = view_state.change_symbol(_ready(), "aapl2")
        state, second = view_state.change_symbol(state, "msft")

        after, effects = view_state.apply_page(state, first[0], StockPage(_bars(0, 3), True))

        assert after == state
        assert effects == []

        after, _ = view_state.apply_failure(state, first[0])
        assert after.error is None

    def test_chart_effect_follows_committed_state(self):
        ready = _ready(records=_bars(0, 3))
        loading, effects = view_state.submit(ready)
        failed, _ = view_state.apply_failure(loading, effects[0])

        assert view_state.chart_effect(ready) == RenderChart(_bars(0, 3))
        assert view_state.chart_effect(failed) == DestroyChart()


class TestSerialization:

    def test_store_round_trip_keeps_fields(self):
        state = ViewState(
            symbol="TSLA", page=4, records=_bars(0, 2), has_more=False,
            loading=False, error=None, generation=7,
        )
        data = state.to_dict()

        assert data["hasMore"] is False
        assert data["records"][0] == {"t": 0, "o": 100.0, "h": 101.0, "l": 99.0, "c": 100.5, "v": 1000.0}
        assert ViewState.from_dict(data) == state

    def test_empty_store_gives_initial_state(self):
        assert ViewState.from_dict(None) == view_state.initial_state()
