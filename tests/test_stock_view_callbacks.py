"""
Tests for the stock view callback bodies
=========================================

``handle_view_event`` and ``render_view`` are called directly, without a
Dash server.
"""
from unittest.mock import Mock, call

import pytest

pytest.importorskip("dash")

from stock_dashboard.callbacks.stock_view_callbacks import (  # noqa: E402
    EMPTY_FIGURE,
    HIDDEN,
    LOAD_MORE_CLICK,
    SUBMIT_CLICK,
    SYMBOL_SUBMIT,
    SYMBOL_VALUE,
    VISIBLE,
    default_chart_config,
    handle_view_event,
    render_view,
)
from stock_dashboard.config import reset_settings  # noqa: E402
from stock_dashboard.models import StockBar, StockPage  # noqa: E402
from stock_dashboard.services.errors import StockApiTransportError  # noqa: E402
from stock_dashboard.services.view_state import ViewState, initial_state  # noqa: E402


def _bars(start: int, count: int):
    return tuple(
        StockBar(t=1700000000000 + (start + i) * 86_400_000, o=50.0, h=55.0, l=48.0, c=53.0, v=10.0)
        for i in range(count)
    )


def _ready_store(records=(), has_more=True, symbol="AAPL", page=1):
    return ViewState(symbol=symbol, page=page, records=tuple(records), has_more=has_more,
                     loading=False, generation=1).to_dict()


class TestHandleViewEvent:

    def test_page_load_mounts_and_fetches(self):
        client = Mock()
        client.fetch_page.return_value = StockPage(_bars(0, 5), True)

        data, symbol = handle_view_event([], "AAPL", initial_state().to_dict(), client)

        client.fetch_page.assert_called_once_with("AAPL", 1)
        assert symbol == "AAPL"
        assert len(data["records"]) == 5
        assert data["loading"] is False

    def test_typing_uppercases_and_fetches(self):
        client = Mock()
        client.fetch_page.return_value = StockPage(_bars(0, 2), False)

        data, symbol = handle_view_event([SYMBOL_VALUE], "tsla", _ready_store(), client)

        client.fetch_page.assert_called_once_with("TSLA", 1)
        assert symbol == "TSLA"
        assert data["symbol"] == "TSLA"

    @pytest.mark.parametrize("trigger", [SUBMIT_CLICK, SYMBOL_SUBMIT])
    def test_submit_refetches_same_symbol(self, trigger):
        client = Mock()
        client.fetch_page.return_value = StockPage(_bars(9, 1), True)

        data, _ = handle_view_event([trigger], "AAPL", _ready_store(_bars(0, 5), page=3), client)

        client.fetch_page.assert_called_once_with("AAPL", 1)
        assert data["page"] == 1
        assert len(data["records"]) == 1

    def test_load_more_appends(self):
        client = Mock()
        client.fetch_page.return_value = StockPage(_bars(5, 5), False)

        data, _ = handle_view_event([LOAD_MORE_CLICK], "AAPL", _ready_store(_bars(0, 5)), client)

        assert client.fetch_page.call_args == call("AAPL", 2)
        assert len(data["records"]) == 10
        assert data["hasMore"] is False

    def test_fetch_failure_is_stored(self):
        client = Mock()
        client.fetch_page.side_effect = StockApiTransportError(symbol="AAPL", page=1, reason="down")

        data, _ = handle_view_event([SUBMIT_CLICK], "AAPL", _ready_store(), client)

        assert data["error"] == "Failed to fetch data"
        assert data["loading"] is False


class TestRenderView:

    def test_initial_state_hides_chart_and_load_more(self):
        figure, chart_style, load_more_style, main_style, error, error_style = render_view(
            initial_state().to_dict()
        )
        assert figure == EMPTY_FIGURE
        assert chart_style == HIDDEN
        assert load_more_style == HIDDEN
        assert main_style == VISIBLE
        assert error is None
        assert error_style == HIDDEN

    def test_ready_state_shows_chart_and_load_more(self):
        figure, chart_style, load_more_style, main_style, _, _ = render_view(
            _ready_store(_bars(0, 5), has_more=True)
        )
        assert chart_style == VISIBLE
        assert load_more_style == VISIBLE
        assert main_style == VISIBLE
        assert len(figure.data[0].open) == 5

    def test_load_more_hidden_without_more(self):
        _, _, load_more_style, _, _, _ = render_view(_ready_store(_bars(0, 5), has_more=False))
        assert load_more_style == HIDDEN

    def test_error_replaces_whole_view(self):
        store = ViewState(records=_bars(0, 5), loading=False, error="Failed to fetch data",
                          generation=2).to_dict()

        figure, chart_style, load_more_style, main_style, error, error_style = render_view(store)

        assert main_style == HIDDEN
        assert error_style == VISIBLE
        assert error == "Failed to fetch data"
        assert figure == EMPTY_FIGURE

    def test_chart_theme_comes_from_settings(self, monkeypatch):
        monkeypatch.setenv("CHART_THEME", "light")
        reset_settings()
        try:
            config = default_chart_config()
            figure, _, _, _, _, _ = render_view(_ready_store(_bars(0, 2)))
        finally:
            monkeypatch.delenv("CHART_THEME")
            reset_settings()

        assert config.theme_mode == "light"
        assert (config.width, config.height) == (600, 300)
        assert figure.layout.paper_bgcolor == "#ffffff"
