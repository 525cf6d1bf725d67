"""
Stock View Callbacks
====================

Two callbacks drive the view:

1. ``dispatch``: mount / symbol input / submit / "Load More" -> runs the
   controller and writes the new state to the store. While it runs, the
   loading indicator is shown and "Load More" is disabled.
2. ``render``: store -> chart figure and visibility of every view part.

The callback bodies delegate to ``handle_view_event`` and ``render_view``
so they can be exercised without a Dash server.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

from dash import Input, Output, State, ctx

from stock_dashboard.config import CHART_HEIGHT, CHART_WIDTH, get_settings
from stock_dashboard.services.chart_sink import ChartSinkAdapter
from stock_dashboard.services.stock_api_client import StockApiClient
from stock_dashboard.services.stock_view_controller import StockDataSource, StockViewController
from stock_dashboard.services.view_state import DestroyChart, ViewState, chart_effect
from stock_dashboard.ui_ids import StockView
from visualization.plotly import CandlestickChartConfig

logger = logging.getLogger(__name__)

HIDDEN = {"display": "none"}
VISIBLE = {"display": "block"}
EMPTY_FIGURE = {"data": [], "layout": {}}

SYMBOL_VALUE = f"{StockView.SYMBOL_INPUT}.value"
SYMBOL_SUBMIT = f"{StockView.SYMBOL_INPUT}.n_submit"
SUBMIT_CLICK = f"{StockView.SUBMIT_BUTTON}.n_clicks"
LOAD_MORE_CLICK = f"{StockView.LOAD_MORE_BUTTON}.n_clicks"


def default_chart_config() -> CandlestickChartConfig:
    """Fixed-size chart in the theme picked by ``CHART_THEME``."""
    return CandlestickChartConfig(
        width=CHART_WIDTH,
        height=CHART_HEIGHT,
        theme_mode=get_settings().chart_theme,
    )


def handle_view_event(
    triggered: Iterable[str],
    symbol_value: Optional[str],
    store_data: Optional[Dict[str, Any]],
    client: StockDataSource,
) -> Tuple[Dict[str, Any], str]:
    """
    Apply the triggering UI events to the stored state.

    Args:
        triggered: Triggering prop ids ("<id>.<prop>"); empty on page load
        symbol_value: Current text of the symbol input
        store_data: Serialized ViewState
        client: Stock data source

    Returns:
        (new serialized state, value to show in the symbol input)
    """
    triggered = set(triggered)
    stored = ViewState.from_dict(store_data)

    if not triggered:
        controller = StockViewController(client)
        state = controller.mount(stored.symbol)
        return state.to_dict(), state.symbol

    controller = StockViewController(client, state=stored)

    if SYMBOL_VALUE in triggered:
        controller.change_symbol(symbol_value)
    if SUBMIT_CLICK in triggered or SYMBOL_SUBMIT in triggered:
        controller.submit()
    if LOAD_MORE_CLICK in triggered:
        controller.load_more()

    state = controller.state
    return state.to_dict(), state.symbol


def render_view(
    store_data: Optional[Dict[str, Any]],
    chart_config: Optional[CandlestickChartConfig] = None,
) -> Tuple[Any, Dict[str, str], Dict[str, str], Dict[str, str], Optional[str], Dict[str, str]]:
    """
    Project the stored state onto the view.

    Returns:
        (figure, chart container style, "Load More" style,
         main view style, error text, error view style)
    """
    state = ViewState.from_dict(store_data)
    effect = chart_effect(state)

    if isinstance(effect, DestroyChart):
        return EMPTY_FIGURE, HIDDEN, HIDDEN, HIDDEN, state.error, VISIBLE

    with ChartSinkAdapter(chart_config or default_chart_config()) as sink:
        figure = sink.update(effect.records)

    chart_style = VISIBLE if figure is not None else HIDDEN
    load_more_style = VISIBLE if state.can_load_more else HIDDEN
    return (
        figure if figure is not None else EMPTY_FIGURE,
        chart_style,
        load_more_style,
        VISIBLE,
        None,
        HIDDEN,
    )


def register_stock_view_callbacks(app, client: Optional[StockDataSource] = None,
                                  chart_config: Optional[CandlestickChartConfig] = None):
    """Register callbacks for the stock view."""

    data_source = client or StockApiClient()

    @app.callback(
        Output(StockView.STATE_STORE, "data"),
        Output(StockView.SYMBOL_INPUT, "value"),
        Input(StockView.SYMBOL_INPUT, "value"),
        Input(StockView.SYMBOL_INPUT, "n_submit"),
        Input(StockView.SUBMIT_BUTTON, "n_clicks"),
        Input(StockView.LOAD_MORE_BUTTON, "n_clicks"),
        State(StockView.STATE_STORE, "data"),
        running=[
            (Output(StockView.LOADING_INDICATOR, "style"), VISIBLE, HIDDEN),
            (Output(StockView.LOAD_MORE_BUTTON, "disabled"), True, False),
        ],
        prevent_initial_call=False,
    )
    def dispatch(symbol_value, n_submit, submit_clicks, load_more_clicks, store_data):
        """Run the state machine for whatever triggered this call."""
        triggered = list(ctx.triggered_prop_ids) if ctx.triggered_id is not None else []
        logger.info(f"📍 Stock view event: {triggered or ['mount']}")
        return handle_view_event(triggered, symbol_value, store_data, data_source)

    @app.callback(
        Output(StockView.CHART, "figure"),
        Output(StockView.CHART_CONTAINER, "style"),
        Output(StockView.LOAD_MORE_BUTTON, "style"),
        Output(StockView.MAIN_VIEW, "style"),
        Output(StockView.ERROR_VIEW, "children"),
        Output(StockView.ERROR_VIEW, "style"),
        Input(StockView.STATE_STORE, "data"),
    )
    def render(store_data):
        """Rebuild the chart and toggle view parts from the stored state."""
        return render_view(store_data, chart_config)
