"""
Stock View Layout
=================

One form (symbol input + submit), the chart container, a loading indicator,
the "Load More" control and the error view. Visibility of each part is
driven by the view state stored in ``StockView.STATE_STORE``.
"""

from dash import dcc, html
import dash_bootstrap_components as dbc

from stock_dashboard.config import CHART_HEIGHT, CHART_WIDTH, DASHBOARD_TITLE, get_settings
from stock_dashboard.services.view_state import initial_state
from stock_dashboard.ui_ids import StockView
from visualization.plotly import get_chart_config

HIDDEN = {"display": "none"}
VISIBLE = {"display": "block"}


def create_stock_view_layout(default_symbol=None):
    """Create the stock view. The store starts with the mount defaults."""
    state = initial_state(default_symbol or get_settings().default_symbol)

    return html.Div([
        dcc.Store(id=StockView.STATE_STORE, data=state.to_dict()),

        html.Div(
            id=StockView.MAIN_VIEW,
            children=[
                html.H1(DASHBOARD_TITLE),

                dbc.InputGroup([
                    dbc.Input(
                        id=StockView.SYMBOL_INPUT,
                        type="text",
                        value=state.symbol,
                        placeholder="Enter stock symbol",
                        debounce=False,
                        style={"textTransform": "uppercase"},
                    ),
                    dbc.Button("Fetch Data", id=StockView.SUBMIT_BUTTON, color="primary", n_clicks=0),
                ], className="mb-3", style={"maxWidth": f"{CHART_WIDTH}px"}),

                html.Div(
                    id=StockView.CHART_CONTAINER,
                    children=dcc.Graph(
                        id=StockView.CHART,
                        figure={"data": [], "layout": {}},
                        config=get_chart_config(),
                        style={"width": f"{CHART_WIDTH}px", "height": f"{CHART_HEIGHT}px"},
                    ),
                    style=HIDDEN,
                ),

                html.Div("Loading...", id=StockView.LOADING_INDICATOR, style=VISIBLE),

                dbc.Button(
                    "Load More",
                    id=StockView.LOAD_MORE_BUTTON,
                    color="secondary",
                    className="mt-2",
                    n_clicks=0,
                    style=HIDDEN,
                ),
            ],
        ),

        html.Div(id=StockView.ERROR_VIEW, style=HIDDEN),
    ], style={"padding": "16px"})
