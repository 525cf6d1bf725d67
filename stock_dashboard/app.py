#!/usr/bin/env python3
"""
Stock Data Dashboard
Candlestick chart of historical stock data with paginated loading
"""
import logging

import dash
import dash_bootstrap_components as dbc
from dash import html

from stock_dashboard.callbacks import register_all_callbacks
from stock_dashboard.config import DASHBOARD_TITLE, get_settings
from stock_dashboard.layouts import create_stock_view_layout
from stock_dashboard.logging_config import setup_logging
from stock_dashboard.ui_ids import Nav
from visualization.plotly.logging_utils import set_debug_mode

logger = logging.getLogger(__name__)


def create_app(client=None) -> dash.Dash:
    """
    Build the Dash app.

    Args:
        client: Stock data source; defaults to ``StockApiClient`` from settings
    """
    app = dash.Dash(
        __name__,
        external_stylesheets=[dbc.themes.DARKLY],
        title=DASHBOARD_TITLE,
        update_title="Loading...",
    )

    # The layout is a function so every page load mounts a fresh view
    app.layout = lambda: html.Div(id=Nav.ROOT, children=create_stock_view_layout())

    register_all_callbacks(app, client=client)
    return app


app = create_app()

# Server reference for gunicorn
server = app.server


def main() -> None:
    settings = get_settings()
    setup_logging()
    set_debug_mode(settings.debug)

    logger.info("=" * 50)
    logger.info("Stock Data Dashboard")
    logger.info("=" * 50)
    logger.info(f"Starting on http://{settings.host}:{settings.port}")
    logger.info(f"Stock API: {settings.stock_endpoint}")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info("=" * 50)

    app.run(host=settings.host, port=settings.port, debug=settings.debug)


if __name__ == "__main__":
    main()
