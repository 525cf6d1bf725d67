"""Single Source of Truth (SSOT) for Dash Component IDs.

All IDs used in layouts and callbacks MUST be defined here.
Convention: lowercase with ':' or '-' separators (e.g., 'stock:symbol-input').
"""


class Nav:
    """Page-level IDs"""
    ROOT = "nav:root"


class StockView:
    """Stock view IDs"""
    MAIN_VIEW = "stock:main-view"
    SYMBOL_INPUT = "stock:symbol-input"
    SUBMIT_BUTTON = "stock:submit-button"
    CHART_CONTAINER = "stock:chart-container"
    CHART = "stock:chart"
    LOADING_INDICATOR = "stock:loading-indicator"
    LOAD_MORE_BUTTON = "stock:load-more-button"
    ERROR_VIEW = "stock:error-view"

    # Stores
    STATE_STORE = "stock:store:view-state"
