"""Register all dashboard callbacks."""
from .stock_view_callbacks import register_stock_view_callbacks


def register_all_callbacks(app, client=None):
    """Register all callback functions."""
    register_stock_view_callbacks(app, client=client)
