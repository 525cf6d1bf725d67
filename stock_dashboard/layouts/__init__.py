"""Dashboard Layouts."""

from .stock_view import create_stock_view_layout

__all__ = [
    "create_stock_view_layout",
]
