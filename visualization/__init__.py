"""
Visualization layer for the stock dashboard.
Converts domain records to chart objects.

Chart objects follow a small lifecycle: created on first need, fed a full
dataset through a series, and removed exactly once.
"""
from typing import Any, Protocol, Sequence

__version__ = "1.0.0"
__all__ = ["ChartSeries", "ChartHandle"]


class ChartSeries(Protocol):
    def set_data(self, points: Sequence[dict]) -> None:
        """Replace the series data with ``points``."""
        ...


class ChartHandle(Protocol):
    """An owned chart instance."""

    @property
    def figure(self) -> Any:
        """Framework-specific figure (e.g., go.Figure for Plotly)."""
        ...

    def add_candlestick_series(self) -> ChartSeries:
        ...

    def remove(self) -> None:
        ...
