"""
Chart sink adapter.

Owns at most one chart instance. Every records update tears the previous
chart down and, for non-empty records, builds a new one and pushes the full
dataset. Use as a context manager to tie the chart to a view's lifetime:

    with ChartSinkAdapter() as sink:
        figure = sink.update(state.records)
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from stock_dashboard.models import StockBar
from visualization import ChartHandle
from visualization.plotly import CandlestickChartConfig, create_chart, to_chart_points
from visualization.plotly.logging_utils import log_chart_build

logger = logging.getLogger(__name__)


class ChartSinkAdapter:
    """
    Args:
        config: Chart size and theme
        chart_factory: Builds a chart from ``config``; defaults to the Plotly chart
    """

    def __init__(
        self,
        config: Optional[CandlestickChartConfig] = None,
        chart_factory: Callable[[CandlestickChartConfig], ChartHandle] = create_chart,
    ) -> None:
        self.config = config or CandlestickChartConfig()
        self._chart_factory = chart_factory
        self._chart: Optional[ChartHandle] = None

    @property
    def chart(self) -> Optional[ChartHandle]:
        return self._chart

    @log_chart_build
    def update(self, records: Sequence[StockBar]):
        """
        Rebuild the chart from ``records``.

        Returns:
            The chart's figure, or None when there is nothing to plot
        """
        self.teardown()

        if not records:
            return None

        self._chart = self._chart_factory(self.config)
        series = self._chart.add_candlestick_series()
        series.set_data(to_chart_points(records))
        return self._chart.figure

    def teardown(self) -> None:
        """Remove the owned chart, if any, and clear the reference."""
        if self._chart is None:
            return
        chart, self._chart = self._chart, None
        chart.remove()
        logger.debug("Chart sink released its chart")

    def __enter__(self) -> "ChartSinkAdapter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()
