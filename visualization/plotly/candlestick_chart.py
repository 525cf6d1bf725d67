"""
Candlestick chart object backed by a Plotly figure.

Mirrors the series-based chart API used by the dashboard:

    chart = create_chart(CandlestickChartConfig())
    series = chart.add_candlestick_series()
    series.set_data(points)        # full replace
    chart.figure                   # go.Figure for dcc.Graph
    chart.remove()                 # release, exactly once

Points are ``{"time": seconds, "open", "high", "low", "close"}``.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pandas as pd
import plotly.graph_objects as go

from .config import CandlestickChartConfig
from .logging_utils import is_debug_mode, log_data_preparation

logger = logging.getLogger(__name__)

POINT_COLUMNS = ["time", "open", "high", "low", "close"]


def to_chart_points(records: Iterable[Any]) -> List[Dict[str, float]]:
    """
    Project bars (objects with ``t/o/h/l/c``) to chart points.

    ``time`` is ``t / 1000``: milliseconds to seconds. Volume is dropped.
    """
    return [
        {
            "time": bar.t / 1000,
            "open": bar.o,
            "high": bar.h,
            "low": bar.l,
            "close": bar.c,
        }
        for bar in records
    ]


def points_to_frame(points: Sequence[Dict[str, float]]) -> pd.DataFrame:
    """Chart points as a DataFrame indexed by UTC timestamps, in input order."""
    if not points:
        return pd.DataFrame(
            columns=["open", "high", "low", "close"],
            index=pd.DatetimeIndex([], tz="UTC", name="time"),
        )

    df = pd.DataFrame(list(points), columns=POINT_COLUMNS)
    df.index = pd.to_datetime(df.pop("time"), unit="s", utc=True)
    df.index.name = "time"
    return df


class CandlestickSeries:
    """A candlestick trace owned by a ``CandlestickChart``."""

    def __init__(self, chart: "CandlestickChart", trace_index: int) -> None:
        self._chart = chart
        self._trace_index = trace_index

    def set_data(self, points: Sequence[Dict[str, float]]) -> None:
        """Replace the whole series with ``points``."""
        with log_data_preparation(f"Setting {len(points)} candlestick points"):
            df = points_to_frame(points)
            trace = self._chart.figure.data[self._trace_index]
            trace.update(
                x=df.index,
                open=df["open"],
                high=df["high"],
                low=df["low"],
                close=df["close"],
            )

        if is_debug_mode() and len(df):
            logger.debug(f"  → Series range: {df.index[0]} → {df.index[-1]}")


class CandlestickChart:
    """Fixed-size chart; ``remove()`` releases it and may be called once."""

    def __init__(self, config: CandlestickChartConfig) -> None:
        self.config = config
        self._figure: Optional[go.Figure] = _new_figure(config)

    @property
    def removed(self) -> bool:
        return self._figure is None

    @property
    def figure(self) -> go.Figure:
        if self._figure is None:
            raise RuntimeError("Chart has been removed")
        return self._figure

    def add_candlestick_series(self) -> CandlestickSeries:
        theme = self.config.theme
        fig = self.figure
        fig.add_trace(
            go.Candlestick(
                x=[],
                open=[],
                high=[],
                low=[],
                close=[],
                name="OHLC",
                increasing=dict(line=dict(color=theme.candle_up_color), fillcolor=theme.candle_up_color),
                decreasing=dict(line=dict(color=theme.candle_down_color), fillcolor=theme.candle_down_color),
                showlegend=False,
            )
        )
        return CandlestickSeries(self, len(fig.data) - 1)

    def remove(self) -> None:
        if self._figure is None:
            raise RuntimeError("Chart has already been removed")
        self._figure = None
        logger.debug("🗑️  Chart removed")


def create_chart(config: Optional[CandlestickChartConfig] = None) -> CandlestickChart:
    return CandlestickChart(config or CandlestickChartConfig())


def _new_figure(config: CandlestickChartConfig) -> go.Figure:
    theme = config.theme
    fig = go.Figure()
    fig.update_layout(
        template=theme.template,
        width=config.width,
        height=config.height,
        autosize=False,
        paper_bgcolor=theme.paper_color,
        plot_bgcolor=theme.bg_color,
        font=dict(color=theme.font_color, family=theme.font_family),
        title=config.title,
        showlegend=False,
        hovermode="x unified",
        xaxis=dict(
            rangeslider=dict(visible=config.show_rangeslider),
            gridcolor=theme.grid_color,
            showgrid=True,
        ),
        yaxis=dict(gridcolor=theme.grid_color, showgrid=True),
        margin=dict(l=40, r=20, t=40 if config.title else 20, b=30),
    )
    return fig


def get_chart_config() -> Dict[str, Any]:
    """Plotly config for the ``dcc.Graph`` hosting the chart."""
    return {
        "scrollZoom": True,
        "displayModeBar": True,
        "displaylogo": False,
        "responsive": False,
        "modeBarButtonsToRemove": ["lasso2d", "select2d"],
        "toImageButtonOptions": {
            "format": "png",
            "filename": "stock_chart",
            "scale": 1,
        },
    }
