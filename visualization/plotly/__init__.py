"""
Plotly-based chart objects.

All Plotly imports are isolated here.
"""
from .config import (
    CandlestickChartConfig,
    ChartTheme,
    DARK_THEME,
    LIGHT_THEME,
    get_theme,
)
from .candlestick_chart import (
    CandlestickChart,
    CandlestickSeries,
    create_chart,
    get_chart_config,
    points_to_frame,
    to_chart_points,
)

__all__ = [
    # Chart objects
    "create_chart",
    "CandlestickChart",
    "CandlestickSeries",
    "get_chart_config",
    # Transforms
    "to_chart_points",
    "points_to_frame",
    # Configs
    "CandlestickChartConfig",
    # Themes
    "get_theme",
    "ChartTheme",
    "DARK_THEME",
    "LIGHT_THEME",
]
