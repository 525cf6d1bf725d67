"""
Configuration and theme for the candlestick chart.

Both are frozen dataclasses; the chart is fixed-size and does not follow
its container.
"""
from dataclasses import dataclass
from typing import Literal, Optional

ThemeMode = Literal["light", "dark"]


@dataclass(frozen=True)
class ChartTheme:
    """Colors for one theme mode."""

    template: str
    bg_color: str
    paper_color: str
    grid_color: str
    candle_up_color: str
    candle_down_color: str
    font_color: str
    font_family: str = "Inter, -apple-system, BlinkMacSystemFont, sans-serif"


DARK_THEME = ChartTheme(
    template="plotly_dark",
    bg_color="#0d1117",
    paper_color="#0d1117",
    grid_color="#30363d",
    candle_up_color="#3fb950",
    candle_down_color="#f85149",
    font_color="#f0f6fc",
)

LIGHT_THEME = ChartTheme(
    template="plotly_white",
    bg_color="#ffffff",
    paper_color="#ffffff",
    grid_color="rgba(0, 0, 0, 0.08)",
    candle_up_color="#26a69a",
    candle_down_color="#ef5350",
    font_color="#333333",
)


def get_theme(mode: ThemeMode = "dark") -> ChartTheme:
    if mode == "dark":
        return DARK_THEME
    if mode == "light":
        return LIGHT_THEME
    raise ValueError(f"Invalid theme mode: {mode}. Must be 'light' or 'dark'")


@dataclass(frozen=True)
class CandlestickChartConfig:
    """
    Configuration for the candlestick chart.

    Attributes:
        width: Chart width in pixels
        height: Chart height in pixels
        theme_mode: Light or dark theme
        title: Chart title (None for no title)
        show_rangeslider: Display range slider below chart
    """

    width: int = 600
    height: int = 300
    theme_mode: ThemeMode = "dark"
    title: Optional[str] = None
    show_rangeslider: bool = False

    def __post_init__(self):
        """Validate configuration values."""
        if not 100 <= self.width <= 5000:
            raise ValueError(f"Chart width must be within 100..5000px, got {self.width}")

        if not 100 <= self.height <= 5000:
            raise ValueError(f"Chart height must be within 100..5000px, got {self.height}")

        if self.theme_mode not in ("light", "dark"):
            raise ValueError(
                f"Invalid theme_mode '{self.theme_mode}', must be 'light' or 'dark'"
            )

    @property
    def theme(self) -> ChartTheme:
        return get_theme(self.theme_mode)
