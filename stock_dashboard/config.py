"""
Dashboard Configuration
========================

Central configuration for stock_dashboard.

Settings are loaded from:
1. Environment variables (highest priority)
2. .env file (if exists)
3. Default values (fallback)

Usage:
    from stock_dashboard.config import get_settings

    settings = get_settings()
    url = settings.stock_api_url
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "y", "on")


def _env_optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    return float(raw)


@dataclass
class DashboardSettings:
    """
    Runtime configuration for the stock dashboard.

    ``stock_api_timeout_sec=None`` means requests wait until the transport
    resolves or fails.
    """

    # ===== Project Roots =====
    project_root: Path = field(default_factory=lambda: Path(__file__).resolve().parents[1])
    logs_root: Optional[Path] = None

    # ===== Stock API =====
    stock_api_url: str = "http://localhost:3000"
    stock_api_path: str = "/stock"
    stock_api_timeout_sec: Optional[float] = None

    # ===== View defaults =====
    default_symbol: str = "AAPL"
    chart_theme: str = "dark"

    # ===== Server =====
    host: str = "0.0.0.0"
    port: int = 9001
    debug: bool = False

    # ===== Logging =====
    log_level: str = "INFO"

    def __post_init__(self):
        """Apply environment overrides and compute derived values."""
        self._load_from_env()

        if self.logs_root is None:
            self.logs_root = self.project_root / "logs"

        self.stock_api_url = self.stock_api_url.rstrip("/")
        if not self.stock_api_path.startswith("/"):
            self.stock_api_path = "/" + self.stock_api_path
        self.default_symbol = self.default_symbol.upper()
        self.chart_theme = self.chart_theme.lower()

        if not 0 < self.port < 65536:
            raise ValueError(f"DASHBOARD_PORT must be in 1..65535, got {self.port}")
        if self.chart_theme not in ("light", "dark"):
            raise ValueError(f"CHART_THEME must be 'light' or 'dark', got {self.chart_theme!r}")
        if self.stock_api_timeout_sec is not None and self.stock_api_timeout_sec <= 0:
            raise ValueError(
                f"STOCK_API_TIMEOUT_SEC must be positive, got {self.stock_api_timeout_sec}"
            )

    def _load_from_env(self) -> None:
        if os.getenv("LOGS_DIR"):
            self.logs_root = Path(os.environ["LOGS_DIR"])

        self.stock_api_url = os.getenv("STOCK_API_URL", self.stock_api_url)
        self.stock_api_path = os.getenv("STOCK_API_PATH", self.stock_api_path)
        timeout = _env_optional_float("STOCK_API_TIMEOUT_SEC")
        if timeout is not None:
            self.stock_api_timeout_sec = timeout

        self.default_symbol = os.getenv("DEFAULT_SYMBOL", self.default_symbol)
        self.chart_theme = os.getenv("CHART_THEME", self.chart_theme)

        self.host = os.getenv("DASHBOARD_HOST", self.host)
        self.port = int(os.getenv("DASHBOARD_PORT", str(self.port)))
        self.debug = _env_bool("DASHBOARD_DEBUG", self.debug)

        self.log_level = os.getenv("LOG_LEVEL", self.log_level).upper()

    @property
    def stock_endpoint(self) -> str:
        """Full URL of the paginated stock resource."""
        return f"{self.stock_api_url}{self.stock_api_path}"


@lru_cache(maxsize=1)
def get_settings() -> DashboardSettings:
    """Return the process-wide settings instance."""
    return DashboardSettings()


def reset_settings() -> None:
    """Drop the cached settings (tests change the environment)."""
    get_settings.cache_clear()


settings = get_settings()

# ===== Dashboard Settings =====
DASHBOARD_TITLE = "Stock Data"
PORT = settings.port
HOST = settings.host
DEBUG = settings.debug

# ===== Chart =====
CHART_WIDTH = 600
CHART_HEIGHT = 300

# ===== Logging =====
LOG_LEVEL = settings.log_level
LOGS_DIR = settings.logs_root
