"""
Logging helpers for the visualization layer.

Debug mode (``DASHBOARD_DEBUG=true`` or ``set_debug_mode(True)``) adds
input and figure details to the chart build logs.
"""
import functools
import logging
import os
import time
from contextlib import contextmanager
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

_DEBUG_MODE = os.getenv("DASHBOARD_DEBUG", "false").lower() in ("true", "1", "yes")


def set_debug_mode(enabled: bool) -> None:
    """Enable or disable verbose chart logging at runtime."""
    global _DEBUG_MODE
    _DEBUG_MODE = enabled

    level = logging.DEBUG if enabled else logging.INFO
    logging.getLogger("visualization").setLevel(level)
    logger.setLevel(level)

    logger.info(f"🔧 Visualization debug mode: {'ON ✓' if enabled else 'OFF'}")


def is_debug_mode() -> bool:
    return _DEBUG_MODE


def log_chart_build(func: F) -> F:
    """
    Decorator: log a chart build with timing and trace count.

    Failures are logged and re-raised.
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        func_name = func.__name__

        config_obj = next(
            (arg for arg in list(args) + list(kwargs.values()) if hasattr(arg, "__dataclass_fields__")),
            None,
        )
        config_info = f" config={config_obj.__class__.__name__}" if config_obj is not None else ""
        logger.info(f"📊 Building chart: {func_name}{config_info}")

        if _DEBUG_MODE:
            for i, arg in enumerate(args):
                if isinstance(arg, (list, tuple)):
                    logger.debug(f"  → Sequence arg[{i}]: {len(arg)} items")
            if config_obj is not None:
                logger.debug(f"  → Config: {config_obj}")

        start_time = time.perf_counter()

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"❌ Chart build failed: {func_name} "
                f"({elapsed_ms:.1f}ms, {type(e).__name__}: {e})"
            )
            if _DEBUG_MODE:
                logger.exception("  📋 Full traceback:")
            else:
                logger.error("  💡 Hint: Set DASHBOARD_DEBUG=true for full traceback")
            raise

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        trace_count = len(result.data) if hasattr(result, "data") else "?"
        logger.info(f"✅ Chart built: {func_name} ({elapsed_ms:.1f}ms, {trace_count} traces)")

        if _DEBUG_MODE and hasattr(result, "data"):
            logger.debug(f"  → Trace types: {[trace.type for trace in result.data]}")

        return result

    return wrapper  # type: ignore


@contextmanager
def log_data_preparation(description: str):
    """
    Time a data preparation step.

    Usage:
        with log_data_preparation("Converting bars to points"):
            points = to_chart_points(records)
    """
    start = time.perf_counter()

    if _DEBUG_MODE:
        logger.debug(f"🔄 {description}...")

    try:
        yield
    except Exception as e:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.error(f"  ✗ {description} failed ({elapsed_ms:.1f}ms): {e}")
        raise
    else:
        if _DEBUG_MODE:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.debug(f"  ✓ {description} ({elapsed_ms:.1f}ms)")
