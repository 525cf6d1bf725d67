"""
Logging configuration for the Stock Dashboard
"""
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from stock_dashboard.config import get_settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(logs_dir: Optional[Path] = None, level: Optional[str] = None) -> Path:
    """
    Configure logging for the entire application.

    Handlers:
        console        all records at ``level``
        dashboard.log  all records at ``level`` (10MB x 5)
        charts.log     visualization and chart sink, DEBUG (5MB x 3)
        errors.log     ERROR and above with source location (5MB x 3)

    Returns:
        The directory the log files are written to
    """
    settings = get_settings()
    logs_dir = Path(logs_dir or settings.logs_root)
    logs_dir.mkdir(parents=True, exist_ok=True)
    level_no = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    dashboard_log = logs_dir / "dashboard.log"
    charts_log = logs_dir / "charts.log"
    errors_log = logs_dir / "errors.log"

    # Root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level_no)
    root_logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # Console handler (for development)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level_no)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Dashboard file handler (all logs)
    dashboard_handler = logging.handlers.RotatingFileHandler(
        dashboard_log,
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5
    )
    dashboard_handler.setLevel(level_no)
    dashboard_handler.setFormatter(formatter)
    root_logger.addHandler(dashboard_handler)

    # Charts-specific handler
    charts_handler = logging.handlers.RotatingFileHandler(
        charts_log,
        maxBytes=5*1024*1024,  # 5MB
        backupCount=3
    )
    charts_handler.setLevel(logging.DEBUG)
    charts_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt=DATE_FORMAT
    ))
    for name in ("visualization", "stock_dashboard.services.chart_sink"):
        charts_logger = logging.getLogger(name)
        charts_logger.handlers.clear()
        charts_logger.addHandler(charts_handler)
        charts_logger.setLevel(logging.DEBUG)

    # Error file handler (errors only)
    error_handler = logging.handlers.RotatingFileHandler(
        errors_log,
        maxBytes=5*1024*1024,  # 5MB
        backupCount=3
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(logging.Formatter(
        LOG_FORMAT + '\n%(pathname)s:%(lineno)d',
        datefmt=DATE_FORMAT
    ))
    root_logger.addHandler(error_handler)

    logging.info("✅ Logging configured successfully")
    logging.info(f"📁 Dashboard logs: {dashboard_log}")
    logging.info(f"📊 Charts logs: {charts_log}")
    logging.info(f"❌ Error logs: {errors_log}")

    return logs_dir
