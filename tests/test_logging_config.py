"""
Tests for logging setup and structured fetch logging
"""
import json
import logging
import logging.handlers

import pytest

from stock_dashboard.logging_config import setup_logging
from stock_dashboard.utils.fetch_logging import build_fetch_meta, generate_error_id, log_fetch_meta


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    for name in ("visualization", "stock_dashboard.services.chart_sink"):
        logging.getLogger(name).handlers.clear()


def test_setup_logging_creates_files(tmp_path, restore_root_logger):
    logs_dir = setup_logging(logs_dir=tmp_path / "logs", level="DEBUG")

    root = logging.getLogger()
    rotating = [h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]

    assert logs_dir == tmp_path / "logs"
    assert (logs_dir / "dashboard.log").exists()
    assert (logs_dir / "errors.log").exists()
    assert root.level == logging.DEBUG
    assert any(h.level == logging.ERROR for h in rotating)


def test_error_id_format():
    error_id = generate_error_id()
    assert len(error_id) == 8
    assert error_id == error_id.upper()
    int(error_id, 16)


def test_fetch_meta_is_single_line_json(caplog):
    meta = build_fetch_meta(symbol="AAPL", page=2, append=True, generation=3, outcome="ok",
                            rows_received=5, rows_total=10, has_more=True)

    with caplog.at_level(logging.INFO, logger="stock_dashboard.utils.fetch_logging"):
        log_fetch_meta(meta)

    message = caplog.records[-1].getMessage()
    assert "\n" not in message
    payload = json.loads(message.split(" ", 1)[1])
    assert payload["symbol"] == "AAPL"
    assert payload["rows_total"] == 10
    assert payload["outcome"] == "ok"
