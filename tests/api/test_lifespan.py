# tests/api/test_lifespan.py
import logging
import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from api.main import app
from api.utils.config import Config
from src.curtain_wall.utils.logging_config import get_logger


@pytest.fixture
def restore_root_logger():
    """Put the root logger's handlers and level back after startup configures it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@patch("api.main.CurtainWallLogger.configure", return_value=None)
def test_startup_configures_core_logging(mock_configure):
    with TestClient(app) as client:
        assert client.get("/health").status_code == 200

    mock_configure.assert_called_once_with(
        debug_mode=Config.DEBUG,
        log_dir=Config.LOG_DIR,
        service_mode=True,
    )


def test_startup_writes_log_file(restore_root_logger, tmp_path, monkeypatch):
    """Test that LOG_DIR sends designer logs to a file once the app starts."""
    monkeypatch.setattr(Config, "LOG_DIR", str(tmp_path))

    with TestClient(app):
        assert restore_root_logger.level == (logging.DEBUG if Config.DEBUG else logging.INFO)
        get_logger("src.curtain_wall.grid.panel_grid").info("grid ready")
        for handler in restore_root_logger.handlers:
            handler.flush()

    log_files = os.listdir(tmp_path)
    assert len(log_files) == 1
    with open(tmp_path / log_files[0]) as f:
        assert "grid ready" in f.read()


def test_shutdown_discards_sessions(clean_session_store):
    with patch("api.main.CurtainWallLogger.configure", return_value=None):
        with TestClient(app) as client:
            client.post("/designs", json={})
            assert len(clean_session_store) == 1
    assert len(clean_session_store) == 0
