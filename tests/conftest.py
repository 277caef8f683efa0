"""Shared test fixtures and configuration.

Keeps every test away from the real config, data and log directories.
"""

from __future__ import annotations

import logging
from datetime import date
from unittest.mock import patch

import pytest

from chronicle_cli.config import AppConfig
from chronicle_cli.services.app_service import ChronicleApp
from chronicle_cli.services.notifier import NullNotifier
from chronicle_cli.services.persistence import JsonSnapshotStore

# A Thursday; its ISO week starts on Monday 2024-06-10
FIXED_TODAY = date(2024, 6, 13)


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send the application log to a temporary directory."""
    import chronicle_cli.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("chronicle_cli").handlers.clear()
    with patch("chronicle_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    for handler in logging.getLogger("chronicle_cli").handlers:
        handler.close()
    logging.getLogger("chronicle_cli").handlers.clear()
    logger_mod._logger = None


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory."""
    from chronicle_cli.services.config_service import ConfigService, get_config_service

    get_config_service.cache_clear()
    with patch(
        "chronicle_cli.services.config_service.user_config_dir",
        return_value=str(tmp_path / "config"),
    ):
        svc = ConfigService()
        with patch("chronicle_cli.commands.config.get_config_service", return_value=svc):
            yield svc
    get_config_service.cache_clear()


@pytest.fixture()
def snapshot_path(tmp_path):
    return tmp_path / "data" / "analytics.json"


@pytest.fixture()
def chronicle_app(snapshot_path):
    """A fully wired app with a temp snapshot file and a fixed 'today'."""
    app = ChronicleApp(
        AppConfig(),
        store=JsonSnapshotStore(snapshot_path),
        notifier=NullNotifier(),
        today=lambda: FIXED_TODAY,
    )
    yield app
    app.close()
