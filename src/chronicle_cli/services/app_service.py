"""Wiring of the long-lived application objects.

One ``ChronicleApp`` is built per process and handed to whatever needs it;
nothing else constructs the aggregator, the writer or the engine.
"""

from __future__ import annotations

import atexit
import logging
from collections.abc import Callable
from datetime import date
from pathlib import Path

from chronicle_cli.config import AppConfig
from chronicle_cli.errors import PersistenceError
from chronicle_cli.models.analytics import AnalyticsAggregator
from chronicle_cli.models.events import EventBus
from chronicle_cli.models.focus.engine import FocusEngine

from .notifier import Notifier, TerminalNotifier
from .persistence import BackgroundSnapshotWriter, JsonSnapshotStore, SnapshotStore

logger = logging.getLogger(__name__)


class ChronicleApp:
    """Owns the event bus, analytics aggregator and focus engine."""

    def __init__(
        self,
        config: AppConfig,
        *,
        store: SnapshotStore | None = None,
        notifier: Notifier | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.config = config
        if store is None:
            path = config.analytics.snapshot_path
            store = JsonSnapshotStore(Path(path) if path else None)
        self.store = store
        self.writer = BackgroundSnapshotWriter(store, on_error=self._on_save_error)
        self.event_bus = EventBus()
        self.analytics = AnalyticsAggregator(self.writer, today=today)
        self.analytics.attach(self.event_bus)
        self.focus = FocusEngine(
            config.focus.to_configuration(),
            event_bus=self.event_bus,
            notifier=notifier or TerminalNotifier(),
        )

    @staticmethod
    def _on_save_error(error: PersistenceError) -> None:
        logger.warning("analytics changes kept in memory until next save: %s", error)

    def close(self) -> None:
        """Finish pending snapshot writes."""
        self.writer.close()


def build_app(config: AppConfig | None = None) -> ChronicleApp:
    """Build the process-wide app and make sure it is flushed at exit."""
    if config is None:
        from chronicle_cli.services.config_service import get_config_service

        config = get_config_service().config

    app = ChronicleApp(config)
    atexit.register(app.close)
    return app
