"""Analytics snapshot persistence.

``JsonSnapshotStore`` reads and writes the snapshot as one JSON document.
``BackgroundSnapshotWriter`` wraps a store so that saves are queued to a
single worker thread and never block the caller.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Protocol

from platformdirs import user_data_dir

from chronicle_cli.errors import PersistenceError
from chronicle_cli.models.analytics.stats import AnalyticsSnapshot

logger = logging.getLogger(__name__)

SNAPSHOT_FILE = "analytics.json"


class SnapshotStore(Protocol):
    def load_snapshot(self) -> AnalyticsSnapshot: ...

    def save_snapshot(self, snapshot: AnalyticsSnapshot) -> None: ...


def default_snapshot_path() -> Path:
    return Path(user_data_dir("chronicle_cli")) / SNAPSHOT_FILE


class JsonSnapshotStore:
    """Stores the analytics snapshot in a JSON file."""

    def __init__(self, path: Path | None = None):
        self.path = Path(path) if path is not None else default_snapshot_path()

    def load_snapshot(self) -> AnalyticsSnapshot:
        """Load the snapshot. A missing file is an empty snapshot."""
        if not self.path.exists():
            return AnalyticsSnapshot()

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            return AnalyticsSnapshot.from_dict(data)
        except (OSError, json.JSONDecodeError, TypeError, KeyError, ValueError) as e:
            raise PersistenceError(f"Failed to load snapshot from {self.path}: {e}") from e

    def save_snapshot(self, snapshot: AnalyticsSnapshot) -> None:
        """Write the snapshot atomically."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=".analytics-", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(snapshot.to_dict(), f, indent=2)
                os.chmod(tmp_name, 0o600)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to save snapshot to {self.path}: {e}") from e


class BackgroundSnapshotWriter:
    """Fire-and-forget saves on a single worker thread.

    The snapshot is copied on the caller's thread, so later mutations do not
    race the write. Writes run in submission order. Failures are logged,
    kept in ``last_error`` and passed to ``on_error``; they never reach the
    caller of ``save_snapshot``.
    """

    def __init__(
        self,
        store: SnapshotStore,
        on_error: Callable[[PersistenceError], None] | None = None,
    ):
        self.store = store
        self.on_error = on_error
        self.last_error: PersistenceError | None = None
        self.saves_completed = 0
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="snapshot")
        self._last_future: Future | None = None
        self._lock = threading.Lock()
        self._closed = False

    def load_snapshot(self) -> AnalyticsSnapshot:
        return self.store.load_snapshot()

    def save_snapshot(self, snapshot: AnalyticsSnapshot) -> None:
        pending = copy.deepcopy(snapshot)
        with self._lock:
            if self._closed:
                self._write(pending)
                return
            self._last_future = self._executor.submit(self._write, pending)

    def _write(self, snapshot: AnalyticsSnapshot) -> None:
        try:
            self.store.save_snapshot(snapshot)
        except PersistenceError as e:
            logger.error("snapshot save failed: %s", e)
            self.last_error = e
            if self.on_error is not None:
                self.on_error(e)
            return
        self.last_error = None
        self.saves_completed += 1

    def flush(self) -> None:
        """Block until every queued save has finished."""
        with self._lock:
            future = self._last_future
        if future is not None:
            future.result()

    def close(self) -> None:
        """Flush pending saves and stop the worker. Safe to call twice."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=True)
