"""Tests for the application wiring: timer -> bus -> analytics -> snapshot."""

from __future__ import annotations

import json
from datetime import date
from unittest.mock import patch

from chronicle_cli.config import AppConfig, FocusSettings
from chronicle_cli.services.app_service import ChronicleApp, build_app
from chronicle_cli.services.notifier import NullNotifier
from chronicle_cli.services.persistence import JsonSnapshotStore

FIXED_TODAY = date(2024, 6, 13)


class TestChronicleApp:
    def test_engine_uses_configured_durations(self, snapshot_path):
        config = AppConfig(focus=FocusSettings(work_minutes=50, short_break_minutes=10))
        app = ChronicleApp(config, store=JsonSnapshotStore(snapshot_path), notifier=NullNotifier())
        assert app.focus.seconds_remaining == 3000
        assert app.focus.config.short_break_seconds == 600
        app.close()

    def test_completed_pomodoro_reaches_analytics_and_disk(self, chronicle_app, snapshot_path):
        chronicle_app.focus.start()
        for _ in range(25 * 60):
            chronicle_app.focus.tick()

        totals = chronicle_app.analytics.totals()
        assert totals.pomodoro_sessions_completed == 1
        assert totals.total_focus_seconds == 1500

        chronicle_app.close()
        saved = json.loads(snapshot_path.read_text())
        assert saved["totals"]["pomodoro_sessions_completed"] == 1

    def test_break_completion_does_not_record_focus(self, chronicle_app):
        chronicle_app.focus.skip()
        chronicle_app.focus.skip()
        assert chronicle_app.analytics.totals().pomodoro_sessions_completed == 1

    def test_state_survives_restart(self, snapshot_path):
        first = ChronicleApp(
            AppConfig(), store=JsonSnapshotStore(snapshot_path), notifier=NullNotifier(),
            today=lambda: FIXED_TODAY,
        )
        first.analytics.record_task_completed()
        first.close()

        second = ChronicleApp(
            AppConfig(), store=JsonSnapshotStore(snapshot_path), notifier=NullNotifier(),
            today=lambda: FIXED_TODAY,
        )
        assert second.analytics.daily_stat().tasks_completed == 1
        second.close()

    def test_corrupt_snapshot_starts_empty(self, snapshot_path):
        snapshot_path.parent.mkdir(parents=True)
        snapshot_path.write_text("garbage")
        app = ChronicleApp(AppConfig(), store=JsonSnapshotStore(snapshot_path), notifier=NullNotifier())
        assert app.analytics.totals().tasks_completed == 0
        app.close()

    def test_snapshot_path_from_config(self, tmp_path):
        config = AppConfig.model_validate(
            {"analytics": {"snapshot_path": str(tmp_path / "custom.json")}}
        )
        app = ChronicleApp(config, notifier=NullNotifier())
        assert app.store.path == tmp_path / "custom.json"
        app.close()

    def test_build_app_registers_close_at_exit(self, tmp_path):
        config = AppConfig.model_validate(
            {"analytics": {"snapshot_path": str(tmp_path / "snap.json")}}
        )
        with patch("chronicle_cli.services.app_service.atexit.register") as register:
            app = build_app(config)
        register.assert_called_once_with(app.close)
        app.close()
