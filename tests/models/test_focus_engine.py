"""Unit tests for the focus session state machine.

Covers configuration validation, start/pause/reset, tick accounting, the
work -> short break / long break transition rule, skip, notifications and
the PomodoroCompleted events published on the bus.
"""

from __future__ import annotations

import random
from unittest.mock import MagicMock

import pytest

from chronicle_cli.errors import ValidationError
from chronicle_cli.models.events import EventBus, PomodoroCompleted
from chronicle_cli.models.focus.engine import (
    FocusConfiguration,
    FocusEngine,
    Phase,
)


def _config(work: int = 5, short: int = 2, long: int = 3, **kwargs) -> FocusConfiguration:
    return FocusConfiguration(
        work_seconds=work, short_break_seconds=short, long_break_seconds=long, **kwargs
    )


def _run(engine: FocusEngine, ticks: int) -> None:
    for _ in range(ticks):
        engine.tick()


def _running_engine(**kwargs) -> FocusEngine:
    engine = FocusEngine(_config(**kwargs))
    engine.start()
    return engine


# ---------------------------------------------------------------------------
# FocusConfiguration
# ---------------------------------------------------------------------------


class TestFocusConfiguration:
    def test_defaults_are_standard_pomodoro(self):
        config = FocusConfiguration()
        assert config.work_seconds == 25 * 60
        assert config.short_break_seconds == 5 * 60
        assert config.long_break_seconds == 15 * 60
        assert config.notify_on_sound is True
        assert config.notify_on_haptic is True

    def test_from_minutes_converts_to_seconds(self):
        config = FocusConfiguration.from_minutes(50, 10, 30, sound=False)
        assert config.work_seconds == 3000
        assert config.short_break_seconds == 600
        assert config.long_break_seconds == 1800
        assert config.notify_on_sound is False

    @pytest.mark.parametrize(
        "field", ["work_seconds", "short_break_seconds", "long_break_seconds"]
    )
    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_duration_rejected(self, field, value):
        with pytest.raises(ValidationError):
            FocusConfiguration(**{field: value})

    def test_non_integer_duration_rejected(self):
        with pytest.raises(ValidationError):
            FocusConfiguration(work_seconds=1.5)

    def test_validation_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            FocusConfiguration(work_seconds=0)

    def test_duration_for_each_phase(self):
        config = _config(work=10, short=3, long=7)
        assert config.duration_for(Phase.WORK) == 10
        assert config.duration_for(Phase.SHORT_BREAK) == 3
        assert config.duration_for(Phase.LONG_BREAK) == 7


# ---------------------------------------------------------------------------
# Initial state and basic commands
# ---------------------------------------------------------------------------


class TestInitialState:
    def test_starts_in_work_phase_not_running(self):
        engine = FocusEngine(_config(work=5))
        assert engine.phase is Phase.WORK
        assert engine.seconds_remaining == 5
        assert engine.cycle_index == 1
        assert engine.completed_work_sessions == 0
        assert engine.accumulated_focus_seconds == 0
        assert engine.is_running is False
        assert engine.progress_fraction == 0.0

    def test_phase_display_names(self):
        assert Phase.WORK.display_name == "Focus Time"
        assert Phase.SHORT_BREAK.display_name == "Short Break"
        assert Phase.LONG_BREAK.display_name == "Long Break"


class TestStartPause:
    def test_start_is_idempotent(self):
        engine = _running_engine()
        engine.start()
        assert engine.is_running

    def test_ticks_ignored_until_started(self):
        engine = FocusEngine(_config(work=5))
        assert engine.tick() is None
        assert engine.seconds_remaining == 5
        assert engine.accumulated_focus_seconds == 0

    def test_pause_twice_keeps_remaining(self):
        engine = _running_engine(work=10)
        _run(engine, 3)
        engine.pause()
        first = engine.seconds_remaining
        engine.pause()
        assert engine.seconds_remaining == first == 7
        assert engine.is_running is False

    def test_paused_engine_resumes_where_it_stopped(self):
        engine = _running_engine(work=10)
        _run(engine, 4)
        engine.pause()
        _run(engine, 20)
        engine.start()
        _run(engine, 1)
        assert engine.seconds_remaining == 5
        assert engine.accumulated_focus_seconds == 5

    def test_toggle_switches_running_state(self):
        engine = FocusEngine(_config())
        engine.toggle()
        assert engine.is_running
        engine.toggle()
        assert not engine.is_running


class TestReset:
    def test_reset_returns_to_first_work_phase(self):
        engine = _running_engine(work=3, short=2)
        _run(engine, 3 + 2 + 1)
        assert engine.cycle_index == 2

        engine.reset()

        assert engine.phase is Phase.WORK
        assert engine.cycle_index == 1
        assert engine.seconds_remaining == 3
        assert engine.is_running is False

    def test_reset_keeps_lifetime_counters(self):
        engine = _running_engine(work=3)
        _run(engine, 3)
        engine.reset()
        assert engine.completed_work_sessions == 1
        assert engine.accumulated_focus_seconds == 3


# ---------------------------------------------------------------------------
# Ticking and transitions
# ---------------------------------------------------------------------------


class TestTick:
    def test_tick_decrements_and_counts_focus(self):
        engine = _running_engine(work=5)
        assert engine.tick() is None
        assert engine.seconds_remaining == 4
        assert engine.accumulated_focus_seconds == 1

    def test_work_seconds_ticks_complete_work_phase(self):
        engine = _running_engine(work=5, short=2)
        _run(engine, 4)
        assert engine.phase is Phase.WORK

        entered = engine.tick()

        assert entered is Phase.SHORT_BREAK
        assert engine.phase is Phase.SHORT_BREAK
        assert engine.seconds_remaining == 2
        assert engine.completed_work_sessions == 1
        assert engine.is_running

    def test_remaining_never_rests_at_zero(self):
        engine = _running_engine(work=3, short=2)
        seen = []
        for _ in range(12):
            engine.tick()
            seen.append(engine.seconds_remaining)
        assert min(seen) > 0
        assert engine.completed_work_sessions == 2

    def test_break_ticks_do_not_count_as_focus(self):
        engine = _running_engine(work=2, short=5)
        _run(engine, 2)
        assert engine.accumulated_focus_seconds == 2
        _run(engine, 3)
        assert engine.phase is Phase.SHORT_BREAK
        assert engine.accumulated_focus_seconds == 2

    def test_break_completion_returns_to_work_and_advances_cycle(self):
        engine = _running_engine(work=2, short=2)
        _run(engine, 4)
        assert engine.phase is Phase.WORK
        assert engine.cycle_index == 2
        assert engine.seconds_remaining == 2

    def test_fourth_work_session_leads_to_long_break(self):
        engine = _running_engine(work=2, short=1, long=4)
        entered = []
        for _ in range(4 * 2 + 3 * 1):
            phase = engine.tick()
            if phase is not None:
                entered.append(phase)

        assert entered == [
            Phase.SHORT_BREAK, Phase.WORK,
            Phase.SHORT_BREAK, Phase.WORK,
            Phase.SHORT_BREAK, Phase.WORK,
            Phase.LONG_BREAK,
        ]
        assert engine.seconds_remaining == 4
        assert engine.completed_work_sessions == 4

    def test_cycle_restarts_after_long_break(self):
        engine = _running_engine(work=1, short=1, long=1)
        # 4 work + 3 short + 1 long + 3 work + 3 short: now in the 8th work phase
        phases = [engine.tick() for _ in range(14)]
        assert phases[-1] is Phase.WORK
        assert engine.position_in_cycle == 4
        assert engine.tick() is Phase.LONG_BREAK

    def test_remaining_stays_within_bounds(self):
        rng = random.Random(7)
        engine = _running_engine(work=4, short=2, long=3)
        for _ in range(500):
            action = rng.random()
            if action < 0.05:
                engine.skip()
            elif action < 0.1:
                engine.toggle()
            else:
                engine.tick()
            duration = engine.duration_for(engine.phase)
            assert 0 <= engine.seconds_remaining <= duration

    def test_progress_fraction_tracks_each_tick(self):
        engine = _running_engine(work=4)
        _run(engine, 1)
        assert engine.progress_fraction == pytest.approx(0.25)
        _run(engine, 2)
        assert engine.progress_fraction == pytest.approx(0.75)


class TestSkip:
    def test_skip_matches_natural_completion(self):
        for completed_before in range(6):
            natural = _running_engine(work=2, short=1, long=1)
            skipped = _running_engine(work=2, short=1, long=1)
            for _ in range(completed_before):
                natural.skip()
                skipped.skip()
            assert natural.cycle_index == skipped.cycle_index

            expected = None
            while expected is None:
                expected = natural.tick()

            assert skipped.skip() is expected

    def test_skip_works_while_paused(self):
        engine = FocusEngine(_config(work=5, short=2))
        assert engine.skip() is Phase.SHORT_BREAK
        assert engine.completed_work_sessions == 1
        assert engine.is_running is False

    def test_skip_does_not_add_focus_seconds(self):
        engine = _running_engine(work=5)
        _run(engine, 2)
        engine.skip()
        assert engine.accumulated_focus_seconds == 2


# ---------------------------------------------------------------------------
# configure()
# ---------------------------------------------------------------------------


class TestConfigure:
    def test_configure_while_stopped_resets_current_phase(self):
        engine = FocusEngine(_config(work=5))
        engine.configure(_config(work=9))
        assert engine.seconds_remaining == 9
        assert engine.config.work_seconds == 9

    def test_configure_while_running_keeps_remaining(self):
        engine = _running_engine(work=10)
        _run(engine, 3)
        engine.configure(_config(work=20))
        assert engine.seconds_remaining == 7
        assert engine.accumulated_focus_seconds == 3

    def test_configure_while_running_clamps_to_shorter_duration(self):
        engine = _running_engine(work=10)
        engine.configure(_config(work=4))
        assert engine.seconds_remaining == 4

    def test_new_durations_apply_to_next_phase(self):
        engine = _running_engine(work=3, short=2)
        engine.configure(_config(work=3, short=8))
        _run(engine, 3)
        assert engine.phase is Phase.SHORT_BREAK
        assert engine.seconds_remaining == 8

    def test_zero_work_seconds_rejected_without_changes(self):
        engine = _running_engine(work=10)
        _run(engine, 2)
        before = engine.snapshot()

        with pytest.raises(ValidationError):
            engine.configure(_config(work=0))

        assert engine.config.work_seconds == 10
        assert engine.snapshot() == before
        assert engine.is_running

    def test_non_configuration_rejected(self):
        engine = FocusEngine(_config())
        with pytest.raises(ValidationError):
            engine.configure({"work_seconds": 60})


# ---------------------------------------------------------------------------
# Side effects: events and notifications
# ---------------------------------------------------------------------------


class TestSideEffects:
    def test_work_completion_publishes_pomodoro_event(self):
        bus = EventBus()
        received = []
        bus.subscribe(received.append)
        engine = FocusEngine(_config(work=3, short=1), event_bus=bus)
        engine.start()

        _run(engine, 3 + 1)

        assert len(received) == 1
        assert isinstance(received[0], PomodoroCompleted)
        assert received[0].duration_seconds == 3

    def test_break_completion_publishes_nothing(self):
        bus = EventBus()
        received = []
        bus.subscribe(received.append)
        engine = FocusEngine(_config(), event_bus=bus)
        engine.skip()
        engine.skip()
        assert len(received) == 1

    def test_notifier_called_on_every_completion(self):
        notifier = MagicMock()
        engine = FocusEngine(
            _config(notify_on_sound=True, notify_on_haptic=False), notifier=notifier
        )
        engine.skip()
        engine.skip()
        assert notifier.notify.call_count == 2
        notifier.notify.assert_called_with(sound=True, haptic=False)

    def test_notifier_failure_is_swallowed(self):
        notifier = MagicMock()
        notifier.notify.side_effect = RuntimeError("no speaker")
        engine = FocusEngine(_config(), notifier=notifier)

        assert engine.skip() is Phase.SHORT_BREAK
        assert engine.completed_work_sessions == 1

    def test_snapshot_is_a_copy(self):
        engine = FocusEngine(_config(work=5))
        snap = engine.snapshot()
        snap.seconds_remaining = 0
        assert engine.seconds_remaining == 5
        assert snap.to_dict()["phase"] == "work"
