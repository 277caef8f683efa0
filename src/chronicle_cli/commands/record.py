"""Commands that report task, note and focus events to analytics.

These are the hooks a task or note store calls after mutating its own data.
"""

import typer

from chronicle_cli.commands.decorators import command_wrapper
from chronicle_cli.commands.utils import get_app
from chronicle_cli.models.events import (
    FocusTimeLogged,
    NoteCreated,
    PomodoroCompleted,
    TaskCompleted,
    TaskCreated,
)
from chronicle_cli.utils.formatters import format_success

app = typer.Typer(help="Report task, note and focus events")


def _publish(ctx: typer.Context, event, count: int) -> None:
    chronicle = get_app(ctx)
    for _ in range(count):
        chronicle.event_bus.publish(event)
    chronicle.writer.flush()


COUNT_OPTION = typer.Option(1, "--count", "-n", min=1, help="Number of events")


@app.command("task-created")
@command_wrapper
def task_created(ctx: typer.Context, count: int = COUNT_OPTION):
    """Record created tasks."""
    _publish(ctx, TaskCreated(), count)
    format_success(f"Recorded {count} created task(s)")


@app.command("task-completed")
@command_wrapper
def task_completed(ctx: typer.Context, count: int = COUNT_OPTION):
    """Record completed tasks."""
    _publish(ctx, TaskCompleted(), count)
    format_success(f"Recorded {count} completed task(s)")


@app.command("note-created")
@command_wrapper
def note_created(ctx: typer.Context, count: int = COUNT_OPTION):
    """Record created notes."""
    _publish(ctx, NoteCreated(), count)
    format_success(f"Recorded {count} created note(s)")


@app.command("focus")
@command_wrapper
def focus(
    ctx: typer.Context,
    minutes: float = typer.Argument(..., min=0, help="Focus time in minutes"),
    pomodoro: bool = typer.Option(
        False, "--pomodoro", help="Count it as a completed focus session"
    ),
):
    """Record focus time spent away from the timer."""
    seconds = minutes * 60
    if pomodoro:
        _publish(ctx, PomodoroCompleted(duration_seconds=int(seconds)), 1)
        format_success(f"Recorded a {minutes:g}-minute focus session")
    else:
        _publish(ctx, FocusTimeLogged(duration_seconds=seconds), 1)
        format_success(f"Recorded {minutes:g} minutes of focus time")
