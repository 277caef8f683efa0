"""Focus timer commands."""

import typer
from rich.console import Console
from rich.table import Table

from chronicle_cli.commands.decorators import command_wrapper
from chronicle_cli.commands.utils import get_app
from chronicle_cli.models.focus.clock import TickDriver
from chronicle_cli.models.focus.engine import FocusConfiguration, FocusEngine, Phase
from chronicle_cli.models.focus.ui import TimerDisplay, format_clock, show_summary

console = Console()
app = typer.Typer(help="Pomodoro focus timer")


def _configuration(
    base: FocusConfiguration,
    work: int | None,
    short_break: int | None,
    long_break: int | None,
    sound: bool,
    haptic: bool,
) -> FocusConfiguration:
    return FocusConfiguration(
        work_seconds=work * 60 if work is not None else base.work_seconds,
        short_break_seconds=(
            short_break * 60 if short_break is not None else base.short_break_seconds
        ),
        long_break_seconds=long_break * 60 if long_break is not None else base.long_break_seconds,
        notify_on_sound=sound and base.notify_on_sound,
        notify_on_haptic=haptic and base.notify_on_haptic,
    )


@app.command("run")
@command_wrapper
def run_focus(
    ctx: typer.Context,
    work: int = typer.Option(None, "--work", "-w", help="Work duration (minutes)"),
    short_break: int = typer.Option(
        None, "--short-break", "-s", help="Short break duration (minutes)"
    ),
    long_break: int = typer.Option(
        None, "--long-break", "-l", help="Long break duration (minutes)"
    ),
    sound: bool = typer.Option(True, "--sound/--no-sound", help="Ring on phase change"),
    haptic: bool = typer.Option(True, "--haptic/--no-haptic", help="Vibrate on phase change"),
    autostart: bool = typer.Option(True, "--autostart/--no-autostart", help="Start immediately"),
):
    """Run the full-screen Pomodoro timer."""
    chronicle = get_app(ctx)
    engine = chronicle.focus
    engine.configure(_configuration(engine.config, work, short_break, long_break, sound, haptic))

    if autostart:
        engine.start()

    display = TimerDisplay(console)
    result = display.run(TickDriver(engine))

    chronicle.analytics.recompute_weekly_rollup()
    chronicle.writer.flush()

    show_summary(engine, console)
    if result == "interrupted":
        console.print("[yellow]Timer interrupted.[/yellow]")


@app.command("plan")
@command_wrapper
def plan_sessions(
    ctx: typer.Context,
    sessions: int = typer.Option(4, "--sessions", "-n", min=1, help="Work sessions to plan"),
    work: int = typer.Option(None, "--work", "-w", help="Work duration (minutes)"),
    short_break: int = typer.Option(
        None, "--short-break", "-s", help="Short break duration (minutes)"
    ),
    long_break: int = typer.Option(
        None, "--long-break", "-l", help="Long break duration (minutes)"
    ),
):
    """Show the phase sequence for the next work sessions."""
    base = get_app(ctx).config.focus.to_configuration()
    config = _configuration(base, work, short_break, long_break, False, False)

    # Scratch engine, so planning never touches the real timer or analytics
    engine = FocusEngine(config)

    table = Table(title="Focus plan")
    table.add_column("#", justify="right")
    table.add_column("Phase")
    table.add_column("Duration", justify="right")
    table.add_column("Starts at", justify="right")

    elapsed = 0
    step = 1
    # Each work session is followed by its break
    for _ in range(sessions * 2):
        phase = engine.phase
        duration = engine.duration_for(phase)
        style = "cyan" if phase is Phase.WORK else "green"
        table.add_row(
            str(step),
            f"[{style}]{phase.display_name}[/{style}]",
            format_clock(duration),
            format_clock(elapsed),
        )
        elapsed += duration
        step += 1
        engine.skip()

    console.print(table)
    console.print(f"Total: [bold]{elapsed // 60}[/bold] minutes")
