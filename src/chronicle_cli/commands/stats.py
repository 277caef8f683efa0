"""Productivity statistics commands."""

from datetime import date, timedelta

import typer
from rich.console import Console
from rich.table import Table

from chronicle_cli.commands.decorators import command_wrapper
from chronicle_cli.commands.utils import get_app
from chronicle_cli.errors import AppError
from chronicle_cli.models.analytics import InsightType, format_focus_duration
from chronicle_cli.utils import exit_codes
from chronicle_cli.utils.formatters import MACHINE_FORMATS, format_output, format_success

console = Console()
app = typer.Typer(help="Productivity statistics and insights")

INSIGHT_STYLES = {
    InsightType.POSITIVE: ("green", "▲"),
    InsightType.NEUTRAL: ("yellow", "●"),
    InsightType.NEGATIVE: ("red", "▼"),
}

OUTPUT_OPTION = typer.Option(None, "--output", "-o", help="Output format (json, yaml)")


def _parse_date(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise AppError(
            f"Invalid date '{value}', expected YYYY-MM-DD", exit_codes.ERROR_INVALID_ARGS
        ) from e


def _output_format(ctx: typer.Context, output: str | None) -> str:
    """An explicit --output wins over the configured default."""
    return output or get_app(ctx).config.output.format


def render_progress_bar(value: float, max_value: float, width: int = 10) -> str:
    """Render a progress bar using block characters."""
    ratio = 0.0 if max_value <= 0 else min(value / max_value, 1.0)
    filled = int(ratio * width)
    return "█" * filled + "░" * (width - filled)


@app.command("today")
@command_wrapper
def show_today(
    ctx: typer.Context,
    day: str = typer.Option(None, "--date", "-d", help="Day to show (YYYY-MM-DD)"),
    output: str = OUTPUT_OPTION,
):
    """Show the stats recorded for one day."""
    analytics = get_app(ctx).analytics
    target = _parse_date(day)
    stat = analytics.daily_stat(target)

    output = _output_format(ctx, output)
    if output in MACHINE_FORMATS:
        format_output(stat.to_dict() if stat else None, output)
        return

    label = (target or analytics.today()).strftime("%B %d, %Y")
    console.print(f"\n[bold cyan]🍅 Summary - {label}[/bold cyan]\n")
    if stat is None:
        console.print("[dim]Nothing recorded for this day.[/dim]\n")
        return

    console.print(f"Tasks created:   [bold]{stat.tasks_created}[/bold]")
    console.print(f"Tasks completed: [bold]{stat.tasks_completed}[/bold]")
    console.print(f"Notes created:   [bold]{stat.notes_created}[/bold]")
    console.print(f"Pomodoros:       [bold]{stat.pomodoro_sessions}[/bold]")
    console.print(f"Focus time:      [bold]{format_focus_duration(stat.focus_seconds)}[/bold]\n")


@app.command("week")
@command_wrapper
def show_week(
    ctx: typer.Context,
    day: str = typer.Option(None, "--date", "-d", help="Any day of the week (YYYY-MM-DD)"),
    output: str = OUTPUT_OPTION,
):
    """Recompute and show the rollup for one week (Monday to Sunday)."""
    analytics = get_app(ctx).analytics
    week = analytics.recompute_weekly_rollup(_parse_date(day))

    output = _output_format(ctx, output)
    if output in MACHINE_FORMATS:
        format_output(week.to_dict(), output)
        return

    end = week.week_start + timedelta(days=6)
    console.print(
        f"\n[bold cyan]🍅 Week of {week.week_start:%b %d} - {end:%b %d, %Y}[/bold cyan]\n"
    )

    days = [analytics.daily_stat(week.week_start + timedelta(days=i)) for i in range(7)]
    most = max((d.tasks_completed for d in days if d), default=0)
    for offset, stat in enumerate(days):
        current = week.week_start + timedelta(days=offset)
        completed = stat.tasks_completed if stat else 0
        focus = format_focus_duration(stat.focus_seconds) if stat else "-"
        bar = render_progress_bar(completed, most)
        console.print(f"  {current:%a}  {bar}  {completed:>3} tasks  {focus:>7}")

    console.print()
    console.print(f"Completed tasks: [bold]{week.completed_tasks}[/bold] / {week.total_tasks} created")
    console.print(f"Focus time:      [bold]{format_focus_duration(week.total_focus_seconds)}[/bold]")
    console.print(
        f"Daily average:   [bold]{week.average_daily_productivity:.1f}[/bold] tasks "
        f"over {week.days_with_data} active days\n"
    )


@app.command("weeks")
@command_wrapper
def show_weeks(ctx: typer.Context, output: str = OUTPUT_OPTION):
    """List stored weekly rollups, newest first."""
    weeks = get_app(ctx).analytics.weekly_stats()

    output = _output_format(ctx, output)
    if output in MACHINE_FORMATS:
        format_output([w.to_dict() for w in weeks], output)
        return

    if not weeks:
        console.print("[yellow]No weekly rollups yet. Run 'chronicle stats week'.[/yellow]")
        return

    table = Table(title="Weekly rollups")
    table.add_column("Week of")
    table.add_column("Completed", justify="right")
    table.add_column("Created", justify="right")
    table.add_column("Focus", justify="right")
    table.add_column("Avg/day", justify="right")
    for week in weeks:
        table.add_row(
            week.week_start.isoformat(),
            str(week.completed_tasks),
            str(week.total_tasks),
            format_focus_duration(week.total_focus_seconds),
            f"{week.average_daily_productivity:.1f}",
        )
    console.print(table)


@app.command("totals")
@command_wrapper
def show_totals(ctx: typer.Context, output: str = OUTPUT_OPTION):
    """Show lifetime totals."""
    totals = get_app(ctx).analytics.totals()

    output = _output_format(ctx, output)
    if output in MACHINE_FORMATS:
        format_output(totals.to_dict(), output)
        return

    rate = totals.completion_rate
    console.print("\n[bold cyan]Lifetime totals[/bold cyan]\n")
    console.print(f"Tasks created:      [bold]{totals.tasks_created}[/bold]")
    console.print(f"Tasks completed:    [bold]{totals.tasks_completed}[/bold]")
    console.print(f"Completion rate:    [bold]{'-' if rate is None else f'{rate:.0%}'}[/bold]")
    console.print(f"Notes created:      [bold]{totals.notes_created}[/bold]")
    console.print(f"Pomodoros:          [bold]{totals.pomodoro_sessions_completed}[/bold]")
    console.print(
        f"Focus time:         [bold]{format_focus_duration(totals.total_focus_seconds)}[/bold]\n"
    )


@app.command("insights")
@command_wrapper
def show_insights(
    ctx: typer.Context,
    day: str = typer.Option(None, "--date", "-d", help="Day to evaluate (YYYY-MM-DD)"),
    output: str = OUTPUT_OPTION,
):
    """Show productivity insights."""
    insights = get_app(ctx).analytics.insights(_parse_date(day))

    output = _output_format(ctx, output)
    if output in MACHINE_FORMATS:
        format_output([i.to_dict() for i in insights], output)
        return

    if not insights:
        console.print("[dim]No insights yet. Complete a task or a focus session.[/dim]")
        return

    for insight in insights:
        color, marker = INSIGHT_STYLES[insight.type]
        console.print(f"[{color}]{marker}[/{color}] [bold]{insight.title}[/bold]: {insight.description}")


@app.command("export")
@command_wrapper
def export_stats(ctx: typer.Context, output: str = typer.Option("json", "--output", "-o")):
    """Dump the full analytics snapshot."""
    format_output(get_app(ctx).analytics.export(), output)


@app.command("reset")
@command_wrapper
def reset_stats(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
):
    """Delete all analytics data."""
    if not yes and not typer.confirm("Delete all analytics data?", default=False):
        console.print("[yellow]Cancelled.[/yellow]")
        raise typer.Exit(0)

    chronicle = get_app(ctx)
    chronicle.analytics.reset()
    chronicle.writer.flush()
    format_success("Analytics reset")
