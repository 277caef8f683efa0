"""Main entry point for Chronicle CLI."""

import typer
from rich.console import Console

from chronicle_cli import __version__
from chronicle_cli.commands import config, focus, record, stats

app = typer.Typer(
    name="chronicle",
    help="Focus timer and productivity analytics",
    no_args_is_help=True,
)

console = Console()

app.add_typer(focus.app, name="focus", help="Pomodoro focus timer")
app.add_typer(stats.app, name="stats", help="Productivity statistics and insights")
app.add_typer(record.app, name="record", help="Report task, note and focus events")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Chronicle CLI[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Entry point for the console script."""
    app()


if __name__ == "__main__":
    main()
