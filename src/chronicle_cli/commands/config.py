"""Configuration commands."""

import typer

from chronicle_cli.commands.decorators import command_wrapper
from chronicle_cli.services.config_service import get_config_service
from chronicle_cli.utils.formatters import format_output, format_success
from chronicle_cli.utils.logger import log_file_path

app = typer.Typer(help="Configuration management")


@app.command("show")
@command_wrapper
def show_config(
    output: str = typer.Option("yaml", "--output", "-o", help="Output format (json, yaml)"),
):
    """Show the current configuration."""
    format_output(get_config_service().config.model_dump(), output)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Dotted key, e.g. focus.work_minutes"),
    value: str = typer.Argument(..., help="New value"),
):
    """Set a configuration value."""
    get_config_service().set_value(key, value)
    format_success(f"Set {key} = {value}")


@app.command("reset")
@command_wrapper
def reset_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
):
    """Restore the default configuration."""
    if not yes and not typer.confirm("Reset configuration to defaults?", default=False):
        raise typer.Exit(0)
    get_config_service().reset_config()
    format_success("Configuration reset")


@app.command("path")
def config_path(
    log: bool = typer.Option(False, "--log", help="Print the log file location instead"),
):
    """Print the config file location."""
    if log:
        typer.echo(str(log_file_path()))
    else:
        typer.echo(str(get_config_service().config_path))
