"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.console import Console

console = Console()
error_console = Console(stderr=True)

MACHINE_FORMATS = ("json", "yaml")


def format_output(data: Any, output_format: str) -> None:
    """Print ``data`` as JSON or YAML."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
    else:
        raise ValueError(f"Unsupported output format: {output_format}")


def format_error(message: str) -> None:
    error_console.print(f"[red]Error:[/red] {message}")


def format_success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")
