"""Shared helpers for command modules."""

import typer

from chronicle_cli.services.app_service import ChronicleApp, build_app


def get_app(ctx: typer.Context) -> ChronicleApp:
    """Return the process-wide app, building it on first use.

    The app lives on the root click context, so a caller (or a test) can
    supply its own through ``obj``.
    """
    root = ctx.find_root()
    if root.obj is None:
        root.obj = build_app()
        root.call_on_close(root.obj.close)
    return root.obj
