"""Phase-completion notifiers."""

from __future__ import annotations

import logging
from typing import Protocol

from rich.console import Console

from chronicle_cli.errors import NotificationError

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def notify(self, sound: bool, haptic: bool) -> None: ...


class NullNotifier:
    """Notifier that does nothing."""

    def notify(self, sound: bool, haptic: bool) -> None:
        return None


class TerminalNotifier:
    """Rings the terminal bell on phase completion."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def notify(self, sound: bool, haptic: bool) -> None:
        if sound:
            try:
                self.console.bell()
            except OSError as e:
                raise NotificationError(f"terminal bell failed: {e}") from e
        if haptic:
            # Terminals have no vibration motor
            logger.debug("haptic notification requested; not supported here")
