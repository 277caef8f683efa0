"""Non-blocking keyboard input mapped to focus engine commands."""

from __future__ import annotations

import select
import sys
import termios
import tty
from typing import Literal

from .engine import FocusEngine

Action = Literal["toggle", "skip", "reset", "quit"]

KEY_BINDINGS: dict[str, Action] = {
    " ": "toggle",
    "p": "toggle",
    "s": "skip",
    "x": "reset",
    "q": "quit",
}


class KeyboardHandler:
    """Reads single keypresses without blocking (POSIX terminals)."""

    def __init__(self):
        self.fd = None
        self.old_settings = None
        self._setup()

    def _setup(self):
        """Put the terminal in cbreak mode if stdin is a tty."""
        try:
            self.fd = sys.stdin.fileno()
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except (OSError, ValueError, termios.error):
            # Not a terminal (piped input, test runner)
            self.old_settings = None

    def get_key(self) -> str | None:
        """Return the pressed key, lowercased, or None."""
        if self.old_settings is None:
            return None
        if select.select([sys.stdin], [], [], 0)[0]:
            return sys.stdin.read(1).lower()
        return None

    def stop(self):
        """Restore terminal settings."""
        if self.old_settings is not None:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            self.old_settings = None


def dispatch_key(engine: FocusEngine, key: str | None) -> Action | None:
    """Apply the command bound to ``key``. Returns the action taken."""
    if key is None:
        return None
    action = KEY_BINDINGS.get(key)
    if action == "toggle":
        engine.toggle()
    elif action == "skip":
        engine.skip()
    elif action == "reset":
        engine.reset()
    return action
