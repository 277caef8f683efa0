"""Full-screen timer UI for focus mode."""

import time
from collections.abc import Callable

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from .clock import TickDriver
from .controls import KeyboardHandler, dispatch_key
from .engine import SESSIONS_BEFORE_LONG_BREAK, FocusEngine, Phase

PHASE_COLORS = {
    Phase.WORK: "cyan",
    Phase.SHORT_BREAK: "green",
    Phase.LONG_BREAK: "magenta",
}


def format_clock(seconds: int) -> str:
    mins, secs = divmod(max(0, seconds), 60)
    return f"{mins:02d}:{secs:02d}"


def render_progress_bar(fraction: float, width: int = 40) -> str:
    fraction = min(max(fraction, 0.0), 1.0)
    filled = int(width * fraction)
    return "▓" * filled + "░" * (width - filled)


def cycle_dots(engine: FocusEngine) -> str:
    """Dots showing the position within the current four-session cycle."""
    position = engine.position_in_cycle
    dots = []
    for i in range(1, SESSIONS_BEFORE_LONG_BREAK + 1):
        if i < position or (i == position and engine.phase.is_break):
            dots.append("●")
        elif i == position:
            dots.append("◉")
        else:
            dots.append("○")
    return " ".join(dots)


class TimerDisplay:
    """Renders a FocusEngine as a full-screen live view."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def create_layout(self, engine: FocusEngine) -> Layout:
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )

        color = PHASE_COLORS[engine.phase]
        title = engine.phase.display_name
        if not engine.is_running:
            title = f"{title} (paused)"
            color = "yellow"
        header_text = Text(f"🍅  {title}", style=f"bold {color}", justify="center")
        layout["header"].update(Align.center(header_text, vertical="middle"))

        layout["body"].update(Align.center(self._create_body(engine, color), vertical="middle"))

        hints = "space/p pause-resume  •  s skip  •  x reset  •  q quit"
        layout["footer"].update(
            Align.center(Text(hints, style="dim", justify="center"), vertical="middle")
        )
        return layout

    def _create_body(self, engine: FocusEngine, color: str) -> Group:
        progress = engine.progress_fraction
        components = [
            Text(format_clock(engine.seconds_remaining), style=f"bold {color}", justify="center"),
            Text(""),
            Text(
                f"{render_progress_bar(progress)}  {int(progress * 100)}%",
                style="dim",
                justify="center",
            ),
            Text(""),
            Text(cycle_dots(engine), justify="center"),
            Text(
                f"Sessions: {engine.completed_work_sessions}  •  "
                f"Focused: {engine.accumulated_focus_seconds // 60}m",
                style="dim",
                justify="center",
            ),
        ]
        return Group(*components)

    def run(
        self,
        driver: TickDriver,
        on_phase_change: Callable[[Phase], None] | None = None,
        refresh_interval: float = 0.25,
    ) -> str:
        """
        Drive the engine until the user quits.

        Returns 'quit' or 'interrupted'.
        """
        engine = driver.engine
        keyboard = KeyboardHandler()

        try:
            with Live(
                self.create_layout(engine),
                console=self.console,
                refresh_per_second=4,
                screen=True,
            ) as live:
                while True:
                    if dispatch_key(engine, keyboard.get_key()) == "quit":
                        return "quit"

                    for phase in driver.pump():
                        if on_phase_change:
                            on_phase_change(phase)

                    live.update(self.create_layout(engine))
                    time.sleep(refresh_interval)

        except KeyboardInterrupt:
            return "interrupted"
        finally:
            keyboard.stop()


def show_summary(engine: FocusEngine, console: Console | None = None) -> None:
    """Print a summary panel after the timer view closes."""
    console = console or Console()
    minutes = engine.accumulated_focus_seconds // 60

    panel = Panel(
        f"""[bold green]Focus session ended[/bold green]

Completed pomodoros: {engine.completed_work_sessions}
Focus time: {minutes} minutes
Stopped in: {engine.phase.display_name} ({format_clock(engine.seconds_remaining)} left)""",
        border_style="green",
        padding=(1, 2),
    )
    console.print(panel)
