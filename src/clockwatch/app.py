"""Application loop: input dispatch, clock updates and repainting.

:class:`App` owns the :class:`~clockwatch.clock.Clockwatch` and drives it
from a single-threaded polling loop.  Each frame measures the real time since
the previous one, drains pending key presses, advances the clock by that
delta and repaints the whole screen.
"""

from __future__ import annotations

import logging
import time
from datetime import timedelta
from typing import Callable

from clockwatch.clock import Clockwatch
from clockwatch.components import Block
from clockwatch.config import Config
from clockwatch.events import KeyEvent
from clockwatch.frame import Frame
from clockwatch.terminal import ProcessTerminal, Terminal

logger = logging.getLogger(__name__)

# ── ANSI helpers ─────────────────────────────────────────────────────

_BOLD = "\x1b[1m"
_BLUE = "\x1b[34m"
_RESET = "\x1b[0m"


def _hint(key: str) -> str:
    return f"{_BLUE}{_BOLD}{key}{_RESET}"


TITLE = f"{_BOLD} Clockwatch rust app {_RESET}"

INSTRUCTIONS = (
    f" Pause/Start {_hint('<Space>')}"
    f" Lap {_hint('<l>')}"
    f" Exit {_hint('<q>')}"
)

# Key identifier -> action name
KEY_BINDINGS: dict[str, str] = {
    "q": "quit",
    "space": "toggle",
    "l": "lap",
}


class App:
    """Driver loop around a single :class:`Clockwatch`.

    ``time_source`` returns monotonic seconds and ``sleep`` blocks for a
    number of seconds; both are swappable so the loop can run against a
    fake clock.  ``frame_interval`` caps the frame rate when set.
    """

    def __init__(
        self,
        clock: Clockwatch | None = None,
        *,
        time_source: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        frame_interval: float | None = None,
    ) -> None:
        self.clock = clock if clock is not None else Clockwatch()
        self.exit = False
        self.frames = 0
        self.chrome = Block(title=TITLE, title_bottom=INSTRUCTIONS)
        self._time_source = time_source
        self._sleep = sleep
        self._frame_interval = frame_interval
        self.last_frame: float = time_source()

    def run(self, terminal: Terminal) -> None:
        """Run frames until the quit key is pressed."""
        logger.debug("Entering render loop")
        while not self.exit:
            self.tick(terminal)
        logger.debug("Render loop finished after %d frames", self.frames)

    def tick(self, terminal: Terminal) -> None:
        """Run exactly one frame."""
        frame_start = self._time_source()
        dt = timedelta(seconds=frame_start - self.last_frame)
        self.last_frame = frame_start

        self.handle_events(terminal)
        self.update(dt)
        terminal.draw(self.draw)

        self.frames += 1
        self._pace(frame_start)

    def update(self, dt: timedelta) -> None:
        self.clock.update(dt)

    def draw(self, frame: Frame) -> None:
        frame.render_widget(self.chrome, frame.area)
        frame.render_widget(self.clock, Block.inner(frame.area))

    # -- input --------------------------------------------------------------

    def handle_events(self, terminal: Terminal) -> None:
        """Dispatch every event that is already pending, without waiting."""
        while terminal.poll_event(0):
            event = terminal.read_event()
            if isinstance(event, KeyEvent):
                if event.is_press:
                    self.handle_key_pressed_event(event)
            else:
                logger.debug("Ignoring %r", event)

    def handle_key_pressed_event(self, event: KeyEvent) -> None:
        action = KEY_BINDINGS.get(event.code)
        if action == "quit":
            logger.debug("Quit requested")
            self.exit = True
        elif action == "toggle":
            self.clock.toggle_start_pause()
            state = "Started" if self.clock.running else "Paused"
            logger.debug("%s at %s", state, self.clock.clock_text())
        elif action == "lap":
            self.clock.lap()
            logger.debug("Lap %d at %s", len(self.clock.laps), self.clock.clock_text())

    # -- pacing -------------------------------------------------------------

    def _pace(self, frame_start: float) -> None:
        if self._frame_interval is None:
            return
        remaining = self._frame_interval - (self._time_source() - frame_start)
        if remaining > 0:
            self._sleep(remaining)


def run_app(config: Config, terminal: Terminal | None = None) -> App:
    """Run the stopwatch on *terminal* (the process terminal by default).

    The terminal is restored even when the loop fails.
    """
    if terminal is None:
        terminal = ProcessTerminal(write_log_path=config.write_log)
    app = App(frame_interval=config.frame_interval)
    try:
        terminal.init()
        app.run(terminal)
    finally:
        terminal.restore()
    return app
