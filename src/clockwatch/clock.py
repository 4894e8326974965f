"""Stopwatch state and its text view.

:class:`Clockwatch` accumulates running time from wall-clock deltas handed to
it once per frame, can be paused and resumed, and records lap snapshots.
Its :meth:`Clockwatch.render` is a pure function of that state.
"""

from __future__ import annotations

from datetime import timedelta

from clockwatch.components import Paragraph
from clockwatch.frame import Frame
from clockwatch.layout import Constraint, Rect, split_vertical

_ONE_MILLISECOND = timedelta(milliseconds=1)
_ZERO = timedelta()

LAPS_HEADING = "Laps:"

# Spacer above the clock, one clock row, laps fill the rest
CLOCK_LAYOUT = (
    Constraint.percentage(30),
    Constraint.length(1),
    Constraint.min(0),
)


def format_duration(duration: timedelta) -> str:
    """Format *duration* as ``HH:MM:SS:mmm``.

    Hours are not wrapped and grow past two digits as needed.
    """
    total_ms = duration // _ONE_MILLISECOND
    hours = total_ms // 3_600_000
    minutes = total_ms // 60_000 % 60
    seconds = total_ms // 1000 % 60
    millis = total_ms % 1000
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}:{millis:03d}"


class Clockwatch:
    """Stopwatch with pause/resume and lap recording."""

    def __init__(self) -> None:
        self.running: bool = False
        self.elapsed_time: timedelta = timedelta()
        self.laps: list[timedelta] = []

    def __repr__(self) -> str:
        return (
            f"Clockwatch(running={self.running}, "
            f"elapsed_time={format_duration(self.elapsed_time)}, laps={len(self.laps)})"
        )

    # -- mutators -------------------------------------------------------------

    def update(self, dt: timedelta) -> None:
        """Advance by *dt* of wall-clock time if running."""
        # Negative deltas are dropped so elapsed time never goes backwards
        if self.running and dt > _ZERO:
            self.elapsed_time += dt

    def toggle_start_pause(self) -> None:
        self.running = not self.running

    def lap(self) -> None:
        """Record the current elapsed time as a lap."""
        self.laps.append(self.elapsed_time)

    # -- view -----------------------------------------------------------------

    def clock_text(self) -> str:
        return format_duration(self.elapsed_time)

    def lap_texts(self) -> list[str]:
        """Formatted laps, most recent first."""
        return [format_duration(lap) for lap in reversed(self.laps)]

    def render(self, area: Rect) -> list[str]:
        frame = Frame(area)
        _, clock_area, laps_area = split_vertical(area, CLOCK_LAYOUT)

        frame.render_widget(Paragraph.centered([self.clock_text()]), clock_area)
        frame.render_widget(
            Paragraph.centered([LAPS_HEADING, *self.lap_texts()]), laps_area
        )
        return frame.lines
