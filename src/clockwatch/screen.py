"""Differential painting of full-screen frames.

The renderer remembers the rows it painted last time and, for the next
frame, only rewrites rows whose content changed.  A full clear-and-paint
happens on the first frame and whenever the screen size changes.  Rows are
addressed absolutely, which suits the alternate screen where the frame
always starts at the top-left cell.
"""

from __future__ import annotations

from clockwatch.utils import SGR_RESET, visible_width

_CLEAR_SCREEN = "\x1b[2J"
_CLEAR_TO_EOL = "\x1b[K"
_MOVE_TO_FMT = "\x1b[{};1H"


class ScreenRenderer:
    """Turns successive frames into minimal terminal output."""

    def __init__(self) -> None:
        self._previous_lines: list[str] = []
        self._previous_size: tuple[int, int] | None = None
        self._full_redraw_count: int = 0

    @property
    def full_redraws(self) -> int:
        """Number of full (non-differential) redraws performed."""
        return self._full_redraw_count

    def reset(self) -> None:
        """Forget the previous frame so the next render repaints everything."""
        self._previous_lines = []
        self._previous_size = None

    def render(self, lines: list[str], width: int, height: int) -> str:
        """Return the escape-sequence output that paints *lines*."""
        lines = lines[:height]
        force_full = (width, height) != self._previous_size

        out: list[str] = []
        if force_full:
            self._full_redraw_count += 1
            out.append(_CLEAR_SCREEN)

        for row, line in enumerate(lines):
            old_line = self._previous_lines[row] if row < len(self._previous_lines) else None
            if not force_full and line == old_line:
                continue
            out.append(_MOVE_TO_FMT.format(row + 1))
            out.append(line)
            out.append(SGR_RESET)
            # A full-width row leaves the cursor on the last cell, which EL would erase
            if visible_width(line) < width:
                out.append(_CLEAR_TO_EOL)

        # Rows that were painted before but are now past the end of the frame
        if not force_full:
            for row in range(len(lines), len(self._previous_lines)):
                out.append(_MOVE_TO_FMT.format(row + 1))
                out.append(_CLEAR_TO_EOL)

        self._previous_lines = list(lines)
        self._previous_size = (width, height)
        return "".join(out)
