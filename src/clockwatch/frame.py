"""Frames: the line buffer painted in one render pass.

A :class:`Frame` covers a rectangle of the screen and holds one string per
row, each exactly as wide as the frame.  Widgets render themselves into a
sub-rectangle and the frame composites their lines over its own, keeping
ANSI styling on both sides of the painted region intact.
"""

from __future__ import annotations

from typing import Protocol

from clockwatch.layout import Rect
from clockwatch.utils import (
    apply_line_reset,
    extract_segments,
    truncate_to_width,
    visible_width,
)


class Widget(Protocol):
    """Anything that can turn a target rectangle into text lines.

    The returned list should hold at most ``area.height`` lines, each at
    most ``area.width`` visible columns wide.  Longer output is clipped.
    """

    def render(self, area: Rect) -> list[str]: ...


class Frame:
    """Line buffer for *area*, initially blank."""

    def __init__(self, area: Rect) -> None:
        self.area = area
        self.lines: list[str] = [" " * area.width for _ in range(area.height)]

    @classmethod
    def of_size(cls, width: int, height: int) -> Frame:
        return cls(Rect(0, 0, max(0, width), max(0, height)))

    def render_widget(self, widget: Widget, area: Rect) -> None:
        """Render *widget* into *area* (absolute coordinates)."""
        target = area.intersection(self.area)
        if target.is_empty:
            return

        rendered = widget.render(target)
        col = target.x - self.area.x
        for line_idx, line in enumerate(rendered[: target.height]):
            row = target.y - self.area.y + line_idx
            self.lines[row] = composite_line_at(
                self.lines[row], line, col, target.width, self.area.width
            )


def composite_line_at(
    base_line: str,
    line: str,
    col: int,
    width: int,
    total_width: int,
) -> str:
    """Paint *line* over *base_line* in columns ``[col, col + width)``.

    *line* is truncated or space-padded to exactly *width* columns.
    """
    after_start = col + width
    after_len = max(0, total_width - after_start)

    before, after = extract_segments(base_line, col, after_start, after_len)
    before = apply_line_reset(before)
    before_width = visible_width(before)
    if before_width < col:
        before += " " * (col - before_width)

    painted = apply_line_reset(truncate_to_width(line, width, ellipsis="", pad=True))

    return before + painted + after
