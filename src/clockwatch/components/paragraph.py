"""Paragraph component - aligned lines of text clipped to their area."""

from __future__ import annotations

from typing import Literal

from clockwatch.layout import Rect
from clockwatch.utils import truncate_to_width, visible_width

Alignment = Literal["left", "center", "right"]


class Paragraph:
    """Paragraph component - aligned lines of text clipped to their area.

    Lines are never wrapped: anything wider than the area is cut, and lines
    beyond the area height are dropped.
    """

    def __init__(self, lines: list[str] | None = None, alignment: Alignment = "left") -> None:
        self._lines = list(lines or [])
        self._alignment = alignment

    @classmethod
    def centered(cls, lines: list[str]) -> Paragraph:
        return cls(lines, alignment="center")

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def render(self, area: Rect) -> list[str]:
        if area.is_empty:
            return []

        width = area.width
        result: list[str] = []
        for line in self._lines[: area.height]:
            line = truncate_to_width(line, width, ellipsis="")
            line_width = visible_width(line)
            slack = width - line_width

            if self._alignment == "center":
                left = slack // 2
            elif self._alignment == "right":
                left = slack
            else:
                left = 0

            result.append(" " * left + line + " " * (slack - left))

        # Blank out rows below the text
        while len(result) < area.height:
            result.append(" " * width)

        return result
