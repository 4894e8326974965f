"""Block component - a bordered box with titles in its top and bottom edges."""

from __future__ import annotations

from clockwatch.layout import Rect
from clockwatch.utils import truncate_to_width, visible_width

_TOP_LEFT = "┌"
_TOP_RIGHT = "┐"
_BOTTOM_LEFT = "└"
_BOTTOM_RIGHT = "┘"
_HORIZONTAL = "─"
_VERTICAL = "│"


class Block:
    """Block component - a bordered box with titles in its top and bottom edges.

    Titles are centered in their border row and may carry ANSI styling.
    The interior is rendered blank; use :meth:`inner` to find the area
    available to the content painted inside the box.
    """

    def __init__(self, title: str = "", title_bottom: str = "") -> None:
        self._title = title
        self._title_bottom = title_bottom

    @staticmethod
    def inner(area: Rect) -> Rect:
        """The area enclosed by the border."""
        return area.inner(1)

    def render(self, area: Rect) -> list[str]:
        width, height = area.width, area.height
        if width < 2 or height < 2:
            return [" " * max(0, width)] * max(0, height)

        span = width - 2
        top = _TOP_LEFT + self._border_row(self._title, span) + _TOP_RIGHT
        bottom = _BOTTOM_LEFT + self._border_row(self._title_bottom, span) + _BOTTOM_RIGHT
        middle = _VERTICAL + " " * span + _VERTICAL

        return [top, *([middle] * (height - 2)), bottom]

    @staticmethod
    def _border_row(title: str, span: int) -> str:
        if not title:
            return _HORIZONTAL * span
        title = truncate_to_width(title, span, ellipsis="")
        title_width = visible_width(title)
        left = (span - title_width) // 2
        right = span - title_width - left
        return _HORIZONTAL * left + title + _HORIZONTAL * right
