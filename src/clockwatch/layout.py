"""Rectangular regions and a vertical layout solver.

Sizes are expressed as :class:`Constraint` values: an exact number of rows,
a percentage of the available height, or a flexible region with a minimum
height that absorbs whatever space is left over.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Sequence

ConstraintKind = Literal["length", "percentage", "min"]


@dataclass(frozen=True)
class Rect:
    """A rectangle of terminal cells; ``x``/``y`` are zero-based offsets."""

    x: int
    y: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def right(self) -> int:
        return self.x + self.width

    def inner(self, margin: int = 1) -> Rect:
        """Shrink by *margin* cells on every side (never below zero size)."""
        width = max(0, self.width - 2 * margin)
        height = max(0, self.height - 2 * margin)
        return Rect(self.x + margin, self.y + margin, width, height)

    def intersection(self, other: Rect) -> Rect:
        x = max(self.x, other.x)
        y = max(self.y, other.y)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        return Rect(x, y, max(0, right - x), max(0, bottom - y))


@dataclass(frozen=True)
class Constraint:
    """Size request for one region of a layout."""

    kind: ConstraintKind
    value: int

    @classmethod
    def length(cls, rows: int) -> Constraint:
        return cls("length", rows)

    @classmethod
    def percentage(cls, percent: int) -> Constraint:
        return cls("percentage", percent)

    @classmethod
    def min(cls, rows: int) -> Constraint:
        return cls("min", rows)

    def resolve(self, reference_size: int) -> int:
        """Requested size against *reference_size* (before clamping)."""
        if self.kind == "percentage":
            return math.floor(reference_size * self.value / 100)
        return self.value


def split_vertical(area: Rect, constraints: Sequence[Constraint]) -> list[Rect]:
    """Split *area* into stacked rows, one per constraint, top to bottom.

    Requested sizes are granted in order and clamped to the rows still
    available.  Rows left over are shared by the ``min`` constraints, with
    any remainder going to the last of them.
    """
    total = area.height
    sizes: list[int] = []
    remaining = total
    for constraint in constraints:
        size = max(0, min(constraint.resolve(total), remaining))
        sizes.append(size)
        remaining -= size

    flexible = [i for i, c in enumerate(constraints) if c.kind == "min"]
    if flexible and remaining > 0:
        share, extra = divmod(remaining, len(flexible))
        for i in flexible:
            sizes[i] += share
        sizes[flexible[-1]] += extra

    rects: list[Rect] = []
    y = area.y
    for size in sizes:
        rects.append(Rect(area.x, y, area.width, size))
        y += size
    return rects
