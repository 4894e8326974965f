"""Input events produced by the terminal driver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

KeyEventKind = Literal["press", "repeat", "release"]


@dataclass(frozen=True)
class KeyEvent:
    """A key transition.

    ``code`` is a key identifier as returned by
    :func:`clockwatch.keys.parse_key`, e.g. ``"q"``, ``"space"`` or
    ``"ctrl+c"``.
    """

    code: str
    kind: KeyEventKind = "press"

    @property
    def is_press(self) -> bool:
        return self.kind == "press"


@dataclass(frozen=True)
class PasteEvent:
    """Text delivered through bracketed paste."""

    text: str


@dataclass(frozen=True)
class ResizeEvent:
    columns: int
    rows: int


Event = Union[KeyEvent, PasteEvent, ResizeEvent]
