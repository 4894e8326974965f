"""Keyboard input parsing for terminal applications.

Turns one complete input sequence (as split by
:class:`clockwatch.stdin_buffer.StdinBuffer`) into a key identifier such as
``"q"``, ``"space"`` or ``"ctrl+c"``.  Handles the kitty keyboard protocol,
xterm ``modifyOtherKeys``, legacy escape sequences and plain bytes.  With the
kitty protocol's event-type reporting enabled, presses are told apart from
repeats and releases.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from clockwatch.events import KeyEvent, KeyEventKind
from clockwatch.stdin_buffer import BRACKETED_PASTE_START

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

# Caps lock / num lock bits, never part of a key identifier
LOCK_MASK = 64 + 128

CODEPOINTS: dict[str, int] = {
    "escape": 27,
    "tab": 9,
    "enter": 13,
    "space": 32,
    "backspace": 127,
}

# Kitty event-type field
EVENT_KINDS: dict[int, KeyEventKind] = {
    1: "press",
    2: "repeat",
    3: "release",
}

# Final byte of CSI / SS3 sequences -> key
_LETTER_KEYS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
    "P": "f1",
    "Q": "f2",
    "R": "f3",
    "S": "f4",
}

# Number of ``CSI <n> ~`` sequences -> key
_FUNCTIONAL_KEYS: dict[int, str] = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "pageUp",
    6: "pageDown",
    15: "f5",
    17: "f6",
    18: "f7",
    19: "f8",
    20: "f9",
    21: "f10",
    23: "f11",
    24: "f12",
}

# Kitty private-use codepoints
_KITTY_KEYS: dict[int, str] = {
    57414: "enter",  # keypad enter
    **{57364 + i: f"f{i + 1}" for i in range(12)},
}

LEGACY_KEY_SEQUENCES: dict[str, str] = {
    **{f"\x1b[{final}": name for final, name in _LETTER_KEYS.items()},
    **{f"\x1bO{final}": name for final, name in _LETTER_KEYS.items()},
    **{f"\x1b[{number}~": name for number, name in _FUNCTIONAL_KEYS.items()},
    "\x1b[Z": "shift+tab",
}

_SINGLE_BYTE_KEYS: dict[str, str] = {
    "\x1b": "escape",
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    " ": "space",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x00": "ctrl+space",
}

# ---------------------------------------------------------------------------
# Kitty sequence parsing
# ---------------------------------------------------------------------------


@dataclass
class ParsedKittySequence:
    """Fields of one kitty keyboard protocol sequence.

    ``key`` is set instead of ``codepoint`` for keys reported by name
    (arrows, function keys and the like).
    """

    codepoint: int
    shifted_key: Optional[int]
    base_layout_key: Optional[int]
    modifier: int
    event_type: int
    key: Optional[str] = None


# CSI u: \x1b[<codepoint>(:<shifted>(:<base>))?(;<modifier>(:<event_type>))?u
_KITTY_CSI_U_RE = re.compile(
    r"\x1b\[(\d+)(?::(\d*)(?::(\d+))?)?(?:;(\d+)(?::(\d+))?)?u$"
)

# \x1b[1;<modifier>(:<event_type>)?<letter>
_KITTY_LETTER_RE = re.compile(r"\x1b\[1;(\d+)(?::(\d+))?([ABCDHFPQRS])$")

# \x1b[<number>;<modifier>(:<event_type>)?~
_KITTY_FUNCTIONAL_RE = re.compile(r"\x1b\[(\d+);(\d+)(?::(\d+))?~$")

# \x1b[27;<modifier>;<keycode>~
_MODIFY_OTHER_KEYS_RE = re.compile(r"\x1b\[27;(\d+);(\d+)~$")

# Event type sits after the modifier, right before the final byte
_EVENT_TYPE_RE = re.compile(r";\d+:([123])[u~ABCDHFPQRS]$")


def _int_or(value: str | None, default: int | None) -> int | None:
    return int(value) if value else default


def parse_kitty_sequence(data: str) -> ParsedKittySequence | None:
    """Parse a kitty keyboard protocol sequence, or return ``None``."""
    m = _KITTY_CSI_U_RE.match(data)
    if m:
        codepoint, shifted, base, modifier, event_type = m.groups()
        return ParsedKittySequence(
            codepoint=int(codepoint),
            shifted_key=_int_or(shifted, None),
            base_layout_key=_int_or(base, None),
            modifier=_int_or(modifier, 1),
            event_type=_int_or(event_type, 1),
        )

    m = _KITTY_LETTER_RE.match(data)
    if m:
        modifier, event_type, final = m.groups()
        return ParsedKittySequence(
            codepoint=0,
            shifted_key=None,
            base_layout_key=None,
            modifier=int(modifier),
            event_type=_int_or(event_type, 1),
            key=_LETTER_KEYS[final],
        )

    m = _KITTY_FUNCTIONAL_RE.match(data)
    if m:
        number, modifier, event_type = m.groups()
        return ParsedKittySequence(
            codepoint=0,
            shifted_key=None,
            base_layout_key=None,
            modifier=int(modifier),
            event_type=_int_or(event_type, 1),
            key=_FUNCTIONAL_KEYS.get(int(number)),
        )

    return None


# ---------------------------------------------------------------------------
# Press / repeat / release
# ---------------------------------------------------------------------------


def event_kind(data: str) -> KeyEventKind:
    """Return whether *data* reports a press, repeat or release."""
    if BRACKETED_PASTE_START in data:
        return "press"
    m = _EVENT_TYPE_RE.search(data)
    return EVENT_KINDS[int(m.group(1))] if m else "press"


def is_key_release(data: str) -> bool:
    return event_kind(data) == "release"


def is_key_repeat(data: str) -> bool:
    return event_kind(data) == "repeat"


# ---------------------------------------------------------------------------
# parse_key
# ---------------------------------------------------------------------------


def _modifier_prefix(modifier: int) -> str:
    mod = (modifier - 1) & ~LOCK_MASK
    return "".join(
        f"{name}+" for name in ("ctrl", "shift", "alt") if mod & MODIFIERS[name]
    )


def _codepoint_key(codepoint: int) -> str | None:
    for name, code in CODEPOINTS.items():
        if codepoint == code:
            return name
    if codepoint in _KITTY_KEYS:
        return _KITTY_KEYS[codepoint]
    if codepoint > 0 and chr(codepoint).isprintable():
        return chr(codepoint).lower()
    return None


def _parse_kitty_key(parsed: ParsedKittySequence) -> str | None:
    key = parsed.key or _codepoint_key(parsed.codepoint)
    if key is None:
        return None
    return _modifier_prefix(parsed.modifier) + key


def _parse_alt_key(data: str) -> str | None:
    inner = parse_key(data[1])
    if inner is None or inner.startswith("alt+"):
        return None
    if inner.startswith("ctrl+"):
        return "ctrl+alt+" + inner[len("ctrl+"):]
    if len(inner) == 1 and inner.isupper():
        return "shift+alt+" + inner.lower()
    return "alt+" + inner


def parse_key(data: str) -> str | None:
    """Parse raw terminal input and return the key identifier, or ``None``.

    Identifiers are lower-case key names with ``ctrl+`` / ``shift+`` /
    ``alt+`` prefixes, e.g. ``"l"``, ``"ctrl+c"``, ``"shift+enter"``.
    Plain printable characters are returned as-is, so ``"Q"`` stays ``"Q"``.
    """
    if not data:
        return None

    parsed = parse_kitty_sequence(data)
    if parsed is not None:
        return _parse_kitty_key(parsed)

    m = _MODIFY_OTHER_KEYS_RE.match(data)
    if m:
        key = _codepoint_key(int(m.group(2)))
        return _modifier_prefix(int(m.group(1))) + key if key else None

    if data in LEGACY_KEY_SEQUENCES:
        return LEGACY_KEY_SEQUENCES[data]
    if data in _SINGLE_BYTE_KEYS:
        return _SINGLE_BYTE_KEYS[data]

    if len(data) == 1:
        if 1 <= ord(data) <= 26:
            return "ctrl+" + chr(ord(data) + ord("a") - 1)
        return data if data.isprintable() else None

    if len(data) == 2 and data[0] == "\x1b":
        return _parse_alt_key(data)

    return None


def parse_event(data: str) -> KeyEvent | None:
    """Parse *data* into a :class:`KeyEvent`, or ``None`` if unrecognised."""
    code = parse_key(data)
    if code is None:
        return None
    return KeyEvent(code=code, kind=event_kind(data))
