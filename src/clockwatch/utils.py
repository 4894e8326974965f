"""Terminal text utilities: ANSI handling, width measurement, column slicing.

Provides functions for measuring the visible terminal width of styled text,
truncating and padding lines to a column budget, and splitting a line around
a column range so another line can be painted over it.

Text is walked as a stream of tokens: escape sequences, which occupy no
columns, and grapheme clusters, which occupy zero, one or two.
"""

from __future__ import annotations

import functools
import re
import unicodedata
from typing import Iterator, NamedTuple

import grapheme
import wcwidth as _wcwidth

# ---------------------------------------------------------------------------
# Escape sequences
# ---------------------------------------------------------------------------

# SGR, cursor movement and erase sequences
_CSI_RE = re.compile(r"\x1b\[[0-9;]*[mGKHJ]")

# OSC / APC strings terminated by BEL or ST
_STRING_SEQ_RE = re.compile(r"\x1b[\]_].*?(?:\x07|\x1b\\)", re.DOTALL)

_STRIP_RE = re.compile(
    r"\x1b\[[0-9;]*[mGKHJ]"
    r"|\x1b\]8;;[^\x07]*\x07"
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"
)

SGR_RESET = "\x1b[0m"


def strip_ansi(text: str) -> str:
    """Remove CSI, OSC 8 and APC escape sequences from *text*."""
    return _STRIP_RE.sub("", text)


def extract_ansi_code(text: str, pos: int) -> tuple[str, int] | None:
    """Return ``(code, length)`` for the escape sequence at *pos*, or ``None``.

    Recognises CSI sequences ending in ``m``/``G``/``K``/``H``/``J`` and
    OSC/APC strings ending in BEL or ST.
    """
    m = _CSI_RE.match(text, pos) or _STRING_SEQ_RE.match(text, pos)
    if m is None:
        return None
    return m.group(), m.end() - pos


# ---------------------------------------------------------------------------
# Tokens and widths
# ---------------------------------------------------------------------------


class _Token(NamedTuple):
    text: str
    width: int
    is_code: bool


def _cluster_width(cluster: str) -> int:
    """Display width of one grapheme cluster.

    Control characters and lone combining or format characters take no
    columns; emoji sequences take two; anything else is measured by
    ``wcwidth`` on its base character.
    """
    base = ord(cluster[0])
    if base < 0x20 or 0x7F <= base <= 0x9F:
        return 0

    if len(cluster) > 1:
        for ch in cluster[1:]:
            cp = ord(ch)
            # VS16, ZWJ, skin tones, regional indicator pairs
            if cp in (0xFE0F, 0x200D) or 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
                return 2
        if base >= 0x1F000:
            return 2

    category = unicodedata.category(cluster[0])
    if category.startswith("M") or category == "Cf":
        return 0
    return max(_wcwidth.wcwidth(cluster[0]), 0)


def _clusters(text: str) -> Iterator[_Token]:
    for cluster in grapheme.graphemes(text):
        yield _Token(cluster, _cluster_width(cluster), False)


def _tokens(text: str) -> Iterator[_Token]:
    """Split *text* into escape sequences and grapheme clusters, in order."""
    plain_start = 0
    pos = text.find("\x1b")
    while pos != -1:
        extracted = extract_ansi_code(text, pos)
        if extracted is None:
            pos = text.find("\x1b", pos + 1)
            continue
        code, length = extracted
        yield from _clusters(text[plain_start:pos])
        yield _Token(code, 0, True)
        plain_start = pos + length
        pos = text.find("\x1b", plain_start)
    yield from _clusters(text[plain_start:])


@functools.lru_cache(maxsize=512)
def _plain_width(text: str) -> int:
    return sum(token.width for token in _clusters(text))


def visible_width(text: str) -> int:
    """Number of terminal columns *text* occupies.

    Escape sequences are ignored and tabs count as three columns.
    """
    plain = strip_ansi(text).replace("\t", "   ")
    if plain.isascii() and plain.isprintable():
        return len(plain)
    return _plain_width(plain)


# ---------------------------------------------------------------------------
# Slicing
# ---------------------------------------------------------------------------


def _take_columns(text: str, max_cols: int) -> str:
    """Longest prefix of *text* within *max_cols* columns, escapes included."""
    parts: list[str] = []
    cols = 0
    for token in _tokens(text):
        if not token.is_code:
            if cols + token.width > max_cols:
                break
            cols += token.width
        parts.append(token.text)
    return "".join(parts)


def truncate_to_width(
    text: str,
    max_width: int,
    ellipsis: str = "...",
    pad: bool = False,
) -> str:
    """Fit *text* into *max_width* columns.

    Text that is too wide is cut and *ellipsis* appended (the ellipsis
    counts towards the width).  With *pad*, the result is right-padded with
    spaces to exactly *max_width*.
    """
    if max_width <= 0:
        return ""

    width = visible_width(text)
    if width <= max_width:
        return text + " " * (max_width - width) if pad else text

    room = max_width - visible_width(ellipsis)
    if room <= 0:
        return _take_columns(ellipsis, max_width)

    result = _take_columns(text, room) + ellipsis
    if "\x1b[" in result:
        result = apply_line_reset(result)
    if pad:
        result += " " * (max_width - visible_width(result))
    return result


def extract_segments(
    line: str,
    before_end: int,
    after_start: int,
    after_len: int,
) -> tuple[str, str]:
    """Cut the parts of *line* on either side of a region being painted over.

    Returns ``(before, after)``: columns ``[0, before_end)`` and
    ``[after_start, after_start + after_len)``.  Escape sequences are kept
    with the side they appear on.  A wide character cut by a boundary is
    replaced by spaces so both parts keep their column counts.
    """
    before: list[str] = []
    after: list[str] = []
    after_end = after_start + after_len
    col = 0

    for token in _tokens(line):
        if token.is_code:
            if col < before_end:
                before.append(token.text)
            if after_start <= col < after_end:
                after.append(token.text)
            continue

        end = col + token.width
        if end <= before_end:
            before.append(token.text)
        elif col < before_end:
            before.append(" " * (before_end - col))

        if end > after_start and col < after_end:
            if col < after_start:
                after.append(" " * (min(end, after_end) - after_start))
            elif end > after_end:
                after.append(" " * (after_end - col))
            else:
                after.append(token.text)

        col = end

    return "".join(before), "".join(after)


def apply_line_reset(line: str) -> str:
    """Append ``ESC[0m`` to a styled *line* that does not already end with it."""
    if "\x1b[" not in line or line.endswith(SGR_RESET):
        return line
    return line + SGR_RESET
