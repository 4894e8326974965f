"""StdinBuffer buffers input and emits complete sequences.

Reads from stdin can return partial chunks, especially for escape
sequences.  Without buffering, the tail of a split sequence would be
misinterpreted as regular keypresses.

The buffer itself never waits: an incomplete trailing sequence is held until
more data arrives or the owner calls :meth:`StdinBuffer.flush` (the terminal
driver does so once ``timeout`` seconds pass without further input).
"""

from __future__ import annotations

import re
from typing import Callable

ESC = "\x1b"
BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"

_SGR_MOUSE_RE = re.compile(r"<\d+;\d+;\d+[Mm]")
_ST = ESC + "\\"
_BEL = "\x07"


def _csi_length(data: str) -> int | None:
    """Length of the CSI sequence at the start of *data*, if complete."""
    # X10 mouse: ESC [ M followed by three raw bytes
    if data.startswith("\x1b[M"):
        return 6 if len(data) >= 6 else None

    for i in range(2, len(data)):
        if 0x40 <= ord(data[i]) <= 0x7E:
            params = data[2 : i + 1]
            if params.startswith("<") and not _SGR_MOUSE_RE.fullmatch(params):
                continue
            return i + 1
    return None


def _string_length(data: str, allow_bel: bool) -> int | None:
    """Length of an OSC / DCS / APC string at the start of *data*, if complete."""
    end = data.find(_ST, 2)
    if allow_bel:
        bel = data.find(_BEL, 2)
        if bel != -1 and (end == -1 or bel < end):
            return bel + 1
    return end + 2 if end != -1 else None


def _sequence_length(data: str) -> int | None:
    """Length of the escape sequence starting *data*, or ``None`` if incomplete."""
    if len(data) < 2:
        return None

    introducer = data[1]
    if introducer == "[":
        return _csi_length(data)
    if introducer == "]":
        return _string_length(data, allow_bel=True)
    if introducer in "P_":
        return _string_length(data, allow_bel=False)
    if introducer == "O":
        return 3 if len(data) >= 3 else None
    # Meta key: ESC followed by one character
    return 2


def _extract_complete_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete sequences and an incomplete remainder."""
    sequences: list[str] = []
    pos = 0
    while pos < len(buffer):
        if buffer[pos] != ESC:
            sequences.append(buffer[pos])
            pos += 1
            continue
        length = _sequence_length(buffer[pos:])
        if length is None:
            return sequences, buffer[pos:]
        sequences.append(buffer[pos : pos + length])
        pos += length
    return sequences, ""


class StdinBuffer:
    """Buffers stdin input and emits complete sequences.

    Partial escape sequences are held until the rest arrives; bracketed
    paste content is collected and delivered through a single paste
    callback.
    """

    def __init__(self, *, timeout: float = 0.01) -> None:
        self.timeout = timeout
        self._buffer = ""
        self._paste: str | None = None

        self._on_data: Callable[[str], None] | None = None
        self._on_paste: Callable[[str], None] | None = None

    def on_data(self, callback: Callable[[str], None]) -> None:
        """Set callback for complete sequences."""
        self._on_data = callback

    def on_paste(self, callback: Callable[[str], None]) -> None:
        """Set callback for paste content."""
        self._on_paste = callback

    @property
    def pending(self) -> bool:
        """True while an incomplete sequence or paste is being held."""
        return bool(self._buffer) or self._paste is not None

    def process(self, data: str) -> None:
        """Feed input data into the buffer."""
        if self._paste is not None:
            self._paste += data
            self._finish_paste()
            return

        buffer, self._buffer = self._buffer + data, ""
        start = buffer.find(BRACKETED_PASTE_START)
        if start == -1:
            sequences, self._buffer = _extract_complete_sequences(buffer)
            self._emit(sequences)
            return

        # An incomplete sequence cut off by the paste marker is dropped
        sequences, _ = _extract_complete_sequences(buffer[:start])
        self._emit(sequences)
        self._paste = buffer[start + len(BRACKETED_PASTE_START) :]
        self._finish_paste()

    def _emit(self, sequences: list[str]) -> None:
        if self._on_data:
            for sequence in sequences:
                self._on_data(sequence)

    def _finish_paste(self) -> None:
        end = self._paste.find(BRACKETED_PASTE_END)
        if end == -1:
            return

        content = self._paste[:end]
        rest = self._paste[end + len(BRACKETED_PASTE_END) :]
        self._paste = None

        if self._on_paste:
            self._on_paste(content)
        if rest:
            self.process(rest)

    def flush(self) -> None:
        """Emit whatever incomplete sequence is held as-is."""
        if self._buffer:
            data, self._buffer = self._buffer, ""
            self._emit([data])

    def clear(self) -> None:
        self._buffer = ""
        self._paste = None

    def get_buffer(self) -> str:
        return self._buffer
