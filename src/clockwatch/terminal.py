"""Terminal abstraction for raw-mode, full-screen interaction.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation that manages raw mode, the alternate screen, bracketed paste,
the kitty keyboard protocol and cursor visibility via ANSI escape sequences.
Input is polled without blocking; output is painted one full frame at a time.
"""

from __future__ import annotations

import codecs
import logging
import os
import re
import select
import signal
import sys
import termios
import tty
from collections import deque
from typing import Callable, Protocol

from clockwatch.events import Event, PasteEvent, ResizeEvent
from clockwatch.frame import Frame
from clockwatch.keys import parse_event
from clockwatch.screen import ScreenRenderer
from clockwatch.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_ALT_SCREEN_ENABLE = "\x1b[?1049h"
_ALT_SCREEN_DISABLE = "\x1b[?1049l"

_BRACKETED_PASTE_ENABLE = "\x1b[?2004h"
_BRACKETED_PASTE_DISABLE = "\x1b[?2004l"

# Flags 1 (disambiguate) | 2 (report press/repeat/release)
_KITTY_QUERY = "\x1b[?u"
_KITTY_ENABLE = "\x1b[>3u"
_KITTY_DISABLE = "\x1b[<u"

_KITTY_RESPONSE_RE = re.compile(r"^\x1b\[\?(\d+)u$")

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"

_READ_SIZE = 4096


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface the application loop drives the terminal through."""

    def init(self) -> None: ...

    def restore(self) -> None: ...

    def poll_event(self, timeout: float | None = 0) -> bool: ...

    def read_event(self) -> Event: ...

    def draw(self, painter: Callable[[Frame], None]) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal implementation backed by ``sys.stdin``/``sys.stdout``.

    Manages raw mode via :mod:`tty` and :mod:`termios`, the alternate screen,
    the kitty keyboard protocol, bracketed paste mode and SIGWINCH-based
    resize detection.
    """

    def __init__(self, write_log_path: str | None = None) -> None:
        self._original_termios: list | None = None
        self._prev_sigwinch_handler: signal.Handlers | None = None
        self._screen_active: bool = False
        self._kitty_protocol_active: bool = False
        self._events: deque[Event] = deque()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._stdin_buffer = StdinBuffer(timeout=0.01)
        self._stdin_buffer.on_data(self._on_sequence)
        self._stdin_buffer.on_paste(self._on_paste)
        self._renderer = ScreenRenderer()
        self._write_log_path: str = write_log_path or ""

    # -- properties ---------------------------------------------------------

    @property
    def kitty_protocol_active(self) -> bool:
        return self._kitty_protocol_active

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).columns
        except (ValueError, OSError):
            return 80

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).lines
        except (ValueError, OSError):
            return 24

    # -- init / restore -----------------------------------------------------

    def init(self) -> None:
        """Enter raw mode and the alternate screen, and query kitty support."""
        fd = sys.stdin.fileno()

        self._original_termios = termios.tcgetattr(fd)
        tty.setraw(fd)

        self._prev_sigwinch_handler = signal.getsignal(signal.SIGWINCH)
        signal.signal(signal.SIGWINCH, self._on_sigwinch)

        self._screen_active = True
        self.write(
            _ALT_SCREEN_ENABLE + _HIDE_CURSOR + _BRACKETED_PASTE_ENABLE + _KITTY_QUERY
        )
        self._renderer.reset()
        logger.debug("Terminal initialised (%dx%d)", self.columns, self.rows)

    def restore(self) -> None:
        """Undo everything :meth:`init` did.

        Safe to call more than once or after a partial ``init``.  Every step
        is attempted; the first failure is re-raised at the end.
        """
        first_error: BaseException | None = None
        for step in (self._leave_screen, self._restore_sigwinch, self._restore_termios):
            try:
                step()
            except (OSError, termios.error) as exc:
                logger.warning("Terminal restore step %s failed: %s", step.__name__, exc)
                if first_error is None:
                    first_error = exc

        self._stdin_buffer.clear()
        self._events.clear()
        logger.debug("Terminal restored")

        if first_error is not None:
            raise first_error

    def _leave_screen(self) -> None:
        if not self._screen_active:
            return
        self._screen_active = False
        out = _BRACKETED_PASTE_DISABLE + _SHOW_CURSOR + _ALT_SCREEN_DISABLE
        if self._kitty_protocol_active:
            self._kitty_protocol_active = False
            out = _KITTY_DISABLE + out
        self.write(out)

    def _restore_sigwinch(self) -> None:
        if self._prev_sigwinch_handler is not None:
            signal.signal(signal.SIGWINCH, self._prev_sigwinch_handler)
            self._prev_sigwinch_handler = None

    def _restore_termios(self) -> None:
        if self._original_termios is not None:
            original, self._original_termios = self._original_termios, None
            termios.tcsetattr(sys.stdin.fileno(), termios.TCSADRAIN, original)

    # -- input --------------------------------------------------------------

    def poll_event(self, timeout: float | None = 0) -> bool:
        """Return ``True`` if an event is ready, waiting up to *timeout* seconds.

        ``None`` waits indefinitely.  Terminal replies (such as the kitty
        protocol answer) are consumed here and never surface as events, so
        a ``False`` result can follow a successful read.
        """
        if self._events:
            return True

        fd = sys.stdin.fileno()
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return False

        self._read_chunk(fd)

        # An escape sequence split across reads: give the rest a moment to
        # arrive, then take what we have as-is.
        while self._stdin_buffer.get_buffer():
            ready, _, _ = select.select([fd], [], [], self._stdin_buffer.timeout)
            if not ready:
                self._stdin_buffer.flush()
                break
            self._read_chunk(fd)

        return bool(self._events)

    def read_event(self) -> Event:
        """Consume the next event, blocking until one is available."""
        while not self._events:
            self.poll_event(None)
        return self._events.popleft()

    def _read_chunk(self, fd: int) -> None:
        raw = os.read(fd, _READ_SIZE)
        if not raw:
            raise OSError("terminal input closed")
        self._stdin_buffer.process(self._decoder.decode(raw))

    def _on_sequence(self, data: str) -> None:
        if _KITTY_RESPONSE_RE.match(data):
            if not self._kitty_protocol_active:
                self._kitty_protocol_active = True
                self.write(_KITTY_ENABLE)
                logger.debug("Kitty keyboard protocol enabled")
            return

        event = parse_event(data)
        if event is None:
            logger.debug("Ignoring unrecognised input %r", data)
            return
        self._events.append(event)

    def _on_paste(self, text: str) -> None:
        self._events.append(PasteEvent(text))

    def _on_sigwinch(self, signum: int, frame: object) -> None:
        self._events.append(ResizeEvent(self.columns, self.rows))

    # -- output -------------------------------------------------------------

    def draw(self, painter: Callable[[Frame], None]) -> None:
        """Build a frame of the current size, let *painter* fill it, paint it."""
        width, height = self.columns, self.rows
        frame = Frame.of_size(width, height)
        painter(frame)
        self.write(self._renderer.render(frame.lines, width, height))

    def write(self, data: str) -> None:
        """Write data to stdout and optionally to the write log."""
        if not data:
            return
        sys.stdout.write(data)
        sys.stdout.flush()

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a", encoding="utf-8") as f:
                    f.write(data)
            except OSError:
                pass
