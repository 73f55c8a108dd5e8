"""Raw single-key reader for the terminal frontend.

Keys are read without waiting for Enter and turned into the pointer
actions the Rich app understands. Works on macOS / Linux (termios) and
Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys
import time
from typing import Callable

ESCAPE_WAIT = 0.1  # seconds to wait for the rest of an escape sequence

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "W": "fast_up",
    "S": "fast_down",
    "A": "fast_left",
    "D": "fast_right",
    " ": "grab",
    "g": "grab",
    "q": "quit",
    "Q": "quit",
    "\x03": "quit",  # Ctrl-C
    "r": "restart",
    "R": "restart",
    "\r": "enter",
    "\n": "enter",
}

# Final byte of ANSI cursor sequences (ESC [ x).
_ANSI_ARROWS = {"A": "up", "B": "down", "C": "right", "D": "left"}

# Second code msvcrt reports after a \x00 / \xe0 prefix.
_WINDOWS_ARROWS = {"H": "up", "P": "down", "M": "right", "K": "left"}


def _resolve(ch: str) -> str:
    """Map a raw character to its action; digits and letters pass through."""
    return _KEY_MAP.get(ch, ch if ch.isprintable() else "")


def _decode(first: str, read_more: Callable[[], str | None]) -> str:
    """Turn *first* plus any escape-sequence tail into an action.

    *read_more* returns the next pending character, or None when the
    terminal has nothing more to give. A lone Escape quits.
    """
    if first != "\x1b":
        return _resolve(first)
    if read_more() != "[":
        return "quit"
    return _ANSI_ARROWS.get(read_more() or "", "")


def _read_unix(timeout: float | None) -> str | None:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()

    def read_char(wait: float | None) -> str | None:
        ready, _, _ = select.select([fd], [], [], wait)
        if not ready:
            return None
        # os.read is unbuffered, so select() still sees the sequence tail.
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        first = read_char(timeout)
        if first is None:
            return None
        return _decode(first, lambda: read_char(ESCAPE_WAIT))
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def _read_windows(timeout: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]

    if timeout is not None:
        deadline = time.monotonic() + timeout
        while not msvcrt.kbhit():
            if time.monotonic() >= deadline:
                return None
            time.sleep(0.02)

    first = msvcrt.getwch()
    if first in ("\x00", "\xe0"):
        return _WINDOWS_ARROWS.get(msvcrt.getwch(), "")
    return _decode(first, lambda: None)


def read_key(timeout: float | None = None) -> str | None:
    """Read one keypress and return its action string.

    Blocks until a key arrives when *timeout* is None; otherwise returns
    None if nothing was pressed within *timeout* seconds.

    Actions: ``up`` / ``down`` / ``left`` / ``right`` and their ``fast_``
    variants, ``grab``, ``quit``, ``restart``, ``enter``, any other
    printable character unchanged, or ``""`` for an unrecognised key.
    """
    if os.name == "nt":
        return _read_windows(timeout)
    return _read_unix(timeout)
