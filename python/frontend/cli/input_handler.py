"""Single-keypress reader for the terminal frontend.

Keys are read raw (no Enter) through tty+termios on macOS / Linux and
msvcrt on Windows, then mapped to action strings such as ``"up"``,
``"undo"`` or ``"cycle"``.
"""

from __future__ import annotations

import os
import sys
from typing import Callable

# Returns the next pending character, or "" when nothing arrives.
Reader = Callable[[], str]

ESCAPE = "\x1b"


# -- key mapping ---------------------------------------------------------------

_BINDINGS: dict[str, str] = {
    "up": "wW",
    "down": "sS",
    "left": "aA",
    "right": "dD",
    "quit": "qQ\x03",
    "restart": "rR",
    "help": "hH?",
    "undo": "uU",
    "cycle": "\tgG",
    "shuffle": "xX",
    "randomize_gaps": "iI",
    "reset_gaps": "oO",
    "enter": "\r\n",
}

_KEY_MAP: dict[str, str] = {
    key: action for action, keys in _BINDINGS.items() for key in keys
}

# Final byte of the ESC [ x arrow sequences.
_ARROW_MAP: dict[str, str] = {"A": "up", "B": "down", "C": "right", "D": "left"}


def _resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    return _KEY_MAP.get(ch, ch if ch.isprintable() else "")


def _decode(ch: str, read_more: Reader) -> str:
    """Turn the first character of a keypress into an action.

    Arrow keys arrive as ``ESC [ A..D``; a lone Escape means quit.
    """
    if ch != ESCAPE:
        return _resolve(ch)
    if read_more() != "[":
        return "quit"
    return _ARROW_MAP.get(read_more(), "")


# -- platform readers ----------------------------------------------------------


def _getch_unix() -> str:
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
    return ch


def _getch_windows() -> str:
    import msvcrt  # type: ignore[import-not-found]

    return msvcrt.getch().decode("utf-8", errors="ignore")


_getch = _getch_windows if os.name == "nt" else _getch_unix


def _read_pending(fd: int, wait: float) -> str:
    """One unbuffered character from *fd*, or "" after *wait* seconds.

    ``os.read`` keeps the rest of a multi-byte sequence visible to ``select``.
    """
    import select

    ready, _, _ = select.select([fd], [], [], wait)
    if not ready:
        return ""
    return os.read(fd, 1).decode("utf-8", errors="ignore")


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Block for one keypress and return its action string.

    Unmapped printable characters come back as themselves and anything
    else as ``""``.
    """
    return _decode(_getch(), _getch)


def get_key_timeout(timeout: float) -> str | None:
    """Like :func:`get_key`, but ``None`` if nothing is pressed within *timeout*."""
    if os.name == "nt":
        import msvcrt  # type: ignore[import-not-found]
        import time

        end = time.monotonic() + timeout
        while time.monotonic() < end:
            if msvcrt.kbhit():
                return get_key()
            time.sleep(0.02)
        return None

    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = _read_pending(fd, timeout)
        if not ch:
            return None
        return _decode(ch, lambda: _read_pending(fd, 0.1))
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
