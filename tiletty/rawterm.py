"""Claiming the controlling terminal: raw mode, window size and input decoding."""

from __future__ import annotations

import os
import re
import sys
import termios
from types import TracebackType
from typing import BinaryIO, ClassVar

_ENTER = b"\x1b[?1049h\x1b[2J\x1b[H"
_SHOW_CURSOR = b"\x1b[?25h"
_LEAVE = b"\x1b[2J\x1b[H\x1b[?1049l"
_MOVE_FAR = b"\x1b[999C\x1b[999B"
_QUERY_CURSOR = b"\x1b[6n"
_REPORT_LIMIT = 31
_REPORT = re.compile(rb"\s*([+-]?\d+);\s*([+-]?\d+)")


class RawMode:
    """Switch a terminal into raw mode on the alternate screen.

    Only one terminal can be claimed at a time; entering a second
    ``RawMode`` while one is active raises ``RuntimeError``.
    """

    _claimed: ClassVar[bool] = False

    def __init__(self, fd: int | None = None, out: BinaryIO | None = None) -> None:
        self.fd = sys.stdin.fileno() if fd is None else fd
        self.out = out
        self._saved: list | None = None

    def _write(self, data: bytes) -> None:
        if self.out is None:
            os.write(sys.stdout.fileno(), data)
        else:
            self.out.write(data)
            flush = getattr(self.out, "flush", None)
            if flush is not None:
                flush()

    def __enter__(self) -> RawMode:
        if RawMode._claimed:
            raise RuntimeError("the terminal is already claimed")
        self._write(_ENTER)
        saved = termios.tcgetattr(self.fd)
        raw = [*saved[:6], list(saved[6])]
        raw[0] &= ~(
            termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON
        )
        raw[1] &= ~termios.OPOST
        raw[2] |= termios.CS8
        raw[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        raw[6][termios.VMIN] = 0
        raw[6][termios.VTIME] = 1
        termios.tcsetattr(self.fd, termios.TCSAFLUSH, raw)
        self._saved = saved
        RawMode._claimed = True
        return self

    def __exit__(
        self,
        *args: type[BaseException] | BaseException | TracebackType | None,
    ) -> None:
        if self._saved is None:
            return
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._saved)
            self._write(_SHOW_CURSOR)
            self._write(_LEAVE)
        finally:
            self._saved = None
            RawMode._claimed = False


def parse_cursor_report(data: bytes) -> tuple[int, int]:
    """Read ``(rows, cols)`` from a cursor position report ``ESC [ r ; c R``."""
    if not data.startswith(b"\x1b["):
        raise ValueError("not a cursor position report")
    match = _REPORT.match(data, 2)
    if match is None:
        raise ValueError("malformed cursor position report")
    return int(match.group(1)), int(match.group(2))


def decode_input(data: bytes) -> list[int]:
    """The codepoints of UTF-8 input; invalid bytes become U+FFFD."""
    return [ord(char) for char in data.decode("utf-8", "replace")]


def _read_report(fd: int) -> bytes:
    buffer = bytearray()
    while len(buffer) < _REPORT_LIMIT:
        byte = os.read(fd, 1)
        if len(byte) != 1 or byte == b"R":
            break
        buffer += byte
    return bytes(buffer)


def window_size(fd: int | None = None) -> tuple[int, int]:
    """The ``(cols, rows)`` size of the terminal on ``fd``.

    When the size cannot be asked for directly, the cursor is moved to the
    bottom right corner and its reported position is used.
    """
    if fd is None:
        fd = sys.stdout.fileno()
    try:
        size = os.get_terminal_size(fd)
    except OSError:
        size = None
    if size is not None and size.columns != 0:
        return size.columns, size.lines

    if os.write(fd, _MOVE_FAR) != len(_MOVE_FAR):
        raise OSError("could not move the cursor")
    if os.write(fd, _QUERY_CURSOR) != len(_QUERY_CURSOR):
        raise OSError("could not query the cursor position")
    rows, cols = parse_cursor_report(_read_report(fd))
    return cols, rows