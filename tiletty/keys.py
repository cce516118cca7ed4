"""Keyboard, mouse and colour encoding for a shell running in a pseudo terminal."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .glyph import Color


class Key(enum.Enum):
    """Special (non-character) keys."""

    KP_HOME = enum.auto()
    KP_UP = enum.auto()
    KP_DOWN = enum.auto()
    KP_LEFT = enum.auto()
    KP_RIGHT = enum.auto()
    KP_PRIOR = enum.auto()
    KP_BEGIN = enum.auto()
    KP_END = enum.auto()
    KP_NEXT = enum.auto()
    KP_INSERT = enum.auto()
    KP_DELETE = enum.auto()
    KP_MULTIPLY = enum.auto()
    KP_ADD = enum.auto()
    KP_ENTER = enum.auto()
    KP_SUBTRACT = enum.auto()
    KP_DECIMAL = enum.auto()
    KP_DIVIDE = enum.auto()
    KP_0 = enum.auto()
    KP_1 = enum.auto()
    KP_2 = enum.auto()
    KP_3 = enum.auto()
    KP_4 = enum.auto()
    KP_5 = enum.auto()
    KP_6 = enum.auto()
    KP_7 = enum.auto()
    KP_8 = enum.auto()
    KP_9 = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    RETURN = enum.auto()
    INSERT = enum.auto()
    DELETE = enum.auto()
    BACKSPACE = enum.auto()
    HOME = enum.auto()
    END = enum.auto()
    PRIOR = enum.auto()
    NEXT = enum.auto()
    F1 = enum.auto()
    F2 = enum.auto()
    F3 = enum.auto()
    F4 = enum.auto()
    F5 = enum.auto()
    F6 = enum.auto()
    F7 = enum.auto()
    F8 = enum.auto()
    F9 = enum.auto()
    F10 = enum.auto()
    F11 = enum.auto()
    F12 = enum.auto()
    F13 = enum.auto()
    F14 = enum.auto()
    F15 = enum.auto()
    F16 = enum.auto()
    F17 = enum.auto()
    F18 = enum.auto()
    F19 = enum.auto()
    F20 = enum.auto()
    F21 = enum.auto()
    F22 = enum.auto()
    F23 = enum.auto()
    F24 = enum.auto()
    F25 = enum.auto()
    F26 = enum.auto()
    F27 = enum.auto()
    F28 = enum.auto()
    F29 = enum.auto()
    F30 = enum.auto()
    F31 = enum.auto()
    F32 = enum.auto()
    F33 = enum.auto()
    F34 = enum.auto()
    F35 = enum.auto()
    CONTROL_L = enum.auto()
    CONTROL_R = enum.auto()
    ALT_L = enum.auto()
    ALT_R = enum.auto()


class Modifier(enum.IntFlag):
    """Modifier keys held during an event."""

    NONE = 0
    SHIFT = 1
    CONTROL = 4
    MOD1 = 8
    MOD3 = 32
    MOD4 = 64


class TermMode(enum.IntFlag):
    """Terminal modes that change how input is encoded."""

    NONE = 0
    APPKEYPAD = 1
    APPCURSOR = 2
    NUMLOCK = 4
    MOUSESGR = 8
    EIGHT_BIT = 16
    BRCKTPASTE = 32
    HIDE = 64
    ALTSCREEN = 128


class MouseButton(enum.Enum):
    """The kind of mouse event."""

    LEFT = enum.auto()
    MIDDLE = enum.auto()
    RIGHT = enum.auto()
    SCROLL = enum.auto()
    MOVE = enum.auto()


class Trigger(enum.Enum):
    """What happened to a key or button."""

    PRESS = enum.auto()
    RELEASE = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    MOVE = enum.auto()


@dataclass(frozen=True)
class KeyBinding:
    """One entry of the special key table.

    ``appkey`` and ``appcursor`` are three-valued: 0 indifferent, positive
    requires the mode, negative requires it off. An ``appkey`` of 2 is also
    disabled while num lock is on. A ``mask`` of ``None`` matches any
    modifier state; otherwise the state must equal it exactly.
    """

    key: Key
    string: str
    appkey: int
    appcursor: int
    mask: Modifier | None

    def matches(self, key: Key, state: int, mode: int) -> bool:
        """Whether this binding applies to the given key, state and mode."""
        if self.key is not key:
            return False
        if self.mask is not None and int(self.mask) != int(state):
            return False
        if mode & TermMode.APPKEYPAD:
            if self.appkey < 0:
                return False
        elif self.appkey > 0:
            return False
        if mode & TermMode.NUMLOCK and self.appkey == 2:
            return False
        if mode & TermMode.APPCURSOR:
            if self.appcursor < 0:
                return False
        elif self.appcursor > 0:
            return False
        return True


_S = Modifier.SHIFT
_C = Modifier.CONTROL
_A = Modifier.MOD1
_M3 = Modifier.MOD3
_M4 = Modifier.MOD4
_NO = Modifier.NONE
_ANY = None
K = Key

_TABLE = (
    (K.KP_HOME, "\x1b[2J", 0, -1, _S),
    (K.KP_HOME, "\x1b[1;2H", 0, 1, _S),
    (K.KP_HOME, "\x1b[H", 0, -1, _ANY),
    (K.KP_HOME, "\x1b[1~", 0, 1, _ANY),
    (K.KP_UP, "\x1bOx", 1, 0, _ANY),
    (K.KP_UP, "\x1b[A", 0, -1, _ANY),
    (K.KP_UP, "\x1bOA", 0, 1, _ANY),
    (K.KP_DOWN, "\x1bOr", 1, 0, _ANY),
    (K.KP_DOWN, "\x1b[B", 0, -1, _ANY),
    (K.KP_DOWN, "\x1bOB", 0, 1, _ANY),
    (K.KP_LEFT, "\x1bOt", 1, 0, _ANY),
    (K.KP_LEFT, "\x1b[D", 0, -1, _ANY),
    (K.KP_LEFT, "\x1bOD", 0, 1, _ANY),
    (K.KP_RIGHT, "\x1bOv", 1, 0, _ANY),
    (K.KP_RIGHT, "\x1b[C", 0, -1, _ANY),
    (K.KP_RIGHT, "\x1bOC", 0, 1, _ANY),
    (K.KP_PRIOR, "\x1b[5;2~", 0, 0, _S),
    (K.KP_PRIOR, "\x1b[5~", 0, 0, _ANY),
    (K.KP_BEGIN, "\x1b[E", 0, 0, _ANY),
    (K.KP_END, "\x1b[J", -1, 0, _C),
    (K.KP_END, "\x1b[1;5F", 1, 0, _C),
    (K.KP_END, "\x1b[K", -1, 0, _S),
    (K.KP_END, "\x1b[1;2F", 1, 0, _S),
    (K.KP_END, "\x1b[4~", 0, 0, _ANY),
    (K.KP_NEXT, "\x1b[6;2~", 0, 0, _S),
    (K.KP_NEXT, "\x1b[6~", 0, 0, _ANY),
    (K.KP_INSERT, "\x1b[2;2~", 1, 0, _S),
    (K.KP_INSERT, "\x1b[4l", -1, 0, _S),
    (K.KP_INSERT, "\x1b[L", -1, 0, _C),
    (K.KP_INSERT, "\x1b[2;5~", 1, 0, _C),
    (K.KP_INSERT, "\x1b[4h", -1, 0, _ANY),
    (K.KP_INSERT, "\x1b[2~", 1, 0, _ANY),
    (K.KP_DELETE, "\x1b[M", -1, 0, _C),
    (K.KP_DELETE, "\x1b[3;5~", 1, 0, _C),
    (K.KP_DELETE, "\x1b[2K", -1, 0, _S),
    (K.KP_DELETE, "\x1b[3;2~", 1, 0, _S),
    (K.KP_DELETE, "\x1b[P", -1, 0, _ANY),
    (K.KP_DELETE, "\x1b[3~", 1, 0, _ANY),
    (K.KP_MULTIPLY, "\x1bOj", 2, 0, _ANY),
    (K.KP_ADD, "\x1bOk", 2, 0, _ANY),
    (K.KP_ENTER, "\x1bOM", 2, 0, _ANY),
    (K.KP_ENTER, "\r", -1, 0, _ANY),
    (K.KP_SUBTRACT, "\x1bOm", 2, 0, _ANY),
    (K.KP_DECIMAL, "\x1bOn", 2, 0, _ANY),
    (K.KP_DIVIDE, "\x1bOo", 2, 0, _ANY),
    (K.KP_0, "\x1bOp", 2, 0, _ANY),
    (K.KP_1, "\x1bOq", 2, 0, _ANY),
    (K.KP_2, "\x1bOr", 2, 0, _ANY),
    (K.KP_3, "\x1bOs", 2, 0, _ANY),
    (K.KP_4, "\x1bOt", 2, 0, _ANY),
    (K.KP_5, "\x1bOu", 2, 0, _ANY),
    (K.KP_6, "\x1bOv", 2, 0, _ANY),
    (K.KP_7, "\x1bOw", 2, 0, _ANY),
    (K.KP_8, "\x1bOx", 2, 0, _ANY),
    (K.KP_9, "\x1bOy", 2, 0, _ANY),
)

_ARROWS = ((K.UP, "A"), (K.DOWN, "B"), (K.LEFT, "D"), (K.RIGHT, "C"))
_ARROW_MODIFIERS = (
    ("2", _S),
    ("3", _A),
    ("4", _S | _A),
    ("5", _C),
    ("6", _S | _C),
    ("7", _C | _A),
    ("8", _S | _C | _A),
)

_ARROW_TABLE = tuple(
    entry
    for key, letter in _ARROWS
    for entry in (
        *((key, f"\x1b[1;{n}{letter}", 0, 0, mask) for n, mask in _ARROW_MODIFIERS),
        (key, f"\x1b[{letter}", 0, -1, _ANY),
        (key, f"\x1bO{letter}", 0, 1, _ANY),
    )
)

_EDIT_TABLE = (
    (K.RETURN, "\x1b\r", 0, 0, _A),
    (K.RETURN, "\r", 0, 0, _ANY),
    (K.INSERT, "\x1b[4l", -1, 0, _S),
    (K.INSERT, "\x1b[2;2~", 1, 0, _S),
    (K.INSERT, "\x1b[L", -1, 0, _C),
    (K.INSERT, "\x1b[2;5~", 1, 0, _C),
    (K.INSERT, "\x1b[4h", -1, 0, _ANY),
    (K.INSERT, "\x1b[2~", 1, 0, _ANY),
    (K.DELETE, "\x1b[M", -1, 0, _C),
    (K.DELETE, "\x1b[3;5~", 1, 0, _C),
    (K.DELETE, "\x1b[2K", -1, 0, _S),
    (K.DELETE, "\x1b[3;2~", 1, 0, _S),
    (K.DELETE, "\x1b[P", -1, 0, _ANY),
    (K.DELETE, "\x1b[3~", 1, 0, _ANY),
    (K.BACKSPACE, "\x7f", 0, 0, _NO),
    (K.BACKSPACE, "\x1b\x7f", 0, 0, _A),
    (K.HOME, "\x1b[2J", 0, -1, _S),
    (K.HOME, "\x1b[1;2H", 0, 1, _S),
    (K.HOME, "\x1b[H", 0, -1, _ANY),
    (K.HOME, "\x1b[1~", 0, 1, _ANY),
    (K.END, "\x1b[J", -1, 0, _C),
    (K.END, "\x1b[1;5F", 1, 0, _C),
    (K.END, "\x1b[K", -1, 0, _S),
    (K.END, "\x1b[1;2F", 1, 0, _S),
    (K.END, "\x1b[4~", 0, 0, _ANY),
    (K.PRIOR, "\x1b[5;5~", 0, 0, _C),
    (K.PRIOR, "\x1b[5;2~", 0, 0, _S),
    (K.PRIOR, "\x1b[5~", 0, 0, _ANY),
    (K.NEXT, "\x1b[6;5~", 0, 0, _C),
    (K.NEXT, "\x1b[6;2~", 0, 0, _S),
    (K.NEXT, "\x1b[6~", 0, 0, _ANY),
)

# F1..F4 use SS3 / "1;n" letter forms, F5..F12 use numbered tilde forms.
_FUNCTION_LETTERS = ((K.F1, "P"), (K.F2, "Q"), (K.F3, "R"), (K.F4, "S"))
_FUNCTION_NUMBERS = (
    (K.F5, "15"),
    (K.F6, "17"),
    (K.F7, "18"),
    (K.F8, "19"),
    (K.F9, "20"),
    (K.F10, "21"),
    (K.F11, "23"),
    (K.F12, "24"),
)


def _function_table() -> tuple:
    entries = []
    for key, letter in _FUNCTION_LETTERS:
        entries.append((key, f"\x1bO{letter}", 0, 0, _NO))
        modifiers = [("2", _S), ("5", _C), ("6", _M4), ("3", _A)]
        if key is not K.F4:
            modifiers.append(("4", _M3))
        entries.extend(
            (key, f"\x1b[1;{n}{letter}", 0, 0, mask) for n, mask in modifiers
        )
    for key, number in _FUNCTION_NUMBERS:
        entries.append((key, f"\x1b[{number}~", 0, 0, _NO))
        entries.extend(
            (key, f"\x1b[{number};{n}~", 0, 0, mask)
            for n, mask in (("2", _S), ("5", _C), ("6", _M4), ("3", _A))
        )
    high = [f"\x1b[1;2{letter}" for _, letter in _FUNCTION_LETTERS]
    high += [f"\x1b[{number};2~" for _, number in _FUNCTION_NUMBERS]
    high += [f"\x1b[1;5{letter}" for _, letter in _FUNCTION_LETTERS]
    high += [f"\x1b[{number};5~" for _, number in _FUNCTION_NUMBERS[:7]]
    entries.extend(
        (Key[f"F{index}"], string, 0, 0, _NO)
        for index, string in enumerate(high, start=13)
    )
    return tuple(entries)


BINDINGS: tuple[KeyBinding, ...] = tuple(
    KeyBinding(*entry)
    for entry in (*_TABLE, *_ARROW_TABLE, *_EDIT_TABLE, *_function_table())
)

del K


def lookup_key(key: Key, state: int, mode: int) -> str | None:
    """The sequence a special key sends, or ``None`` if it sends nothing."""
    return next(
        (b.string for b in BINDINGS if b.matches(key, state, mode)),
        None,
    )


def encode_char(codepoint: int, state: int, mode: int) -> bytes:
    """Encode a typed character, applying the Alt (MOD1) convention.

    With Alt held, a single-byte character is either prefixed with ESC or,
    in 8-bit mode, has its high bit set.
    """
    data = chr(codepoint).encode("utf-8")
    if len(data) == 1 and state & Modifier.MOD1:
        if mode & TermMode.EIGHT_BIT:
            if data[0] < 0o177:
                data = chr(data[0] | 0x80).encode("utf-8")
        else:
            data = b"\x1b" + data
    return data


def _button_code(button: MouseButton, trigger: Trigger) -> int:
    if button is MouseButton.MIDDLE:
        return 1
    if button is MouseButton.RIGHT:
        return 2
    if button is MouseButton.SCROLL:
        return 64 if trigger is Trigger.UP else 65
    return 0


def encode_mouse(
    button: MouseButton, trigger: Trigger, x: int, y: int, mode: int
) -> bytes | None:
    """Encode a mouse report, or ``None`` if it cannot be reported.

    SGR mode reports any position; the legacy X10 form only positions
    below 223 in both directions.
    """
    code = _button_code(button, trigger)
    if mode & TermMode.MOUSESGR:
        final = "m" if trigger is Trigger.RELEASE else "M"
        return f"\x1b[<{code};{x};{y}{final}".encode("ascii")
    if x < 223 and y < 223:
        return b"\x1b[M" + bytes([32 + code, 32 + x, 32 + y])
    return None


_FOURBIT_COLORS = (
    (1, 1, 1),
    (222, 56, 43),
    (57, 181, 74),
    (255, 199, 6),
    (0, 111, 184),
    (118, 38, 113),
    (44, 181, 233),
    (204, 204, 204),
    (128, 128, 128),
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (0, 0, 255),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
)

_TRUECOLOR_FLAG = 1 << 24


def shell_color(color: int) -> Color:
    """Convert a terminal colour value to an RGBA colour.

    Values with bit 24 set carry 8-bit RGB in their low 24 bits; other
    values index the 16-colour palette.
    """
    if color & _TRUECOLOR_FLAG:
        r, g, b = (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF
    elif 0 <= color < len(_FOURBIT_COLORS):
        r, g, b = _FOURBIT_COLORS[color]
    else:
        raise ValueError(f"colour index out of range: {color}")
    return Color(r / 255, g / 255, b / 255, 1.0)


def paste_sequence(text: str, mode: int) -> str:
    """The text sent for a paste, bracketed when the mode asks for it."""
    if mode & TermMode.BRCKTPASTE:
        return f"\x1b[200~{text}\x1b[201~"
    return text