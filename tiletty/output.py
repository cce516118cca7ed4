"""Rendering of glyph grids as terminal escape sequences."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .glyph import Color, Glyph, Mark

_ATTRIBUTE_CODES = (
    ("bold", "\x1b[1m"),
    ("faint", "\x1b[2m"),
    ("italic", "\x1b[3m"),
    ("underline", "\x1b[4m"),
    ("blink", "\x1b[5m"),
    ("reverse", "\x1b[7m"),
    ("invisible", "\x1b[8m"),
    ("struck", "\x1b[9m"),
)


def cursor_sequence(x: int, y: int) -> str:
    """Show the cursor at 1-based column ``x``, row ``y``, or hide it."""
    if x > 0 and y > 0:
        return f"\x1b[?25h\x1b[{y};{x}H"
    return "\x1b[?25l"


def _channels(color: Color) -> str:
    return ";".join(str(int(c * 255.0)) for c in (color.r, color.g, color.b))


def _render_glyph(glyph: Glyph) -> str:
    parts = ["\x1b[0m"]
    if glyph.foreground is not None:
        parts.append(f"\x1b[38;2;{_channels(glyph.foreground)}m")
    if glyph.background is not None:
        parts.append(f"\x1b[48;2;{_channels(glyph.background)}m")
    parts.extend(
        code for name, code in _ATTRIBUTE_CODES if getattr(glyph.attributes, name)
    )
    char = chr(glyph.codepoint)
    if glyph.mark & Mark.LINE_GRAPHICS:
        parts.append(f"\x1b(0{char}\x1b(B")
    else:
        parts.append(char)
    return "".join(parts)


def render_rows(rows: Iterable[Sequence[Glyph]]) -> str:
    """Render whole rows, starting from the home position."""
    lines = ("".join(_render_glyph(g) for g in row) for row in rows)
    return "\x1b[H" + "\r\n".join(lines)