"""Screen cells, grid helpers and cursor placement for tiled views."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Mark(enum.IntFlag):
    """Drawing hints attached to a glyph."""

    NONE = 0
    LINE_VERTICAL = 1
    LINE_HORIZONTAL = 2
    LINE_GRAPHICS = 4
    ACCENT = 8


@dataclass
class Color:
    """An RGBA colour with channels in the range 0..1."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0


@dataclass
class Attributes:
    """Text attributes of a single cell."""

    bold: bool = False
    faint: bool = False
    italic: bool = False
    underline: bool = False
    blink: bool = False
    reverse: bool = False
    invisible: bool = False
    struck: bool = False
    wrap: bool = False
    wide: bool = False


@dataclass
class Glyph:
    """One cell of the screen.

    A colour of ``None`` means the terminal's default colour is used.
    """

    codepoint: int = 0
    attributes: Attributes = field(default_factory=Attributes)
    foreground: Color | None = None
    background: Color | None = None
    mark: Mark = Mark.NONE


@dataclass(frozen=True)
class TilePlacement:
    """Where a tile starts within its parent, in cells."""

    col_position: int = 0
    row_position: int = 0


def blank_glyph() -> Glyph:
    """A cleared cell holding a space."""
    return Glyph(codepoint=ord(" "))


def vertical_border_glyph() -> Glyph:
    """The cell drawn as the separator on the right edge of a tile."""
    glyph = Glyph(codepoint=ord(" "), mark=Mark.LINE_VERTICAL | Mark.ACCENT)
    glyph.attributes.reverse = True
    return glyph


def blank_grid(cols: int, rows: int) -> list[list[Glyph]]:
    """A grid of ``rows`` rows of ``cols`` zeroed glyphs."""
    if cols < 0 or rows < 0:
        raise ValueError("grid dimensions must not be negative")
    return [[Glyph() for _ in range(cols)] for _ in range(rows)]


def post_process_row(grid: list[list[Glyph]], row: int) -> None:
    """Turn border marks in ``grid[row]`` into line-drawing characters.

    Vertical and horizontal tile borders are joined into corners, tees and
    crosses depending on their neighbours. The row is changed in place.
    """
    cells = grid[row]
    cols = len(cells)
    rows = len(grid)
    outside = Glyph()

    for i, glyph in enumerate(cells):
        left = cells[i - 1] if i > 0 else outside
        right = cells[i + 1] if i < cols - 1 else outside
        above = grid[row - 1][i] if row > 0 and i < len(grid[row - 1]) else outside
        below = (
            grid[row + 1][i] if row + 1 < rows and i < len(grid[row + 1]) else outside
        )

        if glyph.mark & Mark.LINE_VERTICAL:
            glyph.codepoint = ord("x")
            glyph.attributes.reverse = False
            glyph.mark |= Mark.LINE_GRAPHICS
            if (
                right.attributes.reverse
                and right.mark & Mark.LINE_HORIZONTAL
                and left.attributes.reverse
                and left.mark & Mark.LINE_HORIZONTAL
            ):
                glyph.attributes.reverse = True
                continue
            if right.mark & Mark.LINE_HORIZONTAL:
                if left.mark & Mark.LINE_HORIZONTAL:
                    if row > 0 and above.mark & Mark.LINE_VERTICAL:
                        if right.attributes.reverse:
                            glyph.codepoint = ord("b")
                        elif left.attributes.reverse:
                            glyph.codepoint = ord("c")
                        else:
                            glyph.codepoint = ord("n")
                    else:
                        glyph.codepoint = ord("w")
                else:
                    glyph.codepoint = ord("d" if right.attributes.reverse else "t")
            elif i < cols - 1 and left.mark & Mark.LINE_HORIZONTAL:
                glyph.codepoint = ord("e" if left.attributes.reverse else "u")

        horizontal_plain = (
            glyph.mark & Mark.LINE_HORIZONTAL and not glyph.attributes.reverse
        )
        if horizontal_plain and row > 0 and above.mark & Mark.LINE_VERTICAL:
            glyph.codepoint = ord("v")
        horizontal_plain = (
            glyph.mark & Mark.LINE_HORIZONTAL and not glyph.attributes.reverse
        )
        if horizontal_plain and rows > row + 1 and below.mark & Mark.LINE_VERTICAL:
            glyph.codepoint = ord("w")

        if glyph.mark & Mark.LINE_VERTICAL:
            if i < cols - 1 and right.attributes.reverse:
                glyph.mark |= Mark.LINE_GRAPHICS
                glyph.codepoint = ord("d")
            if i > 0 and left.attributes.reverse:
                glyph.mark |= Mark.LINE_GRAPHICS
                glyph.codepoint = ord("e")
            if (
                i > 0
                and left.attributes.reverse
                and i < cols - 1
                and right.attributes.reverse
            ):
                glyph.attributes.reverse = True
                glyph.mark = Mark.NONE
                glyph.codepoint = 0


def cursor_position(
    x: int,
    y: int,
    macro: TilePlacement,
    micro: TilePlacement,
    bar_on: bool,
) -> tuple[int, int]:
    """Map a program's cursor to screen coordinates.

    ``x`` and ``y`` are relative to the program area of the micro tile
    inside the macro tile; ``bar_on`` tells whether a topbar or titlebar is
    shown. A negative coordinate means the cursor is hidden, and
    ``(-1, -1)`` is returned.
    """
    if x < 0 or y < 0:
        return -1, -1

    y += 1 + int(bar_on)
    y += int(micro.row_position > 0)
    y += int(not bar_on and macro.row_position > 0)

    x += micro.col_position
    y += micro.row_position

    x += macro.col_position + 1
    y += macro.row_position
    return x, y