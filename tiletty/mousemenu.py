"""The mouse context menu: building its description and drawing it into a grid."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .contextmenu import ContextMenu
from .glyph import Glyph, Mark

_CURRENT_MARKER = "\u25cf"
_DEBUG_ATTRIBUTES = (
    "bold",
    "faint",
    "italic",
    "underline",
    "blink",
    "reverse",
    "invisible",
    "struck",
    "wrap",
    "wide",
)


@dataclass(frozen=True)
class MenuOptions:
    """Which optional sections the mouse menu shows."""

    program: bool = True
    split: bool = True
    append: bool = True
    close: bool = True
    debug: bool = False


def build_menu_text(
    commands: Sequence[str],
    programs: Sequence[str],
    current_program: str | None,
    options: MenuOptions,
    x: int,
    y: int,
    glyph: Glyph | None,
) -> str:
    """The menu description that :func:`parse_menu` turns into a menu tree.

    ``commands`` are the current program's commands, ``programs`` the names
    of all program types and ``current_program`` the one running. ``x``,
    ``y`` and ``glyph`` describe the clicked cell and are only shown in the
    debug section.
    """
    parts = ["{", ",".join(commands), ","]
    border = True

    if options.program and len(programs) > 1:
        width = max(len(name) for name in programs)
        entries = (
            f"{name.ljust(width)}\x01"
            f"{_CURRENT_MARKER if name == current_program else ' '}"
            for name in programs
        )
        parts.append("Program{" + ",".join(entries) + "},")
        border = True

    if options.split:
        if border:
            parts.append(",")
        parts.append("Split{Window,Tab},")
        border = True

    if options.append:
        if border and not options.split:
            parts.append(",")
        parts.append("Append{Window,Tab},")
        border = True

    if options.close:
        if border:
            parts.append(",")
        parts.append("Close,")
        border = True

    if options.debug:
        if glyph is None:
            raise ValueError("the debug section needs the clicked glyph")
        if border:
            parts.append(",")
        parts.append("Debug{\0")
        parts.append(f"x:{x},y:{y},")
        attributes = [
            f"Attr.{name}:{int(bool(getattr(glyph.attributes, name)))}"
            for name in _DEBUG_ATTRIBUTES
        ]
        parts.append(",".join(attributes) + "}")
        parts.append("}")

    text = "".join(parts)
    # The trailing separator is dropped.
    return text[:-1] if text else text


def _cell(grid: list[list[Glyph]], row: int, col: int) -> Glyph:
    if row < 0 or col < 0:
        raise IndexError(f"cell ({col}, {row}) lies outside the grid")
    return grid[row][col]


def _line(grid: list[list[Glyph]], row: int, col: int, char: str) -> None:
    glyph = _cell(grid, row, col)
    glyph.codepoint = ord(char)
    glyph.mark |= Mark.LINE_GRAPHICS


def _is_line(glyph: Glyph, char: str) -> bool:
    return glyph.codepoint == ord(char) and bool(glyph.mark & Mark.LINE_GRAPHICS)


def draw_menu(menu: ContextMenu | None, grid: list[list[Glyph]]) -> None:
    """Draw ``menu`` and its open sub-menus, framed, into ``grid`` in place."""
    if menu is None or not menu.items or (not menu.hovered and not menu.active):
        return

    width = max(len(item.name) for item in menu.items)
    height = len(menu.items)
    left, top = menu.x, menu.y

    for i, child in enumerate(menu.items):
        row = top + i
        if child.hovered:
            for j in range(width):
                if j < len(child.name) and child.name[j] == "\x01":
                    break
                _cell(grid, row, left + j).attributes.reverse = True
        for j in range(width):
            glyph = _cell(grid, row, left + j)
            glyph.codepoint = ord(child.name[j]) if j < len(child.name) else ord(" ")
            if not child.name:
                glyph.codepoint = ord("q")
                glyph.mark |= Mark.LINE_GRAPHICS
            elif j < len(child.name) and child.name[j] == "\x01":
                glyph.codepoint = ord("x")
                glyph.mark |= Mark.LINE_GRAPHICS

    for row in range(top, top + height):
        _line(grid, row, left - 1, "x")
        _line(grid, row, left + width, "x")

    for col in range(left - 1, left + width + 1):
        _line(grid, top - 1, col, "q")
        _line(grid, top + height, col, "q")

    _line(grid, top - 1, left - 1, "l")
    _line(grid, top - 1, left + width, "k")
    _line(grid, top + height, left - 1, "m")
    _line(grid, top + height, left + width, "j")

    for row in range(top, top + height):
        if _is_line(_cell(grid, row, left), "q"):
            _cell(grid, row, left - 1).codepoint = ord("t")
    for row in range(top, top + height):
        if _is_line(_cell(grid, row, left + width - 1), "q"):
            _cell(grid, row, left + width).codepoint = ord("u")
    for col in range(left, left + width):
        if _is_line(_cell(grid, top, col), "x"):
            _cell(grid, top - 1, col).codepoint = ord("w")
    for col in range(left, left + width):
        if _is_line(_cell(grid, top + height - 1, col), "x"):
            _cell(grid, top + height, col).codepoint = ord("v")

    for child in menu.items:
        draw_menu(child, grid)