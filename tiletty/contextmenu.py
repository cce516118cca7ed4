"""Nested context menus: parsing, placement, hit testing and menu actions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

_TILING_PATHS: tuple[tuple[str, str], ...] = (
    ("Append", "Tab"),
    ("Append", "Window"),
    ("Split", "Tab"),
    ("Split", "Window"),
)

_SELECT_PATHS: tuple[tuple[str, str], ...] = tuple(
    (group, f"{digit}\x01 ")
    for group in ("Window", "Tab")
    for digit in range(1, 10)
)


@dataclass(eq=False)
class ContextMenu:
    """One entry of a context menu and, through ``items``, its sub-menu.

    An entry with an empty name is drawn as a horizontal separator; the
    character ``"\\x01"`` inside a name marks a vertical separator.
    ``x`` and ``y`` give where the entry's sub-menu is drawn.
    """

    name: str = ""
    parent: ContextMenu | None = field(default=None, repr=False)
    items: list[ContextMenu] = field(default_factory=list)
    active: bool = False
    hovered: bool = False
    x: int = 0
    y: int = 0
    c_col: int = 0
    c_row: int = 0

    def _items_width(self) -> int:
        return max((len(item.name) for item in self.items), default=0)

    def path(self) -> tuple[str, ...]:
        """Names from the outermost menu down to this entry."""
        names: list[str] = []
        menu: ContextMenu | None = self
        while menu is not None:
            names.append(menu.name)
            menu = menu.parent
        return tuple(reversed(names))

    def compute_position(self, x: int, y: int, max_x: int, max_y: int) -> None:
        """Place this menu at ``(x, y)`` and its sub-menus beside it.

        The menu is moved up and left so that it stays within
        ``max_x`` by ``max_y`` cells; a menu that had to move left does not
        place its sub-menus.
        """
        width = self._items_width()
        self.x = x
        self.y = y

        bottom = self.y + len(self.items) + 1
        if bottom > max_y:
            self.y -= bottom - max_y
        if self.y == 0:
            self.y = 1
        if self.x == 0:
            self.x = 1
        right = self.x + width + 1
        if right > max_x:
            self.x -= right - max_x
            return

        for i, item in enumerate(self.items):
            item.compute_position(x + width + 2, self.y + i, max_x, max_y)

    def hit(
        self,
        parent: ContextMenu | None,
        recursive: bool,
        x: int,
        y: int,
        max_cols: int,
    ) -> ContextMenu | None:
        """The entry at cell ``(x, y)``, this one or, if open, a descendant.

        ``parent`` is the menu this entry is listed in. An entry with a
        sub-menu only counts when that sub-menu fits within ``max_cols``.
        """
        row = self.y
        width = 0
        if parent is not None:
            width = parent._items_width()
            for i, item in enumerate(parent.items):
                if item is self:
                    row = parent.y + i

        if row == y and parent is not None and parent.x <= x <= parent.x + width:
            sub_width = self._items_width()
            fits = (
                self.x + sub_width + 2 < max_cols
                and parent.x + width + 2 < max_cols
            )
            if fits or not self.items:
                return self

        if recursive and (self.active or self.hovered):
            for item in self.items:
                found = item.hit(self, recursive, x, y, max_cols)
                if found is not None:
                    return found
        return None

    def update_hit(
        self, parent: ContextMenu | None, x: int, y: int, max_cols: int
    ) -> None:
        """Update which entries are hovered and open for the pointer at ``(x, y)``.

        Hovering an entry opens it and closes its siblings; a menu counts as
        hovered while any of its entries is.
        """
        self.hovered = (
            self.hit(parent, False, x, y, max_cols) is not None and len(self.name) > 0
        )
        if self.hovered:
            self.active = True
        if self.active and parent is not None:
            for item in parent.items:
                item.active = item is self
                item.hovered = item is self

        if self.active or self.hovered:
            for item in self.items:
                item.update_hit(self, x, y, max_cols)
                if item.hovered:
                    self.hovered = True


def _parse(text: str, pos: int, parent: ContextMenu | None) -> tuple[ContextMenu, int]:
    menu = ContextMenu(parent=parent)
    name: list[str] = []
    curly = False
    while pos < len(text) and text[pos] != "\0":
        char = text[pos]
        if char == "{" or (char == "," and curly):
            child, pos = _parse(text, pos + 1, menu)
            menu.items.append(child)
            curly = True
            continue
        if char == "}":
            if curly:
                curly = False
                pos += 1
                continue
            break
        if char == ",":
            break
        name.append(char)
        pos += 1
    menu.name = "".join(name)
    return menu, pos


def parse_menu(text: str) -> ContextMenu:
    """Build a menu tree from text such as ``"{copy,paste,,Split{Window,Tab}"``.

    Braces open a sub-menu and commas separate entries; parsing stops at
    the end of the text or at a NUL character.
    """
    menu, _ = _parse(text, 0, None)
    return menu


def _path_matches(menu: ContextMenu | None, names: Sequence[str]) -> bool:
    for expected in reversed(names):
        if menu is None or not menu.name:
            return False
        for j, char in enumerate(menu.name):
            if j >= len(expected) or expected[j] != char:
                return False
        menu = menu.parent
    return True


def _match_index(menu: ContextMenu, paths: Sequence[Sequence[str]]) -> int | None:
    return next(
        (i for i, names in enumerate(paths) if _path_matches(menu, names)),
        None,
    )


def tiling_action(menu: ContextMenu) -> int | None:
    """Which tiling entry ``menu`` is.

    0 is Append/Tab, 1 Append/Window, 2 Split/Tab and 3 Split/Window;
    ``None`` means it is not a tiling entry.
    """
    return _match_index(menu, _TILING_PATHS)


def select_action(menu: ContextMenu) -> int | None:
    """Which window or tab selection entry ``menu`` is.

    0 to 8 select windows 1 to 9, 9 to 17 select tabs 1 to 9; ``None``
    means it is not a selection entry.
    """
    return _match_index(menu, _SELECT_PATHS)


def tiling_direction(col: int, row: int, col_size: int, row_size: int) -> int:
    """The side of a tile nearest to cell ``(col, row)``.

    0 is top, 1 right, 2 bottom and 3 left.
    """
    if col_size == 0 or row_size == 0:
        raise ValueError("tile size must not be zero")
    horizontal = col / col_size - 0.5
    vertical = row / row_size - 0.5
    if abs(horizontal) > abs(vertical):
        return 1 if horizontal > 0.0 else 3
    return 2 if vertical > 0.0 else 0