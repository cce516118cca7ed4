"""Mouse selection over a shell screen and its scrollback history."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, fields
from itertools import takewhile

from .glyph import Glyph, Mark

_WORD_STOPS = frozenset(map(ord, " ;(){}<>"))


def is_word_stop(codepoint: int) -> bool:
    """Whether a double click stops extending the word at this character."""
    return codepoint in _WORD_STOPS


def _is_blank(codepoint: int) -> bool:
    return codepoint in (ord(" "), 0)


def _chars(cells: Sequence[int]) -> str:
    return "".join(map(chr, cells))


@dataclass
class Screen:
    """The codepoints of the visible lines and of the scrollback history.

    ``history`` is ordered oldest first; the last entry is the line that
    scrolled off the top most recently.
    """

    cols: int
    lines: list[Sequence[int]] = field(default_factory=list)
    history: list[Sequence[int]] = field(default_factory=list)

    @property
    def scrollup(self) -> int:
        """Number of lines held in the history."""
        return len(self.history)

    def row_text(self, index: int) -> list[int]:
        """The codepoints of a row, ``cols`` wide and padded with zeros.

        Non-negative indices address visible lines; negative indices reach
        back into the history, ``-1`` being its most recent line.
        """
        if index < 0:
            depth = -index
            if depth > len(self.history):
                raise IndexError(f"history row {index} does not exist")
            row = self.history[len(self.history) - depth]
        else:
            row = self.lines[index]
        cells = list(row[: self.cols])
        cells.extend([0] * (self.cols - len(cells)))
        return cells


@dataclass
class Selection:
    """A selection made with the left mouse button.

    Positions are screen cells; each end remembers how far the view was
    scrolled back when it was set, so the selection stays attached to its
    text while scrolling.
    """

    start_x: int = 0
    start_y: int = 0
    start_scroll: int = 0
    stop_x: int = 0
    stop_y: int = 0
    stop_scroll: int = 0
    buffer: list[list[int]] = field(default_factory=list)
    active: bool = False
    draw: bool = False
    double_click: bool = False
    triple_click: bool = False
    moved: bool = False

    def _indices(self) -> tuple[int, int]:
        return self.start_y - self.start_scroll, self.stop_y - self.stop_scroll

    def bounds(self) -> tuple[int, int]:
        """First and last selected row, negative ones lying in the history."""
        first, second = self._indices()
        return min(first, second), max(first, second)

    def capture(self, screen: Screen) -> None:
        """Copy the selected rows out of ``screen`` into the buffer.

        A double click on a single cell widens the selection to the word
        around it; a triple click widens it to the whole row.
        """
        self.buffer = []
        start, stop = self.bounds()
        single_cell = start == stop and self.start_x == self.stop_x

        if single_cell and (self.double_click or self.triple_click):
            row = screen.row_text(start)
            self.buffer = [row]
            if self.double_click:
                if not 0 <= self.start_x < screen.cols:
                    raise IndexError("selection column lies outside the screen")
                left = self.start_x
                while left >= 0 and not is_word_stop(row[left]):
                    left -= 1
                right = self.start_x
                while right < screen.cols and not is_word_stop(row[right]):
                    right += 1
            else:
                left = min(self.start_x, -1)
                right = max(self.start_x, screen.cols)
            if left != right:
                self.start_x = left + 1
                self.stop_x = right - 1
            return

        self.buffer = [screen.row_text(i) for i in range(start, stop + 1)]

    def text(self, cols: int) -> str | None:
        """The captured text, lines joined by newlines; ``None`` if empty."""
        if not self.buffer:
            return None

        parts: list[str] = []
        for i, row in enumerate(self.buffer):
            if i > 0:
                parts.append("\n")
            empty = sum(1 for _ in takewhile(_is_blank, reversed(row[:cols])))
            empty = max(empty - 1, 0)

            if i == 0:
                if self.start_y == self.stop_y:
                    length = abs(self.stop_x - self.start_x) + 1
                elif self.start_y > self.stop_y:
                    length = cols - self.stop_x - empty
                else:
                    length = cols - self.start_x - empty
                offset = max(min(self.start_x, self.stop_x), 0)
                if length > 0:
                    parts.append(_chars(row[offset : offset + length]))
            elif cols - empty > 0:
                parts.append(_chars(row[: cols - empty]))
        return "".join(parts)

    def highlight(self, glyphs: list[Glyph], row: int, scroll: int) -> None:
        """Mark the selected cells of one displayed row as reversed."""
        first, second = self._indices()
        start, stop = self.bounds()
        line = row - scroll
        if not self.draw or not start <= line <= stop:
            return

        for i, glyph in enumerate(glyphs):
            if first <= second:
                if self.start_x < self.stop_x:
                    if line == start and i < self.start_x:
                        continue
                    if line == stop and i > self.stop_x:
                        continue
                else:
                    if line == start and i > self.start_x:
                        continue
                    if line == stop and i < self.stop_x:
                        continue
            else:
                if line == start and i < self.stop_x:
                    continue
                if line == stop and i > self.start_x:
                    continue
            if (
                self.start_x != self.stop_x
                or start != stop
                or glyph.codepoint != ord(" ")
            ):
                glyph.attributes.reverse = True
                glyph.mark |= Mark.ACCENT

    def reset(self) -> None:
        """Forget the selection entirely."""
        fresh = Selection()
        for item in fields(self):
            setattr(self, item.name, getattr(fresh, item.name))