"""Interactive state of a shell view: selection, scrolling, keys and topbar."""

from __future__ import annotations

from .glyph import Glyph
from .keys import Key, Modifier, TermMode, encode_char, lookup_key, paste_sequence
from .selection import Screen, Selection

_DOUBLE_CLICK_SECONDS = 0.3
_FAST_SCROLL_SECONDS = 0.05


def _is_shortcut(codepoint: int, letter: str, state: int) -> bool:
    return (
        codepoint == ord(letter)
        and bool(state & Modifier.SHIFT)
        and bool(state & Modifier.CONTROL)
    )


class ShellView:
    """What the user does with a shell's screen, independent of the pty.

    Key handling returns the bytes to send to the shell. Copied text is
    kept in ``clipboard`` and pasted from there.
    """

    def __init__(self, screen: Screen) -> None:
        self.screen = screen
        self.mode: TermMode = TermMode.NONE
        self.scroll = 0
        self.selection = Selection()
        self.clipboard: str | None = None
        self.cursor_x = 0
        self.cursor_y = 0
        self.fast_scrolling = False
        self._scroll_origin = 0
        self._scroll_current = 0
        self._last_scroll = 0.0
        self._last_click: float | None = None

    # Selection -------------------------------------------------------------

    def press_left(self, x: int, y: int, now: float) -> None:
        """Start a selection; quick repeated presses make double and triple clicks."""
        sel = self.selection
        sel.start_x, sel.start_y = x, y
        sel.start_scroll = self.scroll
        sel.stop_x, sel.stop_y = x, y
        sel.stop_scroll = self.scroll
        sel.active = True
        fast = (
            self._last_click is not None
            and now - self._last_click < _DOUBLE_CLICK_SECONDS
        )
        sel.triple_click = sel.double_click and fast
        sel.double_click = fast and not sel.triple_click
        sel.draw = sel.double_click or sel.triple_click
        sel.moved = False
        self._last_click = now
        if sel.double_click or sel.triple_click:
            sel.capture(self.screen)

    def release_left(self, x: int, y: int) -> None:
        """Finish a selection and capture the selected text."""
        sel = self.selection
        if not sel.double_click and not sel.triple_click:
            sel.stop_x, sel.stop_y = x, y
            sel.stop_scroll = self.scroll
        sel.active = False
        sel.draw = sel.moved or sel.double_click or sel.triple_click
        sel.capture(self.screen)

    def move(self, x: int, y: int) -> None:
        """Extend an active selection to the cell under the pointer."""
        sel = self.selection
        if not sel.active:
            return
        sel.double_click = False
        sel.triple_click = False
        sel.draw = True
        sel.stop_x, sel.stop_y = x, y
        sel.stop_scroll = self.scroll
        sel.moved = True

    def highlight_row(self, glyphs: list[Glyph], row: int) -> None:
        """Mark the selected cells of a displayed row."""
        self.selection.highlight(glyphs, row, self.scroll)

    def copy(self) -> str | None:
        """Move the captured selection into the clipboard and clear it."""
        text = self.selection.text(self.screen.cols)
        if text is None:
            return None
        self.clipboard = text
        self.selection.reset()
        return text

    # Scrolling -------------------------------------------------------------

    def scroll_wheel(self, up: bool) -> bool:
        """Scroll one line through the history; returns whether it moved."""
        if self.mode & TermMode.ALTSCREEN:
            return False
        before = self.scroll
        if up:
            if self.scroll < self.screen.scrollup:
                self.scroll += 1
        elif self.scroll > 0:
            self.scroll -= 1
        return self.scroll != before

    def start_fast_scroll(self, y: int, now: float) -> None:
        """Begin scrolling by dragging with the middle button from ``y``."""
        self.fast_scrolling = True
        self._scroll_origin = y
        self._scroll_current = y
        self._last_scroll = now

    def fast_scroll(self, y: int, now: float) -> None:
        """Scroll by the distance the pointer has been dragged.

        Nothing happens if fast scrolling is off or the previous step lies
        too far back.
        """
        if not self.fast_scrolling:
            return
        self._scroll_current = y
        if now - self._last_scroll > _FAST_SCROLL_SECONDS:
            return
        diff = self._scroll_current - self._scroll_origin
        scrollup = self.screen.scrollup
        if diff < 0:
            if self.scroll + abs(diff) < scrollup:
                self.scroll += abs(diff)
            elif self.scroll < scrollup:
                self.scroll = scrollup
        elif diff > 0:
            if self.scroll - diff > 0:
                self.scroll -= diff
            elif self.scroll > 0:
                self.scroll = 0
        self._last_scroll = now

    # Keyboard --------------------------------------------------------------

    def handle_key(self, key: Key | None, codepoint: int, state: int) -> bytes:
        """Bytes to send to the shell for a key press.

        Ctrl+Shift+V pastes the clipboard and Ctrl+Shift+C copies the
        selection; neither of those, nor an unknown key, sends anything
        other than the paste.
        """
        special = (
            lookup_key(key, state, self.mode)
            if key is not None and codepoint == 0
            else None
        )
        if special is not None:
            return special.encode("utf-8")
        if _is_shortcut(codepoint, "V", state):
            if self.clipboard is None:
                return b""
            return paste_sequence(self.clipboard, self.mode).encode("utf-8")
        if _is_shortcut(codepoint, "C", state):
            self.copy()
            return b""
        if codepoint != 0:
            self.scroll = 0
            return encode_char(codepoint, state, self.mode)
        return b""

    # Presentation ----------------------------------------------------------

    def topbar(self, width: int, cwd: str | None) -> list[int]:
        """Codepoints of the topbar: the working directory centred, scroll state right."""
        cells = [0] * width
        if cwd is not None:
            offset = width // 2 - len(cwd) // 2
            if offset >= 0:
                for i, char in enumerate(cwd[: max(width - offset, 0)]):
                    cells[offset + i] = ord(char)
        if self.scroll > 0:
            label = f"{self.scroll}/{self.screen.scrollup}"
            for i, char in enumerate(reversed(label)):
                index = width - 4 - i
                if 0 <= index < width:
                    cells[index] = ord(char)
        return cells

    def cursor(self) -> tuple[int, int]:
        """The cursor cell, or ``(-1, -1)`` when it is hidden or scrolled away."""
        if self.scroll != 0 or self.mode & TermMode.HIDE:
            return -1, -1
        return self.cursor_x, self.cursor_y