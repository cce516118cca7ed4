import pytest

from tiletty.glyph import blank_glyph
from tiletty.keys import Key, Modifier, TermMode, encode_char
from tiletty.selection import Screen
from tiletty.shell import ShellView


def _row(text):
    return [ord(c) for c in text]


def _view(lines, history=0, cols=5):
    screen = Screen(
        cols=cols,
        lines=[_row(t) for t in lines],
        history=[_row("zzzzz") for _ in range(history)],
    )
    return ShellView(screen)


def test_special_key_sends_sequence():
    view = _view(["hello"])
    assert view.handle_key(Key.UP, 0, Modifier.NONE) == b"\x1b[A"


def test_plain_character_resets_scroll():
    view = _view(["hello"], history=3)
    view.scroll_wheel(True)
    assert view.scroll == 1
    assert view.handle_key(None, ord("a"), 0) == b"a"
    assert view.scroll == 0


def test_alt_character_matches_encoding():
    view = _view(["hello"])
    result = view.handle_key(None, ord("a"), Modifier.MOD1)
    assert result == encode_char(ord("a"), Modifier.MOD1, TermMode.NONE)


def test_bracketed_paste():
    view = _view(["hello"])
    view.clipboard = "hi"
    view.mode = TermMode.BRCKTPASTE
    out = view.handle_key(None, ord("V"), Modifier.SHIFT | Modifier.CONTROL)
    assert out == b"\x1b[200~hi\x1b[201~"


def test_paste_without_clipboard_sends_nothing():
    view = _view(["hello"])
    assert view.handle_key(None, ord("V"), Modifier.SHIFT | Modifier.CONTROL) == b""


def test_drag_and_copy():
    view = _view(["hello", "world"])
    view.press_left(1, 0, 0.0)
    view.move(3, 0)
    view.release_left(3, 0)
    text = view.copy()
    assert text == "ell"
    assert view.clipboard == text
    assert view.selection.buffer == []


def test_copy_shortcut_fills_clipboard():
    view = _view(["hello", "world"])
    view.press_left(1, 0, 0.0)
    view.move(3, 0)
    view.release_left(3, 0)
    assert view.handle_key(None, ord("C"), Modifier.SHIFT | Modifier.CONTROL) == b""
    assert view.clipboard is not None and view.clipboard in "hello"


def test_copy_without_selection():
    view = _view(["hello"])
    view.clipboard = "old"
    assert view.copy() is None
    assert view.clipboard == "old"


def test_double_click_selects_word():
    view = _view(["ab cd"])
    view.press_left(4, 0, 0.0)
    view.release_left(4, 0)
    view.press_left(4, 0, 0.1)
    assert view.selection.double_click
    view.release_left(4, 0)
    assert view.copy() == "cd"


def test_triple_click_selects_row():
    view = _view(["ab cd"])
    view.press_left(4, 0, 0.0)
    view.release_left(4, 0)
    view.press_left(4, 0, 0.1)
    view.release_left(4, 0)
    view.press_left(4, 0, 0.2)
    assert view.selection.triple_click
    assert not view.selection.double_click
    view.release_left(4, 0)
    assert view.copy() == "ab cd"


def test_slow_clicks_are_not_double():
    view = _view(["ab cd"])
    view.press_left(4, 0, 0.0)
    view.release_left(4, 0)
    view.press_left(4, 0, 1.0)
    assert not view.selection.double_click
    assert not view.selection.triple_click


def test_highlight_row_marks_selection():
    view = _view(["hello"])
    view.press_left(1, 0, 0.0)
    view.move(3, 0)
    view.release_left(3, 0)
    glyphs = [blank_glyph() for _ in range(5)]
    view.highlight_row(glyphs, 0)
    assert [g.attributes.reverse for g in glyphs] == [False, True, True, True, False]


def test_scroll_wheel_stays_in_history():
    view = _view(["hello"], history=3)
    for _ in range(10):
        view.scroll_wheel(True)
    assert view.scroll == view.screen.scrollup
    for _ in range(10):
        view.scroll_wheel(False)
    assert view.scroll == 0
    assert view.scroll_wheel(False) is False


def test_scroll_wheel_ignored_on_alt_screen():
    view = _view(["hello"], history=3)
    view.mode = TermMode.ALTSCREEN
    assert view.scroll_wheel(True) is False
    assert view.scroll == 0


def test_fast_scroll_moves_by_drag_distance():
    view = _view(["hello"], history=10)
    view.start_fast_scroll(10, 0.0)
    view.fast_scroll(7, 0.01)
    assert view.scroll == 10 - 7
    view.fast_scroll(10 + 1, 0.02)
    assert view.scroll == 10 - 7 - 1


def test_fast_scroll_clamps_to_history():
    view = _view(["hello"], history=2)
    view.start_fast_scroll(10, 0.0)
    view.fast_scroll(0, 0.01)
    assert view.scroll == view.screen.scrollup


def test_fast_scroll_ignores_stale_step():
    view = _view(["hello"], history=10)
    view.start_fast_scroll(10, 0.0)
    view.fast_scroll(5, 1.0)
    assert view.scroll == 0


def test_fast_scroll_inactive_does_nothing():
    view = _view(["hello"], history=10)
    view.fast_scroll(0, 0.0)
    assert view.scroll == 0


@pytest.mark.parametrize("hide,scroll", [(True, 0), (False, 1)])
def test_cursor_hidden(hide, scroll):
    view = _view(["hello"], history=2)
    view.cursor_x, view.cursor_y = 2, 0
    if hide:
        view.mode = TermMode.HIDE
    view.scroll = scroll
    assert view.cursor() == (-1, -1)


def test_cursor_visible():
    view = _view(["hello"])
    view.cursor_x, view.cursor_y = 2, 0
    assert view.cursor() == (2, 0)


def test_topbar_centres_directory():
    view = _view(["hello"])
    cells = view.topbar(20, "/home")
    assert len(cells) == 20
    assert "".join(chr(c) for c in cells if c) == "/home"


def test_topbar_without_directory_is_empty():
    view = _view(["hello"])
    assert set(view.topbar(10, None)) == {0}


def test_topbar_shows_scroll_state():
    view = _view(["hello"], history=3)
    view.scroll_wheel(True)
    width = 20
    cells = view.topbar(width, None)
    label = f"{view.scroll}/{view.screen.scrollup}"
    assert "".join(chr(c) for c in cells if c) == label
    assert cells[width - 4] == ord(label[-1])