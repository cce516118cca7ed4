import pytest

from tiletty.glyph import Glyph, Mark
from tiletty.selection import Screen, Selection, is_word_stop


def _row(text):
    return [ord(c) for c in text]


def _glyphs(text):
    return [Glyph(codepoint=ord(c)) for c in text]


def _reversed(glyphs):
    return {i for i, g in enumerate(glyphs) if g.attributes.reverse}


def test_word_stops():
    assert all(is_word_stop(ord(c)) for c in " ;(){}<>")
    assert not is_word_stop(ord("a"))
    assert not is_word_stop(ord("-"))


def test_row_text_pads_to_width():
    screen = Screen(cols=5, lines=[_row("ab")])
    assert screen.row_text(0) == _row("ab") + [0, 0, 0]


def test_row_text_reaches_into_history():
    screen = Screen(cols=2, lines=[_row("zz")], history=[_row("aa"), _row("bb")])
    assert screen.scrollup == 2
    assert screen.row_text(-1) == _row("bb")
    assert screen.row_text(-2) == _row("aa")
    with pytest.raises(IndexError):
        screen.row_text(-3)


def test_bounds_are_ordered_and_scroll_adjusted():
    selection = Selection(start_y=5, start_scroll=2, stop_y=1)
    assert selection.bounds() == (1, 3)


def test_double_click_selects_word():
    screen = Screen(cols=10, lines=[_row("foo bar   ")])
    selection = Selection(start_x=5, stop_x=5, double_click=True)
    selection.capture(screen)
    assert (selection.start_x, selection.stop_x) == (4, 6)
    assert selection.text(screen.cols) == "bar"


def test_double_click_on_separator_keeps_columns():
    screen = Screen(cols=10, lines=[_row("foo bar   ")])
    selection = Selection(start_x=3, stop_x=3, double_click=True)
    selection.capture(screen)
    assert (selection.start_x, selection.stop_x) == (3, 3)
    assert selection.text(screen.cols) == " "


def test_double_click_in_history():
    screen = Screen(
        cols=8, lines=[_row("visible ")], history=[_row("old(word")]
    )
    selection = Selection(
        start_x=5, stop_x=5, start_scroll=1, stop_scroll=1, double_click=True
    )
    selection.capture(screen)
    assert selection.buffer == [_row("old(word")]
    assert selection.text(screen.cols) == "word"


def test_double_click_outside_screen_raises():
    screen = Screen(cols=4, lines=[_row("abcd")])
    selection = Selection(start_x=9, stop_x=9, double_click=True)
    with pytest.raises(IndexError):
        selection.capture(screen)


def test_triple_click_selects_whole_row():
    screen = Screen(cols=7, lines=[_row("ab cd  ")])
    selection = Selection(start_x=1, stop_x=1, triple_click=True)
    selection.capture(screen)
    assert (selection.start_x, selection.stop_x) == (0, screen.cols - 1)
    assert selection.text(screen.cols) == "ab cd  "


def test_multi_line_text_trims_trailing_blanks():
    screen = Screen(cols=4, lines=[_row("ab  "), _row("cd  ")])
    selection = Selection(start_x=0, start_y=0, stop_x=1, stop_y=1)
    selection.capture(screen)
    assert len(selection.buffer) == 2
    assert selection.text(screen.cols) == "ab \ncd "


def test_upward_drag_reads_full_rows():
    screen = Screen(cols=4, lines=[_row("abcd"), _row("efgh")])
    selection = Selection(start_x=2, start_y=1, stop_x=0, stop_y=0)
    selection.capture(screen)
    assert selection.text(screen.cols) == "abcd\nefgh"


def test_text_without_capture_is_none():
    assert Selection().text(10) is None


def test_highlight_single_row_range():
    glyphs = _glyphs("abcdef")
    selection = Selection(start_x=1, stop_x=3, draw=True)
    selection.highlight(glyphs, 0, 0)
    assert _reversed(glyphs) == {1, 2, 3}
    assert all(glyphs[i].mark & Mark.ACCENT for i in (1, 2, 3))
    assert not glyphs[0].mark & Mark.ACCENT


def test_highlight_needs_draw_flag():
    glyphs = _glyphs("abcdef")
    Selection(start_x=1, stop_x=3).highlight(glyphs, 0, 0)
    assert _reversed(glyphs) == set()


def test_highlight_single_space_cell_is_skipped():
    spaces = _glyphs("a b")
    Selection(start_x=1, stop_x=1, draw=True).highlight(spaces, 0, 0)
    assert _reversed(spaces) == set()
    letters = _glyphs("a b")
    Selection(start_x=2, stop_x=2, draw=True).highlight(letters, 0, 0)
    assert _reversed(letters) == {2}


def test_highlight_follows_scroll():
    selection = Selection(start_x=0, stop_x=2, start_y=2, stop_y=2, draw=True)
    shifted = _glyphs("abc")
    selection.highlight(shifted, 2, 1)
    assert _reversed(shifted) == set()
    aligned = _glyphs("abc")
    selection.highlight(aligned, 3, 1)
    assert _reversed(aligned) == {0, 1, 2}


def test_reset_clears_everything():
    screen = Screen(cols=4, lines=[_row("abcd")])
    selection = Selection(start_x=1, stop_x=2, active=True, draw=True)
    selection.capture(screen)
    selection.reset()
    assert selection == Selection()
    assert selection.text(4) is None