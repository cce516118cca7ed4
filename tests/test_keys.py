import pytest

from tiletty.glyph import Color
from tiletty.keys import (
    BINDINGS,
    Key,
    Modifier,
    MouseButton,
    TermMode,
    Trigger,
    encode_char,
    encode_mouse,
    lookup_key,
    paste_sequence,
    shell_color,
)


def test_arrow_normal_and_application_cursor():
    assert lookup_key(Key.UP, 0, TermMode.NONE) == "\x1b[A"
    assert lookup_key(Key.UP, 0, TermMode.APPCURSOR) == "\x1bOA"


@pytest.mark.parametrize(
    "state, expected",
    [
        (Modifier.SHIFT, "\x1b[1;2A"),
        (Modifier.MOD1, "\x1b[1;3A"),
        (Modifier.CONTROL, "\x1b[1;5A"),
        (Modifier.SHIFT | Modifier.CONTROL | Modifier.MOD1, "\x1b[1;8A"),
    ],
)
def test_arrow_with_modifiers(state, expected):
    assert lookup_key(Key.UP, state, TermMode.NONE) == expected


def test_keypad_digit_depends_on_appkeypad_and_numlock():
    assert lookup_key(Key.KP_5, 0, TermMode.NONE) is None
    assert lookup_key(Key.KP_5, 0, TermMode.APPKEYPAD) == "\x1bOu"
    assert lookup_key(Key.KP_5, 0, TermMode.APPKEYPAD | TermMode.NUMLOCK) is None


def test_keypad_enter():
    assert lookup_key(Key.KP_ENTER, 0, TermMode.NONE) == "\r"
    assert lookup_key(Key.KP_ENTER, 0, TermMode.APPKEYPAD) == "\x1bOM"


def test_backspace_mask_must_match_exactly():
    assert lookup_key(Key.BACKSPACE, 0, TermMode.NONE) == "\x7f"
    assert lookup_key(Key.BACKSPACE, Modifier.MOD1, TermMode.NONE) == "\x1b\x7f"
    assert lookup_key(Key.BACKSPACE, Modifier.CONTROL, TermMode.NONE) is None


def test_delete_in_both_keypad_modes():
    assert lookup_key(Key.DELETE, 0, TermMode.NONE) == "\x1b[P"
    assert lookup_key(Key.DELETE, 0, TermMode.APPKEYPAD) == "\x1b[3~"


def test_function_keys():
    assert lookup_key(Key.F1, 0, TermMode.NONE) == "\x1bOP"
    assert lookup_key(Key.F1, Modifier.SHIFT, TermMode.NONE) == "\x1b[1;2P"
    assert lookup_key(Key.F5, 0, TermMode.NONE) == "\x1b[15~"
    assert lookup_key(Key.F13, 0, TermMode.NONE) == "\x1b[1;2P"
    assert lookup_key(Key.F35, 0, TermMode.NONE) == "\x1b[23;5~"


def test_f4_has_no_mod3_binding():
    assert lookup_key(Key.F3, Modifier.MOD3, TermMode.NONE) == "\x1b[1;4R"
    assert lookup_key(Key.F4, Modifier.MOD3, TermMode.NONE) is None


def test_first_matching_binding_wins():
    for binding in BINDINGS:
        if binding.appkey == 0 and binding.appcursor == 0 and binding.mask is not None:
            found = lookup_key(binding.key, binding.mask, TermMode.NONE)
            first = next(
                b for b in BINDINGS if b.matches(binding.key, binding.mask, 0)
            )
            assert found == first.string


def test_key_without_binding():
    assert lookup_key(Key.CONTROL_L, 0, TermMode.NONE) is None


def test_encode_plain_char():
    assert encode_char(ord("a"), 0, TermMode.NONE) == b"a"


def test_encode_alt_char_prefixes_escape():
    assert encode_char(ord("a"), Modifier.MOD1, TermMode.NONE) == b"\x1ba"


def test_encode_alt_char_in_eight_bit_mode_sets_high_bit():
    assert encode_char(ord("a"), Modifier.MOD1, TermMode.EIGHT_BIT) == "\u00e1".encode()


def test_encode_multibyte_char_ignores_alt():
    assert encode_char(0xE9, Modifier.MOD1, TermMode.NONE) == "\u00e9".encode("utf-8")


def test_mouse_sgr_press_and_release():
    assert encode_mouse(MouseButton.LEFT, Trigger.PRESS, 3, 4, TermMode.MOUSESGR) == (
        b"\x1b[<0;3;4M"
    )
    assert encode_mouse(
        MouseButton.LEFT, Trigger.RELEASE, 3, 4, TermMode.MOUSESGR
    ).endswith(b"m")


def test_mouse_sgr_scroll_codes():
    up = encode_mouse(MouseButton.SCROLL, Trigger.UP, 1, 1, TermMode.MOUSESGR)
    down = encode_mouse(MouseButton.SCROLL, Trigger.DOWN, 1, 1, TermMode.MOUSESGR)
    assert up.startswith(b"\x1b[<64;")
    assert down.startswith(b"\x1b[<65;")


def test_mouse_legacy_encoding():
    data = encode_mouse(MouseButton.RIGHT, Trigger.PRESS, 5, 7, TermMode.NONE)
    assert data[:3] == b"\x1b[M"
    assert list(data[3:]) == [32 + 2, 32 + 5, 32 + 7]


def test_mouse_legacy_out_of_range():
    assert encode_mouse(MouseButton.LEFT, Trigger.PRESS, 223, 1, TermMode.NONE) is None
    assert encode_mouse(MouseButton.LEFT, Trigger.PRESS, 1, 300, TermMode.NONE) is None


def test_palette_color():
    color = shell_color(15)
    assert (color.r, color.g, color.b, color.a) == (1.0, 1.0, 1.0, 1.0)
    black = shell_color(0)
    assert black.r == pytest.approx(1 / 255)


def test_truecolor():
    color = shell_color((1 << 24) | 0xFF0000)
    assert color == Color(1.0, 0.0, 0.0, 1.0)


def test_all_palette_channels_normalised():
    for index in range(16):
        color = shell_color(index)
        assert all(0.0 <= c <= 1.0 for c in (color.r, color.g, color.b))


def test_palette_index_out_of_range():
    with pytest.raises(ValueError):
        shell_color(16)


def test_paste_plain_and_bracketed():
    assert paste_sequence("ls -l", TermMode.NONE) == "ls -l"
    assert paste_sequence("ls -l", TermMode.BRCKTPASTE) == "\x1b[200~ls -l\x1b[201~"