# tiletty

Building blocks for a tiling terminal emulator. The package is plain Python
and needs only the standard library.

## Modules

- `tiletty.glyph` holds the screen cells `Glyph`, `Attributes`, `Color` and
  `Mark`, plus `TilePlacement`. It also has these helpers:
  - `blank_glyph`, `vertical_border_glyph` and `blank_grid`.
  - `post_process_row` turns border marks in a row into line-drawing
    characters.
  - `cursor_position` maps a program's cursor to screen coordinates.
- `tiletty.output`:
  - `render_rows` renders rows of glyphs as one string of escape sequences,
    starting at the home position.
  - `cursor_sequence` shows the cursor at a cell or hides it.
- `tiletty.keys` encodes input for a shell:
  - `lookup_key` looks up special keys in the key table (`BINDINGS` of
    `KeyBinding`).
  - `encode_char` encodes typed characters and applies the Alt convention.
  - `encode_mouse` builds X10 and SGR mouse reports.
  - `paste_sequence` produces bracketed paste.
  - `shell_color` maps palette and true-colour values to `Color`.

  It also defines the enums `Key`, `Modifier`, `TermMode`, `MouseButton` and
  `Trigger`.
- `tiletty.selection`: `Screen` holds visible lines and scrollback history.
  `Selection` tracks a mouse selection and supports:
  - double-click word selection and triple-click row selection (`capture`);
  - text extraction (`text`);
  - highlighting (`highlight`).
- `tiletty.shell`: `ShellView` ties selection, wheel and drag scrolling, key
  handling (with Ctrl+Shift+C / Ctrl+Shift+V copy and paste through its
  `clipboard` attribute), the topbar and the cursor together for one shell
  pane. Its key handling returns the bytes to send rather than sending them.
- `tiletty.cmdsocket`:
  - `CommandSocket` listens on a Unix domain socket named by a process id and
    reads numeric commands with `poll`.
  - `send_command` sends one command to such a socket.
- `tiletty.contextmenu`: `parse_menu` reads the `{a,b{c,d}}` menu notation
  into a `ContextMenu` tree. The tree supports placement (`compute_position`)
  and hit testing (`hit`, `update_hit`). The module also has these helpers:
  - `tiling_action` and `select_action` tell which menu entry was chosen.
  - `tiling_direction` picks the side of a tile.
- `tiletty.mousemenu`:
  - `build_menu_text` produces the right-click menu description, with its
    sections chosen by `MenuOptions`.
  - `draw_menu` draws an open menu, framed, into a glyph grid.
- `tiletty.rawterm` (POSIX only) provides these:
  - `RawMode` is a context manager that puts a terminal into raw mode on the
    alternate screen.
  - `window_size` reads the terminal size.
  - `parse_cursor_report` and `decode_input` parse terminal input.

## Example

```python
from tiletty.keys import Key, Modifier, TermMode, lookup_key
from tiletty.contextmenu import parse_menu

lookup_key(Key.UP, 0, TermMode.NONE)                 # "\x1b[A"
lookup_key(Key.UP, Modifier.CONTROL, TermMode.NONE)  # "\x1b[1;5A"

menu = parse_menu("{copy,paste,Split{Window,Tab}}")
[item.name for item in menu.items]                   # ["copy", "paste", "Split"]
```

```python
import sys
from tiletty.rawterm import RawMode

with RawMode(sys.stdin.fileno(), sys.stdout.buffer):
    ...
```

## What it does not do

These are library pieces, not a terminal emulator you can run:

- There is no command.
- Nothing starts a shell or opens a pseudo terminal.
- Nothing parses the output a shell writes to the screen.
- There is no window or tile manager that lays out panes and drives the
  pieces above.

You supply the screen contents (a `Screen`) and the event loop yourself.

## Tests

```
pip install -e .[test]
pytest
```