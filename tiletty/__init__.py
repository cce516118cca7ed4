"""Building blocks for a tiling terminal emulator: glyph grids, key and mouse encoding, selections, context menus, a command socket and raw terminal I/O."""

__version__ = "0.1.0"