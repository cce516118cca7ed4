[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tiletty"
version = "0.1.0"
description = "Building blocks for a tiling terminal emulator: glyph grids, key encoding, selections, context menus and raw terminal I/O"
requires-python = ">=3.10"
dependencies = []
keywords = ["terminal", "tty", "emulator", "tiling", "escape-sequences", "vt100"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Terminal Emulators/X Terminals",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tiletty"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
