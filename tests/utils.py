"""Test utilities for prosediff test suite.

This module provides the sample diff location, the escape sequences of the
default palette, and helpers for comparing highlighted output.
"""

import re
from pathlib import Path

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "diffs"

# Default (truecolor) palette
DARK_RED = "\x1b[48;2;75;0;5m"
LIGHT_RED = "\x1b[48;2;160;20;20m"
DARK_GREEN = "\x1b[48;2;0;45;0m"
LIGHT_GREEN = "\x1b[48;2;0;85;0m"
ERASE = "\x1b[K"
RESET_BG = "\x1b[49m"

# 256 colour palette
CUBE_DARK_RED = "\x1b[48;5;52m"
CUBE_LIGHT_RED = "\x1b[48;5;88m"
CUBE_DARK_GREEN = "\x1b[48;5;22m"
CUBE_LIGHT_GREEN = "\x1b[48;5;28m"

_CSI_RE = re.compile(r"\x1b\[[0-9;:]*[A-Za-z]")


def strip_escapes(text: str) -> str:
    """Remove all CSI escape sequences (SGR, erase, ...) from ``text``."""
    return _CSI_RE.sub("", text)


def read_fixture(name: str) -> str:
    """Read a sample diff as UTF-8 with line endings untouched."""
    with open(FIXTURES_DIR / name, encoding="utf-8", newline="") as f:
        return f.read()


def changed_line(prefix: str, before: str, word: str, after: str, dark: str, light: str) -> str:
    """Build the expected output of a changed line with one highlighted word.

    Parameters
    ----------
    prefix : str
        Diff line prefix, e.g. ``"-"`` or ``"> "``
    before : str
        Text before the highlighted word
    word : str
        The highlighted word
    after : str
        Text after the highlighted word, without the line break
    dark : str
        Whole-line background
    light : str
        Word background

    """
    return f"{dark}{ERASE}{prefix}{before}{light}{word}{dark}{after}{RESET_BG}\n"
