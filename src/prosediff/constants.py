#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for prosediff.

This module centralizes the hardcoded values used across prosediff so that
the colour palette, the ANSI style table and the command defaults can be
found in one place.

Constants are organized by category:
1. Type Definitions - Literal types
2. Command Defaults - external programs used by the CLI
3. Palette - background colours used for highlighting
4. ANSI Style Table - SGR code to style category lookup
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

ColorMode = Literal["truecolor", "256"]
RGB = tuple[int, int, int]

# =============================================================================
# Command Defaults
# =============================================================================

DEFAULT_COMMAND = "diff"
DEFAULT_PAGER = "less -FRSX"
DEFAULT_COLOR_MODE: ColorMode = "truecolor"
COLOR_MODES: tuple[str, ...] = ("truecolor", "256")

# =============================================================================
# Palette
# =============================================================================

# 24-bit backgrounds
DEFAULT_BG_DARK_RED: RGB = (75, 0, 5)
DEFAULT_BG_LIGHT_RED: RGB = (160, 20, 20)
DEFAULT_BG_DARK_GREEN: RGB = (0, 45, 0)
DEFAULT_BG_LIGHT_GREEN: RGB = (0, 85, 0)

# 6x6x6 colour cube equivalents (each component 0-5)
CUBE_BG_DARK_RED: RGB = (1, 0, 0)
CUBE_BG_LIGHT_RED: RGB = (2, 0, 0)
CUBE_BG_DARK_GREEN: RGB = (0, 1, 0)
CUBE_BG_LIGHT_GREEN: RGB = (0, 2, 0)

PALETTE_KEYS: tuple[str, ...] = ("bg_dark_red", "bg_light_red", "bg_dark_green", "bg_light_green")

ERASE_TO_EOL = "\x1b[K"
RESET_BACKGROUND = "\x1b[49m"

# =============================================================================
# ANSI Style Table
# =============================================================================

# Any SGR ('ESC[...m') sequence; colon sub-parameters included.
ANSI_SGR_PATTERN = r"\x1b\[[0-9;:]*m"

# Style category -> (unset code, set codes...). Background colour is absent on
# purpose: codes not listed here are dropped during normalization.
ANSI_STYLE_CATEGORIES: dict[str, tuple[int, ...]] = {
    "bold": (22, 1, 2),
    "italic": (23, 3),
    "underline": (24, 4, 21),
    "blink": (25, 5, 6),
    "inverse": (27, 7),
    "hidden": (28, 8),
    "strikethrough": (29, 9),
    "foreground": (39, 38, *range(30, 38), *range(90, 98)),
    "overline": (55, 53),
    "underline_color": (59, 58),
    "superscript": (75, 73, 74),
}

# SGR command (as string) -> style category
ANSI_CODE_CATEGORY: dict[str, str] = {
    str(code): name for name, codes in ANSI_STYLE_CATEGORIES.items() for code in codes
}

# Style category -> the code that turns it off
ANSI_UNSET_CODE: dict[str, str] = {name: str(codes[0]) for name, codes in ANSI_STYLE_CATEGORIES.items()}

# Codes that switch a category off (recognised on input, only emitted when the
# category is active)
ANSI_UNSET_CODES: frozenset[str] = frozenset(ANSI_UNSET_CODE.values()) | {"4:0"}

# Commands that take semicolon delimited extended colour arguments
ANSI_EXTENDED_COLOR_COMMANDS: frozenset[str] = frozenset({"38", "48", "58"})
