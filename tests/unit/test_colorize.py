"""Unit tests for word level and whole-line highlighting."""

import pytest
from utils import (
    CUBE_DARK_GREEN,
    CUBE_DARK_RED,
    CUBE_LIGHT_GREEN,
    CUBE_LIGHT_RED,
    DARK_GREEN,
    DARK_RED,
    ERASE,
    LIGHT_GREEN,
    LIGHT_RED,
    RESET_BG,
    changed_line,
)

from prosediff.colorize import DEFAULT_PALETTE, Palette, colorize_diff, colorize_tokens
from prosediff.exceptions import ValidationError
from prosediff.reader import Dialect

UNIFIED = Dialect.UNIFIED.descriptor
NORMAL = Dialect.NORMAL.descriptor


@pytest.mark.unit
class TestPalette:
    """Test Palette construction."""

    def test_default_palette(self):
        """Test the default 24-bit backgrounds."""
        assert DEFAULT_PALETTE.bg_dark_red == DARK_RED
        assert DEFAULT_PALETTE.bg_light_red == LIGHT_RED
        assert DEFAULT_PALETTE.bg_dark_green == DARK_GREEN
        assert DEFAULT_PALETTE.bg_light_green == LIGHT_GREEN
        assert DEFAULT_PALETTE.erase_to_eol == ERASE
        assert DEFAULT_PALETTE.reset == RESET_BG

    def test_256_color_palette(self):
        """Test the colour cube fallbacks."""
        palette = Palette.from_rgb("256")
        assert palette.bg_dark_red == CUBE_DARK_RED
        assert palette.bg_light_red == CUBE_LIGHT_RED
        assert palette.bg_dark_green == CUBE_DARK_GREEN
        assert palette.bg_light_green == CUBE_LIGHT_GREEN

    def test_truecolor_override(self):
        """Test overriding one colour."""
        palette = Palette.from_rgb("truecolor", {"bg_light_red": (255, 0, 0)})
        assert palette.bg_light_red == "\x1b[48;2;255;0;0m"
        assert palette.bg_dark_red == DARK_RED

    def test_256_color_override_is_scaled(self):
        """Test that 0-255 overrides are scaled onto the cube."""
        palette = Palette.from_rgb("256", {"bg_light_red": (255, 0, 0)})
        assert palette.bg_light_red == "\x1b[48;5;196m"

    def test_unknown_color_mode(self):
        """Test that an unknown colour mode is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            Palette.from_rgb("16")
        assert exc_info.value.parameter_name == "colors"

    def test_unknown_palette_key(self):
        """Test that an unknown colour name is rejected."""
        with pytest.raises(ValidationError):
            Palette.from_rgb("truecolor", {"bg_blue": (0, 0, 255)})

    @pytest.mark.parametrize("rgb", [(0, 0), (0, 0, 256), (-1, 0, 0), (0.5, 0, 0), (True, 0, 0), (0, False, 255)])
    def test_invalid_rgb(self, rgb):
        """Test that malformed RGB triples are rejected."""
        with pytest.raises(ValidationError):
            Palette.from_rgb("truecolor", {"bg_dark_red": rgb})


@pytest.mark.unit
class TestColorizeTokens:
    """Test colorize_tokens()."""

    def test_changed_word(self):
        """Test that only the differing word is highlighted."""
        a, b = colorize_tokens("foo bar\n", "foo baz\n")
        assert a == f"foo {LIGHT_RED}bar{DARK_RED}\n"
        assert b == f"foo {LIGHT_GREEN}baz{DARK_GREEN}\n"

    def test_identical_text(self):
        """Test that identical texts are left alone."""
        assert colorize_tokens("same text\n", "same text\n") == ("same text\n", "same text\n")

    def test_rewrapped_text_has_no_highlight(self):
        """Test that whitespace, indentation and line breaks are ignored."""
        a = "foo bar\nbaz\n"
        b = "foo\n    bar baz\n"
        assert colorize_tokens(a, b) == (a, b)

    def test_deleted_word(self):
        """Test that a deleted word is highlighted on the first side only."""
        a, b = colorize_tokens("a b c", "a c")
        assert a == f"a {LIGHT_RED}b{DARK_RED} c"
        assert b == "a c"

    def test_highlight_spans_glued_punctuation(self):
        """Test that a highlight stays open across zero-width spaces."""
        a, b = colorize_tokens("foo-bar baz", "x baz")
        assert a == f"{LIGHT_RED}foo-bar{DARK_RED} baz"
        assert b == f"{LIGHT_GREEN}x{DARK_GREEN} baz"

    def test_highlight_closes_before_glued_same_word(self):
        """Test a changed word inside punctuation."""
        a, b = colorize_tokens("call(x)\n", "call(y)\n")
        assert a == f"call({LIGHT_RED}x{DARK_RED})\n"
        assert b == f"call({LIGHT_GREEN}y{DARK_GREEN})\n"

    def test_highlight_closes_before_escape_sequence(self):
        """Test that the closing code goes before SGR sequences following a word."""
        a, _ = colorize_tokens("\x1b[31mfoo\n", "\x1b[32mbar\n")
        assert a == f"\x1b[31m{LIGHT_RED}foo{DARK_RED}\n"

    def test_custom_palette(self):
        """Test that the palette's sequences are used."""
        palette = Palette.from_rgb("256")
        a, b = colorize_tokens("x\n", "y\n", palette)
        assert a == f"{CUBE_LIGHT_RED}x{CUBE_DARK_RED}\n"
        assert b == f"{CUBE_LIGHT_GREEN}y{CUBE_DARK_GREEN}\n"


@pytest.mark.unit
class TestColorizeDiff:
    """Test colorize_diff()."""

    def test_changed_unified_lines(self):
        """Test a changed block in a unified diff."""
        result = colorize_diff("-foo bar\n", "+foo baz\n", "", UNIFIED.deleted, UNIFIED.added)
        assert result == (
            changed_line("-", "foo ", "bar", "", DARK_RED, LIGHT_RED)
            + changed_line("+", "foo ", "baz", "", DARK_GREEN, LIGHT_GREEN)
        )

    def test_changed_normal_lines_with_separator(self):
        """Test a changed block in a normal diff, separator in between."""
        result = colorize_diff("< foo bar\n", "> foo baz\n", "---\n", NORMAL.deleted, NORMAL.added)
        assert result == (
            changed_line("< ", "foo ", "bar", "", DARK_RED, LIGHT_RED)
            + "---\n"
            + changed_line("> ", "foo ", "baz", "", DARK_GREEN, LIGHT_GREEN)
        )

    def test_pure_insertion(self):
        """Test that added lines without deletions are light green with no word highlight."""
        result = colorize_diff("", "+new line\n", "", UNIFIED.deleted, UNIFIED.added)
        assert result == f"{LIGHT_GREEN}{ERASE}+new line{RESET_BG}\n"

    def test_pure_deletion_of_several_lines(self):
        """Test that every line gets the background and the block a single reset."""
        result = colorize_diff("-a\n-b\n", "", "", UNIFIED.deleted, UNIFIED.added)
        assert result == f"{LIGHT_RED}{ERASE}-a\n{LIGHT_RED}{ERASE}-b{RESET_BG}\n"

    def test_missing_final_newline(self):
        """Test that the reset is appended when the block has no final line break."""
        result = colorize_diff("", "+x", "", UNIFIED.deleted, UNIFIED.added)
        assert result == f"{LIGHT_GREEN}{ERASE}+x{RESET_BG}"

    def test_rewrapped_lines(self):
        """Test that a re-wrapped paragraph only gets whole-line backgrounds."""
        result = colorize_diff("-foo bar\n-baz\n", "+foo\n+bar baz\n", "", UNIFIED.deleted, UNIFIED.added)
        assert result == (
            f"{DARK_RED}{ERASE}-foo bar\n{DARK_RED}{ERASE}-baz{RESET_BG}\n"
            f"{DARK_GREEN}{ERASE}+foo\n{DARK_GREEN}{ERASE}+bar baz{RESET_BG}\n"
        )

    def test_prefix_escape_sequences_are_kept(self):
        """Test that SGR sequences around the prefix stay in the line."""
        result = colorize_diff("\x1b[31m-foo\n", "\x1b[32m+bar\n", "", UNIFIED.deleted, UNIFIED.added)
        assert result == (
            f"{DARK_RED}{ERASE}-\x1b[31m{LIGHT_RED}foo{DARK_RED}{RESET_BG}\n"
            f"{DARK_GREEN}{ERASE}+\x1b[32m{LIGHT_GREEN}bar{DARK_GREEN}{RESET_BG}\n"
        )

    def test_form_feed_does_not_split_lines(self):
        """Test that only '\\n' ends a line."""
        result = colorize_diff("-a\x0cb\n", "", "", UNIFIED.deleted, UNIFIED.added)
        assert result == f"{LIGHT_RED}{ERASE}-a\x0cb{RESET_BG}\n"

    def test_empty_block(self):
        """Test that an empty block gives just the separator."""
        assert colorize_diff("", "", "---\n", NORMAL.deleted, NORMAL.added) == "---\n"
