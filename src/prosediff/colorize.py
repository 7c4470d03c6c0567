#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/prosediff/colorize.py
"""Two-level highlighting of a block of deleted and added lines.

Every line of a block gets a whole-line background: bright red/green when
lines were only deleted or only added, dark red/green when the block is a
change. Inside a change, the words that actually differ are additionally
highlighted with the bright colours. Word level comparison runs over the
whole block at once, so re-wrapped or re-indented text that keeps its words
gets no word highlight at all.

Line layout of a changed block::

    <dark red><erase EOL>-kept <light red>removed<dark red> kept
    <dark green><erase EOL>+kept <light green>added<dark green> kept<reset>

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Mapping, Pattern

from prosediff.align import align
from prosediff.ansi import find_ansi, rgb5_bg, rgb_bg, strip_ansi
from prosediff.constants import (
    COLOR_MODES,
    CUBE_BG_DARK_GREEN,
    CUBE_BG_DARK_RED,
    CUBE_BG_LIGHT_GREEN,
    CUBE_BG_LIGHT_RED,
    DEFAULT_BG_DARK_GREEN,
    DEFAULT_BG_DARK_RED,
    DEFAULT_BG_LIGHT_GREEN,
    DEFAULT_BG_LIGHT_RED,
    ERASE_TO_EOL,
    PALETTE_KEYS,
    RESET_BACKGROUND,
    RGB,
    ColorMode,
)
from prosediff.exceptions import ValidationError
from prosediff.tokens import TokenStream, tokenize

logger = logging.getLogger(__name__)

# Lines end at '\n' only, like the lines handed over by the reader
_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")

_TRUECOLOR_DEFAULTS: dict[str, RGB] = dict(
    zip(PALETTE_KEYS, (DEFAULT_BG_DARK_RED, DEFAULT_BG_LIGHT_RED, DEFAULT_BG_DARK_GREEN, DEFAULT_BG_LIGHT_GREEN))
)
_CUBE_DEFAULTS: dict[str, RGB] = dict(
    zip(PALETTE_KEYS, (CUBE_BG_DARK_RED, CUBE_BG_LIGHT_RED, CUBE_BG_DARK_GREEN, CUBE_BG_LIGHT_GREEN))
)


def _to_cube(rgb: RGB) -> RGB:
    """Scale a 0-255 RGB triple onto the 0-5 colour cube."""
    r, g, b = (round(component * 5 / 255) for component in rgb)
    return r, g, b


@dataclass(frozen=True, slots=True)
class Palette:
    """Escape sequences used for highlighting.

    Attributes
    ----------
    bg_dark_red : str
        Whole-line background of deleted lines in a change
    bg_light_red : str
        Background of deleted words, and of purely deleted lines
    bg_dark_green : str
        Whole-line background of added lines in a change
    bg_light_green : str
        Background of added words, and of purely added lines
    erase_to_eol : str
        Fills the rest of the line with the current background
    reset : str
        Restores the default background at the end of a block

    """

    bg_dark_red: str
    bg_light_red: str
    bg_dark_green: str
    bg_light_green: str
    erase_to_eol: str = ERASE_TO_EOL
    reset: str = RESET_BACKGROUND

    @classmethod
    def from_rgb(cls, color_mode: ColorMode = "truecolor", overrides: Mapping[str, RGB] | None = None) -> Palette:
        """Build a palette from RGB triples.

        Parameters
        ----------
        color_mode : {"truecolor", "256"}, default "truecolor"
            Emit 24-bit colours, or the nearest colours of the 256-colour cube
        overrides : Mapping[str, RGB], optional
            Replacement 0-255 RGB triples keyed by attribute name
            (``bg_dark_red``, ``bg_light_red``, ``bg_dark_green``, ``bg_light_green``)

        Returns
        -------
        Palette
            The palette

        Raises
        ------
        ValidationError
            If the colour mode or an override is invalid

        """
        if color_mode not in COLOR_MODES:
            raise ValidationError(
                f"Unknown color mode '{color_mode}' (expected one of: {', '.join(COLOR_MODES)})",
                parameter_name="colors",
                parameter_value=color_mode,
            )

        colors = dict(_CUBE_DEFAULTS if color_mode == "256" else _TRUECOLOR_DEFAULTS)

        for key, rgb in (overrides or {}).items():
            if key not in PALETTE_KEYS:
                raise ValidationError(f"Unknown palette color '{key}'", parameter_name="palette", parameter_value=key)
            if len(rgb) != 3 or not all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in rgb):
                raise ValidationError(
                    f"Palette color '{key}' must be three integers between 0 and 255, got {rgb!r}",
                    parameter_name=key,
                    parameter_value=rgb,
                )
            colors[key] = _to_cube(rgb) if color_mode == "256" else tuple(rgb)

        make = rgb5_bg if color_mode == "256" else rgb_bg
        return cls(**{key: make(*rgb) for key, rgb in colors.items()})


DEFAULT_PALETTE = Palette.from_rgb()


def _paint(stream: TokenStream, start: int, words: tuple[str, ...], begin: str, end: str) -> str:
    """Render ``words`` (starting at word index ``start``) with their spaces.

    Non-empty words are wrapped in ``begin``/``end``. A highlight stays open
    across zero-width spaces and is closed before any real space, so
    punctuation glued to a word shares its highlight.
    """
    parts = []
    painting = False
    for index, word in enumerate(words, start):
        if begin and not painting and word:
            parts.append(begin)
            painting = True
        parts.append(word)
        space = stream.space_after(index)
        if painting and space:
            parts.append(end)
            painting = False
        parts.append(space)
    if painting:
        parts.append(end)
    return "".join(parts)


def colorize_tokens(text_a: str, text_b: str, palette: Palette = DEFAULT_PALETTE) -> tuple[str, str]:
    """Highlight the words that differ between two texts.

    Parameters
    ----------
    text_a : str
        The "before" text (prefix-stripped deleted lines)
    text_b : str
        The "after" text (prefix-stripped added lines)
    palette : Palette, optional
        Colours to use

    Returns
    -------
    tuple[str, str]
        Both texts with changed words wrapped in light-on-dark highlights.
        Removing the inserted sequences gives back the input.

    """
    stream_a = tokenize(text_a)
    stream_b = tokenize(text_b)

    parts_a: list[str] = []
    parts_b: list[str] = []
    for run in align(stream_a.words, stream_b.words):
        if run.same:
            colors_a = colors_b = ("", "")
        else:
            colors_a = (palette.bg_light_red, palette.bg_dark_red)
            colors_b = (palette.bg_light_green, palette.bg_dark_green)
        parts_a.append(_paint(stream_a, run.a_start, run.a_words, *colors_a))
        parts_b.append(_paint(stream_b, run.b_start, run.b_words, *colors_b))

    return "".join(parts_a), "".join(parts_b)


def _strip_prefixes(text: str, prefix: Pattern[str]) -> tuple[str, str]:
    """Remove the diff line prefix from every line of ``text``.

    SGR sequences inside a prefix are kept in the line. Returns the stripped
    text and the (SGR free) prefix that was removed.
    """
    lines = []
    removed = ""
    for line in _LINE_RE.findall(text):
        match = prefix.match(line)
        if match:
            removed = strip_ansi(match.group())
            line = "".join(find_ansi(match.group())) + line[match.end() :]
        lines.append(line)
    return "".join(lines), removed


def _prefix_lines(text: str, prefix: str) -> str:
    return "".join(prefix + line for line in _LINE_RE.findall(text))


def _wrap_lines(text: str, background: str, palette: Palette) -> str:
    """Give every line a full width background, reset before the final line break."""
    text = _prefix_lines(text, background + palette.erase_to_eol)
    if text.endswith("\n"):
        return f"{text[:-1]}{palette.reset}\n"
    return f"{text}{palette.reset}"


def colorize_diff(
    deleted: str,
    added: str,
    separator: str,
    deleted_prefix: Pattern[str],
    added_prefix: Pattern[str],
    palette: Palette = DEFAULT_PALETTE,
) -> str:
    """Highlight one block of deleted and added diff lines.

    Parameters
    ----------
    deleted : str
        The deleted lines of the block, prefixes included ('' if none)
    added : str
        The added lines of the block, prefixes included ('' if none)
    separator : str
        Text between the two sides ('---' line in normal diffs, else '')
    deleted_prefix : Pattern[str]
        Matches the prefix of a deleted line (e.g. ``-`` or ``< ``)
    added_prefix : Pattern[str]
        Matches the prefix of an added line (e.g. ``+`` or ``> ``)
    palette : Palette, optional
        Colours to use

    Returns
    -------
    str
        Highlighted deleted lines, separator and highlighted added lines

    """
    texts = [deleted, added]
    backgrounds = [palette.bg_light_red, palette.bg_light_green]

    if deleted and added:
        backgrounds = [palette.bg_dark_red, palette.bg_dark_green]
        stripped_a, prefix_a = _strip_prefixes(deleted, deleted_prefix)
        stripped_b, prefix_b = _strip_prefixes(added, added_prefix)
        highlighted_a, highlighted_b = colorize_tokens(stripped_a, stripped_b, palette)
        texts = [_prefix_lines(highlighted_a, prefix_a), _prefix_lines(highlighted_b, prefix_b)]
        logger.debug("Word diff of %d deleted and %d added line(s)", deleted.count("\n"), added.count("\n"))

    side_a, side_b = (
        _wrap_lines(text, background, palette) if text else "" for text, background in zip(texts, backgrounds)
    )
    return side_a + separator + side_b
