"""prosediff - word level highlighting for diff output in the terminal.

prosediff reads the output of ``diff`` (normal or unified format, e.g. from
``git diff``) and adds ANSI background colours at two levels: every changed
line gets a whole-line background, and inside changed blocks the words that
actually differ are highlighted. Word comparison ignores whitespace,
indentation and line wrapping, so a re-wrapped paragraph shows up as a
change without any highlighted words.

Input that is not a diff is passed through unchanged.

Requirements
------------
- Python 3.10+

Examples
--------
Highlight a diff held in a string:

    >>> from prosediff import highlight
    >>> print(highlight(diff_text))

Filter a stream:

    >>> import sys
    >>> from prosediff import filter_diff
    >>> filter_diff(sys.stdin, sys.stdout)

See Also
--------
prosediff.cli : Command-line interface

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "prosediff requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.0.2"

from prosediff.align import AlignmentRun, align
from prosediff.ansi import StyleState, normalize_ansi
from prosediff.colorize import DEFAULT_PALETTE, Palette, colorize_diff, colorize_tokens
from prosediff.exceptions import CommandError, InputError, OutputWriteError, ProsediffError, ValidationError
from prosediff.pipeline import ChangeBlock, filter_diff, highlight
from prosediff.reader import Dialect, DialectDescriptor, DiffReader, Hunk
from prosediff.tokens import TokenStream, tokenize

__all__ = [
    "__version__",
    "filter_diff",
    "highlight",
    "normalize_ansi",
    "tokenize",
    "align",
    "colorize_tokens",
    "colorize_diff",
    "AlignmentRun",
    "ChangeBlock",
    "Dialect",
    "DialectDescriptor",
    "DiffReader",
    "Hunk",
    "Palette",
    "DEFAULT_PALETTE",
    "StyleState",
    "TokenStream",
    # Exceptions
    "ProsediffError",
    "ValidationError",
    "InputError",
    "OutputWriteError",
    "CommandError",
]
