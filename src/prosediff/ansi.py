#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/prosediff/ansi.py
"""ANSI escape sequence helpers and SGR normalization.

Diff output may already carry styling from another tool (``git diff
--color``, a syntax highlighter run on the original files, ...). Before
prosediff adds its own backgrounds, every run of adjacent ``ESC[...m``
(SGR) sequences is collapsed into at most one sequence that only contains
the codes that actually change the current style:

- A bare reset (``ESC[m``/``ESC[0m``) is rewritten into the "unset" codes of
  the categories that are active, so it no longer clobbers the background.
- Codes setting a category to the value it already has are dropped.
- Background colour codes (and any unknown SGR code) are dropped.

Sequences not terminated by ``m`` (cursor movement, erase, ...) are left
untouched.

Examples
--------
    >>> normalize_ansi(["\\x1b[31mfoo\\x1b[0m\\x1b[31mbar\\n"])
    ['\\x1b[31mfoobar\\x1b[39m\\n']

"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Sequence

from prosediff.constants import (
    ANSI_CODE_CATEGORY,
    ANSI_EXTENDED_COLOR_COMMANDS,
    ANSI_SGR_PATTERN,
    ANSI_UNSET_CODE,
    ANSI_UNSET_CODES,
)

_SGR_RE = re.compile(ANSI_SGR_PATTERN)
_SGR_RUN_RE = re.compile(f"(?:{ANSI_SGR_PATTERN})+")
_SGR_PARAMS_RE = re.compile(r"\x1b\[([0-9;:]*)m")

_COMMAND_RE = re.compile(r"0*(\d*)")
_COLON_ARGS_RE = re.compile(r"(?::\d*)+")
_COLOR_ARGS_RE = re.compile(r";(?:5;\d+|2(?:;\d+){3})")
_LEADING_NUMBER_RE = re.compile(r"\d*")

RESET = "\x1b[m"


def rgb_fg(r: int, g: int, b: int) -> str:
    """Return a 24-bit foreground colour sequence."""
    return f"\x1b[38;2;{r};{g};{b}m"


def rgb_bg(r: int, g: int, b: int) -> str:
    """Return a 24-bit background colour sequence."""
    return f"\x1b[48;2;{r};{g};{b}m"


def rgb_ul(r: int, g: int, b: int) -> str:
    """Return a 24-bit underline colour sequence."""
    return f"\x1b[58;2;{r};{g};{b}m"


def rgb5(r: int, g: int, b: int) -> int:
    """Map an RGB triple with components 0-5 onto the 256-colour palette.

    The 256-colour palette contains a 6x6x6 colour cube starting at index 16.
    Components outside 0-5 wrap around.
    """
    r, g, b = (component % 6 for component in (r, g, b))
    return 16 + 36 * r + 6 * g + b


def rgb5_fg(r: int, g: int, b: int) -> str:
    """Return a 256-colour cube foreground sequence."""
    return f"\x1b[38;5;{rgb5(r, g, b)}m"


def rgb5_bg(r: int, g: int, b: int) -> str:
    """Return a 256-colour cube background sequence."""
    return f"\x1b[48;5;{rgb5(r, g, b)}m"


def rgb5_ul(r: int, g: int, b: int) -> str:
    """Return a 256-colour cube underline colour sequence."""
    return f"\x1b[58;5;{rgb5(r, g, b)}m"


def strip_ansi(text: str) -> str:
    """Remove all SGR sequences from ``text``."""
    return _SGR_RE.sub("", text)


def find_ansi(text: str) -> list[str]:
    """Return all SGR sequences found in ``text``, in order."""
    return _SGR_RE.findall(text)


def iter_sgr_commands(params: str) -> Iterator[tuple[str, str]]:
    """Split the parameter string of one SGR sequence into commands.

    Parameters
    ----------
    params : str
        Everything between ``ESC[`` and ``m`` (e.g. ``"1;38;5;202"``)

    Yields
    ------
    tuple[str, str]
        ``(command, argument)`` pairs. ``command`` has leading zeros stripped
        and is empty for a reset. ``argument`` holds extended colour
        arguments (``";5;202"``, ``";2;r;g;b"``) or colon sub-parameters
        (``":3"``), and is empty otherwise.

    Examples
    --------
    >>> list(iter_sgr_commands("01;38;5;202"))
    [('1', ''), ('38', ';5;202')]
    >>> list(iter_sgr_commands(""))
    [('', '')]

    """
    pos, end = 0, len(params)
    while True:
        command_match = _COMMAND_RE.match(params, pos)
        command = command_match.group(1)
        pos = command_match.end()

        argument_match = _COLON_ARGS_RE.match(params, pos)
        if argument_match is None and command in ANSI_EXTENDED_COLOR_COMMANDS:
            argument_match = _COLOR_ARGS_RE.match(params, pos)
        argument = ""
        if argument_match is not None:
            argument = argument_match.group()
            pos = argument_match.end()

        yield command, argument

        if pos >= end:
            return
        # An empty parameter after a trailing ';' is a reset of its own
        if params[pos] == ";":
            pos += 1


def _sort_key(code: str) -> tuple[int, str]:
    number = _LEADING_NUMBER_RE.match(code).group()
    return int(number or 0), code


class StyleState:
    """Active terminal style, one value per style category.

    The state is mutated by :meth:`transition` as runs of SGR sequences are
    encountered along a text timeline. Only categories listed in
    :data:`prosediff.constants.ANSI_STYLE_CATEGORIES` are tracked.

    Attributes
    ----------
    active : dict[str, str]
        Mapping of style category name to the code that set it

    """

    def __init__(self) -> None:
        """Initialize an empty (fully reset) style state."""
        self.active: dict[str, str] = {}

    def transition(self, commands: Iterable[tuple[str, str]]) -> list[str]:
        """Apply one run of SGR commands and return the codes that matter.

        Parameters
        ----------
        commands : Iterable[tuple[str, str]]
            ``(command, argument)`` pairs, as produced by
            :func:`iter_sgr_commands`, for one run of adjacent sequences

        Returns
        -------
        list[str]
            Codes that change the state, sorted by numeric value then by
            string. Empty if the run is redundant.

        """
        requested: dict[str, str] = {}
        for command, argument in commands:
            if command == "":
                requested.update(ANSI_UNSET_CODE)
                continue
            category = ANSI_CODE_CATEGORY.get(command)
            if category is not None:
                requested[category] = command + argument

        emitted = []
        for category, code in requested.items():
            if code in ANSI_UNSET_CODES:
                if category in self.active:
                    del self.active[category]
                    emitted.append(code)
            elif self.active.get(category) != code:
                self.active[category] = code
                emitted.append(code)
        return sorted(emitted, key=_sort_key)

    def apply(self, run: str) -> str:
        """Collapse a run of adjacent SGR sequences into at most one sequence."""
        commands = [pair for params in _SGR_PARAMS_RE.findall(run) for pair in iter_sgr_commands(params)]
        codes = self.transition(commands)
        if not codes:
            return ""
        return f"\x1b[{';'.join(codes)}m"


def _append_reset(text: str) -> str:
    if text.endswith("\n"):
        return f"{text[:-1]}{RESET}\n"
    return f"{text}{RESET}"


def normalize_ansi(buffers: Sequence[str]) -> list[str]:
    """Normalize and minimize SGR sequences across consecutive buffers.

    The buffers are treated as one continuous style timeline (normally the
    lines of one hunk body). A reset is added at the end of the last buffer,
    before its final line break, so the timeline ends unstyled; it vanishes
    again if no style was active at that point.

    Parameters
    ----------
    buffers : Sequence[str]
        Text buffers, in order

    Returns
    -------
    list[str]
        The normalized buffers, one per input buffer

    """
    if not buffers:
        return []

    texts = list(buffers)
    texts[-1] = _append_reset(texts[-1])

    state = StyleState()
    return [_SGR_RUN_RE.sub(lambda match: state.apply(match.group()), text) for text in texts]
