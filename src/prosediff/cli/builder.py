#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/prosediff/cli/builder.py
"""Argument parser construction for the prosediff CLI.

prosediff only parses its own options. Everything it does not recognise
is passed on, in order, to the diff command, and arguments starting with
``+`` are passed to the pager (e.g. ``+/pattern`` to search in ``less``).
"""

import argparse
from typing import NamedTuple

from prosediff.constants import COLOR_MODES, DEFAULT_COMMAND, DEFAULT_PAGER
from prosediff.exceptions import (
    CommandError,
    InputError,
    OutputWriteError,
    ValidationError,
)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_INPUT_ERROR = 10
EXIT_COMMAND_ERROR = 127

USAGE = "prosediff [OPTION]... [DIFF-ARG]... [+PAGER-ARG]..."

DESCRIPTION = """\
Highlight the output of 'diff' (normal or unified format, e.g. 'git diff')
with word level changes. Words are compared across line breaks, so changes
in indentation and line wrapping are shown as whitespace-only changes.

When standard input is a terminal, or diff arguments are given, the diff
command is run with those arguments and its output is highlighted (wrapper
mode). Otherwise standard input is highlighted (filter mode). Output goes
through the pager when standard output is a terminal.
"""

EPILOG = """\
Any option not listed above is passed to the diff command. Use '--' to pass
arguments starting with '-' that prosediff would otherwise recognise.
Arguments starting with '+' are passed to the pager.

Examples:
  prosediff old.txt new.txt          run 'diff old.txt new.txt' and highlight
  prosediff -u old.txt new.txt       same, with unified output
  git diff | prosediff               highlight a git diff
  prosediff --command 'diff -r' a/ b/ +/TODO
"""


class SplitArguments(NamedTuple):
    """Command-line arguments sorted by who they are meant for."""

    options: list[str]
    pager_args: list[str]
    diff_args: list[str]


def split_arguments(args: list[str]) -> SplitArguments:
    """Separate pager arguments and arguments after ``--`` from the rest.

    Parameters
    ----------
    args : list[str]
        Raw command-line arguments

    Returns
    -------
    SplitArguments
        ``options`` still to be parsed, ``pager_args`` (starting with ``+``)
        and ``diff_args`` found after ``--``

    Examples
    --------
    >>> split_arguments(["-u", "+/foo", "--", "-a", "+b"])
    SplitArguments(options=['-u'], pager_args=['+/foo'], diff_args=['-a', '+b'])

    """
    options: list[str] = []
    pager_args: list[str] = []
    diff_args: list[str] = []
    remaining = iter(args)
    for arg in remaining:
        if arg == "--":
            diff_args.extend(remaining)
            break
        if arg.startswith("+"):
            pager_args.append(arg)
        else:
            options.append(arg)
    return SplitArguments(options, pager_args, diff_args)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for prosediff's own options.

    Returns
    -------
    argparse.ArgumentParser
        Parser meant to be used with ``parse_known_args``; unknown arguments
        are diff arguments

    """
    parser = argparse.ArgumentParser(
        prog="prosediff",
        usage=USAGE,
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )

    parser.add_argument("-V", "--version", action="store_true", help="Output version information and exit")
    parser.add_argument(
        "--help-git", action="store_true", help="Explain how to use prosediff with Git, and exit"
    )

    commands = parser.add_argument_group("commands")
    commands.add_argument(
        "--command",
        metavar="CMD",
        help=f"Diff command to run in wrapper mode (default: '{DEFAULT_COMMAND}')",
    )
    commands.add_argument(
        "--pager",
        metavar="CMD",
        help=f"Pager to use when output is a terminal (default: '{DEFAULT_PAGER}')",
    )
    commands.add_argument("--no-pager", action="store_true", help="Never use a pager")

    output = parser.add_argument_group("output")
    output.add_argument(
        "--colors",
        choices=COLOR_MODES,
        help="Use 24-bit colors (truecolor, default) or the 256 color palette",
    )

    config = parser.add_argument_group("configuration")
    config.add_argument("--config", metavar="PATH", help="Read settings from this configuration file")
    config.add_argument("--no-config", action="store_true", help="Do not read any configuration file")

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", metavar="PATH", help="Also write log messages to this file")
    logging_group.add_argument("--verbose", action="store_true", help="Enable debug logging")
    logging_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")

    return parser


def parse_arguments(args: list[str]) -> tuple[argparse.Namespace, list[str]]:
    """Parse prosediff's options.

    Returns
    -------
    tuple[argparse.Namespace, list[str]]
        The parsed options (with ``pager_args`` added) and the diff arguments,
        in their original order

    Raises
    ------
    SystemExit
        On ``--help`` or a malformed prosediff option

    """
    split = split_arguments(args)
    parsed, unknown = create_parser().parse_known_args(split.options)
    parsed.pager_args = split.pager_args
    return parsed, unknown + split.diff_args


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, CommandError):
        return EXIT_COMMAND_ERROR

    if isinstance(exception, (ValidationError, argparse.ArgumentTypeError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, InputError):
        return EXIT_INPUT_ERROR

    if isinstance(exception, OutputWriteError):
        return EXIT_FILE_ERROR

    return EXIT_ERROR
