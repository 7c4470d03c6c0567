"""Command-line interface for prosediff.

prosediff highlights the output of ``diff`` with word level changes. It
runs in one of two modes:

Wrapper mode (standard input is a terminal, or diff arguments are given)
    The diff command is run with the given arguments and its output is
    highlighted. The exit status is that of the diff command.

Filter mode (otherwise)
    Standard input is highlighted. The exit status is 0.

In both modes output goes through a pager when standard output is a
terminal.

Environment Variable Support
----------------------------
``PROSEDIFF_COMMAND``, ``PROSEDIFF_PAGER`` and ``PROSEDIFF_COLORS`` provide
defaults for ``--command``, ``--pager`` and ``--colors``;
``PROSEDIFF_CONFIG`` names a configuration file. Command-line arguments
always override environment variables, which override configuration files.

Examples
--------
Compare two files::

    $ prosediff old.txt new.txt

Highlight a Git diff::

    $ git diff | prosediff

Use prosediff for ``git add -p``::

    $ git config --global interactive.diffFilter prosediff

"""

import argparse
import logging
import os
import sys
from contextlib import ExitStack
from typing import TextIO

from prosediff.cli.builder import (
    EXIT_ERROR,
    EXIT_SUCCESS,
    create_parser,
    get_exit_code_for_exception,
    parse_arguments,
)
from prosediff.cli.config import ENV_CONFIG, Settings, load_config_with_priority, resolve_settings
from prosediff.cli.help import display_help_git, version_text
from prosediff.cli.processes import exit_status, open_pager, run_diff_command, text_reader, text_writer
from prosediff.colorize import Palette
from prosediff.exceptions import ProsediffError
from prosediff.logging_utils import configure_logging
from prosediff.pipeline import filter_diff

logger = logging.getLogger(__name__)

__all__ = [
    "main",
    "create_parser",
    "parse_arguments",
]


def _isatty(stream: TextIO | None) -> bool:
    try:
        return stream is not None and stream.isatty()
    except (AttributeError, ValueError):
        return False


def _setup_logging_level(parsed_args: argparse.Namespace, settings: Settings) -> None:
    """Set up logging level based on command-line arguments and configuration.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments
    settings : Settings
        Resolved settings, for the configured ``log_level``

    """
    # --trace takes highest precedence, then --verbose, then --log-level, then the config file
    if parsed_args.trace:
        log_level: int | str = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level is None:
        log_level = logging.DEBUG
    else:
        log_level = parsed_args.log_level or settings.log_level or "WARNING"

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _discard_stdout() -> None:
    """Point the stdout file descriptor at the null device.

    Output still buffered for a consumer that has gone away is then
    flushed into nothing instead of raising again at exit.
    """
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        os.close(devnull)
    except (AttributeError, ValueError, OSError) as e:
        logger.debug("Could not redirect stdout to %s: %s", os.devnull, e)


def _run(settings: Settings, palette: Palette, pager_args: list[str], diff_args: list[str]) -> int:
    """Highlight the diff in wrapper or filter mode.

    Returns
    -------
    int
        The diff command's exit status in wrapper mode, else 0

    """
    wrapper_mode = _isatty(sys.stdin) or bool(diff_args)
    use_pager = bool(settings.pager) and _isatty(sys.stdout)
    logger.debug("%s mode, %s", "Wrapper" if wrapper_mode else "Filter", "paged" if use_pager else "not paged")

    process = None
    with ExitStack() as stack:
        if use_pager:
            output = stack.enter_context(open_pager(settings.pager, pager_args))
        else:
            output = stack.enter_context(text_writer(sys.stdout))

        if wrapper_mode:
            process, lines = stack.enter_context(run_diff_command(settings.command, diff_args))
        else:
            lines = stack.enter_context(text_reader(sys.stdin))

        try:
            filter_diff(lines, output, palette)
        except BrokenPipeError:
            logger.debug("Output was closed before the diff was fully written")
            if not use_pager:
                _discard_stdout()

    return exit_status(process) if process is not None else EXIT_SUCCESS


def _report_error(error: Exception) -> int:
    """Print ``error`` in the usual ``prosediff: message`` form and return its exit code."""
    message = getattr(error, "message", None) or str(error)
    # A message ending in '.' is a usage problem: drop the period and point at --help
    if message.endswith("."):
        print(f"prosediff: {message[:-1]}", file=sys.stderr)
        print("Try 'prosediff --help' for more information.", file=sys.stderr)
    else:
        print(f"prosediff: {message}", file=sys.stderr)
    logger.debug("Error details", exc_info=error)
    return get_exit_code_for_exception(error)


def main(args: list[str] | None = None) -> int:
    """Execute the prosediff command line.

    Parameters
    ----------
    args : list[str], optional
        Command-line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Exit status

    """
    if args is None:
        args = sys.argv[1:]

    try:
        parsed_args, diff_args = parse_arguments(args)
    except SystemExit as e:
        # --help, or a usage error already reported by argparse
        return e.code if isinstance(e.code, int) else EXIT_ERROR

    if parsed_args.version:
        print(version_text())
        return EXIT_SUCCESS

    if parsed_args.help_git:
        display_help_git()
        return EXIT_SUCCESS

    try:
        if parsed_args.no_config:
            config = {}
        else:
            config = load_config_with_priority(parsed_args.config, os.environ.get(ENV_CONFIG))
        settings = resolve_settings(parsed_args, config)
        _setup_logging_level(parsed_args, settings)
        palette = settings.build_palette()
        return _run(settings, palette, parsed_args.pager_args, diff_args)
    except (ProsediffError, argparse.ArgumentTypeError) as e:
        return _report_error(e)


if __name__ == "__main__":
    sys.exit(main())
