#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/prosediff/cli/processes.py
"""External collaborators of the CLI: the diff command and the pager.

Both are started with :mod:`subprocess`; command strings are split the way
a shell would split them. Text streams wrapping their pipes (and the
standard streams) use strict UTF-8 and no newline translation, so bytes
outside escape sequences reach the output exactly as they were read.
"""

from __future__ import annotations

import io
import logging
import shlex
import subprocess
from contextlib import contextmanager
from typing import IO, Iterator, TextIO

from prosediff.exceptions import CommandError

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


def split_command(command: str) -> list[str]:
    """Split a command string into an argument list.

    Raises
    ------
    CommandError
        If the string is empty or has unbalanced quotes

    """
    try:
        argv = shlex.split(command)
    except ValueError as e:
        raise CommandError(command, f"Cannot parse command '{command}': {e}", original_error=e) from e
    if not argv:
        raise CommandError(command, "Empty command")
    return argv


def _open_text(binary: IO[bytes], *, write: bool = False) -> io.TextIOWrapper:
    return io.TextIOWrapper(
        binary,  # type: ignore[arg-type]
        encoding=ENCODING,
        errors="strict",
        newline="\n",
        write_through=write,
    )


@contextmanager
def text_reader(stream: TextIO) -> Iterator[TextIO]:
    """Read ``stream`` as strict UTF-8 text with line endings untouched.

    Streams without a binary buffer (e.g. ``io.StringIO``) are used as is.
    The wrapper is detached afterwards so the underlying stream stays open.
    """
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        yield stream
        return
    wrapper = _open_text(buffer)
    try:
        yield wrapper
    finally:
        wrapper.detach()


@contextmanager
def text_writer(stream: TextIO) -> Iterator[TextIO]:
    """Write to ``stream`` as UTF-8 text with line endings untouched."""
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        yield stream
        return
    stream.flush()
    wrapper = _open_text(buffer, write=True)
    try:
        yield wrapper
    finally:
        try:
            wrapper.flush()
        finally:
            wrapper.detach()


@contextmanager
def run_diff_command(command: str, diff_args: list[str]) -> Iterator[tuple[subprocess.Popen, TextIO]]:
    """Run the diff command and yield the process and its decoded stdout.

    On exit the pipe is closed and the process waited for, so its exit
    status is available as ``process.returncode``.

    Raises
    ------
    CommandError
        If the command cannot be started

    """
    argv = split_command(command) + list(diff_args)
    logger.debug("Running diff command: %s", shlex.join(argv))
    try:
        process = subprocess.Popen(argv, stdout=subprocess.PIPE)
    except OSError as e:
        raise CommandError(command, original_error=e) from e

    assert process.stdout is not None
    output = _open_text(process.stdout)
    try:
        yield process, output
    finally:
        output.close()
        process.wait()
        logger.debug("Diff command exited with status %d", process.returncode)


@contextmanager
def open_pager(pager: str, pager_args: list[str]) -> Iterator[TextIO]:
    """Start the pager and yield a text stream feeding its input.

    Raises
    ------
    CommandError
        If the pager cannot be started

    """
    argv = split_command(pager) + list(pager_args)
    logger.debug("Starting pager: %s", shlex.join(argv))
    try:
        process = subprocess.Popen(argv, stdin=subprocess.PIPE)
    except OSError as e:
        raise CommandError(pager, original_error=e) from e

    assert process.stdin is not None
    stream = _open_text(process.stdin, write=True)
    try:
        yield stream
    finally:
        try:
            stream.close()
        except BrokenPipeError:
            logger.debug("Pager closed its input early")
        finally:
            process.wait()


def exit_status(process: subprocess.Popen) -> int:
    """Return the shell style exit status of a finished process."""
    returncode = process.returncode
    if returncode is None:
        return 0
    if returncode < 0:
        return 128 - returncode
    return returncode
