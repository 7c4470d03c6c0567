#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/prosediff/pipeline.py
"""Stream a diff through the highlighter, one hunk at a time.

Within a hunk body, consecutive deleted, added and separator lines are
collected into a :class:`ChangeBlock`. A context line, or the end of the
body, flushes the block through :func:`prosediff.colorize.colorize_diff`.
Metadata lines (including the hunk header) are written unchanged; only
body lines have their SGR sequences normalized.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, TextIO

from prosediff.ansi import normalize_ansi
from prosediff.colorize import DEFAULT_PALETTE, Palette, colorize_diff
from prosediff.exceptions import OutputWriteError
from prosediff.reader import DialectDescriptor, DiffReader, Hunk

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ChangeBlock:
    """Deleted, added and separator lines collected since the last flush."""

    deleted: list[str] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    separator: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        """Return True if any line has been collected."""
        return bool(self.deleted or self.added or self.separator)

    def flush(self, descriptor: DialectDescriptor, palette: Palette) -> str:
        """Highlight the collected lines and start over with an empty block."""
        text = colorize_diff(
            "".join(self.deleted),
            "".join(self.added),
            "".join(self.separator),
            descriptor.deleted,
            descriptor.added,
            palette,
        )
        self.deleted.clear()
        self.added.clear()
        self.separator.clear()
        return text


def highlight_hunk(hunk: Hunk, descriptor: DialectDescriptor, palette: Palette = DEFAULT_PALETTE) -> Iterator[str]:
    """Yield the highlighted text of one hunk, metadata first.

    Parameters
    ----------
    hunk : Hunk
        The hunk to highlight
    descriptor : DialectDescriptor
        Recognizers of the dialect the hunk is written in
    palette : Palette, optional
        Colours to use

    Yields
    ------
    str
        Output chunks, in input order

    """
    yield from hunk.metadata

    block = ChangeBlock()
    for line in normalize_ansi(hunk.body):
        if descriptor.deleted.match(line):
            block.deleted.append(line)
        elif descriptor.added.match(line):
            block.added.append(line)
        elif descriptor.separator is not None and descriptor.separator.match(line):
            block.separator.append(line)
        else:
            # Context line
            if block:
                yield block.flush(descriptor, palette)
            yield line

    if block:
        yield block.flush(descriptor, palette)


def _write(output: TextIO, text: str) -> None:
    try:
        output.write(text)
    except BrokenPipeError:
        raise
    except OSError as e:
        raise OutputWriteError(f"Failed to write output: {e}", original_error=e) from e


def _flush(output: TextIO) -> None:
    try:
        output.flush()
    except BrokenPipeError:
        raise
    except OSError as e:
        raise OutputWriteError(f"Failed to flush output: {e}", original_error=e) from e


def filter_diff(lines: Iterable[str], output: TextIO, palette: Palette = DEFAULT_PALETTE) -> bool:
    """Highlight a diff stream.

    Output is written and flushed after every hunk, so memory use is bounded
    by the size of one hunk.

    Parameters
    ----------
    lines : Iterable[str]
        Input lines, with line terminators
    output : TextIO
        Text sink to write to
    palette : Palette, optional
        Colours to use

    Returns
    -------
    bool
        True if the input was recognized as a diff. If not, the input has
        been copied to ``output`` unchanged.

    Raises
    ------
    InputError
        If the input cannot be read or decoded
    OutputWriteError
        If writing to ``output`` fails (a closed pipe raises ``BrokenPipeError``)

    """
    reader = DiffReader(lines)
    dialect = reader.detect()

    if dialect is None:
        logger.debug("Input is not a diff, passing it through unchanged")
        for hunk in reader:
            _write(output, "".join(hunk.metadata))
        _flush(output)
        return False

    descriptor = dialect.descriptor
    hunk_count = 0
    for hunk in reader:
        for chunk in highlight_hunk(hunk, descriptor, palette):
            _write(output, chunk)
        _flush(output)
        if hunk.header is not None:
            hunk_count += 1

    logger.debug("Highlighted %d hunk(s) of %s diff", hunk_count, descriptor.name)
    return True


def highlight(text: str, palette: Palette = DEFAULT_PALETTE) -> str:
    """Highlight diff text held in memory.

    Examples
    --------
    >>> print(highlight("@@ -1 +1 @@\\n-foo bar\\n+foo baz\\n"))  # doctest: +SKIP

    """
    output = io.StringIO()
    filter_diff(io.StringIO(text), output, palette)
    return output.getvalue()
