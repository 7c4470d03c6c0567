#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/prosediff/reader.py
"""Diff dialect detection and hunk-at-a-time reading.

Each hunk consists of metadata lines (file names, ``diff --git`` and
``index`` lines, ... ending in the hunk header) followed by diff lines. Two
dialects are understood:

* **Normal** (the default output of ``diff``): headers like ``39a24``,
  ``62c52,55`` or ``2,10d10``; deleted lines start with ``< ``, added lines
  with ``> ``, and a ``---`` line separates the two. No context lines.

* **Unified** (``diff -u``, ``git diff``): headers like ``@@ -62 +52,3 @@``
  (possibly followed by more text); deleted lines start with ``-``, added
  lines with ``+`` and context lines with a space. No separator line.

Every pattern allows SGR sequences wherever a literal character is
expected, since the input may already be coloured.
"""

from __future__ import annotations

import logging
import re
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Pattern

from prosediff.constants import ANSI_SGR_PATTERN
from prosediff.exceptions import InputError

logger = logging.getLogger(__name__)

_A = f"(?:{ANSI_SGR_PATTERN})*"


@dataclass(frozen=True)
class DialectDescriptor:
    """Line recognizers of one diff dialect.

    Exactly one of ``context`` and ``separator`` is set.
    """

    name: str
    hunk_header: Pattern[str]
    diff_line: Pattern[str]
    deleted: Pattern[str]
    added: Pattern[str]
    context: Pattern[str] | None = None
    separator: Pattern[str] | None = None


class Dialect(Enum):
    """Supported diff dialects, in detection order."""

    NORMAL = DialectDescriptor(
        name="normal",
        hunk_header=re.compile(rf"^{_A}\d+(?:,\d+)?[acd]\d+(?:,\d+)?{_A}$"),
        diff_line=re.compile(rf"^{_A}(?:[<>]{_A} |---{_A}$)"),
        deleted=re.compile(rf"^{_A}<{_A} "),
        added=re.compile(rf"^{_A}>{_A} "),
        separator=re.compile(rf"^{_A}---{_A}$"),
    )
    UNIFIED = DialectDescriptor(
        name="unified",
        hunk_header=re.compile(rf"^{_A}@@ -\d+(?:,\d+)? \+\d+(?:,\d+)? @@"),
        diff_line=re.compile(rf"^{_A}[-+ ]"),
        deleted=re.compile(rf"^{_A}-"),
        added=re.compile(rf"^{_A}\+"),
        context=re.compile(rf"^{_A} "),
    )

    @property
    def descriptor(self) -> DialectDescriptor:
        """Return the recognizers of this dialect."""
        return self.value


@dataclass(slots=True)
class Hunk:
    """One unit of diff output.

    Attributes
    ----------
    metadata : list[str]
        Lines preceding the diff lines, normally ending in the hunk header.
        Passed through untouched.
    body : list[str]
        Diff lines (deleted, added, context and separator lines)
    header : str or None
        The hunk header line, None for trailing non-diff text (or for the
        whole input when it is not a diff)

    """

    metadata: list[str] = field(default_factory=list)
    body: list[str] = field(default_factory=list)
    header: str | None = None


class DiffReader:
    """Read a diff stream one hunk at a time.

    Parameters
    ----------
    lines : Iterable[str]
        Input lines with their line terminators (e.g. a text file object)

    Examples
    --------
    >>> reader = DiffReader(["@@ -1 +1 @@\\n", "-foo\\n", "+bar\\n"])
    >>> reader.detect()
    <Dialect.UNIFIED: ...>
    >>> [hunk.body for hunk in reader]
    [['-foo\\n', '+bar\\n']]

    """

    def __init__(self, lines: Iterable[str]) -> None:
        """Initialize the reader; nothing is read until :meth:`detect`."""
        self._lines = iter(lines)
        self._pending: deque[str] = deque()
        self._line_number = 0
        self._exhausted = False
        self._detected = False
        self.dialect: Dialect | None = None

    def _readline(self) -> str | None:
        if self._exhausted:
            return None
        try:
            line = next(self._lines)
        except StopIteration:
            self._exhausted = True
            return None
        except UnicodeDecodeError as e:
            raise InputError(
                f"Cannot decode input after line {self._line_number}: {e.reason}",
                line_number=self._line_number + 1,
                original_error=e,
            ) from e
        except OSError as e:
            raise InputError(
                f"Cannot read input after line {self._line_number}: {e}",
                line_number=self._line_number + 1,
                original_error=e,
            ) from e
        self._line_number += 1
        return line

    def detect(self) -> Dialect | None:
        """Find the dialect of the input.

        Reads up to and including the first line that is a hunk header of
        any dialect. The lines read are replayed as the metadata of the first
        hunk.

        Returns
        -------
        Dialect or None
            The detected dialect, or None if the input ended without any hunk
            header (the input is not a diff)

        """
        if self._detected:
            return self.dialect
        self._detected = True

        while (line := self._readline()) is not None:
            self._pending.append(line)
            for dialect in Dialect:
                if dialect.descriptor.hunk_header.match(line):
                    logger.debug("Detected %s diff at line %d", dialect.descriptor.name, self._line_number)
                    self.dialect = dialect
                    return dialect

        logger.debug("No hunk header found in %d line(s) of input", self._line_number)
        return None

    def next_hunk(self) -> Hunk | None:
        """Read the next hunk.

        Returns
        -------
        Hunk or None
            The next hunk, or None when the input is exhausted. If the input
            is not a diff, all of it is returned as the metadata of a single
            header-less hunk.

        """
        if not self._detected:
            self.detect()

        metadata = list(self._pending)
        self._pending.clear()
        body: list[str] = []

        if self.dialect is None:
            while (line := self._readline()) is not None:
                metadata.append(line)
            return Hunk(metadata=metadata) if metadata else None

        descriptor = self.dialect.descriptor
        in_body = True
        while (line := self._readline()) is not None:
            if descriptor.hunk_header.match(line):
                self._pending.append(line)
                break
            if in_body and descriptor.diff_line.match(line):
                body.append(line)
            else:
                in_body = False
                self._pending.append(line)

        if not metadata and not body:
            return None

        header = metadata[-1] if metadata and descriptor.hunk_header.match(metadata[-1]) else None
        return Hunk(metadata=metadata, body=body, header=header)

    def __iter__(self) -> Iterator[Hunk]:
        """Iterate over the remaining hunks."""
        while (hunk := self.next_hunk()) is not None:
            yield hunk
