#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/prosediff/align.py
"""Longest common subsequence alignment of two word sequences.

The alignment is computed with Eugene W. Myers' O(ND) shortest edit script
algorithm ("An O(ND) Difference Algorithm and Its Variations", 1986) after
trimming the common prefix and suffix. Only words take part; the spaces
between them are carried alongside by the caller, which is how whitespace,
indentation and line wrapping end up being ignored.

The edit script is then grouped into runs: maximal stretches of words
present on both sides (*same*), and maximal stretches of deleted and/or
inserted words between them (*changed*).
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import groupby
from typing import Literal, Sequence

EditOp = Literal["equal", "delete", "insert"]


@dataclass(frozen=True, slots=True)
class AlignmentRun:
    """A maximal group of same or changed words.

    Attributes
    ----------
    same : bool
        True if the words are present unchanged on both sides
    a_start : int
        Index of the first word of the run in the first sequence
    b_start : int
        Index of the first word of the run in the second sequence
    a_words : tuple[str, ...]
        Words of the run taken from the first sequence (empty for a pure insertion)
    b_words : tuple[str, ...]
        Words of the run taken from the second sequence (empty for a pure deletion)

    """

    same: bool
    a_start: int
    b_start: int
    a_words: tuple[str, ...]
    b_words: tuple[str, ...]

    @property
    def a_end(self) -> int:
        """Index one past the last word of the run in the first sequence."""
        return self.a_start + len(self.a_words)

    @property
    def b_end(self) -> int:
        """Index one past the last word of the run in the second sequence."""
        return self.b_start + len(self.b_words)


def _shortest_edit_script(a: Sequence[str], b: Sequence[str]) -> list[EditOp]:
    """Compute a shortest edit script turning ``a`` into ``b``.

    When a deletion and an insertion reach equally far along a diagonal the
    deletion is taken, so the same input always yields the same script.
    """
    n, m = len(a), len(b)
    if n == 0:
        return ["insert"] * m
    if m == 0:
        return ["delete"] * n

    max_d = n + m
    offset = max_d + 1
    v = [0] * (2 * max_d + 3)
    trace: list[list[int]] = []

    for d in range(max_d + 1):
        trace.append(v[:])
        for k in range(-d, d + 1, 2):
            if k == -d or (k != d and v[offset + k - 1] < v[offset + k + 1]):
                x = v[offset + k + 1]
            else:
                x = v[offset + k - 1] + 1
            y = x - k
            while x < n and y < m and a[x] == b[y]:
                x += 1
                y += 1
            v[offset + k] = x
            if x >= n and y >= m:
                return _backtrack(trace, n, m, offset)

    raise AssertionError("edit script search did not terminate")  # pragma: no cover


def _backtrack(trace: list[list[int]], n: int, m: int, offset: int) -> list[EditOp]:
    ops: list[EditOp] = []
    x, y = n, m
    for d in range(len(trace) - 1, -1, -1):
        v = trace[d]
        k = x - y
        if k == -d or (k != d and v[offset + k - 1] < v[offset + k + 1]):
            prev_k = k + 1
        else:
            prev_k = k - 1
        prev_x = v[offset + prev_k]
        prev_y = prev_x - prev_k

        while x > prev_x and y > prev_y:
            ops.append("equal")
            x -= 1
            y -= 1
        if d > 0:
            ops.append("insert" if x == prev_x else "delete")
        x, y = prev_x, prev_y

    ops.reverse()
    return ops


def edit_script(a: Sequence[str], b: Sequence[str]) -> list[EditOp]:
    """Return a shortest edit script from ``a`` to ``b``, one op per word.

    Examples
    --------
    >>> edit_script(["foo", "bar"], ["foo", "baz"])
    ['equal', 'delete', 'insert']

    """
    prefix = 0
    limit = min(len(a), len(b))
    while prefix < limit and a[prefix] == b[prefix]:
        prefix += 1

    suffix = 0
    limit -= prefix
    while suffix < limit and a[len(a) - 1 - suffix] == b[len(b) - 1 - suffix]:
        suffix += 1

    middle = _shortest_edit_script(a[prefix : len(a) - suffix], b[prefix : len(b) - suffix])
    return ["equal"] * prefix + middle + ["equal"] * suffix


def align(words_a: Sequence[str], words_b: Sequence[str]) -> list[AlignmentRun]:
    """Align two word sequences into same and changed runs.

    Parameters
    ----------
    words_a : Sequence[str]
        Words of the "before" text
    words_b : Sequence[str]
        Words of the "after" text

    Returns
    -------
    list[AlignmentRun]
        Runs in left-to-right order. Same and changed runs alternate;
        concatenating the ``a_words`` (or ``b_words``) of all runs gives back
        ``words_a`` (or ``words_b``).

    """
    runs: list[AlignmentRun] = []
    i = j = 0
    for same, group in groupby(edit_script(words_a, words_b), key=lambda op: op == "equal"):
        ops = list(group)
        if same:
            count_a = count_b = len(ops)
        else:
            count_a = ops.count("delete")
            count_b = ops.count("insert")
        runs.append(
            AlignmentRun(
                same=same,
                a_start=i,
                b_start=j,
                a_words=tuple(words_a[i : i + count_a]),
                b_words=tuple(words_b[j : j + count_b]),
            )
        )
        i += count_a
        j += count_b
    return runs
