#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/prosediff/tokens.py
"""Split text into alternating word and space tokens.

A *word* is a run of Unicode word characters, or a single punctuation
character. A *space* is a run of whitespace and/or SGR escape sequences,
and may be empty (between two adjacent words, e.g. ``foo`` and ``(``).
Line breaks are space too, which is what lets word level comparison see
through re-wrapped paragraphs and changed indentation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator

from prosediff.constants import ANSI_SGR_PATTERN

_TOKEN_RE = re.compile(rf"(?P<space>(?:{ANSI_SGR_PATTERN}|\s)+)|(?P<word>\w+|[^\w\s])")


@dataclass(slots=True)
class TokenStream:
    """Words and the spaces that follow them.

    ``spaces[i]`` is the space between ``words[i]`` and ``words[i + 1]``,
    so ``len(words) == len(spaces) + 1`` unless both are empty.
    """

    words: list[str] = field(default_factory=list)
    spaces: list[str] = field(default_factory=list)

    def space_after(self, index: int) -> str:
        """Return the space following word ``index`` ('' after the last word)."""
        return self.spaces[index] if index < len(self.spaces) else ""

    def __iter__(self) -> Iterator[str]:
        """Iterate over all tokens, words and spaces interleaved."""
        for index, word in enumerate(self.words):
            yield word
            if index < len(self.spaces):
                yield self.spaces[index]

    def __len__(self) -> int:
        """Return the total number of tokens."""
        return len(self.words) + len(self.spaces)

    def text(self) -> str:
        """Reassemble the original text."""
        return "".join(self)


def tokenize(text: str) -> TokenStream:
    """Split ``text`` into a :class:`TokenStream`.

    Parameters
    ----------
    text : str
        Text to split, may span several lines

    Returns
    -------
    TokenStream
        Alternating words and spaces. Text starting (or ending) with space
        gets an empty first (or last) word.

    Examples
    --------
    >>> tokenize("foo(bar) baz").words
    ['foo', '(', 'bar', ')', 'baz']
    >>> tokenize("foo(bar) baz").spaces
    ['', '', '', ' ']

    """
    stream = TokenStream()
    expect_word = True
    for match in _TOKEN_RE.finditer(text):
        if match.lastgroup == "space":
            if expect_word:
                stream.words.append("")
            stream.spaces.append(match.group())
            expect_word = True
        else:
            if not expect_word:
                stream.spaces.append("")
            stream.words.append(match.group())
            expect_word = False

    if stream.spaces and expect_word:
        stream.words.append("")
    return stream
