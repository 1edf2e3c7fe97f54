"""Boundary hierarchy used when a unit of text is too large to keep whole.

Levels are ordered from coarsest to finest.  A splitter working at one level
only ever falls back to the level directly below it, so the fallback chain is
``PARAGRAPH → SENTENCE → MARKDOWN_LINK_SEGMENT → WORD → CHARACTER``.
"""

from __future__ import annotations

import re
from enum import IntEnum
from typing import List

_PARAGRAPH_RE = re.compile(r"\n\s*\n")
_SENTENCE_RE = re.compile(r"(?<=[.!?])\s+")
_WORD_RE = re.compile(r"\s+")

# A markdown link ``[text](url)`` is atomic; whitespace inside it never splits.
_MARKDOWN_LINK = r"\[[^\]]+\]\([^)]+\)"
_LINK_AWARE_TOKEN_RE = re.compile(rf"(?:{_MARKDOWN_LINK}|\S)+")


def _split_by_pattern(text: str, pattern: re.Pattern[str]) -> List[str]:
    """Split *text* on *pattern*, trimming parts and dropping blank ones."""
    return [part.strip() for part in pattern.split(text) if part.strip()]


class BoundaryLevel(IntEnum):
    PARAGRAPH = 0
    SENTENCE = 1
    MARKDOWN_LINK_SEGMENT = 2
    WORD = 3
    CHARACTER = 4

    @property
    def joiner(self) -> str:
        """Separator placed between two units of this level in one chunk."""
        if self is BoundaryLevel.PARAGRAPH:
            return "\n\n"
        if self is BoundaryLevel.CHARACTER:
            return ""
        return " "

    @property
    def next_level(self) -> BoundaryLevel:
        if self is BoundaryLevel.CHARACTER:
            raise ValueError("CHARACTER is the finest boundary level")
        return BoundaryLevel(self + 1)

    def split(self, text: str) -> List[str]:
        """Break *text* into non-empty units of this level."""
        if self is BoundaryLevel.PARAGRAPH:
            return _split_by_pattern(text, _PARAGRAPH_RE)
        if self is BoundaryLevel.SENTENCE:
            return _split_by_pattern(text, _SENTENCE_RE)
        if self is BoundaryLevel.MARKDOWN_LINK_SEGMENT:
            return _LINK_AWARE_TOKEN_RE.findall(text)
        if self is BoundaryLevel.WORD:
            return _split_by_pattern(text, _WORD_RE)
        return list(text)
