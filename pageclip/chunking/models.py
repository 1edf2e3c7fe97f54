"""Dataclass models shared by every splitter.

These are plain Python objects created fresh per call.  Chunk records are
frozen: once a splitter hands them to the caller they are never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, NamedTuple, Optional

from pageclip.chunking.errors import InvalidPolicy


@dataclass(frozen=True)
class ChunkPolicy:
    """Target size window ``[min_chars, max_chars]`` for emitted chunks.

    ``max_chars`` is a hard ceiling; ``min_chars`` is a soft target that is
    relaxed only when no better split exists.
    """

    min_chars: int = 100
    max_chars: int = 1000

    def validate(self) -> None:
        """Raise :class:`InvalidPolicy` if the window cannot be honoured."""
        if self.min_chars < 0:
            raise InvalidPolicy(f"min_chars must be >= 0 (got {self.min_chars})")
        if self.max_chars < 1:
            raise InvalidPolicy(f"max_chars must be >= 1 (got {self.max_chars})")
        if self.min_chars > self.max_chars:
            raise InvalidPolicy(
                "min_chars must be less than or equal to max_chars "
                f"(got min_chars={self.min_chars}, max_chars={self.max_chars})"
            )


@dataclass(frozen=True)
class TranscriptPolicy(ChunkPolicy):
    """Size window plus a cap on the number of transcript chunks."""

    max_chars: int = 800
    max_chunks: int = 50

    def validate(self) -> None:
        super().validate()
        if self.max_chunks < 1:
            raise InvalidPolicy(f"max_chunks must be >= 1 (got {self.max_chunks})")


@dataclass(frozen=True)
class Chunk:
    """One bounded piece of text tagged with a citation identifier."""

    citation_id: str
    text: str
    timestamp_seconds: Optional[int] = None


@dataclass(frozen=True)
class HtmlChunk:
    """A balanced markup fragment, keyed by ``id`` in the tidy editor."""

    id: str
    html: str


@dataclass(frozen=True)
class Segment:
    """A run of transcript text, optionally anchored to a timestamp."""

    text: str
    timestamp_seconds: Optional[int] = None


class TruncatedChunks(NamedTuple):
    """Result of :func:`~pageclip.chunking.governor.truncate_and_chunk`."""

    chunks: List[Chunk]
    truncated: bool
