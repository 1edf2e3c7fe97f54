"""Timestamp-aware chunking for video/audio transcripts.

Transcript text carries inline markers such as ``[01:23]``, ``(01:23)`` or
``[1:02:03]``.  Text is grouped by marker so every chunk can be cited back to
a point in the recording.  Transcripts without markers are handed to the
plain text splitter.
"""

from __future__ import annotations

import logging
import math
import re
from typing import List, Optional

from pageclip.chunking.citation import IdFactory, resolve_id_factory
from pageclip.chunking.models import Chunk, Segment, TranscriptPolicy
from pageclip.chunking.text_splitter import split_text, split_text_pieces
from pageclip.config import settings

logger = logging.getLogger(__name__)

_TIMESTAMP_RE = re.compile(r"[\[(](\d{1,2}):(\d{2})(?::(\d{2}))?[\])]")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _marker_seconds(match: re.Match[str]) -> int:
    first, second, third = match.groups()
    if third is not None:
        return int(first) * 3600 + int(second) * 60 + int(third)
    return int(first) * 60 + int(second)


class _ChunkBuilder:
    """Accumulates transcript segments into timestamped chunks."""

    def __init__(self, policy: TranscriptPolicy, make_id: IdFactory) -> None:
        self.policy = policy
        self.make_id = make_id
        self.chunks: List[Chunk] = []
        self.text = ""
        self.timestamp: Optional[int] = None

    def flush(self) -> None:
        if self.text.strip():
            self.chunks.append(
                Chunk(
                    citation_id=self.make_id(),
                    text=self.text.strip(),
                    timestamp_seconds=self.timestamp,
                )
            )
        self.text = ""

    def start(self, text: str, timestamp: Optional[int]) -> None:
        self.timestamp = timestamp
        if len(text) <= self.policy.max_chars:
            self.text = text
            return
        # A single oversized segment is subdivided; all pieces share its timestamp.
        pieces = split_text_pieces(text, self.policy)
        for piece in pieces[:-1]:
            self.text = piece
            self.flush()
        self.text = pieces[-1]

    def add(self, segment: Segment) -> None:
        same_anchor = segment.timestamp_seconds == self.timestamp
        if self.text and same_anchor:
            if len(self.text) + 1 + len(segment.text) <= self.policy.max_chars:
                self.text += "\n" + segment.text
                return
        self.flush()
        self.start(segment.text, segment.timestamp_seconds)


def _cap_chunk_count(
    chunks: List[Chunk], max_chunks: int, make_id: IdFactory
) -> List[Chunk]:
    """Merge consecutive chunks in equal groups so at most *max_chunks* remain."""
    if len(chunks) <= max_chunks:
        return chunks

    group_size = math.ceil(len(chunks) / max_chunks)
    logger.debug(
        "Merging %d transcript chunks in groups of %d", len(chunks), group_size
    )
    merged: List[Chunk] = []
    for start in range(0, len(chunks), group_size):
        group = chunks[start : start + group_size]
        stamps = sorted(c.timestamp_seconds for c in group if c.timestamp_seconds is not None)
        merged.append(
            Chunk(
                citation_id=make_id(),
                text="\n\n".join(c.text for c in group),
                timestamp_seconds=stamps[0] if stamps else None,
            )
        )
    return merged[:max_chunks]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_timestamp_segments(text: str) -> List[Segment]:
    """Partition *text* into ordered segments at each timestamp marker.

    Text before the first marker becomes an untimed segment.  Markers are
    removed from the segment text, which is trimmed; blank segments are
    skipped.
    """
    matches = list(_TIMESTAMP_RE.finditer(text))
    segments: List[Segment] = []

    head = text[: matches[0].start()] if matches else text
    if head.strip():
        segments.append(Segment(text=head.strip()))

    for index, match in enumerate(matches):
        end = matches[index + 1].start() if index + 1 < len(matches) else len(text)
        body = text[match.end() : end].strip()
        if body:
            segments.append(Segment(text=body, timestamp_seconds=_marker_seconds(match)))

    return segments


def has_timestamps(text: str) -> bool:
    return _TIMESTAMP_RE.search(text) is not None


def default_transcript_policy() -> TranscriptPolicy:
    return TranscriptPolicy(
        min_chars=settings.transcript_min_chars,
        max_chars=settings.transcript_max_chars,
        max_chunks=settings.transcript_max_chunks,
    )


def split_transcript(
    text: str,
    policy: Optional[TranscriptPolicy] = None,
    *,
    id_factory: Optional[IdFactory] = None,
) -> List[Chunk]:
    """Split a transcript into chunks grouped by timestamp.

    Consecutive segments sharing a timestamp are joined with newlines until
    ``max_chars`` would be exceeded.  A segment with a different timestamp,
    or none at all, always starts a new chunk; untimed segments produce
    chunks with ``timestamp_seconds=None``.  When more than ``max_chunks``
    chunks result, neighbours are merged in equal groups and each merged
    chunk keeps the earliest timestamp of its group.

    Raises:
        InvalidPolicy: If the policy's window or chunk cap is invalid.
    """
    policy = policy or default_transcript_policy()
    policy.validate()
    make_id = resolve_id_factory(id_factory)

    if not text.strip():
        return []

    if not has_timestamps(text):
        if len(text) <= policy.max_chars:
            return [Chunk(citation_id=make_id(), text=text)]
        return split_text(text, policy, id_factory=make_id)

    builder = _ChunkBuilder(policy, make_id)
    for segment in parse_timestamp_segments(text):
        builder.add(segment)
    builder.flush()

    return _cap_chunk_count(builder.chunks, policy.max_chunks, make_id)
