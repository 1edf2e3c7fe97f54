"""Content-chunking engine: text, transcript and HTML splitters."""

from pageclip.chunking.boundaries import BoundaryLevel
from pageclip.chunking.citation import new_citation_id, sequential_ids
from pageclip.chunking.errors import InvalidPolicy
from pageclip.chunking.governor import truncate_and_chunk
from pageclip.chunking.html_splitter import split_html
from pageclip.chunking.models import (
    Chunk,
    ChunkPolicy,
    HtmlChunk,
    Segment,
    TranscriptPolicy,
    TruncatedChunks,
)
from pageclip.chunking.stream import split_line_prefix
from pageclip.chunking.text_splitter import split_text
from pageclip.chunking.transcript import parse_timestamp_segments, split_transcript

__all__ = [
    "BoundaryLevel",
    "Chunk",
    "ChunkPolicy",
    "HtmlChunk",
    "InvalidPolicy",
    "Segment",
    "TranscriptPolicy",
    "TruncatedChunks",
    "new_citation_id",
    "parse_timestamp_segments",
    "sequential_ids",
    "split_html",
    "split_line_prefix",
    "split_text",
    "split_transcript",
    "truncate_and_chunk",
]
