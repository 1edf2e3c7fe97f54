"""Tests for timestamp-aware transcript chunking."""

from __future__ import annotations

import pytest

from pageclip.chunking.citation import sequential_ids
from pageclip.chunking.errors import InvalidPolicy
from pageclip.chunking.models import Segment, TranscriptPolicy
from pageclip.chunking.transcript import parse_timestamp_segments, split_transcript


def _pairs(chunks) -> list[tuple[str, int | None]]:
    return [(c.text, c.timestamp_seconds) for c in chunks]


def _numbered_transcript(count: int) -> str:
    return " ".join(f"[{i // 60:02d}:{i % 60:02d}] line {i}" for i in range(count))


# ---------------------------------------------------------------------------
# parse_timestamp_segments
# ---------------------------------------------------------------------------

class TestParseSegments:
    def test_mm_ss_markers(self) -> None:
        segments = parse_timestamp_segments("[00:10] Hello [01:05] World")
        assert segments == [
            Segment(text="Hello", timestamp_seconds=10),
            Segment(text="World", timestamp_seconds=65),
        ]

    def test_hh_mm_ss_markers(self) -> None:
        segments = parse_timestamp_segments("[1:02:03] Intro (01:05:00) Later")
        assert [s.timestamp_seconds for s in segments] == [3723, 3900]

    def test_parenthesised_marker(self) -> None:
        assert parse_timestamp_segments("(02:30) Something") == [
            Segment(text="Something", timestamp_seconds=150)
        ]

    def test_leading_text_is_untimed(self) -> None:
        segments = parse_timestamp_segments("Intro text [00:05] Hello")
        assert segments == [
            Segment(text="Intro text"),
            Segment(text="Hello", timestamp_seconds=5),
        ]

    def test_empty_segments_skipped(self) -> None:
        segments = parse_timestamp_segments("[00:01] [00:02] spoken")
        assert segments == [Segment(text="spoken", timestamp_seconds=2)]

    def test_no_markers(self) -> None:
        assert parse_timestamp_segments("just text") == [Segment(text="just text")]


# ---------------------------------------------------------------------------
# split_transcript
# ---------------------------------------------------------------------------

class TestSplitTranscript:
    def test_same_timestamp_segments_merge(self) -> None:
        chunks = split_transcript(
            "[00:10] Hello [00:10] world [00:45] Next", TranscriptPolicy(max_chars=800)
        )
        assert _pairs(chunks) == [("Hello\nworld", 10), ("Next", 45)]

    def test_empty_text_returns_empty_list(self) -> None:
        assert split_transcript("") == []
        assert split_transcript("  \n ") == []

    def test_short_text_without_timestamps_single_chunk(self) -> None:
        text = "No markers in here at all."
        assert _pairs(split_transcript(text)) == [(text, None)]

    def test_long_text_without_timestamps_uses_text_splitter(self) -> None:
        text = "word " * 300
        chunks = split_transcript(text, TranscriptPolicy(min_chars=100, max_chars=800))
        assert len(chunks) > 1
        assert all(len(c.text) <= 800 for c in chunks)
        assert all(c.timestamp_seconds is None for c in chunks)

    def test_leading_untimed_text_gets_its_own_chunk(self) -> None:
        chunks = split_transcript("Intro text [00:05] Hello")
        assert _pairs(chunks) == [("Intro text", None), ("Hello", 5)]

    def test_same_timestamp_overflow_starts_new_chunk(self) -> None:
        text = "[00:10] aaaaaaaaaa [00:10] bbbbbbbbbb [00:10] cccccccccc"
        chunks = split_transcript(text, TranscriptPolicy(min_chars=0, max_chars=20))
        assert _pairs(chunks) == [
            ("aaaaaaaaaa", 10),
            ("bbbbbbbbbb", 10),
            ("cccccccccc", 10),
        ]

    def test_oversized_segment_split_keeps_timestamp(self) -> None:
        text = "[00:07] " + " ".join(["alpha"] * 100)
        chunks = split_transcript(text, TranscriptPolicy(min_chars=10, max_chars=100))
        assert len(chunks) > 1
        assert all(len(c.text) <= 100 for c in chunks)
        assert all(c.timestamp_seconds == 7 for c in chunks)

    def test_timestamps_are_monotonic(self) -> None:
        chunks = split_transcript(_numbered_transcript(40), TranscriptPolicy(min_chars=0, max_chars=30))
        stamps = [c.timestamp_seconds for c in chunks if c.timestamp_seconds is not None]
        assert stamps == sorted(stamps)

    def test_injected_ids(self) -> None:
        chunks = split_transcript("[00:01] a [00:02] b", id_factory=sequential_ids("t"))
        assert [c.citation_id for c in chunks] == ["t-1", "t-2"]


# ---------------------------------------------------------------------------
# max_chunks cap
# ---------------------------------------------------------------------------

class TestMaxChunks:
    def test_chunks_merged_in_equal_groups(self) -> None:
        chunks = split_transcript(_numbered_transcript(120), TranscriptPolicy(max_chunks=50))

        assert len(chunks) == 40
        assert _pairs(chunks[:2]) == [
            ("line 0\n\nline 1\n\nline 2", 0),
            ("line 3\n\nline 4\n\nline 5", 3),
        ]

    def test_never_more_than_max_chunks(self) -> None:
        for count, cap in [(51, 50), (99, 10), (7, 3)]:
            chunks = split_transcript(_numbered_transcript(count), TranscriptPolicy(max_chunks=cap))
            assert len(chunks) <= cap

    def test_exactly_max_chunks_not_merged(self) -> None:
        chunks = split_transcript(_numbered_transcript(50), TranscriptPolicy(max_chunks=50))
        assert len(chunks) == 50
        assert chunks[0].text == "line 0"

    def test_merged_chunk_takes_earliest_defined_timestamp(self) -> None:
        chunks = split_transcript(
            "Intro [00:30] a [00:10] b", TranscriptPolicy(max_chunks=1)
        )
        assert _pairs(chunks) == [("Intro\n\na\n\nb", 10)]

    def test_untimed_chunk_ignored_when_picking_timestamp(self) -> None:
        chunks = split_transcript("Intro [00:30] a", TranscriptPolicy(max_chunks=1))
        assert _pairs(chunks) == [("Intro\n\na", 30)]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class TestTranscriptPolicy:
    def test_defaults(self) -> None:
        policy = TranscriptPolicy()
        assert (policy.min_chars, policy.max_chars, policy.max_chunks) == (100, 800, 50)

    def test_min_greater_than_max_raises(self) -> None:
        with pytest.raises(InvalidPolicy):
            split_transcript("[00:01] hi", TranscriptPolicy(min_chars=500, max_chars=100))

    def test_zero_max_chunks_raises(self) -> None:
        with pytest.raises(InvalidPolicy):
            split_transcript("[00:01] hi", TranscriptPolicy(max_chunks=0))
