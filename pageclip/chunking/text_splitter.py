"""Text boundary splitter for plain extracted page text.

Strategy: greedy accumulation of paragraphs into chunks of at most
*max_chars* characters.  When a unit cannot be kept whole it is broken at
the next finer boundary (paragraph → sentence → markdown-link-aware segment
→ word → character) and the pieces are packed the same way.  Undersized
remainders are merged into the previous chunk when they fit.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from pageclip.chunking.boundaries import BoundaryLevel
from pageclip.chunking.citation import IdFactory, resolve_id_factory
from pageclip.chunking.models import Chunk, ChunkPolicy
from pageclip.config import settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _pack(
    current: str,
    units: List[str],
    level: BoundaryLevel,
    policy: ChunkPolicy,
    out: List[str],
    lead: str = "",
) -> str:
    """Greedily pack *units* of *level* onto *current*, flushing into *out*.

    *lead* is the separator placed before the first unit when *current* is
    non-empty (the joiner of the level this call descended from).  Returns
    the still-open accumulator, which is always at most ``max_chars`` long.
    """
    min_chars, max_chars = policy.min_chars, policy.max_chars

    for index, unit in enumerate(units):
        if not current:
            joiner = ""
        elif index == 0:
            joiner = lead
        else:
            joiner = level.joiner

        if len(current) + len(joiner) + len(unit) <= max_chars:
            current += joiner + unit
            continue

        if len(unit) <= max_chars and len(current) >= min_chars:
            out.append(current)
            current = unit
            continue

        if level >= BoundaryLevel.MARKDOWN_LINK_SEGMENT and len(unit) <= max_chars:
            # Links and words are never torn just to reach min_chars.
            out.append(current)
            current = unit
            continue

        if current and len(unit) > max_chars and len(current) >= min_chars:
            out.append(current)
            current = ""

        logger.debug(
            "Descending from %s to %s for a %d-char unit",
            level.name,
            level.next_level.name,
            len(unit),
        )
        current = _pack(
            current,
            level.next_level.split(unit),
            level.next_level,
            policy,
            out,
            lead=joiner,
        )

    return current


def _close(current: str, out: List[str], policy: ChunkPolicy) -> None:
    """Emit the trailing accumulator, merging it backwards when undersized."""
    if not current:
        return
    if len(current) >= policy.min_chars or not out:
        out.append(current)
        return
    merged = f"{out[-1]} {current}"
    if len(merged) <= policy.max_chars:
        out[-1] = merged
    else:
        out.append(current)


def split_text_pieces(text: str, policy: ChunkPolicy) -> List[str]:
    """Split *text* into raw chunk strings without citation ids.

    The policy is validated before *text* is looked at.
    """
    policy.validate()

    if len(text) <= policy.max_chars:
        return [text]

    pieces: List[str] = []
    current = _pack(
        "",
        BoundaryLevel.PARAGRAPH.split(text),
        BoundaryLevel.PARAGRAPH,
        policy,
        pieces,
    )
    _close(current, pieces, policy)
    return pieces


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def default_text_policy() -> ChunkPolicy:
    return ChunkPolicy(min_chars=settings.text_min_chars, max_chars=settings.text_max_chars)


def split_text(
    text: str,
    policy: Optional[ChunkPolicy] = None,
    *,
    id_factory: Optional[IdFactory] = None,
) -> List[Chunk]:
    """Split *text* into citation-tagged chunks within the policy's window.

    Args:
        text: Plain text, typically the readable content of a page.
        policy: Size window; defaults to ``{min_chars: 100, max_chars: 1000}``
            (overridable through :mod:`pageclip.config`).
        id_factory: Callable producing citation ids (random UUIDs by default).

    Returns:
        Chunks in document order.  Text no longer than ``max_chars`` comes
        back as a single chunk, unchanged; this includes the empty string,
        which yields one chunk with empty text.

    Raises:
        InvalidPolicy: If ``min_chars > max_chars``.
    """
    policy = policy or default_text_policy()
    make_id = resolve_id_factory(id_factory)

    pieces = split_text_pieces(text, policy)
    logger.debug("Split %d chars into %d chunk(s)", len(text), len(pieces))
    return [Chunk(citation_id=make_id(), text=piece) for piece in pieces]
