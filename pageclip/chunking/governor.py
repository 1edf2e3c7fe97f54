"""Size governor: hard input cap applied before any chunking."""

from __future__ import annotations

import logging
from typing import Optional

from pageclip.chunking.citation import IdFactory
from pageclip.chunking.models import ChunkPolicy, TruncatedChunks
from pageclip.chunking.text_splitter import split_text
from pageclip.config import settings

logger = logging.getLogger(__name__)


def truncate_and_chunk(
    text: str,
    policy: Optional[ChunkPolicy] = None,
    *,
    id_factory: Optional[IdFactory] = None,
) -> TruncatedChunks:
    """Cap *text* at ``settings.max_input_chars`` characters, then chunk it.

    Returns:
        ``(chunks, truncated)`` where *truncated* is ``True`` when the input
        was longer than the cap and only its head was chunked.
    """
    limit = settings.max_input_chars
    truncated = len(text) > limit
    if truncated:
        logger.warning("Input of %d chars truncated to %d", len(text), limit)
        text = text[:limit]

    chunks = split_text(text, policy, id_factory=id_factory)
    return TruncatedChunks(chunks=chunks, truncated=truncated)
