"""Line-oriented chunking of streamed text (e.g. model output as it arrives)."""

from __future__ import annotations

import re
from typing import Optional

_NEWLINES_RE = re.compile(r"\n+")


def split_line_prefix(buffer: str, max_length: int) -> Optional[str]:
    """Return the next complete piece at the head of *buffer*, if any.

    The piece runs up to and including the first run of newlines.  A buffer
    with no newline that has grown past *max_length* yields its first
    *max_length* characters instead.  ``None`` means more input is needed.

    The caller is expected to drop the returned prefix from its buffer.
    """
    match = _NEWLINES_RE.search(buffer)
    if match:
        return buffer[: match.end()]
    if len(buffer) > max_length:
        return buffer[:max_length]
    return None
