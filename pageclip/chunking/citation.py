"""Citation identifiers attached to every emitted chunk.

Splitters take an optional ``id_factory``; when omitted a random UUID4 is
used.  Tests pass :func:`sequential_ids` to get predictable identifiers.
"""

from __future__ import annotations

import itertools
import uuid
from typing import Callable, Optional

IdFactory = Callable[[], str]


def new_citation_id() -> str:
    """Return a fresh random citation identifier."""
    return str(uuid.uuid4())


def sequential_ids(prefix: str = "chunk") -> IdFactory:
    """Return a factory yielding ``prefix-1``, ``prefix-2``, …"""
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


def resolve_id_factory(id_factory: Optional[IdFactory]) -> IdFactory:
    return id_factory or new_citation_id
