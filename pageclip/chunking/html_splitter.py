"""HTML structural splitter for the reader-mode tidy editor.

Splits serialized HTML at h1–h3 heading boundaries (or at top-level elements
when there are no headings) into chunks of at most *max_chars* characters.
Every chunk is a balanced markup fragment: when an element has to be split,
each part is wrapped in a copy of the element's opening and closing tags.
Raw character slicing is only used for text runs, for childless elements
that are still too large and for elements whose own tags exceed the limit.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from pageclip.chunking.citation import IdFactory, resolve_id_factory
from pageclip.chunking.html_tree import HtmlElement, HtmlNode, parse_fragment
from pageclip.chunking.models import ChunkPolicy, HtmlChunk
from pageclip.config import settings

logger = logging.getLogger(__name__)

# Longest character reference the serializer emits (``&quot;``), with slack.
_MAX_ENTITY_LEN = 10


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _slice_markup(markup: str, size: int) -> List[str]:
    """Cut *markup* into pieces of at most *size* chars.

    Cuts are moved back so a character reference such as ``&amp;`` is never
    split between two pieces.
    """
    pieces: List[str] = []
    while len(markup) > size:
        cut = size
        amp = markup.rfind("&", max(0, cut - _MAX_ENTITY_LEN), cut)
        if amp > 0 and markup.find(";", amp, cut) == -1:
            cut = amp
        pieces.append(markup[:cut])
        markup = markup[cut:]
    if markup:
        pieces.append(markup)
    return pieces


def _close(current: str, out: List[str], policy: ChunkPolicy) -> None:
    """Emit the trailing accumulator, merging it backwards when undersized."""
    if not current.strip():
        return
    if len(current) >= policy.min_chars or not out:
        out.append(current)
    elif len(out[-1]) + len(current) <= policy.max_chars:
        out[-1] += current
    else:
        out.append(current)


def _split_element(element: HtmlElement, policy: ChunkPolicy) -> List[str]:
    """Split an oversized element into wrapped runs of its children."""
    if not element.children:
        logger.debug("Slicing childless <%s> by characters", element.tag)
        return _slice_markup(element.serialize(), policy.max_chars)

    open_tag, close_tag = element.open_tag(), element.close_tag()
    budget = policy.max_chars - len(open_tag) - len(close_tag)
    if budget <= 0:
        # The wrapper alone fills a chunk; slice the whole element so its
        # attributes survive.
        logger.warning(
            "Tags of <%s> exceed %d chars; slicing its markup unbalanced",
            element.tag,
            policy.max_chars,
        )
        return _slice_markup(element.serialize(), policy.max_chars)

    pieces: List[str] = []
    current = ""

    for child in element.children:
        child_html = child.serialize()
        if not current and not child_html.strip():
            continue

        if len(current) + len(child_html) <= budget:
            current += child_html
        elif len(child_html) > budget:
            if current.strip():
                pieces.append(open_tag + current + close_tag)
            current = ""
            if isinstance(child, HtmlElement):
                pieces.extend(_split_element(child, policy))
            else:
                pieces.extend(
                    open_tag + part + close_tag for part in _slice_markup(child_html, budget)
                )
        else:
            if current.strip():
                pieces.append(open_tag + current + close_tag)
            current = child_html

    if current.strip():
        pieces.append(open_tag + current + close_tag)
    return pieces


def _split_nodes(nodes: List[HtmlNode], policy: ChunkPolicy) -> List[str]:
    """Greedily pack sibling nodes into chunks, descending into large ones."""
    min_chars, max_chars = policy.min_chars, policy.max_chars
    out: List[str] = []
    current = ""

    for node in nodes:
        node_html = node.serialize()
        if not node_html.strip():
            continue

        if len(current) + len(node_html) <= max_chars:
            current += node_html
        elif len(node_html) > max_chars:
            if isinstance(node, HtmlElement):
                pieces = _split_element(node, policy)
            else:
                pieces = _slice_markup(node_html, max_chars)
            if not pieces:
                continue
            # Top off an undersized accumulator with the first piece when it fits.
            if current.strip() and len(current) < min_chars and (
                len(current) + len(pieces[0]) <= max_chars
            ):
                pieces[0] = current + pieces[0]
            elif current.strip():
                out.append(current)
            out.extend(pieces[:-1])
            current = pieces[-1]
        else:
            # Either the accumulator is full enough, or it is undersized and
            # the node would push it past max_chars; both cases close it.
            if current.strip():
                out.append(current)
            current = node_html

    _close(current, out, policy)
    return out


def _resplit(markup: str, policy: ChunkPolicy) -> List[str]:
    return _split_nodes(parse_fragment(markup).children, policy)


def _collect_sections(nodes: List[HtmlNode]) -> List[str]:
    """Group sibling markup into sections, each starting at a heading."""
    sections: List[str] = []
    current = ""
    for node in nodes:
        node_html = node.serialize()
        is_heading = isinstance(node, HtmlElement) and node.is_heading
        if is_heading and current.strip():
            sections.append(current)
            current = node_html
        else:
            current += node_html
    if current.strip():
        sections.append(current)
    return sections


def _split_by_headings(nodes: List[HtmlNode], policy: ChunkPolicy) -> List[str]:
    min_chars, max_chars = policy.min_chars, policy.max_chars
    sections = _collect_sections(nodes)
    logger.debug("Found %d heading section(s)", len(sections))

    out: List[str] = []
    current = ""

    for section in sections:
        if len(current) + len(section) <= max_chars:
            current += section
            continue

        if len(section) <= max_chars and len(current) >= min_chars:
            if current.strip():
                out.append(current)
            current = section
            continue

        if current.strip() and len(current) >= min_chars:
            out.append(current)
            current = ""

        # Oversized section, or an undersized accumulator that cannot take the
        # whole section: re-split the combined markup element by element and
        # keep the last piece open.
        pieces = _resplit(current + section, policy)
        if not pieces:
            current = ""
            continue
        out.extend(pieces[:-1])
        current = pieces[-1]

    _close(current, out, policy)
    return out


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def default_html_policy() -> ChunkPolicy:
    return ChunkPolicy(min_chars=settings.html_min_chars, max_chars=settings.html_max_chars)


def split_html(
    html: str,
    policy: Optional[ChunkPolicy] = None,
    *,
    id_factory: Optional[IdFactory] = None,
) -> List[HtmlChunk]:
    """Split *html* into balanced markup chunks of at most ``max_chars``.

    Args:
        html: Raw HTML fragment or full document; only body content is kept.
        policy: Size window; defaults to ``{min_chars: 3000, max_chars: 5000}``.
        id_factory: Callable producing chunk ids (random UUIDs by default).

    Returns:
        Chunks in document order; ``[]`` for blank input.

    Raises:
        InvalidPolicy: If ``min_chars > max_chars``.  Malformed markup never
            raises.
    """
    policy = policy or default_html_policy()
    policy.validate()
    make_id = resolve_id_factory(id_factory)

    trimmed = html.strip()
    if not trimmed:
        return []

    fragment = parse_fragment(trimmed)
    inner = fragment.serialize()

    if len(inner) <= policy.max_chars:
        pieces = [inner]
    elif fragment.has_headings():
        pieces = _split_by_headings(fragment.children, policy)
    else:
        pieces = _split_nodes(fragment.children, policy)

    return [HtmlChunk(id=make_id(), html=piece.strip()) for piece in pieces if piece.strip()]
