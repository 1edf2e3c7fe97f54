"""Minimal HTML tree used by the structural splitter.

Markup is parsed with BeautifulSoup's forgiving ``html.parser`` (it never
raises on malformed input) and converted into plain dataclasses: elements
with a tag name, an ordered attribute list and ordered children, plus text
nodes.  Each node knows how to serialize itself back to markup, which is all
the splitter needs to measure and reassemble fragments.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

VOID_ELEMENTS = frozenset(
    {
        "area", "base", "br", "col", "embed", "hr", "img", "input",
        "link", "meta", "param", "source", "track", "wbr",
    }
)
# Text inside these elements is serialized without escaping.
RAW_TEXT_ELEMENTS = frozenset(
    {"script", "style", "xmp", "iframe", "noembed", "noframes", "plaintext"}
)
HEADING_TAGS = frozenset({"h1", "h2", "h3"})


def _escape_text(text: str) -> str:
    return html.escape(text, quote=False).replace("\xa0", "&nbsp;")


def _escape_attr(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;").replace("\xa0", "&nbsp;")


@dataclass
class HtmlText:
    text: str
    raw: bool = False

    def serialize(self) -> str:
        return self.text if self.raw else _escape_text(self.text)


@dataclass
class HtmlElement:
    tag: str
    attrs: List[Tuple[str, str]] = field(default_factory=list)
    children: List[HtmlNode] = field(default_factory=list)

    @property
    def is_heading(self) -> bool:
        return self.tag in HEADING_TAGS

    def open_tag(self) -> str:
        """Opening tag with the original attributes, in source order."""
        if not self.attrs:
            return f"<{self.tag}>"
        rendered = " ".join(f'{name}="{_escape_attr(value)}"' for name, value in self.attrs)
        return f"<{self.tag} {rendered}>"

    def close_tag(self) -> str:
        return "" if self.tag in VOID_ELEMENTS else f"</{self.tag}>"

    def inner_html(self) -> str:
        return "".join(child.serialize() for child in self.children)

    def serialize(self) -> str:
        return self.open_tag() + self.inner_html() + self.close_tag()

    def iter_elements(self) -> Iterator[HtmlElement]:
        """Yield this element and every descendant element, depth first."""
        yield self
        for child in self.children:
            if isinstance(child, HtmlElement):
                yield from child.iter_elements()


HtmlNode = Union[HtmlElement, HtmlText]


@dataclass
class HtmlFragment:
    """The body-level children of a parsed document."""

    children: List[HtmlNode] = field(default_factory=list)

    def serialize(self) -> str:
        return "".join(child.serialize() for child in self.children)

    def has_headings(self) -> bool:
        for child in self.children:
            if isinstance(child, HtmlElement):
                if any(el.is_heading for el in child.iter_elements()):
                    return True
        return False


# ---------------------------------------------------------------------------
# BeautifulSoup conversion
# ---------------------------------------------------------------------------

def _convert_children(tag: Tag, raw: bool = False) -> List[HtmlNode]:
    nodes: List[HtmlNode] = []
    for child in tag.children:
        if isinstance(child, Tag):
            if child.name == "head":
                continue
            nodes.append(_convert_element(child))
        elif isinstance(child, PreformattedString):
            # Comments, doctypes, CDATA and processing instructions.
            continue
        elif isinstance(child, NavigableString):
            nodes.append(HtmlText(text=str(child), raw=raw))
    return nodes


def _convert_element(tag: Tag) -> HtmlElement:
    name = tag.name.lower()
    attrs = [
        (key, value if isinstance(value, str) else " ".join(value))
        for key, value in tag.attrs.items()
    ]
    return HtmlElement(
        tag=name,
        attrs=attrs,
        children=_convert_children(tag, raw=name in RAW_TEXT_ELEMENTS),
    )


def parse_fragment(markup: str) -> HtmlFragment:
    """Parse *markup* into an :class:`HtmlFragment`.

    A full document is reduced to its ``<body>`` content; ``<head>`` is
    dropped.  Malformed markup is recovered on a best-effort basis.
    """
    soup = BeautifulSoup(markup, "html.parser", multi_valued_attributes=None)
    root: Tag = soup.body or soup.html or soup
    return HtmlFragment(children=_convert_children(root))
