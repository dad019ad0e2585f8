# link_scout/crawler/link_extractor.py
"""
Link extraction from HTML documents.

Extraction is best-effort: BeautifulSoup's ``html.parser`` tolerates broken
markup, and anything that does not yield a usable ``href`` string is
filtered out explicitly instead of raising.
"""
from __future__ import annotations

from typing import Iterator, List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__ = ("ANCHOR_TAGS", "LinkSequence", "extract_links", "extract_title")

ANCHOR_TAGS = ("a", "area")


class LinkSequence:
    """
    Lazy, restartable sequence of raw ``href`` values found in a document.

    The document is parsed on first iteration and the resulting anchors are
    reused for every following iteration.
    """

    __slots__ = ("_body", "_anchors")

    def __init__(self, body: str) -> None:
        self._body = body
        self._anchors: Optional[List[Tag]] = None

    def __iter__(self) -> Iterator[str]:
        if self._anchors is None:
            soup = BeautifulSoup(self._body, "html.parser")
            self._anchors = [tag for tag in soup.find_all(ANCHOR_TAGS, href=True) if isinstance(tag, Tag)]
        for tag in self._anchors:
            href = tag.get("href")
            if not isinstance(href, str):
                continue
            href = href.strip()
            if href:
                yield href

    def __repr__(self) -> str:
        state = "parsed" if self._anchors is not None else "pending"
        return f"<LinkSequence {state} ({len(self._body)} chars)>"


def extract_links(body: str) -> LinkSequence:
    """Return every hyperlink target of <a>/<area> elements in *body*, unresolved and in document order."""
    return LinkSequence(body)


def extract_title(body: str) -> Optional[str]:
    soup = BeautifulSoup(body, "html.parser")
    title_tag = soup.find("title")
    if title_tag is None:
        return None
    title = title_tag.get_text(strip=True)
    return title or None
