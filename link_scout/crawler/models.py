"""
Data models for the LinkScout crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Union


@dataclass(slots=True, frozen=True)
class Success:
    """2xx response with a text body; ``final_url`` is the URL after redirects."""

    body: str
    final_url: str


@dataclass(slots=True, frozen=True)
class NotFound:
    """HTTP 404. ``title`` is the <title> of the error page when it served HTML."""

    title: Optional[str] = None


@dataclass(slots=True, frozen=True)
class OtherFailure:
    """Anything else: other status codes, transport errors, non-text content."""

    reason: str


FetchOutcome = Union[Success, NotFound, OtherFailure]


@dataclass(slots=True, frozen=True)
class BrokenLink:
    url: str
    title: Optional[str] = None
    found_on: Optional[str] = None


@dataclass(slots=True, frozen=True)
class FailedLink:
    url: str
    reason: str
    found_on: Optional[str] = None


@dataclass(slots=True)
class CrawlStats:
    """Counters collected while the crawl runs."""

    pages_fetched: int = 0
    links_seen: int = 0
    links_unresolvable: int = 0
    links_out_of_scope: int = 0
    max_frontier_size: int = 0
    elapsed: float = 0.0

    def observe_frontier(self, size: int) -> None:
        if size > self.max_frontier_size:
            self.max_frontier_size = size


@dataclass(slots=True)
class CrawlResult:
    """Outcome of one crawl run, handed to the report layer."""

    seed: str
    scope: Optional[str]
    broken: List[BrokenLink] = field(default_factory=list)
    failures: List[FailedLink] = field(default_factory=list)
    visited: FrozenSet[str] = field(default_factory=frozenset)
    stats: CrawlStats = field(default_factory=CrawlStats)
    interrupted: bool = False

    @property
    def broken_urls(self) -> List[str]:
        """Broken-link set in discovery order."""
        return [link.url for link in self.broken]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "scope": self.scope,
            "interrupted": self.interrupted,
            "broken": [asdict(link) for link in self.broken],
            "failures": [asdict(link) for link in self.failures],
            "visited": sorted(self.visited),
            "stats": asdict(self.stats),
        }
