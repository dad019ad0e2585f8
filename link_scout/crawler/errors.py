"""Error types raised by the crawler components."""
from __future__ import annotations

__all__ = ("LinkScoutError", "SeedInvalid", "ResolutionError")


class LinkScoutError(Exception):
    """Base class for LinkScout errors."""


class SeedInvalid(LinkScoutError, ValueError):
    """The seed URL is not a usable absolute http(s) URL; the crawl cannot start."""

    def __init__(self, seed: str, reason: str) -> None:
        super().__init__(f"Invalid seed URL {seed!r}: {reason}")
        self.seed = seed
        self.reason = reason


class ResolutionError(LinkScoutError, ValueError):
    """A discovered link cannot be turned into a crawlable absolute URL."""

    def __init__(self, raw: str, reason: str) -> None:
        super().__init__(f"Cannot resolve {raw!r}: {reason}")
        self.raw = raw
        self.reason = reason
