"""Domain filter: decides which discovered URLs the crawler may fetch."""
from __future__ import annotations

from enum import Enum
from typing import Optional
from urllib.parse import urlsplit

__all__ = ("ScopeMode", "in_scope", "normalize_domain")


class ScopeMode(str, Enum):
    """How a URL's host is compared with the domain filter."""

    SUBDOMAIN = "subdomain"  # example.com admits www.example.com
    EXACT = "exact"
    FUZZY = "fuzzy"  # substring match on the host


def normalize_domain(domain: str) -> str:
    return domain.strip().lower().rstrip(".")


def in_scope(url: str, scope: Optional[str], mode: ScopeMode = ScopeMode.SUBDOMAIN) -> bool:
    """
    Return True if *url* may be crawled under *scope*.

    No scope means no restriction. Otherwise the host is compared
    case-insensitively according to *mode*.
    """
    if scope is None:
        return True
    domain = normalize_domain(scope)
    host = (urlsplit(url).hostname or "").rstrip(".")
    if not host or not domain:
        return False
    mode = ScopeMode(mode)
    if mode is ScopeMode.EXACT:
        return host == domain
    if mode is ScopeMode.FUZZY:
        return domain in host
    return host == domain or host.endswith("." + domain)
