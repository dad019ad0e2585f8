"""
URL resolution and canonicalisation for LinkScout.

Every URL that enters the crawler's visited set or broken-link set passes
through :func:`resolve` (links found on pages) or :func:`parse_seed` (the
starting point), so both sets only ever hold absolute canonical URLs.
"""
from __future__ import annotations

import re
from typing import Sequence
from urllib.parse import urljoin, urlsplit, urlunsplit

from link_scout.crawler.errors import ResolutionError, SeedInvalid

__all__: Sequence[str] = ("ALLOWED_SCHEMES", "canonicalize", "resolve", "parse_seed")

ALLOWED_SCHEMES = frozenset(("http", "https"))
_DEFAULT_PORTS = {"http": 80, "https": 443}
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")
# RFC 3986 reg-name: unreserved, pct-encoded, sub-delims
_REG_NAME_RE = re.compile(r"^[A-Za-z0-9\-._~%!$&'()*+,;=]+$")


def _check_host(host: str) -> None:
    try:
        ascii_host = host.encode("idna").decode("ascii")
    except UnicodeError as exc:
        raise ValueError(f"invalid host {host!r}: {exc}") from exc
    if not _REG_NAME_RE.match(ascii_host):
        raise ValueError(f"invalid characters in host {host!r}")


def canonicalize(url: str) -> str:
    """
    Return the canonical form of an absolute http(s) URL.

    - lower-cases scheme and host
    - drops default ports (:80, :443) and the fragment
    - turns an empty path into ``/``
    - keeps userinfo, path and query untouched

    Raises ``ValueError`` when the URL is not absolute http(s) or its
    authority cannot be parsed.
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        raise ValueError(f"unsupported scheme {parts.scheme or '(none)'!r}")
    host = parts.hostname
    if not host:
        raise ValueError("missing host")
    port = parts.port  # ValueError on a malformed port
    if ":" not in host:
        _check_host(host)
    else:
        host = f"[{host}]"
    netloc = host if port is None or port == _DEFAULT_PORTS[scheme] else f"{host}:{port}"
    if parts.username is not None:
        userinfo = parts.netloc.rpartition("@")[0]
        netloc = f"{userinfo}@{netloc}"
    return urlunsplit((scheme, netloc, parts.path or "/", parts.query, ""))


def resolve(raw: str, base: str) -> str:
    """
    Resolve a link found on the page at *base* into a canonical absolute URL.

    *raw* may be absolute, scheme-relative (``//host/x``), path-relative or
    fragment-only. Raises :class:`ResolutionError` for references that are not
    syntactically valid or that point outside http(s) (``mailto:``,
    ``javascript:``, ``tel:`` ...).
    """
    candidate = raw.strip()
    if not candidate:
        raise ResolutionError(raw, "empty reference")
    if _CONTROL_CHARS_RE.search(candidate):
        raise ResolutionError(raw, "contains control characters")
    try:
        joined = urljoin(base, candidate)
        return canonicalize(joined)
    except ValueError as exc:
        raise ResolutionError(raw, str(exc)) from exc


def parse_seed(seed: str) -> str:
    """Validate the crawl seed and return its canonical form, or raise :class:`SeedInvalid`."""
    if not isinstance(seed, str) or not seed.strip():
        raise SeedInvalid(str(seed), "empty URL")
    candidate = seed.strip()
    if _CONTROL_CHARS_RE.search(candidate):
        raise SeedInvalid(seed, "contains control characters")
    try:
        scheme = urlsplit(candidate).scheme
        canonical = canonicalize(candidate) if scheme else None
    except ValueError as exc:
        raise SeedInvalid(seed, str(exc)) from exc
    if canonical is None:
        raise SeedInvalid(seed, "not an absolute URL")
    return canonical
