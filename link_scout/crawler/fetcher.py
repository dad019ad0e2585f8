# link_scout/crawler/fetcher.py
"""
Fetcher module: issues a single HTTP GET per URL and classifies the outcome.
"""
from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from link_scout.crawler.link_extractor import extract_title
from link_scout.crawler.models import FetchOutcome, NotFound, OtherFailure, Success
from link_scout.logger import get_logger

if TYPE_CHECKING:
    from link_scout.config import CrawlerConfig

__all__ = ("PageFetcher", "is_text_content")

_TEXT_TYPES = frozenset(("application/xhtml+xml", "application/xml"))

log = get_logger("fetcher")


def is_text_content(mime: str) -> bool:
    mime = mime.lower()
    return mime.startswith("text/") or mime in _TEXT_TYPES


class PageFetcher:
    """Fetches pages through an aiohttp session; redirects are followed transparently, no retries."""

    def __init__(self, config: CrawlerConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> PageFetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()
            self.session = None

    async def fetch(self, url: str) -> FetchOutcome:
        """
        GET *url* once.

        Returns ``NotFound`` for 404, ``Success`` for a 2xx text response and
        ``OtherFailure`` with a readable reason for everything else.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        log.debug("GET %s", url)
        try:
            async with self.session.get(url, allow_redirects=True) as resp:
                if resp.status == 404:
                    title = None
                    if is_text_content(resp.content_type):
                        title = extract_title(await resp.text(errors="replace"))
                    return NotFound(title)
                if not 200 <= resp.status < 300:
                    return OtherFailure(f"HTTP {resp.status} {resp.reason or ''}".rstrip())
                if not is_text_content(resp.content_type):
                    return OtherFailure(f"non-text content type {resp.content_type}")
                body = await resp.text()
                return Success(body=body, final_url=str(resp.url))
        except asyncio.TimeoutError:
            return OtherFailure(f"timed out after {self.config.timeout:g} s")
        except ClientError as exc:
            return OtherFailure(f"{type(exc).__name__}: {exc}")
        except (UnicodeDecodeError, LookupError) as exc:
            return OtherFailure(f"cannot decode body: {exc}")
