# link_scout/crawler/engine.py
"""
Crawl engine: turns a seed URL into a duplicate-free traversal of the link
graph reachable within an optional domain filter and collects every URL that
answered 404.

The frontier is an :class:`asyncio.Queue` drained by ``config.concurrency``
worker tasks (one by default, which gives a strictly sequential crawl). A
URL is claimed, i.e. inserted into the visited set, in the same synchronous
step that enqueues it, so no two workers can ever fetch the same URL.
"""
from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Protocol, Set, Tuple

from link_scout.crawler.errors import ResolutionError
from link_scout.crawler.fetcher import PageFetcher
from link_scout.crawler.link_extractor import extract_links
from link_scout.crawler.models import (
    BrokenLink,
    CrawlResult,
    CrawlStats,
    FailedLink,
    FetchOutcome,
    NotFound,
    OtherFailure,
    Success,
)
from link_scout.crawler.normalizer import canonicalize, parse_seed, resolve
from link_scout.crawler.scope import in_scope, normalize_domain
from link_scout.logger import get_logger

if TYPE_CHECKING:
    from link_scout.config import CrawlerConfig

__all__ = ("Fetcher", "CrawlEngine")

_FrontierItem = Tuple[str, Optional[str]]  # (url, page it was found on)


class Fetcher(Protocol):
    async def fetch(self, url: str) -> FetchOutcome: ...


class CrawlEngine:
    """Owns the visited set, the broken-link set and the frontier of a crawl run."""

    def __init__(
        self,
        config: CrawlerConfig,
        fetcher: Optional[Fetcher] = None,
        on_broken: Optional[Callable[[BrokenLink], None]] = None,
    ) -> None:
        self.config = config
        self.fetcher = fetcher
        self.on_broken = on_broken
        self.logger = get_logger("engine")
        self._own_fetcher: Optional[PageFetcher] = None
        self._reset("", None)

    async def __aenter__(self) -> CrawlEngine:
        if self.fetcher is None:
            self._own_fetcher = PageFetcher(self.config)
            self.fetcher = await self._own_fetcher.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._own_fetcher is not None:
            await self._own_fetcher.__aexit__(exc_type, exc, tb)
            self._own_fetcher = None
            self.fetcher = None

    # ------------------------------------------------------------------ #
    # Public API                                                          #
    # ------------------------------------------------------------------ #

    async def crawl(self, seed: str, scope: Optional[str] = None) -> CrawlResult:
        """
        Crawl everything reachable from *seed* and return the result.

        Raises :class:`~link_scout.crawler.errors.SeedInvalid` before any
        request is made when *seed* is not an absolute http(s) URL.
        """
        seed_url = parse_seed(seed)
        if scope is not None:
            scope = normalize_domain(scope) or None
        if self.fetcher is None:
            raise RuntimeError("Fetcher not initialized, use 'async with CrawlEngine(...)'")

        self._reset(seed_url, scope)
        self.logger.info("Start crawl: %s (scope: %s, %s)", seed_url, scope or "any", self.config.scope_mode.value)
        start = time.monotonic()
        self._claim(seed_url, None)
        workers = [asyncio.create_task(self._worker()) for _ in range(self.config.concurrency)]
        try:
            await self._frontier.join()
        except asyncio.CancelledError:
            self._interrupted = True
            self.logger.warning("Crawl interrupted with %d URL(s) still queued", self._frontier.qsize())
            raise
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)
            self._stats.elapsed = time.monotonic() - start

        self.logger.info(
            "Done: %d page(s) in %.2f s, %d broken, %d unchecked",
            self._stats.pages_fetched,
            self._stats.elapsed,
            len(self._broken),
            len(self._failures),
        )
        self.logger.debug("Frontier reached a max size of %d", self._stats.max_frontier_size)
        return self.result()

    def result(self) -> CrawlResult:
        """Snapshot of the current run; partial when the crawl was interrupted."""
        return CrawlResult(
            seed=self._seed,
            scope=self._scope,
            broken=list(self._broken.values()),
            failures=list(self._failures),
            visited=frozenset(self._visited),
            stats=self._stats,
            interrupted=self._interrupted,
        )

    @property
    def visited(self) -> frozenset[str]:
        return frozenset(self._visited)

    # ------------------------------------------------------------------ #
    # Internals                                                           #
    # ------------------------------------------------------------------ #

    def _reset(self, seed: str, scope: Optional[str]) -> None:
        self._seed = seed
        self._scope = scope
        self._visited: Set[str] = set()
        self._broken: Dict[str, BrokenLink] = {}
        self._failures: List[FailedLink] = []
        self._frontier: asyncio.Queue[_FrontierItem] = asyncio.Queue()
        self._stats = CrawlStats()
        self._interrupted = False

    def _claim(self, url: str, found_on: Optional[str]) -> bool:
        # check-and-insert must not await, it is the at-most-once guarantee
        if url in self._visited:
            return False
        self._visited.add(url)
        self._frontier.put_nowait((url, found_on))
        self._stats.observe_frontier(self._frontier.qsize())
        return True

    async def _worker(self) -> None:
        while True:
            url, found_on = await self._frontier.get()
            try:
                await self._process(url, found_on)
            except Exception as exc:
                self.logger.exception("Unexpected error while processing %s", url)
                self._record_failure(url, f"internal error: {exc}", found_on)
            finally:
                self._frontier.task_done()

    async def _process(self, url: str, found_on: Optional[str]) -> None:
        if self.fetcher is None:
            raise RuntimeError("Fetcher not initialized, use 'async with CrawlEngine(...)'")
        outcome = await self.fetcher.fetch(url)
        self._stats.pages_fetched += 1

        if isinstance(outcome, NotFound):
            link = BrokenLink(url=url, title=outcome.title, found_on=found_on)
            self._broken[url] = link
            self.logger.info("404 %s (linked from %s)", url, found_on or "seed")
            if self.on_broken is not None:
                self.on_broken(link)
        elif isinstance(outcome, OtherFailure):
            self._record_failure(url, outcome.reason, found_on)
        elif isinstance(outcome, Success):
            self._follow_links(url, outcome)
        else:
            raise TypeError(f"Unknown fetch outcome {outcome!r}")

    def _follow_links(self, url: str, page: Success) -> None:
        base = url
        try:
            base = canonicalize(page.final_url)
        except ValueError:
            self.logger.debug("Ignoring unusable final URL %s for %s", page.final_url, url)
        if base != url and base not in self._visited and in_scope(base, self._scope, self.config.scope_mode):
            self.logger.debug("%s redirected to %s", url, base)
            self._visited.add(base)

        queued = 0
        for raw in extract_links(page.body):
            self._stats.links_seen += 1
            try:
                candidate = resolve(raw, base)
            except ResolutionError as exc:
                self._stats.links_unresolvable += 1
                self.logger.debug("Discarded link on %s: %s", base, exc)
                continue
            if not in_scope(candidate, self._scope, self.config.scope_mode):
                self._stats.links_out_of_scope += 1
                continue
            if self._claim(candidate, base):
                queued += 1
        self.logger.debug("%s: %d new link(s) queued", base, queued)

    def _record_failure(self, url: str, reason: str, found_on: Optional[str]) -> None:
        self._failures.append(FailedLink(url=url, reason=reason, found_on=found_on))
        self.logger.warning("Could not check %s: %s", url, reason)
