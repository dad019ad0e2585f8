"""Plain-text listing of a crawl result for the terminal."""
from __future__ import annotations

from typing import Iterator

from link_scout.crawler.models import CrawlResult


def format_listing(result: CrawlResult, *, show_failures: bool = False) -> Iterator[str]:
    """Yield output lines: broken URLs in discovery order, then optionally the unchecked ones."""
    if result.interrupted:
        yield "Crawl interrupted, results are partial."
    if result.broken:
        yield f"Broken links ({len(result.broken)}):"
        for link in result.broken:
            yield link.url
    else:
        yield "No broken links found."
    if show_failures and result.failures:
        yield ""
        yield f"Could not check ({len(result.failures)}):"
        for failed in result.failures:
            yield f"{failed.url}  [{failed.reason}]"
