"""Crawler core: resolver, fetcher, link extractor, domain filter and engine."""
from link_scout.crawler.engine import CrawlEngine
from link_scout.crawler.errors import LinkScoutError, ResolutionError, SeedInvalid
from link_scout.crawler.fetcher import PageFetcher
from link_scout.crawler.link_extractor import extract_links, extract_title
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
from link_scout.crawler.scope import ScopeMode, in_scope

__all__ = [
    "BrokenLink",
    "CrawlEngine",
    "CrawlResult",
    "CrawlStats",
    "FailedLink",
    "FetchOutcome",
    "LinkScoutError",
    "NotFound",
    "OtherFailure",
    "PageFetcher",
    "ResolutionError",
    "ScopeMode",
    "SeedInvalid",
    "Success",
    "canonicalize",
    "extract_links",
    "extract_title",
    "in_scope",
    "parse_seed",
    "resolve",
]
