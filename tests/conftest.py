# File: tests/conftest.py
import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Dict, List, Optional

import pytest
import pytest_asyncio
from aiohttp import web

from link_scout.config import CrawlerConfig
from link_scout.crawler.models import FetchOutcome, OtherFailure, Success
from link_scout.logger import init_logging


class FakeFetcher:
    """In-memory fetcher: returns canned outcomes and records every requested URL."""

    def __init__(self, pages: Dict[str, FetchOutcome]) -> None:
        self.pages = pages
        self.calls: List[str] = []

    async def fetch(self, url: str) -> FetchOutcome:
        self.calls.append(url)
        await asyncio.sleep(0)  # let other workers run
        outcome = self.pages.get(url, OtherFailure("no such page in fake site"))
        if isinstance(outcome, Success) and not outcome.final_url:
            outcome = Success(body=outcome.body, final_url=url)
        return outcome


def page(*hrefs: str, final_url: Optional[str] = None) -> Success:
    """Build a Success outcome linking to *hrefs*; no final_url means "not redirected"."""
    body = "<html><body>" + "".join(f'<a href="{h}">{h}</a>' for h in hrefs) + "</body></html>"
    return Success(body=body, final_url=final_url or "")


@pytest.fixture(autouse=True)
def reset_logging():
    """
    CLI tests point the project logger at CliRunner streams; restore a
    plain handler afterwards so later tests do not log into closed streams.
    """
    yield
    init_logging(level="WARNING")


@pytest.fixture()
def crawler_config() -> CrawlerConfig:
    """
    Return a basic valid CrawlerConfig for crawler tests.
    """
    return CrawlerConfig(timeout=2.0, user_agent="TestAgent/1.0")


@pytest.fixture()
def make_fetcher() -> Callable[[Dict[str, FetchOutcome]], FakeFetcher]:
    return FakeFetcher


@pytest.fixture()
def make_page() -> Callable[..., Success]:
    return page


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory) -> AsyncIterator[Callable[[web.Application], Awaitable[str]]]:
    """Start aiohttp apps on free local ports; yields a starter returning the base URL."""
    runners: List[web.AppRunner] = []

    async def _start(app: web.Application) -> str:
        port = unused_tcp_port_factory()
        runner = web.AppRunner(app)
        await runner.setup()
        runners.append(runner)
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        return f"http://127.0.0.1:{port}"

    try:
        yield _start
    finally:
        for runner in runners:
            await runner.cleanup()
