# === FILE: link_scout/scanner.py ===
"""
Модуль-обёртка для функции запуска обхода.
"""
from __future__ import annotations

import asyncio
from typing import Callable, Optional

from link_scout.config import CrawlerConfig
from link_scout.crawler.engine import CrawlEngine
from link_scout.crawler.models import BrokenLink, CrawlResult
from link_scout.crawler.normalizer import parse_seed
from link_scout.logger import logger


async def start_crawl(
    cfg: CrawlerConfig,
    seed: str,
    scope: Optional[str] = None,
    *,
    crawl_timeout: Optional[float] = None,
    on_broken: Optional[Callable[[BrokenLink], None]] = None,
) -> CrawlResult:
    """
    Запускает CrawlEngine в контексте и возвращает CrawlResult.

    Parameters
    ----------
    cfg : CrawlerConfig
        Настройки обхода.
    seed : str
        Стартовый URL; некорректный URL даёт SeedInvalid до любых запросов.
    scope : str, optional
        Доменный фильтр; None — без ограничений.
    crawl_timeout : float, optional
        Таймаут всего обхода. По истечении возвращается частичный результат.
    on_broken : callable, optional
        Вызывается для каждой найденной 404-ссылки.

    Returns
    -------
    CrawlResult
        Результат; ``interrupted=True``, если обход был прерван.
    """
    parse_seed(seed)
    async with CrawlEngine(cfg, on_broken=on_broken) as engine:
        try:
            if crawl_timeout:
                return await asyncio.wait_for(engine.crawl(seed, scope), timeout=crawl_timeout)
            return await engine.crawl(seed, scope)
        except asyncio.TimeoutError:
            logger.error("Crawl did not finish within %s seconds, reporting partial results", crawl_timeout)
            return engine.result()
        except asyncio.CancelledError:
            # Ctrl+C: asyncio.run() cancels the main task, report what was collected
            logger.info("Crawl cancelled, reporting partial results")
            return engine.result()


__all__ = ["start_crawl"]
