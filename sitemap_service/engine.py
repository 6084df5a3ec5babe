"""sitemap_service.engine: job-control facade used by the HTTP surface and the CLI."""

from __future__ import annotations

import asyncio
from typing import Optional, Set

from sitemap_service.config import CrawlerConfig
from sitemap_service.crawler.crawler import SitemapCrawler
from sitemap_service.crawler.fetcher import Fetcher, HttpFetcher
from sitemap_service.crawler.models import SitemapNode
from sitemap_service.logger import logger
from sitemap_service.observer import CrawlObserver, LoggingObserver, RegistryObserver
from sitemap_service.registry import OperationRegistry

__all__ = ["Engine", "start_crawl"]


async def start_crawl(
    config: CrawlerConfig,
    url: str,
    observer: Optional[CrawlObserver] = None,
) -> SitemapNode:
    """Run one crawl over HTTP and return the sitemap."""
    async with HttpFetcher(config) as fetcher:
        crawler = SitemapCrawler(fetcher, config)
        return await crawler.crawl(url, observer or LoggingObserver())


class Engine:
    """
    Starts crawls in the background and answers progress/result queries.

    The registry is created once per process and passed in; crawls run as
    asyncio tasks on the loop that calls :meth:`begin`.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        registry: Optional[OperationRegistry] = None,
        fetcher: Optional[Fetcher] = None,
    ) -> None:
        self.config = config
        self.registry = registry if registry is not None else OperationRegistry()
        self.fetcher = fetcher
        self._tasks: Set[asyncio.Task] = set()

    def begin(self, url: str) -> bool:
        """Admit a crawl for *url* (fire-and-forget). False if already known."""
        return self.registry.begin(url, self._schedule)

    def get_progress(self, url: str) -> int:
        return self.registry.get_progress(url)

    def get_result(self, url: str) -> Optional[SitemapNode]:
        return self.registry.get_result(url)

    async def wait(self) -> None:
        """Wait for every crawl started so far; handy for tests and shutdown."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _schedule(self, key: str) -> None:
        task = asyncio.get_running_loop().create_task(self._run(key), name=f"crawl:{key}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, key: str) -> None:
        observer = RegistryObserver(self.registry)
        try:
            if self.fetcher is not None:
                await SitemapCrawler(self.fetcher, self.config).crawl(key, observer)
            else:
                await start_crawl(self.config, key, observer)
        except Exception:
            logger.exception("Crawl failed: %s", key)
