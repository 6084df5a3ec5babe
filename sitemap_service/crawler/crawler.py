"""
Bounded, depth-first sitemap crawler.

One :meth:`SitemapCrawler.crawl` call builds a tree of :class:`SitemapNode`
for a single seed URL. Fetches inside a crawl are awaited one after another;
separate crawls can run side by side as independent tasks.

Limits (see :class:`~sitemap_service.config.CrawlerConfig`):

* ``max_links`` – links are only expanded while the number of created nodes
  is at most this value. It is checked once per expanded page, so a single
  level may push the total above it.
* ``max_depth`` – the seed is expanded at depth 1; pages below ``max_depth``
  are still fetched (for their title) but never expanded.
* ``max_level_size`` – at most this many children are accepted per page.
"""
from __future__ import annotations

import logging
import time
from typing import List, Optional

from sitemap_service.config import CrawlerConfig
from sitemap_service.crawler.fetcher import Fetcher
from sitemap_service.crawler.link_extractor import extract_links, extract_title
from sitemap_service.crawler.models import CrawlJob, SitemapNode
from sitemap_service.crawler.urls import (
    add_protocol,
    is_same_domain,
    is_valid_url,
    make_absolute,
)
from sitemap_service.logger import LOGGER_NAME
from sitemap_service.observer import CrawlObserver

__all__ = ("SitemapCrawler",)


class SitemapCrawler:
    """Builds a sitemap tree and reports progress to an observer."""

    def __init__(self, fetcher: Fetcher, config: Optional[CrawlerConfig] = None) -> None:
        self.fetcher = fetcher
        self.config = config or CrawlerConfig()
        self.logger = logging.getLogger(LOGGER_NAME)

    async def crawl(self, seed_url: str, observer: CrawlObserver) -> SitemapNode:
        """
        Crawl *seed_url* and return the root of the sitemap.

        Progress is reported under the key *seed_url* exactly as given.
        The observer receives ``completed`` followed by ``progress(100)``.
        """
        start = time.monotonic()
        job = CrawlJob(seed_url=add_protocol(seed_url), key=seed_url)
        self.logger.info("Crawl started: %s", job.seed_url)

        root = self._new_node(job, job.seed_url, observer)
        await self._expand(job, root, 1, observer)
        self._fill_titles(job)
        root.freeze()

        self.logger.info(
            "Crawl finished: %s, %d nodes in %.2f s",
            job.seed_url, job.created, time.monotonic() - start,
        )
        observer.completed(job.key, root)
        # 100% only after the result has been handed over
        observer.progress(job.key, 100)
        return root

    async def _expand(self, job: CrawlJob, node: SitemapNode, depth: int, observer: CrawlObserver) -> None:
        html = await self._download(node.url)
        if not html:
            return
        job.remember(node.url, html)

        if job.created > self.config.max_links or depth > self.config.max_depth:
            return

        added: List[SitemapNode] = []
        for link in extract_links(html):
            absolute = make_absolute(link, node.url)
            if (
                is_valid_url(absolute)
                and is_same_domain(link, node.url)
                and not job.is_visited(absolute)
            ):
                child = self._new_node(job, absolute, observer)
                node.children.append(child)
                added.append(child)
            else:
                self.logger.debug("Skipped link %r on %s", link, node.url)

            if len(added) == self.config.max_level_size:
                break

        for child in added:
            await self._expand(job, child, depth + 1, observer)

    async def _download(self, url: str) -> str:
        if not is_valid_url(url):
            return ""
        self.logger.debug("Fetching %s", url)
        try:
            return await self.fetcher.fetch(url)
        except Exception as exc:
            # a page whose fetch raises counts as empty
            self.logger.warning("Fetch failed for %s: %s", url, exc)
            return ""

    def _new_node(self, job: CrawlJob, url: str, observer: CrawlObserver) -> SitemapNode:
        node = SitemapNode(url=url)
        job.nodes.setdefault(url, node)
        job.pages.setdefault(url, "")

        percentage = min(job.created * 100 // self.config.max_links, 99)
        job.created += 1
        observer.progress(job.key, percentage)
        return node

    def _fill_titles(self, job: CrawlJob) -> None:
        untitled = set()
        for url, node in job.nodes.items():
            html = job.pages.get(url)
            if html is None:
                continue
            if html:
                node.title = extract_title(html)
            if not node.title:
                untitled.add(url)

        # Pages without a title are dropped from the cache, their nodes stay
        for url in untitled:
            del job.pages[url]
