"""
Notification sinks for crawl progress.

The crawler calls an observer synchronously while it traverses a site; how
the events travel further (registry, log, terminal) is up to the observer.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from sitemap_service.crawler.models import SitemapNode
from sitemap_service.logger import LOGGER_NAME

if TYPE_CHECKING:
    from sitemap_service.registry import OperationRegistry

__all__ = ("CrawlObserver", "RegistryObserver", "LoggingObserver")


class CrawlObserver(Protocol):
    def progress(self, key: str, percentage: int) -> None: ...

    def completed(self, key: str, result: SitemapNode) -> None: ...


class RegistryObserver:
    """Forwards crawl events into an :class:`OperationRegistry`."""

    def __init__(self, registry: OperationRegistry) -> None:
        self.registry = registry

    def progress(self, key: str, percentage: int) -> None:
        self.registry.on_progress(key, percentage)

    def completed(self, key: str, result: SitemapNode) -> None:
        self.registry.on_completed(key, result)


class LoggingObserver:
    """Writes progress to the service log; used by the CLI."""

    def __init__(self) -> None:
        self.logger = logging.getLogger(LOGGER_NAME)
        self._last = -1

    def progress(self, key: str, percentage: int) -> None:
        if percentage != self._last:
            self._last = percentage
            self.logger.info("%s: %d%%", key, percentage)

    def completed(self, key: str, result: SitemapNode) -> None:
        self.logger.info("%s: sitemap ready (%d nodes)", key, sum(1 for _ in result.walk()))
