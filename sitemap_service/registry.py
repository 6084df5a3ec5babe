"""
In-memory registry of crawl operations.

Turns the push-style events of running crawls into state that callers can
poll by job key. Entries are never evicted: a key that has been admitted
once is never crawled again during the life of the process.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from sitemap_service.crawler.models import SitemapNode
from sitemap_service.logger import LOGGER_NAME

__all__ = ("Operation", "OperationRegistry")

logger = logging.getLogger(LOGGER_NAME)


@dataclass
class Operation:
    """Progress and (eventually) the result of one crawl."""

    url: str
    percentage: int = 0
    result: Optional[SitemapNode] = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)


class OperationRegistry:
    """
    Thread-safe map of job key → :class:`Operation`.

    Entries are inserted with ``dict.setdefault`` (atomic for ``str`` keys)
    and updated under their own lock, so updates for different keys never
    contend.
    """

    def __init__(self) -> None:
        self._operations: Dict[str, Operation] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._operations

    def __len__(self) -> int:
        return len(self._operations)

    def begin(self, key: str, start: Callable[[str], object]) -> bool:
        """
        Call ``start(key)`` unless *key* already has an entry.

        Returns True when the crawl was admitted. If *start* raises, the key
        is released again and the exception propagates.
        """
        placeholder = Operation(key)
        if self._operations.setdefault(key, placeholder) is not placeholder:
            logger.debug("Already known, not starting again: %s", key)
            return False
        try:
            start(key)
        except Exception:
            if self._operations.get(key) is placeholder:
                del self._operations[key]
            raise
        logger.info("Crawl admitted: %s", key)
        return True

    def on_progress(self, key: str, percentage: int) -> Operation:
        operation = self._operations.setdefault(key, Operation(key))
        with operation.lock:
            operation.percentage = percentage
        return operation

    def on_completed(self, key: str, result: SitemapNode) -> None:
        operation = self.on_progress(key, 100)
        with operation.lock:
            if operation.result is None:
                operation.result = result

    def get_progress(self, key: str) -> int:
        operation = self._operations.get(key)
        return operation.percentage if operation is not None else 0

    def get_result(self, key: str) -> Optional[SitemapNode]:
        operation = self._operations.get(key)
        return operation.result if operation is not None else None
