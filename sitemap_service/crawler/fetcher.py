"""
Fetcher module: downloads pages for the crawler with a per-request timeout.

Anything that is not a successful ``text/html`` response comes back as an
empty string; the crawler treats that as "no page here".
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol

from aiohttp import ClientError, ClientSession, ClientTimeout

from sitemap_service.config import CrawlerConfig
from sitemap_service.logger import LOGGER_NAME

__all__ = ("Fetcher", "HttpFetcher")


class Fetcher(Protocol):
    """Anything the crawler can ask for a page body."""

    async def fetch(self, url: str) -> str: ...


class HttpFetcher:
    """aiohttp-backed fetcher. Use as an async context manager."""

    def __init__(self, config: CrawlerConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None
        self.logger = logging.getLogger(LOGGER_NAME)

    async def __aenter__(self) -> HttpFetcher:
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

    async def fetch(self, url: str) -> str:
        """
        Fetch *url* and return its HTML.

        Returns ``""`` on network errors, timeouts, non-2xx statuses and
        non-HTML content types.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(url) as resp:
                if not 200 <= resp.status < 300:
                    self.logger.debug("HTTP %s for %s", resp.status, url)
                    return ""
                ctype = resp.headers.get("Content-Type", "")
                if "text/html" not in ctype.lower():
                    self.logger.debug("Skipping %s (%s)", url, ctype or "no content type")
                    return ""
                return await resp.text(errors="replace")
        except asyncio.TimeoutError:
            self.logger.warning("Timed out after %.1f s: %s", self.config.timeout, url)
        except (ClientError, ValueError) as exc:
            self.logger.warning("Failed %s: %s", url, exc)
        return ""
