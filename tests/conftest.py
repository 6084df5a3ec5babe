# File: tests/conftest.py
from __future__ import annotations

from typing import Dict, List, Tuple

import pytest

from sitemap_service.crawler.models import SitemapNode


class FakeFetcher:
    """In-memory fetcher: URL → HTML, unknown URLs are unreachable."""

    def __init__(self, pages: Dict[str, str]) -> None:
        self.pages = pages
        self.calls: List[str] = []

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        return self.pages.get(url, "")


class RecordingObserver:
    """Keeps every event in arrival order."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, str, object]] = []

    def progress(self, key: str, percentage: int) -> None:
        self.events.append(("progress", key, percentage))

    def completed(self, key: str, result: SitemapNode) -> None:
        self.events.append(("completed", key, result))

    @property
    def percentages(self) -> List[int]:
        return [value for kind, _, value in self.events if kind == "progress"]


def anchors(*hrefs: str) -> str:
    """Build a page body with one anchor per href."""
    return "<html><body>" + "".join(f'<a href="{h}">{h}</a>' for h in hrefs) + "</body></html>"


@pytest.fixture()
def observer() -> RecordingObserver:
    return RecordingObserver()
