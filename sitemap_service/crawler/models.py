"""
Data models for the sitemap crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence


@dataclass(slots=True)
class SitemapNode:
    """One discovered page: normalized URL, title and ordered child nodes."""

    url: str
    title: str = ""
    children: Sequence[SitemapNode] = field(default_factory=list)

    def freeze(self) -> SitemapNode:
        """Turn every ``children`` list in the subtree into a tuple, in place."""
        stack: List[SitemapNode] = [self]
        while stack:
            node = stack.pop()
            node.children = tuple(node.children)
            stack.extend(node.children)
        return self

    def walk(self):
        """Yield the nodes of the subtree in depth-first pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "children": [child.to_dict() for child in self.children],
            "title": self.title,
            "url": self.url,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SitemapNode:
        return cls(
            url=data["url"],
            title=data.get("title") or "",
            children=[cls.from_dict(c) for c in data.get("children") or ()],
        )


@dataclass(slots=True)
class CrawlJob:
    """Mutable bookkeeping of a single crawl invocation.

    ``pages`` doubles as the visited set and as the HTML cache used by the
    title pass: a key is added at most once, with ``""`` as the placeholder
    for a page that has not (or not successfully) been fetched.
    """

    seed_url: str
    key: str
    pages: Dict[str, str] = field(default_factory=dict)
    nodes: Dict[str, SitemapNode] = field(default_factory=dict)
    created: int = 0

    def is_visited(self, url: str) -> bool:
        return url in self.pages

    def remember(self, url: str, body: str) -> None:
        """Store *body* for *url* unless real content is already recorded."""
        if not self.pages.get(url):
            self.pages[url] = body


__all__ = ["SitemapNode", "CrawlJob"]
