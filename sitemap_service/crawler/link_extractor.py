"""
Link and title extraction for the sitemap crawler.

Both helpers work on the raw markup with regular expressions rather than an
HTML parser. Malformed documents may therefore yield more or fewer matches
than a browser would see; callers rely on exactly this textual behaviour.
"""
from __future__ import annotations

import re
from typing import List

__all__ = ("extract_links", "extract_title")

_FLAGS = re.IGNORECASE | re.DOTALL

_ANCHOR_RE = re.compile(r"<a.*?href=(\"|')(.*?)(\"|').*?>(.*?)</a>", _FLAGS)
_TITLE_RE = re.compile(r"<title>([^<]+)</title>", _FLAGS)


def extract_links(html: str) -> List[str]:
    """Return the ``href`` values of all anchors in document order, stripped."""
    return [m.group(2).strip() for m in _ANCHOR_RE.finditer(html)]


def extract_title(html: str) -> str:
    """Return the stripped text of the first ``<title>`` element or ``""``."""
    m = _TITLE_RE.search(html)
    return m.group(1).strip() if m else ""
