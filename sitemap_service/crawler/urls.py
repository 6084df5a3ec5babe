"""
URL classification helpers used by the crawler.

The checks are textual on purpose: they decide whether a link may become a
sitemap node, they do not try to be RFC 3986 compliant.
"""
from __future__ import annotations

import re
from typing import FrozenSet
from urllib.parse import urlsplit

from sitemap_service.logger import logger

__all__ = (
    "VALID_EXTENSIONS",
    "has_protocol",
    "is_absolute",
    "add_protocol",
    "remove_protocol",
    "make_absolute",
    "is_same_domain",
    "is_valid_url",
)

_PROTOCOL_SEP = "://"
_SCHEME_RE = re.compile(r"[a-z]+", re.IGNORECASE)

# Anything else with an extension (images, scripts, styles, archives) is skipped
VALID_EXTENSIONS: FrozenSet[str] = frozenset(("aspx", "php", "html", "htm"))


def has_protocol(url: str) -> bool:
    """True when *url* contains ``://`` preceded by letters only."""
    idx = url.find(_PROTOCOL_SEP)
    return idx > 0 and _SCHEME_RE.fullmatch(url[:idx]) is not None


def is_absolute(url: str) -> bool:
    return url.startswith("//") or has_protocol(url)


def add_protocol(url: str) -> str:
    """Prefix *url* with ``http:`` unless it already carries a scheme."""
    if has_protocol(url):
        return url
    return f"http:{'' if url.startswith('//') else '//'}{url}"


def remove_protocol(url: str) -> str:
    if not has_protocol(url):
        return url
    return url[url.find(_PROTOCOL_SEP) + len(_PROTOCOL_SEP):]


def make_absolute(link: str, base: str) -> str:
    """Resolve *link* against *base* by plain concatenation."""
    if is_absolute(link):
        return add_protocol(link)
    return f"{base.rstrip('/')}/{link.lstrip('/')}".rstrip("/#")


def is_same_domain(link: str, base: str) -> bool:
    """
    Relative links always belong to the base domain. Absolute links match
    when the hosts are equal ignoring case; unparseable links never match.
    """
    if not is_absolute(link):
        return True
    try:
        base_host = urlsplit(add_protocol(base)).hostname
        host = urlsplit(add_protocol(link)).hostname
    except ValueError as exc:
        logger.debug("Unparseable link %r: %s", link, exc)
        return False
    if not host or not base_host:
        return False
    return host.casefold() == base_host.casefold()


def _extension(path: str) -> str:
    name = path.rsplit("/", 1)[-1]
    dot = name.rfind(".")
    return "" if dot < 0 else name[dot + 1:].strip().lower()


def is_valid_url(url: str) -> bool:
    """
    Coarse filter for URLs that look like pages.

    A bare host (no ``/`` once the scheme is gone) is always accepted.
    Otherwise ``javascript:`` pseudo-URLs are rejected and an extension, if
    present, has to be one of :data:`VALID_EXTENSIONS`.
    """
    if is_absolute(url):
        url = remove_protocol(url.lstrip("/"))
    if "/" not in url:
        return True
    if "javascript:" in url.lower():
        return False
    ext = _extension(url)
    return not ext or ext in VALID_EXTENSIONS
