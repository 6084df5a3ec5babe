"""Logging setup for **SitemapService**.

All modules log through the ``SitemapService`` logger. Console output goes
to stderr so that ``sitemap-service crawl`` can print the sitemap JSON on
stdout; a rotating log file is added on request::

    from sitemap_service.logger import logger
    logger.info("Crawl started")
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SitemapService"


def _file_handler(file: Union[Path, str]) -> RotatingFileHandler:
    return RotatingFileHandler(
        filename=str(file),
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )


def configure(
    level: Union[int, str] = "INFO",
    log_file: Union[Path, str, None] = None,
    log_format: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    """Replace the handlers of the service logger.

    Parameters
    ----------
    level
        Numeric or textual logging level (e.g. ``"DEBUG"``).
    log_file
        Optional path of a rotating log file (5 MiB, 3 backups).
    log_format
        Format string shared by every handler.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    lg.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(_file_handler(log_file))
    for handler in handlers:
        handler.setFormatter(logging.Formatter(log_format))
        lg.addHandler(handler)

    lg.propagate = False
    return lg


logger: logging.Logger = configure()

__all__ = ["logger", "configure", "LOGGER_NAME"]
