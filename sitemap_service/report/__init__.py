"""sitemap_service.report: writers for crawled sitemaps."""

from sitemap_service.report.json_report import render_json

__all__ = ["render_json"]
