"""sitemap_service.crawler: bounded crawl engine and its helpers."""
from sitemap_service.crawler.crawler import SitemapCrawler
from sitemap_service.crawler.fetcher import Fetcher, HttpFetcher
from sitemap_service.crawler.models import CrawlJob, SitemapNode

__all__ = ["SitemapCrawler", "Fetcher", "HttpFetcher", "CrawlJob", "SitemapNode"]
