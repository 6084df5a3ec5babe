# File: tests/test_registry.py
import threading

import pytest

from sitemap_service.crawler.models import SitemapNode
from sitemap_service.observer import RegistryObserver
from sitemap_service.registry import OperationRegistry


def test_unknown_key_defaults():
    registry = OperationRegistry()
    assert registry.get_progress("http://nowhere") == 0
    assert registry.get_result("http://nowhere") is None
    assert "http://nowhere" not in registry


def test_begin_starts_once():
    registry = OperationRegistry()
    started = []

    assert registry.begin("a.com", started.append) is True
    assert registry.begin("a.com", started.append) is False
    assert started == ["a.com"]


def test_begin_after_completion_is_noop():
    registry = OperationRegistry()
    tree = SitemapNode("http://a.com")
    registry.begin("a.com", lambda key: registry.on_completed(key, tree))

    assert registry.begin("a.com", pytest.fail) is False
    assert registry.get_result("a.com") is tree


def test_begin_releases_key_when_start_fails():
    registry = OperationRegistry()

    def broken(key):
        raise RuntimeError("no loop")

    with pytest.raises(RuntimeError):
        registry.begin("a.com", broken)
    assert "a.com" not in registry
    assert registry.begin("a.com", lambda key: None) is True


def test_progress_upserts_entry():
    registry = OperationRegistry()
    operation = registry.on_progress("a.com", 10)

    assert operation.percentage == 10
    assert registry.on_progress("a.com", 42) is operation
    assert registry.get_progress("a.com") == 42
    assert registry.get_result("a.com") is None


def test_completion_sets_result_and_full_progress():
    registry = OperationRegistry()
    tree = SitemapNode("http://a.com")
    registry.on_progress("a.com", 60)
    registry.on_completed("a.com", tree)

    assert registry.get_progress("a.com") == 100
    assert registry.get_result("a.com") is tree


def test_result_is_never_replaced():
    registry = OperationRegistry()
    first, second = SitemapNode("http://a.com"), SitemapNode("http://a.com")
    registry.on_completed("a.com", first)
    registry.on_completed("a.com", second)

    assert registry.get_result("a.com") is first


def test_observer_bridges_into_registry():
    registry = OperationRegistry()
    observer = RegistryObserver(registry)
    tree = SitemapNode("http://a.com")

    observer.progress("a.com", 30)
    assert registry.get_progress("a.com") == 30
    observer.completed("a.com", tree)
    assert registry.get_result("a.com") is tree


def test_concurrent_begin_admits_one_crawl():
    registry = OperationRegistry()
    started = []
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        registry.begin("a.com", started.append)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert started == ["a.com"]


def test_concurrent_progress_for_distinct_keys():
    registry = OperationRegistry()
    keys = [f"site{i}.com" for i in range(6)]

    def job(key):
        for pct in range(0, 100, 3):
            registry.on_progress(key, pct)
        registry.on_completed(key, SitemapNode(f"http://{key}"))

    threads = [threading.Thread(target=job, args=(k,)) for k in keys]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    for key in keys:
        assert registry.get_progress(key) == 100
        assert registry.get_result(key).url == f"http://{key}"
    assert len(registry) == len(keys)
