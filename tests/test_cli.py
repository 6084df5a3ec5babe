"""Tests for the CLI (`sitemap_service.cli`) using click.testing.CliRunner.
Cover the `crawl`, `serve` and `config` commands, `--version` and error handling.
"""
import json

import pytest
from click.testing import CliRunner

import sitemap_service.cli as cli_module
from sitemap_service import main_cli
from sitemap_service.cli import cli
from sitemap_service.crawler.models import SitemapNode

QUIET = ["--log-level", "CRITICAL"]


@pytest.fixture(autouse=True)
def patch_start_crawl(monkeypatch):
    """Replace start_crawl with a canned sitemap, no network involved."""
    calls = []
    tree = SitemapNode(
        "http://example.com",
        "Home",
        [SitemapNode("http://example.com/a", "A")],
    ).freeze()

    async def fake_crawl(cfg, url):
        calls.append((cfg, url))
        return tree

    monkeypatch.setattr(cli_module, "start_crawl", fake_crawl)
    return calls


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "SitemapService" in result.output


def test_show_config(tmp_path):
    cfg_file = tmp_path / "config.json"
    cfg_file.write_text(json.dumps({"max_links": 7, "port": 9001}), encoding="utf-8")

    result = CliRunner().invoke(cli, QUIET + ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["max_links"] == 7
    assert data["port"] == 9001
    assert data["max_depth"] == 4


def test_invalid_config_exits_with_error(tmp_path):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("max_links: -1\n", encoding="utf-8")

    result = CliRunner().invoke(cli, QUIET + ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1


def test_crawl_stdout(patch_start_crawl):
    result = CliRunner().invoke(cli, QUIET + ["crawl", "example.com"])
    assert result.exit_code == 0
    output = json.loads(result.output)
    assert output["url"] == "http://example.com"
    assert output["children"][0] == {"children": [], "title": "A", "url": "http://example.com/a"}
    assert patch_start_crawl[0][1] == "example.com"


def test_crawl_overrides_limits(patch_start_crawl):
    result = CliRunner().invoke(cli, QUIET + ["crawl", "example.com", "--max-links", "5", "--max-depth", "2"])
    assert result.exit_code == 0
    cfg = patch_start_crawl[0][0]
    assert (cfg.max_links, cfg.max_depth, cfg.max_level_size) == (5, 2, 10)


def test_crawl_json_file(tmp_path):
    out = tmp_path / "reports" / "sitemap.json"
    result = CliRunner().invoke(cli, QUIET + ["crawl", "example.com", "--json", str(out)])
    assert result.exit_code == 0
    assert out.exists()
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["title"] == "Home"
    assert data["children"][0]["url"] == "http://example.com/a"


def test_crawl_failure(monkeypatch):
    async def broken(cfg, url):
        raise RuntimeError("boom")

    monkeypatch.setattr(cli_module, "start_crawl", broken)
    result = CliRunner().invoke(cli, QUIET + ["crawl", "example.com"])
    assert result.exit_code == 1


def test_serve_uses_config_and_overrides(monkeypatch):
    seen = {}

    def fake_run_server(engine, host, port):
        seen.update(engine=engine, host=host, port=port)

    monkeypatch.setattr(cli_module, "run_server", fake_run_server)
    result = CliRunner().invoke(cli, QUIET + ["serve", "--port", "9100"])
    assert result.exit_code == 0
    assert seen["host"] == "127.0.0.1"
    assert seen["port"] == 9100
    assert seen["engine"].get_progress("anything") == 0


def test_package_exports_group_without_shadowing_module():
    assert main_cli is cli
    assert callable(cli_module.start_crawl)
    assert cli_module.cli is cli
