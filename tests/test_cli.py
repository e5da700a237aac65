# File: tests/test_cli.py
"""Тесты для CLI (`site_graph/cli.py`) с использованием click.testing.CliRunner.
Проверяют команды `crawl`, `config`, `--version`, а также обработку ошибок.
"""
import asyncio
import importlib
import json

import pytest
from click.testing import CliRunner

from site_graph.cli import cli
from site_graph.crawler.errors import CrawlError
from site_graph.crawler.models import PageResult, empty_headings

cli_module = importlib.import_module("site_graph.cli")


@pytest.fixture(autouse=True)
def patch_start_crawl(monkeypatch):
    """Патчим start_crawl для возвращения фиктивных страниц без обхода."""
    headings = empty_headings()
    headings["h1"] = ["Welcome"]
    pages = [
        PageResult(
            url="http://example.com/",
            status_code=200,
            title="Home",
            headings=headings,
            outgoing_links=["http://example.com/old"],
            incoming_links=["http://example.com/old"],
        ),
        PageResult(
            url="http://example.com/old",
            status_code=301,
            title="Moved",
            outgoing_links=["http://example.com/"],
            incoming_links=["http://example.com/"],
        ),
    ]
    seen = {}

    async def fake_crawl(cfg):
        seen["config"] = cfg
        return pages

    monkeypatch.setattr(cli_module, "start_crawl", fake_crawl)
    return seen


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Без configs/default.yaml в рабочей директории."""
    monkeypatch.chdir(tmp_path)


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "SiteGraph" in result.output


def test_show_config(tmp_path):
    cfg_file = tmp_path / "config.json"
    cfg_file.write_text(
        json.dumps({"base_url": "https://example.com", "concurrency": 3}), encoding="utf-8"
    )
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["base_url"].startswith("https://example.com")
    assert data["concurrency"] == 3


def test_show_config_without_url_fails():
    runner = CliRunner()
    result = runner.invoke(cli, ["config"])
    assert result.exit_code == 1
    assert "Ошибка конфигурации" in result.output


def test_crawl_stdout(patch_start_crawl):
    runner = CliRunner()
    result = runner.invoke(cli, ["crawl", "https://example.com", "--concurrency", "2", "--source", "http"])
    assert result.exit_code == 0
    output = json.loads(result.output)
    assert [entry["url"] for entry in output] == ["http://example.com/", "http://example.com/old"]
    cfg = patch_start_crawl["config"]
    assert cfg.concurrency == 2
    assert cfg.page_source == "http"


def test_crawl_uses_config_file(tmp_path, patch_start_crawl):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("base_url: https://example.com\ntimeout: 7\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "crawl", "--timeout", "3"])
    assert result.exit_code == 0
    assert patch_start_crawl["config"].timeout == 3.0


def test_crawl_filters():
    runner = CliRunner()
    result = runner.invoke(cli, ["crawl", "https://example.com", "--status", "3xx"])
    assert result.exit_code == 0
    assert [entry["url"] for entry in json.loads(result.output)] == ["http://example.com/old"]

    result = runner.invoke(cli, ["crawl", "https://example.com", "--filter-heading", "welcome"])
    assert [entry["title"] for entry in json.loads(result.output)] == ["Home"]


def test_crawl_rejects_bad_status():
    runner = CliRunner()
    result = runner.invoke(cli, ["crawl", "https://example.com", "--status", "weird"])
    assert result.exit_code == 2


def test_crawl_page_details():
    runner = CliRunner()
    result = runner.invoke(cli, ["crawl", "https://example.com", "--page", "http://example.com/old"])
    assert result.exit_code == 0
    assert "Title:       Moved" in result.output
    assert "Incoming links (1):" in result.output

    result = runner.invoke(cli, ["crawl", "https://example.com", "--page", "http://example.com/nope"])
    assert result.exit_code == 1


def test_crawl_json_file(tmp_path):
    out = tmp_path / "out.json"
    runner = CliRunner()
    result = runner.invoke(cli, ["crawl", "https://example.com", "--json", str(out)])
    assert result.exit_code == 0
    assert out.exists()
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data[0]["url"] == "http://example.com/"
    assert data[1]["incoming_links"] == ["http://example.com/"]


def test_crawl_html_file(tmp_path):
    out = tmp_path / "report.html"
    runner = CliRunner()
    result = runner.invoke(cli, ["crawl", "https://example.com", "--html", str(out)])
    assert result.exit_code == 0
    assert out.exists()
    assert "Moved" in out.read_text(encoding="utf-8")


def test_crawl_timeout(monkeypatch):
    async def slow(cfg):
        await asyncio.sleep(2)
        return []

    monkeypatch.setattr(cli_module, "start_crawl", slow)
    runner = CliRunner()
    result = runner.invoke(cli, ["crawl", "https://example.com", "--crawl-timeout", "0.2"])
    assert result.exit_code == 1
    assert "не завершён" in result.output


def test_crawl_error(monkeypatch):
    async def unreachable(cfg):
        raise CrawlError("root URL unreachable: https://example.com/")

    monkeypatch.setattr(cli_module, "start_crawl", unreachable)
    runner = CliRunner()
    result = runner.invoke(cli, ["crawl", "https://example.com"])
    assert result.exit_code == 1
    assert "root URL unreachable" in result.output
