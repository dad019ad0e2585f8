# File: tests/test_cli.py
"""Тесты для CLI (`link_scout.cli`) с использованием click.testing.CliRunner.
Проверяют команды `crawl`, `config`, `--version`, а также обработку ошибок.
"""
import asyncio
import importlib
import json

import pytest
from click.testing import CliRunner

# `link_scout.cli` the attribute is the click Group re-exported by the package;
# fetch the submodule itself so monkeypatching targets the right namespace.
cli_module = importlib.import_module("link_scout.cli")
from link_scout.cli import cli
from link_scout.crawler.models import BrokenLink, CrawlResult, FailedLink
from link_scout.crawler.scope import ScopeMode


@pytest.fixture()
def crawl_calls(monkeypatch):
    """Патчим start_crawl: без сети, с фиксированным результатом; возвращает список вызовов."""
    calls = []

    async def fake_crawl(cfg, seed, scope=None, *, crawl_timeout=None, on_broken=None):
        calls.append({"cfg": cfg, "seed": seed, "scope": scope, "crawl_timeout": crawl_timeout})
        return CrawlResult(
            seed="http://example.com/",
            scope=scope,
            broken=[
                BrokenLink("http://example.com/b", found_on="http://example.com/"),
                BrokenLink("http://example.com/d", found_on="http://example.com/c"),
            ],
            failures=[FailedLink("http://example.com/x", "HTTP 500 Internal Server Error")],
            visited=frozenset({"http://example.com/", "http://example.com/b"}),
        )

    monkeypatch.setattr(cli_module, "start_crawl", fake_crawl)
    return calls


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "LinkScout" in result.output


def test_show_config(tmp_path):
    cfg_file = tmp_path / "config.json"
    cfg_file.write_text(json.dumps({"timeout": 4.0, "user_agent": "Agent/1.0"}), encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["timeout"] == 4.0
    assert data["scope_mode"] == "subdomain"


def test_bad_config_is_fatal(tmp_path):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("not: a: mapping", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1
    assert "Ошибка загрузки конфигурации" in result.output


def test_crawl_lists_broken_links_in_order(crawl_calls):
    result = CliRunner().invoke(cli, ["crawl", "http://example.com/", "example.com"])
    assert result.exit_code == 0
    assert "http://example.com/b\nhttp://example.com/d" in result.output
    assert "http://example.com/x" not in result.output
    assert crawl_calls[0]["seed"] == "http://example.com/"
    assert crawl_calls[0]["scope"] == "example.com"


def test_crawl_without_domain(crawl_calls):
    result = CliRunner().invoke(cli, ["crawl", "http://example.com/"])
    assert result.exit_code == 0
    assert crawl_calls[0]["scope"] is None


def test_crawl_invalid_seed_is_fatal(crawl_calls):
    result = CliRunner().invoke(cli, ["crawl", "not a url"])
    assert result.exit_code == 1
    assert "Invalid seed URL" in result.output
    assert crawl_calls == []


def test_crawl_options_override_config(crawl_calls):
    result = CliRunner().invoke(
        cli,
        [
            "crawl", "http://example.com/", "example.com",
            "--scope-mode", "exact",
            "--concurrency", "4",
            "--timeout", "2.5",
            "--user-agent", "Checker/9",
            "--crawl-timeout", "30",
        ],
    )
    assert result.exit_code == 0
    cfg = crawl_calls[0]["cfg"]
    assert cfg.scope_mode is ScopeMode.EXACT
    assert cfg.concurrency == 4
    assert cfg.timeout == 2.5
    assert cfg.user_agent == "Checker/9"
    assert crawl_calls[0]["crawl_timeout"] == 30.0


def test_crawl_rejects_invalid_override(crawl_calls):
    result = CliRunner().invoke(cli, ["crawl", "http://example.com/", "--timeout", "-1"])
    assert result.exit_code == 1
    assert crawl_calls == []


def test_crawl_show_failures(crawl_calls):
    result = CliRunner().invoke(cli, ["crawl", "http://example.com/", "--show-failures"])
    assert result.exit_code == 0
    assert "http://example.com/x  [HTTP 500 Internal Server Error]" in result.output


def test_crawl_fail_on_broken(crawl_calls):
    result = CliRunner().invoke(cli, ["crawl", "http://example.com/", "--fail-on-broken"])
    assert result.exit_code == cli_module.EXIT_BROKEN_FOUND


def test_crawl_writes_reports(tmp_path, crawl_calls):
    json_out = tmp_path / "out.json"
    html_out = tmp_path / "report.html"
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(f"results_dir: {tmp_path / 'results'}\n", encoding="utf-8")

    result = CliRunner().invoke(
        cli,
        [
            "--config", str(cfg_file),
            "crawl", "http://example.com/",
            "--json", str(json_out),
            "--html", str(html_out),
            "--save-results",
        ],
    )
    assert result.exit_code == 0
    assert json.loads(json_out.read_text(encoding="utf-8"))["broken"][0]["url"] == "http://example.com/b"
    assert "http://example.com/d" in html_out.read_text(encoding="utf-8")
    saved = json.loads((tmp_path / "results" / "example.com.json").read_text(encoding="utf-8"))
    assert [item["url"] for item in saved] == ["http://example.com/b", "http://example.com/d"]


def test_crawl_error_is_reported(monkeypatch):
    async def broken(cfg, seed, scope=None, **kwargs):
        await asyncio.sleep(0)
        raise RuntimeError("network stack exploded")

    monkeypatch.setattr(cli_module, "start_crawl", broken)
    result = CliRunner().invoke(cli, ["crawl", "http://example.com/"])
    assert result.exit_code == 1
    assert "network stack exploded" in result.output
