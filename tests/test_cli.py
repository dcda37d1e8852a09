# File: tests/test_cli.py
"""Tests for the CLI (`link_scout.cli`) using click.testing.CliRunner.
The engine is replaced by a stub so no network access happens.
"""
import json

import pytest
from click.testing import CliRunner

import link_scout.cli as cli_module
from link_scout.cli import cli
from link_scout.crawler.models import ScanState
from link_scout.engine import ScanTimeoutError


class StubEngine:
    """Records the config it was built from and fills a canned state."""

    instances = []
    fail_with = None
    discover = True
    break_links = False

    def __init__(self, config):
        self.config = config
        self.state = ScanState()
        self.waited = None
        StubEngine.instances.append(self)

    @classmethod
    def from_config(cls, config, **kwargs):
        return cls(config)

    def wait(self, timeout=0, on_complete=None):
        self.waited = timeout
        if self.fail_with:
            raise self.fail_with
        self.state.mark_visited(self.config.url)
        if self.discover:
            self.state.add_discovered(f"{self.config.url}/a")
            if self.break_links:
                self.state.add_broken(f"{self.config.url}/a")
        self.state.completed = True

    @property
    def urls(self):
        return self.state.urls

    @property
    def count(self):
        return self.state.count


@pytest.fixture(autouse=True)
def patch_engine(monkeypatch):
    StubEngine.instances = []
    StubEngine.fail_with = None
    StubEngine.discover = True
    StubEngine.break_links = False
    monkeypatch.setattr(cli_module, "Engine", StubEngine)
    return StubEngine


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "LinkScout" in result.output


def test_show_config(tmp_path):
    cfg_file = tmp_path / "config.json"
    cfg_file.write_text(
        json.dumps({"url": "https://example.com", "max_scan": 3, "memory_limit": "256M"}),
        encoding="utf-8",
    )
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    assert '"max_scan": 3' in result.output
    assert '"memory_limit": "256M"' in result.output


def test_bad_config_exits(tmp_path):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("max_scan: -5", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1
    assert "Failed to load configuration" in result.output


def test_scan_options_override_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = tmp_path / "report.json"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        [
            "scan", "https://example.com",
            "--host", "example.com",
            "--max-scan", "7",
            "--memory-limit", "64M",
            "--order", "bfs",
            "--insecure",
            "--output", str(tmp_path / "results"),
            "--json", str(out),
            "--scan-timeout", "30",
        ],
    )
    assert result.exit_code == 0, result.output

    engine = StubEngine.instances[0]
    cfg = engine.config
    assert (cfg.url, cfg.host, cfg.max_scan, cfg.order) == ("https://example.com", "example.com", 7, "bfs")
    assert cfg.memory_budget == 64 * 1024**2
    assert cfg.verify_ssl is False
    assert cfg.output_dir == tmp_path / "results"
    assert engine.waited == 30

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["seed"] == "https://example.com"
    assert data["discovered"] == ["https://example.com/a"]
    assert data["visited"] == ["https://example.com"]


def test_scan_prints_summary(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, ["scan", "https://example.com", "--pretty"])
    assert result.exit_code == 0
    assert '"seed": "https://example.com"' in result.output


def test_scan_with_nothing_found_exits_nonzero(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    StubEngine.discover = False
    runner = CliRunner()
    result = runner.invoke(cli, ["scan", "https://example.com"])
    assert result.exit_code == 1


def test_scan_with_only_broken_links_succeeds(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    StubEngine.break_links = True
    runner = CliRunner()
    result = runner.invoke(cli, ["scan", "https://example.com"])
    assert result.exit_code == 0
    assert "https://example.com/a" in result.output


def test_scan_rejects_invalid_memory_limit(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, ["scan", "https://example.com", "--memory-limit", "huge"])
    assert result.exit_code == 1
    assert "Invalid options" in result.output
    assert StubEngine.instances == []


def test_scan_timeout(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    StubEngine.fail_with = ScanTimeoutError("Maximum wait timeout reached.")
    runner = CliRunner()
    result = runner.invoke(cli, ["scan", "https://example.com", "--scan-timeout", "1"])
    assert result.exit_code != 0
    assert "Maximum wait timeout reached." in result.output
