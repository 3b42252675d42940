from __future__ import annotations

import pytest
from typer.testing import CliRunner

from httponoff import __version__
from httponoff.cli import app
from httponoff.config import AdapterConfig, DiscoveryConfig, Settings, write_settings
from httponoff.core import adapter as adapter_module
from httponoff.errors import CommandTransportError

runner = CliRunner()


class RecordingFetcher:
    urls: list[str] = []
    fail = False

    def __init__(self, config=None) -> None:
        self.config = config

    async def fetch(self, url: str) -> int:
        RecordingFetcher.urls.append(url)
        if RecordingFetcher.fail:
            raise CommandTransportError(url, "connection refused")
        return 200

    async def close(self) -> None:
        return None


@pytest.fixture
def configured(tmp_path, monkeypatch):
    def _write(url) -> None:
        path = tmp_path / "config.toml"
        write_settings(
            Settings(
                adapter=AdapterConfig(url=url),
                discovery=DiscoveryConfig(enabled=False),
            ),
            path,
        )
        monkeypatch.setenv("HTTPONOFF_CONFIG", str(path))

    return _write


@pytest.fixture
def recording_fetcher(monkeypatch):
    RecordingFetcher.urls = []
    RecordingFetcher.fail = False
    monkeypatch.setattr(adapter_module, "HttpFetcher", RecordingFetcher)
    return RecordingFetcher


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"httponoff version {__version__}" in result.stdout


def test_config_show_defaults():
    result = runner.invoke(app, ["config", "show"])
    assert result.exit_code == 0
    assert "Config source: defaults" in result.stdout
    assert "[discovery]" in result.stdout


def test_config_init_writes_file(tmp_path, monkeypatch):
    path = tmp_path / "new" / "config.toml"
    monkeypatch.setenv("HTTPONOFF_CONFIG", str(path))

    result = runner.invoke(app, ["config", "init"])
    assert result.exit_code == 0
    assert path.exists()

    again = runner.invoke(app, ["config", "init"])
    assert "already exists" in again.stdout


def test_devices_lists_configured_urls(configured):
    configured(["http://wifi101-F714A9.local", "http://192.168.1.50"])

    result = runner.invoke(app, ["devices"])
    assert result.exit_code == 0
    assert "http-on-off-F714A9" in result.stdout
    assert "LED-F714A9" in result.stdout


def test_devices_reports_duplicates(configured):
    configured(["http://192.168.1.50", "http://192.168.1.51"])

    result = runner.invoke(app, ["devices"])
    assert result.exit_code == 1
    assert "already registered" in result.stdout


def test_devices_without_urls():
    result = runner.invoke(app, ["devices"])
    assert result.exit_code == 0
    assert "No device URLs configured." in result.stdout


def test_set_turns_light_on(configured, recording_fetcher):
    configured("http://wifi101-F714A9.local")

    result = runner.invoke(app, ["set", "http-on-off-F714A9", "on"])
    assert result.exit_code == 0
    assert "http-on-off-F714A9 is on" in result.stdout
    assert recording_fetcher.urls == ["http://wifi101-F714A9.local/H"]


def test_set_unknown_device(configured, recording_fetcher):
    configured("http://wifi101-F714A9.local")

    result = runner.invoke(app, ["set", "http-on-off-000000", "off"])
    assert result.exit_code == 1
    assert "Unknown device" in result.stdout
    assert recording_fetcher.urls == []


def test_set_failure_exits_nonzero(configured, recording_fetcher):
    configured("http://wifi101-F714A9.local")
    recording_fetcher.fail = True

    result = runner.invoke(app, ["set", "http-on-off-F714A9", "off"])
    assert result.exit_code == 1
    assert "failed" in result.stdout
    assert recording_fetcher.urls == ["http://wifi101-F714A9.local/L"]


def test_set_rejects_unknown_state(configured, recording_fetcher):
    configured("http://wifi101-F714A9.local")

    result = runner.invoke(app, ["set", "http-on-off-F714A9", "dim"])
    assert result.exit_code == 2
    assert recording_fetcher.urls == []


def test_info_shows_configured_urls(configured):
    configured("http://wifi101-F714A9.local")

    result = runner.invoke(app, ["info"])
    assert result.exit_code == 0
    assert "http://wifi101-F714A9.local" in result.stdout
    assert "Enabled: False" in result.stdout


def test_discover_lists_announced_devices(monkeypatch, recording_fetcher):
    class AnnouncingBrowser:
        def __init__(self, config, on_record) -> None:
            self.on_record = on_record

        async def start(self) -> None:
            self.on_record(
                {
                    "fullname": "http-on-off._moziot._tcp.local",
                    "host": "wifi101-F714A9.local",
                }
            )

        async def stop(self) -> None:
            return None

    monkeypatch.setattr(adapter_module, "DiscoveryBrowser", AnnouncingBrowser)

    result = runner.invoke(app, ["discover", "--timeout", "0.01"])
    assert result.exit_code == 0
    assert "http-on-off-F714A9" in result.stdout
    assert "Found 1 device(s)" in result.stdout
