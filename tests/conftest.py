from __future__ import annotations

import pytest

from httponoff.config import get_settings
from httponoff.core import LoggingHost
from httponoff.errors import CommandTransportError


class FakeFetcher:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.urls: list[str] = []

    async def fetch(self, url: str) -> int:
        self.urls.append(url)
        if self.fail:
            raise CommandTransportError(url, "connection refused")
        return 200


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    monkeypatch.delenv("HTTPONOFF_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def failing_fetcher() -> FakeFetcher:
    return FakeFetcher(fail=True)


@pytest.fixture
def host() -> LoggingHost:
    return LoggingHost()
