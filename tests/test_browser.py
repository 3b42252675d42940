from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest
from zeroconf import ServiceStateChange

from httponoff.config import DiscoveryConfig
from httponoff.core import DeviceRegistry
from httponoff.core import browser as browser_module

SERVICE_TYPE = "_moziot._tcp.local."
NAME = "http-on-off._moziot._tcp.local."


class FakeServiceInfo:
    resolvable = True

    def __init__(self, type_: str, name: str) -> None:
        self.type = type_
        self.name = name
        self.server = "wifi101-F714A9.local."

    async def async_request(self, zc, timeout: float) -> bool:
        return self.resolvable

    def parsed_addresses(self) -> list[str]:
        return ["192.168.1.40"]


class FakeServiceBrowser:
    def __init__(self, zc, types, handlers) -> None:
        self.types = types
        self.handlers = handlers
        self.cancelled = False

    async def async_cancel(self) -> None:
        self.cancelled = True


@pytest.fixture
def fake_zeroconf(monkeypatch):
    created: list[FakeServiceBrowser] = []

    def _browser(zc, types, handlers):
        browser = FakeServiceBrowser(zc, types, handlers)
        created.append(browser)
        return browser

    monkeypatch.setattr(browser_module, "AsyncServiceInfo", FakeServiceInfo)
    monkeypatch.setattr(browser_module, "AsyncServiceBrowser", _browser)
    return created


def test_record_from_service_info_strips_trailing_dots(fetcher):
    info = FakeServiceInfo(SERVICE_TYPE, NAME)

    record = browser_module.record_from_service_info(info, NAME)

    assert record == {
        "fullname": "http-on-off._moziot._tcp.local",
        "host": "wifi101-F714A9.local",
        "addresses": ["192.168.1.40"],
    }
    device = DeviceRegistry(fetcher).add_from_discovery(record)
    assert device is not None
    assert device.id == "http-on-off-F714A9"
    assert device.url == "http://wifi101-F714A9.local"


def _run_browser(created, state_change, resolvable=True, on_record=None):
    records: list[dict] = []
    FakeServiceInfo.resolvable = resolvable
    aiozc = SimpleNamespace(zeroconf=object())
    browser = browser_module.DiscoveryBrowser(
        DiscoveryConfig(), on_record or records.append, aiozc=aiozc
    )

    async def scenario() -> None:
        await browser.start()
        handler = created[0].handlers[0]
        handler(
            zeroconf=aiozc.zeroconf,
            service_type=SERVICE_TYPE,
            name=NAME,
            state_change=state_change,
        )
        for _ in range(5):
            await asyncio.sleep(0)
        await browser.stop()

    try:
        asyncio.run(scenario())
    finally:
        FakeServiceInfo.resolvable = True
    return records


def test_added_service_is_resolved_into_record(fake_zeroconf):
    records = _run_browser(fake_zeroconf, ServiceStateChange.Added)

    assert fake_zeroconf[0].types == [SERVICE_TYPE]
    assert fake_zeroconf[0].cancelled
    assert [record["host"] for record in records] == ["wifi101-F714A9.local"]


def test_removed_service_emits_nothing(fake_zeroconf):
    assert _run_browser(fake_zeroconf, ServiceStateChange.Removed) == []


def test_unresolvable_service_emits_nothing(fake_zeroconf):
    assert _run_browser(fake_zeroconf, ServiceStateChange.Added, resolvable=False) == []


class StoppedServiceInfo(FakeServiceInfo):
    async def async_request(self, zc, timeout: float) -> bool:
        raise RuntimeError("zeroconf not running")


def test_resolve_failure_is_logged(fake_zeroconf, monkeypatch, caplog):
    monkeypatch.setattr(browser_module, "AsyncServiceInfo", StoppedServiceInfo)

    records = _run_browser(fake_zeroconf, ServiceStateChange.Added)

    assert records == []
    errors = [r for r in caplog.records if r.levelname == "ERROR"]
    assert len(errors) == 1
    assert errors[0].name == browser_module.__name__
    assert NAME in errors[0].getMessage()
    assert "zeroconf not running" in errors[0].getMessage()


def test_record_callback_failure_is_logged(fake_zeroconf, caplog):
    def on_record(record: dict) -> None:
        raise ValueError("bad record")

    _run_browser(fake_zeroconf, ServiceStateChange.Added, on_record=on_record)

    assert "bad record" in caplog.text


def test_failed_browser_start_closes_owned_zeroconf(monkeypatch):
    closed: list[bool] = []

    class FakeAsyncZeroconf:
        zeroconf = object()

        def __init__(self, ip_version) -> None:
            pass

        async def async_close(self) -> None:
            closed.append(True)

    def _browser(zc, types, handlers):
        raise OSError("no multicast interface")

    monkeypatch.setattr(browser_module, "AsyncZeroconf", FakeAsyncZeroconf)
    monkeypatch.setattr(browser_module, "AsyncServiceBrowser", _browser)
    browser = browser_module.DiscoveryBrowser(DiscoveryConfig(), lambda record: None)

    with pytest.raises(OSError):
        asyncio.run(browser.start())

    assert closed == [True]
    assert not browser.running
