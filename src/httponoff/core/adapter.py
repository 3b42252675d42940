from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol

from httponoff.config import DiscoveryConfig, Settings
from httponoff.errors import (
    ConfigurationError,
    DeviceNotFoundError,
    DiscoveryUnavailableError,
    HttpOnOffError,
)

from .browser import DiscoveryBrowser, RecordCallback
from .device import Device
from .host import AdapterHost
from .registry import DeviceRegistry
from .transport import Fetcher, HttpFetcher

logger = logging.getLogger(__name__)

ADAPTER_NAME = "HttpOnOffAdapter"


class Browser(Protocol):
    async def start(self) -> None: ...

    async def stop(self) -> None: ...


BrowserFactory = Callable[[DiscoveryConfig, RecordCallback], Browser]


class HttpOnOffAdapter:
    """Connect configured and discovered HTTP lights to a host.

    ``start`` registers the configured URLs and, when discovery is enabled,
    starts browsing. ``stop`` ends discovery; commands already in flight are
    left to finish or fail on their own.
    """

    name = ADAPTER_NAME

    def __init__(
        self,
        host: AdapterHost,
        settings: Settings | None = None,
        fetcher: Fetcher | None = None,
        browser_factory: BrowserFactory | None = None,
    ) -> None:
        self.host = host
        self.settings = settings or Settings()
        self._own_fetcher: HttpFetcher | None = None
        if fetcher is None:
            fetcher = self._own_fetcher = HttpFetcher(self.settings.http)
        self._browser_factory = browser_factory or DiscoveryBrowser
        self._browser: Browser | None = None
        self._running = False
        self.errors: list[HttpOnOffError] = []
        self.registry = DeviceRegistry(
            fetcher,
            on_device_added=self._device_added,
            on_property_changed=self.host.notify_property_changed,
            discovery=self.settings.discovery,
        )

    @property
    def running(self) -> bool:
        return self._running

    def _device_added(self, device: Device) -> None:
        self.host.notify_device_added(device.describe())

    async def start(self) -> None:
        if self._running:
            return
        self.host.register_adapter(self)
        self._running = True

        urls = self.settings.adapter.urls
        if urls:
            self.errors.extend(self.registry.add_from_config(urls))
        else:
            error = ConfigurationError("No URL specified in config")
            logger.error("%s", error)
            self.errors.append(error)

        if self.settings.discovery.enabled:
            browser = self._browser_factory(
                self.settings.discovery, self.handle_discovery
            )
            try:
                await browser.start()
            except OSError as exc:
                unavailable = DiscoveryUnavailableError(exc)
                logger.error("%s", unavailable)
                self.errors.append(unavailable)
            else:
                self._browser = browser

    async def stop(self) -> None:
        self._running = False
        browser, self._browser = self._browser, None
        if browser is not None:
            await browser.stop()
        if self._own_fetcher is not None:
            await self._own_fetcher.close()

    async def __aenter__(self) -> HttpOnOffAdapter:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.stop()

    def handle_discovery(self, record: Any) -> None:
        if not self._running:
            return
        self.registry.add_from_discovery(record)

    async def set_property(self, device_id: str, name: str, value: bool) -> bool:
        device = self.registry.get(device_id)
        if device is None or name not in device.properties:
            raise DeviceNotFoundError(device_id)
        return await device.properties[name].set_value(value)
