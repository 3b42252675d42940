from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from zeroconf import IPVersion, ServiceInfo, ServiceStateChange, Zeroconf
from zeroconf.asyncio import AsyncServiceBrowser, AsyncServiceInfo, AsyncZeroconf

from httponoff.config import DiscoveryConfig

logger = logging.getLogger(__name__)

RecordCallback = Callable[[dict[str, Any]], None]


def record_from_service_info(info: ServiceInfo, name: str) -> dict[str, Any]:
    """Turn a resolved service into a discovery record."""
    host = (info.server or "").rstrip(".")
    return {
        "fullname": name.rstrip("."),
        "host": host,
        "addresses": info.parsed_addresses(),
    }


class DiscoveryBrowser:
    """Browse one mDNS service type and emit a record per resolved service.

    Records are delivered on the event loop that called :meth:`start`.
    Announcements repeat, so the callback sees the same service many times.
    """

    def __init__(
        self,
        config: DiscoveryConfig,
        on_record: RecordCallback,
        aiozc: AsyncZeroconf | None = None,
    ) -> None:
        self._config = config
        self._on_record = on_record
        self._aiozc = aiozc
        self._owns_zeroconf = aiozc is None
        self._browser: AsyncServiceBrowser | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def running(self) -> bool:
        return self._browser is not None

    async def start(self) -> None:
        if self._browser is not None:
            return
        self._loop = asyncio.get_running_loop()
        if self._aiozc is None:
            self._aiozc = AsyncZeroconf(ip_version=IPVersion.V4Only)
        logger.debug("Browsing for %s", self._config.service_type)
        try:
            self._browser = AsyncServiceBrowser(
                self._aiozc.zeroconf,
                [self._config.service_type],
                handlers=[self._on_service_state_change],
            )
        except Exception:
            if self._owns_zeroconf:
                await self._aiozc.async_close()
                self._aiozc = None
            raise

    async def stop(self) -> None:
        browser, self._browser = self._browser, None
        for task in list(self._pending):
            task.cancel()
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        self._pending.clear()

        if browser is not None:
            await browser.async_cancel()
        if self._owns_zeroconf and self._aiozc is not None:
            await self._aiozc.async_close()
            self._aiozc = None

    def _on_service_state_change(
        self,
        zeroconf: Zeroconf,
        service_type: str,
        name: str,
        state_change: ServiceStateChange,
    ) -> None:
        if state_change not in (ServiceStateChange.Added, ServiceStateChange.Updated):
            return
        if self._loop is None or self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._schedule_resolve, service_type, name)

    def _schedule_resolve(self, service_type: str, name: str) -> None:
        if self._browser is None:
            return
        task = asyncio.create_task(self.resolve(service_type, name), name=name)
        self._pending.add(task)
        task.add_done_callback(self._resolve_done)

    def _resolve_done(self, task: asyncio.Task[None]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Resolving %s failed: %r", task.get_name(), exc)

    async def resolve(self, service_type: str, name: str) -> None:
        if self._aiozc is None:
            return
        info = AsyncServiceInfo(service_type, name)
        timeout_ms = int(self._config.resolve_timeout * 1000)
        if not await info.async_request(self._aiozc.zeroconf, timeout_ms):
            logger.debug("Could not resolve %s", name)
            return
        record = record_from_service_info(info, name)
        logger.debug("Resolved %s -> %s", name, record["host"])
        self._on_record(record)
