from __future__ import annotations

import asyncio
import logging
import socket
from dataclasses import dataclass, field

from aiohttp import web
from zeroconf import IPVersion, ServiceInfo
from zeroconf.asyncio import AsyncZeroconf

logger = logging.getLogger(__name__)

SERVICE_TYPE = "_moziot._tcp.local."
SERVICE_NAME = "http-on-off"


def _local_ip() -> str:
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            return str(sock.getsockname()[0])
    except OSError:
        return "127.0.0.1"


@dataclass
class MockOnOffLight:
    """Stand-in for a wifi101 light: ``GET /H`` on, ``GET /L`` off."""

    name: str = "wifi101-F714A9"
    port: int = 8080
    host: str = "0.0.0.0"
    announce: bool = True

    state: bool = False
    requests: list[str] = field(default_factory=list)

    _runner: web.AppRunner | None = field(default=None, repr=False)
    _aiozc: AsyncZeroconf | None = field(default=None, repr=False)
    _service: ServiceInfo | None = field(default=None, repr=False)

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/H", self._handle_on)
        app.router.add_get("/L", self._handle_off)
        app.router.add_get("/", self._handle_state)
        return app

    async def _handle_on(self, request: web.Request) -> web.Response:
        return self._switch(True, request)

    async def _handle_off(self, request: web.Request) -> web.Response:
        return self._switch(False, request)

    async def _handle_state(self, request: web.Request) -> web.Response:
        return web.Response(text="ON" if self.state else "OFF")

    def _switch(self, value: bool, request: web.Request) -> web.Response:
        self.requests.append(request.path)
        self.state = value
        logger.info("Mock light '%s' turned %s", self.name, "ON" if value else "OFF")
        return web.Response(text="ON" if value else "OFF")

    def service_info(self, address: str) -> ServiceInfo:
        return ServiceInfo(
            SERVICE_TYPE,
            f"{SERVICE_NAME}.{SERVICE_TYPE}",
            addresses=[socket.inet_aton(address)],
            port=self.port,
            server=f"{self.name}.local.",
        )

    async def start(self) -> None:
        self._runner = web.AppRunner(self.make_app())
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()
        logger.info("Mock light '%s' listening on port %d", self.name, self.port)

        if self.announce:
            self._aiozc = AsyncZeroconf(ip_version=IPVersion.V4Only)
            self._service = self.service_info(_local_ip())
            await self._aiozc.async_register_service(
                self._service, allow_name_change=True
            )
            logger.info("Announced %s as %s", self._service.name, self.name)

    async def stop(self) -> None:
        if self._aiozc is not None:
            if self._service is not None:
                await self._aiozc.async_unregister_service(self._service)
            await self._aiozc.async_close()
            self._aiozc = None
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
            logger.info("Mock light '%s' stopped", self.name)

    async def run_forever(self) -> None:
        await self.start()
        try:
            await asyncio.Event().wait()
        finally:
            await self.stop()


async def run_mock_device(
    name: str = "wifi101-F714A9", port: int = 8080, announce: bool = True
) -> None:
    device = MockOnOffLight(name=name, port=port, announce=announce)
    await device.run_forever()
