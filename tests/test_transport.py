from __future__ import annotations

import asyncio
import socket

import pytest
from aiohttp import test_utils, web

from httponoff.config import HttpConfig
from httponoff.core import HttpFetcher
from httponoff.errors import CommandTransportError


def _app(status: int) -> web.Application:
    async def handler(request: web.Request) -> web.Response:
        return web.Response(status=status, text="ok")

    app = web.Application()
    app.router.add_get("/H", handler)
    return app


def _fetch(status: int, config: HttpConfig | None = None) -> int:
    async def scenario() -> int:
        async with test_utils.TestServer(_app(status)) as server:
            fetcher = HttpFetcher(config)
            try:
                return await fetcher.fetch(f"http://{server.host}:{server.port}/H")
            finally:
                await fetcher.close()

    return asyncio.run(scenario())


def _unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_fetch_returns_status():
    assert _fetch(200) == 200


def test_any_status_counts_as_delivered_by_default():
    assert _fetch(500) == 500


def test_raise_for_status_turns_errors_into_failures():
    with pytest.raises(CommandTransportError):
        _fetch(500, HttpConfig(raise_for_status=True))


def test_connection_refused_is_a_transport_error():
    url = f"http://127.0.0.1:{_unused_port()}/H"

    async def scenario() -> int:
        fetcher = HttpFetcher(HttpConfig(timeout=2.0))
        try:
            return await fetcher.fetch(url)
        finally:
            await fetcher.close()

    with pytest.raises(CommandTransportError) as excinfo:
        asyncio.run(scenario())
    assert excinfo.value.url == url
