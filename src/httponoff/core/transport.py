from __future__ import annotations

import asyncio
import logging
from typing import Protocol

import aiohttp

from httponoff.config import HttpConfig
from httponoff.errors import CommandTransportError

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    async def fetch(self, url: str) -> int: ...


class HttpFetcher:
    """Issue plain ``GET`` requests with aiohttp.

    The response body is ignored. Unless ``raise_for_status`` is set, any
    status the device answers with counts as delivered.
    """

    def __init__(
        self,
        config: HttpConfig | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config or HttpConfig()
        self._session = session
        self._owns_session = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._config.timeout)
            )
            self._owns_session = True
        return self._session

    async def fetch(self, url: str) -> int:
        logger.debug("GET %s", url)
        session = self._get_session()
        try:
            async with session.get(url) as response:
                if self._config.raise_for_status:
                    response.raise_for_status()
                return response.status
        except (asyncio.TimeoutError, TimeoutError) as exc:
            raise CommandTransportError(url, "timeout") from exc
        except aiohttp.ClientError as exc:
            raise CommandTransportError(url, exc) from exc

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
        self._session = None
