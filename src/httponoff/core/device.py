from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from httponoff.errors import CommandTransportError
from httponoff.models import (
    DeviceDescription,
    DeviceIdentity,
    PropertyChange,
    PropertyDescription,
)

from .transport import Fetcher

logger = logging.getLogger(__name__)

DEVICE_TYPE = "onOffLight"
DEVICE_DESCRIPTION = "Simple HTTP OnOff Light"

ON_PATH = "/H"
OFF_PATH = "/L"

PropertyChangedCallback = Callable[[PropertyChange], None]


class Property(Protocol):
    name: str

    @property
    def value(self) -> bool: ...

    async def set_value(self, value: bool) -> bool: ...

    def describe(self) -> PropertyDescription: ...


class OnOffProperty:
    """The ``on`` state of an HTTP light.

    ``value`` starts out ``False``; the device is never queried. A command
    updates the cached value only after the request completes, and the
    stored value is the one that was requested: the HTTP exchange carries no
    confirmation of the light's physical state.

    Calls to :meth:`set_value` are not serialized. When two commands overlap,
    whichever request finishes last decides the cached value.
    """

    def __init__(
        self,
        device_id: str,
        url: str,
        fetcher: Fetcher,
        on_change: PropertyChangedCallback | None = None,
        name: str = "on",
    ) -> None:
        self.name = name
        self._device_id = device_id
        self._url = url
        self._fetcher = fetcher
        self._on_change = on_change
        self._value = False

    @property
    def value(self) -> bool:
        return self._value

    def command_url(self, value: bool) -> str:
        return self._url + (ON_PATH if value else OFF_PATH)

    async def set_value(self, value: bool) -> bool:
        value = bool(value)
        url = self.command_url(value)
        try:
            await self._fetcher.fetch(url)
        except CommandTransportError as exc:
            logger.error("Request to %s failed: %s", url, exc.cause)
            raise

        self._value = value
        logger.info("Property %s of %s set to %s", self.name, self._device_id, value)
        if self._on_change is not None:
            self._on_change(
                PropertyChange(device_id=self._device_id, name=self.name, value=value)
            )
        return value

    def describe(self) -> PropertyDescription:
        return PropertyDescription(name=self.name, type="boolean", value=self._value)


@dataclass(frozen=True)
class Device:
    id: str
    name: str
    url: str
    type: str = DEVICE_TYPE
    description: str = DEVICE_DESCRIPTION
    properties: dict[str, Property] = field(default_factory=dict)

    @classmethod
    def from_identity(
        cls,
        identity: DeviceIdentity,
        fetcher: Fetcher,
        on_change: PropertyChangedCallback | None = None,
    ) -> Device:
        device = cls(id=identity.id, name=identity.name, url=identity.url)
        device.properties["on"] = OnOffProperty(
            identity.id, identity.url, fetcher, on_change
        )
        return device

    def describe(self) -> DeviceDescription:
        return DeviceDescription(
            id=self.id,
            name=self.name,
            type=self.type,
            description=self.description,
            url=self.url,
            properties={
                name: prop.describe() for name, prop in self.properties.items()
            },
        )
