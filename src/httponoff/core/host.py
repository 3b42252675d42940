from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from httponoff.models import DeviceDescription, PropertyChange

if TYPE_CHECKING:
    from .adapter import HttpOnOffAdapter

logger = logging.getLogger(__name__)


class AdapterHost(Protocol):
    """Capabilities the surrounding framework provides to an adapter."""

    def register_adapter(self, adapter: HttpOnOffAdapter) -> None: ...

    def notify_device_added(self, device: DeviceDescription) -> None: ...

    def notify_property_changed(self, change: PropertyChange) -> None: ...


class LoggingHost:
    """Host that keeps the latest device descriptions and logs every event."""

    def __init__(self) -> None:
        self.adapters: list[HttpOnOffAdapter] = []
        self.devices: dict[str, DeviceDescription] = {}
        self.changes: list[PropertyChange] = []

    def register_adapter(self, adapter: HttpOnOffAdapter) -> None:
        self.adapters.append(adapter)
        logger.debug("Adapter %s registered", adapter.name)

    def notify_device_added(self, device: DeviceDescription) -> None:
        self.devices[device.id] = device
        logger.info("New device: %s (%s) at %s", device.id, device.name, device.url)

    def notify_property_changed(self, change: PropertyChange) -> None:
        self.changes.append(change)
        logger.info("%s.%s -> %s", change.device_id, change.name, change.value)
