from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from urllib.parse import urlsplit, urlunsplit

from pydantic import ValidationError

from httponoff.config import DiscoveryConfig
from httponoff.errors import (
    ConfigurationError,
    DuplicateRegistrationError,
    HttpOnOffError,
)
from httponoff.models import DeviceIdentity, DiscoveryRecord

from .device import Device, PropertyChangedCallback
from .identity import resolve_identity, resolve_url
from .transport import Fetcher

logger = logging.getLogger(__name__)

DeviceAddedCallback = Callable[[Device], None]


def normalize_url(url: str) -> str:
    parts = urlsplit(url.strip())
    return urlunsplit(
        (
            parts.scheme.lower(),
            parts.netloc.lower(),
            parts.path.rstrip("/"),
            parts.query,
            parts.fragment,
        )
    )


class DeviceRegistry:
    """All known devices, keyed by id and by normalized URL.

    Devices come from two sources. Configured URLs are registered in order
    and an id collision is reported as an error. Discovery records repeat
    whenever a board re-announces itself, so a record whose URL is already
    known is dropped quietly; only a new URL that resolves to a taken id is
    an error.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        on_device_added: DeviceAddedCallback | None = None,
        on_property_changed: PropertyChangedCallback | None = None,
        discovery: DiscoveryConfig | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._on_device_added = on_device_added
        self._on_property_changed = on_property_changed
        self._discovery = discovery or DiscoveryConfig()
        self._devices: dict[str, Device] = {}
        self._by_url: dict[str, Device] = {}

    def __len__(self) -> int:
        return len(self._devices)

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._devices

    def __iter__(self) -> Iterator[Device]:
        return iter(list(self._devices.values()))

    def devices(self) -> list[Device]:
        return list(self._devices.values())

    def get(self, device_id: str) -> Device | None:
        return self._devices.get(device_id)

    def find_by_url(self, url: str) -> Device | None:
        return self._by_url.get(normalize_url(url))

    def register(self, identity: DeviceIdentity) -> Device:
        existing = self._devices.get(identity.id)
        if existing is not None:
            raise DuplicateRegistrationError(identity.id, identity.url)

        device = Device.from_identity(
            identity, self._fetcher, self._on_property_changed
        )
        self._devices[device.id] = device
        self._by_url.setdefault(normalize_url(device.url), device)
        logger.info("Device %s (%s) added at %s", device.id, device.name, device.url)

        if self._on_device_added is not None:
            self._on_device_added(device)
        return device

    def add_from_config(self, urls: str | Sequence[str]) -> list[HttpOnOffError]:
        """Register each configured URL; return the errors that occurred."""
        if isinstance(urls, str):
            urls = [urls]

        errors: list[HttpOnOffError] = []
        for url in urls:
            try:
                self.register(resolve_url(url))
            except (ConfigurationError, DuplicateRegistrationError) as exc:
                logger.error("Skipping configured device %s: %s", url, exc)
                errors.append(exc)
        return errors

    def add_from_discovery(self, raw: object) -> Device | None:
        try:
            record = DiscoveryRecord.model_validate(raw)
        except ValidationError:
            logger.debug("Ignoring malformed discovery record: %r", raw)
            return None

        if not record.fullname.startswith(self._discovery.service_prefix):
            logger.debug("Ignoring service %s", record.fullname)
            return None
        host = record.host.rstrip(".")
        if not host.startswith(self._discovery.host_prefix):
            logger.debug("Ignoring host %s for %s", host, record.fullname)
            return None

        url = f"http://{host}"
        known = self.find_by_url(url)
        if known is not None:
            logger.debug("Device %s re-announced at %s", known.id, url)
            return None

        try:
            return self.register(resolve_identity(host, url=url))
        except DuplicateRegistrationError as exc:
            logger.error("Discovered device at %s not added: %s", url, exc)
            return None
