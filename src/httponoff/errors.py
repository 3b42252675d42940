"""Exception types raised by httponoff."""

from __future__ import annotations


class HttpOnOffError(Exception):
    """Base class for all httponoff errors."""


class ConfigurationError(HttpOnOffError):
    """No usable device URL was found in the configuration."""


class DuplicateRegistrationError(HttpOnOffError):
    def __init__(self, device_id: str, url: str) -> None:
        super().__init__(f"Device '{device_id}' already registered (url: {url})")
        self.device_id = device_id
        self.url = url


class DeviceNotFoundError(HttpOnOffError):
    def __init__(self, device_id: str) -> None:
        super().__init__(f"Unknown device '{device_id}'")
        self.device_id = device_id


class CommandTransportError(HttpOnOffError):
    """An HTTP command could not be delivered to a device."""

    def __init__(self, url: str, cause: BaseException | str) -> None:
        super().__init__(f"Request to {url} failed: {cause}")
        self.url = url
        self.cause = cause


class DiscoveryUnavailableError(HttpOnOffError):
    """The mDNS browser could not be started."""

    def __init__(self, cause: BaseException | str) -> None:
        super().__init__(f"Discovery not started: {cause}")
        self.cause = cause
