"""httponoff - discover and control simple HTTP on/off lights."""

from __future__ import annotations

from importlib.metadata import version

from .config import AdapterConfig, DiscoveryConfig, HttpConfig, Settings, get_settings
from .core import Device, DeviceRegistry, HttpOnOffAdapter, OnOffProperty
from .errors import (
    CommandTransportError,
    ConfigurationError,
    DeviceNotFoundError,
    DiscoveryUnavailableError,
    DuplicateRegistrationError,
    HttpOnOffError,
)

__all__ = [
    "AdapterConfig",
    "CommandTransportError",
    "ConfigurationError",
    "Device",
    "DeviceNotFoundError",
    "DeviceRegistry",
    "DiscoveryConfig",
    "DiscoveryUnavailableError",
    "DuplicateRegistrationError",
    "HttpConfig",
    "HttpOnOffAdapter",
    "HttpOnOffError",
    "OnOffProperty",
    "Settings",
    "__version__",
    "get_settings",
]

__version__ = version("httponoff")
