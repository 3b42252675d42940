"""Data models for httponoff."""

from httponoff.models.devices import (
    DeviceDescription,
    DeviceIdentity,
    DiscoveryRecord,
    PropertyChange,
    PropertyDescription,
)

__all__ = [
    "DeviceDescription",
    "DeviceIdentity",
    "DiscoveryRecord",
    "PropertyChange",
    "PropertyDescription",
]
