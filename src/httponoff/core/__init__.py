from __future__ import annotations

from .adapter import HttpOnOffAdapter
from .browser import DiscoveryBrowser
from .device import Device, OnOffProperty, Property
from .host import AdapterHost, LoggingHost
from .identity import extract_suffix, host_from_url, resolve_identity, resolve_url
from .mock_device import MockOnOffLight, run_mock_device
from .registry import DeviceRegistry, normalize_url
from .transport import Fetcher, HttpFetcher

__all__ = [
    "AdapterHost",
    "Device",
    "DeviceRegistry",
    "DiscoveryBrowser",
    "Fetcher",
    "HttpFetcher",
    "HttpOnOffAdapter",
    "LoggingHost",
    "MockOnOffLight",
    "OnOffProperty",
    "Property",
    "extract_suffix",
    "host_from_url",
    "normalize_url",
    "resolve_identity",
    "resolve_url",
    "run_mock_device",
]
