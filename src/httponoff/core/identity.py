"""Derive stable device identities from network host names.

Boards announce themselves as ``<prefix>-<suffix>.<domain>``, for example
``wifi101-F714A9.local``. The middle segment is unique per board, so it is
appended to the base id and name to tell devices apart. Any other host
shape (bare IP addresses, plain names, deeper domains) gets no suffix.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from httponoff.errors import ConfigurationError
from httponoff.models import DeviceIdentity

BASE_ID = "http-on-off"
BASE_NAME = "LED"

_HOST_DELIMITERS = re.compile(r"[-.]")


def extract_suffix(host: str) -> str:
    segments = _HOST_DELIMITERS.split(host)
    if len(segments) == 3:
        return segments[1]
    return ""


def host_from_url(url: str) -> str:
    """Return the host part of ``url`` with its original case."""
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as exc:
        raise ConfigurationError(f"Invalid device URL: {url!r}") from exc

    host = parts.netloc.rpartition("@")[2]
    if port is not None:
        host = host.rsplit(":", 1)[0]
    host = host.strip("[]")
    if not host:
        raise ConfigurationError(f"Device URL has no host: {url!r}")
    return host


def resolve_identity(
    host: str,
    url: str | None = None,
    base_id: str = BASE_ID,
    base_name: str = BASE_NAME,
) -> DeviceIdentity:
    suffix = extract_suffix(host)
    if suffix:
        device_id = f"{base_id}-{suffix}"
        name = f"{base_name}-{suffix}"
    else:
        device_id = base_id
        name = base_name
    return DeviceIdentity(id=device_id, name=name, url=url or f"http://{host}")


def resolve_url(url: str) -> DeviceIdentity:
    return resolve_identity(host_from_url(url), url=url)
