from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, StrictStr, field_validator


class DeviceIdentity(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    id: str
    name: str
    url: str


class DiscoveryRecord(BaseModel):
    """One service announcement as delivered by the service browser.

    Only ``fullname`` and ``host`` are checked; ``addresses`` is informational
    and anything other than a list keeps the record with no addresses.
    """

    model_config = {"frozen": True, "extra": "ignore"}

    fullname: StrictStr
    host: StrictStr
    addresses: list[str] = Field(default_factory=list)

    @field_validator("addresses", mode="before")
    @classmethod
    def _keep_string_addresses(cls, value: Any) -> list[str]:
        if not isinstance(value, (list, tuple)):
            return []
        return [item for item in value if isinstance(item, str)]


class PropertyDescription(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    name: str
    type: str
    value: bool


class DeviceDescription(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    id: str
    name: str
    type: str
    description: str
    url: str
    properties: dict[str, PropertyDescription] = Field(default_factory=dict)


class PropertyChange(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    device_id: str
    name: str
    value: bool
