from __future__ import annotations

import json
import os
import tomllib
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from .paths import default_config_path, expand_path

CONFIG_ENV_VAR = "HTTPONOFF_CONFIG"


class AdapterConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    url: str | list[str] | None = None

    @field_validator("url")
    @classmethod
    def _strip_trailing_slash(
        cls, value: str | list[str] | None
    ) -> str | list[str] | None:
        if isinstance(value, str):
            return value.strip().rstrip("/")
        if isinstance(value, list):
            return [item.strip().rstrip("/") for item in value]
        return value

    @property
    def urls(self) -> list[str]:
        """Configured URLs as a list, with empty entries dropped."""
        if self.url is None:
            return []
        values = [self.url] if isinstance(self.url, str) else self.url
        return [value for value in values if value]


class DiscoveryConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    enabled: bool = True
    service_type: str = "_moziot._tcp.local."
    service_prefix: str = "http-on-off._moziot._tcp"
    host_prefix: str = "wifi101-"
    browse_timeout: float = Field(default=5.0, gt=0)
    resolve_timeout: float = Field(default=3.0, gt=0)


class HttpConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    timeout: float | None = Field(default=10.0, gt=0)
    raise_for_status: bool = False


class Settings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    adapter: AdapterConfig = Field(default_factory=AdapterConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)


def resolve_config_path(allow_missing: bool = False) -> tuple[Path, bool]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = expand_path(env_path)
        if not allow_missing and not path.exists():
            raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to missing file: {path}")
        return path, path.exists()

    path = default_config_path()
    return path, path.exists()


def load_settings(path: Path) -> Settings:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in config file: {path}\n{exc}") from exc

    try:
        return Settings.model_validate(data or {})
    except ValidationError as exc:
        raise ValueError(f"Invalid config file: {path}\n{exc}") from exc


@lru_cache
def get_settings() -> Settings:
    path, exists = resolve_config_path(allow_missing=False)
    if exists:
        return load_settings(path)
    return Settings()


def _toml_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return json.dumps(value)


def render_settings_toml(settings: Settings) -> str:
    lines = [
        "# httponoff configuration",
        "",
        "[adapter]",
    ]
    if settings.adapter.url is None:
        lines.append('# url = ["http://192.168.1.50"]')
    else:
        lines.append(f"url = {_toml_value(settings.adapter.url)}")

    discovery = settings.discovery
    lines += [
        "",
        "[discovery]",
        f"enabled = {_toml_value(discovery.enabled)}",
        f"service_type = {_toml_value(discovery.service_type)}",
        f"service_prefix = {_toml_value(discovery.service_prefix)}",
        f"host_prefix = {_toml_value(discovery.host_prefix)}",
        f"browse_timeout = {discovery.browse_timeout}",
        f"resolve_timeout = {discovery.resolve_timeout}",
        "",
        "[http]",
    ]
    if settings.http.timeout is not None:
        lines.append(f"timeout = {settings.http.timeout}")
    lines += [
        f"raise_for_status = {_toml_value(settings.http.raise_for_status)}",
        "",
    ]
    return "\n".join(lines)


def write_settings(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_settings_toml(settings))
