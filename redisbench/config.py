"""Benchmark settings.

Uses pydantic-settings. Resolution order (later wins):

    defaults  <  appsettings.json  <  environment  <  CLI overrides

The settings file uses the keys ``RedisConnection``, ``Records``, ``Flush`` and
``Seed``; the environment is matched case-sensitively against ``REDIS_URL``
and the same four keys. Unknown keys are ignored.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional
from urllib.parse import quote

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

__all__ = ["Settings", "normalize_url", "DEFAULT_SETTINGS_FILE"]

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE = "appsettings.json"

# Connection-string options that only tune the client and have no URL form.
_IGNORED_OPTIONS = frozenset({
    "abortconnect", "allowadmin", "connectretry", "connecttimeout",
    "synctimeout", "asynctimeout", "keepalive", "name",
})


def normalize_url(conn: str) -> str:
    """Turn a ``host:port[,option=value...]`` connection string into a URL.

    ``password``, ``user``, ``ssl`` and ``defaultDatabase`` are carried into
    the URL; client tuning options are dropped, anything else raises
    ``ValueError``.
    """
    conn = conn.strip()
    if "://" in conn:
        return conn
    host, *options = [part.strip() for part in conn.split(",")]
    if not host:
        raise ValueError(f"connection string {conn!r} has no host")
    scheme = "redis"
    user = password = ""
    db = ""
    for opt in options:
        if not opt:
            continue
        name, sep, value = opt.partition("=")
        key = name.strip().lower()
        value = value.strip()
        if not sep:
            raise ValueError(f"malformed option {opt!r} in connection string")
        if key == "password":
            password = value
        elif key == "user":
            user = value
        elif key == "ssl":
            if value.lower() == "true":
                scheme = "rediss"
        elif key == "defaultdatabase":
            db = f"/{int(value)}"
        elif key in _IGNORED_OPTIONS:
            logger.debug("ignoring connection option %s", name)
        else:
            raise ValueError(f"unsupported connection option {name!r}")
    auth = ""
    if user or password:
        auth = quote(user, safe="")
        if password:
            auth += ":" + quote(password, safe="")
        auth += "@"
    return f"{scheme}://{auth}{host}{db}"


class _AppSettingsSource(JsonConfigSettingsSource):
    """``appsettings.json`` reader; the file must hold a JSON object."""

    def _read_file(self, file_path: Path) -> dict[str, Any]:
        with open(file_path, encoding=self.json_file_encoding or "utf-8") as fp:
            data = json.load(fp)
        if not isinstance(data, dict):
            raise ValueError(f"{file_path}: expected a JSON object, got {type(data).__name__}")
        return data


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        json_file=DEFAULT_SETTINGS_FILE,
        case_sensitive=True,
        populate_by_name=True,
        extra="ignore",
    )

    redis_url: str = Field(
        default="redis://localhost:6379/0",
        validation_alias=AliasChoices("REDIS_URL", "RedisConnection", "redis_url"),
    )
    records: int = Field(default=300_000, ge=0, validation_alias=AliasChoices("Records", "records"))
    flush: bool = Field(default=True, validation_alias=AliasChoices("Flush", "flush"))
    seed: Optional[int] = Field(default=None, validation_alias=AliasChoices("Seed", "seed"))

    @field_validator("redis_url", mode="before")
    @classmethod
    def _normalize_url(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_url(value)
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, env_settings, _AppSettingsSource(settings_cls)

    @classmethod
    def load(cls, path: str | Path | None = None) -> "Settings":
        """Load from *path* (default ``./appsettings.json``, if present) and the environment."""
        if path is None:
            return cls()
        bound = type(cls.__name__, (cls,), {"model_config": SettingsConfigDict(json_file=Path(path))})
        return cls.model_validate(bound().model_dump())

    def override(self, **changes: Any) -> "Settings":
        """Return a copy with the non-``None`` *changes* applied and validated."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return type(self).model_validate({**self.model_dump(), **changes})
