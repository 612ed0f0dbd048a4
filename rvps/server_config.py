"""Configuration file of the standalone service: listen address and store settings."""

from __future__ import annotations

import json
import tomllib
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rvps.message import DEFAULT_STORAGE_TYPE, Config, RvpsError

DEFAULT_ADDR = "127.0.0.1:50003"

_LOADERS: dict[str, Callable[[str], Any]] = {
    "json": json.loads,
    "toml": tomllib.loads,
}


def _locate(config_path: str) -> Path:
    path = Path(config_path)
    if path.is_file():
        return path
    for extension in _LOADERS:
        candidate = path.with_name(f"{path.name}.{extension}")
        if candidate.is_file():
            return candidate
    raise RvpsError(f'configuration file "{config_path}" not found')


def _read(path: Path) -> Any:
    loader = _LOADERS.get(path.suffix.lstrip(".").lower())
    if loader is None:
        raise RvpsError(f'configuration file "{path}" is of an unsupported format')
    try:
        return loader(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise RvpsError(f"read configuration file {path}: {exc}") from exc


@dataclass
class ServerConfig:
    """Where the service listens and which store it keeps reference values in."""

    address: str = DEFAULT_ADDR
    store_type: str = DEFAULT_STORAGE_TYPE
    store_config: Any = field(default_factory=dict)

    @classmethod
    def from_file(cls, config_path: str) -> ServerConfig:
        """Load a JSON or TOML file; the extension may be left off the path."""
        data = _read(_locate(config_path))
        if not isinstance(data, dict):
            raise RvpsError("invalid config: expected a map")
        for key in ("address", "store_type", "store_config"):
            if key not in data:
                raise RvpsError(f"invalid config: missing field `{key}`")
        for key in ("address", "store_type"):
            if not isinstance(data[key], str):
                raise RvpsError(f"invalid config: invalid type for field `{key}`")
        return cls(
            address=data["address"],
            store_type=data["store_type"],
            store_config=data["store_config"],
        )

    def to_core_config(self) -> Config:
        return Config(store_type=self.store_type, store_config=self.store_config)