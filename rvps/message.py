"""The message packet the service receives, its configuration and its error type."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

MESSAGE_VERSION = "0.1.0"
DEFAULT_STORAGE_TYPE = "LocalFs"


class RvpsError(Exception):
    """Raised when the reference value provider service cannot do what was asked."""


@dataclass
class Message:
    """A provenance payload, its provenance type and the message format version."""

    payload: str
    type: str
    version: str = MESSAGE_VERSION

    @classmethod
    def from_json(cls, text: str | bytes) -> Message:
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise RvpsError(f"parse message: {exc}") from exc
        if not isinstance(data, dict):
            raise RvpsError("parse message: message must be a map")
        values: dict[str, str] = {}
        for key in ("payload", "type"):
            if key not in data:
                raise RvpsError(f"parse message: missing field `{key}`")
            values[key] = data[key]
        values["version"] = data.get("version", MESSAGE_VERSION)
        for key, value in values.items():
            if not isinstance(value, str):
                raise RvpsError(f"parse message: invalid type for field `{key}`")
        return cls(**values)


@dataclass
class Config:
    """Which store the service keeps reference values in, and that store's settings."""

    store_type: str = DEFAULT_STORAGE_TYPE
    store_config: Any = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        if not isinstance(data, dict):
            raise RvpsError("config must be a map")
        for key in ("store_type", "store_config"):
            if key not in data:
                raise RvpsError(f"missing field `{key}`")
        if not isinstance(data["store_type"], str):
            raise RvpsError("invalid type for field `store_type`")
        return cls(store_type=data["store_type"], store_config=data["store_config"])