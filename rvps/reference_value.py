"""Reference values stored by the service and the digests it hands out."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from rvps.message import RvpsError

REFERENCE_VALUE_VERSION = "0.1.0"

_EXPIRED_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


def _normalise(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).replace(microsecond=0)


def _format_expired(moment: datetime) -> str:
    return _normalise(moment).replace(tzinfo=None).isoformat() + "Z"


def _parse_expired(raw: Any) -> datetime:
    if raw is None:
        raise RvpsError("invalid length 0, expected <TIME>")
    if not isinstance(raw, str):
        raise RvpsError(f"invalid type for expired time: {raw!r}")
    try:
        parsed = datetime.strptime(raw, _EXPIRED_FORMAT)
    except ValueError as exc:
        raise RvpsError(str(exc)) from exc
    return parsed.replace(tzinfo=timezone.utc)


def _require(data: dict[str, Any], key: str, kind: type) -> Any:
    if key not in data:
        raise RvpsError(f"missing field `{key}`")
    value = data[key]
    if not isinstance(value, kind):
        raise RvpsError(f"invalid type for field `{key}`: {value!r}")
    return value


@dataclass
class HashValuePair:
    """A hash algorithm name and an artifact's digest under that algorithm."""

    alg: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"alg": self.alg, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HashValuePair:
        if not isinstance(data, dict):
            raise RvpsError("hash value pair must be a map")
        return cls(alg=_require(data, "alg", str), value=_require(data, "value", str))


@dataclass
class ReferenceValue:
    """A reference value for one artifact; `expired` is kept at whole seconds in UTC."""

    version: str = REFERENCE_VALUE_VERSION
    name: str = ""
    expired: datetime = field(default_factory=_now)
    hash_value: list[HashValuePair] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.expired = _normalise(self.expired)

    def add_hash_value(self, alg: str, value: str) -> ReferenceValue:
        """Append a digest and return this value, so calls can be chained."""
        self.hash_value.append(HashValuePair(alg, value))
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "name": self.name,
            "expired": _format_expired(self.expired),
            "hash-value": [pair.to_dict() for pair in self.hash_value],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReferenceValue:
        if not isinstance(data, dict):
            raise RvpsError("reference value must be a map")
        version = data.get("version", REFERENCE_VALUE_VERSION)
        if not isinstance(version, str):
            raise RvpsError(f"invalid type for field `version`: {version!r}")
        if "expired" not in data:
            raise RvpsError("missing field `expired`")
        return cls(
            version=version,
            name=_require(data, "name", str),
            expired=_parse_expired(data["expired"]),
            hash_value=[
                HashValuePair.from_dict(item)
                for item in _require(data, "hash-value", list)
            ],
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str | bytes) -> ReferenceValue:
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise RvpsError(f"parse reference value: {exc}") from exc
        return cls.from_dict(data)


@dataclass
class TrustedDigest:
    """The digests of an artifact that the service vouches for."""

    name: str = ""
    hash_values: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "hash_values": list(self.hash_values)}