"""Client interface used by the attestation service to reach reference values."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from rvps.core import Core
from rvps.message import DEFAULT_STORAGE_TYPE, Config, RvpsError

logger = logging.getLogger(__name__)


class RvpsApi(ABC):
    """What a reference value provider offers to its callers."""

    @abstractmethod
    def verify_and_extract(self, message: str | bytes) -> None:
        """Verify a message and register the reference values it holds."""

    @abstractmethod
    def get_digests(self, name: str) -> list[str]:
        """Return the expected digests of the named component."""


@dataclass
class RvpsConfig:
    """Settings for reaching a reference value provider.

    `remote_addr` names a remote service; the store settings apply to the
    built-in one.
    """

    remote_addr: str = ""
    store_type: str = DEFAULT_STORAGE_TYPE
    store_config: Any = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RvpsConfig:
        if not isinstance(data, dict):
            raise RvpsError("rvps config must be a map")
        config = cls(
            remote_addr=data.get("remote_addr", ""),
            store_type=data.get("store_type", DEFAULT_STORAGE_TYPE),
            store_config=data.get("store_config", {}),
        )
        for key in ("remote_addr", "store_type"):
            if not isinstance(getattr(config, key), str):
                raise RvpsError(f"invalid type for field `{key}`")
        return config

    def to_core_config(self) -> Config:
        return Config(store_type=self.store_type, store_config=self.store_config)


class BuiltinRvps(RvpsApi):
    """A reference value provider running in the same process."""

    def __init__(self, config: Config) -> None:
        self.core = Core(config)

    def verify_and_extract(self, message: str | bytes) -> None:
        self.core.verify_and_extract(message)

    def get_digests(self, name: str) -> list[str]:
        digest = self.core.get_digests(name)
        return list(digest.hash_values) if digest is not None else []


def initialize_rvps_client(config: RvpsConfig) -> RvpsApi:
    """Build the reference value provider described by `config`."""
    if config.remote_addr:
        logger.warning(
            "Remote RVPS %s is not reachable from here; launching a built-in RVPS.",
            config.remote_addr,
        )
    else:
        logger.info("launch a built-in RVPS.")
    return BuiltinRvps(config.to_core_config())