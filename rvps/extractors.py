"""Extractors that verify provenance and pull reference values out of it."""

from __future__ import annotations

import base64
import binascii
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime, timezone

from dateutil.relativedelta import relativedelta

from rvps.message import Message, RvpsError
from rvps.reference_value import REFERENCE_VALUE_VERSION, HashValuePair, ReferenceValue

logger = logging.getLogger(__name__)

DEFAULT_ALG = "sha384"
DEFAULT_EXPIRED_MONTHS = 12


class Extractor(ABC):
    """Verifies one kind of provenance and extracts its reference values."""

    @abstractmethod
    def verify_and_extract(self, provenance: str) -> list[ReferenceValue]:
        """Return the reference values held in a verified provenance."""


class SampleExtractor(Extractor):
    """Reads base64 JSON mapping artifact names to lists of digests."""

    def verify_and_extract(self, provenance: str) -> list[ReferenceValue]:
        try:
            raw = base64.b64decode(provenance, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise RvpsError(f"base64 decode: {exc}") from exc
        try:
            payload = json.loads(raw)
        except ValueError as exc:
            raise RvpsError(f"deseralize sample provenance: {exc}") from exc
        if not isinstance(payload, dict) or not all(
            isinstance(values, list) and all(isinstance(v, str) for v in values)
            for values in payload.values()
        ):
            raise RvpsError("deseralize sample provenance: expected a map of string lists")

        results = []
        for name, values in payload.items():
            now = datetime.now(timezone.utc).replace(microsecond=0)
            try:
                expired = now + relativedelta(months=DEFAULT_EXPIRED_MONTHS)
            except (OverflowError, ValueError):
                logger.warning(
                    "Expired time calculated overflowed for reference value of %s.", name
                )
                continue
            results.append(
                ReferenceValue(
                    version=REFERENCE_VALUE_VERSION,
                    name=name,
                    expired=expired,
                    hash_value=[HashValuePair(DEFAULT_ALG, value) for value in values],
                )
            )
        return results


ExtractorFactory = Callable[[], Extractor]


class ExtractorModuleList:
    """The provenance types known to the service and how to build their extractors."""

    def __init__(self) -> None:
        self._modules: dict[str, ExtractorFactory] = {"sample": SampleExtractor}

    def get_func(self, extractor_name: str) -> ExtractorFactory:
        try:
            return self._modules[extractor_name]
        except KeyError:
            raise RvpsError(
                f"RVPS Extractors does not support the given extractor: {extractor_name}!"
            ) from None


class Extractors:
    """Dispatches messages to extractors, building each one on first use."""

    def __init__(self) -> None:
        self._modules = ExtractorModuleList()
        self._instances: dict[str, Extractor] = {}

    def _instance(self, name: str) -> Extractor:
        if name not in self._instances:
            self._instances[name] = self._modules.get_func(name)()
        return self._instances[name]

    def process(self, message: Message) -> list[ReferenceValue]:
        return self._instance(message.type).verify_and_extract(message.payload)