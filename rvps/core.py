"""The reference value provider service itself, without any transport."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from rvps.extractors import Extractors
from rvps.message import MESSAGE_VERSION, Config, Message, RvpsError
from rvps.pre_processor import PreProcessor, Ware
from rvps.reference_value import TrustedDigest
from rvps.store import Store, StoreType

logger = logging.getLogger(__name__)

# Wares that can be added by name. None are shipped yet.
_KNOWN_WARES: dict[str, Callable[[], Ware]] = {}


class Core:
    """Verifies provenance messages, stores their reference values and serves digests."""

    def __init__(self, config: Config | None = None) -> None:
        config = config if config is not None else Config()
        try:
            store_type = StoreType(config.store_type)
        except ValueError:
            raise RvpsError(
                f"Matching variant not found for store type {config.store_type}"
            ) from None
        self.pre_processor = PreProcessor()
        self.extractors = Extractors()
        self.store: Store = store_type.to_store(config.store_config)

    def with_ware(self, ware: str | Ware) -> Core:
        """Add a ware to the pre-processor, given as an instance or a known name.

        Names that match no known ware are ignored with a warning.
        """
        if isinstance(ware, Ware):
            self.pre_processor.add_ware(ware)
            return self
        factory = _KNOWN_WARES.get(ware)
        if factory is None:
            logger.warning("Ware %s is not available, ignored.", ware)
        else:
            self.pre_processor.add_ware(factory())
        return self

    def verify_and_extract(self, message: str | bytes) -> None:
        parsed = Message.from_json(message)
        if parsed.version != MESSAGE_VERSION:
            raise RvpsError(
                f"Version unmatched! Need {MESSAGE_VERSION}, given {parsed.version}."
            )
        self.pre_processor.process(parsed)
        for rv in self.extractors.process(parsed):
            old = self.store.set(rv.name, rv)
            if old is not None:
                logger.info("Old Reference value of %s is replaced.", old.name)

    def get_digests(self, name: str) -> TrustedDigest | None:
        rv = self.store.get(name)
        if rv is None:
            return None
        if datetime.now(timezone.utc) > rv.expired:
            logger.warning("Reference value of %s is expired.", name)
            return None
        return TrustedDigest(name=name, hash_values=[pair.value for pair in rv.hash_value])