"""A chain of wares that may inspect and change each message before extraction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from rvps.message import Message


class Ware(ABC):
    """One link of the pre-processing chain."""

    @abstractmethod
    def handle(self, message: Message, context: dict[str, str], next_wares: Next) -> None:
        """Process the message, calling `next_wares.run` to continue the chain."""


class Next:
    """The rest of the ware chain, still to run."""

    def __init__(self, wares: Sequence[Ware]) -> None:
        self._wares = tuple(wares)

    def run(self, message: Message, context: dict[str, str]) -> None:
        if not self._wares:
            return
        current, *rest = self._wares
        current.handle(message, context, Next(rest))


class PreProcessor:
    """Runs every registered ware, in order, over a message."""

    def __init__(self) -> None:
        self._wares: list[Ware] = []

    def process(self, message: Message) -> None:
        Next(self._wares).run(message, {})

    def add_ware(self, ware: Ware) -> PreProcessor:
        self._wares.append(ware)
        return self