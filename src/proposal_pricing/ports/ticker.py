from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

TickCallback = Callable[[], None]


class Ticker(ABC):
    """
    Port for the single repeating tick that drives all offer countdowns.

    One ticker per pricing session, never one per offer. `stop()` must be
    called on teardown and must be safe to call more than once.
    """

    @abstractmethod
    def start(self, callback: TickCallback) -> None: ...

    @abstractmethod
    def stop(self) -> None: ...

    @property
    @abstractmethod
    def is_running(self) -> bool: ...
