from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class AddonPersistRequest:
    proposal_id: int
    addon_id: str
    service_key: str
    price: Decimal
    monthly_impact: Decimal


@dataclass(frozen=True, slots=True)
class PersistOk:
    pass


@dataclass(frozen=True, slots=True)
class PersistErr:
    reason: str


PersistResult = PersistOk | PersistErr


class AddonPersistence(ABC):
    """
    Port for writing a proposal's addon selection back to its owner.

    Contract:
        - Failures are reported as PersistErr, not raised
        - The engine only looks at Ok/Err; no response body is consumed
    """

    @abstractmethod
    def add(self, request: AddonPersistRequest) -> PersistResult: ...

    @abstractmethod
    def remove(self, proposal_id: int, addon_id: str) -> PersistResult: ...
