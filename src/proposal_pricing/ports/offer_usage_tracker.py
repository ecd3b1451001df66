from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

UsageAction = Literal["applied", "deselected"]


@dataclass(frozen=True, slots=True)
class OfferUsage:
    proposal_id: int
    offer_id: int
    action: UsageAction
    discount_amount: Decimal
    offer_type: str = "special_offer"


class OfferUsageTracker(ABC):
    """
    Port for recording special-offer interactions.

    Fire-and-forget: a failing tracker never changes the selection.
    """

    @abstractmethod
    def record(self, usage: OfferUsage) -> None: ...
