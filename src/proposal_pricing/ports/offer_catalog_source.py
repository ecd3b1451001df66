from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

OfferRecord = dict[str, Any]


class OfferCatalogSource(ABC):
    """
    Port for reading promotional data for a proposal.

    Records are returned raw, exactly as storage holds them: numeric fields
    may arrive as strings or be missing. Normalization is the catalog
    mapper's job, not the source's.

    Implementations may raise on transport/storage failure; callers degrade
    a failed source to an empty collection.
    """

    @abstractmethod
    def fetch_proposal_offers(self, proposal_id: int) -> list[OfferRecord]:
        """
        Offers linked to a proposal, each tagged with an `offer_type`
        discriminator (`special_offer` | `bundle_rule`).

        Expected keys: offer_id, offer_type, name, description, category,
        discount_amount?, discount_percentage?, free_item?, expiration_date?
        """
        ...

    @abstractmethod
    def fetch_lifestyle_upsells(self) -> list[OfferRecord]:
        """
        General lifestyle upsell catalog.

        Expected keys: id, product_suggestion, category, base_price,
        monthly_impact, description, is_active
        """
        ...
