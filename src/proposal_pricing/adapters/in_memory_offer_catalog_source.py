from __future__ import annotations

from proposal_pricing.ports.offer_catalog_source import OfferCatalogSource, OfferRecord


class InMemoryOfferCatalogSource(OfferCatalogSource):
    """
    Canonical contract implementation for tests.

    - Holds raw records keyed by proposal id, returned as-is
    - `fail_offers` / `fail_upsells` make the matching fetch raise
    """

    def __init__(
        self,
        proposal_offers: dict[int, list[OfferRecord]] | None = None,
        lifestyle_upsells: list[OfferRecord] | None = None,
        fail_offers: bool = False,
        fail_upsells: bool = False,
    ) -> None:
        self._proposal_offers = proposal_offers or {}
        self._lifestyle_upsells = lifestyle_upsells or []
        self.fail_offers = fail_offers
        self.fail_upsells = fail_upsells

    def fetch_proposal_offers(self, proposal_id: int) -> list[OfferRecord]:
        if self.fail_offers:
            raise ConnectionError("offer source unavailable")
        return [dict(record) for record in self._proposal_offers.get(proposal_id, [])]

    def fetch_lifestyle_upsells(self) -> list[OfferRecord]:
        if self.fail_upsells:
            raise ConnectionError("upsell source unavailable")
        return [dict(record) for record in self._lifestyle_upsells]
