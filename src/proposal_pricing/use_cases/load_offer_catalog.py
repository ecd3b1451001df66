from __future__ import annotations

import logging
from dataclasses import dataclass, field

from proposal_pricing.adapters.offer_catalog_mapper import OfferCatalogMapper
from proposal_pricing.domain.offers import OfferCatalog
from proposal_pricing.ports.offer_catalog_source import OfferCatalogSource, OfferRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoadOfferCatalogRequest:
    proposal_id: int
    services: tuple[str, ...] = field(default_factory=tuple)


class LoadOfferCatalog:
    """
    Fetch and normalize the offers for a proposal.

    Each source is fetched independently. A failing source degrades to an
    empty collection and is logged; base pricing must keep working without
    promotions, so nothing is raised to the caller.
    """

    def __init__(self, offer_catalog_source: OfferCatalogSource) -> None:
        self._source = offer_catalog_source

    def execute(self, request: LoadOfferCatalogRequest) -> OfferCatalog:
        offer_records = self._fetch_proposal_offers(request.proposal_id)
        upsell_records = self._fetch_lifestyle_upsells(request.proposal_id)

        catalog = OfferCatalogMapper.to_catalog(offer_records, upsell_records, request.services)

        logger.info(
            "Offer catalog loaded",
            extra={
                "proposal_id": request.proposal_id,
                "special_offers": len(catalog.special_offers),
                "bundle_rules": len(catalog.bundle_rules),
                "lifestyle_upsells": len(catalog.lifestyle_upsells),
            },
        )
        return catalog

    def _fetch_proposal_offers(self, proposal_id: int) -> list[OfferRecord]:
        try:
            return list(self._source.fetch_proposal_offers(proposal_id))
        except Exception as exc:
            logger.warning(
                "Failed to fetch proposal offers, continuing without them",
                extra={"proposal_id": proposal_id, "error_type": type(exc).__name__, "error": str(exc)},
            )
            return []

    def _fetch_lifestyle_upsells(self, proposal_id: int) -> list[OfferRecord]:
        try:
            return list(self._source.fetch_lifestyle_upsells())
        except Exception as exc:
            logger.warning(
                "Failed to fetch lifestyle upsells, continuing without them",
                extra={"proposal_id": proposal_id, "error_type": type(exc).__name__, "error": str(exc)},
            )
            return []
