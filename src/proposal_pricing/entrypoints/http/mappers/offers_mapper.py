from __future__ import annotations

from decimal import Decimal

from proposal_pricing.domain.offers import OfferCatalog
from proposal_pricing.domain.pricing import to_cents
from proposal_pricing.entrypoints.http.dtos.offers import (
    BundleRuleDTO,
    LifestyleUpsellDTO,
    OfferCatalogResponseDTO,
    SpecialOfferDTO,
)


def _money(value: Decimal | None) -> str | None:
    return None if value is None else str(to_cents(value))


class OfferCatalogResponseMapper:
    """Maps a normalized OfferCatalog to its response DTO (Decimal → string)."""

    @staticmethod
    def parse_services(services: str | None) -> tuple[str, ...]:
        """Comma separated service keys; blanks are dropped, order is kept."""
        if not services:
            return ()
        return tuple(s.strip() for s in services.split(",") if s.strip())

    @staticmethod
    def to_response(proposal_id: int, catalog: OfferCatalog) -> OfferCatalogResponseDTO:
        return OfferCatalogResponseDTO(
            proposal_id=proposal_id,
            special_offers=[
                SpecialOfferDTO(
                    id=offer.id,
                    name=offer.name,
                    description=offer.description,
                    category=offer.category,
                    discount_amount=_money(offer.discount_amount),
                    discount_percentage=None if offer.discount_percentage is None else str(offer.discount_percentage),
                    free_product_service=offer.free_product_service,
                    expiration_date=offer.expiration_date,
                )
                for offer in catalog.special_offers
            ],
            bundle_rules=[
                BundleRuleDTO(
                    id=rule.id,
                    name=rule.name,
                    description=rule.description,
                    bonus_message=rule.bonus_message,
                    discount_value=_money(rule.discount_value),
                    free_service=rule.free_service,
                )
                for rule in catalog.bundle_rules
            ],
            lifestyle_upsells=[
                LifestyleUpsellDTO(
                    id=upsell.id,
                    name=upsell.name,
                    category=upsell.category,
                    description=upsell.description,
                    base_price=str(to_cents(upsell.base_price)),
                    monthly_impact=str(to_cents(upsell.monthly_impact)),
                )
                for upsell in catalog.lifestyle_upsells
            ],
            bundle_savings=str(to_cents(catalog.bundle_savings())),
        )
