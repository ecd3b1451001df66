from __future__ import annotations

from datetime import datetime
from typing import Iterable, Mapping

from proposal_pricing.adapters.offer_catalog_mapper import OfferCatalogMapper
from proposal_pricing.domain.addons import DEFAULT_ADDON_CATALOG, Addon, build_addon_groups
from proposal_pricing.domain.errors import ValidationError
from proposal_pricing.domain.offers import LifestyleUpsell, OfferCatalog, SpecialOffer
from proposal_pricing.domain.pricing import DerivedPricing, ProposalPricing, to_cents
from proposal_pricing.entrypoints.http.dtos.pricing import (
    AddonQuoteDTO,
    BasePricingDTO,
    PricingQuoteRequestDTO,
    PricingQuoteResponseDTO,
)
from proposal_pricing.entrypoints.http.mappers.decimals import (
    parse_decimal_field,
    parse_optional_decimal_field,
)
from proposal_pricing.use_cases.recompute_proposal_pricing import PricingSnapshot


class PricingQuoteMapper:
    """Maps between the quote DTOs and a recomputation snapshot."""

    @staticmethod
    def to_domain_pricing(dto: BasePricingDTO) -> ProposalPricing:
        """
        Converts the posted base pricing, string → Decimal.

        Raises:
            ValidationError: If any monetary field is not a valid decimal
        """
        errors: list[dict[str, str]] = []

        pricing = ProposalPricing(
            subtotal=parse_decimal_field(dto.subtotal, "pricing.subtotal", errors),
            total=parse_decimal_field(dto.total, "pricing.total", errors),
            monthly_payment=parse_decimal_field(dto.monthly_payment, "pricing.monthly_payment", errors),
            discount=parse_decimal_field(dto.discount, "pricing.discount", errors),
            financing_term=dto.financing_term,
            interest_rate=parse_optional_decimal_field(dto.interest_rate, "pricing.interest_rate", errors),
            payment_factor=parse_optional_decimal_field(dto.payment_factor, "pricing.payment_factor", errors),
        )

        if errors:
            raise ValidationError(errors=errors)
        return pricing

    @staticmethod
    def to_snapshot(
        dto: PricingQuoteRequestDTO,
        now: datetime,
        addon_catalog: Mapping[str, Iterable[Addon]] = DEFAULT_ADDON_CATALOG,
    ) -> PricingSnapshot:
        """
        Every posted offer and upsell counts as selected; addons are selected
        by id within the posted services.
        """
        pricing = PricingQuoteMapper.to_domain_pricing(dto.pricing)

        offers: list[SpecialOffer] = []
        for offer_dto in dto.special_offers:
            offer = OfferCatalogMapper.to_special_offer(offer_dto.model_dump())
            if offer is not None:
                offers.append(offer)

        upsells: list[LifestyleUpsell] = []
        for upsell_dto in dto.lifestyle_upsells:
            upsell = OfferCatalogMapper.to_lifestyle_upsell(upsell_dto.model_dump())
            if upsell is not None:
                upsells.append(upsell)

        return PricingSnapshot(
            pricing=pricing,
            now=now,
            addon_groups=build_addon_groups(addon_catalog, dto.services, pricing, dto.selected_addon_ids),
            catalog=OfferCatalog(special_offers=tuple(offers), lifestyle_upsells=tuple(upsells)),
            selected_offer_ids=frozenset(o.id for o in offers),
            selected_upsell_ids=frozenset(u.id for u in upsells),
        )

    @staticmethod
    def to_response(derived: DerivedPricing, snapshot: PricingSnapshot) -> PricingQuoteResponseDTO:
        return PricingQuoteResponseDTO(
            subtotal=str(derived.subtotal),
            total=str(derived.total),
            monthly_payment=str(derived.monthly_payment),
            additions=str(derived.additions),
            savings=str(derived.savings),
            monthly_payment_method=derived.monthly_payment_method.value,
            addons=[
                AddonQuoteDTO(
                    service_key=service_key,
                    id=addon.id,
                    name=addon.name,
                    price=str(to_cents(addon.price)),
                    monthly_impact=str(to_cents(addon.monthly_impact)),
                    selected=addon.selected,
                )
                for service_key, addons in snapshot.addon_groups.items()
                for addon in addons
            ],
        )
