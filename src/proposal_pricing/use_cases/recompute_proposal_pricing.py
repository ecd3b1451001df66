from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Mapping

from proposal_pricing.domain.addons import Addon, selected_addons
from proposal_pricing.domain.countdown import OfferTimer, is_offer_expired
from proposal_pricing.domain.money import (
    addon_monthly_impact,
    effective_payment_factor,
    recompute_monthly_payment,
    total_with_adjustments,
)
from proposal_pricing.domain.offers import LifestyleUpsell, OfferCatalog, SpecialOffer
from proposal_pricing.domain.pricing import ZERO, DerivedPricing, ProposalPricing, to_cents


@dataclass(frozen=True, slots=True)
class PricingSnapshot:
    """Complete, consistent view of a proposal's selections at one instant."""

    pricing: ProposalPricing
    now: datetime
    addon_groups: Mapping[str, tuple[Addon, ...]] = field(default_factory=dict)
    catalog: OfferCatalog = field(default_factory=OfferCatalog)
    selected_offer_ids: frozenset[int] = frozenset()
    selected_upsell_ids: frozenset[int] = frozenset()
    timers: Mapping[int, OfferTimer] = field(default_factory=dict)

    def selected_upsells(self) -> list[LifestyleUpsell]:
        return [u for u in self.catalog.lifestyle_upsells if u.id in self.selected_upsell_ids]

    def active_offers(self) -> list[SpecialOffer]:
        """Selected special offers that have not expired."""
        return [
            offer
            for offer in self.catalog.special_offers
            if offer.id in self.selected_offer_ids
            and not is_offer_expired(offer, self.timers, self.now)
        ]


@dataclass(frozen=True, slots=True)
class RecomputeProposalPricing:
    """
    Single source of truth for a proposal's live (subtotal, total, monthly payment).

    Steps, in order:
    1. additions = selected addon prices + selected upsell base prices
    2. savings = per active special offer: flat amount, else percentage of the
       stored total, else nothing (free items are display-only)
    3. subtotal = stored subtotal + additions
    4. total = total_with_adjustments(stored total, additions, savings, stored discount)
    5. monthly payment through the payment factor / amortization / impact delta chain

    Bundle rules are never subtracted here: they are evaluated when the
    proposal is created and already part of the stored total.

    Rounding policy:
    - All intermediate values are full precision Decimal
    - Published money is rounded to cents with ROUND_HALF_UP
    - Same snapshot in, identical DerivedPricing out
    """

    def execute(self, snapshot: PricingSnapshot) -> DerivedPricing:
        pricing = snapshot.pricing
        factor = effective_payment_factor(pricing)
        term = pricing.financing_term

        addons = selected_addons(snapshot.addon_groups)
        upsells = snapshot.selected_upsells()

        additions = sum((a.price for a in addons), ZERO) + sum((u.base_price for u in upsells), ZERO)
        savings = sum((o.savings_on(pricing.total) for o in snapshot.active_offers()), ZERO)

        subtotal = pricing.subtotal + additions
        total = total_with_adjustments(pricing.total, additions, savings, pricing.discount)

        # Only consulted by the additive fallback
        impact_delta = self._impact_of(
            [a.price for a in addons] + [u.base_price for u in upsells], factor, term
        ) - addon_monthly_impact(savings, factor, term)

        monthly_payment, method = recompute_monthly_payment(total, pricing, impact_delta)

        return DerivedPricing(
            subtotal=to_cents(subtotal),
            total=to_cents(total),
            monthly_payment=to_cents(max(ZERO, monthly_payment)),
            additions=to_cents(additions),
            savings=to_cents(savings),
            monthly_payment_method=method,
            bundle_savings_display=to_cents(snapshot.catalog.bundle_savings()),
        )

    @staticmethod
    def _impact_of(prices: list[Decimal], factor: Decimal | None, term: int | None) -> Decimal:
        return sum((addon_monthly_impact(price, factor, term) for price in prices), ZERO)
