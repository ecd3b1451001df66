from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from proposal_pricing.domain.pricing import ZERO


@dataclass(frozen=True, slots=True)
class SpecialOffer:
    """
    Rep-selectable, possibly time-limited promotion.

    At most one of discount_amount, discount_percentage and free_product_service
    carries the benefit; the catalog adapter enforces that precedence.
    """

    id: int
    name: str
    description: str = ""
    category: str = ""
    discount_amount: Decimal | None = None
    discount_percentage: Decimal | None = None
    free_product_service: str | None = None
    expiration_date: datetime | None = None

    def savings_on(self, base_total: Decimal) -> Decimal:
        """Monetary savings this offer contributes against base_total."""
        if self.discount_amount:
            return self.discount_amount
        if self.discount_percentage:
            return base_total * self.discount_percentage / Decimal("100")
        # Free items are display-only
        return ZERO


@dataclass(frozen=True, slots=True)
class BundleRule:
    """Auto-applied combination discount, evaluated server-side at proposal creation."""

    id: int
    name: str
    bonus_message: str
    description: str = ""
    discount_value: Decimal | None = None
    free_service: str | None = None


@dataclass(frozen=True, slots=True)
class LifestyleUpsell:
    id: int
    name: str
    base_price: Decimal
    monthly_impact: Decimal = ZERO
    category: str = ""
    description: str = ""
    is_active: bool = True


@dataclass(frozen=True, slots=True)
class OfferCatalog:
    """Offers fetched for one proposal. Read-only snapshot per load."""

    special_offers: tuple[SpecialOffer, ...] = field(default_factory=tuple)
    bundle_rules: tuple[BundleRule, ...] = field(default_factory=tuple)
    lifestyle_upsells: tuple[LifestyleUpsell, ...] = field(default_factory=tuple)

    def special_offer(self, offer_id: int) -> SpecialOffer | None:
        return next((o for o in self.special_offers if o.id == offer_id), None)

    def lifestyle_upsell(self, upsell_id: int) -> LifestyleUpsell | None:
        return next((u for u in self.lifestyle_upsells if u.id == upsell_id), None)

    def bundle_savings(self) -> Decimal:
        return sum((rule.discount_value or ZERO for rule in self.bundle_rules), ZERO)
