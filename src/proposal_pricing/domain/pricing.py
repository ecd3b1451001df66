from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def to_cents(amount: Decimal) -> Decimal:
    """Round a full-precision amount to cents (ROUND_HALF_UP)."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


class MonthlyPaymentMethod(str, Enum):
    PAYMENT_FACTOR = "payment_factor"
    AMORTIZATION = "amortization"
    # Additive approximation, see recompute_monthly_payment
    IMPACT_DELTA = "impact_delta"


@dataclass(frozen=True, slots=True)
class CustomAdder:
    description: str
    cost: Decimal


@dataclass(frozen=True, slots=True)
class ProposalPricing:
    """
    Base pricing record of a proposal, as stored by the proposal owner.

    `payment_factor` is a percent of principal per month (1.42 means 1.42%).
    None and zero both mean "not supplied"; see `effective_payment_factor`.
    """

    subtotal: Decimal
    total: Decimal
    monthly_payment: Decimal
    discount: Decimal = ZERO
    financing_term: int | None = None
    interest_rate: Decimal | None = None
    payment_factor: Decimal | None = None
    financing_plan_name: str | None = None
    custom_adders: tuple[CustomAdder, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class DerivedPricing:
    """
    Published result of a recomputation.

    Money fields are rounded to cents. `bundle_savings_display` is informational
    only: bundle discounts are already part of the proposal's starting total.
    """

    subtotal: Decimal
    total: Decimal
    monthly_payment: Decimal
    additions: Decimal = ZERO
    savings: Decimal = ZERO
    monthly_payment_method: MonthlyPaymentMethod = MonthlyPaymentMethod.PAYMENT_FACTOR
    bundle_savings_display: Decimal = ZERO
