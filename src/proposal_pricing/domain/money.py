"""Money math for proposal pricing.

Pure functions over Decimal. Nothing here rounds: callers decide when a value
is published and quantize it then (see `to_cents`).
"""

from __future__ import annotations

from decimal import Decimal

from proposal_pricing.domain.errors import InvalidPricingInput
from proposal_pricing.domain.pricing import ZERO, MonthlyPaymentMethod, ProposalPricing

ONE = Decimal("1")
HUNDRED = Decimal("100")
MONTHS_PER_YEAR = Decimal("12")


def amortized_monthly_payment(
    principal: Decimal,
    term_months: int,
    annual_rate_percent: Decimal | None = None,
) -> Decimal:
    """
    Fixed-rate amortized payment.

    monthly_payment = P * (r*(1+r)^n) / ((1+r)^n - 1), with r the monthly rate.
    A zero or absent rate degrades to P / n.

    Raises:
        InvalidPricingInput: If term_months <= 0 or the rate is negative
    """
    if term_months <= 0:
        raise InvalidPricingInput("term_months must be > 0", term_months=term_months)
    if annual_rate_percent is not None and annual_rate_percent < 0:
        raise InvalidPricingInput(
            "annual_rate_percent must be >= 0", annual_rate_percent=str(annual_rate_percent)
        )

    if not annual_rate_percent:
        return principal / Decimal(term_months)

    monthly_rate = annual_rate_percent / HUNDRED / MONTHS_PER_YEAR
    growth = (ONE + monthly_rate) ** term_months
    return principal * (monthly_rate * growth) / (growth - ONE)


def monthly_payment_from_factor(principal: Decimal, payment_factor_percent: Decimal) -> Decimal:
    """
    Monthly payment from a lender payment factor: principal * factor / 100.

    This is how a proposal's original monthly payment is derived, so any
    recomputation that adds or removes money must go through it when a factor
    is known.
    """
    if payment_factor_percent < 0:
        raise InvalidPricingInput(
            "payment_factor must be >= 0", payment_factor=str(payment_factor_percent)
        )
    return principal * payment_factor_percent / HUNDRED


def addon_monthly_impact(
    price: Decimal,
    payment_factor_percent: Decimal | None,
    term_months: int | None,
) -> Decimal:
    """
    Monthly cost of an optional line item (addon or lifestyle upsell).

    Single place this value is derived; stored catalog impacts may predate the
    proposal's financing terms and are never trusted.
    """
    if payment_factor_percent:
        return monthly_payment_from_factor(price, payment_factor_percent)
    if term_months:
        if term_months < 0:
            raise InvalidPricingInput("term_months must be > 0", term_months=term_months)
        return price / Decimal(term_months)
    return ZERO


def total_with_adjustments(
    base_total: Decimal,
    additions: Decimal,
    savings: Decimal,
    discount: Decimal = ZERO,
) -> Decimal:
    """base_total + additions - savings - discount, floored at zero."""
    # Additions land before savings/discount are taken off
    adjusted = (base_total + additions) - savings - discount
    return max(ZERO, adjusted)


def effective_payment_factor(pricing: ProposalPricing) -> Decimal | None:
    """
    Payment factor of a proposal.

    The stored factor when present, otherwise monthly_payment / total * 100
    when both are nonzero, otherwise None.
    """
    if pricing.payment_factor:
        return pricing.payment_factor
    if pricing.total and pricing.monthly_payment:
        return pricing.monthly_payment / pricing.total * HUNDRED
    return None


def recompute_monthly_payment(
    new_total: Decimal,
    pricing: ProposalPricing,
    impact_delta: Decimal,
) -> tuple[Decimal, MonthlyPaymentMethod]:
    """
    Monthly payment for a recomputed total, first applicable path wins:

    1. Known payment factor: factor applied to the new total.
    2. Known term and interest rate (0% included): amortization of the new total.
    3. Neither: the stored monthly payment plus `impact_delta`, the net
       `addon_monthly_impact` of everything added or saved. This additive
       model is an approximation and does not agree with paths 1-2; it is
       kept as the weakest fallback only.
    """
    factor = effective_payment_factor(pricing)
    if factor is not None:
        return monthly_payment_from_factor(new_total, factor), MonthlyPaymentMethod.PAYMENT_FACTOR

    if pricing.financing_term and pricing.interest_rate is not None:
        payment = amortized_monthly_payment(new_total, pricing.financing_term, pricing.interest_rate)
        return payment, MonthlyPaymentMethod.AMORTIZATION

    return max(ZERO, pricing.monthly_payment + impact_delta), MonthlyPaymentMethod.IMPACT_DELTA
