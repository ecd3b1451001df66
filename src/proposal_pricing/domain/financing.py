from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from proposal_pricing.domain.errors import InvalidPricingInput
from proposal_pricing.domain.pricing import MonthlyPaymentMethod


@dataclass(frozen=True, slots=True)
class FinancingPlan:
    """
    Lender plan a proposal can be financed under.

    interest_rate is an annual percent (7.99 means 7.99%); payment_factor,
    when the lender publishes one, is a monthly percent of principal.
    """

    term_months: int
    interest_rate: Decimal | None = None
    payment_factor: Decimal | None = None
    plan_number: str = ""
    provider: str = ""
    plan_name: str = ""
    merchant_fee: Decimal | None = None


@dataclass(frozen=True, slots=True)
class FinancingQuoteRequest:
    amount: Decimal
    plan: FinancingPlan

    def validate(self) -> None:
        if self.amount <= 0:
            raise InvalidPricingInput("amount must be > 0")
        if self.plan.term_months <= 0:
            raise InvalidPricingInput("term_months must be > 0")
        if self.plan.interest_rate is not None and self.plan.interest_rate < 0:
            raise InvalidPricingInput("interest_rate must be >= 0")
        if self.plan.payment_factor is not None and self.plan.payment_factor < 0:
            raise InvalidPricingInput("payment_factor must be >= 0")


@dataclass(frozen=True, slots=True)
class FinancingQuote:
    principal: Decimal
    term_months: int
    monthly_payment: Decimal
    method: MonthlyPaymentMethod
    total_paid: Decimal
    total_interest: Decimal
