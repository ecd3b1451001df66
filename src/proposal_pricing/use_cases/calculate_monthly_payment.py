from __future__ import annotations

from dataclasses import dataclass

from proposal_pricing.domain.financing import FinancingQuote, FinancingQuoteRequest
from proposal_pricing.domain.money import amortized_monthly_payment, monthly_payment_from_factor
from proposal_pricing.domain.pricing import MonthlyPaymentMethod, to_cents


@dataclass(frozen=True, slots=True)
class CalculateMonthlyPayment:
    """
    Quote the monthly payment for an amount under one financing plan.

    A published payment factor wins over the plan's rate, matching how
    proposal payments are derived; otherwise standard amortization (0% and
    missing rates pay principal / term).

    Rounding policy:
    - Monthly payment is rounded to cents using ROUND_HALF_UP
    - total_paid = monthly_payment * term_months, from the rounded payment
    - total_interest may be negative for promotional factors below 1/term
    """

    def execute(self, req: FinancingQuoteRequest) -> FinancingQuote:
        req.validate()

        plan = req.plan
        if plan.payment_factor:
            precise = monthly_payment_from_factor(req.amount, plan.payment_factor)
            method = MonthlyPaymentMethod.PAYMENT_FACTOR
        else:
            precise = amortized_monthly_payment(req.amount, plan.term_months, plan.interest_rate)
            method = MonthlyPaymentMethod.AMORTIZATION

        monthly_payment = to_cents(precise)
        total_paid = monthly_payment * plan.term_months

        return FinancingQuote(
            principal=req.amount,
            term_months=plan.term_months,
            monthly_payment=monthly_payment,
            method=method,
            total_paid=total_paid,
            total_interest=total_paid - req.amount,
        )
