from __future__ import annotations

from proposal_pricing.domain.errors import ValidationError
from proposal_pricing.domain.financing import FinancingPlan, FinancingQuote, FinancingQuoteRequest
from proposal_pricing.entrypoints.http.dtos.financing import (
    MonthlyPaymentRequestDTO,
    MonthlyPaymentResponseDTO,
)
from proposal_pricing.entrypoints.http.mappers.decimals import (
    parse_decimal_field,
    parse_optional_decimal_field,
)


class FinancingMapper:
    """Maps between REST DTOs and domain models for monthly payment quotes."""

    @staticmethod
    def to_domain_request(dto: MonthlyPaymentRequestDTO) -> FinancingQuoteRequest:
        """
        Converts request DTO to a FinancingQuoteRequest (string → Decimal).

        Raises:
            ValidationError: If string values cannot be converted to valid Decimals
        """
        errors: list[dict[str, str]] = []

        amount = parse_decimal_field(dto.amount, "amount", errors)
        interest_rate = parse_optional_decimal_field(dto.plan.interest_rate, "plan.interest_rate", errors)
        payment_factor = parse_optional_decimal_field(dto.plan.payment_factor, "plan.payment_factor", errors)

        if errors:
            raise ValidationError(errors=errors)

        return FinancingQuoteRequest(
            amount=amount,
            plan=FinancingPlan(
                term_months=dto.plan.term_months,
                interest_rate=interest_rate,
                payment_factor=payment_factor,
                plan_name=dto.plan.plan_name,
                provider=dto.plan.provider,
            ),
        )

    @staticmethod
    def to_response(quote: FinancingQuote) -> MonthlyPaymentResponseDTO:
        return MonthlyPaymentResponseDTO(
            principal=str(quote.principal),
            term_months=quote.term_months,
            monthly_payment=str(quote.monthly_payment),
            method=quote.method.value,
            total_paid=str(quote.total_paid),
            total_interest=str(quote.total_interest),
        )
