from fastapi import APIRouter, Depends

from proposal_pricing.entrypoints.http.dependencies import get_calculate_monthly_payment_use_case
from proposal_pricing.entrypoints.http.dtos.financing import (
    MonthlyPaymentRequestDTO,
    MonthlyPaymentResponseDTO,
)
from proposal_pricing.entrypoints.http.error_responses import ErrorResponse
from proposal_pricing.entrypoints.http.mappers.financing_mapper import FinancingMapper
from proposal_pricing.use_cases.calculate_monthly_payment import CalculateMonthlyPayment

router = APIRouter(tags=["Financing"])


@router.post(
    "/financing/monthly-payment",
    response_model=MonthlyPaymentResponseDTO,
    summary="Quote a monthly payment",
    description="""
    Monthly payment for an amount under one financing plan.

    ## Precedence
    - payment_factor (percent of principal per month) when non-zero
    - otherwise amortization at interest_rate (annual percent) over term_months
    - 0% or missing rate pays amount / term_months

    ## Example
    ```
    POST /v1/financing/monthly-payment
    {"amount": "10000.00", "plan": {"term_months": 120, "payment_factor": "1.42"}}
    ```
    """,
    responses={
        200: {
            "description": "Successful calculation",
            "content": {
                "application/json": {
                    "example": {
                        "principal": "10000.00",
                        "term_months": 120,
                        "monthly_payment": "142.00",
                        "method": "payment_factor",
                        "total_paid": "17040.00",
                        "total_interest": "7040.00",
                    }
                }
            },
        },
        422: {"model": ErrorResponse, "description": "Validation error"},
    },
)
def quote_monthly_payment(
    payload: MonthlyPaymentRequestDTO,
    use_case: CalculateMonthlyPayment = Depends(get_calculate_monthly_payment_use_case),
) -> MonthlyPaymentResponseDTO:
    """Parse → execute → map → return."""
    request = FinancingMapper.to_domain_request(payload)

    quote = use_case.execute(request)

    return FinancingMapper.to_response(quote)
