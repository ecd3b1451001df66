from datetime import datetime
from typing import Callable

from fastapi import APIRouter, Depends

from proposal_pricing.entrypoints.http.dependencies import get_clock, get_recompute_pricing_use_case
from proposal_pricing.entrypoints.http.dtos.pricing import (
    PricingQuoteRequestDTO,
    PricingQuoteResponseDTO,
)
from proposal_pricing.entrypoints.http.error_responses import ErrorResponse
from proposal_pricing.entrypoints.http.mappers.pricing_mapper import PricingQuoteMapper
from proposal_pricing.use_cases.recompute_proposal_pricing import RecomputeProposalPricing

router = APIRouter(tags=["Pricing"])


@router.post(
    "/pricing/quote",
    response_model=PricingQuoteResponseDTO,
    summary="Recompute proposal pricing",
    description="""
    Recompute subtotal, total and monthly payment for a proposal's base
    pricing plus a selection of addons, special offers and lifestyle upsells.

    ## Monetary Values
    - All monetary values are decimal strings (e.g., "10000.00")
    - Results are rounded to cents, half up

    ## Calculation
    - additions = selected addon prices + upsell base prices
    - savings = flat offer amounts, or percentages of the stored total
    - total = stored total + additions - savings - stored discount, never below 0
    - monthly payment: payment factor when known, else amortization over the
      financing term, else the stored payment adjusted by each item's impact

    Offers whose expiration_date has passed contribute no savings.
    """,
    responses={422: {"model": ErrorResponse, "description": "Validation error"}},
)
def quote_pricing(
    payload: PricingQuoteRequestDTO,
    use_case: RecomputeProposalPricing = Depends(get_recompute_pricing_use_case),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> PricingQuoteResponseDTO:
    """Parse → execute → map → return."""
    snapshot = PricingQuoteMapper.to_snapshot(payload, now=clock())

    derived = use_case.execute(snapshot)

    return PricingQuoteMapper.to_response(derived, snapshot)
