from pydantic import BaseModel, ConfigDict, Field

from proposal_pricing.entrypoints.http.dtos.common import MONEY_PATTERN, RATE_PATTERN


class FinancingPlanDTO(BaseModel):
    term_months: int = Field(description="Loan term in months", examples=[120], ge=1)
    interest_rate: str | None = Field(
        default=None,
        description="Annual interest rate in percent (7.99 = 7.99%)",
        examples=["7.99"],
        pattern=RATE_PATTERN,
    )
    payment_factor: str | None = Field(
        default=None,
        description="Monthly payment as percent of principal; wins over interest_rate",
        examples=["1.42"],
        pattern=RATE_PATTERN,
    )
    plan_name: str = ""
    provider: str = ""


class MonthlyPaymentRequestDTO(BaseModel):
    amount: str = Field(description="Financed amount as decimal string", examples=["10000.00"], pattern=MONEY_PATTERN)
    plan: FinancingPlanDTO

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "amount": "10000.00",
                "plan": {"term_months": 120, "payment_factor": "1.42"},
            }
        }
    )


class MonthlyPaymentResponseDTO(BaseModel):
    principal: str
    term_months: int
    monthly_payment: str
    method: str = Field(description="payment_factor | amortization")
    total_paid: str
    total_interest: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "principal": "10000.00",
                "term_months": 120,
                "monthly_payment": "142.00",
                "method": "payment_factor",
                "total_paid": "17040.00",
                "total_interest": "7040.00",
            }
        }
    )
