from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from proposal_pricing.entrypoints.http.dtos.common import MONEY_PATTERN, RATE_PATTERN


class BasePricingDTO(BaseModel):
    """Stored pricing of a proposal, before any live selection."""

    subtotal: str = Field(description="Stored subtotal as decimal string", examples=["10000.00"], pattern=MONEY_PATTERN)
    total: str = Field(description="Stored total as decimal string", examples=["10000.00"], pattern=MONEY_PATTERN)
    monthly_payment: str = Field(
        description="Stored monthly payment as decimal string",
        examples=["142.00"],
        pattern=MONEY_PATTERN,
    )
    discount: str = Field(
        default="0",
        description="Stored proposal-level discount",
        examples=["0"],
        pattern=MONEY_PATTERN,
    )
    financing_term: int | None = Field(default=None, description="Term in months", examples=[120], ge=1)
    interest_rate: str | None = Field(
        default=None,
        description="Annual interest rate in percent (7.99 = 7.99%)",
        examples=["7.99"],
        pattern=RATE_PATTERN,
    )
    payment_factor: str | None = Field(
        default=None,
        description="Monthly payment as percent of principal (1.42 = 1.42%)",
        examples=["1.42"],
        pattern=RATE_PATTERN,
    )


class QuotedOfferDTO(BaseModel):
    """A special offer applied to the quote. Offers past their expiration are ignored."""

    id: int
    name: str = ""
    discount_amount: str | None = Field(default=None, pattern=MONEY_PATTERN)
    discount_percentage: str | None = Field(default=None, pattern=RATE_PATTERN)
    free_product_service: str | None = None
    expiration_date: datetime | None = None


class QuotedUpsellDTO(BaseModel):
    id: int
    name: str = ""
    base_price: str = Field(pattern=MONEY_PATTERN)


class PricingQuoteRequestDTO(BaseModel):
    """Request payload for a stateless pricing recomputation."""

    pricing: BasePricingDTO
    services: list[str] = Field(default_factory=list, examples=[["roofing", "hvac"]])
    selected_addon_ids: list[str] = Field(default_factory=list, examples=[["gutter_addon"]])
    special_offers: list[QuotedOfferDTO] = Field(default_factory=list)
    lifestyle_upsells: list[QuotedUpsellDTO] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "pricing": {
                    "subtotal": "10000.00",
                    "total": "10000.00",
                    "monthly_payment": "142.00",
                    "financing_term": 120,
                    "payment_factor": "1.42",
                },
                "services": ["roofing"],
                "selected_addon_ids": ["gutter_addon"],
                "special_offers": [{"id": 7, "name": "Spring Savings", "discount_amount": "500.00"}],
                "lifestyle_upsells": [],
            }
        }
    )


class AddonQuoteDTO(BaseModel):
    service_key: str
    id: str
    name: str
    price: str
    monthly_impact: str
    selected: bool


class PricingQuoteResponseDTO(BaseModel):
    """Live pricing for the posted selection. All money is a decimal string."""

    subtotal: str
    total: str
    monthly_payment: str
    additions: str
    savings: str
    monthly_payment_method: str
    addons: list[AddonQuoteDTO]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "subtotal": "11500.00",
                "total": "11000.00",
                "monthly_payment": "156.20",
                "additions": "1500.00",
                "savings": "500.00",
                "monthly_payment_method": "payment_factor",
                "addons": [
                    {
                        "service_key": "roofing",
                        "id": "gutter_addon",
                        "name": "Seamless Gutters",
                        "price": "1500.00",
                        "monthly_impact": "21.30",
                        "selected": True,
                    }
                ],
            }
        }
    )
