from datetime import datetime

from pydantic import BaseModel


class SpecialOfferDTO(BaseModel):
    id: int
    name: str
    description: str
    category: str
    discount_amount: str | None = None
    discount_percentage: str | None = None
    free_product_service: str | None = None
    expiration_date: datetime | None = None


class BundleRuleDTO(BaseModel):
    id: int
    name: str
    description: str
    bonus_message: str
    discount_value: str | None = None
    free_service: str | None = None


class LifestyleUpsellDTO(BaseModel):
    id: int
    name: str
    category: str
    description: str
    base_price: str
    monthly_impact: str


class OfferCatalogResponseDTO(BaseModel):
    """Normalized offers for one proposal. Bundle savings are informational only."""

    proposal_id: int
    special_offers: list[SpecialOfferDTO]
    bundle_rules: list[BundleRuleDTO]
    lifestyle_upsells: list[LifestyleUpsellDTO]
    bundle_savings: str
