from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Integer, Numeric, String, Text, func
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from proposal_pricing.infra.db.models.base import Base


class SpecialOfferRow(Base):
    __tablename__ = "special_offers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False)

    discount_amount: Mapped[Decimal | None] = mapped_column(Numeric(precision=10, scale=2), nullable=True)
    discount_percentage: Mapped[Decimal | None] = mapped_column(Numeric(precision=5, scale=2), nullable=True)
    free_product_service: Mapped[str | None] = mapped_column(String(150), nullable=True)

    # "hours" | "days"; expiration_value counts in that unit from assignment
    expiration_type: Mapped[str] = mapped_column(String(20), nullable=False, server_default="hours")
    expiration_value: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="true")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class BundleRuleRow(Base):
    __tablename__ = "bundle_rules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    required_services: Mapped[list[str]] = mapped_column(ARRAY(String(50)), nullable=False)
    min_services: Mapped[int] = mapped_column(Integer, nullable=False, server_default="2")

    # "fixed_amount" | "percentage" | "free_service"
    discount_type: Mapped[str] = mapped_column(String(20), nullable=False)
    discount_value: Mapped[Decimal | None] = mapped_column(Numeric(precision=10, scale=2), nullable=True)
    free_service: Mapped[str | None] = mapped_column(String(150), nullable=True)
    bonus_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="true")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class LifestyleUpsellRow(Base):
    __tablename__ = "lifestyle_upsells"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    trigger_phrase: Mapped[str | None] = mapped_column(String(200), nullable=True)
    product_suggestion: Mapped[str] = mapped_column(String(150), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    base_price: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2), nullable=False)
    monthly_impact: Mapped[Decimal | None] = mapped_column(Numeric(precision=10, scale=2), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="true")


class ProposalOfferRow(Base):
    """Offer linked to a proposal. offer_id points into the table named by offer_type."""

    __tablename__ = "proposal_offers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    proposal_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    offer_type: Mapped[str] = mapped_column(String(30), nullable=False)
    offer_id: Mapped[int] = mapped_column(Integer, nullable=False)
    discount_amount: Mapped[Decimal | None] = mapped_column(Numeric(precision=10, scale=2), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, server_default="active")
    expiration_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
