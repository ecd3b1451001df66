"""PostgreSQL implementation of OfferCatalogSource."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, case, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from proposal_pricing.adapters.offer_catalog_mapper import (
    BUNDLE_RULE,
    LIFESTYLE_UPSELL,
    SPECIAL_OFFER,
)
from proposal_pricing.infra.db.models import (
    BundleRuleRow,
    LifestyleUpsellRow,
    ProposalOfferRow,
    SpecialOfferRow,
)
from proposal_pricing.ports.offer_catalog_source import OfferCatalogSource, OfferRecord

if TYPE_CHECKING:
    from sqlalchemy.sql import Select

logger = logging.getLogger(__name__)


class SqlAlchemyOfferCatalogSource(OfferCatalogSource):
    """
    Reads proposal offers and the upsell catalog through SQLAlchemy.

    - One query joins every linked offer to its definition table
    - Only links in status 'active' are returned
    - Rows are handed back as plain dicts; parsing is the mapper's job
    - A failed read rolls the session back before re-raising, so the other
      fetch on the same request session still runs
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def fetch_proposal_offers(self, proposal_id: int) -> list[OfferRecord]:
        try:
            rows = self._session.execute(self._proposal_offers_query(proposal_id)).mappings().all()
        except SQLAlchemyError:
            self._rollback("proposal_offers")
            raise
        return [dict(row) for row in rows]

    def fetch_lifestyle_upsells(self) -> list[OfferRecord]:
        query = (
            select(LifestyleUpsellRow)
            .where(LifestyleUpsellRow.is_active.is_(True))
            .order_by(LifestyleUpsellRow.category, LifestyleUpsellRow.base_price)
        )
        try:
            rows = self._session.execute(query).scalars().all()
        except SQLAlchemyError:
            self._rollback("lifestyle_upsells")
            raise
        return [self._upsell_record(row) for row in rows]

    def _rollback(self, source: str) -> None:
        logger.debug("Offer catalog read failed, rolling back session", extra={"source": source})
        self._session.rollback()

    @staticmethod
    def _proposal_offers_query(proposal_id: int) -> Select[Any]:
        po, so, br, lu = ProposalOfferRow, SpecialOfferRow, BundleRuleRow, LifestyleUpsellRow

        def by_type(special: Any, bundle: Any, upsell: Any) -> Any:
            return case(
                (po.offer_type == SPECIAL_OFFER, special),
                (po.offer_type == BUNDLE_RULE, bundle),
                (po.offer_type == LIFESTYLE_UPSELL, upsell),
            )

        return (
            select(
                po.offer_id.label("offer_id"),
                po.offer_type.label("offer_type"),
                po.expiration_date.label("expiration_date"),
                by_type(so.name, br.name, lu.product_suggestion).label("name"),
                by_type(so.description, br.description, lu.description).label("description"),
                by_type(so.category, None, lu.category).label("category"),
                func.coalesce(
                    po.discount_amount,
                    by_type(so.discount_amount, br.discount_value, None),
                ).label("discount_amount"),
                so.discount_percentage.label("discount_percentage"),
                by_type(so.free_product_service, br.free_service, None).label("free_item"),
                br.bonus_message.label("bonus_message"),
                lu.base_price.label("base_price"),
                lu.monthly_impact.label("monthly_impact"),
                lu.is_active.label("is_active"),
            )
            .select_from(po)
            .outerjoin(so, and_(po.offer_type == SPECIAL_OFFER, po.offer_id == so.id))
            .outerjoin(br, and_(po.offer_type == BUNDLE_RULE, po.offer_id == br.id))
            .outerjoin(lu, and_(po.offer_type == LIFESTYLE_UPSELL, po.offer_id == lu.id))
            .where(po.proposal_id == proposal_id, po.status == "active")
            .order_by(po.id)
        )

    @staticmethod
    def _upsell_record(row: LifestyleUpsellRow) -> OfferRecord:
        return {
            "id": row.id,
            "product_suggestion": row.product_suggestion,
            "category": row.category,
            "base_price": row.base_price,
            "monthly_impact": row.monthly_impact,
            "description": row.description,
            "is_active": row.is_active,
        }
