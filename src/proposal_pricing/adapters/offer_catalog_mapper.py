"""Normalizes raw offer records into the typed offer catalog.

Storage hands numeric columns back as strings (NUMERIC → text over JSON) or
leaves them out entirely; everything is parsed here once so that downstream
code never re-checks types.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Sequence

from proposal_pricing.domain.offers import (
    BundleRule,
    LifestyleUpsell,
    OfferCatalog,
    SpecialOffer,
)
from proposal_pricing.domain.pricing import ZERO, to_cents
from proposal_pricing.ports.offer_catalog_source import OfferRecord

logger = logging.getLogger(__name__)

SPECIAL_OFFER = "special_offer"
BUNDLE_RULE = "bundle_rule"
LIFESTYLE_UPSELL = "lifestyle_upsell"

_TRUTHY = {"true", "t", "1", "yes", "y"}


def parse_decimal(value: Any) -> Decimal:
    """Missing, unparseable or non-finite values become 0."""
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        if isinstance(value, Decimal):
            parsed = value
        elif isinstance(value, float):
            parsed = Decimal(str(value))
        else:
            parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    return parsed if parsed.is_finite() else ZERO


def parse_id(value: Any) -> int | None:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def parse_datetime(value: Any) -> datetime | None:
    """ISO-8601 strings or datetimes; naive values are taken as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).strip())
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_flag(value: Any, default: bool = True) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def format_amount(amount: Decimal) -> str:
    if amount == amount.to_integral_value():
        return str(int(amount))
    return str(to_cents(amount))


def bundle_bonus_message(amount: Decimal, services: Sequence[str]) -> str:
    return f"Bundle Bonus Applied: ${format_amount(amount)} off for combining {' + '.join(services)}"


class OfferCatalogMapper:
    """Maps raw offer records to domain offers."""

    @staticmethod
    def to_special_offer(record: OfferRecord) -> SpecialOffer | None:
        offer_id = parse_id(record.get("offer_id", record.get("id")))
        if offer_id is None:
            return None

        amount = parse_decimal(record.get("discount_amount"))
        percentage = parse_decimal(record.get("discount_percentage"))
        free_item = record.get("free_item") or record.get("free_product_service") or None

        # Exactly one benefit kind survives: flat amount, then percentage, then free item
        return SpecialOffer(
            id=offer_id,
            name=str(record.get("name") or ""),
            description=str(record.get("description") or ""),
            category=str(record.get("category") or ""),
            discount_amount=amount if amount > 0 else None,
            discount_percentage=percentage if amount <= 0 and percentage > 0 else None,
            free_product_service=free_item if amount <= 0 and percentage <= 0 else None,
            expiration_date=parse_datetime(record.get("expiration_date")),
        )

    @staticmethod
    def to_bundle_rule(record: OfferRecord, services: Sequence[str]) -> BundleRule | None:
        rule_id = parse_id(record.get("offer_id", record.get("id")))
        if rule_id is None:
            return None

        value = parse_decimal(record.get("discount_amount", record.get("discount_value")))
        free_service = record.get("free_item") or record.get("free_service") or None
        bonus_message = record.get("bonus_message") or bundle_bonus_message(value, services)

        return BundleRule(
            id=rule_id,
            name=str(record.get("name") or ""),
            description=str(record.get("description") or ""),
            discount_value=value if value > 0 else None,
            free_service=free_service if value <= 0 else None,
            bonus_message=str(bonus_message),
        )

    @staticmethod
    def to_lifestyle_upsell(record: OfferRecord) -> LifestyleUpsell | None:
        upsell_id = parse_id(record.get("id", record.get("offer_id")))
        if upsell_id is None:
            return None

        return LifestyleUpsell(
            id=upsell_id,
            name=str(record.get("product_suggestion") or record.get("name") or ""),
            category=str(record.get("category") or ""),
            description=str(record.get("description") or ""),
            base_price=parse_decimal(record.get("base_price")),
            monthly_impact=parse_decimal(record.get("monthly_impact")),
            is_active=parse_flag(record.get("is_active")),
        )

    @staticmethod
    def to_catalog(
        offer_records: Iterable[OfferRecord],
        upsell_records: Iterable[OfferRecord],
        services: Sequence[str],
    ) -> OfferCatalog:
        """
        Split the proposal's tagged offer list and the upsell catalog into
        the three typed collections.

        Records with an unknown/absent offer_type or an unusable id are
        skipped; inactive upsells are dropped.
        """
        special_offers: list[SpecialOffer] = []
        bundle_rules: list[BundleRule] = []
        upsells: list[LifestyleUpsell] = []

        for record in offer_records:
            offer_type = record.get("offer_type")
            if offer_type == SPECIAL_OFFER:
                offer = OfferCatalogMapper.to_special_offer(record)
                if offer is not None:
                    special_offers.append(offer)
            elif offer_type == BUNDLE_RULE:
                rule = OfferCatalogMapper.to_bundle_rule(record, services)
                if rule is not None:
                    bundle_rules.append(rule)
            elif offer_type == LIFESTYLE_UPSELL:
                upsell = OfferCatalogMapper.to_lifestyle_upsell(record)
                if upsell is not None:
                    upsells.append(upsell)
            else:
                logger.debug("Skipping offer record", extra={"offer_type": offer_type})

        for record in upsell_records:
            upsell = OfferCatalogMapper.to_lifestyle_upsell(record)
            if upsell is not None:
                upsells.append(upsell)

        # Same upsell linked to the proposal and listed in the catalog: first wins
        unique_upsells: dict[int, LifestyleUpsell] = {}
        for upsell in upsells:
            if upsell.is_active:
                unique_upsells.setdefault(upsell.id, upsell)

        return OfferCatalog(
            special_offers=tuple(special_offers),
            bundle_rules=tuple(bundle_rules),
            lifestyle_upsells=tuple(unique_upsells.values()),
        )
