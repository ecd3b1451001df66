#!/usr/bin/env python3
"""
Seed the offer tables with a fixed demo catalog.

Features:
- Deterministic: same offers, bundles and upsells every run
- Idempotent: safe to run multiple times (clears before seeding)
- Links every active offer to a demo proposal so the pricing API has data

Usage:
    python scripts/seed_offers.py
    python scripts/seed_offers.py --proposal-id 7
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from proposal_pricing.infra.db.models import (
    BundleRuleRow,
    LifestyleUpsellRow,
    ProposalAddonRow,
    ProposalOfferRow,
    SpecialOfferRow,
)
from proposal_pricing.infra.db.session import get_session


# ==============================================================================
# Demo catalog
# ==============================================================================

DEMO_PROPOSAL_ID = 1

SPECIAL_OFFERS = [
    {
        "name": "Same-Day Signing Bonus",
        "description": "Sign today and take $500 off your project.",
        "category": "urgency",
        "discount_amount": Decimal("500.00"),
        "expiration_type": "hours",
        "expiration_value": 24,
    },
    {
        "name": "Spring Savings",
        "description": "5% off the full project price.",
        "category": "seasonal",
        "discount_percentage": Decimal("5.00"),
        "expiration_type": "days",
        "expiration_value": 7,
    },
    {
        "name": "Free Smart Thermostat",
        "description": "A smart thermostat installed at no cost.",
        "category": "free_item",
        "free_product_service": "Smart Thermostat",
        "expiration_type": "days",
        "expiration_value": 3,
    },
]

BUNDLE_RULES = [
    {
        "name": "Roof + Windows Bundle",
        "description": "Combine roofing with new windows.",
        "required_services": ["roofing", "windows-doors"],
        "discount_type": "fixed_amount",
        "discount_value": Decimal("1000.00"),
    },
    {
        "name": "Comfort Bundle",
        "description": "HVAC with any exterior service.",
        "required_services": ["hvac", "paint"],
        "discount_type": "free_service",
        "free_service": "Duct Cleaning",
        "bonus_message": "Bundle Bonus Applied: free duct cleaning for combining hvac + paint",
    },
]

LIFESTYLE_UPSELLS = [
    {
        "trigger_phrase": "we work from home",
        "product_suggestion": "Whole-Home Surge Protection",
        "category": "electrical",
        "base_price": Decimal("450.00"),
        "description": "Protect home office equipment from power surges.",
    },
    {
        "trigger_phrase": "we have a dog",
        "product_suggestion": "Pet Door Installation",
        "category": "windows-doors",
        "base_price": Decimal("650.00"),
        "description": "Energy-efficient pet door fitted to your new door.",
    },
    {
        "trigger_phrase": "summers are brutal",
        "product_suggestion": "Attic Fan",
        "category": "roofing",
        "base_price": Decimal("900.00"),
        "description": "Lower attic temperatures and cooling costs.",
    },
]


def expiration_for(offer: SpecialOfferRow, assigned_at: datetime) -> datetime | None:
    if not offer.expiration_value:
        return None
    if offer.expiration_type == "days":
        return assigned_at + timedelta(days=offer.expiration_value)
    return assigned_at + timedelta(hours=offer.expiration_value)


# ==============================================================================
# Seeding
# ==============================================================================


def seed_offers(proposal_id: int = DEMO_PROPOSAL_ID) -> None:
    print(f"🌱 Seeding offer catalog (demo proposal {proposal_id})...")

    with get_session() as session:
        print("🗑️  Clearing existing offer data...")
        for model in (ProposalAddonRow, ProposalOfferRow, LifestyleUpsellRow, BundleRuleRow, SpecialOfferRow):
            deleted = session.query(model).delete()
            print(f"   {model.__tablename__}: deleted {deleted}")

        offers = [SpecialOfferRow(**data) for data in SPECIAL_OFFERS]
        bundles = [BundleRuleRow(**data) for data in BUNDLE_RULES]
        upsells = [LifestyleUpsellRow(**data) for data in LIFESTYLE_UPSELLS]

        session.add_all([*offers, *bundles, *upsells])
        session.flush()  # Assign ids before linking

        assigned_at = datetime.now(timezone.utc)
        links = [
            ProposalOfferRow(
                proposal_id=proposal_id,
                offer_type="special_offer",
                offer_id=offer.id,
                expiration_date=expiration_for(offer, assigned_at),
            )
            for offer in offers
        ]
        links.append(
            ProposalOfferRow(
                proposal_id=proposal_id,
                offer_type="bundle_rule",
                offer_id=bundles[0].id,
                discount_amount=bundles[0].discount_value,
            )
        )
        session.add_all(links)
        session.flush()

        print(f"✅ Seeded {len(offers)} special offers, {len(bundles)} bundle rules, {len(upsells)} upsells")
        print(f"🔗 Linked {len(links)} offers to proposal {proposal_id}")


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--proposal-id", type=int, default=DEMO_PROPOSAL_ID)
    args = parser.parse_args()

    try:
        seed_offers(proposal_id=args.proposal_id)
    except Exception as e:
        print(f"❌ Error seeding database: {e}", file=sys.stderr)
        sys.exit(1)
