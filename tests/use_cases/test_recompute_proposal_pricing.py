from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from proposal_pricing.domain.addons import DEFAULT_ADDON_CATALOG, apply_toggle, build_addon_groups
from proposal_pricing.domain.countdown import OfferTimer
from proposal_pricing.domain.offers import BundleRule, LifestyleUpsell, OfferCatalog, SpecialOffer
from proposal_pricing.domain.pricing import MonthlyPaymentMethod, ProposalPricing
from proposal_pricing.use_cases.recompute_proposal_pricing import PricingSnapshot, RecomputeProposalPricing

NOW = datetime(2026, 3, 14, 9, 0, 0, tzinfo=timezone.utc)

BASE = ProposalPricing(
    subtotal=Decimal("10000"),
    total=Decimal("10000"),
    monthly_payment=Decimal("142"),
    payment_factor=Decimal("1.42"),
    financing_term=120,
)

FLAT_500 = SpecialOffer(id=1, name="Signing Bonus", discount_amount=Decimal("500"))
PERCENT_10 = SpecialOffer(id=2, name="Spring", discount_percentage=Decimal("10"))
FREE_ITEM = SpecialOffer(id=3, name="Free Thermostat", free_product_service="Smart Thermostat")
ATTIC_FAN = LifestyleUpsell(id=9, name="Attic Fan", base_price=Decimal("900"))


@pytest.fixture
def uc() -> RecomputeProposalPricing:
    return RecomputeProposalPricing()


def _snapshot(**overrides) -> PricingSnapshot:
    values = {
        "pricing": BASE,
        "now": NOW,
        "addon_groups": build_addon_groups(DEFAULT_ADDON_CATALOG, ["roofing"], BASE),
        "catalog": OfferCatalog(special_offers=(FLAT_500, PERCENT_10, FREE_ITEM), lifestyle_upsells=(ATTIC_FAN,)),
    }
    values.update(overrides)
    return PricingSnapshot(**values)


# ============================================================================
# SCENARIOS
# ============================================================================


def test_no_selection_reproduces_stored_pricing(uc: RecomputeProposalPricing):
    derived = uc.execute(_snapshot())

    assert derived.subtotal == Decimal("10000.00")
    assert derived.total == Decimal("10000.00")
    assert derived.monthly_payment == Decimal("142.00")
    assert derived.monthly_payment_method is MonthlyPaymentMethod.PAYMENT_FACTOR


def test_addon_raises_total_and_payment(uc: RecomputeProposalPricing):
    groups = apply_toggle(_snapshot().addon_groups, "roofing", "gutter_addon", True)

    derived = uc.execute(_snapshot(addon_groups=groups))

    assert derived.subtotal == Decimal("11500.00")
    assert derived.total == Decimal("11500.00")
    assert derived.monthly_payment == Decimal("163.30")
    assert derived.additions == Decimal("1500.00")


def test_flat_offer_lowers_total(uc: RecomputeProposalPricing):
    derived = uc.execute(_snapshot(selected_offer_ids=frozenset({1})))

    assert derived.total == Decimal("9500.00")
    assert derived.savings == Decimal("500.00")
    assert derived.subtotal == Decimal("10000.00")


def test_percentage_offer_lowers_total(uc: RecomputeProposalPricing):
    derived = uc.execute(_snapshot(selected_offer_ids=frozenset({2})))

    assert derived.savings == Decimal("1000.00")
    assert derived.total == Decimal("9000.00")


def test_percentage_is_taken_on_stored_total_not_on_additions(uc: RecomputeProposalPricing):
    groups = apply_toggle(_snapshot().addon_groups, "roofing", "gutter_addon", True)

    derived = uc.execute(_snapshot(addon_groups=groups, selected_offer_ids=frozenset({2})))

    assert derived.savings == Decimal("1000.00")
    assert derived.total == Decimal("10500.00")


def test_free_item_offer_saves_nothing(uc: RecomputeProposalPricing):
    derived = uc.execute(_snapshot(selected_offer_ids=frozenset({3})))

    assert derived.total == Decimal("10000.00")


def test_upsell_adds_base_price(uc: RecomputeProposalPricing):
    derived = uc.execute(_snapshot(selected_upsell_ids=frozenset({9})))

    assert derived.total == Decimal("10900.00")
    assert derived.monthly_payment == Decimal("154.78")


def test_stored_discount_is_subtracted(uc: RecomputeProposalPricing):
    pricing = ProposalPricing(
        subtotal=Decimal("10000"),
        total=Decimal("10000"),
        monthly_payment=Decimal("142"),
        payment_factor=Decimal("1.42"),
        discount=Decimal("250"),
    )

    derived = uc.execute(_snapshot(pricing=pricing))

    assert derived.total == Decimal("9750.00")


def test_bundle_savings_are_display_only(uc: RecomputeProposalPricing):
    catalog = OfferCatalog(
        bundle_rules=(BundleRule(id=4, name="Roof + Windows", bonus_message="", discount_value=Decimal("1000")),)
    )

    derived = uc.execute(_snapshot(catalog=catalog))

    assert derived.total == Decimal("10000.00")
    assert derived.bundle_savings_display == Decimal("1000.00")


def test_zero_rate_amortization_without_factor(uc: RecomputeProposalPricing):
    pricing = ProposalPricing(
        subtotal=Decimal("12000"),
        total=Decimal("12000"),
        monthly_payment=Decimal("0"),
        financing_term=60,
        interest_rate=Decimal("0"),
    )

    derived = uc.execute(_snapshot(pricing=pricing, addon_groups={}))

    assert derived.monthly_payment == Decimal("200.00")
    assert derived.monthly_payment_method is MonthlyPaymentMethod.AMORTIZATION


def test_impact_delta_fallback(uc: RecomputeProposalPricing):
    """No factor, no rate: stored payment plus each item's per-term impact."""
    pricing = ProposalPricing(
        subtotal=Decimal("0"),
        total=Decimal("0"),
        monthly_payment=Decimal("150"),
        financing_term=100,
    )
    groups = apply_toggle(
        build_addon_groups(DEFAULT_ADDON_CATALOG, ["roofing"], pricing), "roofing", "gutter_addon", True
    )

    derived = uc.execute(_snapshot(pricing=pricing, addon_groups=groups, selected_offer_ids=frozenset({1})))

    # 150 + 1500/100 - 500/100
    assert derived.monthly_payment == Decimal("160.00")
    assert derived.monthly_payment_method is MonthlyPaymentMethod.IMPACT_DELTA


# ============================================================================
# EXPIRATION
# ============================================================================


def test_expired_offer_contributes_no_savings(uc: RecomputeProposalPricing):
    expired = SpecialOffer(id=1, name="Gone", discount_amount=Decimal("500"), expiration_date=NOW - timedelta(hours=1))

    derived = uc.execute(
        _snapshot(catalog=OfferCatalog(special_offers=(expired,)), selected_offer_ids=frozenset({1}))
    )

    assert derived.total == Decimal("10000.00")


def test_timed_offer_still_applies(uc: RecomputeProposalPricing):
    live = SpecialOffer(id=1, name="Live", discount_amount=Decimal("500"), expiration_date=NOW + timedelta(hours=1))

    derived = uc.execute(
        _snapshot(
            catalog=OfferCatalog(special_offers=(live,)),
            selected_offer_ids=frozenset({1}),
            timers={1: OfferTimer(1, 0, 0)},
        )
    )

    assert derived.total == Decimal("9500.00")


# ============================================================================
# PROPERTIES
# ============================================================================


def test_recompute_is_idempotent(uc: RecomputeProposalPricing):
    snapshot = _snapshot(selected_offer_ids=frozenset({1, 2}), selected_upsell_ids=frozenset({9}))

    assert uc.execute(snapshot) == uc.execute(snapshot)


def test_more_addons_never_lower_total(uc: RecomputeProposalPricing):
    groups = _snapshot().addon_groups
    previous = uc.execute(_snapshot(addon_groups=groups)).total

    for addon_id in ("gutter_addon", "skylight_addon"):
        groups = apply_toggle(groups, "roofing", addon_id, True)
        total = uc.execute(_snapshot(addon_groups=groups)).total
        assert total >= previous
        previous = total


def test_more_offers_never_raise_total(uc: RecomputeProposalPricing):
    previous = uc.execute(_snapshot()).total

    for selected in ({1}, {1, 2}, {1, 2, 3}):
        total = uc.execute(_snapshot(selected_offer_ids=frozenset(selected))).total
        assert total <= previous
        previous = total


def test_huge_savings_never_go_negative(uc: RecomputeProposalPricing):
    whopper = SpecialOffer(id=1, name="Whopper", discount_amount=Decimal("1000000"))

    derived = uc.execute(
        _snapshot(catalog=OfferCatalog(special_offers=(whopper,)), selected_offer_ids=frozenset({1}))
    )

    assert derived.total == Decimal("0.00")
    assert derived.monthly_payment == Decimal("0.00")
