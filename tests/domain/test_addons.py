from __future__ import annotations

from decimal import Decimal

from proposal_pricing.domain.addons import (
    DEFAULT_ADDON_CATALOG,
    Addon,
    apply_toggle,
    build_addon_groups,
    find_addon,
    reprice_addon_groups,
    reprice_upsells,
    revert_toggle,
    selected_addons,
)
from proposal_pricing.domain.offers import LifestyleUpsell
from proposal_pricing.domain.pricing import ProposalPricing

FACTOR_PRICING = ProposalPricing(
    subtotal=Decimal("10000"),
    total=Decimal("10000"),
    monthly_payment=Decimal("142"),
    payment_factor=Decimal("1.42"),
)


def test_groups_only_for_services_with_addons():
    groups = build_addon_groups(DEFAULT_ADDON_CATALOG, ["roofing", "solar"], FACTOR_PRICING)

    assert list(groups) == ["roofing"]
    assert [a.id for a in groups["roofing"]] == ["gutter_addon", "skylight_addon"]


def test_previously_attached_addons_start_selected():
    groups = build_addon_groups(DEFAULT_ADDON_CATALOG, ["roofing"], FACTOR_PRICING, ["skylight_addon"])

    assert [a.selected for a in groups["roofing"]] == [False, True]


def test_monthly_impact_is_derived_not_stored():
    catalog = {"roofing": (Addon(id="gutter_addon", name="Gutters", price=Decimal("1500"), monthly_impact=Decimal("99")),)}

    groups = build_addon_groups(catalog, ["roofing"], FACTOR_PRICING)

    assert groups["roofing"][0].monthly_impact == Decimal("21.3")


def test_reprice_follows_new_financing_terms():
    groups = build_addon_groups(DEFAULT_ADDON_CATALOG, ["roofing"], FACTOR_PRICING)
    term_only = ProposalPricing(
        subtotal=Decimal("10000"),
        total=Decimal("10000"),
        monthly_payment=Decimal("0"),
        financing_term=100,
    )

    repriced = reprice_addon_groups(groups, term_only)

    assert repriced["roofing"][0].monthly_impact == Decimal("15")


def test_apply_toggle_returns_new_mapping():
    groups = build_addon_groups(DEFAULT_ADDON_CATALOG, ["roofing"], FACTOR_PRICING)

    toggled = apply_toggle(groups, "roofing", "gutter_addon", True)

    assert find_addon(toggled, "roofing", "gutter_addon").selected is True
    assert find_addon(groups, "roofing", "gutter_addon").selected is False


def test_apply_toggle_unknown_pair_is_a_noop():
    groups = build_addon_groups(DEFAULT_ADDON_CATALOG, ["roofing"], FACTOR_PRICING)

    assert apply_toggle(groups, "hvac", "gutter_addon", True) == groups
    assert apply_toggle(groups, "roofing", "nope", True) == groups


def test_revert_restores_exact_prior_state():
    groups = build_addon_groups(DEFAULT_ADDON_CATALOG, ["roofing"], FACTOR_PRICING, ["skylight_addon"])

    toggled = apply_toggle(groups, "roofing", "skylight_addon", False)
    reverted = revert_toggle(toggled, "roofing", "skylight_addon", True)

    assert reverted == groups


def test_selected_addons_across_groups():
    groups = build_addon_groups(
        DEFAULT_ADDON_CATALOG,
        ["roofing", "hvac"],
        FACTOR_PRICING,
        ["gutter_addon", "smart_thermostat_addon"],
    )

    assert [a.id for a in selected_addons(groups)] == ["gutter_addon", "smart_thermostat_addon"]


def test_upsells_are_repriced_like_addons():
    upsells = [LifestyleUpsell(id=1, name="Attic Fan", base_price=Decimal("900"), monthly_impact=Decimal("1"))]

    repriced = reprice_upsells(upsells, FACTOR_PRICING)

    assert repriced[0].monthly_impact == Decimal("12.78")
