from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable, Mapping

from proposal_pricing.domain.money import addon_monthly_impact, effective_payment_factor
from proposal_pricing.domain.offers import LifestyleUpsell
from proposal_pricing.domain.pricing import ZERO, ProposalPricing


@dataclass(frozen=True, slots=True)
class Addon:
    id: str
    name: str
    price: Decimal
    description: str = ""
    monthly_impact: Decimal = ZERO
    selected: bool = False


AddonGroups = dict[str, tuple[Addon, ...]]


# Per-service addon catalog offered on every proposal for that service.
# Stored monthly impacts are deliberately absent: they are always re-derived.
DEFAULT_ADDON_CATALOG: dict[str, tuple[Addon, ...]] = {
    "roofing": (
        Addon(
            id="gutter_addon",
            name="Seamless Gutters",
            description="Protect your home with new seamless gutters.",
            price=Decimal("1500"),
        ),
        Addon(
            id="skylight_addon",
            name="Skylight Installation",
            description="Add natural light to your home.",
            price=Decimal("2500"),
        ),
    ),
    "windows-doors": (
        Addon(
            id="patio_door_addon",
            name="New Patio Door",
            description="Upgrade to a stylish and energy-efficient patio door.",
            price=Decimal("3100"),
        ),
        Addon(
            id="window_color_upgrade",
            name="Window Color Upgrade (Bronze/Black)",
            description="Enhance curb appeal with premium window colors.",
            price=Decimal("65"),
        ),
    ),
    "hvac": (
        Addon(
            id="smart_thermostat_addon",
            name="Smart Thermostat",
            description="Optimize your energy usage with a smart thermostat.",
            price=Decimal("350"),
        ),
    ),
    "paint": (
        Addon(
            id="premium_paint_addon",
            name="Premium Paint Upgrade",
            description="Longer-lasting and more vibrant colors.",
            price=Decimal("800"),
        ),
    ),
}


def build_addon_groups(
    catalog: Mapping[str, Iterable[Addon]],
    services: Iterable[str],
    pricing: ProposalPricing,
    selected_ids: Iterable[str] = (),
) -> AddonGroups:
    """
    Instantiate the addon groups for a proposal's services.

    Addons already attached to the proposal (selected_ids) start selected.
    Monthly impact is re-derived from the proposal's financing terms.
    """
    selected = set(selected_ids)
    groups: AddonGroups = {}
    for service in services:
        addons = catalog.get(service)
        if not addons:
            continue
        groups[service] = tuple(replace(addon, selected=addon.id in selected) for addon in addons)
    return reprice_addon_groups(groups, pricing)


def reprice_addon_groups(groups: Mapping[str, tuple[Addon, ...]], pricing: ProposalPricing) -> AddonGroups:
    factor = effective_payment_factor(pricing)
    return {
        service: tuple(
            replace(
                addon,
                monthly_impact=addon_monthly_impact(addon.price, factor, pricing.financing_term),
            )
            for addon in addons
        )
        for service, addons in groups.items()
    }


def find_addon(groups: Mapping[str, tuple[Addon, ...]], service_key: str, addon_id: str) -> Addon | None:
    return next((a for a in groups.get(service_key, ()) if a.id == addon_id), None)


def apply_toggle(
    groups: Mapping[str, tuple[Addon, ...]],
    service_key: str,
    addon_id: str,
    selected: bool,
) -> AddonGroups:
    """
    Optimistic selection transform. Returns a new mapping; unknown
    service/addon pairs return an unchanged copy.
    """
    updated = dict(groups)
    if service_key in updated:
        updated[service_key] = tuple(
            replace(addon, selected=selected) if addon.id == addon_id else addon
            for addon in updated[service_key]
        )
    return updated


def revert_toggle(
    groups: Mapping[str, tuple[Addon, ...]],
    service_key: str,
    addon_id: str,
    prior_selected: bool,
) -> AddonGroups:
    """Undo an optimistic toggle by restoring the flag observed before it."""
    return apply_toggle(groups, service_key, addon_id, prior_selected)


def selected_addons(groups: Mapping[str, tuple[Addon, ...]]) -> list[Addon]:
    return [addon for addons in groups.values() for addon in addons if addon.selected]


def reprice_upsells(upsells: Iterable[LifestyleUpsell], pricing: ProposalPricing) -> tuple[LifestyleUpsell, ...]:
    """Upsells price like addons: their stored monthly impact is replaced."""
    factor = effective_payment_factor(pricing)
    return tuple(
        replace(u, monthly_impact=addon_monthly_impact(u.base_price, factor, pricing.financing_term))
        for u in upsells
    )
