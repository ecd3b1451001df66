"""Contract checks for the in-memory adapters used throughout the test suite."""

from __future__ import annotations

from decimal import Decimal

import pytest

from proposal_pricing.adapters.in_memory_addon_persistence import InMemoryAddonPersistence
from proposal_pricing.adapters.in_memory_offer_catalog_source import InMemoryOfferCatalogSource
from proposal_pricing.adapters.notifiers import InMemoryNotifier, LoggingNotifier
from proposal_pricing.adapters.offer_usage_trackers import InMemoryOfferUsageTracker, LoggingOfferUsageTracker
from proposal_pricing.ports.addon_persistence import AddonPersistRequest, PersistErr, PersistOk
from proposal_pricing.ports.notifier import Notice
from proposal_pricing.ports.offer_usage_tracker import OfferUsage


def _request(addon_id: str) -> AddonPersistRequest:
    return AddonPersistRequest(
        proposal_id=1,
        addon_id=addon_id,
        service_key="roofing",
        price=Decimal("1500"),
        monthly_impact=Decimal("21.30"),
    )


def test_offer_source_returns_copies():
    source = InMemoryOfferCatalogSource(proposal_offers={1: [{"offer_id": 1, "offer_type": "special_offer"}]})

    records = source.fetch_proposal_offers(1)
    records[0]["offer_id"] = 99

    assert source.fetch_proposal_offers(1) == [{"offer_id": 1, "offer_type": "special_offer"}]
    assert source.fetch_proposal_offers(2) == []


def test_offer_source_failures_raise():
    source = InMemoryOfferCatalogSource(fail_offers=True, fail_upsells=True)

    with pytest.raises(ConnectionError):
        source.fetch_proposal_offers(1)
    with pytest.raises(ConnectionError):
        source.fetch_lifestyle_upsells()


def test_addon_persistence_add_and_remove():
    persistence = InMemoryAddonPersistence()

    assert persistence.add(_request("gutter_addon")) == PersistOk()
    assert persistence.add(_request("skylight_addon")) == PersistOk()
    assert persistence.remove(1, "gutter_addon") == PersistOk()

    assert persistence.persisted_ids(1) == ["skylight_addon"]
    assert [action for action, _ in persistence.calls] == ["add", "add", "remove"]


def test_addon_persistence_failure_changes_nothing():
    persistence = InMemoryAddonPersistence(fail=True)

    assert isinstance(persistence.add(_request("gutter_addon")), PersistErr)
    assert persistence.persisted_ids(1) == []


def test_notifiers():
    notifier = InMemoryNotifier()
    notice = Notice(level="success", title="Upgrade Added", description="Gutters added.")

    notifier.notify(notice)
    LoggingNotifier().notify(notice)

    assert notifier.notices == [notice]


def test_usage_trackers():
    usage = OfferUsage(proposal_id=1, offer_id=2, action="applied", discount_amount=Decimal("500"))
    tracker = InMemoryOfferUsageTracker()

    tracker.record(usage)
    LoggingOfferUsageTracker().record(usage)

    assert tracker.records == [usage]
    with pytest.raises(ConnectionError):
        InMemoryOfferUsageTracker(fail=True).record(usage)
