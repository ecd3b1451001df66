"""
Tests for the production pricing session wiring.

The database Session is mocked; the ticker is a real ThreadingTicker with a
long interval so no tick fires while a test runs.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from proposal_pricing.adapters.notifiers import LoggingNotifier
from proposal_pricing.adapters.offer_usage_trackers import LoggingOfferUsageTracker
from proposal_pricing.adapters.sqlalchemy_addon_persistence import SqlAlchemyAddonPersistence
from proposal_pricing.adapters.threading_ticker import ThreadingTicker
from proposal_pricing.domain.pricing import ProposalPricing
from proposal_pricing.infra.pricing_sessions import build_pricing_session, open_pricing_session
from proposal_pricing.use_cases.pricing_session import SessionState, ToggleOutcome

BASE = ProposalPricing(
    subtotal=Decimal("10000"),
    total=Decimal("10000"),
    monthly_payment=Decimal("142"),
    payment_factor=Decimal("1.42"),
    financing_term=120,
)


@pytest.fixture()
def mock_db() -> Mock:
    return Mock(spec=Session)


def _result(offer_rows: list[dict] | None = None, upsell_rows: list | None = None) -> Mock:
    result = Mock()
    result.mappings.return_value.all.return_value = offer_rows or []
    result.scalars.return_value.all.return_value = upsell_rows or []
    return result


# ==============================================================================
# build_pricing_session()
# ==============================================================================


def test_build_wires_production_adapters(mock_db: Mock) -> None:
    session = build_pricing_session(mock_db, tick_interval_seconds=3600)

    assert isinstance(session._addon_persistence, SqlAlchemyAddonPersistence)
    assert session._addon_persistence._session is mock_db
    assert isinstance(session._ticker, ThreadingTicker)
    assert isinstance(session._notifier, LoggingNotifier)
    assert isinstance(session._usage_tracker, LoggingOfferUsageTracker)
    assert session.state is SessionState.NEW


# ==============================================================================
# open_pricing_session()
# ==============================================================================


def test_open_loads_offers_and_starts_ticking(mock_db: Mock) -> None:
    offer = {
        "offer_id": 1,
        "offer_type": "special_offer",
        "name": "Signing Bonus",
        "discount_amount": Decimal("500.00"),
    }
    mock_db.execute.side_effect = [_result(offer_rows=[offer]), _result()]

    session = open_pricing_session(mock_db, 42, BASE, services=["roofing"], tick_interval_seconds=3600)
    try:
        assert session.state is SessionState.ACTIVE
        assert session._ticker.is_running
        assert session.selected_offer_ids == frozenset({1})
        assert session.current_pricing().total == Decimal("9500.00")
        assert "roofing" in session.addon_groups
    finally:
        session.dispose()

    assert not session._ticker.is_running


def test_open_with_failed_offer_read_still_prices(mock_db: Mock) -> None:
    mock_db.execute.side_effect = [OperationalError("SELECT ...", {}, Exception("timeout")), _result()]

    session = open_pricing_session(mock_db, 42, BASE, tick_interval_seconds=3600)
    try:
        mock_db.rollback.assert_called_once()
        assert session.catalog.special_offers == ()
        assert session.current_pricing().total == Decimal("10000.00")
    finally:
        session.dispose()


def test_addon_toggle_commits_through_the_database(mock_db: Mock) -> None:
    existing_row = Mock()
    select_result = Mock()
    select_result.scalar_one_or_none.return_value = existing_row
    mock_db.execute.side_effect = [_result(), _result(), select_result]

    session = open_pricing_session(
        mock_db, 42, BASE, services=["roofing"], addon_ids=["skylight_addon"], tick_interval_seconds=3600
    )
    try:
        outcome = session.toggle_addon("roofing", "gutter_addon", True)

        assert outcome is ToggleOutcome.PERSISTED
        mock_db.commit.assert_called_once()
        assert existing_row.price == Decimal("1500")
        # 2500 skylight already attached + 1500 gutters
        assert session.current_pricing().total == Decimal("14000.00")
    finally:
        session.dispose()
