"""
Production wiring for ProposalPricingSession.

A pricing session lives as long as a customer has the proposal open, so it
gets its own database session (not a request-scoped one) and a real
countdown thread. Callers must dispose() the pricing session and close the
database session when the proposal view goes away.
"""

from __future__ import annotations

from typing import Iterable

from sqlalchemy.orm import Session

from proposal_pricing.adapters.notifiers import LoggingNotifier
from proposal_pricing.adapters.offer_usage_trackers import LoggingOfferUsageTracker
from proposal_pricing.adapters.sqlalchemy_addon_persistence import SqlAlchemyAddonPersistence
from proposal_pricing.adapters.sqlalchemy_offer_catalog_source import SqlAlchemyOfferCatalogSource
from proposal_pricing.adapters.threading_ticker import ThreadingTicker
from proposal_pricing.domain.pricing import ProposalPricing
from proposal_pricing.use_cases.load_offer_catalog import LoadOfferCatalog, LoadOfferCatalogRequest
from proposal_pricing.use_cases.pricing_session import (
    Clock,
    ProposalLoad,
    ProposalPricingSession,
    utc_now,
)


def build_pricing_session(
    db: Session,
    clock: Clock = utc_now,
    tick_interval_seconds: float | None = None,
) -> ProposalPricingSession:
    """Session backed by proposal_addons, a ThreadingTicker and log-based notices."""
    return ProposalPricingSession(
        addon_persistence=SqlAlchemyAddonPersistence(session=db),
        ticker=ThreadingTicker(interval_seconds=tick_interval_seconds),
        notifier=LoggingNotifier(),
        usage_tracker=LoggingOfferUsageTracker(),
        clock=clock,
    )


def open_pricing_session(
    db: Session,
    proposal_id: int,
    pricing: ProposalPricing,
    services: Iterable[str] = (),
    addon_ids: Iterable[str] = (),
    clock: Clock = utc_now,
    tick_interval_seconds: float | None = None,
) -> ProposalPricingSession:
    """
    Load a proposal's offers from the database and start pricing it.

    Offer fetch failures leave the catalog empty (see LoadOfferCatalog);
    the returned session is already loaded and ticking.
    """
    services = tuple(services)
    catalog = LoadOfferCatalog(SqlAlchemyOfferCatalogSource(session=db)).execute(
        LoadOfferCatalogRequest(proposal_id=proposal_id, services=services)
    )

    pricing_session = build_pricing_session(db, clock=clock, tick_interval_seconds=tick_interval_seconds)
    pricing_session.load(
        ProposalLoad(
            proposal_id=proposal_id,
            pricing=pricing,
            services=services,
            catalog=catalog,
            addon_ids=tuple(addon_ids),
        )
    )
    return pricing_session
