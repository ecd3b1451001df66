"""
Dependency injection for FastAPI routes.

Database sessions are per-request and never cached. Use cases without
collaborators are stateless and shared through lru_cache.
"""

from __future__ import annotations

from datetime import datetime
from functools import lru_cache
from typing import Callable, Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from proposal_pricing.adapters.sqlalchemy_offer_catalog_source import SqlAlchemyOfferCatalogSource
from proposal_pricing.infra.db.session import get_session
from proposal_pricing.use_cases.calculate_monthly_payment import CalculateMonthlyPayment
from proposal_pricing.use_cases.load_offer_catalog import LoadOfferCatalog
from proposal_pricing.use_cases.pricing_session import utc_now
from proposal_pricing.use_cases.recompute_proposal_pricing import RecomputeProposalPricing


def get_db() -> Generator[Session, None, None]:
    """
    Provides a database session for a single request.

    get_session() commits on success, rolls back on exception and always
    closes the session when the request ends.
    """
    with get_session() as session:
        yield session


def get_clock() -> Callable[[], datetime]:
    """Clock used to decide offer expiration. Overridden in tests."""
    return utc_now


@lru_cache
def get_recompute_pricing_use_case() -> RecomputeProposalPricing:
    return RecomputeProposalPricing()


@lru_cache
def get_calculate_monthly_payment_use_case() -> CalculateMonthlyPayment:
    return CalculateMonthlyPayment()


def get_load_offer_catalog_use_case(db: Session = Depends(get_db)) -> LoadOfferCatalog:
    """
    Per-request LoadOfferCatalog bound to the request's database session.

    Args:
        db: Database session (injected by FastAPI via Depends(get_db))
    """
    return LoadOfferCatalog(offer_catalog_source=SqlAlchemyOfferCatalogSource(session=db))
