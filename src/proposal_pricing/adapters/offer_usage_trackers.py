from __future__ import annotations

import logging

from proposal_pricing.ports.offer_usage_tracker import OfferUsage, OfferUsageTracker

logger = logging.getLogger(__name__)


class InMemoryOfferUsageTracker(OfferUsageTracker):
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.records: list[OfferUsage] = []

    def record(self, usage: OfferUsage) -> None:
        if self.fail:
            raise ConnectionError("usage tracker unavailable")
        self.records.append(usage)


class LoggingOfferUsageTracker(OfferUsageTracker):
    def record(self, usage: OfferUsage) -> None:
        logger.info(
            "Offer usage",
            extra={
                "proposal_id": usage.proposal_id,
                "offer_id": usage.offer_id,
                "offer_type": usage.offer_type,
                "action": usage.action,
                "discount_amount": str(usage.discount_amount),
            },
        )
