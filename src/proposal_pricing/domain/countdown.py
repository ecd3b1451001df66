"""Countdown timers for time-limited special offers.

Timers are plain values in an immutable-by-convention mapping; `tick` returns
a new mapping rather than mutating the one it was given, so the session can
swap it in wholesale once per second.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Mapping

from proposal_pricing.domain.offers import SpecialOffer

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE

OfferTimers = dict[int, "OfferTimer"]


@dataclass(frozen=True, slots=True)
class OfferTimer:
    hours: int
    minutes: int
    seconds: int

    @classmethod
    def from_milliseconds(cls, remaining_ms: int) -> "OfferTimer":
        return cls(
            hours=remaining_ms // MS_PER_HOUR,
            minutes=(remaining_ms % MS_PER_HOUR) // MS_PER_MINUTE,
            seconds=(remaining_ms % MS_PER_MINUTE) // MS_PER_SECOND,
        )

    @property
    def is_zero(self) -> bool:
        return self.hours == 0 and self.minutes == 0 and self.seconds == 0

    def decremented(self) -> "OfferTimer":
        """One second less, borrowing from minutes then hours."""
        if self.seconds > 0:
            return OfferTimer(self.hours, self.minutes, self.seconds - 1)
        if self.minutes > 0:
            return OfferTimer(self.hours, self.minutes - 1, 59)
        if self.hours > 0:
            return OfferTimer(self.hours - 1, 59, 59)
        return self


def initialize_timers(offers: Iterable[SpecialOffer], now: datetime) -> OfferTimers:
    """
    Build the live timer map from an offer list.

    Only offers whose expiration_date is after `now` get an entry; offers
    without a date are never timed.
    """
    timers: OfferTimers = {}
    for offer in offers:
        if offer.expiration_date is None:
            continue
        delta = offer.expiration_date - now
        remaining_ms = (
            delta.days * 86_400_000 + delta.seconds * MS_PER_SECOND + delta.microseconds // 1000
        )
        if remaining_ms > 0:
            timers[offer.id] = OfferTimer.from_milliseconds(remaining_ms)
    return timers


def tick(timers: Mapping[int, OfferTimer]) -> OfferTimers:
    """
    Advance every timer by one second.

    A timer that reaches (or already sits at) 0h 0m 0s is dropped from the
    returned map; that is the offer's transition to expired.
    """
    updated: OfferTimers = {}
    for offer_id, timer in timers.items():
        if timer.is_zero:
            continue
        next_timer = timer.decremented()
        if not next_timer.is_zero:
            updated[offer_id] = next_timer
    return updated


def format_timer(timer: OfferTimer) -> str:
    if timer.hours > 0:
        return f"{timer.hours}h {timer.minutes}m {timer.seconds}s"
    return f"{timer.minutes}m {timer.seconds}s"


def is_offer_expired(offer: SpecialOffer, timers: Mapping[int, OfferTimer], now: datetime) -> bool:
    """An offer is expired once it is no longer timed and its date has passed."""
    if offer.expiration_date is None:
        return False
    return offer.id not in timers and offer.expiration_date <= now
