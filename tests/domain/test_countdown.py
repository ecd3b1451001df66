from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from proposal_pricing.domain.countdown import (
    OfferTimer,
    format_timer,
    initialize_timers,
    is_offer_expired,
    tick,
)
from proposal_pricing.domain.offers import SpecialOffer

NOW = datetime(2026, 3, 14, 9, 0, 0, tzinfo=timezone.utc)


def _offer(offer_id: int, expires_in: timedelta | None) -> SpecialOffer:
    return SpecialOffer(
        id=offer_id,
        name=f"Offer {offer_id}",
        expiration_date=NOW + expires_in if expires_in is not None else None,
    )


# ==============================================================================
# Initialization
# ==============================================================================


def test_initializes_hours_minutes_seconds():
    timers = initialize_timers([_offer(1, timedelta(milliseconds=3_661_000))], NOW)

    assert timers == {1: OfferTimer(hours=1, minutes=1, seconds=1)}


def test_hours_are_not_capped_at_a_day():
    timers = initialize_timers([_offer(1, timedelta(days=2, minutes=5))], NOW)

    assert timers[1] == OfferTimer(hours=48, minutes=5, seconds=0)


def test_past_offer_gets_no_timer():
    timers = initialize_timers([_offer(1, timedelta(hours=-2))], NOW)

    assert timers == {}


def test_offer_expiring_now_gets_no_timer():
    assert initialize_timers([_offer(1, timedelta(0))], NOW) == {}


def test_undated_offer_gets_no_timer():
    assert initialize_timers([_offer(1, None)], NOW) == {}


def test_sub_second_remainder_is_truncated():
    timers = initialize_timers([_offer(1, timedelta(milliseconds=2_999))], NOW)

    assert timers[1] == OfferTimer(hours=0, minutes=0, seconds=2)


# ==============================================================================
# Tick
# ==============================================================================


def test_tick_borrows_from_minutes_and_hours():
    timers = {
        1: OfferTimer(1, 0, 0),
        2: OfferTimer(0, 5, 0),
        3: OfferTimer(0, 0, 30),
    }

    assert tick(timers) == {
        1: OfferTimer(0, 59, 59),
        2: OfferTimer(0, 4, 59),
        3: OfferTimer(0, 0, 29),
    }


def test_tick_does_not_mutate_input():
    timers = {1: OfferTimer(0, 0, 10)}

    tick(timers)

    assert timers == {1: OfferTimer(0, 0, 10)}


def test_timer_reaching_zero_is_removed():
    assert tick({1: OfferTimer(0, 0, 1), 2: OfferTimer(0, 0, 2)}) == {2: OfferTimer(0, 0, 1)}


def test_zero_timer_is_removed():
    assert tick({1: OfferTimer(0, 0, 0)}) == {}


def test_timer_is_gone_after_its_full_duration():
    timers = initialize_timers([_offer(7, timedelta(milliseconds=3_661_000))], NOW)

    for _ in range(3660):
        timers = tick(timers)
    assert timers == {7: OfferTimer(0, 0, 1)}

    timers = tick(timers)
    assert 7 not in timers


# ==============================================================================
# Formatting & expiry
# ==============================================================================


@pytest.mark.parametrize(
    "timer, expected",
    [
        (OfferTimer(1, 1, 1), "1h 1m 1s"),
        (OfferTimer(26, 0, 5), "26h 0m 5s"),
        (OfferTimer(0, 12, 3), "12m 3s"),
        (OfferTimer(0, 0, 9), "0m 9s"),
    ],
)
def test_format_timer(timer: OfferTimer, expected: str):
    assert format_timer(timer) == expected


def test_timed_offer_is_not_expired():
    offer = _offer(1, timedelta(hours=1))

    assert not is_offer_expired(offer, {1: OfferTimer(1, 0, 0)}, NOW)


def test_untimed_offer_past_its_date_is_expired():
    offer = _offer(1, timedelta(seconds=-1))

    assert is_offer_expired(offer, {}, NOW)


def test_undated_offer_never_expires():
    assert not is_offer_expired(_offer(1, None), {}, NOW)
