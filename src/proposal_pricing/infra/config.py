from __future__ import annotations

import os

DEFAULT_TICK_INTERVAL_SECONDS = 1.0


def offer_tick_interval_seconds() -> float:
    """Countdown tick interval. One second unless overridden for demos/tests."""
    raw = os.getenv("OFFER_TICK_INTERVAL_SECONDS")

    if not raw:
        return DEFAULT_TICK_INTERVAL_SECONDS

    try:
        interval = float(raw)
    except ValueError:
        raise RuntimeError(f"OFFER_TICK_INTERVAL_SECONDS must be a number, got {raw!r}")

    if interval <= 0:
        raise RuntimeError("OFFER_TICK_INTERVAL_SECONDS must be > 0")

    return interval
