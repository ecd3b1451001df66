from __future__ import annotations

from proposal_pricing.ports.ticker import TickCallback, Ticker


class ManualTicker(Ticker):
    """
    Ticker driven by the caller, for tests and deterministic replays.

    advance(n) fires n ticks synchronously; nothing fires once stopped.
    """

    def __init__(self) -> None:
        self._callback: TickCallback | None = None

    @property
    def is_running(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        if self._callback is not None:
            raise RuntimeError("Ticker is already running")
        self._callback = callback

    def stop(self) -> None:
        self._callback = None

    def advance(self, ticks: int = 1) -> None:
        for _ in range(ticks):
            if self._callback is None:
                return
            self._callback()
