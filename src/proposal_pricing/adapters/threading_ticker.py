from __future__ import annotations

import logging
import threading

from proposal_pricing.infra.config import offer_tick_interval_seconds
from proposal_pricing.ports.ticker import TickCallback, Ticker

logger = logging.getLogger(__name__)


class ThreadingTicker(Ticker):
    """
    Repeating tick on a daemon thread.

    - One thread per ticker, however many offers are being timed
    - Waits on an Event so stop() takes effect without sleeping out the interval
    - Exceptions from the callback are logged and the ticker keeps running
    """

    def __init__(self, interval_seconds: float | None = None) -> None:
        self._interval = interval_seconds if interval_seconds is not None else offer_tick_interval_seconds()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, callback: TickCallback) -> None:
        if self.is_running:
            raise RuntimeError("Ticker is already running")

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            args=(callback,),
            name="offer-countdown-ticker",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self._interval * 2)

    def _run(self, callback: TickCallback) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                callback()
            except Exception:
                logger.exception("Countdown tick failed")
