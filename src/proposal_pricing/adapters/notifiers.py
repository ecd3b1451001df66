from __future__ import annotations

import logging

from proposal_pricing.ports.notifier import Notice, Notifier

logger = logging.getLogger(__name__)


class InMemoryNotifier(Notifier):
    """Collects notices in order; what a UI would show as toasts."""

    def __init__(self) -> None:
        self.notices: list[Notice] = []

    def notify(self, notice: Notice) -> None:
        self.notices.append(notice)


class LoggingNotifier(Notifier):
    def notify(self, notice: Notice) -> None:
        level = logging.WARNING if notice.level == "error" else logging.INFO
        logger.log(level, notice.title, extra={"notice_level": notice.level, "description": notice.description})
