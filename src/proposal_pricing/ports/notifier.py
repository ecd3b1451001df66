from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal

NoticeLevel = Literal["info", "success", "error"]


@dataclass(frozen=True, slots=True)
class Notice:
    """User-visible, non-blocking message (a toast, in UI terms)."""

    level: NoticeLevel
    title: str
    description: str


class Notifier(ABC):
    @abstractmethod
    def notify(self, notice: Notice) -> None: ...
