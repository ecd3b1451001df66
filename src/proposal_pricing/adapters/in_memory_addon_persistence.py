from __future__ import annotations

from proposal_pricing.ports.addon_persistence import (
    AddonPersistence,
    AddonPersistRequest,
    PersistErr,
    PersistOk,
    PersistResult,
)


class InMemoryAddonPersistence(AddonPersistence):
    """
    Canonical contract implementation for tests.

    - Keeps persisted addons per proposal in insertion order
    - While `fail` is set every call returns PersistErr and nothing changes
    - `calls` records every request, successful or not
    """

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[tuple[str, object]] = []
        self._addons: dict[int, dict[str, AddonPersistRequest]] = {}

    def add(self, request: AddonPersistRequest) -> PersistResult:
        self.calls.append(("add", request))
        if self.fail:
            return PersistErr(reason="addon store unavailable")
        self._addons.setdefault(request.proposal_id, {})[request.addon_id] = request
        return PersistOk()

    def remove(self, proposal_id: int, addon_id: str) -> PersistResult:
        self.calls.append(("remove", (proposal_id, addon_id)))
        if self.fail:
            return PersistErr(reason="addon store unavailable")
        self._addons.get(proposal_id, {}).pop(addon_id, None)
        return PersistOk()

    def persisted_ids(self, proposal_id: int) -> list[str]:
        return list(self._addons.get(proposal_id, {}))
