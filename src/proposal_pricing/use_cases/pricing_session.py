"""Per-proposal pricing session.

Owns every mutable piece of live pricing for one proposal: addon groups, the
selected special offers and upsells, the countdown timers and the last
published DerivedPricing. Nothing is module-level, so several proposals can be
priced side by side without sharing state.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterable, Mapping

from proposal_pricing.domain.addons import (
    DEFAULT_ADDON_CATALOG,
    Addon,
    AddonGroups,
    apply_toggle,
    build_addon_groups,
    find_addon,
    reprice_addon_groups,
    reprice_upsells,
    revert_toggle,
)
from proposal_pricing.domain.countdown import (
    OfferTimer,
    OfferTimers,
    format_timer,
    initialize_timers,
    is_offer_expired,
    tick,
)
from proposal_pricing.domain.errors import SessionStateError
from proposal_pricing.domain.offers import OfferCatalog
from proposal_pricing.domain.pricing import ZERO, DerivedPricing, ProposalPricing, to_cents
from proposal_pricing.ports.addon_persistence import (
    AddonPersistence,
    AddonPersistRequest,
    PersistErr,
    PersistResult,
)
from proposal_pricing.ports.notifier import Notice, Notifier
from proposal_pricing.ports.offer_usage_tracker import OfferUsage, OfferUsageTracker
from proposal_pricing.ports.ticker import Ticker
from proposal_pricing.use_cases.recompute_proposal_pricing import (
    PricingSnapshot,
    RecomputeProposalPricing,
)

logger = logging.getLogger(__name__)

PricingListener = Callable[[DerivedPricing], None]
Clock = Callable[[], datetime]

SELECTION_ERROR = "Could not update your selection. Please try again."


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionState(str, Enum):
    NEW = "new"
    ACTIVE = "active"
    DISPOSED = "disposed"


class ToggleOutcome(str, Enum):
    NOT_FOUND = "not_found"
    PERSISTED = "persisted"
    ROLLED_BACK = "rolled_back"


@dataclass(frozen=True, slots=True)
class ProposalLoad:
    """Everything the session needs to start pricing a proposal."""

    proposal_id: int
    pricing: ProposalPricing
    services: tuple[str, ...] = field(default_factory=tuple)
    catalog: OfferCatalog = field(default_factory=OfferCatalog)
    addon_ids: tuple[str, ...] = field(default_factory=tuple)


class ProposalPricingSession:
    """
    Live pricing for one proposal.

    Every state change (addon/upsell/offer toggle, base pricing update,
    countdown expiry) funnels into the same recomputation, which reads one
    consistent snapshot and replaces the published pricing wholesale.

    Lifecycle:
    - load() builds state and starts the shared countdown tick
    - load() again rebuilds everything from the new proposal (no stale timers)
    - dispose() stops the tick; later commands raise SessionStateError
    """

    def __init__(
        self,
        addon_persistence: AddonPersistence,
        ticker: Ticker,
        notifier: Notifier | None = None,
        usage_tracker: OfferUsageTracker | None = None,
        addon_catalog: Mapping[str, Iterable[Addon]] = DEFAULT_ADDON_CATALOG,
        clock: Clock = utc_now,
        preselect_offers: bool = True,
    ) -> None:
        self._addon_persistence = addon_persistence
        self._ticker = ticker
        self._notifier = notifier
        self._usage_tracker = usage_tracker
        self._addon_catalog = addon_catalog
        self._clock = clock
        self._preselect_offers = preselect_offers
        self._recompute = RecomputeProposalPricing()

        self._lock = threading.RLock()
        self._listeners: list[PricingListener] = []
        self._state = SessionState.NEW
        # Bumped on every load so late persistence results for an old proposal are ignored
        self._generation = 0
        # Latest toggle number per (service_key, addon_id); a failed toggle only
        # rolls back while it is still the latest one for its addon
        self._addon_toggle_seq: dict[tuple[str, str], int] = {}

        self._proposal_id: int | None = None
        self._pricing: ProposalPricing | None = None
        self._addon_groups: AddonGroups = {}
        self._catalog = OfferCatalog()
        self._selected_offer_ids: frozenset[int] = frozenset()
        self._selected_upsell_ids: frozenset[int] = frozenset()
        self._timers: OfferTimers = {}
        self._current: DerivedPricing | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    def load(self, proposal: ProposalLoad) -> DerivedPricing:
        with self._lock:
            self._ensure_not_disposed()

            now = self._clock()
            self._generation += 1
            self._addon_toggle_seq = {}
            self._proposal_id = proposal.proposal_id
            self._pricing = proposal.pricing
            self._addon_groups = build_addon_groups(
                self._addon_catalog, proposal.services, proposal.pricing, proposal.addon_ids
            )
            self._catalog = replace(
                proposal.catalog,
                lifestyle_upsells=reprice_upsells(proposal.catalog.lifestyle_upsells, proposal.pricing),
            )
            self._selected_upsell_ids = frozenset()
            self._selected_offer_ids = (
                frozenset(o.id for o in proposal.catalog.special_offers)
                if self._preselect_offers
                else frozenset()
            )
            self._timers = initialize_timers(proposal.catalog.special_offers, now)

            if not self._ticker.is_running:
                self._ticker.start(self._on_tick)
            self._state = SessionState.ACTIVE

            logger.info(
                "Pricing session loaded",
                extra={
                    "proposal_id": proposal.proposal_id,
                    "services": list(proposal.services),
                    "timed_offers": len(self._timers),
                },
            )
            return self._refresh()

    def dispose(self) -> None:
        with self._lock:
            if self._state is SessionState.DISPOSED:
                return
            self._timers = {}
            self._listeners.clear()
            self._state = SessionState.DISPOSED

        # Outside the lock: a tick waiting on it must be able to finish
        self._ticker.stop()
        logger.info("Pricing session disposed", extra={"proposal_id": self._proposal_id})

    def subscribe(self, listener: PricingListener) -> Callable[[], None]:
        """Register a listener for published pricing. Returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def current_pricing(self) -> DerivedPricing:
        """Last successfully computed pricing."""
        with self._lock:
            if self._current is None:
                raise SessionStateError("No proposal loaded", proposal_id=self._proposal_id)
            return self._current

    @property
    def addon_groups(self) -> AddonGroups:
        with self._lock:
            return dict(self._addon_groups)

    @property
    def catalog(self) -> OfferCatalog:
        return self._catalog

    @property
    def selected_offer_ids(self) -> frozenset[int]:
        return self._selected_offer_ids

    @property
    def selected_upsell_ids(self) -> frozenset[int]:
        return self._selected_upsell_ids

    @property
    def timers(self) -> dict[int, OfferTimer]:
        with self._lock:
            return dict(self._timers)

    def format_timer(self, offer_id: int) -> str | None:
        """Display countdown for an offer; None once the offer is no longer timed."""
        with self._lock:
            timer = self._timers.get(offer_id)
            return format_timer(timer) if timer is not None else None

    def is_offer_expired(self, offer_id: int) -> bool:
        with self._lock:
            offer = self._catalog.special_offer(offer_id)
            return offer is not None and is_offer_expired(offer, self._timers, self._clock())

    def snapshot(self) -> PricingSnapshot:
        with self._lock:
            if self._pricing is None:
                raise SessionStateError("No proposal loaded")
            return PricingSnapshot(
                pricing=self._pricing,
                now=self._clock(),
                addon_groups=dict(self._addon_groups),
                catalog=self._catalog,
                selected_offer_ids=self._selected_offer_ids,
                selected_upsell_ids=self._selected_upsell_ids,
                timers=dict(self._timers),
            )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def toggle_addon(self, service_key: str, addon_id: str, selected: bool) -> ToggleOutcome:
        """
        Select or deselect an addon, optimistically.

        The new total is published before persistence is attempted. If the
        persistence call fails, the flag is restored to the value it had just
        before this toggle and pricing is republished.
        """
        with self._lock:
            proposal_id = self._ensure_active()
            addon = find_addon(self._addon_groups, service_key, addon_id)
            if addon is None:
                logger.debug(
                    "Addon toggle ignored, addon not in service group",
                    extra={"service_key": service_key, "addon_id": addon_id},
                )
                return ToggleOutcome.NOT_FOUND

            prior_selected = addon.selected
            generation = self._generation
            key = (service_key, addon_id)
            seq = self._addon_toggle_seq.get(key, 0) + 1
            self._addon_toggle_seq[key] = seq

            self._addon_groups = apply_toggle(self._addon_groups, service_key, addon_id, selected)
            self._refresh()

        # Lock released: persistence may be slow and ticks must keep flowing
        result = self._persist_addon(proposal_id, service_key, addon, selected)

        if isinstance(result, PersistErr):
            self._rollback_addon(service_key, addon_id, seq, prior_selected, generation, result)
            return ToggleOutcome.ROLLED_BACK

        self._notify(
            Notice(
                level="success",
                title="Upgrade Added" if selected else "Upgrade Removed",
                description=(
                    f"{addon.name} added to your proposal."
                    if selected
                    else f"{addon.name} removed from your proposal."
                ),
            )
        )
        return ToggleOutcome.PERSISTED

    def toggle_upsell(self, upsell_id: int) -> bool | None:
        """Flip an upsell's selection. Returns the new state, None for unknown ids."""
        with self._lock:
            self._ensure_active()
            upsell = self._catalog.lifestyle_upsell(upsell_id)
            if upsell is None:
                return None

            now_selected = upsell_id not in self._selected_upsell_ids
            if now_selected:
                self._selected_upsell_ids = self._selected_upsell_ids | {upsell_id}
            else:
                self._selected_upsell_ids = self._selected_upsell_ids - {upsell_id}
            self._refresh()

        if now_selected:
            self._notify(
                Notice(
                    level="info",
                    title="Upgrade Added!",
                    description=(
                        f"{upsell.name} added for just ${to_cents(upsell.monthly_impact)}/month more!"
                    ),
                )
            )
        return now_selected

    def toggle_special_offer(self, offer_id: int) -> bool | None:
        """
        Flip a special offer's selection. Returns the new state, None for unknown ids.

        Usage is reported to the tracker afterwards; tracker failures are
        logged and never undo the selection.
        """
        with self._lock:
            proposal_id = self._ensure_active()
            offer = self._catalog.special_offer(offer_id)
            if offer is None:
                return None

            now_selected = offer_id not in self._selected_offer_ids
            if now_selected:
                self._selected_offer_ids = self._selected_offer_ids | {offer_id}
            else:
                self._selected_offer_ids = self._selected_offer_ids - {offer_id}
            self._refresh()

        if now_selected:
            self._notify(
                Notice(
                    level="success",
                    title="Offer Applied!",
                    description=f"{offer.name} has been added to your proposal!",
                )
            )
        else:
            self._notify(
                Notice(
                    level="info",
                    title="Offer Removed",
                    description="Special offer has been removed from your proposal.",
                )
            )

        self._track_usage(
            OfferUsage(
                proposal_id=proposal_id,
                offer_id=offer_id,
                action="applied" if now_selected else "deselected",
                discount_amount=offer.discount_amount or ZERO,
            )
        )
        return now_selected

    def update_base_pricing(self, pricing: ProposalPricing) -> DerivedPricing:
        """Replace the proposal's stored pricing with the authoritative record."""
        with self._lock:
            self._ensure_active()
            self._pricing = pricing
            self._addon_groups = reprice_addon_groups(self._addon_groups, pricing)
            self._catalog = replace(
                self._catalog,
                lifestyle_upsells=reprice_upsells(self._catalog.lifestyle_upsells, pricing),
            )
            return self._refresh()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _on_tick(self) -> None:
        with self._lock:
            if self._state is not SessionState.ACTIVE:
                return

            previous = self._timers
            self._timers = tick(previous)
            expired = sorted(previous.keys() - self._timers.keys())
            if expired:
                logger.info(
                    "Offer countdown expired",
                    extra={"proposal_id": self._proposal_id, "offer_ids": expired},
                )

            # Expiry only matters once the date has passed, which can lag the
            # timer by under a second; recompute every tick, publish on change.
            derived = self._compute()
            if derived != self._current:
                self._publish(derived)

    def _persist_addon(
        self, proposal_id: int, service_key: str, addon: Addon, selected: bool
    ) -> PersistResult:
        """Run the persistence call; a raising adapter counts as a failed write."""
        try:
            if selected:
                return self._addon_persistence.add(
                    AddonPersistRequest(
                        proposal_id=proposal_id,
                        addon_id=addon.id,
                        service_key=service_key,
                        price=addon.price,
                        monthly_impact=addon.monthly_impact,
                    )
                )
            return self._addon_persistence.remove(proposal_id, addon.id)
        except Exception as exc:
            logger.exception(
                "Addon persistence raised",
                extra={"proposal_id": proposal_id, "service_key": service_key, "addon_id": addon.id},
            )
            return PersistErr(reason=f"{type(exc).__name__}: {exc}")

    def _rollback_addon(
        self,
        service_key: str,
        addon_id: str,
        seq: int,
        prior_selected: bool,
        generation: int,
        error: PersistErr,
    ) -> None:
        logger.warning(
            "Addon persistence failed, rolling back",
            extra={
                "proposal_id": self._proposal_id,
                "service_key": service_key,
                "addon_id": addon_id,
                "reason": error.reason,
            },
        )

        with self._lock:
            # A later toggle of the same addon or a reload owns the flag now
            still_ours = (
                self._state is SessionState.ACTIVE
                and generation == self._generation
                and self._addon_toggle_seq.get((service_key, addon_id)) == seq
            )
            if still_ours:
                self._addon_groups = revert_toggle(self._addon_groups, service_key, addon_id, prior_selected)
                self._refresh()

        self._notify(Notice(level="error", title="Error", description=SELECTION_ERROR))

    def _refresh(self) -> DerivedPricing:
        derived = self._compute()
        self._publish(derived)
        return derived

    def _compute(self) -> DerivedPricing:
        return self._recompute.execute(self.snapshot())

    def _publish(self, derived: DerivedPricing) -> None:
        # Last write wins; listeners see results in recomputation order
        self._current = derived
        for listener in list(self._listeners):
            listener(derived)

    def _notify(self, notice: Notice) -> None:
        if self._notifier is not None:
            self._notifier.notify(notice)

    def _track_usage(self, usage: OfferUsage) -> None:
        if self._usage_tracker is None:
            return
        try:
            self._usage_tracker.record(usage)
        except Exception:
            logger.exception(
                "Error tracking offer usage",
                extra={"proposal_id": usage.proposal_id, "offer_id": usage.offer_id},
            )

    def _ensure_not_disposed(self) -> None:
        if self._state is SessionState.DISPOSED:
            raise SessionStateError("Pricing session has been disposed", proposal_id=self._proposal_id)

    def _ensure_active(self) -> int:
        """Raise unless a proposal is loaded; returns its id."""
        self._ensure_not_disposed()
        if self._state is not SessionState.ACTIVE or self._proposal_id is None:
            raise SessionStateError("No proposal loaded")
        return self._proposal_id
