"""PostgreSQL implementation of AddonPersistence."""

from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from proposal_pricing.infra.db.models import ProposalAddonRow
from proposal_pricing.ports.addon_persistence import (
    AddonPersistence,
    AddonPersistRequest,
    PersistErr,
    PersistOk,
    PersistResult,
)

logger = logging.getLogger(__name__)


class SqlAlchemyAddonPersistence(AddonPersistence):
    """
    Writes addon selections to the proposal_addons table.

    Each call commits on its own. Database errors roll the session back and
    come out as PersistErr so the pricing session can undo its optimistic
    toggle.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, request: AddonPersistRequest) -> PersistResult:
        try:
            row = self._session.execute(
                select(ProposalAddonRow).where(
                    ProposalAddonRow.proposal_id == request.proposal_id,
                    ProposalAddonRow.addon_id == request.addon_id,
                )
            ).scalar_one_or_none()

            if row is None:
                self._session.add(
                    ProposalAddonRow(
                        proposal_id=request.proposal_id,
                        addon_id=request.addon_id,
                        service_key=request.service_key,
                        price=request.price,
                        monthly_impact=request.monthly_impact,
                    )
                )
            else:
                row.service_key = request.service_key
                row.price = request.price
                row.monthly_impact = request.monthly_impact

            self._session.commit()
        except SQLAlchemyError as exc:
            return self._failed("add", request.proposal_id, request.addon_id, exc)

        return PersistOk()

    def remove(self, proposal_id: int, addon_id: str) -> PersistResult:
        try:
            self._session.execute(
                delete(ProposalAddonRow).where(
                    ProposalAddonRow.proposal_id == proposal_id,
                    ProposalAddonRow.addon_id == addon_id,
                )
            )
            self._session.commit()
        except SQLAlchemyError as exc:
            return self._failed("remove", proposal_id, addon_id, exc)

        return PersistOk()

    def _failed(self, action: str, proposal_id: int, addon_id: str, exc: SQLAlchemyError) -> PersistErr:
        self._session.rollback()
        logger.warning(
            "Addon persistence failed",
            extra={"action": action, "proposal_id": proposal_id, "addon_id": addon_id, "error": str(exc)},
        )
        return PersistErr(reason=f"Could not {action} addon '{addon_id}'")
