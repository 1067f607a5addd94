"""Reconciliation: repair profiles left behind by a crash mid-saga.

A profile with a student or staff role and no RoleRecord, older than the
grace window, is orphaned. Repair deletes the identity first, then the
profile: the scan is driven by profile rows, so a profile must outlive a
failed identity delete to be found again on the next pass. A 404 from the
identity store counts as already deleted.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from campus.application.dtos.reconciliation import ReconciliationReport
from campus.application.interfaces.repositories import (
    IProvisioningStore,
    IReconciliationRepository,
)
from campus.application.interfaces.services import IIdentityStore
from campus.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class ReconciliationService:
    def __init__(
        self,
        finder: IReconciliationRepository,
        store: IProvisioningStore,
        identity_store: IIdentityStore,
        *,
        grace_minutes: int,
    ) -> None:
        self.finder = finder
        self.store = store
        self.identity_store = identity_store
        self.grace_minutes = grace_minutes

    async def run(self, *, apply: bool = False) -> ReconciliationReport:
        """Find orphaned profiles; delete them (and their identities) when apply is set."""
        cutoff = utc_now() - timedelta(minutes=self.grace_minutes)
        orphans = await self.finder.find_orphaned_profiles(cutoff)
        logger.info("Found %d orphaned profiles older than %s", len(orphans), cutoff)
        if not apply:
            return ReconciliationReport(found=tuple(orphans))

        repaired: list[str] = []
        failed: list[str] = []
        for orphan in orphans:
            try:
                await self.identity_store.delete_user(orphan.profile_id)
                await self.store.delete_profile(orphan.profile_id)
            except Exception:
                logger.exception("Failed to repair orphaned profile %s", orphan.profile_id)
                failed.append(orphan.profile_id)
                continue
            logger.info("Removed orphaned profile %s (%s)", orphan.profile_id, orphan.email)
            repaired.append(orphan.profile_id)
        return ReconciliationReport(
            found=tuple(orphans), repaired=tuple(repaired), failed=tuple(failed)
        )
