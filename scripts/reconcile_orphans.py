"""Find (and optionally remove) profiles left behind by an interrupted provisioning.

Usage:
    uv run python -m scripts.reconcile_orphans [--apply] [--grace-minutes N]
Without --apply only lists orphans. Intended to run from cron.
"""

import argparse
import asyncio
import sys

import httpx

from campus.application.use_cases.reconciliation import ReconciliationService
from campus.core.config import get_settings
from campus.infrastructure.identity import IdentityStoreClient
from campus.infrastructure.persistence.database import dispose_engine, get_session_factory
from campus.infrastructure.persistence.repositories import (
    SqlProvisioningStore,
    SqlReconciliationRepository,
)
from campus.shared.telemetry.logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--apply", action="store_true", help="delete orphaned profiles and identities"
    )
    parser.add_argument(
        "--grace-minutes",
        type=int,
        default=None,
        help="ignore profiles younger than this (default: RECONCILIATION_GRACE_MINUTES)",
    )
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    """Run one reconciliation pass; exit code 1 if any repair failed."""
    args = parse_args(argv)
    settings = get_settings()
    setup_logging()
    grace = args.grace_minutes
    if grace is None:
        grace = settings.reconciliation_grace_minutes

    session_factory = get_session_factory()
    try:
        async with httpx.AsyncClient(timeout=settings.identity_store_timeout_seconds) as http:
            service = ReconciliationService(
                SqlReconciliationRepository(session_factory),
                SqlProvisioningStore(session_factory),
                IdentityStoreClient(
                    http,
                    settings.identity_store_url,
                    settings.identity_store_service_key.get_secret_value(),
                    timeout_seconds=settings.identity_store_timeout_seconds,
                ),
                grace_minutes=grace,
            )
            report = await service.run(apply=args.apply)
    finally:
        await dispose_engine()

    for orphan in report.found:
        print(
            f"{orphan.profile_id}\t{orphan.role.value}\t{orphan.email}\t"
            f"{orphan.created_at.isoformat()}"
        )
    if not args.apply:
        print(f"Found {len(report.found)} orphaned profile(s). Re-run with --apply to remove.")
        return 0
    print(f"Done. Repaired: {len(report.repaired)}, failed: {len(report.failed)}")
    return 1 if report.failed else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
