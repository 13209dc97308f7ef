#!/usr/bin/env python3
"""Repair accepted battle invitations that have no match, and expire overdue ones.

Meant to run on a schedule (cron, a one-off container). Safe to re-run: match
creation is keyed by invitation id.
"""

import argparse
import asyncio
import sys

import logfire

from arena.application.usecase.invitation import (
    ExpireInvitationsUseCase,
    ReconcileCommitmentsRequest,
    ReconcileCommitmentsUseCase,
)
from arena.config import Settings
from arena.util.di.container import create_container
from arena.util.observability import configure_logfire


async def run(limit: int, expire: bool) -> int:
    """Run the sweeps in one request scope (one transaction).

    Returns:
        Number of invitations that could not be repaired
    """
    container = create_container(with_fastapi=False)
    try:
        async with container() as request_container:
            if expire:
                expire_use_case = await request_container.get(ExpireInvitationsUseCase)
                expired = await expire_use_case.execute()
                logfire.info("Expiry sweep finished", expired=expired.expired)

            reconcile = await request_container.get(ReconcileCommitmentsUseCase)
            report = await reconcile.execute(ReconcileCommitmentsRequest(limit=limit))
            logfire.info(
                "Reconciliation sweep finished",
                scanned=report.scanned,
                repaired=len(report.repaired),
                failed=report.failed_invitation_ids,
            )
            return len(report.failed_invitation_ids)
    finally:
        await container.close()


def main() -> int:
    """Parse arguments and run the sweeps."""
    settings = Settings()
    configure_logfire(settings)

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--limit",
        type=int,
        default=settings.invitations.reconcile_batch_size,
        help="Maximum number of matches to create in this run",
    )
    parser.add_argument(
        "--no-expire",
        action="store_true",
        help="Skip expiring overdue pending invitations",
    )
    args = parser.parse_args()

    try:
        failed = asyncio.run(run(limit=args.limit, expire=not args.no_expire))
    except Exception as e:
        logfire.error(
            "Reconciliation failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
