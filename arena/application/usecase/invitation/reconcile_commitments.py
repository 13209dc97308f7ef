"""Commitment reconciliation and expiry maintenance use cases."""

import logfire
from pydantic import BaseModel, Field

from arena.application.usecase.base import BaseUseCase
from arena.application.usecase.invitation.items import MatchItem
from arena.domain.service import InvitationService


class ReconcileCommitmentsRequest(BaseModel):
    """Reconciliation sweep request."""

    limit: int = Field(default=100, ge=1, le=10_000)


class ReconcileCommitmentsResponse(BaseModel):
    """Reconciliation sweep result."""

    scanned: int
    repaired: list[MatchItem]
    failed_invitation_ids: list[str]


class ReconcileCommitmentsUseCase(BaseUseCase):
    """Create missing battle matches for accepted battle invitations.

    Repairs the state left behind when an acceptance was recorded but the
    match insert failed.
    """

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(
        self, request: ReconcileCommitmentsRequest
    ) -> ReconcileCommitmentsResponse:
        with logfire.span("reconcile_commitments", limit=request.limit):
            report = await self.invitation_service.reconcile_commitments(
                limit=request.limit
            )
            return ReconcileCommitmentsResponse(
                scanned=report.scanned,
                repaired=[MatchItem.from_domain(m) for m in report.repaired],
                failed_invitation_ids=[str(i) for i in report.failed],
            )


class ExpireInvitationsResponse(BaseModel):
    """Expiry sweep result."""

    expired: int


class ExpireInvitationsUseCase(BaseUseCase):
    """Expire every pending invitation past its expiry time."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(self, request: None = None) -> ExpireInvitationsResponse:
        expired = await self.invitation_service.expire_overdue()
        return ExpireInvitationsResponse(expired=expired)
