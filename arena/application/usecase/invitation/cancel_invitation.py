"""Cancel invitation use case."""

from uuid import UUID

from pydantic import BaseModel

from arena.application.usecase.base import BaseUseCase
from arena.application.usecase.invitation.items import InvitationItem
from arena.domain.service import InvitationService
from arena.domain.value import InvitationId


class CancelInvitationRequest(BaseModel):
    """Request to withdraw a pending invitation."""

    actor_uid: str  # Artist uid from auth
    invitation_id: UUID


class CancelInvitationResponse(BaseModel):
    """Response after withdrawing an invitation."""

    invitation: InvitationItem


class CancelInvitationUseCase(BaseUseCase):
    """Use case for the initiator withdrawing an invitation."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(
        self, request: CancelInvitationRequest
    ) -> CancelInvitationResponse:
        invitation = await self.invitation_service.cancel(
            actor_uid=request.actor_uid,
            invitation_id=InvitationId(request.invitation_id),
        )
        return CancelInvitationResponse(
            invitation=InvitationItem.from_domain(invitation)
        )
