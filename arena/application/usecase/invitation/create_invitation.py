"""Create invitation use case."""

from datetime import datetime
from typing import Any

import logfire
from pydantic import BaseModel, Field

from arena.application.usecase.base import BaseUseCase
from arena.domain.service import InvitationService
from arena.domain.value import InvitationKind, InvitationStatus


class CreateInvitationRequest(BaseModel):
    """Request to send an invitation."""

    initiator_uid: str  # Artist uid from auth
    recipient_uid: str
    kind: str  # Unknown kinds are rejected by the domain service
    context: dict[str, Any] = Field(default_factory=dict)


class CreateInvitationResponse(BaseModel):
    """Response after sending an invitation."""

    invitation_id: str
    kind: InvitationKind
    status: InvitationStatus
    expires_at: datetime | None = None


class CreateInvitationUseCase(BaseUseCase):
    """Use case for sending a battle or live collaboration invitation."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    async def execute(
        self, request: CreateInvitationRequest
    ) -> CreateInvitationResponse:
        """Execute create invitation use case.

        Args:
            request: Create invitation request

        Returns:
            Response with the new invitation id

        Raises:
            DomainError: If validation, dedup or the recipient check fails
        """
        with logfire.span(
            "create_invitation",
            initiator_uid=request.initiator_uid,
            recipient_uid=request.recipient_uid,
            kind=request.kind,
        ):
            invitation = await self.invitation_service.create_invitation(
                initiator_uid=request.initiator_uid,
                recipient_uid=request.recipient_uid,
                kind=request.kind,
                context=request.context,
            )

            return CreateInvitationResponse(
                invitation_id=str(invitation.id),
                kind=invitation.kind,
                status=invitation.status,
                expires_at=invitation.expires_at,
            )
