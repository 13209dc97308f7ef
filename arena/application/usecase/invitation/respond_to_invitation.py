"""Respond to invitation use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from arena.application.usecase.base import BaseUseCase
from arena.application.usecase.invitation.items import (
    InvitationItem,
    MatchItem,
    SessionItem,
)
from arena.domain.service import InvitationService
from arena.domain.value import InvitationId, ResponseAction


class RespondToInvitationRequest(BaseModel):
    """Request to accept or decline an invitation."""

    actor_uid: str  # Artist uid from auth
    invitation_id: UUID
    action: ResponseAction


class RespondToInvitationResponse(BaseModel):
    """Response after answering an invitation.

    `match` is set when a battle invitation is accepted, `session` when a
    live collaboration invitation is accepted.
    """

    invitation: InvitationItem
    match: MatchItem | None = None
    session: SessionItem | None = None


class RespondToInvitationUseCase(BaseUseCase):
    """Use case for the recipient answering an invitation."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    async def execute(
        self, request: RespondToInvitationRequest
    ) -> RespondToInvitationResponse:
        """Execute respond to invitation use case.

        Args:
            request: Respond request

        Returns:
            Updated invitation and what acceptance produced

        Raises:
            DomainError: If the response is rejected
            CommitmentCreationError: If accepted but the match was not created
        """
        with logfire.span(
            "respond_to_invitation",
            actor_uid=request.actor_uid,
            invitation_id=str(request.invitation_id),
            action=request.action.value,
        ):
            outcome = await self.invitation_service.respond(
                actor_uid=request.actor_uid,
                invitation_id=InvitationId(request.invitation_id),
                action=request.action,
            )

            return RespondToInvitationResponse(
                invitation=InvitationItem.from_domain(outcome.invitation),
                match=MatchItem.from_domain(outcome.match) if outcome.match else None,
                session=(
                    SessionItem.from_domain(outcome.session)
                    if outcome.session
                    else None
                ),
            )
