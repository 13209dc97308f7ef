"""List invitations use case."""

from pydantic import BaseModel, Field

from arena.application.usecase.base import BaseUseCase
from arena.application.usecase.invitation.items import InvitationItem, ProfileItem
from arena.domain.service import InvitationService
from arena.domain.value import InvitationKind, InvitationStatus


class ListInvitationsRequest(BaseModel):
    """List invitations request."""

    artist_uid: str  # Artist uid from auth
    kind: InvitationKind | None = None
    status: InvitationStatus | None = None
    limit: int = Field(default=50, ge=1, le=200)


class ListInvitationsResponse(BaseModel):
    """Invitations the artist received and sent, with profiles of both sides."""

    received: list[InvitationItem]
    sent: list[InvitationItem]
    profiles: dict[str, ProfileItem]


class ListInvitationsUseCase(BaseUseCase):
    """Use case for an artist's invitation inbox and outbox."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize list invitations use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    async def execute(self, request: ListInvitationsRequest) -> ListInvitationsResponse:
        """Execute list invitations flow.

        Args:
            request: List invitations request

        Returns:
            Received and sent invitations, newest first
        """
        listing = await self.invitation_service.list_for_artist(
            artist_uid=request.artist_uid,
            kind=request.kind,
            status=request.status,
            limit=request.limit,
        )

        return ListInvitationsResponse(
            received=[InvitationItem.from_domain(i) for i in listing.received],
            sent=[InvitationItem.from_domain(i) for i in listing.sent],
            profiles={
                uid: ProfileItem.from_domain(profile)
                for uid, profile in listing.profiles.items()
            },
        )
