"""Invitation use cases."""

from arena.application.usecase.invitation.cancel_invitation import (
    CancelInvitationRequest,
    CancelInvitationResponse,
    CancelInvitationUseCase,
)
from arena.application.usecase.invitation.create_invitation import (
    CreateInvitationRequest,
    CreateInvitationResponse,
    CreateInvitationUseCase,
)
from arena.application.usecase.invitation.list_invitations import (
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
)
from arena.application.usecase.invitation.reconcile_commitments import (
    ExpireInvitationsResponse,
    ExpireInvitationsUseCase,
    ReconcileCommitmentsRequest,
    ReconcileCommitmentsResponse,
    ReconcileCommitmentsUseCase,
)
from arena.application.usecase.invitation.respond_to_invitation import (
    RespondToInvitationRequest,
    RespondToInvitationResponse,
    RespondToInvitationUseCase,
)

__all__ = [
    "CancelInvitationRequest",
    "CancelInvitationResponse",
    "CancelInvitationUseCase",
    "CreateInvitationRequest",
    "CreateInvitationResponse",
    "CreateInvitationUseCase",
    "ExpireInvitationsResponse",
    "ExpireInvitationsUseCase",
    "ListInvitationsRequest",
    "ListInvitationsResponse",
    "ListInvitationsUseCase",
    "ReconcileCommitmentsRequest",
    "ReconcileCommitmentsResponse",
    "ReconcileCommitmentsUseCase",
    "RespondToInvitationRequest",
    "RespondToInvitationResponse",
    "RespondToInvitationUseCase",
]
