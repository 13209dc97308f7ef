"""Application layer DI providers."""

from dishka import Scope, provide

from arena.application.usecase.invitation import (
    CancelInvitationUseCase,
    CreateInvitationUseCase,
    ExpireInvitationsUseCase,
    ListInvitationsUseCase,
    ReconcileCommitmentsUseCase,
    RespondToInvitationUseCase,
)
from arena.domain.service import InvitationService
from arena.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_create_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> CreateInvitationUseCase:
        """Provide create invitation use case."""
        return CreateInvitationUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_respond_to_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> RespondToInvitationUseCase:
        """Provide respond to invitation use case."""
        return RespondToInvitationUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_cancel_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> CancelInvitationUseCase:
        """Provide cancel invitation use case."""
        return CancelInvitationUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_list_invitations_use_case(
        self, invitation_service: InvitationService
    ) -> ListInvitationsUseCase:
        """Provide list invitations use case."""
        return ListInvitationsUseCase(invitation_service=invitation_service)

    # Maintenance use cases
    @provide(scope=Scope.REQUEST)
    def get_reconcile_commitments_use_case(
        self, invitation_service: InvitationService
    ) -> ReconcileCommitmentsUseCase:
        """Provide commitment reconciliation use case."""
        return ReconcileCommitmentsUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_expire_invitations_use_case(
        self, invitation_service: InvitationService
    ) -> ExpireInvitationsUseCase:
        """Provide invitation expiry use case."""
        return ExpireInvitationsUseCase(invitation_service=invitation_service)
