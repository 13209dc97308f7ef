"""Domain layer DI providers."""

from dishka import Scope, provide

from arena.config import AuthSettings, InvitationSettings
from arena.domain.repository import (
    AuditEventRepository,
    BattleMatchRepository,
    InvitationRepository,
)
from arena.domain.service import (
    BattlePolicy,
    InvitationService,
    JWTService,
    LiveCollabPolicy,
    ProfileDirectory,
    ProfileService,
)
from arena.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_profile_service(
        self, profile_directory: ProfileDirectory
    ) -> ProfileService:
        """Provide profile domain service."""
        return ProfileService(profile_directory=profile_directory)

    @provide
    def get_battle_policy(
        self,
        profile_directory: ProfileDirectory,
        match_repository: BattleMatchRepository,
        invitation_settings: InvitationSettings,
    ) -> BattlePolicy:
        """Provide battle invitation rules."""
        return BattlePolicy(
            profile_directory=profile_directory,
            match_repository=match_repository,
            ttl=invitation_settings.battle_ttl,
        )

    @provide
    def get_live_collab_policy(
        self,
        invitation_repository: InvitationRepository,
        profile_service: ProfileService,
        invitation_settings: InvitationSettings,
    ) -> LiveCollabPolicy:
        """Provide live collaboration invitation rules."""
        return LiveCollabPolicy(
            invitation_repository=invitation_repository,
            profile_service=profile_service,
            ttl=invitation_settings.live_collab_ttl,
        )

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        audit_repository: AuditEventRepository,
        profile_service: ProfileService,
        battle_policy: BattlePolicy,
        live_collab_policy: LiveCollabPolicy,
    ) -> InvitationService:
        """Provide invitation domain service with one policy per kind."""
        return InvitationService(
            invitation_repository=invitation_repository,
            audit_repository=audit_repository,
            profile_service=profile_service,
            policies=[battle_policy, live_collab_policy],
        )
