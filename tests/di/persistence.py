"""Mock persistence providers for testing."""

from dishka import Scope, provide

from arena.domain.repository import (
    AuditEventRepository,
    BattleMatchRepository,
    InvitationRepository,
)
from arena.persistence.repository.inmemory import (
    InMemoryAuditEventRepository,
    InMemoryBattleMatchRepository,
    InMemoryInvitationRepository,
)
from arena.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Repositories are APP-scoped so state survives across request scopes of one
    container (several HTTP calls in an e2e test). Every test builds its own
    container, so tests stay isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_invitation_repository(self) -> InvitationRepository:
        """Provide in-memory invitation repository."""
        return InMemoryInvitationRepository()

    @provide(scope=Scope.APP)
    def get_battle_match_repository(self) -> BattleMatchRepository:
        """Provide in-memory battle match repository."""
        return InMemoryBattleMatchRepository()

    @provide(scope=Scope.APP)
    def get_audit_event_repository(self) -> AuditEventRepository:
        """Provide in-memory audit event repository."""
        return InMemoryAuditEventRepository()
