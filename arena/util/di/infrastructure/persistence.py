"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from arena.config import Settings
from arena.domain.repository import (
    AuditEventRepository,
    BattleMatchRepository,
    InvitationRepository,
)
from arena.persistence.database import create_engine, create_session_factory
from arena.persistence.repository import (
    PostgresAuditEventRepository,
    PostgresBattleMatchRepository,
    PostgresInvitationRepository,
)
from arena.util.di.base import ProviderBase
from arena.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request if no exception
        escaped the handler, or rolled back otherwise. Handlers that report a
        failure without raising (an accepted invitation whose match could not
        be created) therefore keep their writes.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_invitation_repository(self, session: AsyncSession) -> InvitationRepository:
        """Provide Invitation repository."""
        return PostgresInvitationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_battle_match_repository(
        self, session: AsyncSession
    ) -> BattleMatchRepository:
        """Provide BattleMatch repository."""
        return PostgresBattleMatchRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_audit_event_repository(self, session: AsyncSession) -> AuditEventRepository:
        """Provide AuditEvent repository."""
        return PostgresAuditEventRepository(session)
