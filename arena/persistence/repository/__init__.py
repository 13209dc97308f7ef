"""PostgreSQL repository implementations."""

from arena.persistence.repository.audit_event import PostgresAuditEventRepository
from arena.persistence.repository.battle_match import PostgresBattleMatchRepository
from arena.persistence.repository.invitation import PostgresInvitationRepository

__all__ = [
    "PostgresInvitationRepository",
    "PostgresBattleMatchRepository",
    "PostgresAuditEventRepository",
]
