"""In-memory repository implementations for testing."""

from .audit_event import InMemoryAuditEventRepository
from .battle_match import InMemoryBattleMatchRepository
from .invitation import InMemoryInvitationRepository

__all__ = [
    "InMemoryAuditEventRepository",
    "InMemoryBattleMatchRepository",
    "InMemoryInvitationRepository",
]
