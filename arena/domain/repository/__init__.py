"""Repository interfaces for Arena domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from arena.domain.repository.audit_event import AuditEventRepository
from arena.domain.repository.battle_match import BattleMatchRepository
from arena.domain.repository.invitation import InvitationRepository

__all__ = [
    "InvitationRepository",
    "BattleMatchRepository",
    "AuditEventRepository",
]
