"""Domain model entities for Arena."""

from arena.domain.model.audit_event import AuditEvent
from arena.domain.model.battle_match import BattleMatch
from arena.domain.model.invitation import (
    BattleContext,
    Invitation,
    InvitationContext,
    LiveCollabContext,
)

__all__ = [
    "Invitation",
    "InvitationContext",
    "BattleContext",
    "LiveCollabContext",
    "BattleMatch",
    "AuditEvent",
]
