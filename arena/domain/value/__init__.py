"""Domain value objects for Arena."""

from arena.domain.value.identifiers import (
    ArtistUid,
    AuditEventId,
    BattleMatchId,
    InvitationId,
)
from arena.domain.value.types import (
    AuditAction,
    BattleCategory,
    BattleMatchStatus,
    InvitationKind,
    InvitationStatus,
    ProfileLite,
    ResponseAction,
    SessionRef,
)

__all__ = [
    # Identifiers
    "ArtistUid",
    "InvitationId",
    "BattleMatchId",
    "AuditEventId",
    # Types
    "InvitationKind",
    "InvitationStatus",
    "ResponseAction",
    "AuditAction",
    "BattleCategory",
    "BattleMatchStatus",
    "SessionRef",
    "ProfileLite",
]
