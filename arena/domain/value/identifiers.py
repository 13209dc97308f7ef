"""Strongly typed identifiers for Arena domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Artist uids are issued by the identity provider and are opaque strings
ArtistUid = NewType("ArtistUid", str)

# Entities owned by this service
InvitationId = NewType("InvitationId", UUID)
BattleMatchId = NewType("BattleMatchId", UUID)
AuditEventId = NewType("AuditEventId", UUID)
