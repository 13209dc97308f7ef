"""Domain value objects for Arena.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

from arena.domain.value.common import ValueObject


class InvitationKind(str, Enum):
    """Kind of invitation.

    The kind selects which validation and acceptance rules apply.
    """

    BATTLE = "battle"
    LIVE_COLLAB = "live_collab"


class InvitationStatus(str, Enum):
    """Status of an invitation.

    PENDING is the only non-terminal status.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    CANCELLED = "cancelled"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is allowed from this status."""
        return self is not InvitationStatus.PENDING


class ResponseAction(str, Enum):
    """Action a recipient can take on a pending invitation."""

    ACCEPT = "accept"
    DECLINE = "decline"


class AuditAction(str, Enum):
    """Action recorded in the invitation audit log."""

    SENT = "sent"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


class BattleCategory(str, Enum):
    """Closed set of battle categories.

    Keep in sync with the check constraint on battle tables.
    """

    AMAPIANO = "amapiano"
    DJ = "dj"
    RNB = "rnb"
    OTHERS = "others"


class BattleMatchStatus(str, Enum):
    """Lifecycle status of a battle match.

    Only the initial status is managed here.
    """

    SCHEDULED = "scheduled"


class SessionRef(ValueObject):
    """Session and channel a live collaborator connects to after accepting."""

    session_id: str
    channel_id: str


class ProfileLite(ValueObject):
    """Minimal display metadata for an artist."""

    artist_uid: str
    stage_name: str = ""
    name: str = ""
    profile_photo_url: str | None = None
    verification_badge: bool = False

    @property
    def display_name(self) -> str:
        """Best human-readable name for the artist."""
        return self.stage_name or self.name
