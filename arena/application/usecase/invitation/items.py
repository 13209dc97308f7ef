"""Response items shared by invitation use cases."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from arena.domain.model import BattleMatch, Invitation
from arena.domain.value import (
    BattleCategory,
    BattleMatchStatus,
    InvitationKind,
    InvitationStatus,
    ProfileLite,
    SessionRef,
)


class InvitationItem(BaseModel):
    """Invitation as returned to clients."""

    invitation_id: str
    kind: InvitationKind
    initiator_uid: str
    recipient_uid: str
    context: dict[str, Any]
    status: InvitationStatus
    created_at: datetime
    responded_at: datetime | None = None
    expires_at: datetime | None = None

    @classmethod
    def from_domain(cls, invitation: Invitation) -> "InvitationItem":
        return cls(
            invitation_id=str(invitation.id),
            kind=invitation.kind,
            initiator_uid=invitation.initiator_uid,
            recipient_uid=invitation.recipient_uid,
            context=invitation.context.model_dump(mode="json", exclude={"kind"}),
            status=invitation.status,
            created_at=invitation.created_at,
            responded_at=invitation.responded_at,
            expires_at=invitation.expires_at,
        )


class MatchItem(BaseModel):
    """Battle match created by an acceptance."""

    match_id: str
    invitation_id: str
    host_uid: str
    guest_uid: str
    title: str
    category: BattleCategory
    stake_coins: int
    scheduled_starts_at: datetime | None = None
    status: BattleMatchStatus

    @classmethod
    def from_domain(cls, match: BattleMatch) -> "MatchItem":
        return cls(
            match_id=str(match.id),
            invitation_id=str(match.invitation_id),
            host_uid=match.host_uid,
            guest_uid=match.guest_uid,
            title=match.title,
            category=match.category,
            stake_coins=match.stake_coins,
            scheduled_starts_at=match.scheduled_starts_at,
            status=match.status,
        )


class SessionItem(BaseModel):
    """Live session the recipient joins after accepting."""

    session_id: str
    channel_id: str

    @classmethod
    def from_domain(cls, session: SessionRef) -> "SessionItem":
        return cls(session_id=session.session_id, channel_id=session.channel_id)


class ProfileItem(BaseModel):
    """Display metadata of an artist referenced by a listing."""

    artist_uid: str
    display_name: str
    stage_name: str
    name: str
    profile_photo_url: str | None = None
    verification_badge: bool = False

    @classmethod
    def from_domain(cls, profile: ProfileLite) -> "ProfileItem":
        return cls(
            artist_uid=profile.artist_uid,
            display_name=profile.display_name,
            stage_name=profile.stage_name,
            name=profile.name,
            profile_photo_url=profile.profile_photo_url,
            verification_badge=profile.verification_badge,
        )
