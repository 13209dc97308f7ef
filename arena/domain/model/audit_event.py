"""Audit event entity."""

from datetime import datetime
from typing import Any

from pydantic import Field

from arena.domain.model.common import DomainModel
from arena.domain.value import ArtistUid, AuditAction, AuditEventId, InvitationId


class AuditEvent(DomainModel):
    """Append-only record of a state-changing action on an invitation.

    Audit events are diagnostic. They never drive invitation state.
    """

    id: AuditEventId
    invitation_id: InvitationId
    actor_uid: ArtistUid
    action: AuditAction
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
