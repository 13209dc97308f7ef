"""In-memory invitation repository for testing."""

from datetime import datetime
from typing import Optional

from arena.domain.error import DuplicateInvitationError
from arena.domain.model import Invitation, LiveCollabContext
from arena.domain.repository import InvitationRepository
from arena.domain.value import (
    ArtistUid,
    InvitationId,
    InvitationKind,
    InvitationStatus,
)

ACTIVE_STATUSES = (InvitationStatus.PENDING, InvitationStatus.ACCEPTED)


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing.

    Write methods never await, so each one runs to completion without
    yielding to the event loop. That makes `transition` an atomic
    check-and-set for concurrent coroutines.
    """

    def __init__(self) -> None:
        self._invitations: dict[InvitationId, Invitation] = {}

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        return self._invitations.get(invitation_id)

    async def add(self, invitation: Invitation) -> Invitation:
        """Insert an invitation, enforcing the live session uniqueness rule.

        Raises:
            DuplicateInvitationError: If an active live invitation exists
        """
        context = invitation.context
        if isinstance(context, LiveCollabContext) and self._has_active(
            context.session_id, invitation.recipient_uid
        ):
            raise DuplicateInvitationError(
                f"session {context.session_id}", invitation.recipient_uid
            )
        self._invitations[invitation.id] = invitation
        return invitation

    async def exists_active_for_session(
        self, session_id: str, recipient_uid: ArtistUid
    ) -> bool:
        return self._has_active(session_id, recipient_uid)

    async def find_by_recipient(
        self,
        recipient_uid: ArtistUid,
        kind: Optional[InvitationKind] = None,
        status: Optional[InvitationStatus] = None,
        limit: int = 50,
    ) -> list[Invitation]:
        matches = [
            invitation
            for invitation in self._invitations.values()
            if invitation.recipient_uid == recipient_uid
            and self._matches(invitation, kind, status)
        ]
        return self._newest_first(matches)[:limit]

    async def find_by_initiator(
        self,
        initiator_uid: ArtistUid,
        kind: Optional[InvitationKind] = None,
        status: Optional[InvitationStatus] = None,
        limit: int = 50,
    ) -> list[Invitation]:
        matches = [
            invitation
            for invitation in self._invitations.values()
            if invitation.initiator_uid == initiator_uid
            and self._matches(invitation, kind, status)
        ]
        return self._newest_first(matches)[:limit]

    async def find_by_status(
        self,
        kind: InvitationKind,
        status: InvitationStatus,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Invitation]:
        matches = [
            invitation
            for invitation in self._invitations.values()
            if self._matches(invitation, kind, status)
        ]
        matches.sort(
            key=lambda inv: (
                inv.responded_at is not None,
                inv.responded_at or inv.created_at,
                str(inv.id),
            )
        )
        return matches[offset : offset + limit]

    async def transition(
        self,
        invitation_id: InvitationId,
        expected: InvitationStatus,
        status: InvitationStatus,
        responded_at: datetime,
    ) -> Optional[Invitation]:
        current = self._invitations.get(invitation_id)
        if current is None or current.status != expected:
            return None
        updated = current.model_copy(
            update={"status": status, "responded_at": responded_at}
        )
        self._invitations[invitation_id] = updated
        return updated

    async def expire_overdue(self, now: datetime) -> int:
        overdue = [
            invitation
            for invitation in self._invitations.values()
            if invitation.is_overdue(now)
        ]
        for invitation in overdue:
            self._invitations[invitation.id] = invitation.model_copy(
                update={"status": InvitationStatus.EXPIRED, "responded_at": now}
            )
        return len(overdue)

    def _has_active(self, session_id: str, recipient_uid: ArtistUid) -> bool:
        for invitation in self._invitations.values():
            if (
                isinstance(invitation.context, LiveCollabContext)
                and invitation.context.session_id == session_id
                and invitation.recipient_uid == recipient_uid
                and invitation.status in ACTIVE_STATUSES
            ):
                return True
        return False

    @staticmethod
    def _matches(
        invitation: Invitation,
        kind: Optional[InvitationKind],
        status: Optional[InvitationStatus],
    ) -> bool:
        if kind is not None and invitation.kind != kind:
            return False
        if status is not None and invitation.status != status:
            return False
        return True

    @staticmethod
    def _newest_first(invitations: list[Invitation]) -> list[Invitation]:
        return sorted(invitations, key=lambda inv: inv.created_at, reverse=True)
