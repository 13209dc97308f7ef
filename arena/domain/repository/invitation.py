"""Invitation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from arena.domain.model.invitation import Invitation
from arena.domain.value import (
    ArtistUid,
    InvitationId,
    InvitationKind,
    InvitationStatus,
)


class InvitationRepository(ABC):
    """Repository for Invitation entity.

    Defines the contract for invitation persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Invitation | None:
        """Find an invitation by ID.

        Args:
            invitation_id: The invitation's unique identifier

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def add(self, invitation: Invitation) -> Invitation:
        """Insert a new invitation.

        Args:
            invitation: The invitation to insert

        Returns:
            The inserted invitation

        Raises:
            DuplicateInvitationError: If an active live invitation already
                exists for the same session and recipient
        """
        pass

    @abstractmethod
    async def exists_active_for_session(
        self, session_id: str, recipient_uid: ArtistUid
    ) -> bool:
        """Check if a pending or accepted live invitation targets this pair.

        Args:
            session_id: Live session reference
            recipient_uid: Invited artist

        Returns:
            True if an active invitation exists, False otherwise
        """
        pass

    @abstractmethod
    async def find_by_recipient(
        self,
        recipient_uid: ArtistUid,
        kind: InvitationKind | None = None,
        status: InvitationStatus | None = None,
        limit: int = 50,
    ) -> list[Invitation]:
        """Find invitations addressed to an artist, newest first.

        Args:
            recipient_uid: The recipient's uid
            kind: Optional kind filter
            status: Optional status filter
            limit: Maximum number of results

        Returns:
            List of invitations
        """
        pass

    @abstractmethod
    async def find_by_initiator(
        self,
        initiator_uid: ArtistUid,
        kind: InvitationKind | None = None,
        status: InvitationStatus | None = None,
        limit: int = 50,
    ) -> list[Invitation]:
        """Find invitations sent by an artist, newest first.

        Args:
            initiator_uid: The initiator's uid
            kind: Optional kind filter
            status: Optional status filter
            limit: Maximum number of results

        Returns:
            List of invitations
        """
        pass

    @abstractmethod
    async def find_by_status(
        self,
        kind: InvitationKind,
        status: InvitationStatus,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Invitation]:
        """Find invitations of a kind in a status, oldest response first.

        Used by maintenance sweeps.

        Args:
            kind: Invitation kind
            status: Invitation status
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of invitations
        """
        pass

    @abstractmethod
    async def transition(
        self,
        invitation_id: InvitationId,
        expected: InvitationStatus,
        status: InvitationStatus,
        responded_at: datetime,
    ) -> Invitation | None:
        """Atomically move an invitation from one status to another.

        The write only applies if the stored status still equals `expected`
        at write time. Concurrent callers racing on the same row observe at
        most one successful transition.

        Args:
            invitation_id: Invitation to update
            expected: Status the row must currently have
            status: New status
            responded_at: Time of the transition

        Returns:
            The updated invitation if the row matched, None otherwise
        """
        pass

    @abstractmethod
    async def expire_overdue(self, now: datetime) -> int:
        """Move every pending invitation whose expiry has passed to EXPIRED.

        Args:
            now: Current time

        Returns:
            Number of invitations expired
        """
        pass
