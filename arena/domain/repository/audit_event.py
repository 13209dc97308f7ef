"""Audit event repository interface."""

from abc import ABC, abstractmethod

from arena.domain.model.audit_event import AuditEvent
from arena.domain.value import InvitationId


class AuditEventRepository(ABC):
    """Append-only repository for invitation audit events."""

    @abstractmethod
    async def append(self, event: AuditEvent) -> AuditEvent:
        """Append an audit event.

        Args:
            event: Event to append

        Returns:
            The appended event
        """
        pass

    @abstractmethod
    async def find_by_invitation(self, invitation_id: InvitationId) -> list[AuditEvent]:
        """List the events of an invitation, oldest first."""
        pass
