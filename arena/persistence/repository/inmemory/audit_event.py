"""In-memory audit event repository for testing."""

from arena.domain.model import AuditEvent
from arena.domain.repository import AuditEventRepository
from arena.domain.value import InvitationId


class InMemoryAuditEventRepository(AuditEventRepository):
    """In-memory implementation of AuditEventRepository for testing."""

    def __init__(self) -> None:
        self._events: list[AuditEvent] = []

    async def append(self, event: AuditEvent) -> AuditEvent:
        self._events.append(event)
        return event

    async def find_by_invitation(self, invitation_id: InvitationId) -> list[AuditEvent]:
        """Events for an invitation in insertion order."""
        return [e for e in self._events if e.invitation_id == invitation_id]
