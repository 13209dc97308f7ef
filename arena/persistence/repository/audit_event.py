"""PostgreSQL implementation of AuditEvent repository."""

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from arena.domain.model import AuditEvent
from arena.domain.repository import AuditEventRepository
from arena.domain.value import InvitationId
from arena.persistence.mappers import audit_event_to_dict, row_to_audit_event
from arena.persistence.tables import invitation_events_table


class PostgresAuditEventRepository(AuditEventRepository):
    """PostgreSQL implementation of AuditEventRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def append(self, event: AuditEvent) -> AuditEvent:
        """Append an audit event inside a savepoint.

        A failed audit write rolls back only itself, never the invitation
        change it describes.
        """
        stmt = insert(invitation_events_table).values(**audit_event_to_dict(event))
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return event

    async def find_by_invitation(self, invitation_id: InvitationId) -> list[AuditEvent]:
        stmt = (
            select(invitation_events_table)
            .where(invitation_events_table.c.invitation_id == invitation_id)
            .order_by(invitation_events_table.c.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return [row_to_audit_event(dict(row)) for row in result.mappings().all()]
