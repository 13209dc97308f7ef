"""PostgreSQL implementation of Invitation repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from arena.domain.error import DuplicateInvitationError, StoreError
from arena.domain.model import Invitation
from arena.domain.repository import InvitationRepository
from arena.domain.value import (
    ArtistUid,
    InvitationId,
    InvitationKind,
    InvitationStatus,
)
from arena.persistence.mappers import invitation_to_dict, row_to_invitation
from arena.persistence.tables import LIVE_SESSION_UNIQUE_INDEX, invitations_table

ACTIVE_STATUSES = (InvitationStatus.PENDING.value, InvitationStatus.ACCEPTED.value)


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        stmt = select(invitations_table).where(invitations_table.c.id == invitation_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def add(self, invitation: Invitation) -> Invitation:
        """Insert a new invitation.

        The partial unique index on live sessions rejects a second active
        invitation for the same (session, recipient) even when two creates
        race past the dedup check.

        Raises:
            DuplicateInvitationError: If the live session index rejects the row
            StoreError: If any other constraint rejects the row
        """
        stmt = insert(invitations_table).values(**invitation_to_dict(invitation))
        try:
            # Savepoint so a rejected insert leaves the request transaction usable
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            if _violated_constraint(e) != LIVE_SESSION_UNIQUE_INDEX:
                raise StoreError(f"Failed to store invitation: {e.orig}") from e
            session_id = getattr(invitation.context, "session_id", "")
            raise DuplicateInvitationError(
                f"session {session_id}", invitation.recipient_uid
            ) from e
        return invitation

    async def exists_active_for_session(
        self, session_id: str, recipient_uid: ArtistUid
    ) -> bool:
        stmt = (
            select(invitations_table.c.id)
            .where(
                and_(
                    invitations_table.c.kind == InvitationKind.LIVE_COLLAB.value,
                    invitations_table.c.context["session_id"].astext == session_id,
                    invitations_table.c.recipient_uid == recipient_uid,
                    invitations_table.c.status.in_(ACTIVE_STATUSES),
                )
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def find_by_recipient(
        self,
        recipient_uid: ArtistUid,
        kind: Optional[InvitationKind] = None,
        status: Optional[InvitationStatus] = None,
        limit: int = 50,
    ) -> list[Invitation]:
        return await self._find_for_artist(
            invitations_table.c.recipient_uid, recipient_uid, kind, status, limit
        )

    async def find_by_initiator(
        self,
        initiator_uid: ArtistUid,
        kind: Optional[InvitationKind] = None,
        status: Optional[InvitationStatus] = None,
        limit: int = 50,
    ) -> list[Invitation]:
        return await self._find_for_artist(
            invitations_table.c.initiator_uid, initiator_uid, kind, status, limit
        )

    async def find_by_status(
        self,
        kind: InvitationKind,
        status: InvitationStatus,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Invitation]:
        stmt = (
            select(invitations_table)
            .where(
                and_(
                    invitations_table.c.kind == kind.value,
                    invitations_table.c.status == status.value,
                )
            )
            .order_by(
                invitations_table.c.responded_at.asc().nulls_first(),
                invitations_table.c.id,
            )
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings().all()]

    async def transition(
        self,
        invitation_id: InvitationId,
        expected: InvitationStatus,
        status: InvitationStatus,
        responded_at: datetime,
    ) -> Optional[Invitation]:
        """Guarded status update.

        Single UPDATE ... WHERE id = :id AND status = :expected RETURNING *.
        Postgres re-evaluates the predicate after waiting on a concurrent
        writer's row lock, so only one of several racing updates matches.
        """
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.id == invitation_id,
                    invitations_table.c.status == expected.value,
                )
            )
            .values(status=status.value, responded_at=responded_at)
            .returning(*invitations_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_invitation(dict(row)) if row else None

    async def expire_overdue(self, now: datetime) -> int:
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.status == InvitationStatus.PENDING.value,
                    invitations_table.c.expires_at.is_not(None),
                    invitations_table.c.expires_at <= now,
                )
            )
            .values(status=InvitationStatus.EXPIRED.value, responded_at=now)
            .returning(invitations_table.c.id)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return len(result.all())

    async def _find_for_artist(
        self,
        column,
        artist_uid: ArtistUid,
        kind: Optional[InvitationKind],
        status: Optional[InvitationStatus],
        limit: int,
    ) -> list[Invitation]:
        stmt = (
            select(invitations_table)
            .where(column == artist_uid)
            .order_by(invitations_table.c.created_at.desc())
            .limit(limit)
        )
        if kind:
            stmt = stmt.where(invitations_table.c.kind == kind.value)
        if status:
            stmt = stmt.where(invitations_table.c.status == status.value)

        result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings().all()]


def _violated_constraint(error: IntegrityError) -> str | None:
    """Constraint named by an integrity error, if the driver reports one."""
    # asyncpg exposes the name on the driver error wrapped by the DBAPI adapter
    for source in (error.orig, getattr(error.orig, "__cause__", None)):
        name = getattr(source, "constraint_name", None)
        if isinstance(name, str) and name:
            return name
    if LIVE_SESSION_UNIQUE_INDEX in str(error.orig):
        return LIVE_SESSION_UNIQUE_INDEX
    return None
