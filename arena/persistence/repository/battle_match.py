"""PostgreSQL implementation of BattleMatch repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from arena.domain.model import BattleMatch
from arena.domain.repository import BattleMatchRepository
from arena.domain.value import InvitationId
from arena.persistence.mappers import battle_match_to_dict, row_to_battle_match
from arena.persistence.tables import battle_matches_table


class PostgresBattleMatchRepository(BattleMatchRepository):
    """PostgreSQL implementation of BattleMatchRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_invitation_id(
        self, invitation_id: InvitationId
    ) -> Optional[BattleMatch]:
        stmt = select(battle_matches_table).where(
            battle_matches_table.c.invitation_id == invitation_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_battle_match(dict(row)) if row else None

    async def add_if_absent(self, match: BattleMatch) -> BattleMatch:
        """Insert a match keyed by invitation, re-reading on conflict.

        Runs in a savepoint so a failed insert never aborts the acceptance
        already written in the surrounding transaction.
        """
        stmt = (
            insert(battle_matches_table)
            .values(**battle_match_to_dict(match))
            .on_conflict_do_nothing(index_elements=["invitation_id"])
        )
        async with self.session.begin_nested():
            await self.session.execute(stmt)

        stored = await self.find_by_invitation_id(match.invitation_id)
        if stored is None:
            raise RuntimeError(
                f"Battle match for invitation {match.invitation_id} vanished"
            )
        return stored

    async def find_matched_invitation_ids(
        self, invitation_ids: list[InvitationId]
    ) -> set[InvitationId]:
        if not invitation_ids:
            return set()
        stmt = select(battle_matches_table.c.invitation_id).where(
            battle_matches_table.c.invitation_id.in_(invitation_ids)
        )
        result = await self.session.execute(stmt)
        return {InvitationId(row.invitation_id) for row in result.all()}
