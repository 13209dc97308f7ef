"""In-memory battle match repository for testing."""

from typing import Optional

from arena.domain.model import BattleMatch
from arena.domain.repository import BattleMatchRepository
from arena.domain.value import InvitationId


class InMemoryBattleMatchRepository(BattleMatchRepository):
    """In-memory implementation of BattleMatchRepository for testing."""

    def __init__(self) -> None:
        self._matches: dict[InvitationId, BattleMatch] = {}

    async def find_by_invitation_id(
        self, invitation_id: InvitationId
    ) -> Optional[BattleMatch]:
        return self._matches.get(invitation_id)

    async def add_if_absent(self, match: BattleMatch) -> BattleMatch:
        """Insert a match unless its invitation already has one."""
        return self._matches.setdefault(match.invitation_id, match)

    async def find_matched_invitation_ids(
        self, invitation_ids: list[InvitationId]
    ) -> set[InvitationId]:
        return {i for i in invitation_ids if i in self._matches}

    def all(self) -> list[BattleMatch]:
        """Every stored match, for test assertions."""
        return list(self._matches.values())
