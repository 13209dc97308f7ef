"""Battle match repository interface."""

from abc import ABC, abstractmethod

from arena.domain.model.battle_match import BattleMatch
from arena.domain.value import InvitationId


class BattleMatchRepository(ABC):
    """Repository for BattleMatch entity."""

    @abstractmethod
    async def find_by_invitation_id(
        self, invitation_id: InvitationId
    ) -> BattleMatch | None:
        """Find the match created from an invitation."""
        pass

    @abstractmethod
    async def add_if_absent(self, match: BattleMatch) -> BattleMatch:
        """Insert a match unless one already exists for its invitation.

        Idempotent per invitation: a second call for the same invitation
        returns the stored match instead of creating another one.

        Args:
            match: Match to insert

        Returns:
            The stored match for the invitation
        """
        pass

    @abstractmethod
    async def find_matched_invitation_ids(
        self, invitation_ids: list[InvitationId]
    ) -> set[InvitationId]:
        """Return the subset of invitation ids that already have a match."""
        pass
