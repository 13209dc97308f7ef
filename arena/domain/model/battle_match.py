"""Battle match entity.

A battle match is the commitment created when a battle invitation is accepted.
"""

from datetime import datetime
from typing import Optional

from arena.domain.model.common import DomainModel
from arena.domain.value import (
    ArtistUid,
    BattleCategory,
    BattleMatchId,
    BattleMatchStatus,
    InvitationId,
)


class BattleMatch(DomainModel):
    """Scheduled battle between the invitation's two artists.

    The initiator hosts and the recipient is the guest. Title, category, stake
    and start time are copied from the invitation at acceptance time.
    At most one match exists per invitation.
    """

    id: BattleMatchId
    invitation_id: InvitationId
    host_uid: ArtistUid
    guest_uid: ArtistUid
    title: str
    category: BattleCategory
    stake_coins: int = 0
    scheduled_starts_at: Optional[datetime] = None
    status: BattleMatchStatus = BattleMatchStatus.SCHEDULED
    created_at: datetime
