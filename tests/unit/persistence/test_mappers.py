"""Unit tests for row <-> domain mappers."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from arena.domain.model import BattleContext, Invitation, LiveCollabContext
from arena.domain.value import (
    ArtistUid,
    BattleCategory,
    InvitationId,
    InvitationKind,
    InvitationStatus,
)
from arena.persistence.mappers import invitation_to_dict, row_to_invitation

NOW = datetime(2025, 3, 14, 20, 0, tzinfo=timezone.utc)


def _invitation(context) -> Invitation:
    return Invitation(
        id=InvitationId(uuid4()),
        kind=InvitationKind(context.kind),
        initiator_uid=ArtistUid("alice"),
        recipient_uid=ArtistUid("bob"),
        context=context,
        status=InvitationStatus.PENDING,
        created_at=NOW,
    )


class TestInvitationMapping:
    """Tests for invitation mapping."""

    def test_battle_context_stored_without_discriminator(self):
        """Should store JSON-native context values without the kind key."""
        invitation = _invitation(
            BattleContext(
                title="Clash",
                category=BattleCategory.DJ,
                proposed_starts_at=NOW,
                stake_coins=10,
            )
        )

        data = invitation_to_dict(invitation)

        assert data["kind"] == "battle"
        assert data["status"] == "pending"
        assert "kind" not in data["context"]
        assert data["context"]["category"] == "dj"
        assert data["context"]["proposed_starts_at"].startswith("2025-03-14T20:00:00")

    def test_row_picks_context_by_kind(self):
        """Should rebuild the typed context from the row kind."""
        invitation = _invitation(
            LiveCollabContext(session_id="sess-1", initiator_name="DJ Alice")
        )
        row = invitation_to_dict(invitation)
        row["id"] = str(row["id"])

        restored = row_to_invitation(row)

        assert restored == invitation
        assert isinstance(restored.context, LiveCollabContext)

    def test_row_with_empty_context(self):
        """Should fail loudly on a battle row with no context."""
        row = {
            "id": uuid4(),
            "kind": "battle",
            "initiator_uid": "alice",
            "recipient_uid": "bob",
            "context": None,
            "status": "declined",
            "created_at": NOW,
        }

        with pytest.raises(ValueError):
            row_to_invitation(row)
