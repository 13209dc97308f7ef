"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from arena.domain.model import (
    AuditEvent,
    BattleContext,
    BattleMatch,
    Invitation,
    LiveCollabContext,
)
from arena.domain.value import (
    ArtistUid,
    AuditAction,
    AuditEventId,
    BattleCategory,
    BattleMatchId,
    BattleMatchStatus,
    InvitationId,
    InvitationKind,
    InvitationStatus,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model.

    The context column is stored without its discriminator, so the context
    model is picked from the row's kind.

    Args:
        row: Database row as dict

    Returns:
        Invitation domain model
    """
    kind = InvitationKind(row["kind"])
    payload = {**(row.get("context") or {}), "kind": kind.value}
    context = (
        BattleContext.model_validate(payload)
        if kind == InvitationKind.BATTLE
        else LiveCollabContext.model_validate(payload)
    )

    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        kind=kind,
        initiator_uid=ArtistUid(row["initiator_uid"]),
        recipient_uid=ArtistUid(row["recipient_uid"]),
        context=context,
        status=InvitationStatus(row["status"]),
        created_at=row["created_at"],
        responded_at=row.get("responded_at"),
        expires_at=row.get("expires_at"),
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to database dict.

    Args:
        invitation: Invitation domain model

    Returns:
        Dict suitable for database insertion
    """
    data = invitation.model_dump(mode="python")
    data["kind"] = invitation.kind.value
    data["status"] = invitation.status.value
    # JSONB needs JSON-native values (datetimes as ISO strings)
    data["context"] = invitation.context.model_dump(mode="json", exclude={"kind"})
    return data


def row_to_battle_match(row: Dict[str, Any]) -> BattleMatch:
    """Convert database row to BattleMatch domain model."""
    return BattleMatch(
        id=BattleMatchId(_uuid(row["id"])),
        invitation_id=InvitationId(_uuid(row["invitation_id"])),
        host_uid=ArtistUid(row["host_uid"]),
        guest_uid=ArtistUid(row["guest_uid"]),
        title=row["title"],
        category=BattleCategory(row["category"]),
        stake_coins=row.get("stake_coins") or 0,
        scheduled_starts_at=row.get("scheduled_starts_at"),
        status=BattleMatchStatus(row["status"]),
        created_at=row["created_at"],
    )


def battle_match_to_dict(match: BattleMatch) -> Dict[str, Any]:
    """Convert BattleMatch domain model to database dict."""
    data = match.model_dump(mode="python")
    data["category"] = match.category.value
    data["status"] = match.status.value
    return data


def row_to_audit_event(row: Dict[str, Any]) -> AuditEvent:
    """Convert database row to AuditEvent domain model."""
    return AuditEvent(
        id=AuditEventId(_uuid(row["id"])),
        invitation_id=InvitationId(_uuid(row["invitation_id"])),
        actor_uid=ArtistUid(row["actor_uid"]),
        action=AuditAction(row["action"]),
        metadata=row.get("metadata") or {},
        created_at=row["created_at"],
    )


def audit_event_to_dict(event: AuditEvent) -> Dict[str, Any]:
    """Convert AuditEvent domain model to database dict."""
    data = event.model_dump(mode="python")
    data["action"] = event.action.value
    data["metadata"] = event.model_dump(mode="json")["metadata"]
    return data
