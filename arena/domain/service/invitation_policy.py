"""Kind-specific invitation rules.

Both invitation kinds share one state machine. What differs per kind is how the
context payload is validated before sending and what acceptance produces.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any, ClassVar, Mapping
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from arena.domain.error import (
    DuplicateInvitationError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from arena.domain.model import (
    BattleContext,
    BattleMatch,
    Invitation,
    InvitationContext,
    LiveCollabContext,
)
from arena.domain.repository import BattleMatchRepository, InvitationRepository
from arena.domain.value import (
    ArtistUid,
    BattleMatchId,
    BattleMatchStatus,
    InvitationKind,
    SessionRef,
)
from arena.domain.value.common import ValueObject

from .profile_service import ProfileDirectory, ProfileService

# Messages shown for the first failing field of a context payload
_FIELD_MESSAGES = {
    "title": "Title is required.",
    "category": "Invalid category.",
    "session_id": "Invalid artist or session.",
}


class AcceptOutcome(ValueObject):
    """What accepting an invitation produced."""

    match: BattleMatch | None = None
    session: SessionRef | None = None


class InviteKindPolicy(ABC):
    """Validation and acceptance rules for one invitation kind."""

    kind: ClassVar[InvitationKind]
    context_model: ClassVar[type[BattleContext] | type[LiveCollabContext]]

    def __init__(self, ttl: timedelta | None = None) -> None:
        """Initialize policy.

        Args:
            ttl: How long a pending invitation of this kind stays answerable
        """
        self.ttl = ttl

    @abstractmethod
    async def prepare(
        self,
        initiator_uid: ArtistUid,
        recipient_uid: ArtistUid,
        payload: Mapping[str, Any],
    ) -> InvitationContext:
        """Validate a context payload and run pre-send checks.

        Must not write anything.

        Raises:
            ValidationError: If the payload violates the kind's rules
            NotFoundError: If a referenced artist does not exist
            DuplicateInvitationError: If an equivalent invitation is active
        """

    @abstractmethod
    async def on_accept(self, invitation: Invitation, now: datetime) -> AcceptOutcome:
        """Produce the commitment for a freshly accepted invitation.

        Must be idempotent for a given invitation.
        """

    def expires_at(self, now: datetime) -> datetime | None:
        """Expiry time for an invitation created now, if the kind expires."""
        if self.ttl is None:
            return None
        return now + self.ttl

    def parse_context(self, payload: Mapping[str, Any]) -> InvitationContext:
        """Build the typed context for this kind from a raw payload.

        Raises:
            ValidationError: If the payload is malformed
        """
        try:
            return self.context_model.model_validate(
                {**payload, "kind": self.kind.value}
            )
        except PydanticValidationError as e:
            raise ValidationError(_describe(e)) from e


def _describe(error: PydanticValidationError) -> str:
    """Turn the first pydantic error into a user-facing message."""
    first = error.errors()[0]
    field = str(first["loc"][0]) if first.get("loc") else ""
    return _FIELD_MESSAGES.get(field, f"Invalid {field or 'input'}: {first['msg']}")


class BattlePolicy(InviteKindPolicy):
    """Rules for battle invitations.

    - Recipient must exist in the profile directory
    - No dedup: an artist may send any number of battle invitations
    - Acceptance schedules a battle match hosted by the initiator
    """

    kind = InvitationKind.BATTLE
    context_model = BattleContext

    def __init__(
        self,
        profile_directory: ProfileDirectory,
        match_repository: BattleMatchRepository,
        ttl: timedelta | None = None,
    ) -> None:
        """Initialize battle policy.

        Args:
            profile_directory: Directory used to validate the recipient
            match_repository: Battle match repository
            ttl: Optional expiry for pending battle invitations
        """
        super().__init__(ttl)
        self.profile_directory = profile_directory
        self.match_repository = match_repository

    async def prepare(
        self,
        initiator_uid: ArtistUid,
        recipient_uid: ArtistUid,
        payload: Mapping[str, Any],
    ) -> InvitationContext:
        context = self.parse_context(payload)

        try:
            exists = await self.profile_directory.exists(recipient_uid)
        except Exception as e:
            logfire.error(
                "Failed to validate battle recipient",
                recipient_uid=recipient_uid,
                error=str(e),
            )
            raise StoreError(f"Failed to validate recipient: {e}") from e

        if not exists:
            raise NotFoundError("Recipient artist", recipient_uid)
        return context

    async def on_accept(self, invitation: Invitation, now: datetime) -> AcceptOutcome:
        existing = await self.match_repository.find_by_invitation_id(invitation.id)
        if existing:
            return AcceptOutcome(match=existing)

        context = invitation.context
        assert isinstance(context, BattleContext)

        match = BattleMatch(
            id=BattleMatchId(uuid4()),
            invitation_id=invitation.id,
            host_uid=invitation.initiator_uid,
            guest_uid=invitation.recipient_uid,
            title=context.title,
            category=context.category,
            stake_coins=context.stake_coins,
            scheduled_starts_at=context.proposed_starts_at,
            status=BattleMatchStatus.SCHEDULED,
            created_at=now,
        )
        stored = await self.match_repository.add_if_absent(match)
        logfire.info(
            "Battle match scheduled",
            match_id=str(stored.id),
            invitation_id=str(invitation.id),
        )
        return AcceptOutcome(match=stored)


class LiveCollabPolicy(InviteKindPolicy):
    """Rules for live collaboration invitations.

    - At most one pending or accepted invitation per (session, recipient)
    - Recipient existence is not checked before sending
    - The initiator name always comes from the profile directory
    - Acceptance hands back the session to join; nothing is persisted
    """

    kind = InvitationKind.LIVE_COLLAB
    context_model = LiveCollabContext

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        profile_service: ProfileService,
        ttl: timedelta | None = None,
    ) -> None:
        """Initialize live collaboration policy.

        Args:
            invitation_repository: Invitation repository used for dedup
            profile_service: Profile service used to name the initiator
            ttl: Optional expiry for pending live invitations
        """
        super().__init__(ttl)
        self.invitation_repository = invitation_repository
        self.profile_service = profile_service

    async def prepare(
        self,
        initiator_uid: ArtistUid,
        recipient_uid: ArtistUid,
        payload: Mapping[str, Any],
    ) -> InvitationContext:
        context = self.parse_context(payload)
        assert isinstance(context, LiveCollabContext)

        if await self.invitation_repository.exists_active_for_session(
            context.session_id, recipient_uid
        ):
            logfire.warn(
                "Live invitation already active",
                session_id=context.session_id,
                recipient_uid=recipient_uid,
            )
            raise DuplicateInvitationError(
                f"session {context.session_id}", recipient_uid
            )

        name = await self.profile_service.display_name(initiator_uid)
        return context.model_copy(update={"initiator_name": name})

    async def on_accept(self, invitation: Invitation, now: datetime) -> AcceptOutcome:
        context = invitation.context
        assert isinstance(context, LiveCollabContext)
        return AcceptOutcome(
            session=SessionRef(
                session_id=context.session_id, channel_id=context.session_id
            )
        )
