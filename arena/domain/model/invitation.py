"""Invitation entity.

An invitation is a request from one artist (the initiator) to another (the
recipient). Battle invitations propose a scheduled battle; live collaboration
invitations ask the recipient to join a running broadcast.
"""

import math
from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import Field, field_validator, model_validator

from arena.domain.model.common import DomainModel
from arena.domain.value import (
    ArtistUid,
    BattleCategory,
    InvitationId,
    InvitationKind,
    InvitationStatus,
)


class BattleContext(DomainModel):
    """Battle proposal carried by a battle invitation."""

    kind: Literal["battle"] = "battle"
    title: str = Field(min_length=1, max_length=200)
    category: BattleCategory
    message: Optional[str] = None
    proposed_starts_at: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    stake_coins: int = 0

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: object) -> object:
        """Trim surrounding whitespace from the title."""
        return v.strip() if isinstance(v, str) else v

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v: object) -> object:
        """Accept categories regardless of surrounding whitespace or case."""
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("message", mode="before")
    @classmethod
    def blank_message_is_none(cls, v: object) -> object:
        """Treat a blank message as no message."""
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator("proposed_starts_at", mode="before")
    @classmethod
    def blank_start_is_none(cls, v: object) -> object:
        """Treat a blank start time as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("duration_minutes", mode="before")
    @classmethod
    def positive_duration_or_unset(cls, v: object) -> Optional[int]:
        """Keep positive durations (rounded to minutes), drop anything else."""
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return None
        if not math.isfinite(v) or v <= 0:
            return None
        return round(v)

    @field_validator("stake_coins", mode="before")
    @classmethod
    def clamp_stake(cls, v: object) -> int:
        """Stakes default to zero and are never negative."""
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return 0
        if not math.isfinite(v):
            return 0
        return max(0, int(v))


class LiveCollabContext(DomainModel):
    """Live session a live collaboration invitation points at."""

    kind: Literal["live_collab"] = "live_collab"
    session_id: str = Field(min_length=1, max_length=255)
    initiator_name: str = ""

    @field_validator("session_id", "initiator_name", mode="before")
    @classmethod
    def strip_strings(cls, v: object) -> object:
        """Trim surrounding whitespace."""
        return v.strip() if isinstance(v, str) else v


InvitationContext = Annotated[
    Union[BattleContext, LiveCollabContext], Field(discriminator="kind")
]


class Invitation(DomainModel):
    """Invitation entity.

    Business rules:
    - Initiator and recipient are distinct artists
    - PENDING is the only non-terminal status; terminal rows never change
    - Only the recipient responds, only the initiator cancels
    - Invitations are never deleted
    """

    id: InvitationId
    kind: InvitationKind
    initiator_uid: ArtistUid
    recipient_uid: ArtistUid
    context: InvitationContext
    status: InvitationStatus = InvitationStatus.PENDING
    created_at: datetime
    responded_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    @model_validator(mode="after")
    def context_matches_kind(self) -> "Invitation":
        """Ensure the context payload belongs to the invitation kind."""
        if self.context.kind != self.kind.value:
            raise ValueError(
                f"Context of kind {self.context.kind} "
                f"does not match invitation kind {self.kind.value}"
            )
        return self

    def is_overdue(self, now: datetime) -> bool:
        """Whether a pending invitation has passed its expiry time."""
        return (
            self.status == InvitationStatus.PENDING
            and self.expires_at is not None
            and self.expires_at <= now
        )
