"""Domain services."""

from .base import Service
from .invitation_policy import (
    AcceptOutcome,
    BattlePolicy,
    InviteKindPolicy,
    LiveCollabPolicy,
)
from .invitation_service import (
    InvitationListing,
    InvitationService,
    ReconcileReport,
    ResponseOutcome,
)
from .jwt_service import JWTService
from .profile_service import ProfileDirectory, ProfileService

__all__ = [
    "AcceptOutcome",
    "BattlePolicy",
    "InvitationListing",
    "InvitationService",
    "InviteKindPolicy",
    "JWTService",
    "LiveCollabPolicy",
    "ProfileDirectory",
    "ProfileService",
    "ReconcileReport",
    "ResponseOutcome",
    "Service",
]
