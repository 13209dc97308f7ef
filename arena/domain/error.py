"""Domain layer errors.

Every domain error carries an ErrorKind so callers can branch on the
category of failure without matching on concrete exception types.
"""

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    """Category of a domain failure."""

    INVALID = "invalid"
    NOT_FOUND = "not_found"
    NOT_ALLOWED = "not_allowed"
    DUPLICATE = "duplicate"
    UNKNOWN = "unknown"


class DomainError(Exception):
    """Base domain error."""

    kind: ClassVar[ErrorKind] = ErrorKind.UNKNOWN


class ValidationError(DomainError):
    """Domain validation error."""

    kind = ErrorKind.INVALID


class InvalidTransitionError(ValidationError):
    """Raised when an invitation is no longer pending."""

    def __init__(self, invitation_id: str, status: str, message: str | None = None):
        self.invitation_id = invitation_id
        self.status = status
        super().__init__(message or f"Invitation {invitation_id} is not pending")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvitationAlreadyRespondedError(NotFoundError):
    """Raised when a guarded transition matched no pending row.

    Another caller decided the invitation between our read and our write.
    This is an expected outcome of concurrent use, not a system fault.
    """

    def __init__(self, invitation_id: str):
        super().__init__("Pending invitation", invitation_id)
        self.invitation_id = invitation_id

    def __str__(self) -> str:
        return "This invitation was already responded to."


class NotAuthorizedError(DomainError):
    """Raised when an artist acts on an invitation not addressed to them."""

    kind = ErrorKind.NOT_ALLOWED

    def __init__(self, action: str, resource_id: str, artist_uid: str):
        self.action = action
        self.resource_id = resource_id
        self.artist_uid = artist_uid
        super().__init__(
            f"Artist {artist_uid} is not allowed to {action} invitation {resource_id}"
        )


class DuplicateInvitationError(DomainError):
    """Raised when an active invitation already exists for the same target."""

    kind = ErrorKind.DUPLICATE

    def __init__(self, target: str, recipient_uid: str):
        self.target = target
        self.recipient_uid = recipient_uid
        super().__init__(
            f"An active invitation already exists for {target} and {recipient_uid}"
        )


class StoreError(DomainError):
    """Raised when a backing store or collaborator fails."""

    kind = ErrorKind.UNKNOWN


class CommitmentCreationError(DomainError):
    """Raised when an invitation was accepted but its commitment was not created.

    The invitation stays accepted. Reconciliation creates the missing
    commitment later, keyed by the invitation id.
    """

    kind = ErrorKind.UNKNOWN

    def __init__(self, invitation_id: str, reason: str):
        self.invitation_id = invitation_id
        self.reason = reason
        super().__init__(
            f"Accepted invitation {invitation_id} but failed to create commitment: "
            f"{reason}"
        )
