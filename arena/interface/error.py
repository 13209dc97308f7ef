"""Interface layer errors.

Maps domain failures onto HTTP responses.
"""

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from arena.domain.error import (
    CommitmentCreationError,
    DomainError,
    ErrorKind,
    InvitationAlreadyRespondedError,
    StoreError,
)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.NOT_ALLOWED: status.HTTP_403_FORBIDDEN,
    ErrorKind.DUPLICATE: status.HTTP_409_CONFLICT,
    ErrorKind.UNKNOWN: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ErrorResponse(BaseModel):
    """Error body returned for domain failures."""

    detail: str
    kind: ErrorKind
    invitation_id: str | None = None


def status_code_for(error: DomainError) -> int:
    """HTTP status for a domain error."""
    if isinstance(error, InvitationAlreadyRespondedError):
        # Lost race: the invitation exists, someone else decided it
        return status.HTTP_409_CONFLICT
    if isinstance(error, StoreError):
        return status.HTTP_502_BAD_GATEWAY
    return STATUS_BY_KIND[error.kind]


def domain_error_response(error: DomainError) -> JSONResponse:
    """Render a domain error as a JSON response.

    Routes return this instead of raising so the request session still
    commits writes the domain kept on purpose (an acceptance whose match
    failed, an invitation expired while being answered).
    """
    body = ErrorResponse(
        detail=str(error),
        kind=error.kind,
        invitation_id=(
            error.invitation_id
            if isinstance(
                error, (CommitmentCreationError, InvitationAlreadyRespondedError)
            )
            else None
        ),
    )
    return JSONResponse(
        status_code=status_code_for(error),
        content=body.model_dump(mode="json", exclude_none=True),
    )
