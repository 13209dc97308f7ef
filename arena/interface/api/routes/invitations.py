"""Invitation routes."""

from typing import Any
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, HTTPException, Query, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from arena.application.usecase.invitation import (
    CancelInvitationRequest,
    CancelInvitationResponse,
    CancelInvitationUseCase,
    CreateInvitationRequest,
    CreateInvitationResponse,
    CreateInvitationUseCase,
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
    RespondToInvitationRequest,
    RespondToInvitationResponse,
    RespondToInvitationUseCase,
)
from arena.domain.error import DomainError
from arena.domain.service import JWTService
from arena.domain.value import (
    ArtistUid,
    InvitationKind,
    InvitationStatus,
    ResponseAction,
)
from arena.interface.error import ErrorResponse, domain_error_response

router = APIRouter(prefix="/invitations", tags=["invitations"], route_class=DishkaRoute)

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    code: {"model": ErrorResponse} for code in (400, 403, 404, 409, 500, 502)
}


class CreateInvitationAPIRequest(BaseModel):
    """API request for sending an invitation."""

    recipient_uid: str
    kind: str
    context: dict[str, Any] = Field(default_factory=dict)


class RespondAPIRequest(BaseModel):
    """API request for answering an invitation."""

    action: ResponseAction


def _authenticate(
    jwt_service: JWTService,
    authorization: str | None,
    auth_token: str | None,
) -> ArtistUid:
    """Resolve the acting artist from a bearer header or the auth cookie.

    Raises:
        HTTPException: 401 if no valid token is present
    """
    token = auth_token
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            token = credentials.strip()

    artist_uid = jwt_service.get_artist_uid_from_token(token)
    if not artist_uid:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return artist_uid


@router.post(
    "",
    response_model=CreateInvitationResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def create_invitation(
    request: CreateInvitationAPIRequest,
    create_invitation_use_case: FromDishka[CreateInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> CreateInvitationResponse | JSONResponse:
    """Send a battle or live collaboration invitation.

    Args:
        request: Recipient, kind and kind-specific context
        create_invitation_use_case: Create invitation use case from DI
        jwt_service: JWT service from DI
        authorization: Bearer token header
        auth_token: JWT token from cookie

    Returns:
        The new invitation id, or an error body
    """
    initiator_uid = _authenticate(jwt_service, authorization, auth_token)

    try:
        return await create_invitation_use_case.execute(
            CreateInvitationRequest(
                initiator_uid=initiator_uid,
                recipient_uid=request.recipient_uid,
                kind=request.kind,
                context=request.context,
            )
        )
    except DomainError as e:
        return domain_error_response(e)


@router.get("", response_model=ListInvitationsResponse, responses=ERROR_RESPONSES)
async def list_invitations(
    list_invitations_use_case: FromDishka[ListInvitationsUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
    kind: InvitationKind | None = Query(default=None),
    status_filter: InvitationStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=50, ge=1, le=200),
) -> ListInvitationsResponse | JSONResponse:
    """List invitations the current artist received and sent.

    Args:
        list_invitations_use_case: List invitations use case from DI
        jwt_service: JWT service from DI
        authorization: Bearer token header
        auth_token: JWT token from cookie
        kind: Optional kind filter
        status_filter: Optional status filter
        limit: Maximum invitations per direction (1-200)

    Returns:
        Received and sent invitations with counterpart profiles
    """
    artist_uid = _authenticate(jwt_service, authorization, auth_token)

    try:
        return await list_invitations_use_case.execute(
            ListInvitationsRequest(
                artist_uid=artist_uid, kind=kind, status=status_filter, limit=limit
            )
        )
    except DomainError as e:
        return domain_error_response(e)


@router.post(
    "/{invitation_id}/respond",
    response_model=RespondToInvitationResponse,
    responses=ERROR_RESPONSES,
)
async def respond_to_invitation(
    invitation_id: UUID,
    request: RespondAPIRequest,
    respond_use_case: FromDishka[RespondToInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> RespondToInvitationResponse | JSONResponse:
    """Accept or decline an invitation addressed to the current artist.

    A 409 means another response won the race. A 500 carrying
    `invitation_id` means the invitation is accepted but its battle match
    still has to be created by reconciliation.

    Args:
        invitation_id: Invitation to answer
        request: Accept or decline
        respond_use_case: Respond use case from DI
        jwt_service: JWT service from DI
        authorization: Bearer token header
        auth_token: JWT token from cookie

    Returns:
        Updated invitation plus the match or session acceptance produced
    """
    actor_uid = _authenticate(jwt_service, authorization, auth_token)

    try:
        return await respond_use_case.execute(
            RespondToInvitationRequest(
                actor_uid=actor_uid,
                invitation_id=invitation_id,
                action=request.action,
            )
        )
    except DomainError as e:
        return domain_error_response(e)


@router.post(
    "/{invitation_id}/cancel",
    response_model=CancelInvitationResponse,
    responses=ERROR_RESPONSES,
)
async def cancel_invitation(
    invitation_id: UUID,
    cancel_use_case: FromDishka[CancelInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> CancelInvitationResponse | JSONResponse:
    """Withdraw a pending invitation sent by the current artist."""
    actor_uid = _authenticate(jwt_service, authorization, auth_token)

    try:
        return await cancel_use_case.execute(
            CancelInvitationRequest(actor_uid=actor_uid, invitation_id=invitation_id)
        )
    except DomainError as e:
        return domain_error_response(e)
