"""Unit tests for domain error to HTTP mapping."""

import json

import pytest

from arena.domain.error import (
    CommitmentCreationError,
    DuplicateInvitationError,
    InvalidTransitionError,
    InvitationAlreadyRespondedError,
    NotAuthorizedError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from arena.interface.error import domain_error_response, status_code_for


class TestStatusCodeFor:
    """Tests for status_code_for."""

    @pytest.mark.parametrize(
        "error, expected",
        [
            (ValidationError("bad"), 400),
            (InvalidTransitionError("i-1", "declined"), 400),
            (NotFoundError("Invitation", "i-1"), 404),
            (InvitationAlreadyRespondedError("i-1"), 409),
            (NotAuthorizedError("respond to", "i-1", "carol"), 403),
            (DuplicateInvitationError("session s", "bob"), 409),
            (StoreError("directory down"), 502),
            (CommitmentCreationError("i-1", "insert failed"), 500),
        ],
    )
    def test_maps_error(self, error, expected):
        """Should map each failure to its HTTP status."""
        assert status_code_for(error) == expected


class TestDomainErrorResponse:
    """Tests for domain_error_response."""

    def test_commitment_failure_carries_invitation_id(self):
        """Should expose the invitation id so clients can retry later."""
        response = domain_error_response(CommitmentCreationError("i-1", "boom"))

        body = json.loads(response.body)
        assert response.status_code == 500
        assert body["kind"] == "unknown"
        assert body["invitation_id"] == "i-1"

    def test_lost_race_message(self):
        """Should tell the loser the invitation was already answered."""
        response = domain_error_response(InvitationAlreadyRespondedError("i-1"))

        body = json.loads(response.body)
        assert body["detail"] == "This invitation was already responded to."
        assert body["kind"] == "not_found"

    def test_plain_error_has_no_invitation_id(self):
        """Should omit invitation_id when the error has none."""
        response = domain_error_response(ValidationError("You can't invite yourself."))

        body = json.loads(response.body)
        assert body == {"detail": "You can't invite yourself.", "kind": "invalid"}
