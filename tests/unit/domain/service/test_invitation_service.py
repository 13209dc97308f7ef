"""Unit tests for InvitationService."""

import asyncio
from datetime import timedelta
from uuid import uuid4

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
from arena.domain.model import BattleContext, LiveCollabContext
from arena.domain.service import InvitationService, ProfileDirectory
from arena.domain.value import (
    AuditAction,
    BattleCategory,
    InvitationId,
    InvitationKind,
    InvitationStatus,
    ResponseAction,
)
from arena.persistence.repository.inmemory import (
    InMemoryBattleMatchRepository,
    InMemoryInvitationRepository,
)
from tests.harness import BATTLE_CONTEXT, create_env_fixture, make_profile

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class SlowReadInvitationRepository(InMemoryInvitationRepository):
    """Yields to the event loop after every read so responders interleave."""

    async def find_by_id(self, invitation_id):
        invitation = await super().find_by_id(invitation_id)
        await asyncio.sleep(0)
        return invitation


class FailingMatchRepository(InMemoryBattleMatchRepository):
    """Match store that rejects inserts until `healthy` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.healthy = False

    async def add_if_absent(self, match):
        if not self.healthy:
            raise RuntimeError("match store unavailable")
        return await super().add_if_absent(match)


class FailingAuditRepository:
    """Audit store that always fails."""

    async def append(self, event):
        raise RuntimeError("audit store unavailable")

    async def find_by_invitation(self, invitation_id):
        return []


async def _battle(service: InvitationService, **context):
    return await service.create_invitation(
        "alice", "bob", InvitationKind.BATTLE, {**BATTLE_CONTEXT, **context}
    )


async def _live(service: InvitationService, session_id: str = "sess-1"):
    return await service.create_invitation(
        "alice", "bob", InvitationKind.LIVE_COLLAB, {"session_id": session_id}
    )


class TestCreateInvitation:
    """Tests for create_invitation."""

    @pytest.mark.asyncio
    async def test_create_battle_invitation(self, harness):
        """Should store a pending battle invitation and audit it."""
        # Arrange
        service = harness.build()

        # Act
        invitation = await _battle(service, stake_coins=50)

        # Assert
        assert invitation.status == InvitationStatus.PENDING
        assert invitation.kind == InvitationKind.BATTLE
        assert invitation.initiator_uid == "alice"
        assert invitation.recipient_uid == "bob"
        assert invitation.responded_at is None
        assert invitation.expires_at is None
        assert isinstance(invitation.context, BattleContext)
        assert invitation.context.stake_coins == 50

        stored = await harness.invitations.find_by_id(invitation.id)
        assert stored == invitation

        events = await harness.audit.find_by_invitation(invitation.id)
        assert [e.action for e in events] == [AuditAction.SENT]
        assert events[0].metadata == {"to": "bob"}

    @pytest.mark.asyncio
    async def test_self_invitation_rejected_without_writes(self, harness):
        """Should reject inviting yourself before anything is written."""
        # Arrange
        service = harness.build()

        # Act & Assert
        with pytest.raises(ValidationError, match="can't invite yourself"):
            await service.create_invitation(
                "alice", " alice ", InvitationKind.BATTLE, BATTLE_CONTEXT
            )

        assert await harness.invitations.find_by_initiator("alice") == []
        assert harness.audit._events == []

    @pytest.mark.asyncio
    async def test_missing_artist_uid_rejected(self, harness):
        """Should reject a blank recipient."""
        service = harness.build()

        with pytest.raises(ValidationError):
            await service.create_invitation(
                "alice", "   ", InvitationKind.BATTLE, BATTLE_CONTEXT
            )

    @pytest.mark.asyncio
    async def test_unknown_kind_rejected(self, harness):
        """Should reject kinds without a policy."""
        service = harness.build()

        with pytest.raises(ValidationError, match="Unsupported invitation kind"):
            await service.create_invitation("alice", "bob", "duet", {})

    @pytest.mark.asyncio
    async def test_battle_requires_title(self, harness):
        """Should reject a blank battle title."""
        service = harness.build()

        with pytest.raises(ValidationError, match="Title is required"):
            await _battle(service, title="   ")

    @pytest.mark.asyncio
    async def test_battle_requires_known_category(self, harness):
        """Should reject categories outside the closed set."""
        service = harness.build()

        with pytest.raises(ValidationError, match="Invalid category"):
            await _battle(service, category="polka")

    @pytest.mark.asyncio
    async def test_battle_recipient_must_exist(self, harness):
        """Should reject battle invitations to unknown artists."""
        service = harness.build()

        with pytest.raises(NotFoundError):
            await service.create_invitation(
                "alice", "ghost", InvitationKind.BATTLE, BATTLE_CONTEXT
            )

        assert await harness.invitations.find_by_initiator("alice") == []

    @pytest.mark.asyncio
    async def test_battle_directory_failure_is_store_error(self, harness):
        """Should surface an unreachable directory as a store error."""
        harness.directory.fail = True
        service = harness.build()

        with pytest.raises(StoreError):
            await _battle(service)

    @pytest.mark.asyncio
    async def test_battle_invitations_are_not_deduplicated(self, harness):
        """Should allow any number of pending battle invitations."""
        service = harness.build()

        first = await _battle(service)
        second = await _battle(service)

        assert first.id != second.id
        pending = await harness.invitations.find_by_recipient(
            "bob", status=InvitationStatus.PENDING
        )
        assert len(pending) == 2

    @pytest.mark.asyncio
    async def test_live_invitation_skips_recipient_check(self, harness):
        """Should send live invitations to artists missing from the directory."""
        service = harness.build()

        invitation = await service.create_invitation(
            "alice", "ghost", InvitationKind.LIVE_COLLAB, {"session_id": "sess-1"}
        )

        assert invitation.recipient_uid == "ghost"
        assert invitation.expires_at == harness.clock.now + timedelta(minutes=30)

    @pytest.mark.asyncio
    async def test_live_invitation_names_initiator(self, harness):
        """Should fill the initiator's display name from the directory."""
        service = harness.build()

        invitation = await _live(service)

        assert isinstance(invitation.context, LiveCollabContext)
        assert invitation.context.initiator_name == "DJ Alice"

    @pytest.mark.asyncio
    async def test_live_invitation_ignores_client_name(self, harness):
        """Should not let the sender choose the name the recipient sees."""
        service = harness.build()

        invitation = await service.create_invitation(
            "alice",
            "bob",
            InvitationKind.LIVE_COLLAB,
            {"session_id": "sess-1", "initiator_name": "Burna Boy"},
        )

        stored = await harness.invitations.find_by_id(invitation.id)
        assert stored.context.initiator_name == "DJ Alice"

    @pytest.mark.asyncio
    async def test_live_invitation_name_fallback(self, harness):
        """Should fall back to a generic name when the directory is down."""
        harness.directory.fail = True
        service = harness.build()

        invitation = await _live(service)

        assert invitation.context.initiator_name == "An artist"

    @pytest.mark.asyncio
    async def test_live_invitation_deduplicated_while_active(self, harness):
        """Should reject a second active invitation for the same session."""
        service = harness.build()
        await _live(service)

        with pytest.raises(DuplicateInvitationError):
            await _live(service)

        # A different session is fine
        other = await _live(service, session_id="sess-2")
        assert other.status == InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_live_reinvite_after_decline(self, harness):
        """Should allow re-inviting once the earlier invitation is terminal."""
        service = harness.build()
        first = await _live(service)
        await service.respond("bob", first.id, ResponseAction.DECLINE)

        second = await _live(service)

        assert second.id != first.id
        assert second.status == InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_live_duplicate_after_accept(self, harness):
        """Should keep rejecting duplicates while the invitation is accepted."""
        service = harness.build()
        first = await _live(service)
        await service.respond("bob", first.id, ResponseAction.ACCEPT)

        with pytest.raises(DuplicateInvitationError):
            await _live(service)

    @pytest.mark.asyncio
    async def test_create_via_container(self, unit_env):
        """Should be resolvable from the container with in-memory components."""
        # Arrange
        directory = await unit_env.get(ProfileDirectory)
        directory.register(make_profile("bob", stage_name="Bobby"))
        service = await unit_env.get(InvitationService)

        # Act
        invitation = await service.create_invitation(
            "alice", "bob", "battle", {"title": "Clash", "category": "DJ"}
        )

        # Assert
        assert invitation.context.category == BattleCategory.DJ


class TestRespond:
    """Tests for respond."""

    @pytest.mark.asyncio
    async def test_accept_battle_creates_match(self, harness):
        """Should accept and schedule a match hosted by the initiator."""
        # Arrange
        service = harness.build()
        invitation = await _battle(service, stake_coins=25)
        harness.clock.advance(minutes=5)

        # Act
        outcome = await service.respond("bob", invitation.id, ResponseAction.ACCEPT)

        # Assert
        assert outcome.invitation.status == InvitationStatus.ACCEPTED
        assert outcome.invitation.responded_at == harness.clock.now
        assert outcome.session is None
        assert outcome.match is not None
        assert outcome.match.invitation_id == invitation.id
        assert outcome.match.host_uid == "alice"
        assert outcome.match.guest_uid == "bob"
        assert outcome.match.title == "Friday Night Showdown"
        assert outcome.match.category == BattleCategory.AMAPIANO
        assert outcome.match.stake_coins == 25
        assert harness.matches.all() == [outcome.match]

        events = await harness.audit.find_by_invitation(invitation.id)
        assert [e.action for e in events] == [AuditAction.SENT, AuditAction.ACCEPTED]
        assert events[1].metadata["from"] == "alice"
        assert events[1].metadata["match_id"] == str(outcome.match.id)

    @pytest.mark.asyncio
    async def test_accept_live_returns_session(self, harness):
        """Should hand back the session without persisting anything else."""
        service = harness.build()
        invitation = await _live(service)

        outcome = await service.respond("bob", invitation.id, ResponseAction.ACCEPT)

        assert outcome.invitation.status == InvitationStatus.ACCEPTED
        assert outcome.match is None
        assert outcome.session is not None
        assert outcome.session.session_id == "sess-1"
        assert outcome.session.channel_id == "sess-1"
        assert harness.matches.all() == []

    @pytest.mark.asyncio
    async def test_decline(self, harness):
        """Should decline without creating a match."""
        service = harness.build()
        invitation = await _battle(service)

        outcome = await service.respond("bob", invitation.id, ResponseAction.DECLINE)

        assert outcome.invitation.status == InvitationStatus.DECLINED
        assert outcome.match is None
        assert harness.matches.all() == []
        events = await harness.audit.find_by_invitation(invitation.id)
        assert events[-1].action == AuditAction.DECLINED

    @pytest.mark.asyncio
    async def test_missing_invitation(self, harness):
        """Should raise not found for unknown ids."""
        service = harness.build()

        with pytest.raises(NotFoundError):
            await service.respond("bob", InvitationId(uuid4()), ResponseAction.ACCEPT)

    @pytest.mark.asyncio
    async def test_only_recipient_may_respond(self, harness):
        """Should reject the initiator and third parties."""
        service = harness.build()
        invitation = await _battle(service)

        for actor in ("alice", "carol"):
            with pytest.raises(NotAuthorizedError):
                await service.respond(actor, invitation.id, ResponseAction.ACCEPT)

        stored = await harness.invitations.find_by_id(invitation.id)
        assert stored.status == InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_ownership_checked_before_status(self, harness):
        """Should report not allowed even when the invitation is terminal."""
        service = harness.build()
        invitation = await _battle(service)
        await service.respond("bob", invitation.id, ResponseAction.DECLINE)

        with pytest.raises(NotAuthorizedError):
            await service.respond("carol", invitation.id, ResponseAction.ACCEPT)

    @pytest.mark.asyncio
    async def test_terminal_invitation_is_immutable(self, harness):
        """Should refuse any response once the invitation left pending."""
        service = harness.build()
        invitation = await _battle(service)
        await service.respond("bob", invitation.id, ResponseAction.DECLINE)

        with pytest.raises(InvalidTransitionError):
            await service.respond("bob", invitation.id, ResponseAction.ACCEPT)

        stored = await harness.invitations.find_by_id(invitation.id)
        assert stored.status == InvitationStatus.DECLINED
        assert harness.matches.all() == []

    @pytest.mark.asyncio
    async def test_overdue_invitation_expires_on_respond(self, harness):
        """Should expire an overdue invitation instead of accepting it."""
        # Arrange
        service = harness.build()
        invitation = await _live(service)
        harness.clock.advance(minutes=31)

        # Act & Assert
        with pytest.raises(InvalidTransitionError, match="expired"):
            await service.respond("bob", invitation.id, ResponseAction.ACCEPT)

        stored = await harness.invitations.find_by_id(invitation.id)
        assert stored.status == InvitationStatus.EXPIRED
        assert stored.responded_at == harness.clock.now
        events = await harness.audit.find_by_invitation(invitation.id)
        assert events[-1].action == AuditAction.EXPIRED

    @pytest.mark.asyncio
    async def test_concurrent_accepts_have_one_winner(self, harness):
        """Should let exactly one of two concurrent accepts succeed."""
        # Arrange
        harness.invitations = SlowReadInvitationRepository()
        service = harness.build()
        invitation = await _battle(service)

        # Act
        results = await asyncio.gather(
            service.respond("bob", invitation.id, ResponseAction.ACCEPT),
            service.respond("bob", invitation.id, ResponseAction.ACCEPT),
            return_exceptions=True,
        )

        # Assert
        successes = [r for r in results if not isinstance(r, Exception)]
        failures = [r for r in results if isinstance(r, Exception)]
        assert len(successes) == 1
        assert len(failures) == 1
        assert isinstance(failures[0], InvitationAlreadyRespondedError)
        assert len(harness.matches.all()) == 1

    @pytest.mark.asyncio
    async def test_concurrent_accept_and_decline(self, harness):
        """Should end in exactly one terminal status."""
        harness.invitations = SlowReadInvitationRepository()
        service = harness.build()
        invitation = await _battle(service)

        results = await asyncio.gather(
            service.respond("bob", invitation.id, ResponseAction.ACCEPT),
            service.respond("bob", invitation.id, ResponseAction.DECLINE),
            return_exceptions=True,
        )

        winners = [r for r in results if not isinstance(r, Exception)]
        assert len(winners) == 1
        stored = await harness.invitations.find_by_id(invitation.id)
        assert stored.status == winners[0].invitation.status
        expected_matches = 1 if stored.status == InvitationStatus.ACCEPTED else 0
        assert len(harness.matches.all()) == expected_matches

    @pytest.mark.asyncio
    async def test_commitment_failure_keeps_acceptance(self, harness):
        """Should keep the invitation accepted and report the failure."""
        # Arrange
        harness.matches = FailingMatchRepository()
        service = harness.build()
        invitation = await _battle(service)

        # Act
        with pytest.raises(CommitmentCreationError) as exc_info:
            await service.respond("bob", invitation.id, ResponseAction.ACCEPT)

        # Assert
        assert exc_info.value.invitation_id == str(invitation.id)
        stored = await harness.invitations.find_by_id(invitation.id)
        assert stored.status == InvitationStatus.ACCEPTED
        assert harness.matches.all() == []

    @pytest.mark.asyncio
    async def test_audit_failure_does_not_fail_action(self, harness):
        """Should complete the transition when the audit store is down."""
        harness.audit = FailingAuditRepository()
        service = harness.build()
        invitation = await _battle(service)

        outcome = await service.respond("bob", invitation.id, ResponseAction.ACCEPT)

        assert outcome.invitation.status == InvitationStatus.ACCEPTED
        assert outcome.match is not None


class TestCancel:
    """Tests for cancel."""

    @pytest.mark.asyncio
    async def test_initiator_cancels(self, harness):
        """Should cancel a pending invitation for its initiator."""
        service = harness.build()
        invitation = await _battle(service)

        cancelled = await service.cancel("alice", invitation.id)

        assert cancelled.status == InvitationStatus.CANCELLED
        assert cancelled.responded_at == harness.clock.now
        events = await harness.audit.find_by_invitation(invitation.id)
        assert events[-1].action == AuditAction.CANCELLED

    @pytest.mark.asyncio
    async def test_recipient_cannot_cancel(self, harness):
        """Should reject cancellation by anyone but the initiator."""
        service = harness.build()
        invitation = await _battle(service)

        with pytest.raises(NotAuthorizedError):
            await service.cancel("bob", invitation.id)

    @pytest.mark.asyncio
    async def test_cancel_after_accept_rejected(self, harness):
        """Should not cancel an accepted invitation."""
        service = harness.build()
        invitation = await _battle(service)
        await service.respond("bob", invitation.id, ResponseAction.ACCEPT)

        with pytest.raises(InvalidTransitionError):
            await service.cancel("alice", invitation.id)

        assert len(harness.matches.all()) == 1


class TestListForArtist:
    """Tests for list_for_artist."""

    @pytest.mark.asyncio
    async def test_lists_received_and_sent_with_profiles(self, harness):
        """Should split by direction, newest first, with both sides' profiles."""
        # Arrange
        service = harness.build()
        older = await _battle(service)
        harness.clock.advance(minutes=1)
        newer = await _live(service)
        harness.clock.advance(minutes=1)
        sent_by_bob = await service.create_invitation(
            "bob", "carol", InvitationKind.BATTLE, BATTLE_CONTEXT
        )

        # Act
        listing = await service.list_for_artist("bob")

        # Assert
        assert [i.id for i in listing.received] == [newer.id, older.id]
        assert [i.id for i in listing.sent] == [sent_by_bob.id]
        assert set(listing.profiles) == {"alice", "bob", "carol"}
        assert listing.profiles["bob"].display_name == "Bob Mokoena"

    @pytest.mark.asyncio
    async def test_filters_and_limit(self, harness):
        """Should apply kind, status and limit filters to both directions."""
        service = harness.build()
        battle = await _battle(service)
        await _live(service)
        harness.clock.advance(minutes=1)
        await _battle(service)
        await service.respond("bob", battle.id, ResponseAction.DECLINE)

        battles = await service.list_for_artist("bob", kind=InvitationKind.BATTLE)
        declined = await service.list_for_artist(
            "bob", status=InvitationStatus.DECLINED
        )
        limited = await service.list_for_artist("bob", limit=1)

        assert len(battles.received) == 2
        assert [i.id for i in declined.received] == [battle.id]
        assert len(limited.received) == 1

    @pytest.mark.asyncio
    async def test_directory_failure_degrades_to_no_profiles(self, harness):
        """Should still list invitations when profiles cannot be resolved."""
        service = harness.build()
        invitation = await _live(service)
        harness.directory.fail = True

        listing = await service.list_for_artist("bob")

        assert [i.id for i in listing.received] == [invitation.id]
        assert listing.profiles == {}

    @pytest.mark.asyncio
    async def test_listing_is_read_only(self, harness):
        """Should not expire overdue invitations or write audit events."""
        service = harness.build()
        invitation = await _live(service)
        events_before = len(harness.audit._events)
        harness.clock.advance(hours=2)

        listing = await service.list_for_artist("bob")

        assert listing.received[0].status == InvitationStatus.PENDING
        stored = await harness.invitations.find_by_id(invitation.id)
        assert stored.status == InvitationStatus.PENDING
        assert len(harness.audit._events) == events_before


class TestExpireOverdue:
    """Tests for expire_overdue."""

    @pytest.mark.asyncio
    async def test_expires_only_overdue_pending(self, harness):
        """Should expire overdue pending invitations and nothing else."""
        # Arrange
        service = harness.build()
        overdue = await _live(service, session_id="sess-1")
        answered = await _live(service, session_id="sess-2")
        await service.respond("bob", answered.id, ResponseAction.ACCEPT)
        battle = await _battle(service)
        harness.clock.advance(minutes=45)
        fresh = await _live(service, session_id="sess-3")

        # Act
        count = await service.expire_overdue()

        # Assert
        assert count == 1
        statuses = {
            inv.id: inv.status
            for inv in await harness.invitations.find_by_recipient("bob")
        }
        assert statuses[overdue.id] == InvitationStatus.EXPIRED
        assert statuses[answered.id] == InvitationStatus.ACCEPTED
        assert statuses[battle.id] == InvitationStatus.PENDING
        assert statuses[fresh.id] == InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_expired_session_can_be_reinvited(self, harness):
        """Should free the live session slot once expired."""
        service = harness.build()
        await _live(service)
        harness.clock.advance(minutes=30)
        await service.expire_overdue()

        invitation = await _live(service)

        assert invitation.status == InvitationStatus.PENDING


class TestCommitmentReconciliation:
    """Tests for ensure_commitment and reconcile_commitments."""

    @pytest.mark.asyncio
    async def test_reconcile_repairs_missing_match_once(self, harness):
        """Should create exactly one match for an accepted orphan."""
        # Arrange
        matches = FailingMatchRepository()
        harness.matches = matches
        service = harness.build()
        invitation = await _battle(service)
        with pytest.raises(CommitmentCreationError):
            await service.respond("bob", invitation.id, ResponseAction.ACCEPT)
        matches.healthy = True

        # Act
        first = await service.reconcile_commitments()
        second = await service.reconcile_commitments()

        # Assert
        assert [m.invitation_id for m in first.repaired] == [invitation.id]
        assert first.failed == []
        assert second.repaired == []
        assert second.scanned == 1
        assert len(matches.all()) == 1

    @pytest.mark.asyncio
    async def test_reconcile_reports_failures(self, harness):
        """Should list invitations it could not repair without raising."""
        harness.matches = FailingMatchRepository()
        service = harness.build()
        invitation = await _battle(service)
        with pytest.raises(CommitmentCreationError):
            await service.respond("bob", invitation.id, ResponseAction.ACCEPT)

        report = await service.reconcile_commitments()

        assert report.repaired == []
        assert report.failed == [invitation.id]

    @pytest.mark.asyncio
    async def test_reconcile_respects_limit(self, harness):
        """Should stop after the requested number of repairs."""
        matches = FailingMatchRepository()
        harness.matches = matches
        service = harness.build()
        for _ in range(3):
            invitation = await _battle(service)
            with pytest.raises(CommitmentCreationError):
                await service.respond("bob", invitation.id, ResponseAction.ACCEPT)
        matches.healthy = True

        report = await service.reconcile_commitments(limit=2)

        assert len(report.repaired) == 2
        assert len(matches.all()) == 2

    @pytest.mark.asyncio
    async def test_ensure_commitment_is_idempotent(self, harness):
        """Should return the existing match instead of creating another."""
        service = harness.build()
        invitation = await _battle(service)
        outcome = await service.respond("bob", invitation.id, ResponseAction.ACCEPT)

        match = await service.ensure_commitment(invitation.id)

        assert match.id == outcome.match.id
        assert len(harness.matches.all()) == 1

    @pytest.mark.asyncio
    async def test_ensure_commitment_requires_accepted_battle(self, harness):
        """Should refuse pending invitations and live invitations."""
        service = harness.build()
        pending = await _battle(service)
        live = await _live(service)
        await service.respond("bob", live.id, ResponseAction.ACCEPT)

        with pytest.raises(ValidationError):
            await service.ensure_commitment(pending.id)
        with pytest.raises(ValidationError):
            await service.ensure_commitment(live.id)


class TestGetInvitation:
    """Tests for get_invitation."""

    @pytest.mark.asyncio
    async def test_get_existing(self, harness):
        """Should return the stored invitation."""
        service = harness.build()
        invitation = await _battle(service)

        assert await service.get_invitation(invitation.id) == invitation

    @pytest.mark.asyncio
    async def test_get_missing(self, harness):
        """Should raise not found for unknown ids."""
        service = harness.build()

        with pytest.raises(NotFoundError):
            await service.get_invitation(InvitationId(uuid4()))
