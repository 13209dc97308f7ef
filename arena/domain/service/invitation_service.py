"""Invitation domain service.

Owns the invitation state machine shared by every invitation kind:

    pending --accept--> accepted   (terminal, may spawn a commitment)
    pending --decline--> declined  (terminal)
    pending --cancel--> cancelled  (terminal, initiator only)
    pending --expire--> expired    (terminal, time based)

Every transition out of pending is a guarded write that only applies while the
stored status is still pending, so concurrent callers observe at most one
winner per invitation.
"""

from typing import Any, Iterable, Mapping
from uuid import uuid4

import logfire

from arena.domain.error import (
    CommitmentCreationError,
    InvalidTransitionError,
    InvitationAlreadyRespondedError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from arena.domain.model import AuditEvent, BattleMatch, Invitation
from arena.domain.repository import AuditEventRepository, InvitationRepository
from arena.domain.value import (
    ArtistUid,
    AuditAction,
    AuditEventId,
    InvitationId,
    InvitationKind,
    InvitationStatus,
    ProfileLite,
    ResponseAction,
    SessionRef,
)
from arena.domain.value.common import ValueObject
from arena.util.clock import Clock, utc_now

from .base import Service
from .invitation_policy import BattlePolicy, InviteKindPolicy
from .profile_service import ProfileService


class ResponseOutcome(ValueObject):
    """Result of a successful response to an invitation."""

    invitation: Invitation
    match: BattleMatch | None = None
    session: SessionRef | None = None


class InvitationListing(ValueObject):
    """Invitations an artist received and sent, with counterpart profiles."""

    received: list[Invitation]
    sent: list[Invitation]
    profiles: dict[str, ProfileLite]


class ReconcileReport(ValueObject):
    """Outcome of a commitment reconciliation sweep."""

    scanned: int
    repaired: list[BattleMatch]
    failed: list[InvitationId]


class InvitationService(Service):
    """Domain service for artist-to-artist invitations."""

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        audit_repository: AuditEventRepository,
        profile_service: ProfileService,
        policies: Iterable[InviteKindPolicy],
        clock: Clock = utc_now,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            audit_repository: Audit event repository
            profile_service: Profile service used to enrich listings
            policies: One policy per supported invitation kind
            clock: Source of the current time
        """
        self.invitation_repository = invitation_repository
        self.audit_repository = audit_repository
        self.profile_service = profile_service
        self.policies: dict[InvitationKind, InviteKindPolicy] = {
            policy.kind: policy for policy in policies
        }
        self.clock = clock

    async def create_invitation(
        self,
        initiator_uid: str,
        recipient_uid: str,
        kind: InvitationKind | str,
        context: Mapping[str, Any],
    ) -> Invitation:
        """Create a pending invitation.

        All validation runs before the first write.

        Args:
            initiator_uid: Artist sending the invitation
            recipient_uid: Artist being invited
            kind: Invitation kind
            context: Kind-specific payload

        Returns:
            Created invitation

        Raises:
            ValidationError: If input is malformed or a self-invitation
            NotFoundError: If a battle recipient does not exist
            DuplicateInvitationError: If a live invitation is already active
            StoreError: If the profile directory cannot be reached
        """
        initiator = ArtistUid((initiator_uid or "").strip())
        recipient = ArtistUid((recipient_uid or "").strip())

        with logfire.span(
            "invitation_service.create_invitation",
            initiator_uid=initiator,
            recipient_uid=recipient,
            kind=str(kind),
        ):
            if not initiator or not recipient:
                raise ValidationError("Missing artist uid.")
            if initiator == recipient:
                logfire.warn("Self invitation rejected", artist_uid=initiator)
                raise ValidationError("You can't invite yourself.")

            policy = self._policy(kind)
            prepared = await policy.prepare(initiator, recipient, context)

            now = self.clock()
            invitation = Invitation(
                id=InvitationId(uuid4()),
                kind=policy.kind,
                initiator_uid=initiator,
                recipient_uid=recipient,
                context=prepared,
                status=InvitationStatus.PENDING,
                created_at=now,
                responded_at=None,
                expires_at=policy.expires_at(now),
            )

            saved = await self.invitation_repository.add(invitation)
            logfire.info(
                "Invitation created",
                invitation_id=str(saved.id),
                kind=saved.kind.value,
                initiator_uid=initiator,
                recipient_uid=recipient,
            )

            await self._record(saved.id, initiator, AuditAction.SENT, to=recipient)
            return saved

    async def respond(
        self,
        actor_uid: str,
        invitation_id: InvitationId,
        action: ResponseAction,
    ) -> ResponseOutcome:
        """Accept or decline an invitation on behalf of its recipient.

        Args:
            actor_uid: Artist responding
            invitation_id: Invitation to respond to
            action: Accept or decline

        Returns:
            The updated invitation plus whatever acceptance produced

        Raises:
            NotFoundError: If the invitation does not exist
            NotAuthorizedError: If the actor is not the recipient
            InvalidTransitionError: If the invitation is no longer pending
            InvitationAlreadyRespondedError: If a concurrent caller decided first
            CommitmentCreationError: If accepted but the commitment failed
        """
        actor = ArtistUid((actor_uid or "").strip())

        with logfire.span(
            "invitation_service.respond",
            actor_uid=actor,
            invitation_id=str(invitation_id),
            action=action.value,
        ):
            invitation = await self._load(invitation_id)

            if invitation.recipient_uid != actor:
                logfire.warn(
                    "Response by non-recipient rejected",
                    invitation_id=str(invitation_id),
                    actor_uid=actor,
                )
                raise NotAuthorizedError("respond to", str(invitation_id), actor)

            now = self.clock()
            await self._ensure_pending(invitation, actor)

            new_status = (
                InvitationStatus.ACCEPTED
                if action == ResponseAction.ACCEPT
                else InvitationStatus.DECLINED
            )
            updated = await self.invitation_repository.transition(
                invitation_id, InvitationStatus.PENDING, new_status, now
            )
            if updated is None:
                logfire.info(
                    "Invitation decided by a concurrent caller",
                    invitation_id=str(invitation_id),
                    action=action.value,
                )
                raise InvitationAlreadyRespondedError(str(invitation_id))

            if action == ResponseAction.DECLINE:
                logfire.info("Invitation declined", invitation_id=str(invitation_id))
                await self._record(
                    invitation_id,
                    actor,
                    AuditAction.DECLINED,
                    **{"from": updated.initiator_uid},
                )
                return ResponseOutcome(invitation=updated)

            policy = self._policy(updated.kind)
            try:
                outcome = await policy.on_accept(updated, now)
            except Exception as e:
                logfire.error(
                    "Invitation accepted but commitment creation failed",
                    invitation_id=str(invitation_id),
                    kind=updated.kind.value,
                    error=str(e),
                )
                raise CommitmentCreationError(str(invitation_id), str(e)) from e

            logfire.info(
                "Invitation accepted",
                invitation_id=str(invitation_id),
                kind=updated.kind.value,
                match_id=str(outcome.match.id) if outcome.match else None,
            )
            await self._record(
                invitation_id,
                actor,
                AuditAction.ACCEPTED,
                match_id=str(outcome.match.id) if outcome.match else None,
                **{"from": updated.initiator_uid},
            )
            return ResponseOutcome(
                invitation=updated, match=outcome.match, session=outcome.session
            )

    async def cancel(self, actor_uid: str, invitation_id: InvitationId) -> Invitation:
        """Withdraw a pending invitation on behalf of its initiator.

        Args:
            actor_uid: Artist cancelling
            invitation_id: Invitation to cancel

        Returns:
            The cancelled invitation

        Raises:
            NotFoundError: If the invitation does not exist
            NotAuthorizedError: If the actor is not the initiator
            InvalidTransitionError: If the invitation is no longer pending
            InvitationAlreadyRespondedError: If a concurrent caller decided first
        """
        actor = ArtistUid((actor_uid or "").strip())

        with logfire.span(
            "invitation_service.cancel",
            actor_uid=actor,
            invitation_id=str(invitation_id),
        ):
            invitation = await self._load(invitation_id)

            if invitation.initiator_uid != actor:
                raise NotAuthorizedError("cancel", str(invitation_id), actor)

            await self._ensure_pending(invitation, actor)

            updated = await self.invitation_repository.transition(
                invitation_id,
                InvitationStatus.PENDING,
                InvitationStatus.CANCELLED,
                self.clock(),
            )
            if updated is None:
                raise InvitationAlreadyRespondedError(str(invitation_id))

            logfire.info("Invitation cancelled", invitation_id=str(invitation_id))
            await self._record(
                invitation_id, actor, AuditAction.CANCELLED, to=updated.recipient_uid
            )
            return updated

    async def get_invitation(self, invitation_id: InvitationId) -> Invitation:
        """Get an invitation by ID.

        Raises:
            NotFoundError: If the invitation does not exist
        """
        return await self._load(invitation_id)

    async def list_for_artist(
        self,
        artist_uid: str,
        kind: InvitationKind | None = None,
        status: InvitationStatus | None = None,
        limit: int = 50,
    ) -> InvitationListing:
        """List invitations an artist received and sent.

        Pure read. Profile resolution failures leave the profile map empty
        instead of failing the listing.

        Args:
            artist_uid: Artist whose invitations to list
            kind: Optional kind filter
            status: Optional status filter
            limit: Maximum invitations per direction

        Returns:
            Received and sent invitations, newest first, with profiles
        """
        uid = ArtistUid((artist_uid or "").strip())
        if not uid:
            raise ValidationError("Missing artist uid.")

        with logfire.span(
            "invitation_service.list_for_artist",
            artist_uid=uid,
            kind=kind.value if kind else None,
            status=status.value if status else None,
            limit=limit,
        ):
            received = await self.invitation_repository.find_by_recipient(
                uid, kind, status, limit
            )
            sent = await self.invitation_repository.find_by_initiator(
                uid, kind, status, limit
            )

            participants: list[ArtistUid] = []
            for invitation in [*received, *sent]:
                participants.extend(
                    [invitation.initiator_uid, invitation.recipient_uid]
                )
            profiles = await self.profile_service.resolve_for_display(participants)

            logfire.info(
                "Invitations listed",
                artist_uid=uid,
                received=len(received),
                sent=len(sent),
                profiles=len(profiles),
            )
            return InvitationListing(
                received=received,
                sent=sent,
                profiles={str(k): v for k, v in profiles.items()},
            )

    async def expire_overdue(self) -> int:
        """Expire every pending invitation past its expiry time.

        Returns:
            Number of invitations expired
        """
        with logfire.span("invitation_service.expire_overdue"):
            count = await self.invitation_repository.expire_overdue(self.clock())
            logfire.info("Overdue invitations expired", count=count)
            return count

    async def ensure_commitment(self, invitation_id: InvitationId) -> BattleMatch:
        """Create the battle match of an accepted invitation if it is missing.

        Safe to call repeatedly: an existing match is returned unchanged.

        Args:
            invitation_id: Accepted battle invitation

        Returns:
            The invitation's match

        Raises:
            NotFoundError: If the invitation does not exist
            ValidationError: If it is not an accepted battle invitation
        """
        with logfire.span(
            "invitation_service.ensure_commitment", invitation_id=str(invitation_id)
        ):
            invitation = await self._load(invitation_id)
            if invitation.kind != InvitationKind.BATTLE:
                raise ValidationError("Only battle invitations have commitments.")
            if invitation.status != InvitationStatus.ACCEPTED:
                raise ValidationError("Invitation is not accepted.")

            outcome = await self._policy(invitation.kind).on_accept(
                invitation, self.clock()
            )
            assert outcome.match is not None
            return outcome.match

    async def reconcile_commitments(self, limit: int = 100) -> ReconcileReport:
        """Repair accepted battle invitations that have no match.

        Scans accepted battle invitations page by page and creates the missing
        matches, up to `limit` repairs. Failures are reported, not raised.

        Args:
            limit: Maximum number of matches to create

        Returns:
            Report of scanned, repaired and failed invitations
        """
        with logfire.span("invitation_service.reconcile_commitments", limit=limit):
            policy = self._policy(InvitationKind.BATTLE)
            assert isinstance(policy, BattlePolicy)

            scanned = 0
            offset = 0
            repaired: list[BattleMatch] = []
            failed: list[InvitationId] = []

            while len(repaired) + len(failed) < limit:
                batch = await self.invitation_repository.find_by_status(
                    InvitationKind.BATTLE,
                    InvitationStatus.ACCEPTED,
                    limit=limit,
                    offset=offset,
                )
                if not batch:
                    break
                scanned += len(batch)
                offset += len(batch)

                matched = await policy.match_repository.find_matched_invitation_ids(
                    [invitation.id for invitation in batch]
                )
                for invitation in batch:
                    if invitation.id in matched:
                        continue
                    if len(repaired) + len(failed) >= limit:
                        break
                    try:
                        outcome = await policy.on_accept(invitation, self.clock())
                    except Exception as e:
                        logfire.error(
                            "Failed to repair missing battle match",
                            invitation_id=str(invitation.id),
                            error=str(e),
                        )
                        failed.append(invitation.id)
                        continue
                    assert outcome.match is not None
                    repaired.append(outcome.match)

            logfire.info(
                "Commitment reconciliation finished",
                scanned=scanned,
                repaired=len(repaired),
                failed=len(failed),
            )
            return ReconcileReport(scanned=scanned, repaired=repaired, failed=failed)

    async def _load(self, invitation_id: InvitationId) -> Invitation:
        invitation = await self.invitation_repository.find_by_id(invitation_id)
        if not invitation:
            logfire.warn("Invitation not found", invitation_id=str(invitation_id))
            raise NotFoundError("Invitation", str(invitation_id))
        return invitation

    async def _ensure_pending(self, invitation: Invitation, actor: ArtistUid) -> None:
        """Raise unless the invitation can still transition.

        An overdue pending invitation is expired on the spot.
        """
        if invitation.status != InvitationStatus.PENDING:
            raise InvalidTransitionError(
                str(invitation.id),
                invitation.status.value,
                "Invitation is not pending.",
            )

        now = self.clock()
        if not invitation.is_overdue(now):
            return

        expired = await self.invitation_repository.transition(
            invitation.id, InvitationStatus.PENDING, InvitationStatus.EXPIRED, now
        )
        if expired is None:
            raise InvitationAlreadyRespondedError(str(invitation.id))

        logfire.info("Overdue invitation expired", invitation_id=str(invitation.id))
        await self._record(
            invitation.id,
            actor,
            AuditAction.EXPIRED,
            expires_at=(
                invitation.expires_at.isoformat() if invitation.expires_at else None
            ),
        )
        raise InvalidTransitionError(
            str(invitation.id),
            InvitationStatus.EXPIRED.value,
            "Invitation has expired.",
        )

    def _policy(self, kind: InvitationKind | str) -> InviteKindPolicy:
        try:
            return self.policies[InvitationKind(kind)]
        except (KeyError, ValueError):
            raise ValidationError(f"Unsupported invitation kind: {kind}")

    async def _record(
        self,
        invitation_id: InvitationId,
        actor_uid: ArtistUid,
        action: AuditAction,
        **metadata: Any,
    ) -> None:
        """Append an audit event, best effort.

        Audit failures are logged and never surface to the caller.
        """
        event = AuditEvent(
            id=AuditEventId(uuid4()),
            invitation_id=invitation_id,
            actor_uid=actor_uid,
            action=action,
            metadata={k: v for k, v in metadata.items() if v is not None},
            created_at=self.clock(),
        )
        try:
            await self.audit_repository.append(event)
        except Exception as e:
            logfire.warn(
                "Failed to write audit event",
                invitation_id=str(invitation_id),
                action=action.value,
                error=str(e),
            )
