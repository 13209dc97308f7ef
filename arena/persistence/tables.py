"""SQLAlchemy table definitions for Arena.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# INVITATIONS TABLE (battle and live collaboration invitations)
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("kind", String(32), nullable=False),  # 'battle', 'live_collab'
    Column("initiator_uid", String(255), nullable=False),
    Column("recipient_uid", String(255), nullable=False),
    Column("context", JSONB, nullable=False, server_default=text("'{}'::jsonb")),
    Column("status", String(32), nullable=False, server_default="pending"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("responded_at", TIMESTAMP(timezone=True), nullable=True),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("kind IN ('battle', 'live_collab')", name="ck_invitations_kind"),
    CheckConstraint(
        "status IN ('pending', 'accepted', 'declined', 'cancelled', 'expired')",
        name="ck_invitations_status",
    ),
    CheckConstraint(
        "initiator_uid <> recipient_uid", name="ck_invitations_distinct_artists"
    ),
)

# Listing queries: received / sent, newest first
Index(
    "idx_invitations_recipient_created",
    invitations_table.c.recipient_uid,
    invitations_table.c.created_at.desc(),
)
Index(
    "idx_invitations_initiator_created",
    invitations_table.c.initiator_uid,
    invitations_table.c.created_at.desc(),
)
# Maintenance sweeps (expiry, reconciliation)
Index(
    "idx_invitations_kind_status",
    invitations_table.c.kind,
    invitations_table.c.status,
)

# Partial unique index: one active live invitation per (session, recipient)
LIVE_SESSION_UNIQUE_INDEX = "idx_invitations_unique_active_live_session"
Index(
    LIVE_SESSION_UNIQUE_INDEX,
    invitations_table.c.context["session_id"].astext,
    invitations_table.c.recipient_uid,
    unique=True,
    postgresql_where=text(
        "kind = 'live_collab' AND status IN ('pending', 'accepted')"
    ),
)

# ============================================================================
# BATTLE MATCHES TABLE (commitments created from accepted battle invitations)
# ============================================================================
battle_matches_table = Table(
    "battle_matches",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "invitation_id",
        UUID(as_uuid=True),
        ForeignKey("invitations.id", ondelete="RESTRICT"),
        nullable=False,
        unique=True,  # At most one match per invitation
    ),
    Column("host_uid", String(255), nullable=False),
    Column("guest_uid", String(255), nullable=False),
    Column("title", String(200), nullable=False),
    Column("category", String(32), nullable=False),
    Column("stake_coins", Integer, nullable=False, server_default="0"),
    Column("scheduled_starts_at", TIMESTAMP(timezone=True), nullable=True),
    Column("status", String(32), nullable=False, server_default="scheduled"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "category IN ('amapiano', 'dj', 'rnb', 'others')",
        name="ck_battle_matches_category",
    ),
    CheckConstraint("stake_coins >= 0", name="ck_battle_matches_stake"),
)

Index("idx_battle_matches_host_uid", battle_matches_table.c.host_uid)
Index("idx_battle_matches_guest_uid", battle_matches_table.c.guest_uid)

# ============================================================================
# INVITATION EVENTS TABLE (append-only audit log)
# ============================================================================
invitation_events_table = Table(
    "invitation_events",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("invitation_id", UUID(as_uuid=True), nullable=False),
    Column("actor_uid", String(255), nullable=False),
    Column("action", String(32), nullable=False),
    Column("metadata", JSONB, nullable=False, server_default=text("'{}'::jsonb")),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_invitation_events_invitation_created",
    invitation_events_table.c.invitation_id,
    invitation_events_table.c.created_at,
)

