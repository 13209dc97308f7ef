"""invitations_schema

Create the schema for artist-to-artist invitations:
- Invitations (battle and live collaboration, one shared state machine)
- Battle matches (created when a battle invitation is accepted)
- Invitation events (append-only audit log)

Revision ID: 3f1c9a7e2b10
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c9a7e2b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # INVITATIONS
    # ========================================================================
    op.create_table(
        "invitations",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("kind", sa.String(length=32), nullable=False),
        sa.Column("initiator_uid", sa.String(length=255), nullable=False),
        sa.Column("recipient_uid", sa.String(length=255), nullable=False),
        sa.Column(
            "context",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column(
            "status",
            sa.String(length=32),
            nullable=False,
            server_default=sa.text("'pending'"),
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("responded_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.CheckConstraint(
            "kind IN ('battle', 'live_collab')", name="ck_invitations_kind"
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'declined', 'cancelled', 'expired')",
            name="ck_invitations_status",
        ),
        sa.CheckConstraint(
            "initiator_uid <> recipient_uid", name="ck_invitations_distinct_artists"
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.execute("""
        CREATE INDEX idx_invitations_recipient_created
        ON invitations (recipient_uid, created_at DESC)
    """)
    op.execute("""
        CREATE INDEX idx_invitations_initiator_created
        ON invitations (initiator_uid, created_at DESC)
    """)
    op.create_index("idx_invitations_kind_status", "invitations", ["kind", "status"])

    # One active live invitation per (session, recipient); backs the dedup check
    op.execute("""
        CREATE UNIQUE INDEX idx_invitations_unique_active_live_session
        ON invitations ((context->>'session_id'), recipient_uid)
        WHERE kind = 'live_collab' AND status IN ('pending', 'accepted')
    """)

    # ========================================================================
    # BATTLE MATCHES
    # ========================================================================
    op.create_table(
        "battle_matches",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("invitation_id", sa.UUID(), nullable=False),
        sa.Column("host_uid", sa.String(length=255), nullable=False),
        sa.Column("guest_uid", sa.String(length=255), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column(
            "stake_coins", sa.Integer(), nullable=False, server_default=sa.text("0")
        ),
        sa.Column("scheduled_starts_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "status",
            sa.String(length=32),
            nullable=False,
            server_default=sa.text("'scheduled'"),
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.CheckConstraint(
            "category IN ('amapiano', 'dj', 'rnb', 'others')",
            name="ck_battle_matches_category",
        ),
        sa.CheckConstraint("stake_coins >= 0", name="ck_battle_matches_stake"),
        sa.ForeignKeyConstraint(
            ["invitation_id"], ["invitations.id"], ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("invitation_id"),
    )
    op.create_index("idx_battle_matches_host_uid", "battle_matches", ["host_uid"])
    op.create_index("idx_battle_matches_guest_uid", "battle_matches", ["guest_uid"])

    # ========================================================================
    # INVITATION EVENTS (audit log)
    # ========================================================================
    op.create_table(
        "invitation_events",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("invitation_id", sa.UUID(), nullable=False),
        sa.Column("actor_uid", sa.String(length=255), nullable=False),
        sa.Column("action", sa.String(length=32), nullable=False),
        sa.Column(
            "metadata",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_invitation_events_invitation_created",
        "invitation_events",
        ["invitation_id", "created_at"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(
        "idx_invitation_events_invitation_created", table_name="invitation_events"
    )
    op.drop_table("invitation_events")

    op.drop_index("idx_battle_matches_guest_uid", table_name="battle_matches")
    op.drop_index("idx_battle_matches_host_uid", table_name="battle_matches")
    op.drop_table("battle_matches")

    op.execute("DROP INDEX IF EXISTS idx_invitations_unique_active_live_session")
    op.drop_index("idx_invitations_kind_status", table_name="invitations")
    op.execute("DROP INDEX IF EXISTS idx_invitations_initiator_created")
    op.execute("DROP INDEX IF EXISTS idx_invitations_recipient_created")
    op.drop_table("invitations")
