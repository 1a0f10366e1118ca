"""initial_ledger_schema

Create the time ledger schema:
- Profiles and their links
- Pending profiles (sign-up data awaiting email confirmation)
- Time transactions (pending -> confirmed | disputed | cancelled)
- Invitations and the pending time logs they carry
- Agent profiles and agent transactions (separate ledger, feed only)

Revision ID: 3c1f9a7d2e40
Revises:
Create Date: 2025-01-06 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7d2e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column(
        "id", sa.UUID(), server_default=sa.text("gen_random_uuid()"), nullable=False
    )


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # PROFILES
    # ========================================================================
    op.create_table(
        "profiles",
        _id(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("full_name", sa.Text(), nullable=True),
        sa.Column("display_name", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column(
            "time_balance_hours", sa.Numeric(10, 2), nullable=False, server_default="0"
        ),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", name="uq_profiles_user_id"),
        sa.UniqueConstraint("email", name="uq_profiles_email"),
    )

    op.create_table(
        "profile_urls",
        _id(),
        sa.Column("profile_id", sa.UUID(), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("url_type", sa.String(50), nullable=False, server_default="website"),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_profile_urls_profile_id", "profile_urls", ["profile_id"])

    # ========================================================================
    # PENDING PROFILES
    # ========================================================================
    op.create_table(
        "pending_profiles",
        _id(),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("full_name", sa.Text(), nullable=True),
        sa.Column("display_name", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column(
            "urls",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("time_logging_data", postgresql.JSONB(), nullable=True),
        _timestamp("created_at"),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_pending_profiles_email"),
    )
    op.create_index(
        "idx_pending_profiles_expires_at", "pending_profiles", ["expires_at"]
    )

    # ========================================================================
    # TIME TRANSACTIONS
    # ========================================================================
    op.create_table(
        "time_transactions",
        _id(),
        sa.Column("giver_id", sa.UUID(), nullable=False),
        sa.Column("receiver_id", sa.UUID(), nullable=False),
        sa.Column("hours", sa.Numeric(5, 2), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "service_type", sa.String(50), nullable=False, server_default="general"
        ),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("logged_by", sa.UUID(), nullable=False),
        sa.Column("confirmed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("confirmed_by", sa.UUID(), nullable=True),
        sa.Column("disputed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("dispute_reason", sa.Text(), nullable=True),
        sa.Column("cancelled_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("last_nudged_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("nudge_count", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["giver_id"], ["profiles.id"]),
        sa.ForeignKeyConstraint(["receiver_id"], ["profiles.id"]),
        sa.ForeignKeyConstraint(["logged_by"], ["profiles.id"]),
        sa.ForeignKeyConstraint(["confirmed_by"], ["profiles.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("hours > 0", name="ck_time_transactions_hours_positive"),
        sa.CheckConstraint(
            "giver_id <> receiver_id", name="ck_time_transactions_distinct_parties"
        ),
        sa.CheckConstraint(
            "logged_by = giver_id OR logged_by = receiver_id",
            name="ck_time_transactions_logged_by_party",
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'disputed', 'cancelled')",
            name="ck_time_transactions_status",
        ),
    )
    op.create_index("idx_time_transactions_giver", "time_transactions", ["giver_id"])
    op.create_index(
        "idx_time_transactions_receiver", "time_transactions", ["receiver_id"]
    )
    op.create_index(
        "idx_time_transactions_status_created",
        "time_transactions",
        ["status", sa.text("created_at DESC")],
    )

    # ========================================================================
    # INVITATIONS + PENDING TIME LOGS
    # ========================================================================
    op.create_table(
        "invitations",
        _id(),
        sa.Column("inviter_id", sa.UUID(), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("full_name", sa.Text(), nullable=True),
        sa.Column("token", sa.String(64), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("accepted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("accepted_by", sa.UUID(), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["inviter_id"], ["profiles.id"]),
        sa.ForeignKeyConstraint(["accepted_by"], ["profiles.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token", name="uq_invitations_token"),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'expired', 'cancelled')",
            name="ck_invitations_status",
        ),
    )
    op.create_index("idx_invitations_inviter", "invitations", ["inviter_id"])
    op.create_index("idx_invitations_email", "invitations", ["email"])
    op.create_index(
        "idx_invitations_status_expires", "invitations", ["status", "expires_at"]
    )

    op.create_table(
        "pending_time_logs",
        _id(),
        sa.Column("invitation_id", sa.UUID(), nullable=False),
        sa.Column("logger_profile_id", sa.UUID(), nullable=False),
        sa.Column("invitee_email", sa.String(320), nullable=False),
        sa.Column("invitee_name", sa.Text(), nullable=True),
        sa.Column("invitee_contact", sa.Text(), nullable=False),
        sa.Column("hours", sa.Numeric(5, 2), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "service_type", sa.String(50), nullable=False, server_default="general"
        ),
        sa.Column("mode", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("converted_transaction_id", sa.UUID(), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(
            ["invitation_id"], ["invitations.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["logger_profile_id"], ["profiles.id"]),
        sa.ForeignKeyConstraint(
            ["converted_transaction_id"], ["time_transactions.id"]
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("invitation_id", name="uq_pending_time_logs_invitation"),
        sa.CheckConstraint("hours > 0", name="ck_pending_time_logs_hours_positive"),
    )

    # ========================================================================
    # AGENTS (separate ledger, read by the feed only)
    # ========================================================================
    op.create_table(
        "agent_profiles",
        _id(),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("full_name", sa.Text(), nullable=False),
        sa.Column("display_name", sa.Text(), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column(
            "time_balance_hours", sa.Numeric(10, 2), nullable=False, server_default="0"
        ),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_agent_profiles_email"),
    )

    op.create_table(
        "agent_time_transactions",
        _id(),
        sa.Column("giver_id", sa.UUID(), nullable=False),
        sa.Column("receiver_id", sa.UUID(), nullable=False),
        sa.Column("hours", sa.Numeric(5, 2), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "service_type", sa.String(50), nullable=False, server_default="general"
        ),
        sa.Column("status", sa.String(20), nullable=False, server_default="confirmed"),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["giver_id"], ["agent_profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["receiver_id"], ["agent_profiles.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "hours > 0", name="ck_agent_time_transactions_hours_positive"
        ),
        sa.CheckConstraint(
            "giver_id <> receiver_id", name="ck_agent_time_transactions_distinct_parties"
        ),
    )
    op.create_index(
        "idx_agent_time_transactions_giver", "agent_time_transactions", ["giver_id"]
    )
    op.create_index(
        "idx_agent_time_transactions_receiver",
        "agent_time_transactions",
        ["receiver_id"],
    )
    op.create_index(
        "idx_agent_time_transactions_created", "agent_time_transactions", ["created_at"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("agent_time_transactions")
    op.drop_table("agent_profiles")
    op.drop_table("pending_time_logs")
    op.drop_table("invitations")
    op.drop_table("time_transactions")
    op.drop_table("pending_profiles")
    op.drop_table("profile_urls")
    op.drop_table("profiles")
