"""SQLAlchemy table definitions for the time ledger.

Core tables only; rows are mapped to the frozen domain models by hand in
``mappers.py``. They match the schema created by the Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# PROFILES
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("user_id", UUID, nullable=False, unique=True),  # auth provider identity
    Column("email", String(320), nullable=False, unique=True),  # stored lower-cased
    Column("full_name", Text, nullable=True),
    Column("display_name", Text, nullable=True),
    Column("bio", Text, nullable=True),
    Column("location", Text, nullable=True),
    Column("time_balance_hours", Numeric(10, 2), nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

profile_urls_table = Table(
    "profile_urls",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "profile_id", UUID, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    ),
    Column("url", Text, nullable=False),
    Column("url_type", String(50), nullable=False, server_default="website"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_profile_urls_profile_id", profile_urls_table.c.profile_id)

# ============================================================================
# PENDING PROFILES (sign-up data awaiting account confirmation)
# ============================================================================
pending_profiles_table = Table(
    "pending_profiles",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("email", String(320), nullable=False, unique=True),
    Column("full_name", Text, nullable=True),
    Column("display_name", Text, nullable=True),
    Column("bio", Text, nullable=True),
    Column("location", Text, nullable=True),
    Column("urls", JSONB, nullable=False, server_default="[]"),
    Column("time_logging_data", JSONB, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
)

Index("idx_pending_profiles_expires_at", pending_profiles_table.c.expires_at)

# ============================================================================
# TIME TRANSACTIONS
# ============================================================================
time_transactions_table = Table(
    "time_transactions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("giver_id", UUID, ForeignKey("profiles.id"), nullable=False),
    Column("receiver_id", UUID, ForeignKey("profiles.id"), nullable=False),
    Column("hours", Numeric(5, 2), nullable=False),
    Column("description", Text, nullable=False, server_default=""),
    Column("service_type", String(50), nullable=False, server_default="general"),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column("logged_by", UUID, ForeignKey("profiles.id"), nullable=False),
    Column("confirmed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("confirmed_by", UUID, ForeignKey("profiles.id"), nullable=True),
    Column("disputed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("dispute_reason", Text, nullable=True),
    Column("cancelled_at", TIMESTAMP(timezone=True), nullable=True),
    Column("last_nudged_at", TIMESTAMP(timezone=True), nullable=True),
    Column("nudge_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("hours > 0", name="ck_time_transactions_hours_positive"),
    CheckConstraint("giver_id <> receiver_id", name="ck_time_transactions_distinct_parties"),
    CheckConstraint(
        "logged_by = giver_id OR logged_by = receiver_id",
        name="ck_time_transactions_logged_by_party",
    ),
    CheckConstraint(
        "status IN ('pending', 'confirmed', 'disputed', 'cancelled')",
        name="ck_time_transactions_status",
    ),
)

Index("idx_time_transactions_giver", time_transactions_table.c.giver_id)
Index("idx_time_transactions_receiver", time_transactions_table.c.receiver_id)
Index(
    "idx_time_transactions_status_created",
    time_transactions_table.c.status,
    time_transactions_table.c.created_at.desc(),
)

# ============================================================================
# INVITATIONS
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("inviter_id", UUID, ForeignKey("profiles.id"), nullable=False),
    Column("email", String(320), nullable=False),
    Column("full_name", Text, nullable=True),
    Column("token", String(64), nullable=False, unique=True),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("accepted_by", UUID, ForeignKey("profiles.id"), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "status IN ('pending', 'accepted', 'expired', 'cancelled')",
        name="ck_invitations_status",
    ),
)

Index("idx_invitations_inviter", invitations_table.c.inviter_id)
Index("idx_invitations_email", invitations_table.c.email)
Index(
    "idx_invitations_status_expires",
    invitations_table.c.status,
    invitations_table.c.expires_at,
)

pending_time_logs_table = Table(
    "pending_time_logs",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "invitation_id",
        UUID,
        ForeignKey("invitations.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    ),
    Column("logger_profile_id", UUID, ForeignKey("profiles.id"), nullable=False),
    Column("invitee_email", String(320), nullable=False),
    Column("invitee_name", Text, nullable=True),
    Column("invitee_contact", Text, nullable=False),
    Column("hours", Numeric(5, 2), nullable=False),
    Column("description", Text, nullable=False, server_default=""),
    Column("service_type", String(50), nullable=False, server_default="general"),
    Column("mode", String(20), nullable=False),  # 'helped' | 'wasHelped'
    Column("status", String(20), nullable=False, server_default="pending"),
    Column(
        "converted_transaction_id",
        UUID,
        ForeignKey("time_transactions.id"),
        nullable=True,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("hours > 0", name="ck_pending_time_logs_hours_positive"),
)

# ============================================================================
# AGENTS (non-human participants, separate ledger)
# ============================================================================
agent_profiles_table = Table(
    "agent_profiles",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("email", String(320), nullable=False, unique=True),
    Column("full_name", Text, nullable=False),
    Column("display_name", Text, nullable=False),
    Column("bio", Text, nullable=True),
    Column("location", Text, nullable=True),
    Column("time_balance_hours", Numeric(10, 2), nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

agent_time_transactions_table = Table(
    "agent_time_transactions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "giver_id", UUID, ForeignKey("agent_profiles.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "receiver_id",
        UUID,
        ForeignKey("agent_profiles.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("hours", Numeric(5, 2), nullable=False),
    Column("description", Text, nullable=False, server_default=""),
    Column("service_type", String(50), nullable=False, server_default="general"),
    Column("status", String(20), nullable=False, server_default="confirmed"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("hours > 0", name="ck_agent_time_transactions_hours_positive"),
    CheckConstraint(
        "giver_id <> receiver_id", name="ck_agent_time_transactions_distinct_parties"
    ),
)

Index("idx_agent_time_transactions_giver", agent_time_transactions_table.c.giver_id)
Index(
    "idx_agent_time_transactions_receiver", agent_time_transactions_table.c.receiver_id
)
Index(
    "idx_agent_time_transactions_created", agent_time_transactions_table.c.created_at
)
