"""SQLAlchemy table definitions.

These table definitions match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Column,
    Enum,
    Index,
    MetaData,
    String,
    Table,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ACCOUNT DELEGATES TABLE
# ============================================================================
account_delegates_table = Table(
    "account_delegates",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")),
    Column("owner_user_id", UUID, nullable=False),
    Column("profile_id", UUID, nullable=False),  # brand_profiles.id or creator_profiles.id
    Column(
        "account_type",
        Enum("brand", "creator", name="delegate_account_type", create_type=False),
        nullable=False,
    ),
    Column("delegate_email", String(320), nullable=False),  # Always lower case
    Column("delegate_user_id", UUID, nullable=True),  # Set on activation
    Column(
        "status",
        Enum("pending", "active", "revoked", name="delegate_status", create_type=False),
        nullable=False,
        server_default="pending",
    ),
    Column(
        "invited_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
)

# Session start lookup: pending invitations by email
Index(
    "idx_account_delegates_email_status",
    account_delegates_table.c.delegate_email,
    account_delegates_table.c.status,
)
# Access resolution: active delegations by user
Index(
    "idx_account_delegates_user_status",
    account_delegates_table.c.delegate_user_id,
    account_delegates_table.c.status,
)
Index(
    "idx_account_delegates_profile",
    account_delegates_table.c.profile_id,
    account_delegates_table.c.account_type,
)
