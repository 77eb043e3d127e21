"""create_account_delegates

Create the account_delegates table backing delegate access:
- Email invitations to manage a brand or creator profile
- Activation binds the invitation to the invitee's user on first sign-in

Revision ID: 3c1f9a7d2e4b
Revises:
Create Date: 2026-10-19 10:12:44.318204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7d2e4b"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE delegate_account_type AS ENUM ('brand', 'creator');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE delegate_status AS ENUM ('pending', 'active', 'revoked');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.create_table(
        "account_delegates",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("owner_user_id", sa.UUID(), nullable=False),
        sa.Column("profile_id", sa.UUID(), nullable=False),
        sa.Column(
            "account_type",
            postgresql.ENUM(
                "brand", "creator", name="delegate_account_type", create_type=False
            ),
            nullable=False,
        ),
        sa.Column("delegate_email", sa.String(length=320), nullable=False),
        sa.Column("delegate_user_id", sa.UUID(), nullable=True),
        sa.Column(
            "status",
            postgresql.ENUM(
                "pending", "active", "revoked", name="delegate_status", create_type=False
            ),
            nullable=False,
            server_default="pending",
        ),
        sa.Column(
            "invited_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column("accepted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "delegate_email = lower(delegate_email)",
            name="check_delegate_email_lowercase",
        ),
        sa.CheckConstraint(
            "(delegate_user_id IS NULL) = (accepted_at IS NULL)",
            name="check_delegate_binding_consistent",
        ),
        sa.CheckConstraint(
            "(status = 'pending') = (delegate_user_id IS NULL)",
            name="check_delegate_pending_unbound",
        ),
    )

    op.create_index(
        "idx_account_delegates_email_status",
        "account_delegates",
        ["delegate_email", "status"],
    )
    op.create_index(
        "idx_account_delegates_user_status",
        "account_delegates",
        ["delegate_user_id", "status"],
    )
    op.create_index(
        "idx_account_delegates_profile",
        "account_delegates",
        ["profile_id", "account_type"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_account_delegates_profile", table_name="account_delegates")
    op.drop_index("idx_account_delegates_user_status", table_name="account_delegates")
    op.drop_index("idx_account_delegates_email_status", table_name="account_delegates")
    op.drop_table("account_delegates")
    op.execute("DROP TYPE IF EXISTS delegate_status")
    op.execute("DROP TYPE IF EXISTS delegate_account_type")
