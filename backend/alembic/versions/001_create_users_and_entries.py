"""Create users and entries tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates `users` (unique email) and `entries` (author + created_at index).
Note:  entries.author is a plain string copy of users.id; there is no foreign
       key, so removing a user never touches their entries.

Rollback: downgrade() drops both tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False,
                  comment="Unique identifier, assigned at signup"),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("mobile_number", sa.String(32), nullable=False),
        sa.Column("email", sa.String(255), nullable=False,
                  comment="Login identifier, unique across users"),
        sa.Column("password_hash", sa.String(255), nullable=False,
                  comment="bcrypt hash of the user's password"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text("CURRENT_TIMESTAMP"),
                  comment="When the user signed up (UTC)"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "entries",
        sa.Column("id", sa.Uuid(), nullable=False,
                  comment="Unique identifier, assigned at creation"),
        sa.Column("headline", sa.String(200), nullable=False),
        sa.Column("journal_text", sa.Text(), nullable=False),
        sa.Column("photo", sa.String(2048), nullable=False,
                  comment="URL of the entry's photo"),
        sa.Column("location_name", sa.String(255), nullable=False,
                  comment="Free-text place name as typed by the author"),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("author", sa.String(36), nullable=False,
                  comment="str(User.id) of the owner; not a foreign key"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text("CURRENT_TIMESTAMP"),
                  comment="When this entry was created (UTC)"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_entries_author_created_at",
        "entries",
        ["author", "created_at"],
    )


def downgrade() -> None:
    op.drop_index("idx_entries_author_created_at", table_name="entries")
    op.drop_table("entries")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
