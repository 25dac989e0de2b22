"""Create contacts table

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

What:  Creates the `contacts` table holding every contact-form submission.
How:   PostgreSQL UUID primary key with gen_random_uuid() as server default,
       TIMESTAMP WITH TIME ZONE creation time, index on created_at DESC.

Rollback: downgrade() drops the table entirely (all submissions lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "contacts",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Newest-first reading of the inbox
    op.create_index(
        "idx_contacts_created_at",
        "contacts",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    """Drop the contacts table. Destructive: every stored submission is lost."""
    op.drop_index("idx_contacts_created_at", table_name="contacts")
    op.drop_table("contacts")
