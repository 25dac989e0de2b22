"""
Portfolio Backend: Submission SQLAlchemy Model
===============================================

What:  ORM model representing the `contacts` table.
Why:   The durable record of every contact message; the email notification is
       only a convenience copy of it.
Who:   Written by SqlAlchemySubmissionStore; read by Alembic for migrations.

Table Design Rationale:
    - UUID primary key: Non-sequential, so submission IDs can't be enumerated
    - name/email as VARCHAR(255): Form inputs; email format is NOT validated
    - message as TEXT: No artificial length limit on what a visitor writes
    - created_at: UTC with timezone, assigned when the row is inserted
    - No unique constraint on email: one visitor may write many times

    Index on created_at DESC serves whoever reads the inbox out-of-band
    (newest first). The application itself never queries this table.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from portfolio_api.database import Base


class Submission(Base):
    """
    A contact-form message left by a site visitor.

    Lifecycle:
        Created once by the store after validation. Never updated, never
        deleted by the application. `id` and `created_at` are filled in by
        the column defaults at insert time, never by the caller.
    """

    __tablename__ = "contacts"

    # Generated client-side so the same model works on PostgreSQL and SQLite;
    # the migration adds gen_random_uuid() as a server default for manual inserts
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(String(255), nullable=False)

    message: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_contacts_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Submission(id={self.id}, email='{self.email}', created_at='{self.created_at}')>"
