"""
Portfolio Backend: Submission Record Store
===========================================

What:  Interface and SQLAlchemy implementation for recording submissions.
Why:   The workflow only needs "create a row or tell me it failed". Hiding
       sessions, transactions and driver errors behind that contract lets the
       workflow be tested with a fake and keeps storage failures typed.
How:   Each create() opens its own session, inserts one row, commits, and
       returns the Submission with `id` and `created_at` populated.

Contract:
    - create(name, email, message) -> Submission
    - Any backing-storage failure raises PersistenceError
    - The store never updates or deletes rows
"""

import logging
from abc import ABC, abstractmethod

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portfolio_api.exceptions import PersistenceError
from portfolio_api.models.submission import Submission

logger = logging.getLogger(__name__)


class SubmissionStore(ABC):
    """
    Abstract append-only store for contact submissions.

    Implementations:
        - SqlAlchemySubmissionStore: async SQLAlchemy (PostgreSQL in production)
    """

    @abstractmethod
    async def create(self, name: str, email: str, message: str) -> Submission:
        """
        Persist a new submission.

        Args:
            name, email, message: Already-validated, non-blank values.

        Returns:
            The stored Submission with `id` and `created_at` assigned.

        Raises:
            PersistenceError: The row could not be durably written.
        """
        ...


class SqlAlchemySubmissionStore(SubmissionStore):
    """
    Stores submissions through an async SQLAlchemy session factory.

    One session per call, committed before returning: the workflow must know
    the row is durable before it sends the notification email.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def create(self, name: str, email: str, message: str) -> Submission:
        try:
            async with self._session_factory() as session:
                submission = Submission(name=name, email=email, message=message)
                session.add(submission)
                try:
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise
                logger.debug("Inserted submission %s", submission.id)
                return submission
        except Exception as e:
            # DBAPI errors are wrapped by SQLAlchemy; `orig` holds the driver's
            # message without the SQL statement
            cause = getattr(e, "orig", None) or e
            raise PersistenceError(
                context={"error_type": type(e).__name__, "cause": str(cause)},
            ) from e
