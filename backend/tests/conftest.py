"""
Portfolio Backend: Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Workflow tests need recording fakes for the store and dispatcher;
       store tests need a real (in-memory) database; route tests need an
       HTTP client wired to the app with the workflow overridden.

Fixture Hierarchy:
    Function-scoped:
    ├── fake_store / fake_dispatcher: recording collaborators
    ├── workflow: SubmissionWorkflow over the two fakes
    ├── session_factory: async sessions on a fresh in-memory SQLite database
    └── test_client: HTTPX AsyncClient against the app, workflow overridden
"""

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple
from uuid import uuid4

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must happen BEFORE the package is imported: settings are read at import
_static_dir = Path(tempfile.mkdtemp(prefix="portfolio_test_site_"))
(_static_dir / "index.html").write_text("<html><body>Portfolio</body></html>")

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SENDGRID_API_KEY"] = "test-key-not-real"
os.environ["CONTACT_EMAIL"] = "owner@example.com"
os.environ["SENDER_EMAIL"] = "site@example.com"
os.environ["STATIC_DIR"] = str(_static_dir)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from portfolio_api.database import Base  # noqa: E402
from portfolio_api.exceptions import DispatchError, PersistenceError  # noqa: E402
from portfolio_api.models.submission import Submission  # noqa: E402
from portfolio_api.services.notifier_base import NotificationDispatcher  # noqa: E402
from portfolio_api.services.submission_store import SubmissionStore  # noqa: E402
from portfolio_api.services.submission_workflow import SubmissionWorkflow  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Recording Fakes
# ══════════════════════════════════════════════════════════════════════════

class FakeStore(SubmissionStore):
    """In-memory store that records every create() call."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.calls: List[Tuple[str, str, str]] = []
        self.saved: List[Submission] = []

    async def create(self, name: str, email: str, message: str) -> Submission:
        self.calls.append((name, email, message))
        if self.error is not None:
            raise self.error
        submission = Submission(
            id=uuid4(),
            name=name,
            email=email,
            message=message,
            created_at=datetime.now(timezone.utc),
        )
        self.saved.append(submission)
        return submission


class FakeDispatcher(NotificationDispatcher):
    """Dispatcher that records notify() calls instead of sending email."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.calls: List[Tuple[str, str, str]] = []

    async def notify(self, name: str, email: str, message: str) -> None:
        self.calls.append((name, email, message))
        if self.error is not None:
            raise self.error


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def fake_dispatcher():
    return FakeDispatcher()


@pytest.fixture
def workflow(fake_store, fake_dispatcher):
    return SubmissionWorkflow(store=fake_store, dispatcher=fake_dispatcher)


@pytest.fixture
def failing_store():
    """Store whose backing database is unreachable."""
    return FakeStore(error=PersistenceError(context={"cause": "connection refused"}))


@pytest.fixture
def failing_dispatcher():
    """Dispatcher whose provider rejects the credentials."""
    return FakeDispatcher(
        error=DispatchError(message="Email provider rejected the message (HTTP 401)", status_code=401)
    )


@pytest.fixture
def broken_store():
    """Store that breaks its contract and leaks a raw connectivity fault."""
    return FakeStore(error=ConnectionError("database unreachable"))


@pytest.fixture
def crashing_dispatcher():
    """Dispatcher that leaks an arbitrary exception instead of DispatchError."""
    return FakeDispatcher(error=RuntimeError("smtp exploded"))


@pytest_asyncio.fixture
async def session_factory():
    """
    Async session factory on a fresh in-memory SQLite database.

    StaticPool keeps a single connection, so the schema created here is the
    one every session sees.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(workflow):
    """
    HTTPX AsyncClient routed straight into the FastAPI app.

    The workflow dependency is overridden with the fake-backed `workflow`
    fixture; tests that need a failing collaborator swap its store or
    dispatcher before posting.
    """
    from portfolio_api.main import app
    from portfolio_api.services.submission_workflow import get_submission_workflow

    app.dependency_overrides[get_submission_workflow] = lambda: workflow
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
