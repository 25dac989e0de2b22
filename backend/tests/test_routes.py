"""
Portfolio Backend: HTTP Route Tests
====================================

What:  End-to-end tests of the FastAPI app through HTTPX's ASGI transport.
How:   The workflow dependency is overridden with fake collaborators, so the
       HTTP mapping is tested without a database or email provider.
"""

import logging
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from portfolio_api import __version__, database, main


class TestContactRoute:

    @pytest.mark.asyncio
    async def test_valid_submission_returns_201(self, test_client, fake_store, fake_dispatcher):
        response = await test_client.post(
            "/contacts",
            json={"name": "Jane", "email": "jane@x.com", "message": "Hello"},
        )

        assert response.status_code == 201
        assert response.json() == {"success": True, "message": "Contact saved successfully"}
        assert fake_store.calls == [("Jane", "jane@x.com", "Hello")]
        assert fake_dispatcher.calls == [("Jane", "jane@x.com", "Hello")]

    @pytest.mark.asyncio
    async def test_missing_field_is_reported_in_body(self, test_client, fake_store, fake_dispatcher):
        response = await test_client.post(
            "/contacts",
            json={"name": "", "email": "jane@x.com", "message": "Hello"},
        )

        assert response.status_code == 201
        assert response.json() == {"success": False, "message": "Missing required fields"}
        assert fake_store.calls == []
        assert fake_dispatcher.calls == []

    @pytest.mark.asyncio
    async def test_absent_fields_are_reported_in_body(self, test_client, fake_store):
        response = await test_client.post("/contacts", json={})

        assert response.status_code == 201
        assert response.json()["message"] == "Missing required fields"
        assert fake_store.calls == []

    @pytest.mark.asyncio
    async def test_store_failure_is_reported_in_body(self, test_client, workflow, failing_store, fake_dispatcher):
        workflow.store = failing_store

        response = await test_client.post(
            "/contacts",
            json={"name": "Jane", "email": "jane@x.com", "message": "Hello"},
        )

        assert response.status_code == 201
        assert response.json() == {"success": False, "message": "Error processing form"}
        assert fake_dispatcher.calls == []

    @pytest.mark.asyncio
    async def test_dispatch_failure_still_returns_201(self, test_client, workflow, fake_store, failing_dispatcher):
        workflow.dispatcher = failing_dispatcher

        response = await test_client.post(
            "/contacts",
            json={"name": "Jane", "email": "jane@x.com", "message": "Hello"},
        )

        assert response.status_code == 201
        assert response.json()["success"] is True
        assert len(fake_store.saved) == 1

    @pytest.mark.asyncio
    async def test_malformed_body_returns_failure_result(self, test_client, fake_store):
        response = await test_client.post(
            "/contacts",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 201
        assert response.json() == {"success": False, "message": "Invalid submission payload"}
        assert fake_store.calls == []

    @pytest.mark.asyncio
    async def test_numeric_field_is_accepted(self, test_client, fake_store):
        response = await test_client.post(
            "/contacts",
            json={"name": 42, "email": "jane@x.com", "message": "Hello"},
        )

        assert response.status_code == 201
        assert fake_store.calls == [("42", "jane@x.com", "Hello")]

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.post(
            "/contacts",
            json={"name": "Jane", "email": "jane@x.com", "message": "Hello"},
            headers={"X-Request-ID": "abc12345"},
        )

        assert response.headers["X-Request-ID"] == "abc12345"


class TestProbes:

    @pytest.mark.asyncio
    async def test_auth_status(self, test_client):
        response = await test_client.get("/auth/status")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "message": "API is running"}

    @pytest.mark.asyncio
    async def test_health_reports_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"] == __version__

    @pytest.mark.asyncio
    async def test_health_is_503_when_database_is_unreachable(self, test_client, monkeypatch):
        unreachable = create_async_engine("sqlite+aiosqlite:////nonexistent-dir/contacts.db")
        monkeypatch.setattr(database, "engine", unreachable)

        try:
            response = await test_client.get("/health")
        finally:
            await unreachable.dispose()

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["database"] == "disconnected"


class TestStaticSite:

    @pytest.mark.asyncio
    async def test_index_is_served_at_root(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert "Portfolio" in response.text


class TestUnexpectedErrors:

    @pytest.mark.asyncio
    async def test_unhandled_exception_returns_generic_500(self, test_client, workflow):
        """The stack trace stays in the server log; the body only carries the request ID."""
        workflow.submit = AsyncMock(side_effect=RuntimeError("database driver crashed"))
        transport = ASGITransport(app=main.app, raise_app_exceptions=False)

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post(
                "/contacts",
                json={"name": "Jane", "email": "jane@x.com", "message": "Hello"},
                headers={"X-Request-ID": "rid00500"},
            )

        assert response.status_code == 500
        assert response.json() == {
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again later.",
            "request_id": "rid00500",
        }
        assert "database driver crashed" not in response.text


class TestLifespan:

    @pytest.mark.asyncio
    async def test_missing_sendgrid_key_is_logged_not_fatal(self, monkeypatch, caplog):
        # setup_logging() would replace the root handlers caplog listens on
        monkeypatch.setattr(main, "setup_logging", lambda: None)
        monkeypatch.setattr(main, "dispose_engine", AsyncMock())
        monkeypatch.setattr(main.settings, "sendgrid_api_key", "")
        caplog.set_level(logging.INFO, logger="portfolio_api.main")

        started = False
        async with main.lifespan(main.app):
            started = True

        assert started
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert any("Configuration error" in r.getMessage() for r in errors)
        assert any("SENDGRID_API_KEY" in r.getMessage() for r in errors)
        main.dispose_engine.assert_awaited_once()
