"""
Portfolio Backend: Application Package Initializer
===================================================

What: The backend behind the portfolio site's contact form.
Why:  Accepts a visitor's message, stores it, and emails the site owner.
Who:  Imported by uvicorn (`portfolio_api.main:app`), Alembic, and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Workflow, Store, Mail)  │  ← validate → persist → notify
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    The static single-page site is served from STATIC_DIR by the same app;
    it has no server-side logic.
"""

__version__ = "1.0.0"
