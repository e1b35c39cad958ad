"""
Storefront Backend — Application Package Initializer
=====================================================

What: Marks the `storefront` directory as a Python package.
Who:  Imported by uvicorn (`storefront.main:app`), Alembic, and pytest.

Architecture Note:
    The backend is layered the same way for every resource:

    ┌─────────────────────────────────────┐
    │   Routes (/admin, /store, /uploads) │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation rules, orchestration
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    A route handler validates its input, calls one service method inside the
    request's transaction, re-reads the resource, and serializes it.
"""

__version__ = "1.0.0"
