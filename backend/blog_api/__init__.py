"""
Blog Backend — Application Package Initializer
==============================================

What: Marks the `blog_api` directory as a Python package.
Who:  Imported by uvicorn (`blog_api.main:app`), Alembic, and pytest.

Architecture Note:
    The backend keeps the same layered shape throughout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Dependencies (Authorization Guard)│  ← bearer token → Identity
    ├─────────────────────────────────────┤
    │   Services (validation, ownership)  │  ← auth / post / comment pipelines
    ├─────────────────────────────────────┤
    │      Repository (BlogStore)         │  ← one AsyncSession per request
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘

    Every collaborator (settings, database, hasher, token service, services)
    is built by `create_app()` and reached through `app.state`; nothing reads
    module-level globals at request time.
"""

__version__ = "1.0.0"
