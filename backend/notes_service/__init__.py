"""
Notes Service: Application Package
===================================

A small HTTP service that stores short text notes in a relational table
and lists the most recent ones.

Architecture Note:
    The backend is layered so each layer can be tested on its own:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← presence checks, error mapping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Database resource object
    └─────────────────────────────────────┘

    Handlers never reach for a global engine. The `Database` object is
    built during application startup, stored on `app.state`, and handed to
    routes through FastAPI dependencies.
"""

__version__ = "1.0.0"
