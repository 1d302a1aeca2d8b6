"""
Noteful Backend — Application Package Initializer
==================================================

What: Marks the `noteful` directory as a Python package.
Who:  Imported by uvicorn (`noteful.main:app`), Alembic and pytest.

Architecture Note:
    The backend is a thin layered CRUD service:

    ┌─────────────────────────────────────┐
    │        Routes (notes, folders)      │  ← status codes, headers, Location
    ├─────────────────────────────────────┤
    │   Validation + Sanitizer services   │  ← pure input/output checks
    ├─────────────────────────────────────┤
    │   Store adapters (NoteStore, ...)   │  ← one transaction per operation
    ├─────────────────────────────────────┤
    │   Models & Schemas (Data)           │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (Persistence)            │  ← Async SQLAlchemy engine/sessions
    └─────────────────────────────────────┘

    Each layer receives the one below it explicitly (constructor arguments),
    so nothing reaches for a module-level database handle.
"""

__version__ = "1.0.0"
