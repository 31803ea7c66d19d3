"""
Nice List Backend — Application Package Initializer
====================================================

What: Marks the `nicelist` directory as a Python package.
Who:  Used by uvicorn (`uvicorn nicelist.main:app`), pytest, and the package installer.

Architecture Note:
    The backend is layered leaf-first:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP parsing, validation, status codes
    ├─────────────────────────────────────┤
    │     Repositories (Query Layer)      │  ← The only code that touches storage
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy tables + Pydantic contracts
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async engine, sessions, schema setup
    └─────────────────────────────────────┘

    Control only flows downward: a route calls a repository, a repository talks
    to its session, and results or exceptions travel back up.
"""

__version__ = "1.0.0"
