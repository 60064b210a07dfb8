"""
Pocket Writer — Application Package Initializer
================================================

What: The `pocketwriter` package: REST backend plus the backend discovery client.
Who:  Imported by uvicorn (`pocketwriter.main:app`), Alembic, pytest and the
      `pocketwriter-discover` CLI.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, mapping, paging
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Client-side packages sit beside it and share the Pydantic schemas:

    - pocketwriter.discovery: finds a reachable backend on the local network
    - pocketwriter.client:    typed async HTTP client for the REST API
"""

__version__ = "1.0.0"
