"""
GeoJournal Backend — Application Package Initializer
====================================================

What: Marks the `geojournal` directory as a Python package.
Why:  Enables module imports like `from geojournal.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows the same layered shape for every resource:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Handlers)         │  ← Validation results in, errors classified out
    ├─────────────────────────────────────┤
    │   Data Store Gateway / Geocoder     │  ← find/insert/save/remove, resolve()
    ├─────────────────────────────────────┤
    │     Models & Schemas (Data)         │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘

    Process-scoped resources (database engine, geocoding HTTP client) are
    created in the application lifespan and injected into handlers through
    FastAPI dependencies.
"""

__version__ = "1.0.0"
