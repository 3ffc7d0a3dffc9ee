"""
HealthTracker — Application Package
=====================================

What: Personal health tracker: a JSON API over SQLite plus a small CLI client.
Who:  Imported by uvicorn (healthtracker.main:app), Alembic, pytest and the CLI.

Layering:
    ┌─────────────────────────────────────┐
    │      Routes (HTTP boundary)         │  ← status codes, request shapes
    ├─────────────────────────────────────┤
    │   Services (status + record store)  │  ← aggregates, health probe
    ├─────────────────────────────────────┤
    │    Models & Schemas (Data)          │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │     Database (SQLite via aiosqlite) │  ← engine, sessions, schema init
    └─────────────────────────────────────┘

    The CLI (healthtracker.cli) lives in a separate process and only talks
    to the routes over HTTP.
"""

__version__ = "0.1.0"
