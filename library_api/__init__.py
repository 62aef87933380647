"""
Library API: Package Initializer
=================================

A small HTTP/JSON service for a library: authors, books, members and the
books members have borrowed, persisted in a relational database.

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← status codes, bodies
    ├─────────────────────────────────────┤
    │       Stores (Persistence Layer)    │  ← one SQL statement per call
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy tables + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Connections)       │  ← async engine and sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
