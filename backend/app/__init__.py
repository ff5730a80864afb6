"""
TextShelf Backend - Application Package Initializer
=====================================================

What: Marks the `app` directory as a Python package.
Who:  Used by uvicorn (`app.main:app`), `python -m app` and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (ResourceStore, loader)  │  ← Validation, search, ids
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Resource record + Pydantic
    └─────────────────────────────────────┘

    There is no persistence layer: the store keeps everything in memory and
    is seeded from a JSON file at startup.
"""

__version__ = "1.0.0"
