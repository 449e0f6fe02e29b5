"""
Product Catalog Backend — Application Package Initializer
===========================================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Validator, Store)      │  ← Validation, CRUD rules
    ├─────────────────────────────────────┤
    │           Schemas (Data)            │  ← Pydantic product models
    └─────────────────────────────────────┘

The store is in memory and owned by the application instance; nothing is
persisted across restarts.
"""

__version__ = "1.0.0"
