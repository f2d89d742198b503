"""
Pydantic schema definitions for API payloads.

Schemas are kept separate from the storage layer so the API
representation (camelCase) can differ from column names.
"""
