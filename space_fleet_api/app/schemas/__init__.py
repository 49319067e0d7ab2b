"""
Pydantic schema definitions for API payloads.

Schemas are separated from storage so the API representation
(camelCase JSON, epoch-millisecond dates) is decoupled from the
database columns.
"""
