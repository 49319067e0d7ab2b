"""
Repository layer for persistence.

Repositories wrap a SQLite connection obtained from ``core.db`` and
translate rows to schema objects.  They never commit; services own
the transaction boundaries.
"""
