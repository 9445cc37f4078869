"""Data stores for persistence.

Stores handle:
- PostgreSQL: engine, DB session lifecycle
- Documents: find/sort/populate queries over the ORM models

No formatting logic in stores - that belongs in services.
"""
