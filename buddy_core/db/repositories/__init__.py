"""
Per-entity repository modules for database access.

Each module exposes plain functions taking a ``Session``; they translate
between pydantic payloads and ORM rows and hold no business rules. Cascading
deletes are left to the store's foreign keys.
"""
