"""
Nice List Backend — Pydantic Request/Response Schemas
=======================================================

Schemas are the HTTP contract; models are the storage layout. They are kept
apart so the wire format (camelCase keys, integer status codes) can differ from
column names (snake_case) without leaking either into the other.
"""
