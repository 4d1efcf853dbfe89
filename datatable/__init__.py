"""Core (UI-agnostic) data-table logic.

This package contains:
- row extraction from a rendered HTML table (lxml -> pandas)
- search, sort and pagination over the in-memory row set
- a state engine producing JSON-serializable view payloads
- the lxml renderer and host-table controller
"""
