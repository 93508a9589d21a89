"""Store adapters for entity persistence and querying.

Implementations:
- SQLite (zero-config, single-file)
"""
