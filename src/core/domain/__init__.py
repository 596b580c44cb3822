"""Domain models and value objects.

Why:
- Pure, strict data structures (Pydantic v2) live here.
- The domain knows nothing about HTTP, the CLI or signing: only replication
  concepts.
"""
