"""Domain models and entities.

Why:
- Pure, strict data structures live here (Pydantic v2 + the attribute schema).
- The domain knows nothing about HTTP or the CLI: only problem concepts.
"""
