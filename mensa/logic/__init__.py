"""Core business logic layer.

Subpackages:
- fixup: reconciling cached plans against the reference catalog
- fetch: the background job that refreshes the plan cache
"""
__all__ = ["fixup", "fetch"]
