"""
Boundary layer for external system integrations.

Holds the in-process vector storage: per-document vector indices and the
registry that owns them.
"""
