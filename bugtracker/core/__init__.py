"""
Core utilities shared across the bug tracker.

This package hosts configuration helpers (env vars, store selection) and
cross-cutting concerns such as logging. Routers and services depend on these
primitives instead of reading the environment themselves.
"""
