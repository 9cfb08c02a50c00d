"""
High-level use cases for the bug tracker.

Services orchestrate a store (see repositories) to implement the record
lifecycle. Routers call these services instead of touching storage directly.
"""
