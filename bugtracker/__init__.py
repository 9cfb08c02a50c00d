"""Minimal bug tracking service: FastAPI API over a pluggable record store."""
