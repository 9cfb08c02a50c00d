"""Database helpers (engine/session export)."""

from .session import Base, build_engine, build_sessionmaker, get_engine, session_scope

__all__ = ["Base", "build_engine", "build_sessionmaker", "get_engine", "session_scope"]
