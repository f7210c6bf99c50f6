"""Database utilities - engine and session."""

from src.painel.core.db.engine import build_engine, dispose_engine, get_engine
from src.painel.core.db.session import get_session

__all__ = [
    # Engine
    "build_engine",
    "dispose_engine",
    "get_engine",
    # Session
    "get_session",
]
