"""Database engine, sessions and ORM models."""

from .db_connection import (
    create_db_engine,
    create_session_factory,
    get_engine,
    get_session,
    get_session_factory,
)
from .db_models import DBPreSave, FanlinkDBBase, init_db

__all__ = [
    "DBPreSave",
    "FanlinkDBBase",
    "create_db_engine",
    "create_session_factory",
    "get_engine",
    "get_session",
    "get_session_factory",
    "init_db",
]
