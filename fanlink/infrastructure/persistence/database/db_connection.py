"""SQLAlchemy database configuration and connection management.

This module is responsible for:
- Engine creation and configuration
- Session management
- Transaction handling
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool

from fanlink.config import get_logger, settings

logger = get_logger(__name__)


def _ensure_sqlite_dir(db_url: str) -> None:
    _, _, path = db_url.partition(":///")
    path = path.split("?", 1)[0]
    if path:
        Path(path).parent.mkdir(parents=True, exist_ok=True)


def create_db_engine(connection_string: str | None = None) -> AsyncEngine:
    """Create async SQLAlchemy engine, tuned for SQLite when that is the backend.

    An in-memory SQLite URL gets a single shared connection so every session
    sees the same database. File-backed SQLite opens a connection per session,
    since Flask runs each async view on its own event loop.
    """
    db_url = connection_string or settings.database.url
    is_sqlite = db_url.startswith("sqlite")
    in_memory = is_sqlite and ":memory:" in db_url

    engine_args: dict = {"echo": settings.database.echo}
    if in_memory:
        engine_args |= {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    elif is_sqlite:
        _ensure_sqlite_dir(db_url)
        engine_args |= {
            "poolclass": NullPool,
            "connect_args": {"check_same_thread": False, "timeout": 30.0},
        }

    engine = create_async_engine(db_url, **engine_args)

    if is_sqlite and not in_memory:

        @event.listens_for(engine.sync_engine, "connect")  # type: ignore
        def _set_sqlite_pragma(dbapi_connection, _):  # type: ignore # pragma: no cover
            """Set SQLite PRAGMAs on connection creation."""
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA busy_timeout = 30000")
            cursor.execute("PRAGMA journal_mode = WAL")
            cursor.execute("PRAGMA synchronous = NORMAL")
            cursor.close()

    logger.info("Created database engine", in_memory=in_memory)
    return engine


# Global engine singleton
_engine: AsyncEngine | None = None


def get_engine() -> AsyncEngine:
    """Get or create the global database engine singleton."""
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def create_session_factory(engine: AsyncEngine | None = None) -> async_sessionmaker:
    """Create an async session factory for the given engine.

    Args:
        engine: Optional engine (uses global engine if None)
    """
    return async_sessionmaker(
        bind=engine or get_engine(),
        expire_on_commit=False,
        autoflush=True,
    )


# Global session factory singleton
_session_factory: async_sessionmaker | None = None


def get_session_factory() -> async_sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory()
    return _session_factory


@asynccontextmanager
async def get_session(
    factory: async_sessionmaker | None = None,
) -> AsyncGenerator[AsyncSession]:
    """Get a database session that commits on success and rolls back on error.

    Args:
        factory: Session factory to draw from; the global one when omitted

    Yields:
        AsyncSession: Managed database session
    """
    session = (factory or get_session_factory())()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
