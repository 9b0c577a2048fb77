"""SQLAlchemy database models for stored pre-saves."""

from datetime import UTC, date, datetime

from sqlalchemy import Boolean, Date, DateTime, Index, MetaData, String
from sqlalchemy.ext.asyncio import AsyncAttrs, AsyncEngine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from fanlink.config import get_logger

logger = get_logger(__name__)

# Define naming convention for constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)


class FanlinkDBBase(AsyncAttrs, DeclarativeBase):
    """Base class for all database models with timestamps."""

    metadata = metadata

    id: Mapped[int] = mapped_column(primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


class DBPreSave(FanlinkDBBase):
    """A pre-save link page for an upcoming release."""

    __tablename__ = "pre_saves"

    artist: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    release_date: Mapped[date | None] = mapped_column(Date)
    upc: Mapped[str | None] = mapped_column(String(14))
    isrc: Mapped[str | None] = mapped_column(String(12))
    is_released: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    spotify_uri: Mapped[str | None] = mapped_column(String(64))
    spotify_album_id: Mapped[str | None] = mapped_column(String(32))
    spotify_url: Mapped[str | None] = mapped_column(String(255))

    __table_args__ = (
        Index("ix_pre_saves_due", "is_active", "is_released", "release_date"),
    )


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Initialize database schema.

    Creates all tables if they don't exist. Existing data is left untouched.
    """
    from fanlink.infrastructure.persistence.database.db_connection import get_engine

    engine = engine or get_engine()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(FanlinkDBBase.metadata.create_all)
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise
    else:
        logger.info("Database schema initialization complete")
