"""Pre-save repository backed by SQLAlchemy."""

from datetime import date

from attrs import define
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fanlink.config import get_logger
from fanlink.domain.entities import PreSaveRecord, SpotifyAlbumMatch
from fanlink.infrastructure.persistence.database.db_models import DBPreSave

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class PreSaveMapper:
    """Bidirectional mapper between DB and domain models for pre-saves."""

    @staticmethod
    def to_domain(db_model: DBPreSave) -> PreSaveRecord:
        return PreSaveRecord(
            id=db_model.id,
            artist=db_model.artist,
            title=db_model.title,
            release_date=db_model.release_date,
            upc=db_model.upc,
            isrc=db_model.isrc,
            is_released=db_model.is_released,
            is_active=db_model.is_active,
            spotify_uri=db_model.spotify_uri,
            spotify_album_id=db_model.spotify_album_id,
            spotify_url=db_model.spotify_url,
        )

    @staticmethod
    def apply(record: PreSaveRecord, db_model: DBPreSave) -> DBPreSave:
        """Copy domain fields onto a (new or loaded) DB model."""
        db_model.artist = record.artist
        db_model.title = record.title
        db_model.release_date = record.release_date
        db_model.upc = record.upc
        db_model.isrc = record.isrc
        db_model.is_released = record.is_released
        db_model.is_active = record.is_active
        db_model.spotify_uri = record.spotify_uri
        db_model.spotify_album_id = record.spotify_album_id
        db_model.spotify_url = record.spotify_url
        return db_model


class PreSaveRepository:
    """SQLAlchemy implementation of the pre-save repository protocol.

    Writes are flushed, not committed; the caller's session scope owns the
    transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.mapper = PreSaveMapper()

    async def save(self, record: PreSaveRecord) -> PreSaveRecord:
        db_model = None
        if record.id is not None:
            db_model = await self.session.get(DBPreSave, record.id)
        db_model = self.mapper.apply(record, db_model or DBPreSave())
        self.session.add(db_model)
        await self.session.flush()
        return self.mapper.to_domain(db_model)

    async def get_by_id(self, record_id: int) -> PreSaveRecord | None:
        db_model = await self.session.get(DBPreSave, record_id)
        return self.mapper.to_domain(db_model) if db_model else None

    async def list_due_unreleased(self, today: date) -> list[PreSaveRecord]:
        stmt = (
            select(DBPreSave)
            .where(
                DBPreSave.is_active.is_(True),
                DBPreSave.is_released.is_(False),
                DBPreSave.release_date.is_not(None),
                DBPreSave.release_date <= today,
            )
            .order_by(DBPreSave.release_date, DBPreSave.id)
        )
        result = await self.session.scalars(stmt)
        return [self.mapper.to_domain(row) for row in result]

    async def mark_released(self, record_id: int, match: SpotifyAlbumMatch) -> None:
        # Savepoint so one failed update leaves earlier ones in the batch intact
        async with self.session.begin_nested():
            db_model = await self.session.get(DBPreSave, record_id)
            if db_model is None:
                raise LookupError(f"Pre-save {record_id} not found")
            db_model.is_released = True
            db_model.spotify_uri = match.uri
            db_model.spotify_album_id = match.album_id
            db_model.spotify_url = match.url
        logger.debug(f"Marked pre-save {record_id} released")
