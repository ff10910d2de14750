"""Model for torrent infohash to arr mapping."""

from datetime import UTC, datetime

from pydantic import BaseModel
from sqlalchemy import Index
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(tz=UTC)


class TorrentArrMapping(SQLModel, table=True):
    """Database model recording which arr claimed a torrent."""

    __tablename__ = "torrent_arr_mapping"
    __table_args__ = (
        Index("idx_torrent_id", "torrent_id"),
        Index("idx_arr_name", "arr_name"),
    )

    infohash: str = Field(primary_key=True)
    arr_name: str = Field(nullable=False)
    torrent_id: str | None = Field(default=None)
    torrent_name: str | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, nullable=False)
    updated_at: datetime = Field(default_factory=utc_now, nullable=False)


class MappingStats(BaseModel):
    """Row count, total and per arr."""

    total: int = 0
    by_arr: dict[str, int] = {}
