"""Handler for the torrent infohash to arr mapping."""

from sqlalchemy import delete, func
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col, select

from arrmap.database.errors import MappingStoreError
from arrmap.database.models import MappingStats, TorrentArrMapping
from arrmap.database.models.torrent_arr_mapping import utc_now
from arrmap.utils.logger import get_logger

from .base import BaseDatabaseHandler

logger = get_logger(__name__)


class TorrentArrMappingHandler(BaseDatabaseHandler):
    """Durable record of which arr requested each torrent."""

    # region SET API
    def set_arr_for_torrent(
        self,
        infohash: str,
        torrent_id: str,
        torrent_name: str,
        arr_name: str,
    ) -> None:
        """Insert or update the mapping for an infohash.

        created_at is only written on first insert. Storage errors are logged and re-raised.
        """
        with self._write_session() as session:
            now = utc_now()  # Taken under the lock so updated_at never goes backwards
            statement = insert(TorrentArrMapping).values(
                infohash=infohash,
                arr_name=arr_name,
                torrent_id=torrent_id,
                torrent_name=torrent_name,
                created_at=now,
                updated_at=now,
            )
            statement = statement.on_conflict_do_update(
                index_elements=["infohash"],
                set_={
                    "arr_name": statement.excluded.arr_name,
                    "torrent_id": statement.excluded.torrent_id,
                    "torrent_name": statement.excluded.torrent_name,
                    "updated_at": statement.excluded.updated_at,
                },
            )

            try:
                session.connection().execute(statement)
                session.commit()
            except SQLAlchemyError:
                session.rollback()
                logger.exception("Failed to store arr mapping, infohash: %s arr_name: %s", infohash, arr_name)
                raise

        logger.debug(
            "Stored arr mapping, infohash: %s arr_name: %s torrent_name: %s",
            infohash,
            arr_name,
            torrent_name,
        )

    # region DELETE API
    def delete_mapping(self, infohash: str) -> bool:
        """Delete the mapping for an infohash, returns whether a row was removed."""
        statement = delete(TorrentArrMapping).where(col(TorrentArrMapping.infohash) == infohash)

        with self._write_session() as session:
            try:
                result = session.connection().execute(statement)
                session.commit()
            except SQLAlchemyError:
                session.rollback()
                logger.exception("Failed to delete arr mapping, infohash: %s", infohash)
                raise

        deleted = result.rowcount > 0
        if deleted:
            logger.info("Deleted arr mapping, infohash: %s", infohash)
        return deleted

    # region GET API
    def get_arr_for_torrent(self, infohash: str) -> str | None:
        """Get the arr name by infohash, None if not found.

        Storage errors are logged and also reported as None.
        """
        statement = select(TorrentArrMapping.arr_name).where(TorrentArrMapping.infohash == infohash)
        with self._read_session() as session:
            try:
                return session.exec(statement).first()
            except SQLAlchemyError:
                logger.exception("Failed to get arr mapping, infohash: %s", infohash)
                return None

    def get_arr_by_torrent_id(self, torrent_id: str) -> str | None:
        """Get the arr name by torrent ID, None if not found.

        If several infohashes share the torrent ID any one of them may be used.
        """
        statement = select(TorrentArrMapping.arr_name).where(TorrentArrMapping.torrent_id == torrent_id)
        with self._read_session() as session:
            try:
                return session.exec(statement).first()
            except SQLAlchemyError:
                logger.exception("Failed to get arr mapping, torrent_id: %s", torrent_id)
                return None

    def get_mapping(self, infohash: str) -> TorrentArrMapping | None:
        """Get the full mapping by infohash, raising MappingStoreError if the read fails."""
        with self._read_session() as session:
            try:
                return session.get(TorrentArrMapping, infohash)
            except SQLAlchemyError as e:
                logger.exception("Failed to get arr mapping, infohash: %s", infohash)
                msg = f"Failed to read mapping for {infohash}"
                raise MappingStoreError(msg) from e

    def list_mappings(self, limit: int | None = None, offset: int = 0) -> list[TorrentArrMapping]:
        """List mappings, most recently updated first."""
        statement = (
            select(TorrentArrMapping)
            .order_by(col(TorrentArrMapping.updated_at).desc(), col(TorrentArrMapping.infohash))
            .offset(offset)
        )
        if limit is not None:
            statement = statement.limit(limit)

        with self._read_session() as session:
            try:
                return list(session.exec(statement).all())
            except SQLAlchemyError as e:
                logger.exception("Failed to list arr mappings")
                msg = "Failed to list mappings"
                raise MappingStoreError(msg) from e

    def get_stats(self) -> MappingStats:
        """Get the total count and a count per arr.

        Both queries run under one read lock so no write lands between them.
        """
        total_statement = select(func.count()).select_from(TorrentArrMapping)
        by_arr_statement = select(TorrentArrMapping.arr_name, func.count()).group_by(
            col(TorrentArrMapping.arr_name),
        )

        with self._read_session() as session:
            try:
                total = session.exec(total_statement).one()
                by_arr = {arr_name: count for arr_name, count in session.exec(by_arr_statement).all()}
            except SQLAlchemyError as e:
                logger.exception("Failed to get arr mapping stats")
                msg = "Failed to read mapping stats"
                raise MappingStoreError(msg) from e

        return MappingStats(total=total, by_arr=by_arr)
