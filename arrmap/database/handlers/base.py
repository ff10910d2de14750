from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from arrmap.constants import DATABASE_FILE
from arrmap.database.errors import MappingStoreInitError
from arrmap.utils.logger import get_logger
from arrmap.utils.rwlock import ReadWriteLock

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine.base import Engine
else:
    Path = object
    Engine = object

logger = get_logger(__name__)


class BaseDatabaseHandler:
    """Base class for database handlers.

    Owns one engine and one reader/writer lock. Subclasses wrap every public
    operation in either _read_session() or _write_session().
    """

    def __init__(self, database_path: Path = DATABASE_FILE, test_engine: Engine | None = None) -> None:
        """Open the database, creating the file and schema if they are missing."""
        self._lock = ReadWriteLock()
        self._database_path = database_path

        try:
            if test_engine is not None:
                self._engine = test_engine
            else:
                database_path.parent.mkdir(parents=True, exist_ok=True)
                self._engine = create_engine(f"sqlite:///{database_path}", echo=False)
            SQLModel.metadata.create_all(self._engine)
        except (OSError, SQLAlchemyError) as e:
            if test_engine is None and hasattr(self, "_engine"):
                self._engine.dispose()
            msg = f"Failed to initialise database at {database_path}"
            logger.error("%s: %s", msg, e)  # noqa: TRY400 Re-raised with the cause attached
            raise MappingStoreInitError(msg) from e

        logger.debug("Opened database %s", self._engine.url)

    @contextmanager
    def _read_session(self) -> Iterator[Session]:
        """Get a database session, holding the lock shared."""
        with self._lock.read_locked(), Session(self._engine) as session:
            yield session

    @contextmanager
    def _write_session(self) -> Iterator[Session]:
        """Get a database session, holding the lock exclusively."""
        with self._lock.write_locked(), Session(self._engine) as session:
            yield session

    def close(self) -> None:
        """Release the database handle, the handler must not be used afterwards."""
        with self._lock.write_locked():
            self._engine.dispose()
        logger.debug("Closed database %s", self._engine.url)
