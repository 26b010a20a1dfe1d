"""
Tag storage strategies using Strategy Pattern.

The routes only see the TagStore interface; the SQL implementation below is
what the server runs with, backed by the ``entries`` table.
"""

import logging
from abc import ABC, abstractmethod

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from pocket_app.database.connection import Base, build_engine, build_session_factory
from pocket_app.errors import DuplicateTag, NotFound, StorageFailure
from pocket_app.models.entry import Entry

logger = logging.getLogger(__name__)


class TagStore(ABC):
    """
    Abstract base class for tag -> URL storage.

    Implementations must enforce tag uniqueness themselves, so that two
    concurrent saves of the same tag can never both succeed.
    """

    @abstractmethod
    def save(self, tag: str, url: str) -> None:
        """
        Persist a new tag -> URL mapping.

        Raises:
            DuplicateTag: if the tag is already stored
            StorageFailure: on any other persistence error
        """

    @abstractmethod
    def lookup(self, tag: str) -> str:
        """
        Return the URL stored for ``tag``.

        Raises:
            NotFound: if no entry exists for the tag
            StorageFailure: on any other persistence error
        """

    def close(self) -> None:
        """Release any resources held by the store"""


class SQLTagStore(TagStore):
    """
    SQLAlchemy implementation writing to the ``entries`` table.

    Every call opens its own session, so the store can be shared by all
    request threads and both listeners.
    """

    def __init__(self, engine: Engine, session_factory: sessionmaker = None):
        self.engine = engine
        self.session_factory = session_factory or build_session_factory(engine)
        self.init_schema()

    @classmethod
    def from_path(cls, database_path: str) -> "SQLTagStore":
        """Build a store for the SQLite file at ``database_path``"""
        return cls(build_engine(database_path))

    def init_schema(self) -> None:
        """Create the entries table if it doesn't exist (safe on every startup)"""
        try:
            Base.metadata.create_all(bind=self.engine, tables=[Entry.__table__])
        except SQLAlchemyError as e:
            raise StorageFailure(f"could not create schema: {e}") from e
        logger.debug("Tag store schema ready on %s", self.engine.url)

    def save(self, tag: str, url: str) -> None:
        with self.session_factory() as session:
            session.add(Entry(tag=tag, url=url))
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                raise DuplicateTag(f"tag '{tag}' already exists") from e
            except SQLAlchemyError as e:
                session.rollback()
                logger.error("Saving tag %r failed: %s", tag, e)
                raise StorageFailure(str(e)) from e

        logger.info("Saved tag %r", tag)

    def lookup(self, tag: str) -> str:
        try:
            with self.session_factory() as session:
                row = session.execute(
                    select(Entry.url).where(Entry.tag == tag)
                ).first()
        except SQLAlchemyError as e:
            logger.error("Looking up tag %r failed: %s", tag, e)
            raise StorageFailure(str(e)) from e

        if row is None:
            raise NotFound(f"no entry for tag '{tag}'")
        return row.url

    def close(self) -> None:
        self.engine.dispose()
