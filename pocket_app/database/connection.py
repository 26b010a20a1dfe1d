"""
SQLAlchemy engine and session factory for the tag database.

Nothing here is created at import time: the bootstrap builds one engine
from the configured database path and hands the session factory to the
tag store.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()

# Seconds a writer waits on SQLite's lock before giving up
BUSY_TIMEOUT = 30


def build_engine(database_path: str) -> Engine:
    """Create an engine for the SQLite file at ``database_path``"""
    return create_engine(
        f"sqlite:///{database_path}",
        connect_args={"check_same_thread": False, "timeout": BUSY_TIMEOUT},
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
