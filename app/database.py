# app/database.py

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.errors import DuplicateKey, StorageError

logger = logging.getLogger(__name__)


def build_engine(database_url: str):
    url = make_url(database_url)
    is_sqlite = url.get_backend_name() == "sqlite"

    connect_args = {}
    engine_kwargs = {"pool_pre_ping": True}

    if is_sqlite:
        connect_args = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            engine_kwargs["poolclass"] = StaticPool

    new_engine = create_engine(
        database_url,
        connect_args=connect_args,
        **engine_kwargs,
    )

    if is_sqlite:
        @event.listens_for(new_engine, "connect")
        def _set_sqlite_pragmas(dbapi_connection, _connection_record):
            cursor = dbapi_connection.cursor()
            try:
                cursor.execute("PRAGMA foreign_keys=ON")
            finally:
                cursor.close()

    return new_engine


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit_or_raise(db, duplicate_message: str):
    """
    Commit the session, translating storage failures into API errors.

    Unique-constraint violations become DuplicateKey; anything else is
    logged and surfaced as a generic StorageError.
    """
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateKey(duplicate_message) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Database error during commit")
        raise StorageError() from exc
