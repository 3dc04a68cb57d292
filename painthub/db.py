import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import settings


def get_engine_kwargs(database_url: str) -> dict:
    kwargs = {"future": True, "pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        # QueuePool sizing only applies to server databases
        kwargs["pool_size"] = settings.db_pool_size
        kwargs["max_overflow"] = settings.db_max_overflow
        kwargs["pool_recycle"] = settings.db_pool_recycle
    return kwargs


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY clauses unless asked per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(settings.database_url, **get_engine_kwargs(settings.database_url))

# IMPORTANT: one Session per unit of work; never share a Session across threads
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

Base = declarative_base()


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """
    Run a block of store calls as one transaction on an existing session.

    Commits when the block exits normally; rolls back and re-raises on any
    exception, so nothing the block flushed survives a failure.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


@contextmanager
def session_scope() -> Iterator[Session]:
    """
    Open a fresh session, run the block as one unit of work, then close it.

    Example:
        with session_scope() as db:
            customers = list_customers(db, owner_id)
    """
    db = SessionLocal()
    try:
        with unit_of_work(db):
            yield db
    finally:
        db.close()


def init_db() -> None:
    # Import models so they are registered on Base
    from .models import models  # noqa: F401

    if settings.database_url.startswith("sqlite:///./"):
        os.makedirs("var", exist_ok=True)
    Base.metadata.create_all(bind=engine)
