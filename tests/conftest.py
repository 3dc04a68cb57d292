"""Test configuration and fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Importing db registers the SQLite foreign-key pragma on every engine
from painthub.db import Base
from painthub.models import models  # noqa: F401
from painthub.services.owners import create_owner


@pytest.fixture
def test_db():
    """In-memory database with all tables, one session per test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    SessionLocal = sessionmaker(bind=engine, autoflush=False)
    session = SessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def owner(test_db):
    user = create_owner(test_db, "maria")
    test_db.commit()
    return user


@pytest.fixture
def other_owner(test_db):
    user = create_owner(test_db, "joao")
    test_db.commit()
    return user
