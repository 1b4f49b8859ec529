"""Database connection and session management."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import create_engine, Engine, StaticPool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from sqlalchemy.orm.exc import StaleDataError

from papertrade.core.exceptions import StorageError

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """
    Create the database engine.

    In-memory SQLite gets a single shared connection so every session sees
    the same database.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=False, **kwargs)
    return create_engine(database_url, echo=False, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to the engine."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def init_db(engine: Engine) -> None:
    """Create database tables."""
    from papertrade.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def sqlite_url_for(db_path: Path) -> str:
    """Build a SQLite URL for a file path, creating the parent directory."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{db_path}"


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """
    Explicit transaction boundary.

    Commits only if the block completes. Any exception rolls back; database
    failures are re-raised as StorageError, everything else unchanged.
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except StaleDataError:
        session.rollback()
        raise
    except SQLAlchemyError as e:
        logger.error("Database transaction failed, rolling back: %s", e)
        session.rollback()
        raise StorageError(f"Transaction failed: {e}") from e
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
