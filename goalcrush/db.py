"""Database engine, sessions and transaction scope."""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import get_database_url

logger = logging.getLogger('goalcrush.db')

Base = declarative_base()


def make_engine(database_url: Optional[str] = None, **kwargs) -> Engine:
    """Create an engine for ``database_url`` (default: configured URL)."""
    url = database_url or get_database_url()
    connect_args = kwargs.pop('connect_args', {})
    if url.startswith('sqlite'):
        connect_args.setdefault('check_same_thread', False)
    return create_engine(url, connect_args=connect_args, **kwargs)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create any missing tables."""
    from . import db_models  # noqa: F401

    Base.metadata.create_all(bind=engine)


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """
    Run a block in one transaction.

    Commits when the block finishes, rolls back if it raises, and always
    closes the session.
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        logger.debug('Rolling back transaction')
        session.rollback()
        raise
    finally:
        session.close()
