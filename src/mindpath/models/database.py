from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from mindpath.config import get_database_url
from mindpath.errors import StoreFailure

logger = logging.getLogger(__name__)

_database_url = get_database_url()
_connect_args = (
    {"check_same_thread": False} if _database_url.startswith("sqlite") else {}
)

Base = declarative_base()
engine = create_engine(_database_url, future=True, connect_args=_connect_args)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@contextmanager
def store_session() -> Iterator[Session]:
    """Open a session, translating driver errors into ``StoreFailure``."""
    try:
        with SessionLocal() as session:
            yield session
    except SQLAlchemyError as exc:
        logger.exception("Database operation failed")
        raise StoreFailure("Database operation failed") from exc
