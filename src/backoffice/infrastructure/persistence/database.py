"""Engine and session factory construction."""

from __future__ import annotations

from typing import Any

from loguru import logger
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from backoffice.domain.exceptions import PersistenceError
from backoffice.infrastructure.persistence.models import Base


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine for ``url``.

    SQLite connections get foreign-key enforcement and may be shared
    across threads by the pool.
    """
    connect_args: dict[str, Any] = {}
    is_sqlite = url.startswith("sqlite")
    if is_sqlite:
        connect_args = {"check_same_thread": False, "timeout": 15}

    engine = create_engine(url, echo=echo, connect_args=connect_args)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, class_=Session, expire_on_commit=False)


def init_schema(engine: Engine) -> None:
    """Create every table that does not exist yet."""
    try:
        Base.metadata.create_all(engine)
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Database error: {exc}") from exc
    logger.info("Schema ready on {}", engine.url.render_as_string(hide_password=True))
