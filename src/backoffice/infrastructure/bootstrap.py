"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from sqlalchemy import Engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from backoffice.infrastructure.config import Settings, load_settings
from backoffice.infrastructure.logging_setup import configure_logging
from backoffice.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
    init_schema,
)
from backoffice.infrastructure.persistence.sqlalchemy_unit_of_work import (
    SqlAlchemyUnitOfWork,
)


@lru_cache(maxsize=1)
def settings() -> Settings:
    current = load_settings()
    configure_logging(current.log_level)
    return current


@lru_cache(maxsize=1)
def engine() -> Engine:
    current = settings()
    url = make_url(current.database_url)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_db_engine(current.database_url, echo=current.sql_echo)


@lru_cache(maxsize=1)
def session_factory() -> sessionmaker[Session]:
    current = engine()
    init_schema(current)
    return create_session_factory(current)


def unit_of_work() -> SqlAlchemyUnitOfWork:
    """A fresh unit of work; use one per request."""
    return SqlAlchemyUnitOfWork(session_factory())


def create_schema() -> None:
    init_schema(engine())


def reset() -> None:
    """Forget cached settings and engines (used when the environment changes)."""
    if engine.cache_info().currsize:
        engine().dispose()
    session_factory.cache_clear()
    engine.cache_clear()
    settings.cache_clear()
