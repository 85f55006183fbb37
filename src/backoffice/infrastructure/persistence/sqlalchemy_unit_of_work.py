"""SQLAlchemy implementation of the Unit of Work.

Each ``with`` block opens one session, i.e. one database transaction.
Errors raised by SQLAlchemy inside the block or on commit are rolled back
and re-raised as ``PersistenceError``.
"""

from __future__ import annotations

from types import TracebackType

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from backoffice.domain.exceptions import PersistenceError
from backoffice.domain.repository.unit_of_work import UnitOfWork
from backoffice.infrastructure.persistence.sqlalchemy_repositories import (
    SqlAlchemyBrandRepository,
    SqlAlchemyCategoryRepository,
    SqlAlchemyProductRepository,
    SqlAlchemyPurchaseRepository,
)


class SqlAlchemyUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        if self._session is not None:
            raise RuntimeError("Unit of work is already in progress")
        self._session = self._session_factory()
        self.products = SqlAlchemyProductRepository(self._session)
        self.purchases = SqlAlchemyPurchaseRepository(self._session)
        self.categories = SqlAlchemyCategoryRepository(self._session)
        self.brands = SqlAlchemyBrandRepository(self._session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            super().__exit__(exc_type, exc_val, exc_tb)
        finally:
            if self._session is not None:
                self._session.close()
            self._session = None

        if isinstance(exc_val, SQLAlchemyError):
            raise PersistenceError(f"Database error: {exc_val}") from exc_val

    def commit(self) -> None:
        try:
            self._active_session().commit()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Database error: {exc}") from exc

    def rollback(self) -> None:
        try:
            self._active_session().rollback()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Database error: {exc}") from exc

    def _active_session(self) -> Session:
        if self._session is None:
            raise RuntimeError("Unit of work used outside of a 'with' block")
        return self._session
