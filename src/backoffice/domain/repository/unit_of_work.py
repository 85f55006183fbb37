"""Abstract Unit of Work.

A unit of work is one transaction over all repositories.  Use it as a
context manager; nothing is persisted unless ``commit()`` is called inside
the block, and leaving the block because of an exception rolls every
change back::

    with uow:
        aggregator = PurchaseAggregator(uow)
        purchase = aggregator.create_purchase(lines)
        uow.commit()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from backoffice.domain.repository.classification_repository import (
    BrandRepository,
    CategoryRepository,
)
from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.domain.repository.purchase_repository import PurchaseRepository


class UnitOfWork(ABC):

    products: ProductRepository
    purchases: PurchaseRepository
    categories: CategoryRepository
    brands: BrandRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        # Uncommitted work never survives the block.
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change of this unit of work visible at once."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted change of this unit of work."""
