"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory)
live in the infrastructure layer and the test suite.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from backoffice.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, ordered by ID."""

    @abstractmethod
    def list_by_category(self, category_id: int) -> list[Product]:
        """Return the products filed under a category."""

    @abstractmethod
    def list_by_brand(self, brand_id: int) -> list[Product]:
        """Return the products of a brand."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product, assigning an ID to new ones."""

    @abstractmethod
    def delete(self, product_id: int) -> None:
        """Remove a product from the catalog."""

    @abstractmethod
    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        """Atomically remove ``quantity`` units from a product's stock.

        The check and the write happen as one conditional update: stock is
        decremented only if at least ``quantity`` units are available at
        the moment of the write.  Returns False, leaving stock untouched,
        when the product is missing or has too little stock.
        """
