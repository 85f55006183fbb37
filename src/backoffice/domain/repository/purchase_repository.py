"""Abstract repository for Purchase aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from backoffice.domain.model.purchase import Purchase, PurchaseLineItem


class PurchaseRepository(ABC):

    @abstractmethod
    def add(self, purchase: Purchase) -> None:
        """Insert a new purchase header and assign its ID.

        Line items are written separately with ``add_line_items``.
        """

    @abstractmethod
    def add_line_items(
        self, purchase_id: int, items: Sequence[PurchaseLineItem]
    ) -> None:
        """Attach all line items of a purchase in one call."""

    @abstractmethod
    def get_by_id(self, purchase_id: int) -> Purchase | None:
        """Return a purchase with its line items, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Purchase]:
        """Return every purchase, ordered by ID."""

    @abstractmethod
    def save(self, purchase: Purchase) -> None:
        """Persist the header amounts of an existing purchase."""

    @abstractmethod
    def delete(self, purchase_id: int) -> None:
        """Remove a purchase and its line items."""
