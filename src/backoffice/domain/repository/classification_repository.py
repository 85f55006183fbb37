"""Abstract repositories for categories and brands."""

from __future__ import annotations

from abc import ABC, abstractmethod

from backoffice.domain.model.classification import Brand, Category


class CategoryRepository(ABC):

    @abstractmethod
    def get_by_id(self, category_id: int) -> Category | None:
        """Return a category by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Category]:
        """Return every category, ordered by ID."""

    @abstractmethod
    def save(self, category: Category) -> None:
        """Persist a new or updated category, assigning an ID to new ones."""

    @abstractmethod
    def delete(self, category_id: int) -> None:
        """Remove a category."""


class BrandRepository(ABC):

    @abstractmethod
    def get_by_id(self, brand_id: int) -> Brand | None:
        """Return a brand by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Brand]:
        """Return every brand, ordered by ID."""

    @abstractmethod
    def save(self, brand: Brand) -> None:
        """Persist a new or updated brand, assigning an ID to new ones."""

    @abstractmethod
    def delete(self, brand_id: int) -> None:
        """Remove a brand."""
