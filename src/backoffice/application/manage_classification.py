"""Application services: Category and Brand use cases.

Categories and brands behave the same way, so one set of handlers serves
both; ``ClassificationKind`` selects the repository and the product filter.
"""

from __future__ import annotations

from enum import Enum

from backoffice.application.dto import ClassificationDTO, classification_to_dto
from backoffice.domain.exceptions import EntityNotFoundError, ValidationError
from backoffice.domain.model.classification import Brand, Category
from backoffice.domain.model.product import Product
from backoffice.domain.repository.classification_repository import (
    BrandRepository,
    CategoryRepository,
)
from backoffice.domain.repository.unit_of_work import UnitOfWork


class ClassificationKind(Enum):
    CATEGORY = "Category"
    BRAND = "Brand"

    def repository(self, uow: UnitOfWork) -> CategoryRepository | BrandRepository:
        return uow.categories if self is ClassificationKind.CATEGORY else uow.brands

    def products(self, uow: UnitOfWork, entity_id: int) -> list[Product]:
        if self is ClassificationKind.CATEGORY:
            return uow.products.list_by_category(entity_id)
        return uow.products.list_by_brand(entity_id)

    def build(self, name: str, description: str) -> Category | Brand:
        if self is ClassificationKind.CATEGORY:
            return Category.create(name, description)
        return Brand.create(name, description)


class _ClassificationHandler:

    def __init__(self, uow: UnitOfWork, kind: ClassificationKind) -> None:
        self._uow = uow
        self._kind = kind

    def _get_or_raise(self, entity_id: int) -> Category | Brand:
        entity = self._kind.repository(self._uow).get_by_id(entity_id)
        if entity is None:
            raise EntityNotFoundError(f"{self._kind.value} #{entity_id} not found")
        return entity


class AddClassificationHandler(_ClassificationHandler):

    def handle(self, name: str, description: str = "") -> ClassificationDTO:
        entity = self._kind.build(name, description)
        with self._uow:
            self._kind.repository(self._uow).save(entity)  # type: ignore[arg-type]
            self._uow.commit()
        return classification_to_dto(entity)


class ListClassificationsHandler(_ClassificationHandler):

    def handle(self) -> list[ClassificationDTO]:
        with self._uow:
            return [
                classification_to_dto(e)
                for e in self._kind.repository(self._uow).list_all()
            ]


class ShowClassificationHandler(_ClassificationHandler):

    def handle(self, entity_id: int) -> ClassificationDTO:
        with self._uow:
            return classification_to_dto(self._get_or_raise(entity_id))


class UpdateClassificationHandler(_ClassificationHandler):

    def handle(
        self,
        entity_id: int,
        name: str | None = None,
        description: str | None = None,
    ) -> ClassificationDTO:
        """Rename and/or redescribe a category or brand."""
        if name is None and description is None:
            raise ValidationError("Nothing to update: give a new name or description")

        with self._uow:
            entity = self._get_or_raise(entity_id)
            if name is not None:
                entity.rename(name)
            if description is not None:
                entity.describe(description)
            self._kind.repository(self._uow).save(entity)  # type: ignore[arg-type]
            self._uow.commit()
        return classification_to_dto(entity)


class DeleteClassificationHandler(_ClassificationHandler):

    def handle(self, entity_id: int) -> ClassificationDTO:
        """Delete a category or brand that no product refers to."""
        with self._uow:
            entity = self._get_or_raise(entity_id)
            in_use = self._kind.products(self._uow, entity_id)
            if in_use:
                raise ValidationError(
                    f"{self._kind.value} #{entity_id} still has "
                    f"{len(in_use)} product(s)"
                )
            self._kind.repository(self._uow).delete(entity_id)
            self._uow.commit()
        return classification_to_dto(entity)
