"""Application service: List / Show Products use cases (queries)."""

from __future__ import annotations

from backoffice.application.dto import ProductDTO, product_to_dto
from backoffice.domain.exceptions import EntityNotFoundError, ValidationError
from backoffice.domain.repository.unit_of_work import UnitOfWork


class ListProductsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        category_id: int | None = None,
        brand_id: int | None = None,
    ) -> list[ProductDTO]:
        """List the catalog, or the products of one category or brand."""
        if category_id is not None and brand_id is not None:
            raise ValidationError("Filter by category or by brand, not both")

        with self._uow:
            if category_id is not None:
                if self._uow.categories.get_by_id(category_id) is None:
                    raise EntityNotFoundError(f"Category #{category_id} not found")
                products = self._uow.products.list_by_category(category_id)
            elif brand_id is not None:
                if self._uow.brands.get_by_id(brand_id) is None:
                    raise EntityNotFoundError(f"Brand #{brand_id} not found")
                products = self._uow.products.list_by_brand(brand_id)
            else:
                products = self._uow.products.list_all()

            return [product_to_dto(p) for p in products]


class ShowProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: int) -> ProductDTO:
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product #{product_id} not found")
            return product_to_dto(product)
