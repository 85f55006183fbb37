"""Application service: Add Product use case."""

from __future__ import annotations

from backoffice.application.dto import ProductDTO, product_to_dto
from backoffice.domain.exceptions import EntityNotFoundError, ValidationError
from backoffice.domain.model.product import Product
from backoffice.domain.model.value_objects import Money
from backoffice.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        name: str,
        price: str,
        stock: int = 0,
        description: str = "",
        category_id: int | None = None,
        brand_id: int | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        product = Product(
            id=None,
            name=name.strip(),
            price=Money.of(price),
            available_stock=stock,
            description=description.strip(),
            category_id=category_id,
            brand_id=brand_id,
        )

        with self._uow:
            if category_id is not None and self._uow.categories.get_by_id(category_id) is None:
                raise EntityNotFoundError(f"Category #{category_id} not found")
            if brand_id is not None and self._uow.brands.get_by_id(brand_id) is None:
                raise EntityNotFoundError(f"Brand #{brand_id} not found")

            self._uow.products.save(product)
            self._uow.commit()

        return product_to_dto(product)
