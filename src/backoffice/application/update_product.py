"""Application service: Update Product use case."""

from __future__ import annotations

from backoffice.application.dto import ProductDTO, product_to_dto
from backoffice.domain.exceptions import EntityNotFoundError, ValidationError
from backoffice.domain.model.value_objects import Money
from backoffice.domain.repository.unit_of_work import UnitOfWork


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        product_id: int,
        new_price: str | None = None,
        new_stock: int | None = None,
        new_name: str | None = None,
        new_description: str | None = None,
        new_category_id: int | None = None,
        new_brand_id: int | None = None,
    ) -> ProductDTO:
        """Update the given fields of a product; ``None`` keeps a field as is.

        A price change does NOT affect any existing purchases; their line
        items captured a price snapshot at purchase time.
        """
        changes = (new_price, new_stock, new_name, new_description,
                   new_category_id, new_brand_id)
        if all(value is None for value in changes):
            raise ValidationError("Nothing to update: give at least one new value")

        price = Money.of(new_price) if new_price is not None else None

        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product #{product_id} not found")

            if new_category_id is not None:
                if self._uow.categories.get_by_id(new_category_id) is None:
                    raise EntityNotFoundError(f"Category #{new_category_id} not found")
                product.category_id = new_category_id
            if new_brand_id is not None:
                if self._uow.brands.get_by_id(new_brand_id) is None:
                    raise EntityNotFoundError(f"Brand #{new_brand_id} not found")
                product.brand_id = new_brand_id

            if new_name is not None:
                product.rename(new_name)
            if new_description is not None:
                product.describe(new_description)
            if price is not None:
                product.update_price(price)
            if new_stock is not None:
                product.set_stock(new_stock)

            self._uow.products.save(product)
            self._uow.commit()

        return product_to_dto(product)
