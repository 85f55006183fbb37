"""Application service: Delete Product use case.

Purchases keep their line items: a line item holds a snapshot of the
product id and price, not a live reference.
"""

from __future__ import annotations

from backoffice.application.dto import ProductDTO, product_to_dto
from backoffice.domain.exceptions import EntityNotFoundError
from backoffice.domain.repository.unit_of_work import UnitOfWork


class DeleteProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: int) -> ProductDTO:
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product #{product_id} not found")

            self._uow.products.delete(product_id)
            self._uow.commit()

        return product_to_dto(product)
