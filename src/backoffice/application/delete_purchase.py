"""Application service: Delete Purchase use case.

Removes the purchase and its line items.  Sold stock is NOT returned to
the products.
"""

from __future__ import annotations

from backoffice.application.dto import PurchaseDTO, purchase_to_dto
from backoffice.application.purchase_logger import PurchaseLogger
from backoffice.domain.exceptions import EntityNotFoundError
from backoffice.domain.repository.unit_of_work import UnitOfWork


class DeletePurchaseHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        purchase_logger: PurchaseLogger | None = None,
    ) -> None:
        self._uow = uow
        self._log = purchase_logger or PurchaseLogger()

    def handle(self, purchase_id: int) -> PurchaseDTO:
        """Delete a purchase and return it as it was."""
        with self._uow:
            purchase = self._uow.purchases.get_by_id(purchase_id)
            if purchase is None:
                raise EntityNotFoundError(f"Purchase #{purchase_id} not found")

            self._uow.purchases.delete(purchase_id)
            self._uow.commit()

        self._log.deleted(purchase_id)
        return purchase_to_dto(purchase)
