"""Application service: Update Purchase use case.

Overwrites the stored subtotal and total of a purchase with the given
values.  Nothing is recomputed from the line items and stock is not
touched; the two amounts are taken as the caller provides them.
"""

from __future__ import annotations

from backoffice.application.dto import PurchaseDTO, purchase_to_dto
from backoffice.application.purchase_logger import PurchaseLogger
from backoffice.domain.exceptions import EntityNotFoundError
from backoffice.domain.model.value_objects import Money
from backoffice.domain.repository.unit_of_work import UnitOfWork


class UpdatePurchaseHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        purchase_logger: PurchaseLogger | None = None,
    ) -> None:
        self._uow = uow
        self._log = purchase_logger or PurchaseLogger()

    def handle(self, purchase_id: int, subtotal: str, total: str) -> PurchaseDTO:
        new_subtotal = Money.of(subtotal)
        new_total = Money.of(total)

        with self._uow:
            purchase = self._uow.purchases.get_by_id(purchase_id)
            if purchase is None:
                raise EntityNotFoundError(f"Purchase #{purchase_id} not found")

            purchase.overwrite_amounts(new_subtotal, new_total)
            self._uow.purchases.save(purchase)
            self._uow.commit()

        self._log.amounts_overwritten(purchase_id, str(new_subtotal), str(new_total))
        return purchase_to_dto(purchase)
