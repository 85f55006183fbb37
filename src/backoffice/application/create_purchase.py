"""Application service: Create Purchase use case.

Owns the transaction boundary of the purchase workflow: opens the unit of
work, lets the PurchaseAggregator do the domain work inside it, and commits
only if every line went through.  Any failure rolls back every stock
decrement made so far.
"""

from __future__ import annotations

from collections.abc import Sequence

from backoffice.application.dto import PurchaseDTO, purchase_to_dto
from backoffice.application.purchase_logger import PurchaseLogger
from backoffice.domain.exceptions import PurchaseError
from backoffice.domain.model.purchase import LineItemRequest
from backoffice.domain.repository.unit_of_work import UnitOfWork
from backoffice.domain.service.purchase_aggregator import PurchaseAggregator


class CreatePurchaseHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        purchase_logger: PurchaseLogger | None = None,
    ) -> None:
        self._uow = uow
        self._log = purchase_logger or PurchaseLogger()

    def handle(self, lines: Sequence[LineItemRequest]) -> PurchaseDTO:
        try:
            with self._uow:
                purchase = PurchaseAggregator(self._uow).create_purchase(lines)
                self._uow.commit()
        except PurchaseError as exc:
            self._log.rejected(len(lines), exc)
            raise

        dto = purchase_to_dto(purchase)
        self._log.created(dto)
        return dto
