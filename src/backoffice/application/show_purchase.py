"""Application service: Show / List Purchases use cases (queries)."""

from __future__ import annotations

from backoffice.application.dto import PurchaseDTO, purchase_to_dto
from backoffice.domain.exceptions import EntityNotFoundError
from backoffice.domain.repository.unit_of_work import UnitOfWork


class ShowPurchaseHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, purchase_id: int) -> PurchaseDTO:
        with self._uow:
            purchase = self._uow.purchases.get_by_id(purchase_id)
            if purchase is None:
                raise EntityNotFoundError(f"Purchase #{purchase_id} not found")
            return purchase_to_dto(purchase)


class ListPurchasesHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[PurchaseDTO]:
        with self._uow:
            return [purchase_to_dto(p) for p in self._uow.purchases.list_all()]
