"""Purchase resource: index, store, show, update and destroy.

Framework-neutral: each method takes already-decoded input and returns an
``ApiResponse``.  A fresh unit of work is created for every call.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from backoffice.api.responses import ApiResponse, error_response
from backoffice.application.create_purchase import CreatePurchaseHandler
from backoffice.application.delete_purchase import DeletePurchaseHandler
from backoffice.application.dto import parse_purchase_request
from backoffice.application.show_purchase import ListPurchasesHandler, ShowPurchaseHandler
from backoffice.application.update_purchase import UpdatePurchaseHandler
from backoffice.domain.exceptions import DomainException, ValidationError
from backoffice.domain.repository.unit_of_work import UnitOfWork


class PurchaseResource:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def index(self) -> ApiResponse:
        try:
            purchases = ListPurchasesHandler(self._uow_factory()).handle()
        except DomainException as exc:
            return error_response(exc)
        return ApiResponse.success("Purchases loaded successfully", 200, purchases)

    def store(self, payload: Any) -> ApiResponse:
        """Create a purchase from ``{"productos": [{"producto_id", "cantidad"}]}``."""
        try:
            lines = parse_purchase_request(payload)
            dto = CreatePurchaseHandler(self._uow_factory()).handle(lines)
        except DomainException as exc:
            return error_response(exc)
        return ApiResponse.success("Purchase created successfully", 201, dto)

    def show(self, purchase_id: int) -> ApiResponse:
        try:
            dto = ShowPurchaseHandler(self._uow_factory()).handle(purchase_id)
        except DomainException as exc:
            return error_response(exc)
        return ApiResponse.success("Purchase loaded successfully", 200, dto)

    def update(self, purchase_id: int, payload: Any) -> ApiResponse:
        """Overwrite ``subtotal`` and ``total``; both are required."""
        try:
            subtotal, total = _required(payload, "subtotal", "total")
            dto = UpdatePurchaseHandler(self._uow_factory()).handle(
                purchase_id, subtotal=str(subtotal), total=str(total)
            )
        except DomainException as exc:
            return error_response(exc)
        return ApiResponse.success("Purchase updated successfully", 200, dto)

    def destroy(self, purchase_id: int) -> ApiResponse:
        try:
            dto = DeletePurchaseHandler(self._uow_factory()).handle(purchase_id)
        except DomainException as exc:
            return error_response(exc)
        return ApiResponse.success("Purchase deleted successfully", 200, dto)


def _required(payload: Any, *keys: str) -> list[Any]:
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be an object")
    missing = [key for key in keys if payload.get(key) in (None, "")]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")
    return [payload[key] for key in keys]
