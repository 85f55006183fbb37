"""Uniform response envelope.

Every resource answers with the same four keys::

    {"message": str, "statusCode": int, "error": bool, "data": any}

``error_response`` is the single place where domain exceptions are mapped
to status codes.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from backoffice.domain.exceptions import (
    DomainException,
    DuplicateProductError,
    EmptyInputError,
    EntityNotFoundError,
    InsufficientStockError,
    InvalidLineError,
    PersistenceError,
    ProductNotFoundError,
    ValidationError,
)


@dataclass(frozen=True)
class ApiResponse:
    message: str
    status_code: int
    error: bool
    data: Any = field(default_factory=list)

    @staticmethod
    def success(message: str = "Success", status_code: int = 200, data: Any = None) -> ApiResponse:
        return ApiResponse(message, status_code, False, [] if data is None else data)

    @staticmethod
    def error(message: str, status_code: int, data: Any = None) -> ApiResponse:
        return ApiResponse(message, status_code, True, [] if data is None else data)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "statusCode": self.status_code,
            "error": self.error,
            "data": _plain(self.data),
        }


def error_response(exc: DomainException) -> ApiResponse:
    """Map a domain exception to its error envelope."""
    if isinstance(exc, EmptyInputError):
        return ApiResponse.error(str(exc), 400)
    if isinstance(exc, InvalidLineError):
        return ApiResponse.error(str(exc), 400, exc.errors)
    if isinstance(exc, DuplicateProductError):
        return ApiResponse.error(str(exc), 400, {"product_ids": exc.product_ids})
    if isinstance(exc, ProductNotFoundError):
        return ApiResponse.error(str(exc), 404, {"product_id": exc.product_id})
    if isinstance(exc, InsufficientStockError):
        return ApiResponse.error(
            str(exc),
            404,
            {
                "product_id": exc.product_id,
                "requested": exc.requested,
                "available": exc.available,
            },
        )
    if isinstance(exc, PersistenceError):
        return ApiResponse.error(str(exc), 500)
    if isinstance(exc, EntityNotFoundError):
        return ApiResponse.error(str(exc), 404)
    if isinstance(exc, ValidationError):
        return ApiResponse.error(str(exc), 400)
    return ApiResponse.error(str(exc), 400)


def _plain(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value
