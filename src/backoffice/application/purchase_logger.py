"""Logging for the purchase workflow.

Keeps message wording and bound fields out of the handlers.
"""

from __future__ import annotations

import loguru
from loguru import logger

from backoffice.application.dto import PurchaseDTO
from backoffice.domain.exceptions import PersistenceError, PurchaseError


class PurchaseLogger:

    def __init__(self, logger_instance: loguru.Logger = logger) -> None:
        self._logger = logger_instance

    def created(self, dto: PurchaseDTO) -> None:
        self._logger.bind(purchase_id=dto.id, lines=len(dto.items), total=dto.total).info(
            "Purchase #{} created: {} line(s), total {}",
            dto.id,
            len(dto.items),
            dto.total,
        )

    def rejected(self, line_count: int, exc: PurchaseError) -> None:
        if isinstance(exc, PersistenceError):
            self._logger.bind(lines=line_count).opt(exception=exc).error(
                "Purchase with {} line(s) failed to persist: {}", line_count, exc
            )
            return
        self._logger.bind(lines=line_count, reason=type(exc).__name__).warning(
            "Purchase with {} line(s) rejected: {}", line_count, exc
        )

    def amounts_overwritten(self, purchase_id: int, subtotal: str, total: str) -> None:
        self._logger.bind(purchase_id=purchase_id).info(
            "Purchase #{} amounts overwritten: subtotal={} total={}",
            purchase_id,
            subtotal,
            total,
        )

    def deleted(self, purchase_id: int) -> None:
        self._logger.bind(purchase_id=purchase_id).info("Purchase #{} deleted", purchase_id)
