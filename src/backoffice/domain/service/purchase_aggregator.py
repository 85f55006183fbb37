"""Domain service: Purchase Aggregator.

Turns a list of requested line items into a persisted Purchase: validates
the request, takes the requested units out of stock, prices every line at
the current product price and records the purchase with its line items.

The aggregator works inside a unit of work opened by its caller and never
commits.  Stock is taken with a conditional decrement, so two purchases
racing for the same product can never drive stock below zero, and any
failure leaves the whole unit of work to be rolled back.
"""

from __future__ import annotations

from collections.abc import Sequence

from backoffice.domain.exceptions import (
    DuplicateProductError,
    EmptyInputError,
    InsufficientStockError,
    InvalidLineError,
    ProductNotFoundError,
)
from backoffice.domain.model.product import Product
from backoffice.domain.model.purchase import (
    LineItemRequest,
    Purchase,
    PurchaseLineItem,
)
from backoffice.domain.model.value_objects import MAX_INTEGER, Quantity
from backoffice.domain.repository.unit_of_work import UnitOfWork

PRODUCT_FIELD = "producto_id"
QUANTITY_FIELD = "cantidad"


class PurchaseAggregator:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def create_purchase(self, lines: Sequence[LineItemRequest]) -> Purchase:
        """Create a purchase from ``lines``, all or nothing.

        Checks run in order and the first failure wins:
          1. the list is not empty                   -> EmptyInputError
          2. every line is well formed and points to
             an existing product                     -> InvalidLineError
          3. no product appears twice                -> DuplicateProductError

        Then, per line in input order, the product is loaded, its stock is
        decremented and the line is priced.  Raises ProductNotFoundError or
        InsufficientStockError if that fails for any line.
        """
        if not lines:
            raise EmptyInputError()
        self._check_lines(lines)
        self._check_duplicates(lines)

        line_items = [self._take_stock(line) for line in lines]

        purchase = Purchase.create(line_items)
        self._uow.purchases.add(purchase)
        self._uow.purchases.add_line_items(
            purchase.id, purchase.line_items  # type: ignore[arg-type]
        )
        return purchase

    # --- Validation -----------------------------------------------------------

    def _check_lines(self, lines: Sequence[LineItemRequest]) -> None:
        errors: dict[str, list[str]] = {}

        for index, line in enumerate(lines):
            product_field = f"productos.{index}.{PRODUCT_FIELD}"
            quantity_field = f"productos.{index}.{QUANTITY_FIELD}"

            if line.product_id is None:
                errors.setdefault(product_field, []).append(
                    "The product id field is required."
                )
            elif not _is_integer(line.product_id):
                errors.setdefault(product_field, []).append(
                    "The product id must be an integer."
                )
            elif (
                abs(line.product_id) > MAX_INTEGER
                or self._uow.products.get_by_id(line.product_id) is None
            ):
                errors.setdefault(product_field, []).append(
                    "The selected product id is invalid."
                )

            if line.quantity is None:
                errors.setdefault(quantity_field, []).append(
                    "The quantity field is required."
                )
            elif not _is_integer(line.quantity):
                errors.setdefault(quantity_field, []).append(
                    "The quantity must be an integer."
                )
            elif line.quantity < 1:
                errors.setdefault(quantity_field, []).append(
                    "The quantity must be at least 1."
                )
            elif line.quantity > MAX_INTEGER:
                errors.setdefault(quantity_field, []).append(
                    f"The quantity may not be greater than {MAX_INTEGER}."
                )

        if errors:
            raise InvalidLineError(errors)

    @staticmethod
    def _check_duplicates(lines: Sequence[LineItemRequest]) -> None:
        seen: set[int] = set()
        duplicates: list[int] = []
        for line in lines:
            if line.product_id in seen and line.product_id not in duplicates:
                duplicates.append(line.product_id)
            seen.add(line.product_id)
        if duplicates:
            raise DuplicateProductError(duplicates)

    # --- Stock ----------------------------------------------------------------

    def _take_stock(self, line: LineItemRequest) -> PurchaseLineItem:
        product = self._uow.products.get_by_id(line.product_id)
        if product is None:
            raise ProductNotFoundError(line.product_id)

        if product.available_stock < line.quantity:
            raise _insufficient(product, line.quantity)

        # The read above may be stale; the conditional write is what counts.
        if not self._uow.products.decrement_stock(product.id, line.quantity):  # type: ignore[arg-type]
            current = self._uow.products.get_by_id(line.product_id)
            if current is None:
                raise ProductNotFoundError(line.product_id)
            raise _insufficient(current, line.quantity)

        return PurchaseLineItem(
            product_id=product.id,  # type: ignore[arg-type]
            unit_price=product.price,
            quantity=Quantity(line.quantity),
        )


def _insufficient(product: Product, requested: int) -> InsufficientStockError:
    return InsufficientStockError(
        product_id=product.id,  # type: ignore[arg-type]
        requested=requested,
        available=product.available_stock,
    )


def _is_integer(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
