"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the API and CLI layers can catch them uniformly and turn them into
user-facing messages.  Purchase workflow failures share a common
``PurchaseError`` base so callers can tell them apart from catalog errors.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


# ---------------------------------------------------------------------------
# Purchase workflow
# ---------------------------------------------------------------------------


class PurchaseError(DomainException):
    """Base class for failures of the purchase-creation workflow."""


class EmptyInputError(PurchaseError, ValidationError):
    """The purchase request contained no line items."""

    def __init__(self, message: str = "No products were provided") -> None:
        super().__init__(message)


class InvalidLineError(PurchaseError, ValidationError):
    """One or more line items failed shape, type or existence checks.

    ``errors`` maps a field path (``productos.0.cantidad``) to the list of
    problems found for that field.
    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__("Invalid data in the product list")
        self.errors = errors


class DuplicateProductError(PurchaseError, ValidationError):
    """Two or more line items reference the same product."""

    def __init__(self, product_ids: list[int]) -> None:
        super().__init__("Duplicate products are not allowed in a purchase")
        self.product_ids = product_ids


class ProductNotFoundError(PurchaseError, EntityNotFoundError):
    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product #{product_id} not found")
        self.product_id = product_id


class InsufficientStockError(PurchaseError):
    """A line item asked for more units than the product has in stock."""

    def __init__(self, product_id: int, requested: int, available: int) -> None:
        super().__init__(
            f"Not enough stock for product #{product_id} "
            f"(need {requested}, have {available} available)"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class PersistenceError(PurchaseError):
    """The storage layer failed while running or committing a unit of work."""
