"""Product aggregate.

Products live independently of purchases. They have their own lifecycle:
prices change, stock is replenished or sold, products are added and
removed from the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass

from backoffice.domain.exceptions import ValidationError
from backoffice.domain.model.value_objects import MAX_INTEGER, Money


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``price`` is never negative (enforced by ``Money``)
    - ``available_stock`` is never negative
    """

    id: int | None
    name: str
    price: Money
    available_stock: int = 0
    description: str = ""
    category_id: int | None = None
    brand_id: int | None = None

    def __post_init__(self) -> None:
        _check_stock(self.available_stock)

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing purchases because line items
        capture a price snapshot at purchase time.
        """
        self.price = new_price

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        self.name = name.strip()

    def describe(self, description: str) -> None:
        self.description = description.strip()

    def set_stock(self, quantity: int) -> None:
        _check_stock(quantity)
        self.available_stock = quantity


def _check_stock(quantity: int) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool):
        raise ValidationError(
            f"Stock must be an integer, got {type(quantity).__name__}"
        )
    if quantity < 0:
        raise ValidationError("Stock cannot be negative")
    if quantity > MAX_INTEGER:
        raise ValidationError(f"Stock cannot exceed {MAX_INTEGER}")
