"""Purchase aggregate.

The Purchase is an aggregate root that owns its line items.  Line items are
created once, with a price snapshot, and never change afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from backoffice.domain.exceptions import ValidationError
from backoffice.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class LineItemRequest:
    """Input: one (product, quantity) pair as the caller submitted it.

    Values are carried as received; ``PurchaseAggregator`` checks their
    types and ranges before anything is read or written.
    """

    product_id: int
    quantity: int


@dataclass(frozen=True)
class PurchaseLineItem:
    """One product bought in a purchase, priced at purchase time."""

    product_id: int
    unit_price: Money  # snapshot, not a live join on the product
    quantity: Quantity

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Purchase:
    """Aggregate root for purchases.

    ``subtotal`` and ``total`` are stored separately for schema
    compatibility.  No discounts or taxes are modelled, so ``Purchase.create``
    always sets both to the sum of the line subtotals.  After creation they
    can only be overwritten wholesale via ``overwrite_amounts``; nothing
    recomputes them from the line items.
    """

    id: int | None
    subtotal: Money
    total: Money
    line_items: list[PurchaseLineItem] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW purchases only) --------------------------------

    @staticmethod
    def create(line_items: list[PurchaseLineItem]) -> Purchase:
        if not line_items:
            raise ValidationError("Purchase must contain at least one item")

        purchase = Purchase(id=None, subtotal=Money.zero(), total=Money.zero(),
                            line_items=list(line_items))
        purchase.subtotal = purchase.total = purchase.line_total
        return purchase

    # --- Mutation -------------------------------------------------------------

    def overwrite_amounts(self, subtotal: Money, total: Money) -> None:
        """Replace the stored amounts as given, without recomputation."""
        self.subtotal = subtotal
        self.total = total

    # --- Computed properties --------------------------------------------------

    @property
    def line_total(self) -> Money:
        """Sum of the line subtotals, independent of the stored amounts."""
        result = Money.zero()
        for item in self.line_items:
            result = result + item.subtotal
        return result

    @property
    def product_ids(self) -> list[int]:
        return [item.product_id for item in self.line_items]
