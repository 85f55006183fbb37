"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the API/CLI and application layers without
exposing domain internals to the outside world.  Amounts are rendered as
two-decimal strings so they survive JSON encoding exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from backoffice.domain.exceptions import EmptyInputError, InvalidLineError
from backoffice.domain.model.classification import Brand, Category
from backoffice.domain.model.product import Product
from backoffice.domain.model.purchase import LineItemRequest, Purchase

ITEMS_KEY = "productos"
PRODUCT_KEY = "producto_id"
QUANTITY_KEY = "cantidad"


# --- Input ------------------------------------------------------------------


def parse_purchase_request(payload: Any) -> list[LineItemRequest]:
    """Build line item requests from a ``{"productos": [...]}`` body.

    Only the envelope shape is checked here; value types and ranges are
    checked by the PurchaseAggregator so every field error is reported
    together.
    """
    items = payload.get(ITEMS_KEY) if isinstance(payload, dict) else None
    if not items:
        raise EmptyInputError()
    if not isinstance(items, list):
        raise InvalidLineError({ITEMS_KEY: ["The productos field must be an array."]})

    errors: dict[str, list[str]] = {}
    lines: list[LineItemRequest] = []
    for index, raw in enumerate(items):
        if not isinstance(raw, dict):
            errors[f"{ITEMS_KEY}.{index}"] = ["Each product entry must be an object."]
            continue
        lines.append(
            LineItemRequest(product_id=raw.get(PRODUCT_KEY), quantity=raw.get(QUANTITY_KEY))
        )
    if errors:
        raise InvalidLineError(errors)
    return lines


# --- Output -----------------------------------------------------------------


@dataclass(frozen=True)
class PurchaseLineItemDTO:
    product_id: int
    unit_price: str  # formatted, e.g. "10.00"
    quantity: int
    subtotal: str


@dataclass(frozen=True)
class PurchaseDTO:
    """Output: a complete purchase as returned to the caller."""

    id: int
    subtotal: str
    total: str
    items: list[PurchaseLineItemDTO]
    created_at: str


@dataclass(frozen=True)
class ProductDTO:
    id: int
    name: str
    description: str
    price: str
    available_stock: int
    category_id: int | None
    brand_id: int | None


@dataclass(frozen=True)
class ClassificationDTO:
    """Output: a category or a brand."""

    id: int
    name: str
    description: str


# --- Mapping ----------------------------------------------------------------


def purchase_to_dto(purchase: Purchase) -> PurchaseDTO:
    return PurchaseDTO(
        id=purchase.id,  # type: ignore[arg-type]
        subtotal=str(purchase.subtotal),
        total=str(purchase.total),
        items=[
            PurchaseLineItemDTO(
                product_id=item.product_id,
                unit_price=str(item.unit_price),
                quantity=item.quantity.value,
                subtotal=str(item.subtotal),
            )
            for item in purchase.line_items
        ],
        created_at=purchase.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        description=product.description,
        price=str(product.price),
        available_stock=product.available_stock,
        category_id=product.category_id,
        brand_id=product.brand_id,
    )


def classification_to_dto(entity: Category | Brand) -> ClassificationDTO:
    return ClassificationDTO(
        id=entity.id,  # type: ignore[arg-type]
        name=entity.name,
        description=entity.description,
    )
