"""SQLAlchemy-backed implementations of the domain repositories.

Every repository works on the session of the unit of work that created it
and never commits.  Reads use ``populate_existing`` so rows changed by a
bulk UPDATE earlier in the same session are reloaded, not served stale
from the identity map.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import timezone
from decimal import Decimal
from typing import Generic, TypeVar

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from backoffice.domain.model.classification import Brand, Category
from backoffice.domain.model.product import Product
from backoffice.domain.model.purchase import Purchase, PurchaseLineItem
from backoffice.domain.model.value_objects import MAX_INTEGER, Money, Quantity
from backoffice.domain.repository.classification_repository import (
    BrandRepository,
    CategoryRepository,
)
from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.domain.repository.purchase_repository import PurchaseRepository
from backoffice.infrastructure.persistence.models import (
    BrandRow,
    CategoryRow,
    ProductRow,
    PurchaseItemRow,
    PurchaseRow,
)


def _money(value: Decimal) -> Money:
    return Money(Decimal(value))


def _storable(entity_id: int) -> bool:
    """Ids outside the INTEGER column range cannot name a stored row."""
    return abs(entity_id) <= MAX_INTEGER


# --- Products ----------------------------------------------------------------


class SqlAlchemyProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, product_id: int) -> Product | None:
        if not _storable(product_id):
            return None
        row = self._session.get(ProductRow, product_id, populate_existing=True)
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Product]:
        return self._select()

    def list_by_category(self, category_id: int) -> list[Product]:
        return self._select(ProductRow.category_id == category_id)

    def list_by_brand(self, brand_id: int) -> list[Product]:
        return self._select(ProductRow.brand_id == brand_id)

    def save(self, product: Product) -> None:
        row = None
        if product.id is not None:
            row = self._session.get(ProductRow, product.id)
        if row is None:
            row = ProductRow(id=product.id)
            self._session.add(row)

        row.name = product.name
        row.description = product.description
        row.price = product.price.quantized()
        row.available_stock = product.available_stock
        row.category_id = product.category_id
        row.brand_id = product.brand_id
        self._session.flush()
        product.id = row.id

    def delete(self, product_id: int) -> None:
        if not _storable(product_id):
            return
        row = self._session.get(ProductRow, product_id)
        if row is not None:
            self._session.delete(row)
            self._session.flush()

    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        if not (_storable(product_id) and _storable(quantity)):
            return False
        stmt = (
            update(ProductRow)
            .where(ProductRow.id == product_id)
            .where(ProductRow.available_stock >= quantity)
            .values(available_stock=ProductRow.available_stock - quantity)
            .execution_options(synchronize_session=False)
        )
        result = self._session.execute(stmt)
        return result.rowcount == 1  # type: ignore[attr-defined]

    # --- Mapping --------------------------------------------------------------

    def _select(self, *criteria) -> list[Product]:
        stmt = (
            select(ProductRow)
            .where(*criteria)
            .order_by(ProductRow.id)
            .execution_options(populate_existing=True)
        )
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    @staticmethod
    def _to_domain(row: ProductRow) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            description=row.description,
            price=_money(row.price),
            available_stock=row.available_stock,
            category_id=row.category_id,
            brand_id=row.brand_id,
        )


# --- Purchases ---------------------------------------------------------------


class SqlAlchemyPurchaseRepository(PurchaseRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, purchase: Purchase) -> None:
        row = PurchaseRow(
            subtotal=purchase.subtotal.quantized(),
            total=purchase.total.quantized(),
            created_at=purchase.created_at,
        )
        self._session.add(row)
        self._session.flush()
        purchase.id = row.id

    def add_line_items(
        self, purchase_id: int, items: Sequence[PurchaseLineItem]
    ) -> None:
        self._session.add_all(
            [
                PurchaseItemRow(
                    purchase_id=purchase_id,
                    position=position,
                    product_id=item.product_id,
                    unit_price=item.unit_price.quantized(),
                    quantity=item.quantity.value,
                    subtotal=item.subtotal.quantized(),
                )
                for position, item in enumerate(items)
            ]
        )
        self._session.flush()

    def get_by_id(self, purchase_id: int) -> Purchase | None:
        if not _storable(purchase_id):
            return None
        row = self._session.get(PurchaseRow, purchase_id, populate_existing=True)
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Purchase]:
        stmt = (
            select(PurchaseRow)
            .order_by(PurchaseRow.id)
            .execution_options(populate_existing=True)
        )
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    def save(self, purchase: Purchase) -> None:
        row = self._session.get(PurchaseRow, purchase.id)
        if row is None:
            raise ValueError(f"Purchase #{purchase.id} has not been added")
        row.subtotal = purchase.subtotal.quantized()
        row.total = purchase.total.quantized()
        self._session.flush()

    def delete(self, purchase_id: int) -> None:
        if not _storable(purchase_id):
            return
        row = self._session.get(PurchaseRow, purchase_id)
        if row is not None:
            self._session.delete(row)
            self._session.flush()

    @staticmethod
    def _to_domain(row: PurchaseRow) -> Purchase:
        created_at = row.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Purchase(
            id=row.id,
            subtotal=_money(row.subtotal),
            total=_money(row.total),
            line_items=[
                PurchaseLineItem(
                    product_id=item.product_id,
                    unit_price=_money(item.unit_price),
                    quantity=Quantity(item.quantity),
                )
                for item in row.items
            ],
            created_at=created_at,
        )


# --- Categories & brands -----------------------------------------------------

RowT = TypeVar("RowT", CategoryRow, BrandRow)
EntityT = TypeVar("EntityT", Category, Brand)


class _ClassificationRepository(Generic[RowT, EntityT]):
    row_type: type[RowT]
    entity_type: type[EntityT]

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, entity_id: int) -> EntityT | None:
        if not _storable(entity_id):
            return None
        row = self._session.get(self.row_type, entity_id, populate_existing=True)
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[EntityT]:
        stmt = select(self.row_type).order_by(self.row_type.id)
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    def save(self, entity: EntityT) -> None:
        row = None
        if entity.id is not None:
            row = self._session.get(self.row_type, entity.id)
        if row is None:
            row = self.row_type(id=entity.id)
            self._session.add(row)
        row.name = entity.name
        row.description = entity.description
        self._session.flush()
        entity.id = row.id

    def delete(self, entity_id: int) -> None:
        if not _storable(entity_id):
            return
        row = self._session.get(self.row_type, entity_id)
        if row is not None:
            self._session.delete(row)
            self._session.flush()

    def _to_domain(self, row: RowT) -> EntityT:
        return self.entity_type(id=row.id, name=row.name, description=row.description)


class SqlAlchemyCategoryRepository(
    _ClassificationRepository[CategoryRow, Category], CategoryRepository
):
    row_type = CategoryRow
    entity_type = Category


class SqlAlchemyBrandRepository(
    _ClassificationRepository[BrandRow, Brand], BrandRepository
):
    row_type = BrandRow
    entity_type = Brand
