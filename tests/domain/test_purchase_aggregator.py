"""Unit tests for the PurchaseAggregator domain service."""

import pytest

from backoffice.domain.exceptions import (
    DuplicateProductError,
    EmptyInputError,
    InsufficientStockError,
    InvalidLineError,
    ProductNotFoundError,
)
from backoffice.domain.model.product import Product
from backoffice.domain.model.purchase import LineItemRequest
from backoffice.domain.model.value_objects import Money
from backoffice.domain.service.purchase_aggregator import PurchaseAggregator
from tests.fakes import FakeProductRepository, FakeStore, FakeUnitOfWork


def _store(*specs: tuple[int, str, int]) -> FakeStore:
    """Create a store with (product_id, price, stock) tuples."""
    if not specs:
        specs = ((1, "10.00", 5), (2, "2.50", 100))
    return FakeStore(
        products=[
            Product(id=pid, name=f"P{pid}", price=Money.of(price), available_stock=stock)
            for pid, price, stock in specs
        ]
    )


def _buy(store: FakeStore, *lines: tuple):
    """Run the aggregator on (product_id, quantity) pairs and commit."""
    uow = FakeUnitOfWork(store)
    with uow:
        purchase = PurchaseAggregator(uow).create_purchase(
            [LineItemRequest(pid, qty) for pid, qty in lines]
        )
        uow.commit()
    return purchase


class TestCreatePurchase:

    def test_example_purchase(self):
        store = _store()
        purchase = _buy(store, (1, 2), (2, 4))

        assert purchase.total == Money.of("30.00")
        assert purchase.subtotal == Money.of("30.00")
        assert store.stock() == {1: 3, 2: 96}

    def test_line_items_snapshot_price_and_subtotal(self):
        store = _store()
        purchase = _buy(store, (1, 2), (2, 4))

        first, second = purchase.line_items
        assert (first.product_id, first.unit_price, first.quantity.value) == (1, Money.of("10.00"), 2)
        assert first.subtotal == Money.of("20.00")
        assert (second.product_id, second.unit_price, second.quantity.value) == (2, Money.of("2.50"), 4)
        assert second.subtotal == Money.of("10.00")

    def test_purchase_and_line_items_are_stored(self):
        store = _store()
        purchase = _buy(store, (2, 4), (1, 1))

        saved = store.purchases[purchase.id]
        assert saved.total == Money.of("20.00")
        assert saved.product_ids == [2, 1]

    def test_total_is_sum_of_price_times_quantity(self):
        store = _store((1, "0.99", 50), (2, "13.37", 50), (3, "100", 50))
        purchase = _buy(store, (1, 3), (2, 7), (3, 1))
        assert purchase.total == Money.of("196.56")

    def test_can_buy_all_remaining_stock(self):
        store = _store((1, "10.00", 5))
        _buy(store, (1, 5))
        assert store.stock() == {1: 0}

    def test_sequential_ids(self):
        store = _store()
        first = _buy(store, (1, 1))
        second = _buy(store, (2, 1))
        assert second.id == first.id + 1


class TestValidation:

    def test_empty_input_rejected(self):
        store = _store()
        with pytest.raises(EmptyInputError):
            _buy(store)
        assert store.stock() == {1: 5, 2: 100}
        assert store.purchases == {}

    def test_duplicate_product_rejected(self):
        store = _store()
        with pytest.raises(DuplicateProductError) as info:
            _buy(store, (1, 2), (1, 1))
        assert info.value.product_ids == [1]
        assert store.stock() == {1: 5, 2: 100}

    def test_unknown_product_is_an_invalid_line(self):
        store = _store()
        with pytest.raises(InvalidLineError) as info:
            _buy(store, (1, 1), (99, 1))
        assert "productos.1.producto_id" in info.value.errors
        assert store.stock() == {1: 5, 2: 100}

    def test_zero_quantity_rejected(self):
        store = _store()
        with pytest.raises(InvalidLineError) as info:
            _buy(store, (1, 0))
        assert info.value.errors == {"productos.0.cantidad": ["The quantity must be at least 1."]}

    def test_non_integer_fields_rejected(self):
        store = _store()
        with pytest.raises(InvalidLineError) as info:
            _buy(store, ("1", 2.5), (None, None), (True, 1))
        errors = info.value.errors
        assert errors["productos.0.producto_id"] == ["The product id must be an integer."]
        assert errors["productos.0.cantidad"] == ["The quantity must be an integer."]
        assert errors["productos.1.producto_id"] == ["The product id field is required."]
        assert errors["productos.1.cantidad"] == ["The quantity field is required."]
        assert errors["productos.2.producto_id"] == ["The product id must be an integer."]

    def test_ids_and_quantities_beyond_integer_column(self):
        store = _store()
        with pytest.raises(InvalidLineError) as info:
            _buy(store, (2**70, 1), (1, 2**63))
        errors = info.value.errors
        assert errors["productos.0.producto_id"] == ["The selected product id is invalid."]
        assert list(errors) == ["productos.0.producto_id", "productos.1.cantidad"]

    def test_invalid_line_wins_over_duplicate(self):
        store = _store()
        with pytest.raises(InvalidLineError):
            _buy(store, (1, 1), (1, 0))


class TestStock:

    def test_insufficient_stock_rejected(self):
        store = _store((1, "10.00", 1))
        with pytest.raises(InsufficientStockError) as info:
            _buy(store, (1, 5))
        assert info.value.product_id == 1
        assert info.value.requested == 5
        assert info.value.available == 1
        assert store.stock() == {1: 1}

    def test_no_partial_decrement_on_failure(self):
        """If line 1 succeeds but line 2 fails, line 1 must not stay decremented."""
        store = _store((1, "10.00", 100), (2, "2.50", 3))
        with pytest.raises(InsufficientStockError, match="product #2"):
            _buy(store, (1, 10), (2, 5))

        assert store.stock() == {1: 100, 2: 3}
        assert store.purchases == {}


class _StaleReadProducts(FakeProductRepository):
    """Reports the stock as it was before another purchase took some."""

    def __init__(self, store, stale_stock: int) -> None:
        super().__init__(store)
        self._stale_stock = stale_stock

    def get_by_id(self, product_id):
        product = super().get_by_id(product_id)
        if product is not None and self._stale_stock is not None:
            product.available_stock = self._stale_stock
        return product


class TestConditionalDecrement:

    def test_stale_read_cannot_oversell(self):
        # Another purchase already took 4 of the 5 units, but this unit of
        # work still reads the old value.
        store = _store((1, "10.00", 1))
        uow = FakeUnitOfWork(store)
        with uow:
            uow.products = _StaleReadProducts(uow.products._store, stale_stock=5)
            with pytest.raises(InsufficientStockError):
                PurchaseAggregator(uow).create_purchase([LineItemRequest(1, 4)])

        assert store.stock() == {1: 1}

    def test_product_removed_between_validation_and_decrement(self):
        store = _store((1, "10.00", 5))
        uow = FakeUnitOfWork(store)

        class _Vanishing(FakeProductRepository):
            calls = 0

            def get_by_id(self, product_id):
                _Vanishing.calls += 1
                return super().get_by_id(product_id) if _Vanishing.calls == 1 else None

        with uow:
            uow.products = _Vanishing(uow.products._store)
            with pytest.raises(ProductNotFoundError) as info:
                PurchaseAggregator(uow).create_purchase([LineItemRequest(1, 1)])
        assert info.value.product_id == 1
        assert store.stock() == {1: 5}
