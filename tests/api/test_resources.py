"""Resource tests: decoded request bodies in, envelopes out."""

from backoffice.api.catalog import ClassificationResource, ProductResource
from backoffice.api.purchases import PurchaseResource
from backoffice.application.manage_classification import ClassificationKind
from backoffice.domain.model.classification import Brand, Category
from backoffice.domain.model.product import Product
from backoffice.domain.model.value_objects import Money
from tests.fakes import FakeStore, FakeUnitOfWork


def _store() -> FakeStore:
    return FakeStore(
        products=[
            Product(id=1, name="Widget", price=Money.of("10.00"), available_stock=5, category_id=1),
            Product(id=2, name="Gadget", price=Money.of("2.50"), available_stock=100),
        ],
        categories=[Category(id=1, name="Tools")],
    )


def _purchases(store: FakeStore) -> PurchaseResource:
    return PurchaseResource(lambda: FakeUnitOfWork(store))


class TestPurchaseStore:

    def test_created(self):
        store = _store()
        body = _purchases(store).store(
            {"productos": [{"producto_id": 1, "cantidad": 2}, {"producto_id": 2, "cantidad": 4}]}
        ).to_dict()

        assert body["statusCode"] == 201
        assert body["error"] is False
        assert body["message"] == "Purchase created successfully"
        assert body["data"]["total"] == "30.00"
        assert [i["product_id"] for i in body["data"]["items"]] == [1, 2]
        assert store.stock() == {1: 3, 2: 96}

    def test_missing_items_key(self):
        body = _purchases(_store()).store({}).to_dict()
        assert (body["statusCode"], body["message"]) == (400, "No products were provided")

    def test_items_not_a_list(self):
        body = _purchases(_store()).store({"productos": "1,2"}).to_dict()
        assert body["statusCode"] == 400
        assert "productos" in body["data"]

    def test_entry_not_an_object(self):
        body = _purchases(_store()).store({"productos": [{"producto_id": 1, "cantidad": 1}, 5]}).to_dict()
        assert body["data"] == {"productos.1": ["Each product entry must be an object."]}

    def test_field_errors(self):
        body = _purchases(_store()).store(
            {"productos": [{"producto_id": 99, "cantidad": 0}]}
        ).to_dict()
        assert body["statusCode"] == 400
        assert body["data"] == {
            "productos.0.producto_id": ["The selected product id is invalid."],
            "productos.0.cantidad": ["The quantity must be at least 1."],
        }

    def test_duplicate(self):
        body = _purchases(_store()).store(
            {"productos": [{"producto_id": 2, "cantidad": 1}, {"producto_id": 2, "cantidad": 1}]}
        ).to_dict()
        assert (body["statusCode"], body["data"]) == (400, {"product_ids": [2]})

    def test_insufficient_stock(self):
        store = _store()
        body = _purchases(store).store(
            {"productos": [{"producto_id": 2, "cantidad": 1}, {"producto_id": 1, "cantidad": 6}]}
        ).to_dict()

        assert body["statusCode"] == 404
        assert body["data"] == {"product_id": 1, "requested": 6, "available": 5}
        assert store.stock() == {1: 5, 2: 100}

    def test_commit_failure(self):
        store = _store()
        resource = PurchaseResource(lambda: FakeUnitOfWork(store, fail_on_commit=True))
        body = resource.store({"productos": [{"producto_id": 1, "cantidad": 1}]}).to_dict()

        assert body["statusCode"] == 500
        assert body["error"] is True
        assert store.stock() == {1: 5, 2: 100}


class TestPurchaseQueriesAndChanges:

    def _created(self):
        store = _store()
        resource = _purchases(store)
        resource.store({"productos": [{"producto_id": 1, "cantidad": 1}]})
        return resource, store

    def test_index_and_show(self):
        resource, _ = self._created()
        assert len(resource.index().data) == 1
        assert resource.show(1).data.total == "10.00"

    def test_show_missing(self):
        resource, _ = self._created()
        body = resource.show(9).to_dict()
        assert (body["statusCode"], body["message"]) == (404, "Purchase #9 not found")

    def test_update(self):
        resource, _ = self._created()
        body = resource.update(1, {"subtotal": 8, "total": "9.5"}).to_dict()
        assert body["statusCode"] == 200
        assert (body["data"]["subtotal"], body["data"]["total"]) == ("8.00", "9.50")

    def test_update_requires_both_amounts(self):
        resource, _ = self._created()
        body = resource.update(1, {"total": "9.5"}).to_dict()
        assert body["statusCode"] == 400
        assert "subtotal" in body["message"]

    def test_destroy(self):
        resource, store = self._created()
        assert resource.destroy(1).status_code == 200
        assert store.purchases == {}
        assert resource.destroy(1).status_code == 404


class TestProductResource:

    def test_store_and_show(self):
        store = _store()
        resource = ProductResource(lambda: FakeUnitOfWork(store))
        body = resource.store(
            {"nombre": "Saw", "precio": "15.5", "cantidad_disponible": 3, "categoria_id": 1}
        ).to_dict()

        assert body["statusCode"] == 201
        assert body["data"]["id"] == 3
        assert body["data"]["price"] == "15.50"
        assert resource.show(3).data.category_id == 1

    def test_store_rejects_non_integer_stock(self):
        resource = ProductResource(lambda: FakeUnitOfWork(_store()))
        body = resource.store({"nombre": "Saw", "precio": "1", "cantidad_disponible": "3"}).to_dict()
        assert body["statusCode"] == 400

    def test_store_unknown_category(self):
        resource = ProductResource(lambda: FakeUnitOfWork(_store()))
        body = resource.store({"nombre": "Saw", "precio": "1", "categoria_id": 4}).to_dict()
        assert (body["statusCode"], body["message"]) == (404, "Category #4 not found")

    def test_update_stock_only(self):
        store = _store()
        resource = ProductResource(lambda: FakeUnitOfWork(store))
        body = resource.update(2, {"cantidad_disponible": 7}).to_dict()
        assert body["data"]["available_stock"] == 7
        assert body["data"]["price"] == "2.50"

    def test_destroy(self):
        store = _store()
        resource = ProductResource(lambda: FakeUnitOfWork(store))
        assert resource.destroy(2).status_code == 200
        assert list(store.products) == [1]


class TestClassificationResource:

    def test_category_products(self):
        resource = ClassificationResource(lambda: FakeUnitOfWork(_store()), ClassificationKind.CATEGORY)
        body = resource.products(1).to_dict()
        assert [p["name"] for p in body["data"]] == ["Widget"]

    def test_brand_store_and_index(self):
        store = _store()
        resource = ClassificationResource(lambda: FakeUnitOfWork(store), ClassificationKind.BRAND)
        created = resource.store({"nombre": "Acme"})
        assert (created.status_code, created.message) == (201, "Brand created successfully")
        assert resource.index().message == "Brands loaded successfully"
        assert [b.name for b in resource.index().data] == ["Acme"]

    def test_delete_category_in_use(self):
        resource = ClassificationResource(lambda: FakeUnitOfWork(_store()), ClassificationKind.CATEGORY)
        response = resource.destroy(1)
        assert response.status_code == 400
        assert "still has 1 product(s)" in response.message


class TestOutOfRangeInput:

    def test_product_id_beyond_integer_column(self):
        store = _store()
        body = _purchases(store).store(
            {"productos": [{"producto_id": 2**70, "cantidad": 1}]}
        ).to_dict()

        assert body["statusCode"] == 400
        assert body["data"] == {
            "productos.0.producto_id": ["The selected product id is invalid."]
        }
        assert store.stock() == {1: 5, 2: 100}

    def test_quantity_beyond_integer_column(self):
        body = _purchases(_store()).store(
            {"productos": [{"producto_id": 1, "cantidad": 2**64}]}
        ).to_dict()

        assert body["statusCode"] == 400
        assert list(body["data"]) == ["productos.0.cantidad"]

    def test_purchase_amounts_beyond_column(self):
        store = _store()
        resource = _purchases(store)
        resource.store({"productos": [{"producto_id": 1, "cantidad": 1}]})

        body = resource.update(1, {"subtotal": "1e30", "total": "1e30"}).to_dict()

        assert body["statusCode"] == 400
        assert store.purchases[1].total == Money.of("10.00")

    def test_product_price_beyond_column(self):
        store = _store()
        resource = ProductResource(lambda: FakeUnitOfWork(store))

        created = resource.store({"nombre": "Yacht", "precio": "1e30"})
        updated = resource.update(1, {"precio": "99999999999"})

        assert (created.status_code, updated.status_code) == (400, 400)
        assert list(store.products) == [1, 2]
        assert store.products[1].price == Money.of("10.00")

    def test_category_id_beyond_integer_column(self):
        resource = ProductResource(lambda: FakeUnitOfWork(_store()))
        body = resource.store({"nombre": "Saw", "precio": "1", "categoria_id": 2**64}).to_dict()
        assert (body["statusCode"], body["message"]) == (400, "The categoria_id field is out of range")


class TestCatalogUpdates:

    def test_product_details_update(self):
        store = _store()
        store.brands[4] = Brand(id=4, name="Acme")
        resource = ProductResource(lambda: FakeUnitOfWork(store))

        body = resource.update(
            2, {"nombre": "Gizmo", "descripcion": "Blue", "categoria_id": 1, "marca_id": 4}
        ).to_dict()

        assert body["statusCode"] == 200
        assert (body["data"]["name"], body["data"]["description"]) == ("Gizmo", "Blue")
        assert (body["data"]["category_id"], body["data"]["brand_id"]) == (1, 4)
        assert body["data"]["price"] == "2.50"

    def test_product_update_unknown_brand(self):
        store = _store()
        resource = ProductResource(lambda: FakeUnitOfWork(store))
        body = resource.update(2, {"nombre": "Gizmo", "marca_id": 8}).to_dict()

        assert (body["statusCode"], body["message"]) == (404, "Brand #8 not found")
        assert store.products[2].name == "Gadget"

    def test_category_update(self):
        store = _store()
        resource = ClassificationResource(lambda: FakeUnitOfWork(store), ClassificationKind.CATEGORY)

        response = resource.update(1, {"nombre": "Hand tools"})

        assert (response.status_code, response.message) == (200, "Category updated successfully")
        assert store.categories[1].name == "Hand tools"

    def test_brand_update_missing(self):
        resource = ClassificationResource(lambda: FakeUnitOfWork(_store()), ClassificationKind.BRAND)
        response = resource.update(3, {"nombre": "Globex"})
        assert (response.status_code, response.message) == (404, "Brand #3 not found")

    def test_update_needs_a_field(self):
        resource = ClassificationResource(lambda: FakeUnitOfWork(_store()), ClassificationKind.CATEGORY)
        assert resource.update(1, {}).status_code == 400
