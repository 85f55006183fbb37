"""End-to-end CLI tests on a throwaway SQLite database."""

import json

import pytest
from click.testing import CliRunner

from backoffice.infrastructure import bootstrap
from backoffice.infrastructure.cli.main import cli


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("BACKOFFICE_DATABASE_URL", f"sqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setenv("BACKOFFICE_LOG_LEVEL", "CRITICAL")
    bootstrap.reset()
    yield CliRunner()
    bootstrap.reset()


def _ok(runner, *args):
    result = runner.invoke(cli, list(args))
    assert result.exit_code == 0, result.output
    return result.output


def _seed(runner):
    _ok(runner, "category", "add", "--name", "Tools")
    _ok(runner, "brand", "add", "--name", "Acme")
    _ok(runner, "product", "add", "--name", "Widget", "--price", "10.00",
        "--stock", "5", "--category", "1", "--brand", "1")
    _ok(runner, "product", "add", "--name", "Gadget", "--price", "2.50", "--stock", "100")


class TestPurchaseCommands:

    def test_create_with_items(self, runner):
        _seed(runner)
        body = json.loads(_ok(runner, "purchase", "create", "--items", "1:2,2:4"))

        assert body["statusCode"] == 201
        assert body["data"]["total"] == "30.00"
        assert "96" in _ok(runner, "product", "list")

    def test_create_with_json_body(self, runner):
        _seed(runner)
        payload = json.dumps({"productos": [{"producto_id": 2, "cantidad": 1}]})
        body = json.loads(_ok(runner, "purchase", "create", "--json", payload))
        assert body["data"]["items"][0]["subtotal"] == "2.50"

    def test_insufficient_stock_exits_nonzero(self, runner):
        _seed(runner)
        result = runner.invoke(cli, ["purchase", "create", "--items", "1:9"])

        assert result.exit_code == 1
        body = json.loads(result.output)
        assert body["error"] is True
        assert body["data"] == {"product_id": 1, "requested": 9, "available": 5}

    def test_needs_exactly_one_input(self, runner):
        result = runner.invoke(cli, ["purchase", "create"])
        assert result.exit_code == 2

    def test_bad_item_format(self, runner):
        result = runner.invoke(cli, ["purchase", "create", "--items", "1-2"])
        assert result.exit_code == 2
        assert "ProductId:Quantity" in result.output

    def test_show_list_update_delete(self, runner):
        _seed(runner)
        _ok(runner, "purchase", "create", "--items", "1:1")

        assert "Purchase #1" in _ok(runner, "purchase", "show", "--id", "1")
        assert "10.00" in _ok(runner, "purchase", "list")

        updated = json.loads(
            _ok(runner, "purchase", "update", "--id", "1", "--subtotal", "9", "--total", "9.90")
        )
        assert updated["data"]["total"] == "9.90"

        _ok(runner, "purchase", "delete", "--id", "1")
        assert "No purchases found." in _ok(runner, "purchase", "list")

    def test_show_missing(self, runner):
        _ok(runner, "db", "init")
        result = runner.invoke(cli, ["purchase", "show", "--id", "3"])
        assert result.exit_code == 1
        assert "Purchase #3 not found" in result.output


class TestCatalogCommands:

    def test_product_update_and_show(self, runner):
        _seed(runner)
        _ok(runner, "product", "update", "--id", "2", "--price", "3.10")
        output = _ok(runner, "product", "show", "--id", "2")
        assert "3.10" in output

    def test_category_products(self, runner):
        _seed(runner)
        output = _ok(runner, "category", "products", "--id", "1")
        assert "Widget" in output
        assert "Gadget" not in output

    def test_product_update_details(self, runner):
        _seed(runner)
        _ok(runner, "category", "add", "--name", "Toys")
        _ok(runner, "product", "update", "--id", "2", "--name", "Gizmo", "--category", "2")

        assert "Gizmo" in _ok(runner, "category", "products", "--id", "2")

    def test_category_update(self, runner):
        _seed(runner)
        output = _ok(runner, "category", "update", "--id", "1", "--name", "Hand tools")
        assert "Hand tools" in output
        assert "Hand tools" in _ok(runner, "category", "list")

    def test_brand_update_missing(self, runner):
        _seed(runner)
        result = runner.invoke(cli, ["brand", "update", "--id", "7", "--name", "X"])
        assert result.exit_code == 1
        assert "Brand #7 not found" in result.output

    def test_brand_in_use_cannot_be_deleted(self, runner):
        _seed(runner)
        result = runner.invoke(cli, ["brand", "delete", "--id", "1"])
        assert result.exit_code == 1
        assert "still has 1 product(s)" in result.output
