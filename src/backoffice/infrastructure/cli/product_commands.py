"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from backoffice.application.add_product import AddProductHandler
from backoffice.application.delete_product import DeleteProductHandler
from backoffice.application.dto import ProductDTO
from backoffice.application.list_products import ListProductsHandler, ShowProductHandler
from backoffice.application.update_product import UpdateProductHandler
from backoffice.domain.exceptions import DomainException
from backoffice.infrastructure import bootstrap


def print_products(products: list[ProductDTO]) -> None:
    """Shared table layout for product listings."""
    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 50)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<24} {p.price:>10} {p.available_stock:>7}")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, show_default=True, type=int, help="Units available.")
@click.option("--description", default="", help="Free-text description.")
@click.option("--category", "category_id", default=None, type=int, help="Category ID.")
@click.option("--brand", "brand_id", default=None, type=int, help="Brand ID.")
def product_add(
    name: str,
    price: str,
    stock: int,
    description: str,
    category_id: int | None,
    brand_id: int | None,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(bootstrap.unit_of_work())

    try:
        product = handler.handle(
            name=name,
            price=price,
            stock=stock,
            description=description,
            category_id=category_id,
            brand_id=brand_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"({product.available_stock} in stock)"
    )


@click.command("list")
@click.option("--category", "category_id", default=None, type=int, help="Only this category.")
@click.option("--brand", "brand_id", default=None, type=int, help="Only this brand.")
def product_list(category_id: int | None, brand_id: int | None) -> None:
    """List products in the catalog."""
    handler = ListProductsHandler(bootstrap.unit_of_work())

    try:
        products = handler.handle(category_id=category_id, brand_id=brand_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    print_products(products)


@click.command("show")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_show(product_id: int) -> None:
    """Show one product."""
    try:
        p = ShowProductHandler(bootstrap.unit_of_work()).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{p.id}: {p.name}")
    if p.description:
        click.echo(f"  {p.description}")
    click.echo(f"Price:    {p.price}")
    click.echo(f"Stock:    {p.available_stock}")
    click.echo(f"Category: {p.category_id if p.category_id is not None else '-'}")
    click.echo(f"Brand:    {p.brand_id if p.brand_id is not None else '-'}")


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", default=None, type=int, help="New stock level.")
@click.option("--name", default=None, help="New product name.")
@click.option("--description", default=None, help="New description.")
@click.option("--category", "category_id", default=None, type=int, help="New category ID.")
@click.option("--brand", "brand_id", default=None, type=int, help="New brand ID.")
def product_update(
    product_id: int,
    price: str | None,
    stock: int | None,
    name: str | None,
    description: str | None,
    category_id: int | None,
    brand_id: int | None,
) -> None:
    """Update any of a product's details."""
    handler = UpdateProductHandler(bootstrap.unit_of_work())

    try:
        product = handler.handle(
            product_id=product_id,
            new_price=price,
            new_stock=stock,
            new_name=name,
            new_description=description,
            new_category_id=category_id,
            new_brand_id=brand_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product_id} '{product.name}' updated: price {product.price}, "
        f"stock {product.available_stock}"
    )


@click.command("delete")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_delete(product_id: int) -> None:
    """Remove a product from the catalog."""
    try:
        product = DeleteProductHandler(bootstrap.unit_of_work()).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' deleted.")
