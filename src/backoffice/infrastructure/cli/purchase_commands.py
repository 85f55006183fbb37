"""CLI commands for the Purchase aggregate."""

from __future__ import annotations

import json

import click

from backoffice.api.purchases import PurchaseResource
from backoffice.api.responses import ApiResponse
from backoffice.application.dto import ITEMS_KEY, PRODUCT_KEY, QUANTITY_KEY, PurchaseDTO
from backoffice.application.show_purchase import ListPurchasesHandler
from backoffice.domain.exceptions import DomainException
from backoffice.infrastructure import bootstrap


def _parse_items(raw: str) -> dict:
    """Parse '1:2,3:5' (product id : quantity) into a purchase request body."""
    entries: list[dict] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        id_str, qty_str = pair.split(":", 1)
        try:
            product_id = int(id_str)
            quantity = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid item '{pair}'. Product id and quantity must be integers."
            )
        entries.append({PRODUCT_KEY: product_id, QUANTITY_KEY: quantity})
    return {ITEMS_KEY: entries}


def _emit(response: ApiResponse) -> None:
    click.echo(json.dumps(response.to_dict(), indent=2))
    if response.error:
        click.get_current_context().exit(1)


def _resource() -> PurchaseResource:
    return PurchaseResource(bootstrap.unit_of_work)


@click.command("create")
@click.option("--items", "items_str", default=None, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--json", "json_body", default=None, help='Raw body, e.g. \'{"productos": [...]}\'.')
def purchase_create(items_str: str | None, json_body: str | None) -> None:
    """Create a purchase and take its items out of stock."""
    if (items_str is None) == (json_body is None):
        raise click.UsageError("Give exactly one of --items or --json")

    if json_body is not None:
        try:
            payload = json.loads(json_body)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"Invalid JSON body: {exc}")
    else:
        payload = _parse_items(items_str)  # type: ignore[arg-type]

    _emit(_resource().store(payload))


@click.command("list")
def purchase_list() -> None:
    """List all purchases."""
    try:
        purchases = ListPurchasesHandler(bootstrap.unit_of_work()).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not purchases:
        click.echo("No purchases found.")
        return

    click.echo(f"{'ID':<6} {'Lines':>6} {'Subtotal':>12} {'Total':>12}  {'Created'}")
    click.echo("-" * 60)
    for p in purchases:
        click.echo(
            f"{p.id:<6} {len(p.items):>6} {p.subtotal:>12} {p.total:>12}  {p.created_at}"
        )


def _display_purchase(dto: PurchaseDTO) -> None:
    click.echo(f"Purchase #{dto.id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<10} {'Qty':>5} {'Price':>10} {'Subtotal':>12}")
    click.echo(f"  {'-'*40}")
    for item in dto.items:
        click.echo(
            f"  {'#' + str(item.product_id):<10} {item.quantity:>5} "
            f"{item.unit_price:>10} {item.subtotal:>12}"
        )
    click.echo(f"  {'-'*40}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>13}")
    click.echo(f"  {'Total':<27} {dto.total:>13}")


@click.command("show")
@click.option("--id", "purchase_id", required=True, type=int, help="Purchase ID to display.")
def purchase_show(purchase_id: int) -> None:
    """Show details of an existing purchase."""
    response = _resource().show(purchase_id)
    if response.error:
        raise click.ClickException(response.message)
    _display_purchase(response.data)


@click.command("update")
@click.option("--id", "purchase_id", required=True, type=int, help="Purchase ID to update.")
@click.option("--subtotal", required=True, help="New subtotal (e.g. 30.00).")
@click.option("--total", required=True, help="New total (e.g. 30.00).")
def purchase_update(purchase_id: int, subtotal: str, total: str) -> None:
    """Overwrite the stored subtotal and total of a purchase."""
    _emit(_resource().update(purchase_id, {"subtotal": subtotal, "total": total}))


@click.command("delete")
@click.option("--id", "purchase_id", required=True, type=int, help="Purchase ID to delete.")
def purchase_delete(purchase_id: int) -> None:
    """Delete a purchase (stock is not restored)."""
    _emit(_resource().destroy(purchase_id))
