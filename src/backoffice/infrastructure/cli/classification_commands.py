"""CLI commands for categories and brands.

Both groups share the same commands; ``build_group`` creates one
group per ``ClassificationKind``.
"""

from __future__ import annotations

import click

from backoffice.application.list_products import ListProductsHandler
from backoffice.application.manage_classification import (
    AddClassificationHandler,
    ClassificationKind,
    DeleteClassificationHandler,
    ListClassificationsHandler,
    UpdateClassificationHandler,
)
from backoffice.domain.exceptions import DomainException
from backoffice.infrastructure import bootstrap
from backoffice.infrastructure.cli.product_commands import print_products


def build_group(kind: ClassificationKind, name: str) -> click.Group:
    label = kind.value.lower()

    @click.group(name, help=f"Manage {name} records.")
    def group() -> None:
        pass

    @group.command("add", help=f"Add a new {label}.")
    @click.option("--name", "entity_name", required=True, help=f"{kind.value} name.")
    @click.option("--description", default="", help="Free-text description.")
    def add(entity_name: str, description: str) -> None:
        handler = AddClassificationHandler(bootstrap.unit_of_work(), kind)
        try:
            dto = handler.handle(name=entity_name, description=description)
        except DomainException as exc:
            raise click.ClickException(str(exc))
        click.echo(f"{kind.value} #{dto.id} '{dto.name}' added")

    @group.command("list", help=f"List every {label}.")
    def list_() -> None:
        try:
            entities = ListClassificationsHandler(bootstrap.unit_of_work(), kind).handle()
        except DomainException as exc:
            raise click.ClickException(str(exc))
        if not entities:
            click.echo(f"No {label} records found.")
            return
        click.echo(f"{'ID':<6} {'Name':<24} {'Description'}")
        click.echo("-" * 50)
        for e in entities:
            click.echo(f"{e.id:<6} {e.name:<24} {e.description}")

    @group.command("update", help=f"Rename or redescribe a {label}.")
    @click.option("--id", "entity_id", required=True, type=int, help=f"{kind.value} ID.")
    @click.option("--name", "entity_name", default=None, help="New name.")
    @click.option("--description", default=None, help="New description.")
    def update(entity_id: int, entity_name: str | None, description: str | None) -> None:
        handler = UpdateClassificationHandler(bootstrap.unit_of_work(), kind)
        try:
            dto = handler.handle(entity_id, name=entity_name, description=description)
        except DomainException as exc:
            raise click.ClickException(str(exc))
        click.echo(f"{kind.value} #{dto.id} '{dto.name}' updated.")

    @group.command("delete", help=f"Delete a {label} no product uses.")
    @click.option("--id", "entity_id", required=True, type=int, help=f"{kind.value} ID.")
    def delete(entity_id: int) -> None:
        handler = DeleteClassificationHandler(bootstrap.unit_of_work(), kind)
        try:
            dto = handler.handle(entity_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))
        click.echo(f"{kind.value} #{dto.id} '{dto.name}' deleted.")

    @group.command("products", help=f"List the products of a {label}.")
    @click.option("--id", "entity_id", required=True, type=int, help=f"{kind.value} ID.")
    def products(entity_id: int) -> None:
        handler = ListProductsHandler(bootstrap.unit_of_work())
        try:
            if kind is ClassificationKind.CATEGORY:
                found = handler.handle(category_id=entity_id)
            else:
                found = handler.handle(brand_id=entity_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))
        print_products(found)

    return group
