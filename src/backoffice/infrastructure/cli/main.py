import click

from backoffice.application.manage_classification import ClassificationKind
from backoffice.domain.exceptions import DomainException
from backoffice.infrastructure import bootstrap
from backoffice.infrastructure.cli.classification_commands import build_group
from backoffice.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from backoffice.infrastructure.cli.purchase_commands import (
    purchase_create,
    purchase_delete,
    purchase_list,
    purchase_show,
    purchase_update,
)


@click.group()
def cli() -> None:
    """Back-office: catalog, stock and purchases."""
    bootstrap.settings()


@cli.group()
def db() -> None:
    """Manage the database."""


@db.command("init")
def db_init() -> None:
    """Create any missing tables."""
    try:
        bootstrap.create_schema()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo("Database schema is ready.")


@cli.group()
def purchase() -> None:
    """Manage purchases."""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
purchase.add_command(purchase_create)
purchase.add_command(purchase_delete)
purchase.add_command(purchase_list)
purchase.add_command(purchase_show)
purchase.add_command(purchase_update)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
cli.add_command(build_group(ClassificationKind.CATEGORY, "category"))
cli.add_command(build_group(ClassificationKind.BRAND, "brand"))
