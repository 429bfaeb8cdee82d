import logging

import click

from swiftpos.domain.exceptions import DomainException
from swiftpos.domain.service.access_gate import SessionClaim
from swiftpos.infrastructure import bootstrap
from swiftpos.infrastructure.cli.inventory_commands import (
    inventory_add,
    inventory_adjust,
    inventory_delete,
    inventory_show,
    inventory_update,
)
from swiftpos.infrastructure.cli.invoice_commands import invoice_show
from swiftpos.infrastructure.cli.product_commands import product_list
from swiftpos.infrastructure.cli.sale_commands import sale_checkout, sale_list
from swiftpos.infrastructure.cli.session import AppContext


@click.group()
@click.option(
    "--role",
    envvar="SWIFTPOS_ROLE",
    default=None,
    help="Role claim of the signed-in user (e.g. ADMIN, CASHIER).",
)
@click.pass_context
def cli(ctx: click.Context, role: str | None) -> None:
    """SwiftPOS — point of sale"""
    try:
        settings = bootstrap.load_settings()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    claim = SessionClaim(role=role.strip()) if role and role.strip() else None
    ctx.obj = AppContext(settings, claim)


@cli.group()
def inventory() -> None:
    """Manage inventory (admin only)."""


@cli.group()
def product() -> None:
    """Browse products."""


@cli.group()
def sale() -> None:
    """Ring up and review sales."""


@cli.group()
def invoice() -> None:
    """Show and print invoices."""


# Register subcommands
inventory.add_command(inventory_add)
inventory.add_command(inventory_adjust)
inventory.add_command(inventory_delete)
inventory.add_command(inventory_show)
inventory.add_command(inventory_update)
product.add_command(product_list)
sale.add_command(sale_checkout)
sale.add_command(sale_list)
invoice.add_command(invoice_show)
