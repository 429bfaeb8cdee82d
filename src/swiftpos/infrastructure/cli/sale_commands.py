"""CLI commands for the Sale aggregate (the /pos and /api/sales surfaces)."""

from __future__ import annotations

import click

from swiftpos.application.dto import CartItemSpec
from swiftpos.application.list_sales import ListSalesHandler
from swiftpos.application.record_sale import RecordSaleHandler
from swiftpos.domain.exceptions import DomainException
from swiftpos.infrastructure.cli.session import AppContext

POS_PATH = "/pos"
SALES_PATH = "/api/sales"


def _parse_items(raw: str) -> list[CartItemSpec]:
    """Parse 'ESP-1001:2,BG-3003:1' into CartItemSpec list."""
    specs: list[CartItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductCode:Quantity'."
            )
        code, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{code}'."
            )
        specs.append(CartItemSpec(product_code=code.strip(), quantity=qty))
    return specs


@click.command("checkout")
@click.option("--items", required=True, help="Cart as 'Code:Qty,Code:Qty'.")
@click.pass_obj
def sale_checkout(app: AppContext, items: str) -> None:
    """Record a sale and deduct the sold stock."""
    app.authorize(POS_PATH)
    specs = _parse_items(items)

    handler = RecordSaleHandler(app.store, tax_rate=app.settings.tax_rate)

    try:
        dto = handler.handle(specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale recorded: invoice #{dto.invoice_number}  (id={dto.id})")
    click.echo(f"Subtotal {dto.subtotal}  Tax {dto.tax}  Total {dto.total}")
    click.echo(f"Print it with: swiftpos invoice show {dto.id}")


@click.command("list")
@click.pass_obj
def sale_list(app: AppContext) -> None:
    """List recorded sales, newest first."""
    app.authorize(SALES_PATH)
    sales = ListSalesHandler(app.store).handle()

    if not sales:
        click.echo("No sales recorded.")
        return

    click.echo(f"{'Invoice':<9} {'Date':<22} {'Items':>5} {'Total':>12}  ID")
    click.echo("-" * 88)
    for dto in sales:
        click.echo(
            f"{dto.invoice_number:<9} {dto.date:<22} {len(dto.items):>5} "
            f"{dto.total:>12}  {dto.id}"
        )
