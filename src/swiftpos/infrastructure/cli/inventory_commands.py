"""CLI commands for inventory management (the /inventory area)."""

from __future__ import annotations

import click

from swiftpos.application.add_product import AddProductHandler
from swiftpos.application.adjust_stock import AdjustStockHandler, StockMode
from swiftpos.application.delete_product import DeleteProductHandler
from swiftpos.application.show_inventory import ShowInventoryHandler
from swiftpos.application.update_product import UpdateProductHandler
from swiftpos.domain.exceptions import DomainException
from swiftpos.infrastructure.cli.session import AppContext

INVENTORY_PATH = "/inventory"


@click.command("show")
@click.pass_obj
def inventory_show(app: AppContext) -> None:
    """Show products, stock levels and inventory totals."""
    app.authorize(INVENTORY_PATH)
    report = ShowInventoryHandler(app.store).handle()

    click.echo(f"Total SKUs:      {report.total_skus}")
    click.echo(f"Items on hand:   {report.items_on_hand}")
    click.echo(f"Inventory value: {report.inventory_value}")
    click.echo()

    if not report.lines:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<38} {'Code':<10} {'Name':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 89)
    for line in report.lines:
        click.echo(
            f"{line.product_id:<38} {line.code:<10} {line.name:<20} "
            f"{line.price:>10} {line.stock:>7}"
        )


@click.command("add")
@click.option("--code", required=True, help="Product code / SKU (e.g. ESP-1001).")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 4.50).")
@click.option("--stock", required=True, help="Units in stock.")
@click.pass_obj
def inventory_add(app: AppContext, code: str, name: str, price: str, stock: str) -> None:
    """Add a new product to the catalog."""
    app.authorize(INVENTORY_PATH)
    handler = AddProductHandler(app.store)

    try:
        product = handler.handle(code=code, name=name, price=price, stock_quantity=stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product added successfully. ({product.code} -> {product.id})")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--code", required=True, help="Product code / SKU.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 4.50).")
@click.option("--stock", required=True, help="Units in stock.")
@click.pass_obj
def inventory_update(
    app: AppContext, product_id: str, code: str, name: str, price: str, stock: str
) -> None:
    """Edit a product's details and pricing."""
    app.authorize(INVENTORY_PATH)
    handler = UpdateProductHandler(app.store)

    try:
        handler.handle(
            product_id=product_id,
            code=code,
            name=name,
            price=price,
            stock_quantity=stock,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Product updated successfully.")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--yes", is_flag=True, default=False, help="Skip the confirmation prompt.")
@click.pass_obj
def inventory_delete(app: AppContext, product_id: str, yes: bool) -> None:
    """Delete a product. Recorded sales keep their copy of it."""
    app.authorize(INVENTORY_PATH)

    product = app.store.get_product(product_id)
    if product is None:
        raise click.ClickException(f"Product with ID '{product_id}' not found")
    if not yes:
        click.confirm(
            f"Delete {product.name}? This action cannot be undone.", abort=True
        )

    try:
        name = DeleteProductHandler(app.store).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{name} deleted.")


@click.command("adjust")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in StockMode]),
    default=StockMode.ADD.value,
    show_default=True,
    help="Add units to or deduct units from stock.",
)
@click.option("--amount", default="1", show_default=True, help="Units to add or deduct.")
@click.pass_obj
def inventory_adjust(app: AppContext, product_id: str, mode: str, amount: str) -> None:
    """Add or deduct stock for one product."""
    app.authorize(INVENTORY_PATH)
    handler = AdjustStockHandler(app.store)

    try:
        handler.handle(product_id=product_id, mode=mode, amount=amount)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    name = app.store.get_product(product_id).name
    verb = "Added" if mode == StockMode.ADD.value else "Deducted"
    click.echo(f"{verb} {amount.strip()} units for {name}.")
