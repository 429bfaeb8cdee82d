"""CLI commands for browsing products (the /api/products surface)."""

from __future__ import annotations

import click

from swiftpos.infrastructure.cli.session import AppContext

PRODUCTS_PATH = "/api/products"


@click.command("list")
@click.pass_obj
def product_list(app: AppContext) -> None:
    """List all products in the catalog."""
    app.authorize(PRODUCTS_PATH)
    products = app.store.products

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'Code':<10} {'Name':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 50)
    for p in products:
        click.echo(f"{p.code:<10} {p.name:<20} {str(p.price):>10} {p.stock_quantity:>7}")
