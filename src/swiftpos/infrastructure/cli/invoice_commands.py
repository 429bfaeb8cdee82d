"""CLI commands for invoices (the /invoice/<id> surface)."""

from __future__ import annotations

import click

from swiftpos.application.dto import SaleDTO
from swiftpos.application.show_invoice import InvoicePresenter, InvoiceState
from swiftpos.domain.exceptions import DomainException
from swiftpos.infrastructure import bootstrap
from swiftpos.infrastructure.cli.session import AppContext
from swiftpos.infrastructure.printing import receipt_lines


@click.command("show")
@click.argument("sale_id")
@click.option(
    "--print/--no-print",
    "print_receipt",
    default=True,
    show_default=True,
    help="Send the receipt to the printer spool once shown.",
)
@click.pass_obj
def invoice_show(app: AppContext, sale_id: str, print_receipt: bool) -> None:
    """Show the receipt for one sale."""
    app.authorize(f"/invoice/{sale_id}")

    printer = bootstrap.receipt_printer(app.settings) if print_receipt else None
    presenter = InvoicePresenter(
        app.store,
        print_action=printer,
        retry_delay=app.settings.invoice_retry_delay,
        print_delay=app.settings.print_delay,
    )

    try:
        view = presenter.present(sale_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    finally:
        presenter.close()

    if view is None:
        return

    if view.state is InvoiceState.LOADING:
        click.echo("Loading invoice...")
        return

    if view.state is InvoiceState.NOT_FOUND:
        raise click.ClickException(
            "Invoice not found. The sale you are looking for could not be "
            "located; run the command again, or return to the POS with "
            "'swiftpos sale list'."
        )

    if view.state is InvoiceState.MALFORMED:
        raise click.ClickException(
            "Invoice error: this invoice has no items. "
            "Please contact support if this persists."
        )

    for line in receipt_lines(SaleDTO.from_sale(view.sale)):
        click.echo(line)
    if printer is not None and printer.printed:
        click.echo()
        click.echo(f"Sent to printer: {printer.printed[-1]}")
    elif printer is not None:
        click.echo("Receipt could not be printed, see the log for details.", err=True)
