"""
InvoiceDesk CLI — command-line interface.

Usage:
    invoicedesk init
    invoicedesk new --client client-1 --item "Design|10|95|8.25" --terms 14
    invoicedesk send INV-2024-0003
    invoicedesk dashboard
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from invoicedesk import __version__

app = typer.Typer(
    name="invoicedesk",
    help="🧾 InvoiceDesk — Small-business invoicing from your terminal",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]InvoiceDesk[/bold] v{__version__}")
        raise typer.Exit()


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    config: str = typer.Option(
        "invoicedesk.yaml",
        "--config",
        "-c",
        help="Path to config file",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging"),
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """🧾 InvoiceDesk — Clients. Invoices. Getting paid."""
    from pydantic import ValidationError

    from invoicedesk.desk import InvoiceDesk
    from invoicedesk.validators import error_messages

    config_path = config if Path(config).exists() else None
    try:
        desk = InvoiceDesk.from_config(config_path)
    except ValidationError as e:
        console.print(f"[red]Error: Invalid configuration: {escape('; '.join(error_messages(e)))}[/red]")
        raise typer.Exit(1) from e
    _setup_logging("DEBUG" if verbose else desk.config.log_level)
    ctx.obj = desk


@contextmanager
def _handle_errors() -> Iterator[None]:
    from invoicedesk.exceptions import InvoiceDeskError

    try:
        yield
    except InvoiceDeskError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        raise typer.Exit(1) from e


def _parse_item(raw: str, default_tax: Decimal) -> dict[str, object]:
    """``"Design|10|95|8.25"`` -> item mapping; tax rate is optional."""
    parts = [p.strip() for p in raw.split("|")]
    if len(parts) not in (3, 4):
        raise typer.BadParameter(f"Expected 'description|quantity|rate[|tax]', got {raw!r}")
    try:
        return {
            "description": parts[0],
            "quantity": Decimal(parts[1]),
            "rate": Decimal(parts[2]),
            "tax_rate": Decimal(parts[3]) if len(parts) == 4 else default_tax,
        }
    except InvalidOperation as e:
        raise typer.BadParameter(f"Invalid number in item {raw!r}") from e


@app.command()
def init(ctx: typer.Context) -> None:
    """Seed sample clients and invoices into an empty data store."""
    desk = ctx.obj
    with _handle_errors():
        created = desk.initialize_sample_data()
    if created:
        console.print("[green]✓[/green] Sample data created")
    else:
        console.print("[dim]Data store is not empty, nothing to do[/dim]")


@app.command()
def dashboard(
    ctx: typer.Context,
    markdown: str = typer.Option(None, "--markdown", "-m", help="Also write the dashboard to a Markdown file"),
) -> None:
    """Show business statistics."""
    from invoicedesk.exporters.markdown import render_dashboard_markdown
    from invoicedesk.formatting import format_currency

    desk = ctx.obj
    with _handle_errors():
        stats = desk.dashboard()
        currency = desk.business_profile().currency

    console.print(Panel.fit("[bold blue]🧾 InvoiceDesk[/bold blue] — Dashboard", subtitle=f"v{__version__}"))

    table = Table(title="Business Summary", show_lines=True)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Total Revenue", format_currency(stats.total_revenue, currency))
    table.add_row("This Month", format_currency(stats.monthly_revenue, currency))
    table.add_row("Invoices", str(stats.total_invoices))
    table.add_row("Paid", str(stats.paid_invoices))
    table.add_row("Pending", str(stats.pending_invoices))
    table.add_row(
        "Overdue",
        f"[red]{stats.overdue_invoices}[/red] ({format_currency(stats.overdue_amount, currency)})",
    )
    table.add_row("Average Invoice", format_currency(stats.average_invoice_value, currency))
    console.print(table)

    if markdown:
        _write(Path(markdown), render_dashboard_markdown(stats, currency))


@app.command("list")
def list_invoices(
    ctx: typer.Context,
    status: str = typer.Option(None, "--status", "-s", help="draft, sent, paid, overdue or cancelled"),
    client: str = typer.Option(None, "--client", help="Only invoices for this client id"),
    search: str = typer.Option(None, "--search", help="Match invoice number or client"),
) -> None:
    """List invoices."""
    from invoicedesk.formatting import format_currency, format_date_short, status_color, status_label
    from invoicedesk.models.invoice import InvoiceStatus

    desk = ctx.obj
    if status:
        try:
            InvoiceStatus(status.lower())
        except ValueError as e:
            raise typer.BadParameter(f"Unknown status {status!r}") from e

    with _handle_errors():
        invoices = desk.list_invoices(
            status=status.lower() if status else None,
            client_id=client,
            search=search,
        )
        clients = {c.id: c for c in desk.list_clients()}
        currency = desk.business_profile().currency

    table = Table(title=f"Invoices ({len(invoices)})")
    table.add_column("Number", style="bold cyan")
    table.add_column("Client")
    table.add_column("Issued")
    table.add_column("Due")
    table.add_column("Status")
    table.add_column("Total", justify="right")

    for inv in invoices:
        client_obj = clients.get(inv.client_id)
        color = status_color(inv.status)
        table.add_row(
            inv.invoice_number,
            client_obj.display_name if client_obj else "Unknown Client",
            format_date_short(inv.issue_date),
            format_date_short(inv.due_date),
            f"[{color}]{status_label(inv.status)}[/{color}]",
            format_currency(inv.total, currency),
        )
    console.print(table)


@app.command()
def show(
    ctx: typer.Context,
    ref: str = typer.Argument(..., help="Invoice number or id"),
    markdown: str = typer.Option(None, "--markdown", "-m", help="Write the invoice to a Markdown file"),
) -> None:
    """Show a single invoice."""
    from invoicedesk.exporters.markdown import render_invoice_markdown

    desk = ctx.obj
    with _handle_errors():
        invoice = desk.find_invoice(ref)
        content = render_invoice_markdown(invoice, desk.get_client(invoice.client_id), desk.business_profile())

    if markdown:
        _write(Path(markdown), content)
    else:
        console.print(content, markup=False, highlight=False)


@app.command()
def new(
    ctx: typer.Context,
    client: str = typer.Option(..., "--client", help="Client id"),
    item: list[str] = typer.Option(..., "--item", "-i", help="description|quantity|rate[|tax]"),
    issue_date: str = typer.Option(None, "--issue-date", help="YYYY-MM-DD, defaults to today"),
    terms: str = typer.Option(None, "--terms", "-t", help="due_on_receipt, 7, 14, 30, 60 or 90"),
    discount_type: str = typer.Option("fixed", "--discount-type", help="fixed or percentage"),
    discount: str = typer.Option("0", "--discount", help="Discount amount or percent"),
    notes: str = typer.Option("", "--notes", help="Notes printed on the invoice"),
) -> None:
    """Create a draft invoice."""
    from invoicedesk.formatting import format_currency

    desk = ctx.obj
    with _handle_errors():
        profile = desk.business_profile()
    form = {
        "client_id": client,
        "issue_date": issue_date or date.today().isoformat(),
        "payment_terms": terms or profile.payment_terms.value,
        "items": [_parse_item(raw, profile.default_tax_rate) for raw in item],
        "discount_type": discount_type,
        "discount_value": discount,
        "notes": notes,
    }
    with _handle_errors():
        invoice = desk.create_invoice(form)

    console.print(
        f"[green]✓[/green] Created [bold]{invoice.invoice_number}[/bold] "
        f"— total {format_currency(invoice.total, profile.currency)}, due {invoice.due_date.isoformat()}"
    )


@app.command()
def send(ctx: typer.Context, ref: str = typer.Argument(..., help="Invoice number or id")) -> None:
    """Mark a draft invoice as sent."""
    with _handle_errors():
        invoice = ctx.obj.mark_sent(ref)
    console.print(f"[green]✓[/green] {invoice.invoice_number} marked as sent")


@app.command()
def pay(ctx: typer.Context, ref: str = typer.Argument(..., help="Invoice number or id")) -> None:
    """Record payment of an invoice."""
    with _handle_errors():
        invoice = ctx.obj.mark_paid(ref)
    console.print(f"[green]✓[/green] {invoice.invoice_number} marked as paid")


@app.command()
def cancel(ctx: typer.Context, ref: str = typer.Argument(..., help="Invoice number or id")) -> None:
    """Cancel an unpaid invoice."""
    with _handle_errors():
        invoice = ctx.obj.cancel_invoice(ref)
    console.print(f"[green]✓[/green] {invoice.invoice_number} cancelled")


@app.command()
def reconcile(ctx: typer.Context) -> None:
    """Mark sent invoices that are past due as overdue."""
    with _handle_errors():
        changed = ctx.obj.reconcile_overdue()
    console.print(f"[green]✓[/green] {changed} invoice(s) marked overdue")


@app.command()
def clients(
    ctx: typer.Context,
    search: str = typer.Option(None, "--search", help="Match name, company or email"),
) -> None:
    """List clients."""
    desk = ctx.obj
    with _handle_errors():
        found = desk.search_clients(search) if search else desk.list_clients()

    table = Table(title=f"Clients ({len(found)})")
    table.add_column("Id", style="bold cyan")
    table.add_column("Name")
    table.add_column("Company")
    table.add_column("Email")
    for c in found:
        table.add_row(c.id, c.name, c.company, c.email)
    console.print(table)


@app.command("next-number")
def next_number(ctx: typer.Context) -> None:
    """Print the next free invoice number."""
    with _handle_errors():
        number = ctx.obj.next_invoice_number()
    console.print(number)


@app.command("export")
def export_data(ctx: typer.Context, path: str = typer.Argument(..., help="Backup file to write")) -> None:
    """Export all data to a JSON backup."""
    with _handle_errors():
        backup = ctx.obj.export_data()
    _write(Path(path), backup.model_dump_json(indent=2))


@app.command("import")
def import_data(ctx: typer.Context, path: str = typer.Argument(..., help="Backup file to read")) -> None:
    """Restore data from a JSON backup."""
    source = Path(path)
    if not source.exists():
        console.print(f"[red]Error: File not found: {path}[/red]")
        raise typer.Exit(1)
    with _handle_errors():
        imported = ctx.obj.import_data(source.read_text())
    if not imported:
        console.print("[red]Error: Backup file is not valid[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] Imported [bold]{source}[/bold]")


def _write(path: Path, content: str) -> None:
    path.write_text(content)
    console.print(f"[green]✓[/green] Saved to [bold]{path}[/bold]")


if __name__ == "__main__":
    app()
