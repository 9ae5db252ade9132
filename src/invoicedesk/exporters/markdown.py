"""
Markdown exporter.

Renders an invoice, or the dashboard, as Markdown suitable for emailing,
pasting into a ticket, or converting to PDF with any Markdown tool.
"""

from __future__ import annotations

from decimal import Decimal

from invoicedesk.formatting import (
    format_currency,
    format_date,
    payment_terms_label,
    status_label,
)
from invoicedesk.models.business import BusinessProfile
from invoicedesk.models.client import Client
from invoicedesk.models.dashboard import DashboardStats
from invoicedesk.models.invoice import DiscountType, Invoice

UNKNOWN_CLIENT = "Unknown Client"


def render_invoice_markdown(
    invoice: Invoice,
    client: Client | None,
    profile: BusinessProfile,
) -> str:
    """Render a single invoice as Markdown.

    A missing client is rendered as a placeholder rather than failing.
    """
    def money(amount: Decimal) -> str:
        return format_currency(amount, profile.currency)

    lines: list[str] = []

    # Header
    lines.append(f"# Invoice {invoice.invoice_number}")
    lines.append("")
    lines.append(f"**{profile.company_name}**  ")
    for line in profile.address.lines:
        lines.append(f"{line}  ")
    if profile.email:
        lines.append(f"{profile.email}  ")
    if profile.tax_number:
        lines.append(f"Tax ID: {profile.tax_number}  ")
    lines.append("")

    # Bill to
    lines.append("## Bill To")
    lines.append("")
    if client is None:
        lines.append(f"*{UNKNOWN_CLIENT}*")
    else:
        lines.append(f"**{client.display_name}**  ")
        for line in client.address.lines:
            lines.append(f"{line}  ")
        if client.email:
            lines.append(f"{client.email}  ")
    lines.append("")

    lines.append("| | |")
    lines.append("|---|---|")
    lines.append(f"| **Status** | {status_label(invoice.status)} |")
    lines.append(f"| **Issue Date** | {format_date(invoice.issue_date)} |")
    lines.append(f"| **Due Date** | {format_date(invoice.due_date)} |")
    lines.append(f"| **Payment Terms** | {payment_terms_label(invoice.payment_terms)} |")
    lines.append("")

    # Line items
    lines.append("## Items")
    lines.append("")
    lines.append("| Description | Qty | Rate | Tax | Amount |")
    lines.append("|-------------|----:|-----:|----:|-------:|")
    for item in invoice.items:
        lines.append(
            f"| {item.description} | {item.quantity.normalize():f} | {money(item.rate)} "
            f"| {item.tax_rate.normalize():f}% | {money(item.amount)} |"
        )
    lines.append("")

    # Totals
    lines.append("| | |")
    lines.append("|---|---:|")
    lines.append(f"| Subtotal | {money(invoice.subtotal)} |")
    lines.append(f"| Tax | {money(invoice.tax_amount)} |")
    if invoice.discount_amount:
        label = "Discount"
        if invoice.discount_type == DiscountType.PERCENTAGE:
            label = f"Discount ({invoice.discount_value.normalize():f}%)"
        lines.append(f"| {label} | {money(-invoice.discount_amount)} |")
    lines.append(f"| **Total** | **{money(invoice.total)}** |")
    lines.append("")

    if invoice.notes:
        lines.append("## Notes")
        lines.append("")
        lines.append(invoice.notes)
        lines.append("")

    if invoice.terms:
        lines.append("## Terms")
        lines.append("")
        lines.append(invoice.terms)
        lines.append("")

    return "\n".join(lines)


def render_dashboard_markdown(stats: DashboardStats, currency: str = "USD") -> str:
    """Render dashboard statistics as a Markdown table."""
    lines = [
        "# Dashboard",
        "",
        "| Metric | Value |",
        "|--------|-------|",
        f"| **Total Revenue** | {format_currency(stats.total_revenue, currency)} |",
        f"| **This Month** | {format_currency(stats.monthly_revenue, currency)} |",
        f"| **Invoices** | {stats.total_invoices} |",
        f"| **Paid** | {stats.paid_invoices} |",
        f"| **Pending** | {stats.pending_invoices} |",
        f"| **Overdue** | {stats.overdue_invoices} ({format_currency(stats.overdue_amount, currency)}) |",
        f"| **Average Invoice** | {format_currency(stats.average_invoice_value, currency)} |",
        "",
    ]
    return "\n".join(lines)
