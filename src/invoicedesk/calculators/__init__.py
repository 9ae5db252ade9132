"""
InvoiceDesk calculators — the pure invoice arithmetic and status engine.

No I/O and no global state: every function here takes its inputs (including
the current time) as arguments and returns new values.
"""

from invoicedesk.calculators.dashboard import DashboardAggregator, calculate_dashboard_stats
from invoicedesk.calculators.line_items import item_amount, item_tax
from invoicedesk.calculators.money import round2, to_decimal
from invoicedesk.calculators.numbering import next_invoice_number
from invoicedesk.calculators.terms import (
    calculate_due_date,
    days_overdue,
    is_overdue,
    reconcile_overdue,
    term_days,
)
from invoicedesk.calculators.totals import (
    calculate_discount_amount,
    calculate_invoice_total,
    calculate_subtotal,
    calculate_total_tax,
)

__all__ = [
    "DashboardAggregator",
    "calculate_dashboard_stats",
    "calculate_discount_amount",
    "calculate_due_date",
    "calculate_invoice_total",
    "calculate_subtotal",
    "calculate_total_tax",
    "days_overdue",
    "is_overdue",
    "item_amount",
    "item_tax",
    "next_invoice_number",
    "reconcile_overdue",
    "round2",
    "term_days",
    "to_decimal",
]
