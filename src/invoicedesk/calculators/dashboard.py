"""
Dashboard aggregator — reduce the invoice collection to business statistics.

Overdue figures are recomputed live with :func:`is_overdue` rather than read
from the stored status, which may be stale until the next reconciliation.
Nothing here mutates the invoices it is given.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime
from decimal import Decimal

from invoicedesk.calculators.money import ZERO, round2
from invoicedesk.calculators.terms import is_overdue
from invoicedesk.models.dashboard import DashboardStats
from invoicedesk.models.invoice import Invoice, InvoiceStatus

logger = logging.getLogger("invoicedesk.calculators.dashboard")

_PENDING_STATUSES = (InvoiceStatus.SENT, InvoiceStatus.DRAFT)


class DashboardAggregator:
    """Compute dashboard statistics from a collection of invoices.

    Usage::

        stats = DashboardAggregator.calculate(invoices, now=datetime.now())
        stats.total_revenue      # Decimal("9101.25")
        stats.overdue_invoices   # 1

    All monetary fields are rounded to cents. ``average_invoice_value`` is 0
    when no invoice has been paid.
    """

    @classmethod
    def calculate(
        cls,
        invoices: Iterable[Invoice],
        now: datetime | None = None,
    ) -> DashboardStats:
        now = now or datetime.now()
        invoices = list(invoices)

        paid = [inv for inv in invoices if inv.status == InvoiceStatus.PAID]
        overdue = [inv for inv in invoices if is_overdue(inv, now)]
        pending = sum(1 for inv in invoices if inv.status in _PENDING_STATUSES)

        total_revenue = cls._sum_totals(paid)
        monthly_revenue = cls._sum_totals(
            inv for inv in paid if cls._same_month(inv.issue_date, now)
        )
        overdue_amount = cls._sum_totals(overdue)
        average = total_revenue / len(paid) if paid else ZERO

        stats = DashboardStats(
            total_revenue=round2(total_revenue),
            monthly_revenue=round2(monthly_revenue),
            total_invoices=len(invoices),
            paid_invoices=len(paid),
            pending_invoices=pending,
            overdue_invoices=len(overdue),
            overdue_amount=round2(overdue_amount),
            average_invoice_value=round2(average),
        )
        logger.debug(
            "Dashboard: %d invoices, %d paid, %d overdue",
            stats.total_invoices,
            stats.paid_invoices,
            stats.overdue_invoices,
        )
        return stats

    @staticmethod
    def recent(invoices: Iterable[Invoice], limit: int = 5) -> list[Invoice]:
        """Most recently created invoices, newest first."""
        return sorted(invoices, key=lambda inv: inv.created_at, reverse=True)[:limit]

    @classmethod
    def revenue_by_month(cls, invoices: Iterable[Invoice], year: int) -> list[Decimal]:
        """Paid revenue per calendar month (index 0 = January) for ``year``."""
        months = [ZERO] * 12
        for inv in invoices:
            if inv.status == InvoiceStatus.PAID and inv.issue_date.year == year:
                months[inv.issue_date.month - 1] += inv.total
        return [round2(m) for m in months]

    @staticmethod
    def _sum_totals(invoices: Iterable[Invoice]) -> Decimal:
        return sum((inv.total for inv in invoices), ZERO)

    @staticmethod
    def _same_month(day: date, now: date) -> bool:
        return day.year == now.year and day.month == now.month


def calculate_dashboard_stats(
    invoices: Iterable[Invoice],
    now: datetime | None = None,
) -> DashboardStats:
    """Convenience function for dashboard statistics.

    See DashboardAggregator.calculate() for details.
    """
    return DashboardAggregator.calculate(invoices, now=now)
