"""Tests for the dashboard aggregator."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from invoicedesk.calculators.dashboard import DashboardAggregator, calculate_dashboard_stats
from invoicedesk.models.dashboard import DashboardStats
from invoicedesk.models.invoice import Invoice, InvoiceStatus

NOW = datetime(2024, 6, 15, 12, 0)


def _invoice(
    number: str,
    status: InvoiceStatus,
    total: str,
    issued: date,
    due: date,
    created: datetime | None = None,
) -> Invoice:
    return Invoice(
        id=number,
        invoice_number=number,
        client_id="client-1",
        issue_date=issued,
        due_date=due,
        status=status,
        total=Decimal(total),
        created_at=created or datetime.combine(issued, datetime.min.time()),
    )


@pytest.fixture
def invoices() -> list[Invoice]:
    return [
        _invoice("A", InvoiceStatus.PAID, "1000.00", date(2024, 6, 1), date(2024, 7, 1)),
        _invoice("B", InvoiceStatus.PAID, "500.50", date(2024, 5, 1), date(2024, 5, 31)),
        _invoice("C", InvoiceStatus.SENT, "200.00", date(2024, 5, 2), date(2024, 6, 1)),
        _invoice("D", InvoiceStatus.DRAFT, "300.00", date(2024, 6, 10), date(2024, 7, 15)),
        _invoice("E", InvoiceStatus.CANCELLED, "999.00", date(2023, 12, 1), date(2024, 1, 1)),
        _invoice("F", InvoiceStatus.OVERDUE, "50.00", date(2024, 5, 10), date(2024, 6, 10)),
    ]


class TestDashboardStats:
    def test_full_breakdown(self, invoices: list[Invoice]) -> None:
        stats = calculate_dashboard_stats(invoices, NOW)

        assert isinstance(stats, DashboardStats)
        assert stats.total_revenue == Decimal("1500.50")
        assert stats.monthly_revenue == Decimal("1000.00")
        assert stats.total_invoices == 6
        assert stats.paid_invoices == 2
        assert stats.pending_invoices == 2  # sent + draft
        assert stats.overdue_invoices == 2  # C live-derived, F stored
        assert stats.overdue_amount == Decimal("250.00")
        assert stats.average_invoice_value == Decimal("750.25")

    def test_empty_collection(self) -> None:
        stats = calculate_dashboard_stats([], NOW)

        assert stats.total_revenue == 0
        assert stats.monthly_revenue == 0
        assert stats.total_invoices == 0
        assert stats.paid_invoices == 0
        assert stats.pending_invoices == 0
        assert stats.overdue_invoices == 0
        assert stats.overdue_amount == 0
        assert stats.average_invoice_value == 0

    def test_no_paid_invoices_average_is_zero(self) -> None:
        unpaid = [_invoice("X", InvoiceStatus.SENT, "10.00", date(2024, 6, 1), date(2099, 1, 1))]
        stats = calculate_dashboard_stats(unpaid, NOW)
        assert stats.average_invoice_value == Decimal("0.00")
        assert stats.total_invoices == 1

    def test_overdue_uses_current_time_not_stored_status(self) -> None:
        stale = [_invoice("S", InvoiceStatus.SENT, "80.00", date(2024, 1, 1), date(2024, 2, 1))]
        stats = calculate_dashboard_stats(stale, NOW)
        assert stats.overdue_invoices == 1
        assert stats.overdue_amount == Decimal("80.00")

    def test_monthly_revenue_needs_same_year(self) -> None:
        last_year = [_invoice("L", InvoiceStatus.PAID, "400.00", date(2023, 6, 5), date(2023, 7, 5))]
        stats = calculate_dashboard_stats(last_year, NOW)
        assert stats.monthly_revenue == 0
        assert stats.total_revenue == Decimal("400.00")

    def test_average_rounded(self) -> None:
        paid = [
            _invoice(n, InvoiceStatus.PAID, "10.00", date(2024, 6, 1), date(2024, 6, 1))
            for n in ("P1", "P2", "P3")
        ] + [_invoice("P4", InvoiceStatus.PAID, "0.01", date(2024, 6, 1), date(2024, 6, 1))]
        stats = calculate_dashboard_stats(paid, NOW)
        assert stats.average_invoice_value == Decimal("7.50")

    def test_inputs_not_mutated(self, invoices: list[Invoice]) -> None:
        before = [inv.model_copy(deep=True) for inv in invoices]
        calculate_dashboard_stats(invoices, NOW)
        assert invoices == before


class TestDashboardExtras:
    def test_recent_newest_first(self, invoices: list[Invoice]) -> None:
        recent = DashboardAggregator.recent(invoices, limit=3)
        assert [inv.invoice_number for inv in recent] == ["D", "A", "F"]

    def test_revenue_by_month(self, invoices: list[Invoice]) -> None:
        series = DashboardAggregator.revenue_by_month(invoices, 2024)

        assert len(series) == 12
        assert series[4] == Decimal("500.50")
        assert series[5] == Decimal("1000.00")
        assert sum(series) == Decimal("1500.50")
