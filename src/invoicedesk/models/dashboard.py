"""
Dashboard read models. Derived on demand, never persisted.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from invoicedesk.models.business import BusinessProfile
from invoicedesk.models.client import Client
from invoicedesk.models.invoice import Invoice


class DashboardStats(BaseModel):
    """Aggregate business statistics recomputed from the invoice collection."""

    total_revenue: Decimal = Decimal("0.00")
    monthly_revenue: Decimal = Decimal("0.00")
    total_invoices: int = 0
    paid_invoices: int = 0
    pending_invoices: int = 0
    overdue_invoices: int = 0
    overdue_amount: Decimal = Decimal("0.00")
    average_invoice_value: Decimal = Decimal("0.00")


class DataExport(BaseModel):
    """Backup envelope for everything in the store."""

    invoices: list[Invoice] = Field(default_factory=list)
    clients: list[Client] = Field(default_factory=list)
    business_profile: BusinessProfile | None = None
    exported_at: datetime = Field(default_factory=datetime.now)
    version: str = "1.0"
