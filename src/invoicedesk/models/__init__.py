"""Invoices, clients, the business profile and dashboard read models."""
from invoicedesk.models.business import BusinessProfile, default_business_profile
from invoicedesk.models.client import Address, Client
from invoicedesk.models.dashboard import DashboardStats, DataExport
from invoicedesk.models.invoice import (
    DiscountPolicy,
    DiscountType,
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    InvoiceTotals,
    PaymentTerms,
)

__all__ = [
    "Address",
    "BusinessProfile",
    "Client",
    "DashboardStats",
    "DataExport",
    "DiscountPolicy",
    "DiscountType",
    "Invoice",
    "InvoiceItem",
    "InvoiceStatus",
    "InvoiceTotals",
    "PaymentTerms",
    "default_business_profile",
]
