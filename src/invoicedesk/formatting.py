"""
Presentation helpers that turn the calculators' numbers and dates into strings.

The calculators only ever return ``Decimal`` and ``date`` values; rendering
them for people happens here and nowhere else.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from invoicedesk.models.invoice import InvoiceStatus, PaymentTerms

# Currency symbols and minor-unit digits
CURRENCY_INFO: dict[str, dict[str, Any]] = {
    "USD": {"symbol": "$", "name": "US Dollar", "decimals": 2},
    "EUR": {"symbol": "€", "name": "Euro", "decimals": 2},
    "GBP": {"symbol": "£", "name": "British Pound", "decimals": 2},
    "CAD": {"symbol": "CA$", "name": "Canadian Dollar", "decimals": 2},
    "AUD": {"symbol": "A$", "name": "Australian Dollar", "decimals": 2},
    "JPY": {"symbol": "¥", "name": "Japanese Yen", "decimals": 0},
    "CHF": {"symbol": "CHF ", "name": "Swiss Franc", "decimals": 2},
    "INR": {"symbol": "₹", "name": "Indian Rupee", "decimals": 2},
    "MXN": {"symbol": "MX$", "name": "Mexican Peso", "decimals": 2},
    "NZD": {"symbol": "NZ$", "name": "New Zealand Dollar", "decimals": 2},
}

_STATUS_LABELS = {
    InvoiceStatus.DRAFT: "Draft",
    InvoiceStatus.SENT: "Sent",
    InvoiceStatus.PAID: "Paid",
    InvoiceStatus.OVERDUE: "Overdue",
    InvoiceStatus.CANCELLED: "Cancelled",
}

# rich style names used for status badges
_STATUS_COLORS = {
    InvoiceStatus.DRAFT: "white",
    InvoiceStatus.SENT: "blue",
    InvoiceStatus.PAID: "green",
    InvoiceStatus.OVERDUE: "red",
    InvoiceStatus.CANCELLED: "dim",
}

_TERMS_LABELS = {
    PaymentTerms.DUE_ON_RECEIPT: "Due on Receipt",
    PaymentTerms.NET_7: "Net 7",
    PaymentTerms.NET_14: "Net 14",
    PaymentTerms.NET_30: "Net 30",
    PaymentTerms.NET_60: "Net 60",
    PaymentTerms.NET_90: "Net 90",
}


def format_currency(amount: Decimal | float | int, currency: str = "USD") -> str:
    """Format an amount, e.g. ``Decimal("-1234.5")`` -> ``"-$1,234.50"``.

    Unknown currency codes are used as their own prefix.
    """
    info = CURRENCY_INFO.get(currency.upper(), {})
    symbol = info.get("symbol", f"{currency.upper()} ")
    decimals = info.get("decimals", 2)
    value = Decimal(str(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.{decimals}f}"


def format_date(value: date) -> str:
    """Long form, e.g. ``January 15, 2024``."""
    return f"{value:%B} {value.day}, {value.year}"


def format_date_short(value: date) -> str:
    """Short form, e.g. ``Jan 15, 2024``."""
    return f"{value:%b} {value.day}, {value.year}"


def status_label(status: InvoiceStatus | str) -> str:
    try:
        return _STATUS_LABELS[InvoiceStatus(status)]
    except ValueError:
        return "Unknown"


def status_color(status: InvoiceStatus | str) -> str:
    try:
        return _STATUS_COLORS[InvoiceStatus(status)]
    except ValueError:
        return "white"


def payment_terms_label(terms: PaymentTerms | str) -> str:
    try:
        return _TERMS_LABELS[PaymentTerms(str(getattr(terms, "value", terms)))]
    except ValueError:
        return "Net 30"
