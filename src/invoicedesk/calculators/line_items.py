"""
Line-item calculator — per-row amount and tax.

Results are left unrounded; rounding happens once the invoice totals are
finalised. Zero or negative quantities and rates compute without complaint,
rejecting them is the form layer's job.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from invoicedesk.calculators.money import to_decimal

HUNDRED = Decimal("100")


def _field(item: Any, name: str) -> Decimal:
    if isinstance(item, Mapping):
        value = item.get(name)
    else:
        value = getattr(item, name, None)
    return to_decimal(value)


def item_amount(item: Any) -> Decimal:
    """``quantity × rate`` for an item, model or mapping."""
    return _field(item, "quantity") * _field(item, "rate")


def item_tax(item: Any) -> Decimal:
    """Tax owed on a single item, at that item's own rate."""
    return item_amount(item) * (_field(item, "tax_rate") / HUNDRED)
