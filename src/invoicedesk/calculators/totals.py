"""
Invoice totals calculator — subtotal, tax, discount and grand total.

The four figures are each rounded independently from the unrounded sums, so
``total`` is never back-derived from already-rounded siblings. Discounts
apply to the pre-tax subtotal only and are not clamped: a 150% discount
produces a discount larger than the subtotal and possibly a negative total.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from invoicedesk.calculators.line_items import HUNDRED, item_amount, item_tax
from invoicedesk.calculators.money import ZERO, round2, to_decimal
from invoicedesk.models.invoice import DiscountPolicy, DiscountType, InvoiceTotals

logger = logging.getLogger("invoicedesk.calculators.totals")


def calculate_subtotal(items: Iterable[Any]) -> Decimal:
    return sum((item_amount(item) for item in items), ZERO)


def calculate_total_tax(items: Iterable[Any]) -> Decimal:
    return sum((item_tax(item) for item in items), ZERO)


def calculate_discount_amount(
    subtotal: Decimal,
    discount_type: DiscountType | str = DiscountType.FIXED,
    discount_value: Any = 0,
) -> Decimal:
    """Discount for a pre-tax subtotal.

    Anything other than ``percentage`` is treated as a fixed amount.
    """
    value = to_decimal(discount_value)
    if discount_type == DiscountType.PERCENTAGE:
        return to_decimal(subtotal) * value / HUNDRED
    return value


def calculate_invoice_total(
    items: Iterable[Any],
    discount_type: DiscountType | str | DiscountPolicy = DiscountType.FIXED,
    discount_value: Any = 0,
) -> InvoiceTotals:
    """Compute rounded totals for a set of line items.

    Args:
        items: Line items (models or mappings with ``quantity``, ``rate``
            and ``tax_rate``). Order does not affect the result.
        discount_type: ``percentage``/``fixed``, or a full ``DiscountPolicy``
            in which case ``discount_value`` is ignored.
        discount_value: Percent or currency amount, depending on the type.

    Returns:
        InvoiceTotals with subtotal, tax_amount, discount_amount and total.
    """
    if isinstance(discount_type, DiscountPolicy):
        discount_value = discount_type.value
        discount_type = discount_type.type

    items = list(items)
    subtotal = calculate_subtotal(items)
    tax_amount = calculate_total_tax(items)
    discount_amount = calculate_discount_amount(subtotal, discount_type, discount_value)
    total = subtotal + tax_amount - discount_amount

    if total < ZERO:
        logger.debug("Discount %s exceeds invoice value, total is %s", discount_amount, total)

    return InvoiceTotals(
        subtotal=round2(subtotal),
        tax_amount=round2(tax_amount),
        discount_amount=round2(discount_amount),
        total=round2(total),
    )
