"""
Invoice data models — line items, discount policy, invoices.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class InvoiceStatus(str, Enum):
    """Lifecycle status of an invoice."""

    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"  # Derived from time, see calculators.terms
    CANCELLED = "cancelled"


class PaymentTerms(str, Enum):
    """Payment terms code — offset from issue date to due date."""

    DUE_ON_RECEIPT = "due_on_receipt"
    NET_7 = "7"
    NET_14 = "14"
    NET_30 = "30"
    NET_60 = "60"
    NET_90 = "90"


class DiscountType(str, Enum):
    """How an invoice discount is expressed."""

    PERCENTAGE = "percentage"  # Percent of the pre-tax subtotal
    FIXED = "fixed"  # Absolute currency amount


class DiscountPolicy(BaseModel):
    """A discount applied to the pre-tax subtotal."""

    type: DiscountType = DiscountType.FIXED
    value: Decimal = Decimal("0")

    @classmethod
    def percentage(cls, value: Decimal | float | int | str) -> DiscountPolicy:
        return cls(type=DiscountType.PERCENTAGE, value=Decimal(str(value)))

    @classmethod
    def fixed(cls, value: Decimal | float | int | str) -> DiscountPolicy:
        return cls(type=DiscountType.FIXED, value=Decimal(str(value)))


class InvoiceItem(BaseModel):
    """A single billable row on an invoice.

    ``amount`` is always recomputed from ``quantity`` and ``rate``; any value
    passed in is overwritten.
    """

    id: str = ""
    description: str = ""
    quantity: Decimal = Decimal("0")
    rate: Decimal = Decimal("0")
    tax_rate: Decimal = Field(default=Decimal("0"), description="Tax percent, 0-100")
    amount: Decimal = Decimal("0")

    @model_validator(mode="after")
    def derive_amount(self) -> InvoiceItem:
        from invoicedesk.calculators.line_items import item_amount

        self.amount = item_amount(self)
        return self


class InvoiceTotals(BaseModel):
    """Rounded totals for a set of line items and a discount policy."""

    subtotal: Decimal = Decimal("0.00")
    tax_amount: Decimal = Decimal("0.00")
    discount_amount: Decimal = Decimal("0.00")
    total: Decimal = Decimal("0.00")


class Invoice(BaseModel):
    """An invoice issued to a client."""

    id: str
    invoice_number: str
    client_id: str
    issue_date: date
    due_date: date
    status: InvoiceStatus = InvoiceStatus.DRAFT
    items: list[InvoiceItem] = Field(default_factory=list)

    discount_type: DiscountType = DiscountType.FIXED
    discount_value: Decimal = Decimal("0")

    # Derived totals, see calculators.totals
    subtotal: Decimal = Decimal("0.00")
    tax_amount: Decimal = Decimal("0.00")
    discount_amount: Decimal = Decimal("0.00")
    total: Decimal = Decimal("0.00")

    payment_terms: PaymentTerms = PaymentTerms.NET_30
    notes: str | None = None
    terms: str | None = None

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    paid_at: datetime | None = None

    @property
    def discount_policy(self) -> DiscountPolicy:
        return DiscountPolicy(type=self.discount_type, value=self.discount_value)

    @property
    def totals(self) -> InvoiceTotals:
        return InvoiceTotals(
            subtotal=self.subtotal,
            tax_amount=self.tax_amount,
            discount_amount=self.discount_amount,
            total=self.total,
        )

    @property
    def is_open(self) -> bool:
        """Whether the invoice can still receive a payment."""
        return self.status in (InvoiceStatus.SENT, InvoiceStatus.OVERDUE)
