"""
Form validation — reject malformed user input before it reaches the
calculators.

The calculators compute over whatever numbers they are given; these pydantic
models are the place where empty descriptions, non-positive quantities and
out-of-range percentages are turned away.
"""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from invoicedesk.models.client import Address
from invoicedesk.models.invoice import DiscountType, InvoiceItem, PaymentTerms

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\+?[\d\s\-()]+$")
URL_RE = re.compile(r"^https?://[^\s/$.?#].[^\s]*$", re.IGNORECASE)

MAX_AMOUNT = Decimal("999999")
MAX_ITEMS = 50


def validate_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def validate_phone(phone: str) -> bool:
    return bool(PHONE_RE.match(phone.strip()))


def _as_decimal(value: Any) -> Decimal | None:
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def validate_invoice_item(item: dict[str, Any]) -> list[str]:
    """Check a raw item mapping and return human-readable problems."""
    errors: list[str] = []

    description = item.get("description") or ""
    if not str(description).strip():
        errors.append("Description is required")

    quantity = _as_decimal(item.get("quantity") or 0)
    if quantity is None or quantity <= 0:
        errors.append("Quantity must be greater than 0")

    rate = _as_decimal(item.get("rate") or 0)
    if rate is None or rate <= 0:
        errors.append("Rate must be greater than 0")

    tax_rate = item.get("tax_rate")
    if tax_rate is not None:
        tax = _as_decimal(tax_rate)
        if tax is None or not (0 <= tax <= 100):
            errors.append("Tax rate must be between 0 and 100")

    return errors


def error_messages(exc: ValidationError) -> list[str]:
    """Flatten a pydantic ValidationError into ``field: message`` strings."""
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        msg = err["msg"].removeprefix("Value error, ")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return messages


def _check_email(value: str) -> str:
    if not validate_email(value):
        raise ValueError("Please enter a valid email address")
    return value


def _check_phone(value: str) -> str:
    if len(value) < 10:
        raise ValueError("Phone number must be at least 10 digits")
    if not validate_phone(value):
        raise ValueError("Please enter a valid phone number")
    return value


class AddressInput(BaseModel):
    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)
    country: str = Field(min_length=1)

    def to_address(self) -> Address:
        return Address(**self.model_dump())


class InvoiceItemInput(BaseModel):
    """One row of the invoice form."""

    description: str = Field(min_length=1)
    quantity: Decimal = Field(ge=Decimal("0.01"), le=MAX_AMOUNT)
    rate: Decimal = Field(ge=Decimal("0.01"), le=MAX_AMOUNT)
    tax_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100)

    @field_validator("description")
    @classmethod
    def check_description(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Description is required")
        return value.strip()

    def to_item(self, item_id: str) -> InvoiceItem:
        return InvoiceItem(id=item_id, **self.model_dump())


class InvoiceFormData(BaseModel):
    """Everything the user enters to create or edit an invoice.

    ``due_date`` may be omitted, in which case it is derived from
    ``payment_terms``.
    """

    client_id: str = Field(min_length=1)
    issue_date: date
    due_date: date | None = None
    payment_terms: PaymentTerms = PaymentTerms.NET_30
    items: list[InvoiceItemInput] = Field(min_length=1, max_length=MAX_ITEMS)
    discount_type: DiscountType = DiscountType.FIXED
    discount_value: Decimal = Field(default=Decimal("0"), ge=0, le=MAX_AMOUNT)
    notes: str = Field(default="", max_length=1000)
    terms: str = Field(default="", max_length=2000)

    @model_validator(mode="after")
    def check_dates_and_discount(self) -> InvoiceFormData:
        if self.due_date is not None and self.due_date < self.issue_date:
            raise ValueError("Due date cannot be before issue date")
        if self.discount_type == DiscountType.PERCENTAGE and self.discount_value > 100:
            raise ValueError("Percentage discount cannot exceed 100%")
        return self


class ClientFormData(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    company: str = Field(min_length=1, max_length=200)
    email: str
    phone: str | None = None
    address: AddressInput

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("phone")
    @classmethod
    def check_optional_phone(cls, value: str | None) -> str | None:
        if not value:
            return None
        return _check_phone(value)


class BusinessProfileFormData(BaseModel):
    company_name: str = Field(min_length=1, max_length=200)
    owner_name: str = Field(min_length=1, max_length=100)
    email: str
    phone: str
    website: str | None = None
    address: AddressInput
    tax_number: str | None = Field(default=None, max_length=50)
    currency: str = Field(min_length=1)
    default_tax_rate: Decimal = Field(ge=0, le=100)
    payment_terms: PaymentTerms = PaymentTerms.NET_30
    invoice_terms: str = Field(default="", max_length=2000)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value: str) -> str:
        return _check_phone(value)

    @field_validator("website")
    @classmethod
    def check_website(cls, value: str | None) -> str | None:
        if not value:
            return None
        if not URL_RE.match(value):
            raise ValueError("Please enter a valid website URL")
        return value
