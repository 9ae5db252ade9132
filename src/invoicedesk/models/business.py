"""
Business profile model — the invoicing business itself.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from invoicedesk.models.client import Address
from invoicedesk.models.invoice import PaymentTerms

DEFAULT_PROFILE_ID = "default-business-profile"
DEFAULT_INVOICE_TERMS = (
    "Payment is due within 30 days of invoice date. "
    "Late payments may incur a 1.5% monthly service charge."
)


class BusinessProfile(BaseModel):
    """Singleton profile describing the business that issues invoices.

    Exactly one is expected to be stored; when none is, callers fall back to
    :func:`default_business_profile`.
    """

    id: str = DEFAULT_PROFILE_ID
    company_name: str
    owner_name: str = ""
    email: str = ""
    phone: str = ""
    website: str | None = None
    logo: str | None = None
    address: Address = Field(default_factory=Address)
    tax_number: str | None = None
    currency: str = "USD"
    currency_symbol: str = "$"
    default_tax_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    payment_terms: PaymentTerms = PaymentTerms.NET_30
    invoice_terms: str = ""
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


def default_business_profile(now: datetime | None = None) -> BusinessProfile:
    """The placeholder profile used until the user saves their own."""
    now = now or datetime.now()
    return BusinessProfile(
        id=DEFAULT_PROFILE_ID,
        company_name="Your Company Name",
        owner_name="Your Name",
        email="contact@yourcompany.com",
        phone="+1 (555) 123-4567",
        website="https://yourcompany.com",
        logo="",
        address=Address(
            street="123 Business Street",
            city="Business City",
            state="BC",
            zip_code="12345",
            country="United States",
        ),
        tax_number="",
        currency="USD",
        currency_symbol="$",
        default_tax_rate=Decimal("8.25"),
        payment_terms=PaymentTerms.NET_30,
        invoice_terms=DEFAULT_INVOICE_TERMS,
        created_at=now,
        updated_at=now,
    )
