"""
Client model — the businesses and people invoices are addressed to.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class Address(BaseModel):
    """A postal address."""

    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = ""

    @property
    def lines(self) -> list[str]:
        """Address formatted as printable lines, skipping empty parts."""
        city_line = " ".join(p for p in (f"{self.city}," if self.city else "", self.state, self.zip_code) if p)
        return [line for line in (self.street, city_line, self.country) if line]


class Client(BaseModel):
    """A client that can be invoiced."""

    id: str
    name: str
    company: str = ""
    email: str = ""
    phone: str | None = None
    address: Address = Field(default_factory=Address)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def display_name(self) -> str:
        return f"{self.company} ({self.name})" if self.company else self.name

    def matches(self, term: str) -> bool:
        """Case-insensitive match against name, company and email."""
        needle = term.lower()
        return (
            needle in self.name.lower()
            or needle in self.company.lower()
            or needle in self.email.lower()
        )
