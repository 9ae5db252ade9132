"""
In-memory store — keeps everything in a dict, for tests and scratch sessions.
"""

from __future__ import annotations

from typing import Any

from invoicedesk.models.business import BusinessProfile
from invoicedesk.models.client import Client
from invoicedesk.models.invoice import Invoice
from invoicedesk.storage.base import BaseStore


class InMemoryStore(BaseStore):
    """Dict-backed store. Values are deep-copied on the way in and out so
    callers can't mutate stored state behind the store's back."""

    name = "memory"

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def load_invoices(self) -> list[Invoice]:
        return [inv.model_copy(deep=True) for inv in self._data.get("invoices", [])]

    def save_invoices(self, invoices: list[Invoice]) -> None:
        self._data["invoices"] = [inv.model_copy(deep=True) for inv in invoices]

    def load_clients(self) -> list[Client]:
        return [c.model_copy(deep=True) for c in self._data.get("clients", [])]

    def save_clients(self, clients: list[Client]) -> None:
        self._data["clients"] = [c.model_copy(deep=True) for c in clients]

    def load_business_profile(self) -> BusinessProfile | None:
        profile = self._data.get("business_profile")
        return profile.model_copy(deep=True) if profile else None

    def save_business_profile(self, profile: BusinessProfile) -> None:
        self._data["business_profile"] = profile.model_copy(deep=True)

    def clear(self) -> None:
        self._data.clear()
