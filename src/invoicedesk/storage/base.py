"""
Base store — abstract interface for invoice persistence.

Stores keep three keyed values: the invoice collection, the client
collection and the business profile. Every write replaces a whole
collection; there are no field-level updates and no locking. Concurrent
writers get last-write-wins, which is acceptable for a single user.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from invoicedesk.models.business import BusinessProfile
    from invoicedesk.models.client import Client
    from invoicedesk.models.invoice import Invoice


class BaseStore(ABC):
    """Abstract base class for storage backends.

    To create a new backend, subclass this and implement the load/save pairs
    plus ``clear()``. Loads must return the most recently saved full
    collection (or an empty one when nothing was ever saved), never a partial
    write. Stored data that cannot be decoded raises :class:`StorageError`.

    Example::

        class SQLiteStore(BaseStore):
            name = "sqlite"

            def load_invoices(self) -> list[Invoice]:
                ...
    """

    name: str = "base"

    @abstractmethod
    def load_invoices(self) -> list[Invoice]:
        ...

    @abstractmethod
    def save_invoices(self, invoices: list[Invoice]) -> None:
        ...

    @abstractmethod
    def load_clients(self) -> list[Client]:
        ...

    @abstractmethod
    def save_clients(self, clients: list[Client]) -> None:
        ...

    @abstractmethod
    def load_business_profile(self) -> BusinessProfile | None:
        """The stored profile, or ``None`` when the user never saved one."""
        ...

    @abstractmethod
    def save_business_profile(self, profile: BusinessProfile) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove every stored key."""
        ...

    def is_empty(self) -> bool:
        return not self.load_invoices() and not self.load_clients()
