"""
InvoiceDesk — Main orchestrator.

The InvoiceDesk class wires the storage backend to the calculators. It is
the only layer that both reads and writes: each operation loads the whole
collection, derives complete replacement records with the pure calculators,
and saves the whole collection back (last write wins).
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import ValidationError

from invoicedesk.calculators import (
    calculate_dashboard_stats,
    calculate_due_date,
    calculate_invoice_total,
    next_invoice_number,
    reconcile_overdue,
)
from invoicedesk.config import InvoiceDeskConfig
from invoicedesk.exceptions import (
    ClientNotFoundError,
    InvalidStatusTransitionError,
    InvoiceNotFoundError,
    InvoiceValidationError,
)
from invoicedesk.formatting import CURRENCY_INFO
from invoicedesk.models.business import BusinessProfile, default_business_profile
from invoicedesk.models.client import Address, Client
from invoicedesk.models.dashboard import DashboardStats, DataExport
from invoicedesk.models.invoice import (
    DiscountType,
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    PaymentTerms,
)
from invoicedesk.storage import BaseStore, create_store
from invoicedesk.validators import (
    BusinessProfileFormData,
    ClientFormData,
    InvoiceFormData,
    error_messages,
)

logger = logging.getLogger("invoicedesk")

# target status -> statuses it may be reached from
_TRANSITIONS: dict[InvoiceStatus, tuple[InvoiceStatus, ...]] = {
    InvoiceStatus.SENT: (InvoiceStatus.DRAFT,),
    InvoiceStatus.PAID: (InvoiceStatus.SENT, InvoiceStatus.OVERDUE),
    InvoiceStatus.CANCELLED: (InvoiceStatus.DRAFT, InvoiceStatus.SENT, InvoiceStatus.OVERDUE),
}


def _new_id(kind: str) -> str:
    return f"{kind}-{uuid.uuid4().hex[:12]}"


def _currency_symbol(currency: str) -> str:
    return CURRENCY_INFO.get(currency, {}).get("symbol", currency).strip()


def _parse(model: type[Any], data: Any) -> Any:
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InvoiceValidationError(error_messages(e)) from e


@dataclass
class InvoiceDesk:
    """Top-level entry point for invoicing operations.

    Usage::

        from invoicedesk import InvoiceDesk

        desk = InvoiceDesk.from_config("invoicedesk.yaml")
        invoice = desk.create_invoice({
            "client_id": "client-1",
            "issue_date": "2024-06-01",
            "payment_terms": "30",
            "items": [{"description": "Design", "quantity": 10, "rate": 95, "tax_rate": 8.25}],
        })
        desk.mark_sent(invoice.invoice_number)
        desk.reconcile_overdue()
        stats = desk.dashboard()

    The store is injected (or built from config); the calculators never see
    it.
    """

    config: InvoiceDeskConfig = field(default_factory=InvoiceDeskConfig)
    store: BaseStore | None = None

    def __post_init__(self) -> None:
        if self.store is None:
            self.store = create_store(self.config)

    @property
    def _store(self) -> BaseStore:
        assert self.store is not None
        return self.store

    @classmethod
    def from_config(cls, config_path: str | None = None, **overrides: Any) -> InvoiceDesk:
        """Create an InvoiceDesk from a config file or keyword arguments."""
        config = InvoiceDeskConfig.load(config_path, **overrides)
        instance = cls(config=config)
        logger.info("InvoiceDesk initialized with %s storage", instance._store.name)
        return instance

    # ------------------------------------------------------------------
    # Invoices
    # ------------------------------------------------------------------

    def list_invoices(
        self,
        status: InvoiceStatus | str | list[InvoiceStatus | str] | None = None,
        client_id: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        search: str | None = None,
    ) -> list[Invoice]:
        """Invoices matching the filters, newest issue date first."""
        invoices = self._store.load_invoices()

        if status is not None:
            wanted = {InvoiceStatus(s) for s in (status if isinstance(status, list) else [status])}
            invoices = [inv for inv in invoices if inv.status in wanted]
        if client_id:
            invoices = [inv for inv in invoices if inv.client_id == client_id]
        if date_from:
            invoices = [inv for inv in invoices if inv.issue_date >= date_from]
        if date_to:
            invoices = [inv for inv in invoices if inv.issue_date <= date_to]
        if search:
            clients = {c.id: c for c in self._store.load_clients()}
            needle = search.lower()
            invoices = [
                inv for inv in invoices
                if needle in inv.invoice_number.lower()
                or (inv.client_id in clients and clients[inv.client_id].matches(search))
            ]

        return sorted(invoices, key=lambda inv: (inv.issue_date, inv.invoice_number), reverse=True)

    def get_invoice(self, invoice_id: str) -> Invoice | None:
        return next((inv for inv in self._store.load_invoices() if inv.id == invoice_id), None)

    def get_invoice_by_number(self, invoice_number: str) -> Invoice | None:
        return next(
            (inv for inv in self._store.load_invoices() if inv.invoice_number == invoice_number),
            None,
        )

    def find_invoice(self, ref: str) -> Invoice:
        """Look an invoice up by id or number."""
        invoice = self.get_invoice(ref) or self.get_invoice_by_number(ref)
        if invoice is None:
            raise InvoiceNotFoundError(ref)
        return invoice

    def next_invoice_number(self, now: datetime | None = None) -> str:
        return next_invoice_number(
            self._store.load_invoices(), now or datetime.now(), prefix=self.config.invoice_prefix
        )

    def create_invoice(
        self,
        form: InvoiceFormData | dict[str, Any],
        now: datetime | None = None,
    ) -> Invoice:
        """Create a draft invoice from form input.

        Totals and (when not given) the due date are derived; the invoice
        number is the next free one for ``now``'s year.
        """
        now = now or datetime.now()
        data: InvoiceFormData = _parse(InvoiceFormData, form)
        self._require_client(data.client_id)

        invoices = self._store.load_invoices()
        items = [row.to_item(_new_id("item")) for row in data.items]
        totals = calculate_invoice_total(items, data.discount_type, data.discount_value)

        invoice = Invoice(
            id=_new_id("invoice"),
            invoice_number=next_invoice_number(invoices, now, prefix=self.config.invoice_prefix),
            client_id=data.client_id,
            issue_date=data.issue_date,
            due_date=data.due_date or calculate_due_date(data.issue_date, data.payment_terms),
            status=InvoiceStatus.DRAFT,
            items=items,
            discount_type=data.discount_type,
            discount_value=data.discount_value,
            payment_terms=data.payment_terms,
            notes=data.notes or None,
            terms=data.terms or self.business_profile().invoice_terms or None,
            created_at=now,
            updated_at=now,
            **totals.model_dump(),
        )

        invoices.append(invoice)
        self._store.save_invoices(invoices)
        logger.info("Created invoice %s for %s: total %s", invoice.invoice_number, invoice.client_id, invoice.total)
        return invoice

    def update_invoice(
        self,
        ref: str,
        form: InvoiceFormData | dict[str, Any],
        now: datetime | None = None,
    ) -> Invoice:
        """Replace an invoice's editable fields and re-derive its totals.

        Identity, number, status and lifecycle timestamps are kept.
        """
        now = now or datetime.now()
        data: InvoiceFormData = _parse(InvoiceFormData, form)
        self._require_client(data.client_id)
        current = self.find_invoice(ref)

        items = [row.to_item(_new_id("item")) for row in data.items]
        totals = calculate_invoice_total(items, data.discount_type, data.discount_value)
        updated = current.model_copy(
            update={
                "client_id": data.client_id,
                "issue_date": data.issue_date,
                "due_date": data.due_date or calculate_due_date(data.issue_date, data.payment_terms),
                "items": items,
                "discount_type": data.discount_type,
                "discount_value": data.discount_value,
                "payment_terms": data.payment_terms,
                "notes": data.notes or None,
                "terms": data.terms or None,
                "updated_at": now,
                **totals.model_dump(),
            }
        )
        self._replace_invoice(updated)
        logger.info("Updated invoice %s: total %s", updated.invoice_number, updated.total)
        return updated

    def delete_invoice(self, ref: str) -> None:
        invoice = self.find_invoice(ref)
        invoices = [inv for inv in self._store.load_invoices() if inv.id != invoice.id]
        self._store.save_invoices(invoices)
        logger.info("Deleted invoice %s", invoice.invoice_number)

    def mark_sent(self, ref: str, now: datetime | None = None) -> Invoice:
        return self._transition(ref, InvoiceStatus.SENT, now)

    def mark_paid(self, ref: str, now: datetime | None = None) -> Invoice:
        return self._transition(ref, InvoiceStatus.PAID, now)

    def cancel_invoice(self, ref: str, now: datetime | None = None) -> Invoice:
        return self._transition(ref, InvoiceStatus.CANCELLED, now)

    def reconcile_overdue(self, now: datetime | None = None) -> int:
        """Persist the ``sent -> overdue`` transition for past-due invoices.

        Returns the number of invoices that changed.
        """
        invoices, changed = reconcile_overdue(self._store.load_invoices(), now or datetime.now())
        if changed:
            self._store.save_invoices(invoices)
        return changed

    def dashboard(self, now: datetime | None = None) -> DashboardStats:
        return calculate_dashboard_stats(self._store.load_invoices(), now or datetime.now())

    def _transition(self, ref: str, target: InvoiceStatus, now: datetime | None) -> Invoice:
        now = now or datetime.now()
        invoice = self.find_invoice(ref)
        if invoice.status not in _TRANSITIONS[target]:
            raise InvalidStatusTransitionError(invoice.invoice_number, invoice.status.value, target.value)

        update: dict[str, Any] = {"status": target, "updated_at": now}
        if target == InvoiceStatus.PAID:
            update["paid_at"] = now
        updated = invoice.model_copy(update=update)
        self._replace_invoice(updated)
        logger.info("Invoice %s: %s -> %s", invoice.invoice_number, invoice.status.value, target.value)
        return updated

    def _replace_invoice(self, invoice: Invoice) -> None:
        invoices = self._store.load_invoices()
        for i, existing in enumerate(invoices):
            if existing.id == invoice.id:
                invoices[i] = invoice
                break
        else:
            invoices.append(invoice)
        self._store.save_invoices(invoices)

    # ------------------------------------------------------------------
    # Clients
    # ------------------------------------------------------------------

    def list_clients(self) -> list[Client]:
        return sorted(self._store.load_clients(), key=lambda c: c.name.lower())

    def get_client(self, client_id: str) -> Client | None:
        return next((c for c in self._store.load_clients() if c.id == client_id), None)

    def search_clients(self, term: str) -> list[Client]:
        return [c for c in self.list_clients() if c.matches(term)]

    def save_client(
        self,
        form: ClientFormData | dict[str, Any],
        client_id: str | None = None,
        now: datetime | None = None,
    ) -> Client:
        """Create a client, or replace the editable fields of ``client_id``."""
        now = now or datetime.now()
        data: ClientFormData = _parse(ClientFormData, form)
        clients = self._store.load_clients()
        fields = {
            "name": data.name,
            "company": data.company,
            "email": data.email,
            "phone": data.phone,
            "address": data.address.to_address(),
            "updated_at": now,
        }

        if client_id is None:
            client = Client(id=_new_id("client"), created_at=now, **fields)
            clients.append(client)
            logger.info("Created client %s (%s)", client.id, client.name)
        else:
            index = next((i for i, c in enumerate(clients) if c.id == client_id), None)
            if index is None:
                raise ClientNotFoundError(client_id)
            client = clients[index].model_copy(update=fields)
            clients[index] = client
            logger.info("Updated client %s", client_id)

        self._store.save_clients(clients)
        return client

    def delete_client(self, client_id: str) -> None:
        clients = self._store.load_clients()
        remaining = [c for c in clients if c.id != client_id]
        if len(remaining) == len(clients):
            raise ClientNotFoundError(client_id)
        self._store.save_clients(remaining)
        logger.info("Deleted client %s", client_id)

    def _require_client(self, client_id: str) -> None:
        if self.get_client(client_id) is None:
            raise ClientNotFoundError(client_id)

    # ------------------------------------------------------------------
    # Business profile
    # ------------------------------------------------------------------

    def business_profile(self) -> BusinessProfile:
        """The saved profile, or the placeholder default when none is saved.

        The placeholder uses the configured currency.
        """
        stored = self._store.load_business_profile()
        if stored is not None:
            return stored
        currency = self.config.currency.upper()
        return default_business_profile().model_copy(
            update={"currency": currency, "currency_symbol": _currency_symbol(currency)}
        )

    def save_business_profile(
        self,
        form: BusinessProfileFormData | dict[str, Any],
        now: datetime | None = None,
    ) -> BusinessProfile:
        now = now or datetime.now()
        data: BusinessProfileFormData = _parse(BusinessProfileFormData, form)
        existing = self._store.load_business_profile()
        currency = data.currency.upper()

        profile = BusinessProfile(
            company_name=data.company_name,
            owner_name=data.owner_name,
            email=data.email,
            phone=data.phone,
            website=data.website,
            address=data.address.to_address(),
            tax_number=data.tax_number,
            currency=currency,
            currency_symbol=_currency_symbol(currency),
            default_tax_rate=data.default_tax_rate,
            payment_terms=data.payment_terms,
            invoice_terms=data.invoice_terms,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        self._store.save_business_profile(profile)
        logger.info("Saved business profile for %s", profile.company_name)
        return profile

    # ------------------------------------------------------------------
    # Backup and sample data
    # ------------------------------------------------------------------

    def export_data(self, now: datetime | None = None) -> DataExport:
        return DataExport(
            invoices=self._store.load_invoices(),
            clients=self._store.load_clients(),
            business_profile=self._store.load_business_profile(),
            exported_at=now or datetime.now(),
        )

    def import_data(self, data: DataExport | dict[str, Any] | str) -> bool:
        """Restore a backup. Only the collections present in ``data`` are
        replaced. Returns False (and logs why) if the payload is invalid."""
        try:
            if isinstance(data, str):
                backup = DataExport.model_validate_json(data)
            else:
                backup = DataExport.model_validate(data)
        except ValidationError as e:
            logger.error("Error importing data: %s", e)
            return False

        provided = backup.model_fields_set
        if "invoices" in provided:
            self._store.save_invoices(backup.invoices)
        if "clients" in provided:
            self._store.save_clients(backup.clients)
        if backup.business_profile is not None:
            self._store.save_business_profile(backup.business_profile)
        logger.info(
            "Imported %d invoices and %d clients", len(backup.invoices), len(backup.clients)
        )
        return True

    def initialize_sample_data(self) -> bool:
        """Seed two sample clients and invoices into an empty store.

        Returns True when data was written.
        """
        if not self._store.is_empty():
            return False

        clients = [
            Client(
                id="client-1",
                name="John Smith",
                company="Acme Corporation",
                email="john.smith@acme.com",
                phone="+1 (555) 234-5678",
                address=Address(
                    street="456 Corporate Blvd",
                    city="Business City",
                    state="CA",
                    zip_code="90210",
                    country="United States",
                ),
                created_at=datetime(2024, 1, 15),
                updated_at=datetime(2024, 1, 15),
            ),
            Client(
                id="client-2",
                name="Sarah Johnson",
                company="Tech Innovations LLC",
                email="sarah@techinnovations.com",
                phone="+1 (555) 345-6789",
                address=Address(
                    street="789 Innovation Drive",
                    city="Silicon Valley",
                    state="CA",
                    zip_code="94025",
                    country="United States",
                ),
                created_at=datetime(2024, 2, 10),
                updated_at=datetime(2024, 2, 10),
            ),
        ]

        first_items = [
            InvoiceItem(
                id="item-1",
                description="Web Development Services",
                quantity=Decimal("40"),
                rate=Decimal("125.00"),
                tax_rate=Decimal("8.25"),
            ),
            InvoiceItem(
                id="item-2",
                description="Project Management",
                quantity=Decimal("10"),
                rate=Decimal("150.00"),
                tax_rate=Decimal("8.25"),
            ),
        ]
        second_items = [
            InvoiceItem(
                id="item-3",
                description="UI/UX Design Consultation",
                quantity=Decimal("20"),
                rate=Decimal("100.00"),
                tax_rate=Decimal("8.25"),
            ),
        ]

        invoices = [
            Invoice(
                id="invoice-1",
                invoice_number="INV-2024-0001",
                client_id="client-1",
                issue_date=date(2024, 12, 1),
                due_date=calculate_due_date(date(2024, 12, 1), PaymentTerms.NET_30),
                status=InvoiceStatus.SENT,
                items=first_items,
                payment_terms=PaymentTerms.NET_30,
                notes="Thank you for your business!",
                terms="Payment is due within 30 days of invoice date.",
                created_at=datetime(2024, 12, 1),
                updated_at=datetime(2024, 12, 1),
                **calculate_invoice_total(first_items).model_dump(),
            ),
            Invoice(
                id="invoice-2",
                invoice_number="INV-2024-0002",
                client_id="client-2",
                issue_date=date(2024, 12, 10),
                due_date=calculate_due_date(date(2024, 12, 10), PaymentTerms.NET_7),
                status=InvoiceStatus.PAID,
                items=second_items,
                discount_type=DiscountType.FIXED,
                discount_value=Decimal("100.00"),
                payment_terms=PaymentTerms.NET_7,
                notes="Early payment discount applied.",
                terms="Payment is due within 7 days of invoice date.",
                created_at=datetime(2024, 12, 10),
                updated_at=datetime(2024, 12, 15),
                paid_at=datetime(2024, 12, 15),
                **calculate_invoice_total(second_items, DiscountType.FIXED, Decimal("100.00")).model_dump(),
            ),
        ]

        self._store.save_clients(clients)
        self._store.save_invoices(invoices)
        logger.info("Initialized sample data: %d clients, %d invoices", len(clients), len(invoices))
        return True
