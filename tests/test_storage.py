"""Tests for the storage backends."""

import json
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

import pytest

from invoicedesk import InvoiceDesk
from invoicedesk.config import InvoiceDeskConfig
from invoicedesk.exceptions import StorageError
from invoicedesk.models.business import default_business_profile
from invoicedesk.models.client import Client
from invoicedesk.models.invoice import Invoice, InvoiceItem, InvoiceStatus
from invoicedesk.storage import InMemoryStore, JSONFileStore, create_store


ADDRESS = {
    "street": "1 Main St",
    "city": "Springfield",
    "state": "IL",
    "zip_code": "62701",
    "country": "US",
}


def _invoice() -> Invoice:
    return Invoice(
        id="invoice-1",
        invoice_number="INV-2024-0001",
        client_id="client-1",
        issue_date=date(2024, 12, 1),
        due_date=date(2024, 12, 31),
        status=InvoiceStatus.SENT,
        items=[InvoiceItem(id="item-1", description="Consulting", quantity=Decimal("40"),
                           rate=Decimal("125"), tax_rate=Decimal("8.25"))],
        subtotal=Decimal("5000.00"),
        tax_amount=Decimal("412.50"),
        total=Decimal("5412.50"),
        created_at=datetime(2024, 12, 1, 10, 0),
        updated_at=datetime(2024, 12, 1, 10, 0),
    )


@pytest.fixture
def store(tmp_path: Path) -> JSONFileStore:
    return JSONFileStore(tmp_path / "data")


class TestJSONFileStore:
    def test_empty_store(self, store: JSONFileStore) -> None:
        assert store.load_invoices() == []
        assert store.load_clients() == []
        assert store.load_business_profile() is None
        assert store.is_empty()

    def test_invoices_round_trip(self, store: JSONFileStore) -> None:
        store.save_invoices([_invoice()])
        loaded = store.load_invoices()

        assert loaded == [_invoice()]
        assert loaded[0].items[0].tax_rate == Decimal("8.25")
        assert loaded[0].status == InvoiceStatus.SENT
        assert (store.directory / "invoices.json").exists()

    def test_clients_and_profile(self, store: JSONFileStore) -> None:
        client = Client(id="client-1", name="John Smith", company="Acme Corporation")
        profile = default_business_profile(datetime(2024, 1, 1))

        store.save_clients([client])
        store.save_business_profile(profile)

        assert store.load_clients() == [client]
        assert store.load_business_profile() == profile
        assert not store.is_empty()

    def test_save_replaces_whole_collection(self, store: JSONFileStore) -> None:
        store.save_clients([Client(id="a", name="A"), Client(id="b", name="B")])
        store.save_clients([Client(id="c", name="C")])
        assert [c.id for c in store.load_clients()] == ["c"]

    def test_corrupt_file_raises(self, store: JSONFileStore) -> None:
        store.directory.mkdir(parents=True)
        (store.directory / "invoices.json").write_text("{not json")
        (store.directory / "clients.json").write_text('[{"unexpected": true}]')

        with pytest.raises(StorageError) as exc_info:
            store.load_invoices()
        assert exc_info.value.context == {"key": "invoices", "action": "read"}
        with pytest.raises(StorageError):
            store.load_clients()

    def test_invalid_record_does_not_lose_collection(self, store: JSONFileStore) -> None:
        first = _invoice()
        second = _invoice().model_copy(update={"id": "invoice-2", "invoice_number": "INV-2024-0002"})
        store.save_invoices([first, second])

        path = store.directory / "invoices.json"
        records = json.loads(path.read_text())
        records[1]["status"] = "void"
        path.write_text(json.dumps(records))

        desk = InvoiceDesk(store=store)
        desk.save_client({"name": "Ann", "company": "Co", "email": "ann@co.com", "address": ADDRESS})
        client_id = desk.list_clients()[0].id
        with pytest.raises(StorageError):
            desk.create_invoice({
                "client_id": client_id,
                "issue_date": "2024-12-20",
                "items": [{"description": "Work", "quantity": "1", "rate": "10"}],
            })

        on_disk = json.loads(path.read_text())
        assert [r["invoice_number"] for r in on_disk] == ["INV-2024-0001", "INV-2024-0002"]

    def test_no_temp_files_left(self, store: JSONFileStore) -> None:
        store.save_invoices([_invoice()])
        assert sorted(p.name for p in store.directory.iterdir()) == ["invoices.json"]

    def test_failed_replace_removes_temp_file(
        self, store: JSONFileStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def fail_replace(src: str, dst: object) -> None:
            raise OSError("disk full")

        monkeypatch.setattr("invoicedesk.storage.json_store.os.replace", fail_replace)

        with pytest.raises(StorageError):
            store.save_invoices([_invoice()])
        assert list(store.directory.iterdir()) == []

    def test_write_failure_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        store = JSONFileStore(blocker / "data")

        with pytest.raises(StorageError) as exc_info:
            store.save_clients([])
        assert exc_info.value.context["key"] == "clients"

    def test_clear(self, store: JSONFileStore) -> None:
        store.save_invoices([_invoice()])
        store.save_business_profile(default_business_profile())
        store.clear()

        assert store.load_invoices() == []
        assert store.load_business_profile() is None
        store.clear()  # clearing twice is fine


class TestInMemoryStore:
    def test_round_trip(self) -> None:
        store = InMemoryStore()
        store.save_invoices([_invoice()])
        assert store.load_invoices() == [_invoice()]

    def test_copies_isolate_callers(self) -> None:
        store = InMemoryStore()
        invoice = _invoice()
        store.save_invoices([invoice])

        invoice.status = InvoiceStatus.PAID
        loaded = store.load_invoices()
        loaded[0].notes = "changed"

        fresh = store.load_invoices()[0]
        assert fresh.status == InvoiceStatus.SENT
        assert fresh.notes is None

    def test_clear(self) -> None:
        store = InMemoryStore()
        store.save_clients([Client(id="c", name="C")])
        store.save_business_profile(default_business_profile())
        store.clear()
        assert store.is_empty()
        assert store.load_business_profile() is None


class TestCreateStore:
    def test_memory_backend(self) -> None:
        config = InvoiceDeskConfig(storage={"backend": "memory"})
        assert isinstance(create_store(config), InMemoryStore)

    def test_json_backend(self, tmp_path: Path) -> None:
        config = InvoiceDeskConfig(storage={"backend": "json", "directory": str(tmp_path)})
        store = create_store(config)
        assert isinstance(store, JSONFileStore)
        assert store.directory == tmp_path
