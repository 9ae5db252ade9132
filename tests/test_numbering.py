"""Tests for invoice numbering."""

from datetime import date, datetime

from invoicedesk.calculators.numbering import next_invoice_number
from invoicedesk.models.invoice import Invoice

NOW = datetime(2024, 6, 1)


def _invoice(number: str) -> Invoice:
    return Invoice(
        id=number.lower(),
        invoice_number=number,
        client_id="client-1",
        issue_date=date(2024, 1, 1),
        due_date=date(2024, 1, 31),
    )


class TestNextInvoiceNumber:
    def test_first_of_year(self) -> None:
        assert next_invoice_number([], NOW) == "INV-2024-0001"

    def test_increments(self) -> None:
        assert next_invoice_number([_invoice("INV-2024-0001")], NOW) == "INV-2024-0002"

    def test_uses_highest_not_count(self) -> None:
        existing = [_invoice("INV-2024-0007"), _invoice("INV-2024-0002")]
        assert next_invoice_number(existing, NOW) == "INV-2024-0008"

    def test_other_years_ignored(self) -> None:
        existing = [_invoice("INV-2023-0005"), _invoice("INV-2025-0009")]
        assert next_invoice_number(existing, NOW) == "INV-2024-0001"

    def test_sequence_resets_in_new_year(self) -> None:
        existing = [_invoice("INV-2024-0042")]
        assert next_invoice_number(existing, datetime(2025, 1, 1)) == "INV-2025-0001"

    def test_accepts_plain_strings(self) -> None:
        assert next_invoice_number(["INV-2024-0010"], NOW) == "INV-2024-0011"

    def test_unparseable_sequence_counts_as_zero(self) -> None:
        assert next_invoice_number(["INV-2024-DRAFT"], NOW) == "INV-2024-0001"

    def test_wide_sequences_kept(self) -> None:
        assert next_invoice_number(["INV-2024-9999"], NOW) == "INV-2024-10000"

    def test_custom_prefix(self) -> None:
        existing = ["ACME-INV-2024-0003", "INV-2024-0050"]
        assert next_invoice_number(existing, NOW, prefix="ACME-INV") == "ACME-INV-2024-0004"

    def test_accepts_date(self) -> None:
        assert next_invoice_number([], date(2030, 12, 31)) == "INV-2030-0001"
