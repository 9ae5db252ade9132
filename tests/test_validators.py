"""Tests for form validation."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from invoicedesk.validators import (
    BusinessProfileFormData,
    ClientFormData,
    InvoiceFormData,
    InvoiceItemInput,
    error_messages,
    validate_email,
    validate_invoice_item,
    validate_phone,
)

ADDRESS = {
    "street": "1 Main St",
    "city": "Springfield",
    "state": "IL",
    "zip_code": "62701",
    "country": "US",
}


def _form(**overrides: object) -> dict:
    data = {
        "client_id": "client-1",
        "issue_date": "2024-01-01",
        "items": [{"description": "Design", "quantity": "2", "rate": "50"}],
    }
    data.update(overrides)
    return data


class TestSimpleChecks:
    @pytest.mark.parametrize("email", ["john@acme.com", "a.b+c@sub.example.org"])
    def test_valid_emails(self, email: str) -> None:
        assert validate_email(email)

    @pytest.mark.parametrize("email", ["", "john", "john@acme", "jo hn@acme.com"])
    def test_invalid_emails(self, email: str) -> None:
        assert not validate_email(email)

    def test_phone(self) -> None:
        assert validate_phone("+1 (555) 123-4567")
        assert not validate_phone("call me")

    def test_item_problems(self) -> None:
        errors = validate_invoice_item({"description": " ", "quantity": 0, "rate": -5, "tax_rate": 120})
        assert errors == [
            "Description is required",
            "Quantity must be greater than 0",
            "Rate must be greater than 0",
            "Tax rate must be between 0 and 100",
        ]

    def test_item_non_numeric_values(self) -> None:
        errors = validate_invoice_item({"description": "Work", "quantity": "abc", "rate": "x", "tax_rate": "NaN"})
        assert errors == [
            "Quantity must be greater than 0",
            "Rate must be greater than 0",
            "Tax rate must be between 0 and 100",
        ]

    def test_good_item(self) -> None:
        assert validate_invoice_item({"description": "Work", "quantity": 1, "rate": "10.50"}) == []


class TestInvoiceItemInput:
    def test_description_trimmed(self) -> None:
        item = InvoiceItemInput(description="  Design  ", quantity=Decimal("1"), rate=Decimal("10"))
        assert item.description == "Design"

    def test_blank_description_rejected(self) -> None:
        with pytest.raises(ValidationError):
            InvoiceItemInput(description="   ", quantity=Decimal("1"), rate=Decimal("10"))

    @pytest.mark.parametrize("field,value", [("quantity", "0"), ("rate", "1000000"), ("tax_rate", "101")])
    def test_out_of_range(self, field: str, value: str) -> None:
        data = {"description": "Work", "quantity": "1", "rate": "1", field: value}
        with pytest.raises(ValidationError):
            InvoiceItemInput.model_validate(data)

    def test_to_item_computes_amount(self) -> None:
        item = InvoiceItemInput(description="Work", quantity=Decimal("3"), rate=Decimal("12.5")).to_item("item-1")
        assert item.id == "item-1"
        assert item.amount == Decimal("37.5")


class TestInvoiceFormData:
    def test_minimal_form(self) -> None:
        form = InvoiceFormData.model_validate(_form())
        assert form.issue_date == date(2024, 1, 1)
        assert form.due_date is None
        assert form.discount_value == 0

    def test_needs_items(self) -> None:
        with pytest.raises(ValidationError):
            InvoiceFormData.model_validate(_form(items=[]))

    def test_too_many_items(self) -> None:
        items = [{"description": f"Row {i}", "quantity": "1", "rate": "1"} for i in range(51)]
        with pytest.raises(ValidationError):
            InvoiceFormData.model_validate(_form(items=items))

    def test_due_before_issue(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            InvoiceFormData.model_validate(_form(due_date="2023-12-31"))
        assert error_messages(exc_info.value) == ["Due date cannot be before issue date"]

    def test_percentage_over_100(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            InvoiceFormData.model_validate(_form(discount_type="percentage", discount_value="150"))
        assert "Percentage discount cannot exceed 100%" in error_messages(exc_info.value)

    def test_fixed_discount_over_100_allowed(self) -> None:
        form = InvoiceFormData.model_validate(_form(discount_type="fixed", discount_value="150"))
        assert form.discount_value == Decimal("150")

    def test_error_messages_include_location(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            InvoiceFormData.model_validate(_form(client_id=""))
        assert error_messages(exc_info.value)[0].startswith("client_id: ")


class TestClientFormData:
    def test_valid(self) -> None:
        form = ClientFormData(name="Ann", company="Co", email="ann@co.com", phone="", address=ADDRESS)
        assert form.phone is None
        assert form.address.to_address().city == "Springfield"

    def test_bad_email(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ClientFormData(name="Ann", company="Co", email="nope", address=ADDRESS)
        assert error_messages(exc_info.value) == ["email: Please enter a valid email address"]

    def test_short_phone(self) -> None:
        with pytest.raises(ValidationError):
            ClientFormData(name="Ann", company="Co", email="ann@co.com", phone="555-1234", address=ADDRESS)


class TestBusinessProfileFormData:
    def _data(self, **overrides: object) -> dict:
        data = {
            "company_name": "Acme",
            "owner_name": "Ann",
            "email": "ann@acme.com",
            "phone": "+1 555 123 4567",
            "address": ADDRESS,
            "currency": "EUR",
            "default_tax_rate": "20",
        }
        data.update(overrides)
        return data

    def test_valid(self) -> None:
        form = BusinessProfileFormData.model_validate(self._data(website=""))
        assert form.website is None
        assert form.default_tax_rate == Decimal("20")

    def test_bad_website(self) -> None:
        with pytest.raises(ValidationError):
            BusinessProfileFormData.model_validate(self._data(website="not a url"))

    def test_tax_rate_range(self) -> None:
        with pytest.raises(ValidationError):
            BusinessProfileFormData.model_validate(self._data(default_tax_rate="150"))
