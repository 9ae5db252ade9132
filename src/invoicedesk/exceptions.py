"""
InvoiceDesk errors.

The calculators never raise for numeric edge cases; these errors come from
the layers around them (storage, validation, orchestration).
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for callers that branch on the failure kind."""

    INVOICE_NOT_FOUND = "INVOICE_NOT_FOUND"
    CLIENT_NOT_FOUND = "CLIENT_NOT_FOUND"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    STORAGE_ERROR = "STORAGE_ERROR"


class InvoiceDeskError(Exception):
    """Base exception with structured error info."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"error": self.code.value, "message": self.message}
        if self.context:
            result["context"] = self.context
        return result


class InvoiceNotFoundError(InvoiceDeskError):
    def __init__(self, invoice_ref: str) -> None:
        super().__init__(
            ErrorCode.INVOICE_NOT_FOUND,
            f"Invoice not found: {invoice_ref}",
            context={"invoice": invoice_ref},
        )


class ClientNotFoundError(InvoiceDeskError):
    def __init__(self, client_id: str) -> None:
        super().__init__(
            ErrorCode.CLIENT_NOT_FOUND,
            f"Client not found: {client_id}",
            context={"client_id": client_id},
        )


class InvalidStatusTransitionError(InvoiceDeskError):
    """A user-triggered status change that the invoice lifecycle forbids."""

    def __init__(self, invoice_number: str, current: str, target: str) -> None:
        super().__init__(
            ErrorCode.INVALID_TRANSITION,
            f"Cannot change invoice {invoice_number} from {current} to {target}",
            context={"invoice": invoice_number, "from": current, "to": target},
        )


class InvoiceValidationError(InvoiceDeskError):
    """Form input rejected by the validation boundary."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(
            ErrorCode.VALIDATION_FAILED,
            "; ".join(errors) or "Invalid input",
            context={"errors": errors},
        )


class StorageError(InvoiceDeskError):
    def __init__(self, key: str, detail: str, action: str = "write") -> None:
        super().__init__(
            ErrorCode.STORAGE_ERROR,
            f"Could not {action} {key}: {detail}",
            context={"key": key, "action": action},
        )
