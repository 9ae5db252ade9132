"""
Due-date and overdue policy.

Maps payment terms to due dates and derives overdue state from the current
time. The predicates here are pure: :func:`is_overdue` never touches the
stored status. Applying the ``sent -> overdue`` transition is the job of
:func:`reconcile_overdue`, which the orchestration layer calls explicitly
and then persists.

A bare ``date`` is treated as the start of that day when compared with a
``datetime``, so an invoice due today is overdue as soon as the day begins.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from datetime import date, datetime, time, timedelta
from typing import Any, TypeVar

from invoicedesk.models.invoice import Invoice, InvoiceStatus, PaymentTerms

logger = logging.getLogger("invoicedesk.calculators.terms")

DateT = TypeVar("DateT", date, datetime)

DEFAULT_TERM_DAYS = 30
SECONDS_PER_DAY = 24 * 60 * 60

_TERM_DAYS: dict[PaymentTerms, int] = {
    PaymentTerms.DUE_ON_RECEIPT: 0,
    PaymentTerms.NET_7: 7,
    PaymentTerms.NET_14: 14,
    PaymentTerms.NET_30: 30,
    PaymentTerms.NET_60: 60,
    PaymentTerms.NET_90: 90,
}

_CLOSED_STATUSES = (InvoiceStatus.PAID, InvoiceStatus.CANCELLED)


def term_days(terms: PaymentTerms | str | int | None) -> int:
    """Number of calendar days granted by a payment-terms code.

    Unrecognised codes fall back to 30 days.
    """
    key = terms.value if isinstance(terms, PaymentTerms) else str(terms)
    try:
        return _TERM_DAYS[PaymentTerms(key)]
    except ValueError:
        logger.debug("Unknown payment terms %r, defaulting to %d days", terms, DEFAULT_TERM_DAYS)
        return DEFAULT_TERM_DAYS


def calculate_due_date(issue_date: DateT, terms: PaymentTerms | str | int | None) -> DateT:
    """Due date for an invoice issued on ``issue_date``.

    Calendar-day arithmetic; the input type (``date`` or ``datetime``) is kept.
    """
    return issue_date + timedelta(days=term_days(terms))


def _as_datetime(value: date | datetime, like: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    tzinfo = like.tzinfo if isinstance(like, datetime) else None
    return datetime.combine(value, time.min, tzinfo=tzinfo)


def _is_after(now: date | datetime, due_date: date | datetime) -> bool:
    if isinstance(now, datetime) or isinstance(due_date, datetime):
        return _as_datetime(now, due_date) > _as_datetime(due_date, now)
    return now > due_date


def is_overdue(invoice: Invoice | Any, now: date | datetime | None = None) -> bool:
    """Whether an invoice is past due and still unsettled.

    Paid and cancelled invoices are never overdue.
    """
    if invoice.status in _CLOSED_STATUSES:
        return False
    now = now or datetime.now()
    return _is_after(now, invoice.due_date)


def days_overdue(due_date: date | datetime, now: date | datetime | None = None) -> int:
    """Whole days past ``due_date``, rounded up and never negative."""
    now = now or datetime.now()
    elapsed = _as_datetime(now, due_date) - _as_datetime(due_date, now)
    return max(0, math.ceil(elapsed.total_seconds() / SECONDS_PER_DAY))


def reconcile_overdue(
    invoices: Iterable[Invoice],
    now: datetime | None = None,
) -> tuple[list[Invoice], int]:
    """Apply the ``sent -> overdue`` transition to invoices that are past due.

    Returns new invoice objects (inputs are left untouched) and the number of
    invoices whose status changed. Only ``sent`` invoices move; drafts stay
    drafts even when their due date has passed.
    """
    now = now or datetime.now()
    reconciled: list[Invoice] = []
    changed = 0
    for invoice in invoices:
        if invoice.status == InvoiceStatus.SENT and is_overdue(invoice, now):
            invoice = invoice.model_copy(
                update={"status": InvoiceStatus.OVERDUE, "updated_at": now},
            )
            changed += 1
        reconciled.append(invoice)

    if changed:
        logger.info("Marked %d invoice(s) overdue", changed)
    return reconciled, changed
