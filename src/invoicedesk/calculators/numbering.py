"""
Invoice numbering — ``INV-2024-0001`` style sequential identifiers.

Sequences are scoped to the calendar year and reset implicitly each January
because only numbers carrying the current year's prefix are considered.
Numbering is advisory: nothing here guarantees uniqueness, two callers that
compute a number before either saves will get the same one.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

DEFAULT_PREFIX = "INV"
SEQUENCE_WIDTH = 4


def _number_of(entry: Any) -> str:
    if isinstance(entry, str):
        return entry
    return getattr(entry, "invoice_number", "") or ""


def _sequence(number: str, year_prefix: str) -> int:
    try:
        return int(number[len(year_prefix):].split("-")[0])
    except ValueError:
        return 0


def next_invoice_number(
    existing: Iterable[Any],
    now: date | datetime | None = None,
    prefix: str = DEFAULT_PREFIX,
) -> str:
    """Next invoice number for the year of ``now``.

    Args:
        existing: Invoices, or bare invoice-number strings.
        now: Reference time; defaults to the current time.
        prefix: Number prefix, ``INV`` by default.

    Returns:
        ``{prefix}-{year}-{seq:04d}`` where ``seq`` is one more than the
        highest sequence already used this year, or 1.
    """
    year = (now or datetime.now()).year
    year_prefix = f"{prefix}-{year}-"
    sequences = [
        _sequence(number, year_prefix)
        for number in map(_number_of, existing)
        if number.startswith(year_prefix)
    ]
    next_seq = max(sequences) + 1 if sequences else 1
    return f"{year_prefix}{next_seq:0{SEQUENCE_WIDTH}d}"
