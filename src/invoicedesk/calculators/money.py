"""
Money arithmetic — rounding and coercion primitives.

Every monetary figure the calculators hand back passes through
:func:`round2` exactly once, at the point it is finalised.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Coerce a number-like value to ``Decimal``.

    Floats go through ``str()`` so ``0.1`` becomes ``Decimal("0.1")`` rather
    than its binary expansion. ``None`` and empty strings count as zero.
    """
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        return Decimal(int(value))
    return Decimal(str(value))


def round2(value: Any) -> Decimal:
    """Round to 2 decimal places, half away from zero.

    >>> round2(Decimal("2.345"))
    Decimal('2.35')
    >>> round2(Decimal("-2.345"))
    Decimal('-2.35')
    """
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)
