"""Validation helpers for user-submitted monetary values."""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any

__all__ = [
    "MAX_PRICE",
    "PRICE_PATTERN",
    "PRICE_PRECISION",
    "PRICE_SCALE",
    "is_valid_price",
    "parse_price",
]

# No sign, no leading zeros except a lone "0", at most two fractional digits.
PRICE_PATTERN = re.compile(r"(0|[1-9][0-9]*)(\.[0-9]{1,2})?")

# Storage is NUMERIC(PRICE_PRECISION, PRICE_SCALE); larger amounts overflow on PostgreSQL.
PRICE_PRECISION = 10
PRICE_SCALE = 2
MAX_PRICE = Decimal("99999999.99")


def is_valid_price(value: Any) -> bool:
    """Return ``True`` when ``value`` reads as a non-negative price.

    Strings are matched verbatim against :data:`PRICE_PATTERN`.  Numeric
    values (``int``, ``float`` and ``Decimal``) are matched through their
    textual form, so ``10`` and ``10.5`` pass while ``float("nan")`` and
    ``-1`` do not.  ``None``, booleans and anything else are rejected.  The
    function never raises.
    """

    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        text = value
    elif isinstance(value, (int, float, Decimal)):
        text = str(value)
    else:
        return False
    return PRICE_PATTERN.fullmatch(text) is not None


def parse_price(value: Any) -> Decimal | None:
    """Return ``value`` as a storable ``Decimal``, or ``None`` when it is not one.

    The value must satisfy :func:`is_valid_price` and must not exceed
    :data:`MAX_PRICE`.
    """

    if not is_valid_price(value):
        return None
    amount = Decimal(str(value))
    if amount > MAX_PRICE:
        return None
    return amount
