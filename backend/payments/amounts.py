from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

TWO_PLACES = Decimal("0.01")


def to_minor_units(amount: Decimal | str) -> int:
    """Convert a two-decimal currency amount to integer minor units (fen/cents)."""
    value = Decimal(str(amount))
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(value: Any, *, default: Optional[Decimal] = None) -> Optional[Decimal]:
    """Convert a provider-reported minor-unit total back to a two-decimal amount."""
    if value is None:
        return default
    try:
        cents = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return default
    return (cents / 100).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
