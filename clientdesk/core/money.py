"""Money helpers: amounts stay Decimal until they are formatted."""

from decimal import Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Coerce a stored amount to Decimal; absent or non-numeric values are zero."""
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    return result if result.is_finite() else ZERO
