from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_non_empty(value: Optional[str], message: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(message)
    return str(value).strip()


def parse_amount(value: Any, field_name: str, *, default: Optional[Decimal] = None) -> Decimal:
    """Parse a money amount; blank values fall back to ``default``."""
    if is_blank(value):
        if default is None:
            raise ValidationError(f"{field_name} is required")
        return default
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"Invalid {field_name}")
    if not amount.is_finite():
        raise ValidationError(f"Invalid {field_name}")
    return amount
