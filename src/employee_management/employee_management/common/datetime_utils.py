from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Optional

from ..core.exceptions import ValidationError


_ISO_DATE_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})(T.*)?$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date.

    Full ISO timestamps (``2024-01-01T00:00:00.000Z``) keep their day part; anything else
    after the day is rejected.
    """
    match = _ISO_DATE_RE.match(str(value).strip())
    if not match:
        raise ValueError(f"not an ISO date: {value!r}")
    return datetime.strptime(match.group(1), "%Y-%m-%d").date()


def parse_date_field(value: Any, message: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(value)
    except (TypeError, ValueError):
        raise ValidationError(message)


def parse_optional_date(value: Any, message: str) -> Optional[date]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_date_field(value, message)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def iso_or_none(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None
