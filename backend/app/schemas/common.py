"""Shared schema types — timestamps and money as they cross the API boundary.

Invariants:
    - Timestamps always leave the API timezone-aware (UTC)
    - Money fields are Decimal with at most 2 fractional digits; JSON renders them as strings
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, Field


def _ensure_utc(value: datetime) -> datetime:
    # Stores without tz support (SQLite) hand back naive UTC values
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_ensure_utc)]

Money = Annotated[Decimal, Field(max_digits=10, decimal_places=2)]

PositiveMoney = Annotated[Decimal, Field(gt=0, max_digits=10, decimal_places=2)]
