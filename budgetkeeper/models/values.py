"""Conversion helpers shared by the document models."""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Optional

from budgetkeeper.config import AMOUNT_QUANTUM


def to_decimal(value: Any) -> Decimal:
    """
    Coerce a stored or user-supplied value into a Decimal.

    Floats go through their string form so 10.005 stays 10.005 instead of
    picking up binary noise. Missing values become zero.

    Raises:
        ValueError: If the value is not a finite number
    """
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return amount


def round_amount(value: Any) -> Decimal:
    """Round a money amount to two fractional digits, half away from zero."""
    amount = to_decimal(value)
    # Wide enough for any finite amount plus its two fractional digits
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return amount.quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)


def parse_datetime(value: Any) -> Optional[datetime]:
    if not value:
        return None
    if not isinstance(value, datetime) and isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, datetime):
        value = datetime.fromisoformat(value)
    if value.tzinfo is not None:
        # Stored times are naive local time
        value = value.astimezone().replace(tzinfo=None)
    return value


def parse_date(value: Any) -> Optional[date]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def format_optional(value: Optional[date]) -> Optional[str]:
    """ISO format a date/datetime, keeping None as None."""
    return value.isoformat() if value else None
