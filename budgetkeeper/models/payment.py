"""
Payment record models.

A PaymentItem belongs to a budget by id and splits its total across one or
more payees. A payment spread over several dates is modelled as several
payees with different dates inside one item.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from .values import (
    format_optional,
    parse_date,
    parse_datetime,
    round_amount,
    to_decimal,
)


@dataclass
class Payee:
    """One recipient of a payment."""

    name: str = ""
    amount: Decimal = Decimal("0")
    date: Optional[date] = None

    def round_to_cents(self):
        """Round the amount to cents in place."""
        self.amount = round_amount(self.amount)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "amount": str(self.amount),
            "date": format_optional(self.date),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Payee":
        return cls(
            name=data.get("name") or "",
            amount=to_decimal(data.get("amount")),
            date=parse_date(data.get("date")),
        )


@dataclass
class PaymentItem:
    """A payment record linked to a budget."""

    id: Optional[str] = None  # assigned on insert when empty
    budget_id: Optional[str] = None
    created_date: Optional[datetime] = None
    note: str = ""
    payees: list[Payee] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "budget_id": self.budget_id,
            "created_date": format_optional(self.created_date),
            "note": self.note,
            "payees": [p.to_dict() for p in self.payees],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PaymentItem":
        return cls(
            id=data.get("id"),
            budget_id=data.get("budget_id"),
            created_date=parse_datetime(data.get("created_date")),
            note=data.get("note") or "",
            payees=[Payee.from_dict(p) for p in data.get("payees") or []],
        )
