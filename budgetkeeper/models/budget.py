"""
Budget aggregate models.

A Budget owns its recurring expenses, incomes and the accounts that pay
them. The whole aggregate is stored as a single document; totals and other
derived figures live in budgetkeeper.services.metrics and are never stored.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from .values import format_optional, parse_datetime, to_decimal


class AccountKind(str, Enum):
    """Where an account in the flattened account list came from."""

    BANK_ACCOUNT = "bank_account"
    CREDIT_CARD = "credit_card"
    ONLINE_SERVICE = "online_service"


@dataclass
class Expense:
    """A recurring monthly bill."""

    bill_name: str = ""
    paid_to: str = ""
    paid_by: str = ""  # name of the account the bill is paid from
    amount: Decimal = Decimal("0")
    due_day: Optional[int] = None  # estimated day of month

    def to_dict(self) -> dict:
        return {
            "bill_name": self.bill_name,
            "paid_to": self.paid_to,
            "paid_by": self.paid_by,
            "amount": str(self.amount),
            "due_day": self.due_day,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Expense":
        return cls(
            bill_name=data.get("bill_name") or "",
            paid_to=data.get("paid_to") or "",
            paid_by=data.get("paid_by") or "",
            amount=to_decimal(data.get("amount")),
            due_day=data.get("due_day"),
        )


@dataclass
class Income:
    """A recurring monthly income."""

    employer: str = ""
    income_type: str = ""
    amount: Decimal = Decimal("0")

    def to_dict(self) -> dict:
        return {
            "employer": self.employer,
            "income_type": self.income_type,
            "amount": str(self.amount),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Income":
        return cls(
            employer=data.get("employer") or "",
            income_type=data.get("income_type") or "",
            amount=to_decimal(data.get("amount")),
        )


@dataclass
class Account:
    """A bank account, credit card or online service that pays expenses."""

    name: str = ""
    institution: str = ""
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "institution": self.institution,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Account":
        return cls(
            name=data.get("name") or "",
            institution=data.get("institution") or "",
            notes=data.get("notes") or "",
        )


@dataclass
class Budget:
    """
    Budget aggregate root.

    Created with a fresh id and empty collections, edited in place and
    persisted wholesale by BudgetRepository.save().
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    annual_salary: Decimal = Decimal("0")
    created_date: datetime = field(default_factory=datetime.now)
    last_saved_date: Optional[datetime] = None
    expenses: list[Expense] = field(default_factory=list)
    incomes: list[Income] = field(default_factory=list)
    bank_accounts: list[Account] = field(default_factory=list)
    credit_cards: list[Account] = field(default_factory=list)
    online_services: list[Account] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to the stored document. Derived figures are not included."""
        return {
            "id": self.id,
            "annual_salary": str(self.annual_salary),
            "created_date": format_optional(self.created_date),
            "last_saved_date": format_optional(self.last_saved_date),
            "expenses": [e.to_dict() for e in self.expenses],
            "incomes": [i.to_dict() for i in self.incomes],
            "bank_accounts": [a.to_dict() for a in self.bank_accounts],
            "credit_cards": [a.to_dict() for a in self.credit_cards],
            "online_services": [a.to_dict() for a in self.online_services],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Budget":
        """Create a Budget from a stored document."""
        return cls(
            id=data["id"],
            annual_salary=to_decimal(data.get("annual_salary")),
            created_date=parse_datetime(data.get("created_date")) or datetime.min,
            last_saved_date=parse_datetime(data.get("last_saved_date")),
            expenses=[Expense.from_dict(e) for e in data.get("expenses") or []],
            incomes=[Income.from_dict(i) for i in data.get("incomes") or []],
            bank_accounts=[
                Account.from_dict(a) for a in data.get("bank_accounts") or []
            ],
            credit_cards=[Account.from_dict(a) for a in data.get("credit_cards") or []],
            online_services=[
                Account.from_dict(a) for a in data.get("online_services") or []
            ],
        )
