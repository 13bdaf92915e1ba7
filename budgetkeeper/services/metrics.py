"""
Derived budget figures.

Everything here is computed from the budget's own expenses, incomes and
accounts each time it is asked for. None of it is stored, so a loaded,
edited and re-saved budget can never carry a stale total.
"""

from dataclasses import dataclass
from decimal import Decimal

from budgetkeeper.config import MONTHS_PER_YEAR
from budgetkeeper.models import Account, AccountKind, Budget, PaymentItem

ZERO = Decimal("0")


@dataclass(frozen=True)
class AccountEntry:
    """An account tagged with the list it came from."""

    name: str
    institution: str
    kind: AccountKind

    @classmethod
    def from_account(cls, account: Account, kind: AccountKind) -> "AccountEntry":
        return cls(name=account.name, institution=account.institution, kind=kind)


@dataclass(frozen=True)
class PayGroup:
    """Total of the expenses paid from one account."""

    paid_by: str
    total: Decimal


@dataclass(frozen=True)
class BudgetSummary:
    """Snapshot of every derived figure of a budget."""

    total_monthly_expenses: Decimal
    total_monthly_incomes: Decimal
    total_yearly_expenses: Decimal
    total_yearly_incomes: Decimal
    debt_to_income_ratio: Decimal
    yearly_withholdings: Decimal
    half_monthly_expenses: Decimal
    accounts: tuple[AccountEntry, ...]
    pay_groups: tuple[PayGroup, ...]


def total_monthly_expenses(budget: Budget) -> Decimal:
    return sum((e.amount for e in budget.expenses), ZERO)


def total_monthly_incomes(budget: Budget) -> Decimal:
    return sum((i.amount for i in budget.incomes), ZERO)


def total_yearly_expenses(budget: Budget) -> Decimal:
    return total_monthly_expenses(budget) * MONTHS_PER_YEAR


def total_yearly_incomes(budget: Budget) -> Decimal:
    return total_monthly_incomes(budget) * MONTHS_PER_YEAR


def debt_to_income_ratio(budget: Budget) -> Decimal:
    """Monthly expenses over monthly salary; 0 when there is no salary."""
    if not budget.annual_salary:
        return ZERO
    monthly_salary = budget.annual_salary / MONTHS_PER_YEAR
    return total_monthly_expenses(budget) / monthly_salary


def yearly_withholdings(budget: Budget) -> Decimal:
    return budget.annual_salary - total_yearly_incomes(budget)


def half_monthly_expenses(budget: Budget) -> Decimal:
    return total_monthly_expenses(budget) / 2


def account_list(budget: Budget) -> list[AccountEntry]:
    """Bank accounts, then credit cards, then online services."""
    sources = (
        (budget.bank_accounts, AccountKind.BANK_ACCOUNT),
        (budget.credit_cards, AccountKind.CREDIT_CARD),
        (budget.online_services, AccountKind.ONLINE_SERVICE),
    )
    return [
        AccountEntry.from_account(account, kind)
        for accounts, kind in sources
        for account in accounts
    ]


def expense_pay_groups(budget: Budget) -> list[PayGroup]:
    """
    Sum expenses by the account that pays them.

    Account names match exactly (case-sensitive) and groups keep the order
    in which each account first appears among the expenses.
    """
    totals: dict[str, Decimal] = {}
    for expense in budget.expenses:
        totals[expense.paid_by] = totals.get(expense.paid_by, ZERO) + expense.amount
    return [PayGroup(paid_by=name, total=total) for name, total in totals.items()]


def payment_total(item: PaymentItem) -> Decimal:
    """Sum of the amounts paid to each payee of a payment item."""
    return sum((p.amount for p in item.payees), ZERO)


def summarize(budget: Budget) -> BudgetSummary:
    """Compute every derived figure of a budget at once."""
    return BudgetSummary(
        total_monthly_expenses=total_monthly_expenses(budget),
        total_monthly_incomes=total_monthly_incomes(budget),
        total_yearly_expenses=total_yearly_expenses(budget),
        total_yearly_incomes=total_yearly_incomes(budget),
        debt_to_income_ratio=debt_to_income_ratio(budget),
        yearly_withholdings=yearly_withholdings(budget),
        half_monthly_expenses=half_monthly_expenses(budget),
        accounts=tuple(account_list(budget)),
        pay_groups=tuple(expense_pay_groups(budget)),
    )
