from .export import ExportFormat, ExportService
from .metrics import (
    AccountEntry,
    BudgetSummary,
    PayGroup,
    account_list,
    debt_to_income_ratio,
    expense_pay_groups,
    half_monthly_expenses,
    payment_total,
    summarize,
    total_monthly_expenses,
    total_monthly_incomes,
    total_yearly_expenses,
    total_yearly_incomes,
    yearly_withholdings,
)

__all__ = [
    "AccountEntry",
    "BudgetSummary",
    "ExportFormat",
    "ExportService",
    "PayGroup",
    "account_list",
    "debt_to_income_ratio",
    "expense_pay_groups",
    "half_monthly_expenses",
    "payment_total",
    "summarize",
    "total_monthly_expenses",
    "total_monthly_incomes",
    "total_yearly_expenses",
    "total_yearly_incomes",
    "yearly_withholdings",
]
