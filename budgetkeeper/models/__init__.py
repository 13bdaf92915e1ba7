from .app_state import AppState
from .budget import Account, AccountKind, Budget, Expense, Income
from .payment import Payee, PaymentItem
from .values import round_amount, to_decimal

__all__ = [
    "AccountKind",
    "Account",
    "AppState",
    "Budget",
    "Expense",
    "Income",
    "Payee",
    "PaymentItem",
    "round_amount",
    "to_decimal",
]
