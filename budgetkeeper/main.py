"""
Command-line summary for budgetkeeper.

Loads configuration, opens the configured store and prints the latest
budget's figures along with the remembered month/year selection.
"""

import logging
import sys

from dotenv import load_dotenv

from budgetkeeper.config import (
    ERROR_MESSAGES,
    LOG_DIR,
    LOG_FILE,
    LOG_FORMAT,
    ensure_directories,
    get_connection_string,
    get_log_level,
)
from budgetkeeper.db import (
    BudgetRepository,
    CacheRepository,
    DocumentStore,
    PaymentRepository,
    StorageError,
)
from budgetkeeper.services import summarize

logger = logging.getLogger(__name__)


def configure_logging():
    """Log to the log directory and stdout."""
    ensure_directories()
    logging.basicConfig(
        level=get_log_level(),
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(LOG_DIR / LOG_FILE),
            logging.StreamHandler(sys.stdout),
        ],
    )


def main():
    load_dotenv()
    configure_logging()

    connection_string = get_connection_string()
    logger.info(f"Using store at {connection_string}")

    try:
        store = DocumentStore(connection_string)
        budget = BudgetRepository(store).get_latest()
        state = CacheRepository(store).get()
        items = (
            PaymentRepository(store).get_by_month_year(
                budget.id, state.selected_month, state.selected_year
            )
            if budget
            else []
        )
    except StorageError as e:
        logger.error(f"Cannot read the budget store: {e}", exc_info=True)
        print(f"Error: {ERROR_MESSAGES['storage_error']}")
        sys.exit(1)

    print("=" * 60)
    print(f"Selected period: {state.selected_month:02d}/{state.selected_year}")
    print("=" * 60)

    if budget is None:
        print("No budget saved yet.")
        return

    summary = summarize(budget)
    print(f"Budget {budget.id}")
    print(f"  Annual salary:        {budget.annual_salary:,.2f}")
    print(f"  Monthly expenses:     {summary.total_monthly_expenses:,.2f}")
    print(f"  Monthly incomes:      {summary.total_monthly_incomes:,.2f}")
    print(f"  Yearly withholdings:  {summary.yearly_withholdings:,.2f}")
    print(f"  Debt-to-income ratio: {summary.debt_to_income_ratio:.1%}")

    if summary.pay_groups:
        print("\nPaid by account:")
        for group in summary.pay_groups:
            print(f"  {group.paid_by or '(unassigned)':<20} {group.total:>12,.2f}")

    print(f"\n{len(items)} payment(s) recorded this period.")


if __name__ == "__main__":
    main()
