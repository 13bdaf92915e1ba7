"""
Recap service for yearly payment totals and pay-group charts.

Provides functionality for:
- Month-by-month payment totals of a budget for a year
- Bar chart of monthly expenses grouped by paying account
"""

import io
import logging

import matplotlib
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns
from matplotlib.ticker import FuncFormatter

from budgetkeeper.config import CHART_DPI, CHART_FORMAT, CHART_HEIGHT, CHART_WIDTH
from budgetkeeper.db import PaymentRepository
from budgetkeeper.models import Budget

from .metrics import expense_pay_groups, payment_total

# Charts are rendered to buffers, never to a window
matplotlib.use("Agg")

logger = logging.getLogger(__name__)

MONTHS = range(1, 13)


class RecapService:
    """Service for payment recaps and budget charts."""

    def __init__(self, payment_repo: PaymentRepository):
        """
        Initialize the recap service.

        Args:
            payment_repo: Repository for payment items
        """
        self.payment_repo = payment_repo

        try:
            sns.set_theme(style="darkgrid")
        except Exception as e:
            logger.warning(f"Failed to set seaborn theme: {e}")

    def monthly_totals(self, budget_id: str, year: int) -> pd.DataFrame:
        """
        Total paid per month of a year.

        Args:
            budget_id: Owning budget id
            year: Year to recap

        Returns:
            DataFrame with one row per month (1-12) and columns Month,
            Payments and Total. Months without payments are zero.
        """
        records = [
            {"Month": item.created_date.month, "Total": float(payment_total(item))}
            for item in self.payment_repo.get_all_for_budget(budget_id)
            if item.created_date is not None and item.created_date.year == year
        ]
        df = pd.DataFrame(records, columns=["Month", "Total"])

        grouped = df.groupby("Month")["Total"].agg(["count", "sum"])
        result = grouped.reindex(MONTHS, fill_value=0).reset_index()
        result.columns = ["Month", "Payments", "Total"]
        result["Payments"] = result["Payments"].astype(int)
        result["Total"] = result["Total"].astype(float)

        logger.debug(f"Built {year} recap for budget {budget_id}")
        return result

    def generate_pay_groups_chart(self, budget: Budget) -> io.BytesIO:
        """
        Generate a bar chart of monthly expenses by paying account.

        Args:
            budget: Budget whose expenses are charted

        Returns:
            BytesIO buffer containing the PNG image
        """
        fig = None
        try:
            groups = expense_pay_groups(budget)
            fig, ax = plt.subplots(figsize=(CHART_WIDTH, CHART_HEIGHT))

            if not groups:
                ax.text(
                    0.5,
                    0.5,
                    "No expenses yet",
                    ha="center",
                    va="center",
                    fontsize=14,
                )
                ax.set_xlim(0, 1)
                ax.set_ylim(0, 1)
                ax.axis("off")
            else:
                df = pd.DataFrame(
                    {
                        "Account": [g.paid_by or "(unassigned)" for g in groups],
                        "Total": [float(g.total) for g in groups],
                    }
                )
                sns.barplot(data=df, x="Account", y="Total", ax=ax, color="#4472C4")
                ax.set_title(
                    "Monthly Expenses by Account", fontsize=14, fontweight="bold"
                )
                ax.set_xlabel("")
                ax.set_ylabel("Amount", fontsize=11)
                ax.tick_params(axis="x", rotation=30)
                ax.yaxis.set_major_formatter(FuncFormatter(lambda x, p: f"{x:,.0f}"))
                plt.tight_layout()

            buf = io.BytesIO()
            fig.savefig(buf, format=CHART_FORMAT, dpi=CHART_DPI, bbox_inches="tight")
            buf.seek(0)

            logger.debug(f"Generated pay groups chart for budget {budget.id}")
            return buf
        except Exception as e:
            logger.error(f"Error generating pay groups chart: {e}", exc_info=True)
            raise
        finally:
            # Always close the figure to free memory
            if fig is not None:
                plt.close(fig)
