"""
Export service for payment data.

Provides functionality to export a budget's payment items to XLSX and CSV
formats, with the budget's derived figures on a summary sheet.
"""

import csv
import io
import logging
from datetime import datetime
from enum import Enum
from typing import Optional, cast

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from budgetkeeper.db import BudgetRepository, PaymentRepository
from budgetkeeper.models import Budget, PaymentItem

from .metrics import summarize

logger = logging.getLogger(__name__)

HEADERS = ["Payment ID", "Created", "Note", "Payee", "Amount", "Paid On"]


class ExportFormat(str, Enum):
    """Supported export formats."""

    CSV = "csv"
    XLSX = "xlsx"


def _payee_rows(items: list[PaymentItem]) -> list[list]:
    """Flatten payment items into one row per payee."""
    rows = []
    for item in items:
        created = item.created_date.strftime("%Y-%m-%d") if item.created_date else ""
        for payee in item.payees:
            rows.append(
                [
                    item.id,
                    created,
                    item.note,
                    payee.name,
                    payee.amount,
                    payee.date.isoformat() if payee.date else "",
                ]
            )
    return rows


class ExportService:
    """Service for exporting payment data to various formats."""

    def __init__(
        self,
        budget_repo: BudgetRepository,
        payment_repo: PaymentRepository,
    ):
        """
        Initialize the export service.

        Args:
            budget_repo: Repository for budgets
            payment_repo: Repository for payment items
        """
        self.budget_repo = budget_repo
        self.payment_repo = payment_repo

    def export_to_csv(
        self,
        budget_id: str,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> io.BytesIO:
        """
        Export a budget's payments to CSV format.

        Args:
            budget_id: Owning budget id
            month: Optional month filter (requires year)
            year: Optional year filter (requires month)

        Returns:
            BytesIO buffer containing the CSV data
        """
        items = self._get_items(budget_id, month, year)

        text_buffer = io.StringIO()
        writer = csv.writer(text_buffer)
        writer.writerow(HEADERS)
        for row in _payee_rows(items):
            writer.writerow([str(value) for value in row])

        buffer = io.BytesIO()
        buffer.write(text_buffer.getvalue().encode("utf-8-sig"))  # BOM for Excel
        buffer.seek(0)

        logger.info(f"Exported {len(items)} payments for budget {budget_id} to CSV")
        return buffer

    def export_to_xlsx(
        self,
        budget_id: str,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> io.BytesIO:
        """
        Export a budget's payments to XLSX format with formatting.

        Args:
            budget_id: Owning budget id
            month: Optional month filter (requires year)
            year: Optional year filter (requires month)

        Returns:
            BytesIO buffer containing the XLSX data
        """
        items = self._get_items(budget_id, month, year)
        rows = _payee_rows(items)

        wb = Workbook()
        ws = cast(Worksheet, wb.active)
        ws.title = "Payments"

        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(
            start_color="4472C4", end_color="4472C4", fill_type="solid"
        )

        for col, header in enumerate(HEADERS, 1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center")

        for row_idx, row in enumerate(rows, 2):
            for col, value in enumerate(row, 1):
                if col == 5:
                    value = float(value)
                ws.cell(row=row_idx, column=col, value=value)
            ws.cell(row=row_idx, column=5).number_format = "#,##0.00"

        column_widths = [38, 12, 30, 20, 14, 12]
        for col, width in enumerate(column_widths, 1):
            ws.column_dimensions[get_column_letter(col)].width = width

        # Freeze header row
        ws.freeze_panes = "A2"

        self._add_summary_sheet(wb, self.budget_repo.get_by_id(budget_id), budget_id)

        buffer = io.BytesIO()
        wb.save(buffer)
        buffer.seek(0)

        logger.info(f"Exported {len(items)} payments for budget {budget_id} to XLSX")
        return buffer

    def _add_summary_sheet(
        self, wb: Workbook, budget: Optional[Budget], budget_id: str
    ):
        """Add the budget's derived figures as a summary sheet."""
        ws = wb.create_sheet(title="Summary")

        header_font = Font(bold=True)
        title_font = Font(bold=True, size=14)

        ws.cell(row=1, column=1, value="Budget Summary").font = title_font
        ws.cell(
            row=2,
            column=1,
            value=f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}",
        )

        if budget is None:
            # Payments can outlive their budget
            ws.cell(row=4, column=1, value=f"No budget found for {budget_id}")
            return

        summary = summarize(budget)
        figures = [
            ("Annual Salary", budget.annual_salary),
            ("Monthly Expenses", summary.total_monthly_expenses),
            ("Monthly Incomes", summary.total_monthly_incomes),
            ("Yearly Expenses", summary.total_yearly_expenses),
            ("Yearly Incomes", summary.total_yearly_incomes),
            ("Yearly Withholdings", summary.yearly_withholdings),
            ("Half-Monthly Expenses", summary.half_monthly_expenses),
        ]

        ws.cell(row=4, column=1, value="Figure").font = header_font
        ws.cell(row=4, column=2, value="Amount").font = header_font
        row = 5
        for label, amount in figures:
            ws.cell(row=row, column=1, value=label)
            ws.cell(row=row, column=2, value=float(amount)).number_format = "#,##0.00"
            row += 1

        ws.cell(row=row, column=1, value="Debt-to-Income Ratio")
        ws.cell(
            row=row, column=2, value=float(summary.debt_to_income_ratio)
        ).number_format = "0.00%"

        row += 2
        ws.cell(row=row, column=1, value="Paid By").font = header_font
        ws.cell(row=row, column=2, value="Monthly Total").font = header_font
        for group in summary.pay_groups:
            row += 1
            ws.cell(row=row, column=1, value=group.paid_by)
            ws.cell(row=row, column=2, value=float(group.total)).number_format = (
                "#,##0.00"
            )

        ws.column_dimensions["A"].width = 24
        ws.column_dimensions["B"].width = 18

    def _get_items(
        self,
        budget_id: str,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> list[PaymentItem]:
        if month and year:
            return self.payment_repo.get_by_month_year(budget_id, month, year)
        return self.payment_repo.get_all_for_budget(budget_id)

    def get_filename(
        self,
        format: ExportFormat,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> str:
        """
        Generate a filename for the export.

        Args:
            format: Export format
            month: Optional month filter
            year: Optional year filter

        Returns:
            Suggested filename
        """
        date_str = datetime.now().strftime("%Y%m%d")
        period = f"_{year:04d}-{month:02d}" if month and year else ""
        return f"budgetkeeper_payments_{date_str}{period}.{format.value}"
