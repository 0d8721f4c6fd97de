"""Dashboard and report queries with a degrade-don't-crash error policy.

A failing query is logged as a warning and answered with an empty list
(breakdowns) or a zero-filled record (summaries); these feed non-critical
rendering and must never take a screen down.
"""
import logging
import sqlite3
from datetime import date

from dailydhan.database.report_dao import ReportDAO
from dailydhan.database.transaction_dao import TransactionDAO
from dailydhan.models.report import (
    CategoryAnalysis,
    CategoryTotal,
    DashboardData,
    MonthlySummary,
    MonthlyTotals,
    WalletTotals,
    YearlySummary,
)
from dailydhan.models.transaction import Transaction
from dailydhan.utils.constants import DASHBOARD_MONTHS, RECENT_TRANSACTIONS_LIMIT
from dailydhan.utils.date_helpers import (
    month_short_name,
    month_window,
    shift_month,
    today,
    year_window,
)

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(self, report_dao: ReportDAO, tx_dao: TransactionDAO):
        self._dao = report_dao
        self._tx_dao = tx_dao

    def monthly_summary(self, year: int, month: int) -> MonthlySummary:
        """Income, expense and balance for the calendar month."""
        try:
            return self._dao.get_totals(*month_window(year, month))
        except sqlite3.Error as e:
            logger.warning("Monthly summary for %d-%02d failed: %s", year, month, e)
            return MonthlySummary()

    def monthly_income_expense_series(
        self, months: int = DASHBOARD_MONTHS, reference_date: date | None = None
    ) -> list[MonthlyTotals]:
        """The last `months` months ending with the reference month, oldest first."""
        ref = reference_date or today()
        series = []
        for offset in range(months - 1, -1, -1):
            year, month = shift_month(ref.year, ref.month, -offset)
            series.append(self._month_totals(year, month))
        return series

    def yearly_monthly_data(self, year: int) -> list[MonthlyTotals]:
        return [self._month_totals(year, month) for month in range(1, 13)]

    def yearly_summary(self, year: int) -> YearlySummary:
        try:
            return self._dao.get_totals_with_counts(*year_window(year))
        except sqlite3.Error as e:
            logger.warning("Yearly summary for %d failed: %s", year, e)
            return YearlySummary()

    def expense_breakdown_by_category(self, year: int, month: int) -> list[CategoryTotal]:
        return self._breakdown("expense", year, month)

    def income_breakdown_by_category(self, year: int, month: int) -> list[CategoryTotal]:
        return self._breakdown("income", year, month)

    def top_spending_categories(
        self, limit: int = 10, year: int | None = None, month: int | None = None
    ) -> list[CategoryTotal]:
        """All-time top expense categories, or those of one month when year and month are given."""
        try:
            if year and month:
                return self._dao.get_top_spending(limit, *month_window(year, month))
            return self._dao.get_top_spending(limit)
        except sqlite3.Error as e:
            logger.warning("Top spending categories query failed: %s", e)
            return []

    def category_analysis(self, limit: int = 20) -> list[CategoryAnalysis]:
        try:
            return self._dao.get_category_analysis(limit)
        except sqlite3.Error as e:
            logger.warning("Category analysis query failed: %s", e)
            return []

    def wallet_wise_data(self, year: int, month: int) -> list[WalletTotals]:
        try:
            return self._dao.get_wallet_totals(*month_window(year, month))
        except sqlite3.Error as e:
            logger.warning("Wallet-wise report for %d-%02d failed: %s", year, month, e)
            return []

    def recent_transactions(self, limit: int = RECENT_TRANSACTIONS_LIMIT) -> list[Transaction]:
        try:
            return self._tx_dao.get_recent(limit)
        except sqlite3.Error as e:
            logger.warning("Recent transactions query failed: %s", e)
            return []

    def dashboard(self, reference_date: date | None = None) -> DashboardData:
        ref = reference_date or today()
        return DashboardData(
            year=ref.year,
            month=ref.month,
            summary=self.monthly_summary(ref.year, ref.month),
            expense_breakdown=self.expense_breakdown_by_category(ref.year, ref.month),
            series=self.monthly_income_expense_series(DASHBOARD_MONTHS, ref),
            recent_transactions=self.recent_transactions(),
        )

    # ── Helpers ──────────────────────────────────────────────────────────────

    def _month_totals(self, year: int, month: int) -> MonthlyTotals:
        # One query per month so a single failure only zeroes that month
        try:
            totals = self._dao.get_totals(*month_window(year, month))
        except sqlite3.Error as e:
            logger.warning("Failed to load data for %d-%02d: %s", year, month, e)
            totals = MonthlySummary()
        return MonthlyTotals(
            year=year,
            month=month,
            month_name=month_short_name(month),
            income=totals.income,
            expense=totals.expense,
        )

    def _breakdown(self, type_: str, year: int, month: int) -> list[CategoryTotal]:
        try:
            return self._dao.get_breakdown_by_category(type_, *month_window(year, month))
        except sqlite3.Error as e:
            logger.warning("%s breakdown for %d-%02d failed: %s", type_.capitalize(), year, month, e)
            return []
