"""Aggregation queries behind the dashboard and report screens.

Every window is a half-open [start, end) range of ISO strings; stored dates
may be plain dates or full ISO timestamps and compare correctly either way.
Every SUM is coalesced so callers never see NULL.
"""
from dailydhan.database.db_manager import DatabaseManager
from dailydhan.models.report import (
    CategoryAnalysis,
    CategoryTotal,
    MonthlySummary,
    WalletTotals,
    YearlySummary,
)


class ReportDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def get_totals(self, start: str, end: str) -> MonthlySummary:
        conn = self._db.get_connection()
        row = conn.execute(
            """SELECT
                COALESCE(SUM(CASE WHEN type='income'  THEN amount ELSE 0 END), 0) AS income,
                COALESCE(SUM(CASE WHEN type='expense' THEN amount ELSE 0 END), 0) AS expense
               FROM transactions
               WHERE date >= ? AND date < ?""",
            (start, end),
        ).fetchone()
        return MonthlySummary(income=row["income"] or 0.0, expense=row["expense"] or 0.0)

    def get_totals_with_counts(self, start: str, end: str) -> YearlySummary:
        conn = self._db.get_connection()
        row = conn.execute(
            """SELECT
                COALESCE(SUM(CASE WHEN type='income'  THEN amount ELSE 0 END), 0) AS income,
                COALESCE(SUM(CASE WHEN type='expense' THEN amount ELSE 0 END), 0) AS expense,
                COUNT(CASE WHEN type='income'  THEN 1 END) AS income_count,
                COUNT(CASE WHEN type='expense' THEN 1 END) AS expense_count
               FROM transactions
               WHERE date >= ? AND date < ?""",
            (start, end),
        ).fetchone()
        return YearlySummary(
            income=row["income"] or 0.0,
            expense=row["expense"] or 0.0,
            income_count=row["income_count"] or 0,
            expense_count=row["expense_count"] or 0,
        )

    def get_breakdown_by_category(self, type_: str, start: str, end: str) -> list[CategoryTotal]:
        """Categories of type_ with their type_ transactions summed; zero totals dropped."""
        conn = self._db.get_connection()
        rows = conn.execute(
            """SELECT
                c.id, c.name, c.color, c.icon,
                COALESCE(SUM(t.amount), 0) AS total_amount,
                COUNT(t.id) AS transaction_count
               FROM categories c
               LEFT JOIN transactions t ON t.category_id = c.id
                   AND t.type = ?
                   AND t.date >= ? AND t.date < ?
               WHERE c.type = ?
               GROUP BY c.id, c.name, c.color, c.icon
               HAVING total_amount > 0
               ORDER BY total_amount DESC, c.name ASC""",
            (type_, start, end, type_),
        ).fetchall()
        return [self._category_total(r) for r in rows]

    def get_top_spending(self, limit: int, start: str | None = None,
                         end: str | None = None) -> list[CategoryTotal]:
        conn = self._db.get_connection()
        sql = """
            SELECT
                c.id, c.name, c.color, c.icon,
                COALESCE(SUM(t.amount), 0) AS total_amount,
                COUNT(t.id) AS transaction_count
            FROM categories c
            INNER JOIN transactions t ON t.category_id = c.id AND t.type = 'expense'
            WHERE c.type = 'expense'
        """
        params: list = []
        if start and end:
            sql += " AND t.date >= ? AND t.date < ?"
            params.extend([start, end])
        sql += """
            GROUP BY c.id, c.name, c.color, c.icon
            HAVING total_amount > 0
            ORDER BY total_amount DESC, c.name ASC
            LIMIT ?
        """
        params.append(limit)
        rows = conn.execute(sql, params).fetchall()
        return [self._category_total(r) for r in rows]

    def get_category_analysis(self, limit: int) -> list[CategoryAnalysis]:
        conn = self._db.get_connection()
        rows = conn.execute(
            """SELECT
                c.id, c.name, c.type, c.color, c.icon,
                COALESCE(SUM(CASE WHEN t.type = 'expense' THEN t.amount ELSE 0 END), 0) AS total_expense,
                COALESCE(SUM(CASE WHEN t.type = 'income'  THEN t.amount ELSE 0 END), 0) AS total_income,
                COUNT(t.id) AS transaction_count
               FROM categories c
               LEFT JOIN transactions t ON t.category_id = c.id
               GROUP BY c.id, c.name, c.type, c.color, c.icon
               HAVING total_expense > 0 OR total_income > 0
               ORDER BY (total_expense + total_income) DESC, c.name ASC
               LIMIT ?""",
            (limit,),
        ).fetchall()
        return [
            CategoryAnalysis(
                id=r["id"],
                name=r["name"],
                type=r["type"],
                color=r["color"],
                icon=r["icon"],
                total_expense=r["total_expense"] or 0.0,
                total_income=r["total_income"] or 0.0,
                transaction_count=r["transaction_count"] or 0,
            )
            for r in rows
        ]

    def get_wallet_totals(self, start: str, end: str) -> list[WalletTotals]:
        conn = self._db.get_connection()
        rows = conn.execute(
            """SELECT
                w.id, w.name, w.type, w.bank_name, w.last_4_digits,
                COALESCE(SUM(CASE WHEN t.type = 'income'  THEN t.amount ELSE 0 END), 0) AS total_income,
                COALESCE(SUM(CASE WHEN t.type = 'expense' THEN t.amount ELSE 0 END), 0) AS total_expense,
                COUNT(t.id) AS transaction_count
               FROM wallets w
               LEFT JOIN transactions t ON t.wallet_id = w.id
                   AND t.date >= ? AND t.date < ?
               GROUP BY w.id, w.name, w.type, w.bank_name, w.last_4_digits
               HAVING total_income > 0 OR total_expense > 0
               ORDER BY (total_income + total_expense) DESC, w.name ASC""",
            (start, end),
        ).fetchall()
        return [
            WalletTotals(
                id=r["id"],
                name=r["name"],
                type=r["type"] or "cash",
                bank_name=r["bank_name"],
                last_4_digits=r["last_4_digits"],
                total_income=r["total_income"] or 0.0,
                total_expense=r["total_expense"] or 0.0,
                transaction_count=r["transaction_count"] or 0,
            )
            for r in rows
        ]

    @staticmethod
    def _category_total(row) -> CategoryTotal:
        return CategoryTotal(
            id=row["id"],
            name=row["name"],
            color=row["color"],
            icon=row["icon"],
            total_amount=row["total_amount"] or 0.0,
            transaction_count=row["transaction_count"] or 0,
        )
