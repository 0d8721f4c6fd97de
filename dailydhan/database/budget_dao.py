from typing import Optional
from dailydhan.database.db_manager import DatabaseManager
from dailydhan.models.budget import Budget, BudgetStatus


class BudgetDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Budget:
        return Budget(
            id=row["id"],
            category_id=row["category_id"],
            amount=row["amount"] or 0.0,
            period=row["period"],
            year=row["year"],
            month=row["month"],
            category_name=row["category_name"] if "category_name" in row.keys() else "",
            category_icon=row["category_icon"] if "category_icon" in row.keys() else None,
            category_color=row["category_color"] if "category_color" in row.keys() else None,
            category_type=row["category_type"] if "category_type" in row.keys() else "",
            created_at=row["created_at"] or "",
        )

    def _select(self) -> str:
        return """
            SELECT b.*,
                   c.name  AS category_name,
                   c.icon  AS category_icon,
                   c.color AS category_color,
                   c.type  AS category_type
            FROM budgets b
            JOIN categories c ON c.id = b.category_id
        """

    def get_all(self) -> list[Budget]:
        conn = self._db.get_connection()
        rows = conn.execute(
            self._select() + " ORDER BY b.year DESC, b.month DESC, c.name ASC"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, budget_id: int) -> Optional[Budget]:
        conn = self._db.get_connection()
        row = conn.execute(
            self._select() + " WHERE b.id = ?", (budget_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_for_period(self, period: str, year: int, month: int | None = None) -> list[Budget]:
        conn = self._db.get_connection()
        if period == "monthly":
            rows = conn.execute(
                self._select() + """
                WHERE b.period = 'monthly' AND b.year = ? AND b.month = ?
                ORDER BY c.name ASC""",
                (year, month),
            ).fetchall()
        else:
            rows = conn.execute(
                self._select() + """
                WHERE b.period = 'yearly' AND b.year = ?
                ORDER BY c.name ASC""",
                (year,),
            ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def find(self, category_id: int, period: str, year: int, month: int | None) -> Optional[Budget]:
        conn = self._db.get_connection()
        row = conn.execute(
            self._select() + """
            WHERE b.category_id = ? AND b.period = ? AND b.year = ? AND b.month IS ?""",
            (category_id, period, year, month),
        ).fetchone()
        return self._row_to_model(row) if row else None

    def save(self, category_id: int, amount: float, period: str, year: int,
             month: int | None) -> Budget:
        """Update the amount of the matching budget, or insert a new one.

        Yearly budgets carry a NULL month, which the unique index treats as
        distinct, so the match is done with IS rather than ON CONFLICT.
        """
        with self._db.transaction() as conn:
            existing = conn.execute(
                """SELECT id FROM budgets
                   WHERE category_id = ? AND period = ? AND year = ? AND month IS ?""",
                (category_id, period, year, month),
            ).fetchone()
            if existing:
                budget_id = existing["id"]
                conn.execute(
                    "UPDATE budgets SET amount = ? WHERE id = ?", (amount, budget_id)
                )
            else:
                cursor = conn.execute(
                    """INSERT INTO budgets(category_id, amount, period, year, month)
                       VALUES (?, ?, ?, ?, ?)""",
                    (category_id, amount, period, year, month),
                )
                budget_id = cursor.lastrowid
        return self.get_by_id(budget_id)

    def delete(self, budget_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM budgets WHERE id = ?", (budget_id,))
        self._db.commit()

    def get_vs_actual(self, period: str, year: int, month: int | None,
                      start: str, end: str) -> list[BudgetStatus]:
        """Budgets of the period joined to expense spending in [start, end)."""
        conn = self._db.get_connection()
        sql = """
            SELECT
                b.id          AS budget_id,
                b.category_id,
                b.amount      AS budget_amount,
                b.period,
                b.year,
                b.month,
                c.name        AS category_name,
                c.icon        AS category_icon,
                c.color       AS category_color,
                COALESCE(SUM(t.amount), 0) AS actual_spending,
                COUNT(t.id)   AS transaction_count
            FROM budgets b
            JOIN categories c ON c.id = b.category_id
            LEFT JOIN transactions t ON t.category_id = b.category_id
                AND t.type = 'expense'
                AND t.date >= ? AND t.date < ?
        """
        params: list = [start, end, period, year]
        if period == "monthly":
            sql += " WHERE b.period = ? AND b.year = ? AND b.month = ?"
            params.append(month)
        else:
            sql += " WHERE b.period = ? AND b.year = ?"
        sql += " GROUP BY b.id ORDER BY c.name ASC"
        rows = conn.execute(sql, params).fetchall()
        return [
            BudgetStatus(
                budget_id=r["budget_id"],
                category_id=r["category_id"],
                budget_amount=r["budget_amount"] or 0.0,
                period=r["period"],
                year=r["year"],
                month=r["month"],
                category_name=r["category_name"],
                category_icon=r["category_icon"],
                category_color=r["category_color"],
                actual_spending=r["actual_spending"] or 0.0,
                transaction_count=r["transaction_count"] or 0,
            )
            for r in rows
        ]
