from typing import Optional
from dailydhan.database.db_manager import DatabaseManager
from dailydhan.models.recurring_transaction import RecurringTransaction


class RecurringDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> RecurringTransaction:
        return RecurringTransaction(
            id=row["id"],
            amount=row["amount"] or 0.0,
            type=row["type"],
            category_id=row["category_id"],
            wallet_id=row["wallet_id"],
            frequency=row["frequency"],
            start_date=row["start_date"],
            next_due_date=row["next_due_date"],
            note=row["note"],
            is_active=bool(row["is_active"]),
            last_created_date=row["last_created_date"],
            created_at=row["created_at"] or "",
            category_name=row["category_name"] if "category_name" in row.keys() else "",
            category_icon=row["category_icon"] if "category_icon" in row.keys() else None,
            category_color=row["category_color"] if "category_color" in row.keys() else None,
            wallet_name=row["wallet_name"] if "wallet_name" in row.keys() else "",
        )

    def _select(self) -> str:
        return """
            SELECT r.*,
                   COALESCE(c.name, '') AS category_name,
                   c.icon               AS category_icon,
                   c.color              AS category_color,
                   COALESCE(w.name, '') AS wallet_name
            FROM recurring_transactions r
            LEFT JOIN categories c ON c.id = r.category_id
            LEFT JOIN wallets w    ON w.id = r.wallet_id
        """

    def get_all(self) -> list[RecurringTransaction]:
        conn = self._db.get_connection()
        rows = conn.execute(
            self._select() + " ORDER BY r.next_due_date ASC, r.created_at DESC"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_due(self, as_of: str) -> list[RecurringTransaction]:
        """Active templates whose next_due_date is on or before as_of (YYYY-MM-DD)."""
        conn = self._db.get_connection()
        rows = conn.execute(
            self._select() + """
            WHERE r.is_active = 1 AND r.next_due_date <= ?
            ORDER BY r.next_due_date ASC, r.id ASC""",
            (as_of,),
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, recurring_id: int) -> Optional[RecurringTransaction]:
        conn = self._db.get_connection()
        row = conn.execute(
            self._select() + " WHERE r.id = ?", (recurring_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(
        self,
        amount: float,
        type_: str,
        category_id: int | None,
        wallet_id: int | None,
        frequency: str,
        start_date: str,
        next_due_date: str,
        note: str | None = None,
        is_active: bool = True,
    ) -> RecurringTransaction:
        conn = self._db.get_connection()
        cursor = conn.execute(
            """INSERT INTO recurring_transactions
               (amount, type, category_id, wallet_id, frequency, start_date,
                next_due_date, note, is_active)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                amount, type_, category_id, wallet_id, frequency, start_date,
                next_due_date, note, 1 if is_active else 0,
            ),
        )
        self._db.commit()
        return self.get_by_id(cursor.lastrowid)

    def update(
        self,
        recurring_id: int,
        amount: float,
        type_: str,
        category_id: int | None,
        wallet_id: int | None,
        frequency: str,
        start_date: str,
        next_due_date: str,
        note: str | None = None,
        is_active: bool = True,
    ) -> RecurringTransaction:
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE recurring_transactions SET
               amount=?, type=?, category_id=?, wallet_id=?, frequency=?,
               start_date=?, next_due_date=?, note=?, is_active=?
               WHERE id=?""",
            (
                amount, type_, category_id, wallet_id, frequency, start_date,
                next_due_date, note, 1 if is_active else 0, recurring_id,
            ),
        )
        self._db.commit()
        return self.get_by_id(recurring_id)

    def set_active(self, recurring_id: int, is_active: bool):
        conn = self._db.get_connection()
        conn.execute(
            "UPDATE recurring_transactions SET is_active = ? WHERE id = ?",
            (1 if is_active else 0, recurring_id),
        )
        self._db.commit()

    def advance(self, recurring_id: int, next_due_date: str, last_created_date: str):
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE recurring_transactions
               SET next_due_date = ?, last_created_date = ?
               WHERE id = ?""",
            (next_due_date, last_created_date, recurring_id),
        )
        self._db.commit()

    def delete(self, recurring_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM recurring_transactions WHERE id = ?", (recurring_id,))
        self._db.commit()
