from typing import Optional
from dailydhan.database.db_manager import DatabaseManager
from dailydhan.models.transaction import Transaction


class TransactionDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Transaction:
        return Transaction(
            id=row["id"],
            amount=row["amount"] or 0.0,
            type=row["type"],
            category_id=row["category_id"],
            wallet_id=row["wallet_id"],
            date=row["date"],
            note=row["note"],
            attachment=row["attachment"],
            category_name=row["category_name"] if "category_name" in row.keys() else "",
            category_icon=row["category_icon"] if "category_icon" in row.keys() else None,
            category_color=row["category_color"] if "category_color" in row.keys() else None,
            wallet_name=row["wallet_name"] if "wallet_name" in row.keys() else "",
        )

    def _select(self) -> str:
        return """
            SELECT t.*,
                   COALESCE(c.name, '') AS category_name,
                   c.icon               AS category_icon,
                   c.color              AS category_color,
                   COALESCE(w.name, '') AS wallet_name
            FROM transactions t
            LEFT JOIN categories c ON t.category_id = c.id
            LEFT JOIN wallets w    ON t.wallet_id = w.id
        """

    def get_all(self) -> list[Transaction]:
        conn = self._db.get_connection()
        rows = conn.execute(
            self._select() + " ORDER BY t.date DESC, t.id DESC"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_recent(self, limit: int = 5) -> list[Transaction]:
        conn = self._db.get_connection()
        rows = conn.execute(
            self._select() + " ORDER BY t.date DESC, t.id DESC LIMIT ?", (limit,)
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_between(
        self,
        start: str,
        end: str,
        type_filter: str | None = None,
        category_id: int | None = None,
        wallet_id: int | None = None,
    ) -> list[Transaction]:
        """Transactions with start <= date < end, newest first."""
        conn = self._db.get_connection()
        sql = self._select() + " WHERE t.date >= ? AND t.date < ?"
        params: list = [start, end]

        if type_filter and type_filter != "all":
            sql += " AND t.type = ?"
            params.append(type_filter)
        if category_id is not None:
            sql += " AND t.category_id = ?"
            params.append(category_id)
        if wallet_id is not None:
            sql += " AND t.wallet_id = ?"
            params.append(wallet_id)

        sql += " ORDER BY t.date DESC, t.id DESC"
        rows = conn.execute(sql, params).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, tx_id: int) -> Optional[Transaction]:
        conn = self._db.get_connection()
        row = conn.execute(
            self._select() + " WHERE t.id = ?", (tx_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(
        self,
        amount: float,
        type_: str,
        date: str,
        category_id: int | None = None,
        wallet_id: int | None = None,
        note: str | None = None,
        attachment: str | None = None,
    ) -> Transaction:
        conn = self._db.get_connection()
        cursor = conn.execute(
            """INSERT INTO transactions
               (amount, type, category_id, wallet_id, date, note, attachment)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (amount, type_, category_id, wallet_id, date, note, attachment),
        )
        self._db.commit()
        return self.get_by_id(cursor.lastrowid)

    def update(
        self,
        tx_id: int,
        amount: float,
        type_: str,
        date: str,
        category_id: int | None = None,
        wallet_id: int | None = None,
        note: str | None = None,
    ) -> Transaction:
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE transactions
               SET amount=?, type=?, category_id=?, wallet_id=?, date=?, note=?
               WHERE id=?""",
            (amount, type_, category_id, wallet_id, date, note, tx_id),
        )
        self._db.commit()
        return self.get_by_id(tx_id)

    def delete(self, tx_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM transactions WHERE id = ?", (tx_id,))
        self._db.commit()
