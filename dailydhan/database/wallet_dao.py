from typing import Optional
from dailydhan.database.db_manager import DatabaseManager
from dailydhan.models.wallet import Wallet


class WalletDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Wallet:
        return Wallet(
            id=row["id"],
            name=row["name"],
            type=row["type"] or "cash",
            balance=row["balance"] or 0.0,
            bank_name=row["bank_name"],
            last_4_digits=row["last_4_digits"],
        )

    def get_all(self) -> list[Wallet]:
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM wallets ORDER BY name COLLATE NOCASE, id"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, wallet_id: int) -> Optional[Wallet]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM wallets WHERE id = ?", (wallet_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_by_name(self, name: str) -> Optional[Wallet]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM wallets WHERE name = ? ORDER BY id LIMIT 1", (name,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(
        self,
        name: str,
        type_: str = "cash",
        bank_name: str | None = None,
        last_4_digits: str | None = None,
    ) -> Wallet:
        conn = self._db.get_connection()
        cursor = conn.execute(
            "INSERT INTO wallets(name, type, bank_name, last_4_digits) VALUES (?, ?, ?, ?)",
            (name, type_, bank_name, last_4_digits),
        )
        self._db.commit()
        return self.get_by_id(cursor.lastrowid)

    def update(
        self,
        wallet_id: int,
        name: str,
        type_: str = "cash",
        bank_name: str | None = None,
        last_4_digits: str | None = None,
    ) -> Wallet:
        conn = self._db.get_connection()
        conn.execute(
            "UPDATE wallets SET name = ?, type = ?, bank_name = ?, last_4_digits = ? WHERE id = ?",
            (name, type_, bank_name, last_4_digits, wallet_id),
        )
        self._db.commit()
        return self.get_by_id(wallet_id)

    def delete(self, wallet_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM wallets WHERE id = ?", (wallet_id,))
        self._db.commit()

    def count_references(self, wallet_id: int) -> int:
        """Transactions plus recurring templates pointing at the wallet."""
        conn = self._db.get_connection()
        row = conn.execute(
            """SELECT
                (SELECT COUNT(*) FROM transactions WHERE wallet_id = ?) +
                (SELECT COUNT(*) FROM recurring_transactions WHERE wallet_id = ?) AS cnt""",
            (wallet_id, wallet_id),
        ).fetchone()
        return row["cnt"]
