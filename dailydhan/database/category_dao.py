from typing import Optional
from dailydhan.database.db_manager import DatabaseManager
from dailydhan.models.category import Category


class CategoryDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Category:
        return Category(
            id=row["id"],
            name=row["name"],
            type=row["type"],
            icon=row["icon"],
            color=row["color"],
        )

    def get_all(self) -> list[Category]:
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM categories ORDER BY name"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, category_id: int) -> Optional[Category]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM categories WHERE id = ?", (category_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_by_type(self, type_filter: str) -> list[Category]:
        """type_filter: 'income' or 'expense'."""
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM categories WHERE type = ? ORDER BY name",
            (type_filter,),
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_name_and_type(self, name: str, type_: str) -> Optional[Category]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM categories WHERE name = ? AND type = ? LIMIT 1",
            (name, type_),
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(self, name: str, type_: str, icon: str | None = None,
               color: str | None = None) -> Category:
        conn = self._db.get_connection()
        cursor = conn.execute(
            "INSERT INTO categories(name, type, icon, color) VALUES (?, ?, ?, ?)",
            (name, type_, icon, color),
        )
        self._db.commit()
        return self.get_by_id(cursor.lastrowid)

    def update(self, category_id: int, name: str, type_: str,
               icon: str | None, color: str | None) -> Category:
        conn = self._db.get_connection()
        conn.execute(
            "UPDATE categories SET name=?, type=?, icon=?, color=? WHERE id=?",
            (name, type_, icon, color, category_id),
        )
        self._db.commit()
        return self.get_by_id(category_id)

    def fill_blanks(self, category_id: int, icon: str | None, color: str | None) -> Category:
        """Set icon/color only where the stored value is null or empty."""
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE categories SET
                   icon  = CASE WHEN icon  IS NULL OR icon  = '' THEN ? ELSE icon  END,
                   color = CASE WHEN color IS NULL OR color = '' THEN ? ELSE color END
               WHERE id = ?""",
            (icon, color, category_id),
        )
        self._db.commit()
        return self.get_by_id(category_id)

    def delete(self, category_id: int):
        with self._db.transaction() as conn:
            conn.execute("DELETE FROM budgets WHERE category_id = ?", (category_id,))
            conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))

    def count_references(self, category_id: int) -> int:
        """Transactions plus recurring templates pointing at the category."""
        conn = self._db.get_connection()
        row = conn.execute(
            """SELECT
                (SELECT COUNT(*) FROM transactions WHERE category_id = ?) +
                (SELECT COUNT(*) FROM recurring_transactions WHERE category_id = ?) AS cnt""",
            (category_id, category_id),
        ).fetchone()
        return row["cnt"]
