import logging
import sqlite3
from contextlib import contextmanager
from dailydhan.utils.constants import DB_FILE

logger = logging.getLogger(__name__)

# Ids of categories that lose to a lower id with the same (name, type)
_DUPLICATE_CATEGORY_IDS = """
    SELECT id FROM categories
    WHERE id NOT IN (SELECT MIN(id) FROM categories GROUP BY name, type)
"""

_SURVIVOR_FOR = """
    (SELECT MIN(k.id)
     FROM categories k
     JOIN categories d ON d.name = k.name AND d.type = k.type
     WHERE d.id = {table}.category_id)
"""


class DatabaseManager:
    """Owns the single long-lived SQLite connection and the schema.

    Constructed once by the composition root and handed to every DAO.
    Pass ":memory:" for an isolated throwaway store.
    """

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE
        self._conn: sqlite3.Connection | None = None
        self._tx_depth = 0

    @property
    def is_memory(self) -> bool:
        return self.db_path == ":memory:"

    def open(self) -> "DatabaseManager":
        self.get_connection()
        return self

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
            if not self.is_memory:
                self._conn.execute("PRAGMA journal_mode = WAL")
        return self._conn

    @contextmanager
    def transaction(self):
        """Group statements into one atomic unit; nested blocks join the outer one."""
        conn = self.get_connection()
        self._tx_depth += 1
        try:
            yield conn
        except BaseException:
            self._tx_depth -= 1
            if self._tx_depth == 0:
                conn.rollback()
            raise
        self._tx_depth -= 1
        if self._tx_depth == 0:
            conn.commit()

    def commit(self):
        """Commit unless an enclosing transaction() block will do it."""
        if self._conn is not None and self._tx_depth == 0:
            self._conn.commit()

    def initialize(self):
        """Create schema and seed defaults."""
        from dailydhan.database.category_seeder import CategorySeeder

        self.ensure_schema()
        return CategorySeeder(self).seed_default_categories()

    def ensure_schema(self):
        """Idempotent; never drops or rewrites existing tables. Errors propagate."""
        conn = self.get_connection()
        self._create_schema(conn)
        self._migrate_schema(conn)
        self._create_indexes(conn)
        conn.commit()
        logger.info("Schema ready at %s", self.db_path)

    def _create_schema(self, conn: sqlite3.Connection):
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS wallets (
                id            INTEGER PRIMARY KEY AUTOINCREMENT,
                name          TEXT NOT NULL,
                type          TEXT NOT NULL DEFAULT 'cash',
                bank_name     TEXT,
                last_4_digits TEXT,
                balance       REAL DEFAULT 0
            );

            CREATE TABLE IF NOT EXISTS categories (
                id    INTEGER PRIMARY KEY AUTOINCREMENT,
                name  TEXT NOT NULL,
                type  TEXT NOT NULL CHECK(type IN ('income','expense')),
                icon  TEXT,
                color TEXT
            );

            CREATE TABLE IF NOT EXISTS transactions (
                id          INTEGER PRIMARY KEY AUTOINCREMENT,
                amount      REAL NOT NULL CHECK(amount > 0),
                type        TEXT NOT NULL CHECK(type IN ('income','expense')),
                category_id INTEGER REFERENCES categories(id),
                wallet_id   INTEGER REFERENCES wallets(id),
                date        TEXT,
                note        TEXT,
                attachment  TEXT
            );

            CREATE TABLE IF NOT EXISTS budgets (
                id          INTEGER PRIMARY KEY AUTOINCREMENT,
                category_id INTEGER NOT NULL REFERENCES categories(id),
                amount      REAL NOT NULL CHECK(amount > 0),
                period      TEXT NOT NULL CHECK(period IN ('monthly','yearly')),
                year        INTEGER,
                month       INTEGER,
                created_at  TEXT DEFAULT CURRENT_TIMESTAMP
            );

            CREATE TABLE IF NOT EXISTS recurring_transactions (
                id                INTEGER PRIMARY KEY AUTOINCREMENT,
                amount            REAL NOT NULL CHECK(amount > 0),
                type              TEXT NOT NULL CHECK(type IN ('income','expense')),
                category_id       INTEGER REFERENCES categories(id),
                wallet_id         INTEGER REFERENCES wallets(id),
                frequency         TEXT NOT NULL,
                start_date        TEXT NOT NULL,
                next_due_date     TEXT NOT NULL,
                note              TEXT,
                is_active         INTEGER DEFAULT 1,
                created_at        TEXT DEFAULT CURRENT_TIMESTAMP,
                last_created_date TEXT
            );
        """)

    @staticmethod
    def _columns(conn: sqlite3.Connection, table: str) -> set[str]:
        return {row[1] for row in conn.execute(f"PRAGMA table_info({table})").fetchall()}

    def _migrate_schema(self, conn: sqlite3.Connection):
        """Idempotent ALTER TABLE for columns added after initial release."""
        wallet_cols = self._columns(conn, "wallets")
        if "type" not in wallet_cols:
            conn.execute("ALTER TABLE wallets ADD COLUMN type TEXT NOT NULL DEFAULT 'cash'")
        if "bank_name" not in wallet_cols:
            conn.execute("ALTER TABLE wallets ADD COLUMN bank_name TEXT")
        if "last_4_digits" not in wallet_cols:
            conn.execute("ALTER TABLE wallets ADD COLUMN last_4_digits TEXT")
        if "balance" not in wallet_cols:
            conn.execute("ALTER TABLE wallets ADD COLUMN balance REAL DEFAULT 0")

        budget_cols = self._columns(conn, "budgets")
        if "created_at" not in budget_cols:
            conn.execute("ALTER TABLE budgets ADD COLUMN created_at TEXT")

        recurring_cols = self._columns(conn, "recurring_transactions")
        if "last_created_date" not in recurring_cols:
            conn.execute("ALTER TABLE recurring_transactions ADD COLUMN last_created_date TEXT")
        if "created_at" not in recurring_cols:
            conn.execute("ALTER TABLE recurring_transactions ADD COLUMN created_at TEXT")

    def _create_indexes(self, conn: sqlite3.Connection):
        conn.executescript("""
            CREATE INDEX IF NOT EXISTS idx_transactions_date        ON transactions(date);
            CREATE INDEX IF NOT EXISTS idx_transactions_category_id ON transactions(category_id);
            CREATE INDEX IF NOT EXISTS idx_transactions_wallet_id   ON transactions(wallet_id);
            CREATE INDEX IF NOT EXISTS idx_recurring_next_due       ON recurring_transactions(next_due_date);
        """)
        unique_categories = (
            "CREATE UNIQUE INDEX IF NOT EXISTS idx_categories_name_type "
            "ON categories(name, type)"
        )
        try:
            conn.execute(unique_categories)
        except sqlite3.IntegrityError:
            # Files written before the index existed can hold duplicate rows
            logger.warning("Duplicate categories found; merging before indexing")
            self.merge_duplicate_categories()
            conn.execute(unique_categories)

        unique_budgets = (
            "CREATE UNIQUE INDEX IF NOT EXISTS idx_budgets_category_period "
            "ON budgets(category_id, period, year, month)"
        )
        try:
            conn.execute(unique_budgets)
        except sqlite3.IntegrityError:
            logger.warning("Duplicate budgets found; keeping the oldest of each")
            with self.transaction() as tx:
                tx.execute("""
                    DELETE FROM budgets
                    WHERE id NOT IN (
                        SELECT MIN(id) FROM budgets
                        GROUP BY category_id, period, year, month
                    )
                """)
            conn.execute(unique_budgets)

    def merge_duplicate_categories(self) -> int:
        """Keep the lowest id per (name, type), repointing references to it.

        Returns the number of category rows removed.
        """
        with self.transaction() as conn:
            for table in ("transactions", "recurring_transactions"):
                conn.execute(
                    f"UPDATE {table} SET category_id = {_SURVIVOR_FOR.format(table=table)} "
                    f"WHERE category_id IN ({_DUPLICATE_CATEGORY_IDS})"
                )
            # A budget that would collide with the survivor's budget is dropped
            conn.execute(
                f"UPDATE OR IGNORE budgets SET category_id = {_SURVIVOR_FOR.format(table='budgets')} "
                f"WHERE category_id IN ({_DUPLICATE_CATEGORY_IDS})"
            )
            conn.execute(f"DELETE FROM budgets WHERE category_id IN ({_DUPLICATE_CATEGORY_IDS})")
            cursor = conn.execute(f"DELETE FROM categories WHERE id IN ({_DUPLICATE_CATEGORY_IDS})")
        return cursor.rowcount

    def get_counts(self) -> dict[str, int]:
        """Row counts for a quick sanity check of the store."""
        conn = self.get_connection()
        counts = {}
        for table in ("transactions", "categories", "wallets", "budgets", "recurring_transactions"):
            counts[table] = conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
        return counts

    def checkpoint(self):
        """Fold the WAL back into the main file so a raw file copy is complete."""
        if self._conn is not None and not self.is_memory:
            self._conn.execute("PRAGMA wal_checkpoint(TRUNCATE)")

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None
            self._tx_depth = 0
