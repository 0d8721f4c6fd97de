"""Schema creation, migrations-on-boot and legacy file handling."""
import sqlite3

import pytest

from dailydhan.database.db_manager import DatabaseManager

TABLES = {"wallets", "categories", "transactions", "budgets", "recurring_transactions"}


def _tables(db):
    rows = db.get_connection().execute(
        "SELECT name FROM sqlite_master WHERE type = 'table'"
    ).fetchall()
    return {r["name"] for r in rows}


def _indexes(db, table):
    return {r[1] for r in db.get_connection().execute(f"PRAGMA index_list({table})")}


class TestEnsureSchema:
    def test_creates_all_tables(self):
        db = DatabaseManager(":memory:").open()
        db.ensure_schema()
        assert TABLES <= _tables(db)

    def test_creates_unique_indexes(self):
        db = DatabaseManager(":memory:").open()
        db.ensure_schema()
        assert "idx_categories_name_type" in _indexes(db, "categories")
        assert "idx_budgets_category_period" in _indexes(db, "budgets")

    def test_is_idempotent_and_keeps_data(self, db):
        conn = db.get_connection()
        conn.execute("INSERT INTO wallets(name) VALUES ('Cash')")
        conn.commit()

        db.ensure_schema()
        db.ensure_schema()

        names = [r["name"] for r in conn.execute("SELECT name FROM wallets")]
        assert names == ["Cash"]

    def test_duplicate_category_rejected_by_store(self, db):
        with pytest.raises(sqlite3.IntegrityError):
            db.get_connection().execute(
                "INSERT INTO categories(name, type) VALUES ('Salary', 'income')"
            )

    def test_failure_propagates(self, tmp_path):
        # A directory cannot be opened as a database file
        with pytest.raises(sqlite3.Error):
            DatabaseManager(str(tmp_path)).initialize()


class TestMigrations:
    def test_adds_missing_wallet_columns(self):
        db = DatabaseManager(":memory:").open()
        db.get_connection().execute(
            "CREATE TABLE wallets (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL)"
        )
        db.ensure_schema()

        cols = {r[1] for r in db.get_connection().execute("PRAGMA table_info(wallets)")}
        assert {"type", "bank_name", "last_4_digits", "balance"} <= cols

    def test_adds_last_created_date_to_recurring(self):
        db = DatabaseManager(":memory:").open()
        db.get_connection().execute("""
            CREATE TABLE recurring_transactions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                amount REAL NOT NULL, type TEXT NOT NULL,
                category_id INTEGER, wallet_id INTEGER,
                frequency TEXT NOT NULL, start_date TEXT NOT NULL,
                next_due_date TEXT NOT NULL, note TEXT, is_active INTEGER DEFAULT 1
            )
        """)
        db.ensure_schema()

        cols = {r[1] for r in db.get_connection().execute("PRAGMA table_info(recurring_transactions)")}
        assert {"last_created_date", "created_at"} <= cols

    def test_legacy_duplicate_categories_are_merged(self):
        db = DatabaseManager(":memory:").open()
        conn = db.get_connection()
        conn.executescript("""
            CREATE TABLE categories (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL, type TEXT NOT NULL, icon TEXT, color TEXT
            );
            CREATE TABLE transactions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                amount REAL NOT NULL, type TEXT NOT NULL,
                category_id INTEGER, wallet_id INTEGER,
                date TEXT, note TEXT, attachment TEXT
            );
            INSERT INTO categories(name, type, icon) VALUES ('Salary', 'income', 'cash');
            INSERT INTO categories(name, type, icon) VALUES ('Salary', 'income', 'star');
            INSERT INTO transactions(amount, type, category_id, date)
                VALUES (100, 'income', 2, '2024-01-01');
        """)

        db.ensure_schema()

        rows = conn.execute(
            "SELECT id, icon FROM categories WHERE name = 'Salary'"
        ).fetchall()
        assert [(r["id"], r["icon"]) for r in rows] == [(1, "cash")]
        tx = conn.execute("SELECT category_id FROM transactions").fetchone()
        assert tx["category_id"] == 1
        assert "idx_categories_name_type" in _indexes(db, "categories")


class TestTransactionBlock:
    def test_rolls_back_on_error(self, db):
        with pytest.raises(RuntimeError):
            with db.transaction() as conn:
                conn.execute("INSERT INTO wallets(name) VALUES ('Temp')")
                raise RuntimeError("boom")
        assert db.get_counts()["wallets"] == 0

    def test_nested_blocks_commit_once(self, db):
        with db.transaction() as outer:
            outer.execute("INSERT INTO wallets(name) VALUES ('A')")
            with db.transaction() as inner:
                inner.execute("INSERT INTO wallets(name) VALUES ('B')")
            db.commit()  # no-op inside a block
        assert db.get_counts()["wallets"] == 2
