"""Default category catalog seeding.

Runs on every start after the schema exists. Each step is idempotent and
non-fatal: a failing step is logged and the next one still runs, so the app
always starts with whatever categories could be written. Existing icon and
color values are never overwritten; only null or empty fields are filled.
"""
import logging
import sqlite3
from dataclasses import dataclass

from dailydhan.database.db_manager import DatabaseManager
from dailydhan.utils.constants import DEFAULT_CATEGORIES, default_icon_for, palette_color_for

logger = logging.getLogger(__name__)


@dataclass
class SeedReport:
    duplicates_removed: int = 0
    inserted: int = 0
    backfilled: int = 0
    colors_assigned: int = 0
    icons_assigned: int = 0
    failed_steps: int = 0


class CategorySeeder:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def seed_default_categories(self) -> SeedReport:
        report = SeedReport()
        for step in (
            self._remove_duplicates,
            self._upsert_defaults,
            self._insert_all_if_empty,
            self._assign_missing_colors,
            self._assign_missing_icons,
        ):
            try:
                step(report)
            except sqlite3.Error as e:
                report.failed_steps += 1
                logger.warning("Category seeding step %s failed: %s", step.__name__, e)
        logger.info(
            "Default categories ready (inserted=%d, backfilled=%d, duplicates removed=%d)",
            report.inserted, report.backfilled, report.duplicates_removed,
        )
        return report

    def _remove_duplicates(self, report: SeedReport):
        report.duplicates_removed = self._db.merge_duplicate_categories()

    def _upsert_defaults(self, report: SeedReport):
        with self._db.transaction() as conn:
            for cat in DEFAULT_CATEGORIES:
                existing = conn.execute(
                    "SELECT id, icon, color FROM categories WHERE name = ? AND type = ? LIMIT 1",
                    (cat["name"], cat["type"]),
                ).fetchone()
                if existing is None:
                    conn.execute(
                        "INSERT INTO categories(name, type, icon, color) VALUES (?, ?, ?, ?)",
                        (cat["name"], cat["type"], cat["icon"], cat["color"]),
                    )
                    report.inserted += 1
                elif not existing["icon"] or not existing["color"]:
                    conn.execute(
                        "UPDATE categories SET icon = ?, color = ? WHERE id = ?",
                        (
                            existing["icon"] or cat["icon"],
                            existing["color"] or cat["color"],
                            existing["id"],
                        ),
                    )
                    report.backfilled += 1

    def _insert_all_if_empty(self, report: SeedReport):
        conn = self._db.get_connection()
        count = conn.execute("SELECT COUNT(*) FROM categories").fetchone()[0]
        if count > 0:
            return
        logger.warning("Categories table empty after seeding; inserting full catalog")
        with self._db.transaction() as tx:
            for cat in DEFAULT_CATEGORIES:
                cursor = tx.execute(
                    "INSERT OR IGNORE INTO categories(name, type, icon, color) VALUES (?, ?, ?, ?)",
                    (cat["name"], cat["type"], cat["icon"], cat["color"]),
                )
                report.inserted += cursor.rowcount

    def _assign_missing_colors(self, report: SeedReport):
        report.colors_assigned = backfill_colors(self._db)

    def _assign_missing_icons(self, report: SeedReport):
        report.icons_assigned = backfill_icons(self._db)


def backfill_colors(db: DatabaseManager) -> int:
    """Give every colorless category palette[id % len(palette)]."""
    with db.transaction() as conn:
        rows = conn.execute(
            "SELECT id FROM categories WHERE color IS NULL OR color = '' ORDER BY id"
        ).fetchall()
        for row in rows:
            conn.execute(
                "UPDATE categories SET color = ? WHERE id = ?",
                (palette_color_for(row["id"]), row["id"]),
            )
    return len(rows)


def backfill_icons(db: DatabaseManager) -> int:
    """Give every iconless category the catalog icon for its name, else a type default."""
    with db.transaction() as conn:
        rows = conn.execute(
            "SELECT id, name, type FROM categories WHERE icon IS NULL OR icon = '' ORDER BY id"
        ).fetchall()
        for row in rows:
            conn.execute(
                "UPDATE categories SET icon = ? WHERE id = ?",
                (default_icon_for(row["name"], row["type"]), row["id"]),
            )
    return len(rows)
