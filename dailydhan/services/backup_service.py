"""Byte-for-byte backup and restore of the database file.

No format versioning: a restored file is opened with the current schema
code, which adds missing columns but cannot undo newer ones.
"""
import logging
import os
import shutil
from pathlib import Path

from dailydhan.database.db_manager import DatabaseManager
from dailydhan.utils.constants import BACKUP_PREFIX, PRE_RESTORE_PREFIX
from dailydhan.utils.date_helpers import file_timestamp

logger = logging.getLogger(__name__)

SQLITE_HEADER = b"SQLite format 3\x00"


class BackupService:
    def __init__(self, db: DatabaseManager, backup_dir: str):
        self._db = db
        self.backup_dir = Path(backup_dir)

    def create_backup(self) -> str:
        """Copy the live database into the backup folder; returns the new file's path."""
        db_path = self._live_path()
        if not db_path.exists():
            raise FileNotFoundError(
                "Database file not found. Open the app and add some data first."
            )
        self._db.checkpoint()
        self.backup_dir.mkdir(parents=True, exist_ok=True)
        target = self.backup_dir / f"{BACKUP_PREFIX}{file_timestamp()}.db"
        shutil.copyfile(db_path, target)
        logger.info("Backup created at %s", target)
        return str(target)

    def restore_backup(self, backup_path: str) -> str | None:
        """Replace the live database with backup_path.

        A safety copy of the current file is written first; its path is
        returned, or None when there was no live file to copy.
        """
        source = Path(backup_path)
        if not source.is_file():
            raise FileNotFoundError(f"Backup file not found: {backup_path}")
        with open(source, "rb") as f:
            if f.read(len(SQLITE_HEADER)) != SQLITE_HEADER:
                raise ValueError(f"{source.name} is not a DailyDhan backup file.")

        db_path = self._live_path()
        safety_copy = None
        if db_path.exists():
            self.backup_dir.mkdir(parents=True, exist_ok=True)
            safety_copy = self.backup_dir / f"{PRE_RESTORE_PREFIX}{file_timestamp()}.db"
            self._db.checkpoint()
            shutil.copyfile(db_path, safety_copy)
            logger.info("Saved current database to %s before restore", safety_copy)

        self._db.close()
        for suffix in ("-wal", "-shm"):
            stale = Path(f"{db_path}{suffix}")
            if stale.exists():
                stale.unlink()
        shutil.copyfile(source, db_path)
        self._db.open()
        self._db.initialize()
        logger.info("Database restored from %s", source)
        return str(safety_copy) if safety_copy else None

    def list_backups(self) -> list[str]:
        """Backup files in the backup folder, newest first."""
        if not self.backup_dir.is_dir():
            return []
        files = [
            p for p in self.backup_dir.iterdir()
            if p.is_file() and p.suffix == ".db"
            and p.name.startswith((BACKUP_PREFIX, PRE_RESTORE_PREFIX))
        ]
        files.sort(key=lambda p: (p.stat().st_mtime, p.name), reverse=True)
        return [str(p) for p in files]

    def _live_path(self) -> Path:
        if self._db.is_memory:
            raise ValueError("An in-memory database cannot be backed up.")
        return Path(os.path.abspath(self._db.db_path))
