"""Pre-DB bootstrap configuration. Zero imports from the rest of the app.

Stores user preferences that must be known before opening the DB (db_folder,
backup_dir, currency, recurring catch-up limit).
Config lives in ~/.dailydhan/config.json to avoid a bootstrapping problem.
"""
import json
import os
from pathlib import Path

CONFIG_DIR = Path.home() / ".dailydhan"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULTS = {
    "currency": "INR",
    "recurring_catch_up_limit": 60,
}


def load_config(path: Path | None = None) -> dict:
    """Returns {} on missing or corrupt file; never raises."""
    try:
        with open(path or CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}
    except Exception:
        return {}


def save_config(config: dict, path: Path | None = None) -> None:
    """Creates the config folder if needed; atomic write via .tmp + os.replace()."""
    target = Path(path or CONFIG_FILE)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        os.replace(tmp, target)
    except Exception:
        try:
            tmp.unlink(missing_ok=True)
        except Exception:
            pass
        raise


def get_setting(key: str, config: dict | None = None):
    config = load_config() if config is None else config
    return config.get(key, DEFAULTS.get(key))


def get_db_folder(config: dict | None = None) -> str | None:
    """Return config["db_folder"] or None if not set."""
    return get_setting("db_folder", config)


def set_db_folder(path: str | None) -> None:
    """Update db_folder in config and save."""
    config = load_config()
    if path is None:
        config.pop("db_folder", None)
    else:
        config["db_folder"] = path
    save_config(config)


def get_backup_dir(config: dict | None = None) -> str:
    """Configured backup_dir, else DailyDhanBackups next to the database."""
    backup_dir = get_setting("backup_dir", config)
    if backup_dir:
        return backup_dir
    return os.path.join(get_db_folder(config) or os.getcwd(), "DailyDhanBackups")


def get_catch_up_limit(config: dict | None = None) -> int:
    try:
        return max(1, int(get_setting("recurring_catch_up_limit", config)))
    except (TypeError, ValueError):
        return DEFAULTS["recurring_catch_up_limit"]
