# Settings loading and saving for cherrydb
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli
import tomli_w

from cherrydb.utils import expand_path

# ABOUTME: Default settings directory in user's home
SETTINGS_DIR = Path.home() / ".cherrydb"

# ABOUTME: Settings file location (TOML format)
SETTINGS_FILE = SETTINGS_DIR / "config.toml"

# ABOUTME: Cherry Studio's userData directory name on every OS
APP_DIR_NAME = "CherryStudio"


@dataclass
class Settings:
    """cherrydb settings loaded from config.toml.

    ABOUTME: db_path is None when the OS default location should be used
    """
    db_path: Path | None = None
    backup: bool = True
    max_backups: int = 5


def get_settings_path() -> Path:
    """Return the path to the settings file (~/.cherrydb/config.toml)."""
    return SETTINGS_FILE


def ensure_settings_dir() -> Path:
    """Create the settings directory if it doesn't exist."""
    SETTINGS_DIR.mkdir(parents=True, exist_ok=True)
    return SETTINGS_DIR


def get_default_db_path() -> Path:
    """Return Cherry Studio's Local Storage LevelDB directory for this OS.

    ABOUTME: Mirrors Electron's userData location per platform
    ABOUTME: Path may not exist if Cherry Studio isn't installed
    """
    if sys.platform == "darwin":
        base = Path.home() / "Library/Application Support"
    elif sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData/Roaming"))
    else:  # Linux and others
        base = Path.home() / ".config"
    return base / APP_DIR_NAME / "Local Storage" / "leveldb"


def load_settings(path: Path) -> Settings:
    """Load settings from a TOML file.

    ABOUTME: Missing file means defaults, not an error
    ABOUTME: Expands ${VAR} and ~ in db_path

    Args:
        path: Path to config.toml

    Returns:
        Parsed Settings

    Raises:
        ValueError: If the TOML is invalid or a value has the wrong type
    """
    if not path.exists():
        return Settings()

    try:
        with open(path, "rb") as f:
            data = tomli.load(f)
    except tomli.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {path}: {e}") from e

    settings = Settings()

    if "db_path" in data:
        if not isinstance(data["db_path"], str):
            raise ValueError(f"'db_path' in {path} must be a string")
        settings.db_path = expand_path(data["db_path"])

    if "backup" in data:
        if not isinstance(data["backup"], bool):
            raise ValueError(f"'backup' in {path} must be true or false")
        settings.backup = data["backup"]

    if "max_backups" in data:
        max_backups = data["max_backups"]
        if isinstance(max_backups, bool) or not isinstance(max_backups, int) or max_backups < 1:
            raise ValueError(f"'max_backups' in {path} must be a positive integer")
        settings.max_backups = max_backups

    return settings


def save_settings(path: Path, settings: Settings) -> None:
    """Write settings to a TOML file, creating parent dirs if needed."""
    data: dict[str, Any] = {
        "backup": settings.backup,
        "max_backups": settings.max_backups,
    }
    if settings.db_path is not None:
        data["db_path"] = str(settings.db_path)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        tomli_w.dump(data, f)


def resolve_db_path(cli_value: str | None, settings: Settings) -> Path:
    """Pick the database path: --db, then settings, then the OS default."""
    if cli_value:
        return expand_path(cli_value)
    if settings.db_path is not None:
        return settings.db_path
    return get_default_db_path()
