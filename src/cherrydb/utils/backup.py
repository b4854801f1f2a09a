# ABOUTME: Backup utilities for the Cherry Studio LevelDB directory.
# ABOUTME: Handles timestamped directory copies with retention cleanup (keep last N).
import logging
import re
import shutil
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

# ABOUTME: Matches {name}_{YYYYMMDD}_{HHMMSS}_{microseconds}
BACKUP_PATTERN = re.compile(r"^(.+?)_(\d{8}_\d{6}_\d{6})$")


def create_backup(db_path: Path, backup_dir: Path, max_backups: int = 5) -> Path:
    """Copy a LevelDB directory to a timestamped backup.

    ABOUTME: Backup format: {dirname}_{YYYYMMDD}_{HHMMSS}_{ffffff}
    ABOUTME: LevelDB's LOCK file is not copied
    ABOUTME: Creates backup_dir if it doesn't exist

    Args:
        db_path: LevelDB directory to back up
        backup_dir: Directory where the copy should be created
        max_backups: How many backups of this directory to keep

    Returns:
        Path to the created backup directory

    Raises:
        FileNotFoundError: If db_path doesn't exist
        OSError: If the copy fails

    Examples:
        >>> create_backup(Path("~/.config/CherryStudio/Local Storage/leveldb"), get_backup_dir()).name
        'leveldb_20261019_143022_123456'
    """
    if not db_path.is_dir():
        raise FileNotFoundError(f"Database directory not found: {db_path}")

    backup_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    backup_path = backup_dir / f"{db_path.name}_{timestamp}"

    shutil.copytree(db_path, backup_path, ignore=shutil.ignore_patterns("LOCK"))
    logger.debug(f"Backed up {db_path} to {backup_path}")

    cleanup_old_backups(backup_dir, max_backups)

    return backup_path


def get_backup_dir() -> Path:
    """Return ~/.cherrydb/backups (not created)."""
    return Path.home() / ".cherrydb" / "backups"


def cleanup_old_backups(backup_dir: Path, max_backups: int = 5) -> list[Path]:
    """Remove old backups, keeping the newest max_backups per source name.

    ABOUTME: Groups backups by name prefix (before _timestamp)
    ABOUTME: Logs warnings on errors but does not raise exceptions

    Returns:
        List of paths that were deleted
    """
    deleted: list[Path] = []

    if not backup_dir.exists():
        return deleted

    backups_by_name: dict[str, list[tuple[str, Path]]] = {}

    for entry in backup_dir.iterdir():
        if not entry.is_dir():
            continue

        match = BACKUP_PATTERN.match(entry.name)
        if not match:
            continue

        backups_by_name.setdefault(match.group(1), []).append((match.group(2), entry))

    for backups in backups_by_name.values():
        # Newest first
        backups.sort(key=lambda x: x[0], reverse=True)

        for _timestamp, path in backups[max_backups:]:
            try:
                shutil.rmtree(path)
                deleted.append(path)
                logger.debug(f"Deleted old backup: {path}")
            except OSError as e:
                logger.warning(f"Failed to delete old backup {path}: {e}")

    return deleted
