# LevelDB store binding for cherrydb
# ABOUTME: Thin wrapper over plyvel that speaks the Store protocol
# ABOUTME: All plyvel failures surface as DatabaseError
import logging
from pathlib import Path
from typing import Iterator

import plyvel

from cherrydb.errors import DatabaseError

logger = logging.getLogger(__name__)


class LevelDBStore:
    """One open session on a LevelDB directory."""

    def __init__(self, db: plyvel.DB, path: Path) -> None:
        self._db = db
        self.path = path

    def iterate(self) -> Iterator[tuple[bytes, bytes]]:
        try:
            with self._db.iterator() as it:
                for key, value in it:
                    yield key, value
        except plyvel.Error as e:
            raise DatabaseError(f"Failed to iterate {self.path}: {e}") from e

    def put(self, key: bytes, value: bytes) -> None:
        logger.debug(f"put {len(value)} bytes under {key!r} in {self.path}")
        try:
            self._db.put(key, value, sync=True)
        except plyvel.Error as e:
            raise DatabaseError(f"Failed to write to {self.path}: {e}") from e

    def close(self) -> None:
        if not self._db.closed:
            self._db.close()


def open_leveldb(path: Path, create_if_missing: bool = False) -> LevelDBStore:
    """Open a LevelDB directory.

    ABOUTME: Never creates a database unless asked to
    ABOUTME: The LOCK file is held by Cherry Studio while it runs

    Args:
        path: LevelDB directory
        create_if_missing: Create an empty database if none exists

    Returns:
        Open LevelDBStore; close it when done

    Raises:
        DatabaseError: If plyvel can't open the directory
    """
    try:
        db = plyvel.DB(str(path), create_if_missing=create_if_missing)
    except plyvel.IOError as e:
        raise DatabaseError(
            f"Failed to open {path}: {e} (is Cherry Studio still running?)"
        ) from e
    except plyvel.Error as e:
        raise DatabaseError(f"Failed to open {path}: {e}") from e
    logger.debug(f"opened {path}")
    return LevelDBStore(db, Path(path))
