# Config facade: typed server-list operations over the LevelDB store
import logging
from contextlib import closing
from pathlib import Path
from typing import Callable

from cherrydb.errors import InvalidPathError, ServerNotFoundError
from cherrydb.locator import locate_config
from cherrydb.models import LocatedConfig, McpConfig, ServerList, ServerRecord, Store
from cherrydb.mutator import rewrite_config
from cherrydb.store import open_leveldb

logger = logging.getLogger(__name__)

# ABOUTME: Opens one store session for a LevelDB directory
StoreOpener = Callable[[Path], Store]


class CherryDbManager:
    """Read and update Cherry Studio's MCP server list.

    ABOUTME: Every call re-reads the whole store, nothing is cached
    ABOUTME: Reads and writes use separate store sessions
    ABOUTME: No locking beyond LevelDB's own LOCK file; don't run
    ABOUTME: two writers against the same directory at once
    """

    def __init__(self, opener: StoreOpener | None = None) -> None:
        self._opener = opener if opener else open_leveldb

    def _check_path(self, db_path: Path | str) -> Path:
        path = Path(db_path)
        if not path.exists():
            raise InvalidPathError(path)
        return path

    def _locate(self, db_path: Path | str) -> tuple[Path, LocatedConfig]:
        path = self._check_path(db_path)
        with closing(self._opener(path)) as store:
            return path, locate_config(store)

    def _write(self, path: Path, located: LocatedConfig, config: McpConfig) -> None:
        with closing(self._opener(path)) as store:
            rewrite_config(store, located.key, located.parent, config.to_dict())

    def read_mcp_config(self, db_path: Path | str) -> McpConfig:
        """Read the MCP config.

        Raises:
            InvalidPathError: If db_path doesn't exist
            ConfigNotFoundError: If no entry holds an "mcp" field
            JsonError: If the "mcp" string isn't valid JSON
            InvalidServerError: If a server entry is malformed
            DatabaseError: If the store can't be read
        """
        _, located = self._locate(db_path)
        return McpConfig.from_dict(located.config)

    def write_mcp_config(self, db_path: Path | str, config: McpConfig) -> None:
        """Replace the stored server list with config.servers.

        ABOUTME: Parent fields outside "mcp" are preserved exactly
        ABOUTME: Nested keys other than servers come from config.extra
        """
        path, located = self._locate(db_path)
        self._write(path, located, config)

    def list_servers(self, db_path: Path | str) -> ServerList:
        return ServerList(servers=self.read_mcp_config(db_path).servers)

    def get_server(self, db_path: Path | str, server_id: str) -> ServerRecord:
        for server in self.read_mcp_config(db_path).servers:
            if server.id == server_id:
                return server
        raise ServerNotFoundError(server_id)

    def server_exists(self, db_path: Path | str, server_id: str) -> bool:
        config = self.read_mcp_config(db_path)
        return any(server.id == server_id for server in config.servers)

    def add_server(self, db_path: Path | str, server: ServerRecord) -> None:
        """Add a server, replacing any existing server with the same id.

        ABOUTME: Upsert - existing ids are removed, the new record is appended
        """
        path, located = self._locate(db_path)
        config = McpConfig.from_dict(located.config)

        servers = [s for s in config.servers if s.id != server.id]
        if len(servers) != len(config.servers):
            logger.debug(f"replacing existing server '{server.id}'")
        servers.append(server)

        self._write(path, located, McpConfig(servers=servers, extra=config.extra))

    def remove_server(self, db_path: Path | str, server_id: str) -> None:
        """Remove every server whose id equals server_id.

        Raises:
            ServerNotFoundError: If nothing matched; the store is not written
        """
        path, located = self._locate(db_path)
        config = McpConfig.from_dict(located.config)

        servers = [s for s in config.servers if s.id != server_id]
        if len(servers) == len(config.servers):
            raise ServerNotFoundError(server_id)

        self._write(path, located, McpConfig(servers=servers, extra=config.extra))
