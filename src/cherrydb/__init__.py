# cherrydb - Cherry Studio MCP config manager
# ABOUTME: Version information
__version__ = "0.1.0"

# ABOUTME: Export errors, models and the config facade
from cherrydb.codec import decode_value, encode_value
from cherrydb.errors import (
    CherryDbError,
    ConfigNotFoundError,
    DatabaseError,
    EncodingError,
    InvalidPathError,
    InvalidServerError,
    JsonError,
    ServerNotFoundError,
)
from cherrydb.locator import locate_config
from cherrydb.manager import CherryDbManager
from cherrydb.models import McpConfig, ServerList, ServerRecord, Store
from cherrydb.mutator import rewrite_config
from cherrydb.scanner import scan_entries

__all__ = [
    "__version__",
    "CherryDbManager",
    "McpConfig",
    "ServerList",
    "ServerRecord",
    "Store",
    "decode_value",
    "encode_value",
    "scan_entries",
    "locate_config",
    "rewrite_config",
    "CherryDbError",
    "ConfigNotFoundError",
    "DatabaseError",
    "EncodingError",
    "InvalidPathError",
    "InvalidServerError",
    "JsonError",
    "ServerNotFoundError",
]
