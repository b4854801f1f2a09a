# Exception hierarchy for cherrydb
# ABOUTME: Every failure a caller can see derives from CherryDbError
# ABOUTME: Wrapped causes are chained with `raise ... from e`


class CherryDbError(Exception):
    """Base class for all cherrydb errors."""


class DatabaseError(CherryDbError):
    """LevelDB could not be opened, iterated or written."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Database error: {message}")


class JsonError(CherryDbError, ValueError):
    """Text was expected to be JSON but did not parse."""

    def __init__(self, message: str) -> None:
        super().__init__(f"JSON error: {message}")


class EncodingError(CherryDbError, ValueError):
    """A store value is not a header byte followed by UTF-16 LE text."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Encoding error: {message}")


class ConfigNotFoundError(CherryDbError):
    """No entry in the store carries the embedded "mcp" document."""

    def __init__(self) -> None:
        super().__init__("MCP configuration not found")


class InvalidPathError(CherryDbError):
    """Database path does not exist."""

    def __init__(self, path: object) -> None:
        self.path = path
        super().__init__(f"Invalid database path: {path}")


class ServerNotFoundError(CherryDbError):
    """No server record carries the requested id."""

    def __init__(self, server_id: str) -> None:
        self.server_id = server_id
        super().__init__(f"Server not found: {server_id}")


class InvalidServerError(CherryDbError, ValueError):
    """A server record is missing required fields or has wrong types."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid server configuration: {message}")
