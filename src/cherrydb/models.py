# Core data models for cherrydb
from dataclasses import dataclass, field
from typing import Any, Iterator, Protocol, runtime_checkable

from cherrydb.errors import InvalidServerError

# ABOUTME: Transport types Cherry Studio understands today
# ABOUTME: Other strings are carried through untouched
TRANSPORT_TYPES = ("stdio", "sse", "streamableHttp")
HTTP_TRANSPORT_TYPES = ("sse", "streamableHttp")

# ABOUTME: Field name holding the nested config inside the parent document
MCP_FIELD = "mcp"

# wire name -> (attribute, expected JSON type)
_REQUIRED_FIELDS: dict[str, tuple[str, type]] = {
    "id": ("id", str),
    "isActive": ("is_active", bool),
    "type": ("type", str),
    "name": ("name", str),
}
_OPTIONAL_FIELDS: dict[str, tuple[str, type]] = {
    "command": ("command", str),
    "args": ("args", list),
    "env": ("env", dict),
    "baseUrl": ("base_url", str),
    "headers": ("headers", dict),
    "longRunning": ("long_running", bool),
}


@dataclass(frozen=True)
class ServerRecord:
    """One MCP server entry from Cherry Studio's server list.

    ABOUTME: Frozen so callers build a new record instead of editing in place
    ABOUTME: Optional fields are None when absent and omitted on write
    ABOUTME: `extra` keeps keys this model doesn't know about
    ABOUTME: Unhashable - list/dict fields make hash() raise TypeError
    """
    id: str
    is_active: bool
    type: str
    name: str
    command: str | None = None
    args: list[str] | None = None
    env: dict[str, str] | None = None
    base_url: str | None = None
    headers: dict[str, str] | None = None
    long_running: bool | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "ServerRecord":
        """Build a record from its camelCase JSON object.

        Raises:
            InvalidServerError: If a required field is missing or a field
                has the wrong JSON type
        """
        if not isinstance(data, dict):
            raise InvalidServerError(f"expected an object, got {type(data).__name__}")

        kwargs: dict[str, Any] = {}
        for wire_name, (attr, expected) in _REQUIRED_FIELDS.items():
            if wire_name not in data:
                raise InvalidServerError(f"missing required field '{wire_name}'")
            kwargs[attr] = _check_type(data, wire_name, expected)

        for wire_name, (attr, expected) in _OPTIONAL_FIELDS.items():
            if data.get(wire_name) is not None:
                kwargs[attr] = _check_type(data, wire_name, expected)

        known = _REQUIRED_FIELDS.keys() | _OPTIONAL_FIELDS.keys()
        kwargs["extra"] = {k: v for k, v in data.items() if k not in known}
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase JSON object Cherry Studio reads."""
        result: dict[str, Any] = {}
        for wire_name, (attr, _) in _REQUIRED_FIELDS.items():
            result[wire_name] = getattr(self, attr)
        for wire_name, (attr, _) in _OPTIONAL_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                result[wire_name] = value
        for key, value in self.extra.items():
            result.setdefault(key, value)
        return result


def _check_type(data: dict[str, Any], wire_name: str, expected: type) -> Any:
    value = data[wire_name]
    if not isinstance(value, expected):
        raise InvalidServerError(
            f"field '{wire_name}' must be {expected.__name__}, got {type(value).__name__}"
        )
    return value


@dataclass
class McpConfig:
    """The nested document stored as a string under the parent's "mcp" field.

    ABOUTME: `servers` is the list this package manages
    ABOUTME: `extra` carries sibling keys (e.g. isUvInstalled) through unchanged
    """
    servers: list[ServerRecord] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "McpConfig":
        if not isinstance(data, dict):
            raise InvalidServerError(
                f"nested config must be an object, got {type(data).__name__}"
            )
        servers_data = data.get("servers", [])
        if not isinstance(servers_data, list):
            raise InvalidServerError("'servers' must be a list")
        return cls(
            servers=[ServerRecord.from_dict(item) for item in servers_data],
            extra={k: v for k, v in data.items() if k != "servers"},
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = dict(self.extra)
        result["servers"] = [server.to_dict() for server in self.servers]
        return result


@dataclass
class ServerList:
    """Servers plus their count, as returned by list_servers()."""
    servers: list[ServerRecord]

    @property
    def total_count(self) -> int:
        return len(self.servers)


@dataclass
class DecodedEntry:
    """One store entry with its decoded document, if it had one.

    ABOUTME: document is None when the value isn't header + UTF-16 JSON
    """
    key: bytes
    value: bytes
    document: Any = None


@dataclass
class LocatedConfig:
    """Where the config lives and what it currently says."""
    key: bytes
    parent: dict[str, Any]
    config: Any


@runtime_checkable
class Store(Protocol):
    """Key-value store session consumed by the scanner and mutator.

    ABOUTME: One session per open, closed by the caller
    ABOUTME: Uses @runtime_checkable for isinstance() support
    """

    def iterate(self) -> Iterator[tuple[bytes, bytes]]:
        """Yield every (key, value) pair in native order."""
        ...

    def put(self, key: bytes, value: bytes) -> None:
        """Overwrite the value stored under key."""
        ...

    def close(self) -> None:
        """Release the underlying handle."""
        ...
