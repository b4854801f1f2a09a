# ABOUTME: Shared fixtures: an in-memory Store and helpers to build raw values
# ABOUTME: Values are encoded by hand so tests don't depend on the codec under test
import json
from pathlib import Path
from typing import Any, Iterator

import pytest


def raw_value(document: Any, header: bytes = b"\x00", **dumps_kwargs: Any) -> bytes:
    """Encode a document the way Cherry Studio stores it."""
    return header + json.dumps(document, **dumps_kwargs).encode("utf-16-le")


def parent_with(servers: list[dict[str, Any]], **fields: Any) -> dict[str, Any]:
    """Build a parent document whose "mcp" field is a JSON string."""
    return {"mcp": json.dumps({"servers": servers}), **fields}


class MemoryStore:
    """Dict-backed Store; every opener call returns the same object."""

    def __init__(self, data: dict[bytes, bytes] | None = None) -> None:
        self.data: dict[bytes, bytes] = dict(data or {})
        self.puts: list[tuple[bytes, bytes]] = []
        self.opens = 0
        self.closes = 0
        self.fail_put = False

    def opener(self, path: Path) -> "MemoryStore":
        self.opens += 1
        return self

    def iterate(self) -> Iterator[tuple[bytes, bytes]]:
        yield from list(self.data.items())

    def put(self, key: bytes, value: bytes) -> None:
        if self.fail_put:
            from cherrydb.errors import DatabaseError

            raise DatabaseError("disk full")
        self.puts.append((key, value))
        self.data[key] = value

    def close(self) -> None:
        self.closes += 1

    def document(self, key: bytes) -> Any:
        return json.loads(self.data[key][1:].decode("utf-16-le"))


STDIO_SERVER = {
    "id": "s2",
    "isActive": True,
    "type": "stdio",
    "name": "S2",
    "command": "npx",
    "args": ["-y", "@modelcontextprotocol/server-filesystem"],
}

CONFIG_KEY = b"_file://\x00\x01persist:cherry-studio"


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """An existing directory standing in for the LevelDB path."""
    path = tmp_path / "leveldb"
    path.mkdir()
    return path


@pytest.fixture
def empty_config_store() -> MemoryStore:
    """Store with a VERSION key, the config entry, and an unrelated entry."""
    return MemoryStore({
        b"VERSION": b"1",
        CONFIG_KEY: raw_value(parent_with([], other=1)),
        b"_file://\x00\x01theme": raw_value({"theme": "dark"}),
    })


@pytest.fixture
def s2_store() -> MemoryStore:
    """Store whose config holds a single stdio server 's2'."""
    return MemoryStore({
        b"META:file://": b"\x08\x01",
        CONFIG_KEY: raw_value(parent_with([STDIO_SERVER], other=1, llm={"provider": "x"})),
    })
