# ABOUTME: Tests for locating the embedded "mcp" document
import json

import pytest

from cherrydb.errors import ConfigNotFoundError, JsonError
from cherrydb.locator import locate_config

from conftest import MemoryStore, parent_with, raw_value


def test_locates_config_entry():
    """Test that the entry with a string "mcp" field is found and parsed."""
    parent = parent_with([{"id": "a"}], other=1)
    store = MemoryStore({
        b"VERSION": b"1",
        b"settings": raw_value({"theme": "dark"}),
        b"persist": raw_value(parent),
    })

    located = locate_config(store)

    assert located.key == b"persist"
    assert located.parent == parent
    assert located.config == {"servers": [{"id": "a"}]}


def test_first_match_wins():
    """Test that later matching entries are ignored."""
    store = MemoryStore({
        b"first": raw_value(parent_with([{"id": "one"}])),
        b"second": raw_value(parent_with([{"id": "two"}])),
    })

    located = locate_config(store)

    assert located.key == b"first"
    assert located.config["servers"][0]["id"] == "one"


def test_object_mcp_field_is_not_a_match():
    """Test that "mcp" must be a JSON string, not a nested object."""
    store = MemoryStore({
        b"object": raw_value({"mcp": {"servers": []}}),
        b"string": raw_value(parent_with([])),
    })

    assert locate_config(store).key == b"string"


def test_non_object_documents_are_skipped():
    store = MemoryStore({
        b"list": raw_value(["mcp"]),
        b"text": raw_value("mcp"),
        b"persist": raw_value(parent_with([])),
    })

    assert locate_config(store).key == b"persist"


def test_nested_mcp_field_is_not_a_match():
    """Test that only a top-level "mcp" field counts."""
    store = MemoryStore({
        b"deep": raw_value({"inner": {"mcp": json.dumps({"servers": []})}}),
    })

    with pytest.raises(ConfigNotFoundError):
        locate_config(store)


def test_no_match_raises_config_not_found():
    store = MemoryStore({b"VERSION": b"1", b"settings": raw_value({"theme": "dark"})})

    with pytest.raises(ConfigNotFoundError, match="MCP configuration not found"):
        locate_config(store)


def test_empty_store_raises_config_not_found():
    with pytest.raises(ConfigNotFoundError):
        locate_config(MemoryStore())


def test_invalid_nested_json_raises():
    """Test that a matching field with bad JSON fails instead of being skipped."""
    store = MemoryStore({
        b"broken": raw_value({"mcp": "{not json"}),
        b"good": raw_value(parent_with([])),
    })

    with pytest.raises(JsonError):
        locate_config(store)
