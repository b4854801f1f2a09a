# Write an updated MCP config back into its parent document
import copy
import logging
from typing import Any

from cherrydb.codec import dumps_compact, encode_value
from cherrydb.models import MCP_FIELD, Store

logger = logging.getLogger(__name__)


def merge_config(parent: dict[str, Any], nested: Any) -> dict[str, Any]:
    """Return a copy of parent with "mcp" replaced by nested as a JSON string.

    ABOUTME: Every other parent field is passed through untouched
    ABOUTME: Does not mutate parent
    """
    merged = copy.copy(parent)
    merged[MCP_FIELD] = dumps_compact(nested)
    return merged


def rewrite_config(
    store: Store,
    key: bytes,
    parent: dict[str, Any],
    nested: Any,
) -> bytes:
    """Store nested inside parent and put the result under key.

    ABOUTME: Exactly one put, no retries, no transaction wrapping
    ABOUTME: Atomicity is whatever a single LevelDB put gives

    Args:
        store: Store session opened for writing
        key: Key the parent document was read from
        parent: Parent document as located
        nested: New nested config document

    Returns:
        The encoded bytes that were written

    Raises:
        DatabaseError: If the put fails
    """
    value = encode_value(merge_config(parent, nested))
    store.put(key, value)
    logger.debug(f"rewrote MCP config under {key!r}")
    return value
