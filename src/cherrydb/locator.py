# Locate the embedded MCP config among all store entries
import logging

from cherrydb.codec import loads
from cherrydb.errors import ConfigNotFoundError
from cherrydb.models import MCP_FIELD, LocatedConfig, Store
from cherrydb.scanner import scan_entries

logger = logging.getLogger(__name__)


def locate_config(store: Store) -> LocatedConfig:
    """Find the entry whose document holds the "mcp" string field.

    ABOUTME: First match in scan order wins, later matches are ignored
    ABOUTME: A non-string "mcp" value (e.g. an object) is not a match
    ABOUTME: Bad JSON inside a matching field raises, it is not skipped

    Args:
        store: Open store session

    Returns:
        LocatedConfig with the entry key, the parent document and the
        parsed nested document

    Raises:
        ConfigNotFoundError: If no entry matches
        JsonError: If the matched "mcp" string isn't valid JSON
    """
    for entry in scan_entries(store):
        document = entry.document
        if not isinstance(document, dict):
            continue

        nested_text = document.get(MCP_FIELD)
        if not isinstance(nested_text, str):
            continue

        logger.debug(f"found MCP config under {entry.key!r}")
        return LocatedConfig(
            key=entry.key,
            parent=document,
            config=loads(nested_text),
        )

    raise ConfigNotFoundError()
