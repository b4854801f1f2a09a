# Full-store scan for cherrydb
import logging

from cherrydb.codec import decode_value
from cherrydb.errors import EncodingError, JsonError
from cherrydb.models import DecodedEntry, Store

logger = logging.getLogger(__name__)


def scan_entries(store: Store) -> list[DecodedEntry]:
    """Read every entry in the store and try to decode each value.

    ABOUTME: Eager pass in the store's native iteration order
    ABOUTME: Undecodable values are kept with document=None
    ABOUTME: Read-only, never writes to the store

    Args:
        store: Open store session

    Returns:
        One DecodedEntry per key, in iteration order

    Raises:
        DatabaseError: If the store fails while iterating
    """
    entries: list[DecodedEntry] = []

    for key, value in store.iterate():
        try:
            document = decode_value(value)
        except (EncodingError, JsonError) as e:
            logger.debug(f"skipping {key!r}: {e}")
            document = None
        entries.append(DecodedEntry(key=key, value=value, document=document))

    return entries
