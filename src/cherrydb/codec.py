# Value codec for Cherry Studio's Local Storage entries
# ABOUTME: Value layout is one header byte followed by UTF-16 LE JSON text
# ABOUTME: The header is skipped on read and written as 0x00
import json
from typing import Any

from cherrydb.errors import EncodingError, JsonError

HEADER_BYTE = b"\x00"


def _reject_constant(name: str) -> Any:
    raise JsonError(f"{name} is not valid JSON")


def dumps_compact(document: Any) -> str:
    """Serialize a JSON value without whitespace.

    ABOUTME: Non-ASCII characters are kept literal, not \\u-escaped
    ABOUTME: NaN and Infinity are refused, they aren't JSON

    Raises:
        JsonError: If the document holds NaN or +/-Infinity
    """
    try:
        return json.dumps(document, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except ValueError as e:
        raise JsonError(str(e)) from e


def loads(text: str) -> Any:
    """Parse strict JSON text.

    Raises:
        JsonError: On bad syntax, NaN/Infinity literals, or nesting too
            deep for the parser
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise JsonError(str(e)) from e
    except RecursionError as e:
        raise JsonError("JSON nested too deeply") from e


def decode_value(data: bytes) -> Any:
    """Decode a raw store value into a JSON value.

    Args:
        data: Raw value bytes as stored by LevelDB

    Returns:
        The parsed JSON document

    Raises:
        EncodingError: If data is empty, has an odd UTF-16 payload, or the
            payload isn't valid UTF-16
        JsonError: If the decoded text isn't valid JSON

    Examples:
        >>> decode_value(b"\\x00" + '{"a":1}'.encode("utf-16-le"))
        {'a': 1}
    """
    if not data:
        raise EncodingError("Empty bytes")

    payload = data[1:]
    if len(payload) % 2 != 0:
        raise EncodingError("Invalid UTF-16 data length")

    try:
        text = payload.decode("utf-16-le")
    except UnicodeDecodeError as e:
        raise EncodingError("Invalid UTF-16 data") from e

    return loads(text)


def encode_value(document: Any) -> bytes:
    """Encode a JSON value as header byte + UTF-16 LE compact JSON.

    Raises:
        EncodingError: If the document holds a lone surrogate, which
            UTF-16 can't represent
    """
    try:
        payload = dumps_compact(document).encode("utf-16-le")
    except UnicodeEncodeError as e:
        raise EncodingError("Document is not representable as UTF-16") from e
    return HEADER_BYTE + payload
