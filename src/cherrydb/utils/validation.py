# ABOUTME: Validation utilities for MCP server records
# ABOUTME: Returns issues instead of raising so callers can show all of them
import os
import shutil
from dataclasses import dataclass
from urllib.parse import urlparse

from cherrydb.models import HTTP_TRANSPORT_TYPES, TRANSPORT_TYPES, ServerRecord
from cherrydb.utils.env import find_env_refs


@dataclass(frozen=True)
class ValidationIssue:
    """A validation error or warning for one server.

    ABOUTME: Severity level distinguishes between blocking errors and warnings
    """
    server_id: str
    message: str
    severity: str  # 'error' or 'warning'

    @property
    def is_error(self) -> bool:
        return self.severity == "error"


def validate_url(url: str) -> str | None:
    """Return an error message if url isn't an http(s) URL with a host."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        return f"URL must use HTTP or HTTPS scheme: {url}"
    if not parsed.netloc:
        return f"URL missing host/domain: {url}"
    return None


def validate_server(server: ServerRecord) -> list[ValidationIssue]:
    """Validate a server record.

    ABOUTME: stdio needs a command (warns if it isn't on PATH)
    ABOUTME: sse/streamableHttp need a well-formed baseUrl
    ABOUTME: Unknown transport types and unset ${VAR} references only warn

    Args:
        server: Record to validate

    Returns:
        List of issues (empty if valid)

    Examples:
        >>> validate_server(ServerRecord(id="a", is_active=True, type="stdio", name="A"))
        [ValidationIssue(server_id='a', message='stdio server requires a command', severity='error')]
    """
    issues: list[ValidationIssue] = []

    def error(message: str) -> None:
        issues.append(ValidationIssue(server.id, message, "error"))

    def warning(message: str) -> None:
        issues.append(ValidationIssue(server.id, message, "warning"))

    if not server.id.strip():
        error("server id must not be empty")
    if not server.name.strip():
        error("server name must not be empty")

    if server.type not in TRANSPORT_TYPES:
        warning(f"Unknown transport type '{server.type}'")

    if server.type == "stdio":
        if not server.command:
            error("stdio server requires a command")
        elif shutil.which(server.command) is None:
            warning(f"Command not found: {server.command}")
    elif server.type in HTTP_TRANSPORT_TYPES:
        if not server.base_url:
            error(f"{server.type} server requires a baseUrl")
        else:
            url_error = validate_url(server.base_url)
            if url_error:
                error(url_error)

    # Collect ${VAR} references from every string field that may carry one
    refs: list[tuple[str, str]] = []
    for label, value in (("command", server.command), ("baseUrl", server.base_url)):
        if value:
            refs.extend((label, var) for var in find_env_refs(value))
    for arg in server.args or []:
        refs.extend(("args", var) for var in find_env_refs(arg))
    for key, value in (server.env or {}).items():
        refs.extend((f"env.{key}", var) for var in find_env_refs(value))
    for key, value in (server.headers or {}).items():
        refs.extend((f"headers.{key}", var) for var in find_env_refs(value))

    for label, var in refs:
        if var not in os.environ:
            warning(f"Environment variable '${var}' not set (referenced in {label})")

    return issues
