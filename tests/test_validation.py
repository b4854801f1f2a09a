# ABOUTME: Tests for server record validation
from unittest.mock import patch

import pytest

from cherrydb.models import ServerRecord
from cherrydb.utils.validation import validate_server, validate_url


def stdio(**kwargs) -> ServerRecord:
    return ServerRecord(id="s", is_active=True, type="stdio", name="S", **kwargs)


def messages(issues, severity):
    return [i.message for i in issues if i.severity == severity]


class TestValidateUrl:
    def test_valid(self):
        assert validate_url("https://example.com/mcp") is None
        assert validate_url("http://localhost:8080/sse") is None

    def test_bad_scheme(self):
        assert "HTTP or HTTPS" in validate_url("ftp://example.com")

    def test_missing_host(self):
        assert "missing host" in validate_url("https:///path")


class TestValidateServer:
    @patch("cherrydb.utils.validation.shutil.which", return_value="/usr/bin/node")
    def test_valid_stdio(self, _which):
        assert validate_server(stdio(command="node", args=["x"])) == []

    def test_stdio_without_command(self):
        issues = validate_server(stdio())
        assert messages(issues, "error") == ["stdio server requires a command"]

    @patch("cherrydb.utils.validation.shutil.which", return_value=None)
    def test_command_not_on_path_is_warning(self, _which):
        issues = validate_server(stdio(command="nosuchcmd"))
        assert messages(issues, "warning") == ["Command not found: nosuchcmd"]
        assert not any(i.is_error for i in issues)

    @pytest.mark.parametrize("transport", ["sse", "streamableHttp"])
    def test_http_requires_base_url(self, transport):
        server = ServerRecord(id="h", is_active=True, type=transport, name="H")
        assert messages(validate_server(server), "error") == [
            f"{transport} server requires a baseUrl"
        ]

    def test_http_bad_url(self):
        server = ServerRecord(id="h", is_active=True, type="sse", name="H", base_url="example.com")
        assert "HTTP or HTTPS" in messages(validate_server(server), "error")[0]

    def test_unknown_type_warns(self):
        server = ServerRecord(id="x", is_active=True, type="inMemory", name="X")
        assert messages(validate_server(server), "warning") == ["Unknown transport type 'inMemory'"]

    def test_empty_id_and_name(self):
        server = ServerRecord(id=" ", is_active=True, type="inMemory", name="")
        errors = messages(validate_server(server), "error")
        assert "server id must not be empty" in errors
        assert "server name must not be empty" in errors

    @patch("cherrydb.utils.validation.shutil.which", return_value="/usr/bin/npx")
    def test_unset_env_refs_warn(self, _which, monkeypatch):
        monkeypatch.delenv("MISSING_TOKEN", raising=False)
        monkeypatch.setenv("PRESENT_TOKEN", "x")
        server = stdio(
            command="npx",
            args=["${MISSING_TOKEN}"],
            env={"A": "${PRESENT_TOKEN}", "B": "${MISSING_TOKEN}"},
        )

        warnings = messages(validate_server(server), "warning")

        assert warnings == [
            "Environment variable '$MISSING_TOKEN' not set (referenced in args)",
            "Environment variable '$MISSING_TOKEN' not set (referenced in env.B)",
        ]

    def test_header_refs_checked(self, monkeypatch):
        monkeypatch.delenv("API_KEY", raising=False)
        server = ServerRecord(
            id="h",
            is_active=True,
            type="streamableHttp",
            name="H",
            base_url="https://example.com",
            headers={"Authorization": "Bearer ${API_KEY}"},
        )
        assert messages(validate_server(server), "warning") == [
            "Environment variable '$API_KEY' not set (referenced in headers.Authorization)"
        ]
