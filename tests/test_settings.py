# Tests for settings loading
from pathlib import Path

import pytest

from cherrydb.settings import (
    SETTINGS_FILE,
    Settings,
    get_default_db_path,
    get_settings_path,
    load_settings,
    resolve_db_path,
    save_settings,
)


def test_get_settings_path():
    path = get_settings_path()
    assert path == SETTINGS_FILE
    assert path.name == "config.toml"
    assert ".cherrydb" in str(path)


def test_missing_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "nope.toml") == Settings()


def test_load_valid_settings(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('db_path = "/data/leveldb"\nbackup = false\nmax_backups = 3\n')

    settings = load_settings(path)

    assert settings.db_path == Path("/data/leveldb")
    assert settings.backup is False
    assert settings.max_backups == 3


def test_db_path_expands_env_vars(tmp_path, monkeypatch):
    monkeypatch.setenv("CHERRY_HOME", "/opt/cherry")
    path = tmp_path / "config.toml"
    path.write_text('db_path = "${CHERRY_HOME}/leveldb"\n')

    assert load_settings(path).db_path == Path("/opt/cherry/leveldb")


def test_invalid_toml(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("db_path = \n")

    with pytest.raises(ValueError, match="Invalid TOML"):
        load_settings(path)


@pytest.mark.parametrize(
    "content, message",
    [
        ("db_path = 3\n", "db_path"),
        ('backup = "yes"\n', "backup"),
        ("max_backups = 0\n", "max_backups"),
        ("max_backups = true\n", "max_backups"),
    ],
)
def test_wrong_types(tmp_path, content, message):
    path = tmp_path / "config.toml"
    path.write_text(content)

    with pytest.raises(ValueError, match=message):
        load_settings(path)


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "nested" / "config.toml"
    settings = Settings(db_path=Path("/data/leveldb"), backup=False, max_backups=2)

    save_settings(path, settings)

    assert load_settings(path) == settings


def test_save_without_db_path(tmp_path):
    path = tmp_path / "config.toml"
    save_settings(path, Settings())
    assert "db_path" not in path.read_text()


def test_resolve_prefers_cli_value(tmp_path):
    settings = Settings(db_path=Path("/from/settings"))
    assert resolve_db_path(str(tmp_path), settings) == tmp_path


def test_resolve_falls_back_to_settings():
    settings = Settings(db_path=Path("/from/settings"))
    assert resolve_db_path(None, settings) == Path("/from/settings")


def test_resolve_falls_back_to_default():
    assert resolve_db_path(None, Settings()) == get_default_db_path()


def test_default_db_path_per_platform(monkeypatch, tmp_path):
    monkeypatch.setattr("cherrydb.settings.sys.platform", "linux")
    assert get_default_db_path() == Path.home() / ".config/CherryStudio/Local Storage/leveldb"

    monkeypatch.setattr("cherrydb.settings.sys.platform", "darwin")
    assert get_default_db_path() == (
        Path.home() / "Library/Application Support/CherryStudio/Local Storage/leveldb"
    )

    monkeypatch.setattr("cherrydb.settings.sys.platform", "win32")
    monkeypatch.setenv("APPDATA", str(tmp_path))
    assert get_default_db_path() == tmp_path / "CherryStudio" / "Local Storage" / "leveldb"
