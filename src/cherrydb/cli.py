# CLI interface for cherrydb
import argparse
import json
import logging
import sys
from pathlib import Path

from cherrydb import __version__
from cherrydb.errors import (
    CherryDbError,
    ConfigNotFoundError,
    InvalidPathError,
    InvalidServerError,
    JsonError,
    ServerNotFoundError,
)
from cherrydb.manager import CherryDbManager
from cherrydb.models import TRANSPORT_TYPES, ServerRecord
from cherrydb.settings import (
    get_settings_path,
    load_settings,
    resolve_db_path,
    save_settings,
)
from cherrydb.utils import create_backup, get_backup_dir, validate_server

# 0 = success, 1 = not found, 2 = config/input error, 3 = fatal
EXIT_SUCCESS = 0
EXIT_NOT_FOUND = 1
EXIT_CONFIG_ERROR = 2
EXIT_FATAL = 3


def _parse_pairs(value: str | None) -> dict[str, str] | None:
    """Parse comma-separated KEY=VALUE pairs; None if nothing given."""
    if not value:
        return None
    pairs: dict[str, str] = {}
    for pair in value.split(","):
        if "=" not in pair:
            raise InvalidServerError(f"expected KEY=VALUE, got '{pair}'")
        key, val = pair.split("=", 1)
        pairs[key.strip()] = val.strip()
    return pairs


def _db_path(args: argparse.Namespace) -> Path:
    settings = load_settings(get_settings_path())
    return resolve_db_path(args.db, settings)


def _run(action, args: argparse.Namespace) -> int:
    """Run a command body and map errors to exit codes.

    ABOUTME: Keeps error-to-exit-code mapping in one place
    """
    try:
        return action(args)
    except InvalidPathError as e:
        print(f"Error: {e}")
        print()
        print("Pass --db or run 'cherrydb config --set-db PATH'.")
        return EXIT_CONFIG_ERROR
    except ServerNotFoundError as e:
        print(f"Error: {e}")
        return EXIT_NOT_FOUND
    except (ConfigNotFoundError, InvalidServerError, JsonError) as e:
        print(f"Error: {e}")
        return EXIT_CONFIG_ERROR
    except CherryDbError as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL
    except ValueError as e:
        # Settings file problems
        print(f"Error: {e}")
        return EXIT_CONFIG_ERROR
    except OSError as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL


def _print_server(server: ServerRecord) -> None:
    status = "active" if server.is_active else "inactive"
    print(f"  {server.id} ({server.name}) [{status}]")
    print(f"    type: {server.type}")
    if server.command:
        print(f"    command: {server.command}")
    if server.args:
        print(f"    args: {' '.join(server.args)}")
    if server.env:
        print(f"    env: {', '.join(f'{k}={v}' for k, v in server.env.items())}")
    if server.base_url:
        print(f"    url: {server.base_url}")
    if server.headers:
        print(f"    headers: {', '.join(f'{k}={v}' for k, v in server.headers.items())}")
    if server.long_running is not None:
        print(f"    longRunning: {str(server.long_running).lower()}")


def _backup_before_write(db_path: Path) -> None:
    settings = load_settings(get_settings_path())
    if not settings.backup:
        return
    backup_path = create_backup(db_path, get_backup_dir(), settings.max_backups)
    print(f"  Backed up to {backup_path}")


def cmd_list(args: argparse.Namespace) -> int:
    """Execute list command.

    ABOUTME: Prints every server with its transport fields
    """
    db_path = _db_path(args)
    result = CherryDbManager().list_servers(db_path)

    print(f"MCP Servers in {db_path}:")
    print()
    for server in result.servers:
        _print_server(server)
        print()
    print(f"Total: {result.total_count} server(s)")
    return EXIT_SUCCESS


def cmd_show(args: argparse.Namespace) -> int:
    """Execute show command: dump the nested config as JSON."""
    config = CherryDbManager().read_mcp_config(_db_path(args))
    print(json.dumps(config.to_dict(), indent=2, ensure_ascii=False))
    return EXIT_SUCCESS


def cmd_exists(args: argparse.Namespace) -> int:
    if CherryDbManager().server_exists(_db_path(args), args.id):
        print(f"Server '{args.id}' exists")
        return EXIT_SUCCESS
    print(f"Server '{args.id}' not found")
    return EXIT_NOT_FOUND


def cmd_add(args: argparse.Namespace) -> int:
    """Execute add command.

    ABOUTME: Builds a ServerRecord from flags and upserts it
    ABOUTME: Refuses records with validation errors, prints warnings
    """
    server = ServerRecord(
        id=args.id,
        is_active=not args.inactive,
        type=args.type,
        name=args.name or args.id,
        command=args.command,
        args=args.args or None,
        env=_parse_pairs(args.env),
        base_url=args.url,
        headers=_parse_pairs(args.headers),
        long_running=True if args.long_running else None,
    )

    has_errors = False
    for issue in validate_server(server):
        if issue.is_error:
            print(f"  Error: {issue.message}")
            has_errors = True
        else:
            print(f"  Warning: {issue.message}")
    if has_errors:
        print()
        print("Server not added. Fix errors above and try again.")
        return EXIT_CONFIG_ERROR

    db_path = _db_path(args)
    manager = CherryDbManager()
    replacing = manager.server_exists(db_path, server.id)

    print(f"Adding server '{server.id}'...")
    _backup_before_write(db_path)
    manager.add_server(db_path, server)

    verb = "Replaced" if replacing else "Added"
    print(f"{verb} server '{server.id}' in {db_path}")
    return EXIT_SUCCESS


def cmd_remove(args: argparse.Namespace) -> int:
    db_path = _db_path(args)
    manager = CherryDbManager()

    print(f"Removing server '{args.id}'...")
    if not manager.server_exists(db_path, args.id):
        print(f"  Server '{args.id}' not found in config.")
        return EXIT_NOT_FOUND

    _backup_before_write(db_path)
    manager.remove_server(db_path, args.id)
    print(f"Removed server '{args.id}' from {db_path}")
    return EXIT_SUCCESS


def cmd_validate(args: argparse.Namespace) -> int:
    """Execute validate command.

    ABOUTME: Checks every stored server without modifying the store
    """
    db_path = _db_path(args)
    servers = CherryDbManager().list_servers(db_path).servers

    print(f"Validating {len(servers)} server(s) in {db_path}...")
    print()

    errors = warnings = 0
    for server in servers:
        issues = validate_server(server)
        mark = "✗" if any(i.is_error for i in issues) else "✓"
        print(f"  {mark} {server.id}")
        for issue in issues:
            prefix = "error" if issue.is_error else "warning"
            print(f"      {prefix}: {issue.message}")
            if issue.is_error:
                errors += 1
            else:
                warnings += 1

    print()
    print(f"Validation complete: {errors} error(s), {warnings} warning(s)")
    return EXIT_CONFIG_ERROR if errors else EXIT_SUCCESS


def cmd_config(args: argparse.Namespace) -> int:
    """Execute config command: show or update ~/.cherrydb/config.toml."""
    path = get_settings_path()
    settings = load_settings(path)

    changed = False
    if args.set_db is not None:
        settings.db_path = Path(args.set_db).expanduser()
        changed = True
    if args.backup is not None:
        settings.backup = args.backup
        changed = True
    if args.max_backups is not None:
        if args.max_backups < 1:
            raise ValueError("--max-backups must be at least 1")
        settings.max_backups = args.max_backups
        changed = True

    if changed:
        save_settings(path, settings)
        print(f"Saved {path}")

    print(f"  db_path: {resolve_db_path(None, settings)}")
    print(f"  backup: {str(settings.backup).lower()}")
    print(f"  max_backups: {settings.max_backups}")
    return EXIT_SUCCESS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cherrydb",
        description="Manage MCP servers stored in Cherry Studio's LevelDB"
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"cherrydb v{__version__}"
    )
    parser.add_argument(
        "--db",
        help="Path to the LevelDB directory (default: settings or Cherry Studio's)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="subcommand", help="Available commands")

    subparsers.add_parser("list", help="List all MCP servers")
    subparsers.add_parser("show", help="Print the MCP config as JSON")
    subparsers.add_parser("validate", help="Validate stored servers")

    exists_parser = subparsers.add_parser("exists", help="Check whether a server exists")
    exists_parser.add_argument("id", help="Server id")

    add_parser = subparsers.add_parser("add", help="Add or replace an MCP server")
    add_parser.add_argument("id", help="Server id")
    add_parser.add_argument("--name", help="Display name (defaults to id)")
    add_parser.add_argument(
        "--type",
        default="stdio",
        choices=list(TRANSPORT_TYPES),
        help="Transport type"
    )
    add_parser.add_argument("--command", help="Command to run (stdio)")
    add_parser.add_argument(
        "--arg",
        dest="args",
        action="append",
        help="Argument for the command, repeat for each one (stdio)"
    )
    add_parser.add_argument("--env", help="Comma-separated KEY=VALUE environment variables")
    add_parser.add_argument("--url", help="Base URL (sse/streamableHttp)")
    add_parser.add_argument("--headers", help="Comma-separated KEY=VALUE headers")
    add_parser.add_argument(
        "--long-running",
        action="store_true",
        help="Mark the server as long-running"
    )
    add_parser.add_argument(
        "--inactive",
        action="store_true",
        help="Add the server disabled"
    )

    remove_parser = subparsers.add_parser("remove", help="Remove an MCP server")
    remove_parser.add_argument("id", help="Server id")

    config_parser = subparsers.add_parser("config", help="Show or change cherrydb settings")
    config_parser.add_argument("--set-db", help="Default LevelDB directory")
    backup_group = config_parser.add_mutually_exclusive_group()
    backup_group.add_argument(
        "--backup", dest="backup", action="store_const", const=True,
        help="Back up the database before writing"
    )
    backup_group.add_argument(
        "--no-backup", dest="backup", action="store_const", const=False,
        help="Don't back up the database before writing"
    )
    config_parser.add_argument("--max-backups", type=int, help="Backups to keep")

    return parser


COMMANDS = {
    "list": cmd_list,
    "show": cmd_show,
    "exists": cmd_exists,
    "add": cmd_add,
    "remove": cmd_remove,
    "validate": cmd_validate,
    "config": cmd_config,
}


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    ABOUTME: Parses args and dispatches to the matching cmd_* function
    ABOUTME: Returns exit code for sys.exit()
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    command = COMMANDS.get(args.subcommand)
    if command is None:
        parser.print_help()
        return EXIT_SUCCESS
    return _run(command, args)


if __name__ == "__main__":
    sys.exit(main())
