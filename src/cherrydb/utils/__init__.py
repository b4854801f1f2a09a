# ABOUTME: Utility modules for cherrydb
# ABOUTME: Exports env expansion, backup, and validation functions

from cherrydb.utils.backup import cleanup_old_backups, create_backup, get_backup_dir
from cherrydb.utils.env import expand_env_vars, expand_path, find_env_refs
from cherrydb.utils.validation import ValidationIssue, validate_server, validate_url

__all__ = [
    "expand_env_vars",
    "expand_path",
    "find_env_refs",
    "create_backup",
    "cleanup_old_backups",
    "get_backup_dir",
    "ValidationIssue",
    "validate_server",
    "validate_url",
]
