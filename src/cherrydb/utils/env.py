# Environment variable expansion utilities
import os
import re
import warnings
from pathlib import Path

# ABOUTME: Pattern matches ${VAR_NAME} where VAR_NAME is uppercase with underscores
ENV_VAR_PATTERN = re.compile(r'\$\{([A-Z_][A-Z0-9_]*)\}')


def find_env_refs(value: str) -> list[str]:
    """Return the variable names referenced as ${VAR} in value."""
    return ENV_VAR_PATTERN.findall(value)


def expand_env_vars(value: str) -> str:
    """Expand environment variables in ${VAR} format.

    ABOUTME: Unset variables are left as written, with a UserWarning

    Examples:
        >>> expand_env_vars("${HOME}/cherry")
        '/Users/user/cherry'
    """
    def replace_var(match: re.Match[str]) -> str:
        var_name = match.group(1)
        if var_name in os.environ:
            return os.environ[var_name]
        warnings.warn(
            f"Environment variable '{var_name}' not found, keeping original",
            UserWarning,
            stacklevel=3
        )
        return match.group(0)

    return ENV_VAR_PATTERN.sub(replace_var, value)


def expand_path(value: str) -> Path:
    """Expand ${VAR} references and a leading ~ into a Path."""
    return Path(expand_env_vars(value)).expanduser()
