"""Path helpers for treefs.

Two concerns live here: the XDG-compliant locations of treefs' own
configuration files, and the segment counting that assigns every
traversed entry its depth.

XDG defaults:
- Config: ~/.config/treefs/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "treefs"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/treefs/ (or XDG_CONFIG_HOME/treefs/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/treefs/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/treefs/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    path = get_config_dir()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create config directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create config directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


# =============================================================================
# Depth computation
# =============================================================================


def split_path(path: str) -> list[str]:
    """Split a normalized path on the platform separator.

    The leading empty segment of an absolute POSIX path is kept, so
    ``split_path("/a/b")`` is ``["", "a", "b"]``.

    Args:
        path: Path to split.

    Returns:
        Raw path segments.
    """
    return os.path.normpath(path).split(os.sep)


def segment_count(path: str) -> int:
    """Count raw segments of a normalized path, empty ones included."""
    return len(split_path(path))


def path_depth(path: str) -> int:
    """Depth of a path: the number of named segments below the filesystem root.

    For every absolute POSIX path other than ``/`` this is
    ``segment_count(path) - 1``. The filesystem root itself is depth 0.

    Args:
        path: Absolute path.

    Returns:
        Depth used as the key of a DepthIndexedTree bucket.
    """
    return sum(1 for segment in split_path(path) if segment)
