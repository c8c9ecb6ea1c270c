"""treefs configuration model and file I/O.

Configuration is stored in ~/.config/treefs/config.toml. A missing file
is not an error: every setting has a default.

Example::

    [index]
    filename = "__init__.py"
    suffix = ".py"
    exclude = ["test_*.py", "*_test.py", "conftest.py"]
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from treefs.core.paths import get_config_path

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when config content is invalid."""


class IndexConfig(BaseModel):
    """Settings for index (package barrel) generation.

    Attributes:
        filename: Name of the generated index file in each directory.
        suffix: Suffix a file needs to be re-exported by the index.
        exclude: Glob patterns of basenames never re-exported.
    """

    model_config = ConfigDict(extra="forbid")

    filename: Annotated[str, Field(min_length=1, description="Index file name")] = "__init__.py"
    suffix: Annotated[str, Field(min_length=1, description="Module file suffix")] = ".py"
    exclude: Annotated[
        list[str],
        Field(
            default_factory=lambda: ["test_*.py", "*_test.py", "conftest.py"],
            description="Basename patterns to skip",
        ),
    ]

    @field_validator("filename")
    @classmethod
    def validate_filename(cls, v: str) -> str:
        """Index file names must be plain basenames."""
        if os.sep in v or (os.altsep and os.altsep in v):
            msg = f"Index filename must not contain a path separator: {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("suffix")
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        """Suffixes start with a dot."""
        if not v.startswith("."):
            msg = f"Suffix must start with '.': {v!r}"
            raise ValueError(msg)
        return v


class TreefsConfig(BaseModel):
    """Top-level treefs configuration.

    Attributes:
        index: Index generation settings.
    """

    model_config = ConfigDict(extra="forbid")

    index: Annotated[IndexConfig, Field(default_factory=IndexConfig)]


def load_config(path: Path | None = None) -> TreefsConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated TreefsConfig. Defaults if the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
        ConfigError: If the file cannot be read.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return TreefsConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return TreefsConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e


def save_config(config: TreefsConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written to a temporary sibling first and then moved
    into place with os.replace().

    Args:
        config: Configuration to save.
        path: Destination. If None, uses the default path.

    Returns:
        Path where the configuration was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
