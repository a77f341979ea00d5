"""Tree configuration and settings.

This module provides the configuration model and I/O functions for the
tree: the markers used to render each line, the trash directory that
receives soft-deleted entries, and the pattern that identifies a
project root.

Configuration is stored in ~/.config/fstree/config.toml
"""

import logging
import os
import re
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fstree.core.paths import get_config_path, get_default_trash_dir

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_PATTERN = r"^(?:\.git)$"


class TreeConfig(BaseModel):
    """Configuration for a tree and its rendered lines.

    Defaults are applied once, when the model is constructed. A config
    object is passed explicitly to every tree; nothing reads global state
    afterwards.

    Attributes:
        indent: String repeated once per depth level.
        prefix_dir_opened: Marker for an opened directory.
        prefix_dir_closed: Marker for a closed directory.
        prefix_file: Marker for a file.
        prefix_selected: Marker for any selected node.
        postfix_dir: Suffix appended to directory names.
        trash_dir: Directory receiving soft-deleted entries.
        project_pattern: Regex matched against entry names to find a project root.
    """

    model_config = ConfigDict(extra="forbid")

    indent: Annotated[str, Field(min_length=1)] = " "
    prefix_dir_opened: Annotated[str, Field(min_length=1)] = "-"
    prefix_dir_closed: Annotated[str, Field(min_length=1)] = "+"
    prefix_file: Annotated[str, Field(min_length=1)] = "|"
    prefix_selected: Annotated[str, Field(min_length=1)] = "*"
    postfix_dir: str = "/"
    trash_dir: Path = Field(default_factory=get_default_trash_dir)
    project_pattern: str = DEFAULT_PROJECT_PATTERN

    @field_validator("project_pattern")
    @classmethod
    def validate_project_pattern(cls, v: str) -> str:
        """Validate that the project pattern is a compilable regex."""
        try:
            re.compile(v)
        except re.error as e:
            msg = f"project_pattern: invalid regular expression '{v}': {e}"
            raise ValueError(msg) from None
        return v

    @field_validator("trash_dir")
    @classmethod
    def normalize_trash_dir(cls, v: Path) -> Path:
        """Expand '~' and make the trash directory absolute."""
        return Path(os.path.abspath(v.expanduser()))

    @property
    def project_regex(self) -> re.Pattern[str]:
        """Compiled project root pattern."""
        return re.compile(self.project_pattern)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> TreeConfig:
    """Load tree configuration from a TOML file.

    A missing file is not an error: the defaults are returned instead.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated TreeConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return TreeConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return TreeConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_config(config: TreeConfig, path: Path | None = None) -> Path:
    """Save tree configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The TreeConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: TreeConfig) -> dict[str, object]:
    """Convert TreeConfig to a dictionary for TOML serialization.

    Args:
        config: The TreeConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    data = config.model_dump()
    data["trash_dir"] = str(config.trash_dir)
    return data
