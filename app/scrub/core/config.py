"""Run configuration for scrub.

This module provides the immutable configuration model shared by every
collapse operation, and the I/O functions for the optional user
configuration file.

Configuration is stored in ~/.config/scrub/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from scrub.core.paths import ensure_config_dir, get_config_path

logger = logging.getLogger(__name__)

# Fields that describe a single invocation and are never written to disk
_RUNTIME_ONLY_FIELDS: frozenset[str] = frozenset({"simulate", "verbose"})


class ScrubConfig(BaseModel):
    """Configuration for a collapse run.

    Frozen after construction and passed read-only into every core
    operation. Clobber entries are compared case-sensitively and exactly;
    there is no globbing.

    Attributes:
        verbose: Print informational lines to stderr.
        simulate: Log intended removals instead of performing them.
        preserve_hidden: Do not descend into (or remove) hidden directories.
        preserve_special: Never remove devices, pipes, sockets or symlinks.
        clobber_extensions: Extensions (without leading dot) to delete.
        clobber_names: Exact basenames to delete.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    verbose: bool = False
    simulate: bool = False
    preserve_hidden: bool = False
    preserve_special: bool = False
    clobber_extensions: Annotated[
        frozenset[str],
        Field(description="Extensions to clobber, without the leading dot"),
    ] = frozenset()
    clobber_names: Annotated[
        frozenset[str],
        Field(description="Basenames to clobber"),
    ] = frozenset()

    @field_validator("clobber_extensions", "clobber_names")
    @classmethod
    def validate_entries(cls, v: frozenset[str]) -> frozenset[str]:
        """Reject entries that can never equal a single path component."""
        for entry in v:
            if "/" in entry or "\0" in entry:
                msg = f"{entry!r} cannot contain a path separator or NUL byte"
                raise ValueError(msg)
        return v

    def merged_with(
        self,
        *,
        clobber_extensions: list[str] | None = None,
        clobber_names: list[str] | None = None,
        verbose: bool = False,
        simulate: bool = False,
        preserve_hidden: bool = False,
        preserve_special: bool = False,
    ) -> "ScrubConfig":
        """Return a new configuration with command-line values layered on top.

        Lists are unioned with the existing sets; flags can only switch a
        behaviour on.

        Raises:
            ConfigError: If a merged value fails validation.
        """
        data = {
            "verbose": self.verbose or verbose,
            "simulate": self.simulate or simulate,
            "preserve_hidden": self.preserve_hidden or preserve_hidden,
            "preserve_special": self.preserve_special or preserve_special,
            "clobber_extensions": self.clobber_extensions | frozenset(clobber_extensions or ()),
            "clobber_names": self.clobber_names | frozenset(clobber_names or ()),
        }
        try:
            return ScrubConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid option value: {e}") from e


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when an explicitly requested config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when a config file cannot be parsed."""


def load_config(path: Path | None = None) -> ScrubConfig:
    """Load configuration from a TOML file.

    The default location is optional: when no path is given and the
    default file does not exist, an all-defaults configuration is returned.

    Args:
        path: Explicit config file path. If None, uses the default path.

    Returns:
        Validated ScrubConfig object.

    Raises:
        ConfigNotFoundError: If an explicit config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        if path is not None:
            raise ConfigNotFoundError(f"Config file not found: {config_path}")
        logger.debug("No config file at %s, using defaults", config_path)
        return ScrubConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        config = ScrubConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e

    logger.debug("Loaded config from %s", config_path)
    return config


def save_config(config: ScrubConfig, path: Path | None = None) -> Path:
    """Save the persistent part of a configuration to a TOML file.

    ``simulate`` and ``verbose`` are never written. The file is written
    atomically through a temporary file and os.replace().

    Args:
        config: The configuration to save.
        path: Destination path. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    if path is None:
        try:
            config_path = ensure_config_dir() / get_config_path().name
        except RuntimeError as e:
            raise ConfigError(str(e)) from e
    else:
        config_path = path
    data = _config_to_dict(config)

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
        os.replace(tmp_path, config_path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config {config_path}: {e}") from e

    return config_path


def _config_to_dict(config: ScrubConfig) -> dict[str, object]:
    """Convert a ScrubConfig to a TOML-serializable dictionary.

    Sets become sorted lists so the file is stable between saves.
    """
    result: dict[str, object] = {}
    for name, value in config.model_dump(exclude=set(_RUNTIME_ONLY_FIELDS)).items():
        result[name] = sorted(value) if isinstance(value, frozenset) else value
    return result
