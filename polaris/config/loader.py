# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Config loader: reads polaris.toml and produces a validated, frozen Config.

The pipeline is linear and runs once at startup:
  1. Resolve the file path (explicit override or <config root>/polaris.toml)
  2. Read the file
  3. Parse it as TOML into a plain dict
  4. Run the field table (secret, reindex interval, mount dirs, users,
     album art pattern, ydns) into a draft
  5. Point the index at <cache root>/index.sqlite and freeze the draft

The first failure ends the load. There is no retry, no fallback for
required fields, and no partially built Config.

load() returns a ConfigResult instead of raising, so startup code and
tests can inspect the failure kind directly. load_config() is the raising
variant.
"""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from polaris.config.exceptions import (
    CacheDirectoryError,
    ConfigDirectoryError,
    ConfigError,
    TOMLParseError,
)
from polaris.config.fields import ConfigDraft, apply_fields
from polaris.config.schema import INDEX_FILE_NAME, Config
from polaris.logging.logger import get_logger
from polaris.runtime.directories import (
    DirectoryProvider,
    DirectoryResolutionError,
    PlatformDirectories,
)

DEFAULT_CONFIG_FILE_NAME = "polaris.toml"


@dataclass(frozen=True)
class ConfigResult:
    """Outcome of a load: exactly one of `config` and `error` is set."""

    config: Optional[Config] = None
    error: Optional[ConfigError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Config:
        """Return the config, or raise the error the load stopped on."""
        if self.error is not None:
            raise self.error
        if self.config is None:
            raise RuntimeError("ConfigResult holds neither a config nor an error")
        return self.config


def resolve_config_path(
    explicit_path: Optional[Union[str, Path]],
    directories: DirectoryProvider,
) -> Path:
    """
    Pick the config file to read.

    An explicit path is used as given. Otherwise the file is
    polaris.toml inside the platform config directory.

    Raises:
        ConfigDirectoryError: No explicit path and the config directory
            cannot be resolved.
    """
    if explicit_path is not None:
        return Path(explicit_path)
    try:
        root = directories.get_config_root()
    except DirectoryResolutionError:
        raise ConfigDirectoryError() from None
    return root / DEFAULT_CONFIG_FILE_NAME


def resolve_index_path(directories: DirectoryProvider) -> Path:
    """
    Raises:
        CacheDirectoryError: The cache directory cannot be resolved.
    """
    try:
        root = directories.get_cache_root()
    except DirectoryResolutionError:
        raise CacheDirectoryError() from None
    return root / INDEX_FILE_NAME


def _read_config_file(config_path: Path) -> str:
    try:
        raw = config_path.read_bytes()
    except OSError as err:
        raise ConfigError.wrap(err) from err

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as err:
        # Surfaced like any other unreadable file.
        io_err = OSError(f"{config_path} is not valid UTF-8: {err}")
        raise ConfigError.wrap(io_err) from io_err


def _parse_toml(text: str) -> dict[str, Any]:
    try:
        document = tomllib.loads(text)
    except tomllib.TOMLDecodeError:
        raise TOMLParseError() from None
    if not isinstance(document, dict):
        raise TOMLParseError()
    return document


def parse_document(text: str, directories: DirectoryProvider) -> Config:
    """
    Turn TOML text into a Config.

    This is everything after the file read. The index path is resolved
    last, after every document field has been accepted.

    Raises:
        ConfigError: The first problem found.
    """
    document = _parse_toml(text)

    draft = ConfigDraft()
    apply_fields(document, draft)

    return draft.freeze(index_path=resolve_index_path(directories))


def _load(explicit_path: Optional[Union[str, Path]], directories: DirectoryProvider) -> Config:
    logger = get_logger(__name__)

    config_path = resolve_config_path(explicit_path, directories)
    logger.info("Loading config", extra={"config_path": str(config_path)})

    config = parse_document(_read_config_file(config_path), directories)

    logger.info(
        "Config loaded",
        extra={
            "config_path": str(config_path),
            "mount_points": sorted(config.vfs.mount_points),
            "user_count": len(config.users),
            "index_path": str(config.index.path),
            "ddns_enabled": config.ddns is not None,
        },
    )
    return config


def load(
    explicit_path: Optional[Union[str, Path]] = None,
    directories: Optional[DirectoryProvider] = None,
) -> ConfigResult:
    """
    Load the startup configuration.

    Args:
        explicit_path: Config file to read. When None, polaris.toml in the
            platform config directory is used.
        directories: Source of the config and cache roots. Defaults to
            PlatformDirectories().

    Returns:
        A ConfigResult holding either the frozen Config or the ConfigError
        the load stopped on. ConfigError is never raised from here.
    """
    if directories is None:
        directories = PlatformDirectories()
    try:
        return ConfigResult(config=_load(explicit_path, directories))
    except ConfigError as err:
        get_logger(__name__).debug(
            "Config load failed", extra={"kind": err.kind.value, "error": str(err)}
        )
        return ConfigResult(error=err)


def load_config(
    explicit_path: Optional[Union[str, Path]] = None,
    directories: Optional[DirectoryProvider] = None,
) -> Config:
    """
    Load the startup configuration, raising on failure.

    Raises:
        ConfigError: The subclass matching the first problem found.
    """
    return load(explicit_path, directories).unwrap()
