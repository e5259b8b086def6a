# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Errors raised while loading the startup configuration.

The set is closed: every failure the loader can report has exactly one
subclass here and one member in ConfigErrorKind, so callers can match on
`err.kind` exhaustively. Only two errors carry an underlying cause, the
I/O failure and the album-art pattern compile failure. Both are built
through ConfigError.wrap(). Everything else is raised directly.
"""

import re
from enum import Enum
from typing import Optional


class ConfigErrorKind(str, Enum):
    """Discriminant for every configuration failure."""

    IO_ERROR = "IoError"
    CACHE_DIRECTORY_ERROR = "CacheDirectoryError"
    CONFIG_DIRECTORY_ERROR = "ConfigDirectoryError"
    TOML_PARSE_ERROR = "TOMLParseError"
    REGEX_ERROR = "RegexError"
    SECRET_PARSE_ERROR = "SecretParseError"
    SLEEP_DURATION_PARSE_ERROR = "SleepDurationParseError"
    ALBUM_ART_PATTERN_PARSE_ERROR = "AlbumArtPatternParseError"
    USERS_PARSE_ERROR = "UsersParseError"
    MOUNT_DIRS_PARSE_ERROR = "MountDirsParseError"
    DDNS_PARSE_ERROR = "DDNSParseError"
    CONFLICTING_MOUNTS = "ConflictingMounts"


class ConfigError(Exception):
    """Base for all configuration errors."""

    kind: ConfigErrorKind
    default_message: str = "configuration error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)

    @staticmethod
    def wrap(err: Exception) -> "ConfigError":
        """
        Convert one of the two external failure types into its ConfigError.

        OSError becomes IoError and re.error becomes RegexError. The original
        exception is kept on `.cause` and chained as `__cause__`.

        Raises:
            TypeError: For any other exception type. The taxonomy is closed.
        """
        if isinstance(err, OSError):
            wrapped: ConfigError = IoError(err)
        elif isinstance(err, re.error):
            wrapped = RegexError(err)
        else:
            raise TypeError(f"Cannot wrap {type(err).__name__} as a ConfigError")
        wrapped.__cause__ = err
        return wrapped


class IoError(ConfigError):
    """The config file could not be read."""

    kind = ConfigErrorKind.IO_ERROR

    def __init__(self, cause: OSError) -> None:
        super().__init__(f"Cannot read config file: {cause}")
        self.cause = cause


class CacheDirectoryError(ConfigError):
    kind = ConfigErrorKind.CACHE_DIRECTORY_ERROR
    default_message = "Could not resolve the cache directory"


class ConfigDirectoryError(ConfigError):
    kind = ConfigErrorKind.CONFIG_DIRECTORY_ERROR
    default_message = "Could not resolve the config directory"


class TOMLParseError(ConfigError):
    kind = ConfigErrorKind.TOML_PARSE_ERROR
    default_message = "Config file is not a valid TOML document"


class RegexError(ConfigError):
    """The album-art pattern is a string but does not compile."""

    kind = ConfigErrorKind.REGEX_ERROR

    def __init__(self, cause: re.error) -> None:
        super().__init__(f"Invalid album art pattern: {cause}")
        self.cause = cause


class SecretParseError(ConfigError):
    kind = ConfigErrorKind.SECRET_PARSE_ERROR
    default_message = "auth_secret is missing or is not a string"


class SleepDurationParseError(ConfigError):
    kind = ConfigErrorKind.SLEEP_DURATION_PARSE_ERROR
    default_message = "reindex_every_n_seconds must be a non-negative integer"


class AlbumArtPatternParseError(ConfigError):
    kind = ConfigErrorKind.ALBUM_ART_PATTERN_PARSE_ERROR
    default_message = "album_art_pattern must be a string"


class UsersParseError(ConfigError):
    kind = ConfigErrorKind.USERS_PARSE_ERROR
    default_message = "users must be an array of {name, password} tables"


class MountDirsParseError(ConfigError):
    kind = ConfigErrorKind.MOUNT_DIRS_PARSE_ERROR
    default_message = "mount_dirs must be an array of {name, source} tables"


class DDNSParseError(ConfigError):
    kind = ConfigErrorKind.DDNS_PARSE_ERROR
    default_message = "ydns must be a table with string host, username and password"


class ConflictingMounts(ConfigError):
    """Two mount_dirs records share a name."""

    kind = ConfigErrorKind.CONFLICTING_MOUNTS

    def __init__(self, name: str) -> None:
        super().__init__(f"Mount name '{name}' is used more than once")
        self.name = name


ERROR_CLASSES: dict[ConfigErrorKind, type[ConfigError]] = {
    cls.kind: cls
    for cls in (
        IoError,
        CacheDirectoryError,
        ConfigDirectoryError,
        TOMLParseError,
        RegexError,
        SecretParseError,
        SleepDurationParseError,
        AlbumArtPatternParseError,
        UsersParseError,
        MountDirsParseError,
        DDNSParseError,
        ConflictingMounts,
    )
}
